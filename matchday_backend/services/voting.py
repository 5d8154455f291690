# voting.py
# Man of the Match voting: ranked ballots, weighted tally, finalize/reopen.

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import Session, select

from matchday_backend.core.clock import to_club_time
from matchday_backend.core.errors import FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from matchday_backend.models.match_model import Match, MatchStat
from matchday_backend.models.player_model import Player
from matchday_backend.models.user_model import User
from matchday_backend.models.vote_model import (
    Vote, VoteSubmit, VoteRead, TallyLine, TallyRead, BallotDetail, AllVotesRead, FinalizeRead,
)

logger = logging.getLogger(__name__)

# Points per ballot slot
FIRST_POINTS = 3
SECOND_POINTS = 2
THIRD_POINTS = 1


# ============================================
# Vote Tally Engine
# ============================================
def tally_ballots(ballots: Iterable, names: Optional[Dict[int, str]] = None) -> List[TallyLine]:
    """
    Per-candidate counts and points for a match's ballots.

    Only players named in at least one slot appear. Ranking is total points
    descending, then first-choice votes, then second-choice votes, then
    player name and id, so equal inputs always rank the same way.
    """
    names = names or {}
    counts: Dict[int, List[int]] = {}

    for ballot in ballots:
        for slot, player_id in enumerate((ballot.first_choice, ballot.second_choice, ballot.third_choice)):
            if player_id is None:
                continue
            counts.setdefault(player_id, [0, 0, 0])[slot] += 1

    lines = [
        TallyLine(
            player_id=player_id,
            player_name=names.get(player_id, f"Player {player_id}"),
            first_votes=first,
            second_votes=second,
            third_votes=third,
            total_points=FIRST_POINTS * first + SECOND_POINTS * second + THIRD_POINTS * third,
        )
        for player_id, (first, second, third) in counts.items()
    ]
    lines.sort(key=lambda l: (
        -l.total_points, -l.first_votes, -l.second_votes, l.player_name.lower(), l.player_id,
    ))
    return lines


def vote_to_read(vote: Vote) -> VoteRead:
    return VoteRead(
        id=vote.id,
        game_id=vote.match_id,
        voter_id=vote.voter_id,
        first_choice=vote.first_choice,
        second_choice=vote.second_choice,
        third_choice=vote.third_choice,
        created_at=vote.created_at,
    )


# ============================================
# Ballot submission (sync, write path)
# ============================================
def resolve_voter(user: User, requested_voter_id: Optional[int]) -> int:
    """Players vote as their bound player; managers may vote for anyone."""
    if user.role == "manager":
        voter_id = requested_voter_id if requested_voter_id is not None else user.player_id
    else:
        if requested_voter_id is not None and requested_voter_id != user.player_id:
            raise PermissionDenied("Players can only submit their own ballot")
        voter_id = user.player_id

    if voter_id is None:
        raise InvalidArgument("No voter: this account is not linked to a player")
    return voter_id


def submit_ballot(session: Session, user: User, data: VoteSubmit) -> Vote:
    """
    Stores a ballot, replacing the voter's earlier ballot for the same match
    so there is at most one per (match, voter).
    """
    match = session.get(Match, data.game_id)
    if not match:
        raise NotFound("Game not found")
    if match.motm_finalized:
        raise FailedPrecondition("Voting is closed for this game")

    voter_id = resolve_voter(user, data.voter_id)

    choices = [c for c in (data.first_choice, data.second_choice, data.third_choice) if c is not None]
    if len(set(choices)) != len(choices):
        raise InvalidArgument("First, second and third choices must be different players")

    for player_id in [voter_id] + choices:
        if not session.get(Player, player_id):
            raise NotFound(f"Player {player_id} not found")

    vote = session.exec(
        select(Vote).where(Vote.match_id == data.game_id, Vote.voter_id == voter_id)
    ).first()
    if vote:
        vote.first_choice = data.first_choice
        vote.second_choice = data.second_choice
        vote.third_choice = data.third_choice
    else:
        vote = Vote(
            match_id=data.game_id,
            voter_id=voter_id,
            first_choice=data.first_choice,
            second_choice=data.second_choice,
            third_choice=data.third_choice,
        )

    session.add(vote)
    session.commit()
    session.refresh(vote)
    logger.info("Ballot stored: game=%s voter=%s", data.game_id, voter_id)
    return vote


# ============================================
# Player removal (sync, write path)
# ============================================
def strike_player_from_ballots(session: Session, player_id: int) -> None:
    """
    Removes a deleted player from every ballot while the other choices on
    those ballots keep counting.

    - ballots cast by the player are deleted
    - a struck second or third choice becomes empty
    - a struck first choice is filled by moving the lower choices up; a
      ballot with nothing left is deleted

    Does not commit.
    """
    ballots = session.exec(
        select(Vote).where(
            (Vote.voter_id == player_id)
            | (Vote.first_choice == player_id)
            | (Vote.second_choice == player_id)
            | (Vote.third_choice == player_id)
        )
    ).all()

    for vote in ballots:
        if vote.voter_id == player_id:
            session.delete(vote)
            continue

        if vote.first_choice == player_id:
            remaining = [c for c in (vote.second_choice, vote.third_choice) if c is not None]
            if not remaining:
                session.delete(vote)
                continue
            vote.first_choice = remaining[0]
            vote.second_choice = remaining[1] if len(remaining) > 1 else None
            vote.third_choice = None
        else:
            if vote.second_choice == player_id:
                vote.second_choice = None
            if vote.third_choice == player_id:
                vote.third_choice = None
        session.add(vote)


# ============================================
# Finalize / reopen (sync, write path)
# ============================================
def player_names(session: Session) -> Dict[int, str]:
    return {p.id: p.name for p in session.exec(select(Player)).all()}


def finalize_motm(session: Session, match_id: int) -> FinalizeRead:
    """
    Locks in the Man of the Match from the current ballots.

    The top-ranked candidate's stat row gets `man_of_match`; every other row
    in the match loses it. A finalized match must be reopened before it can
    be finalized again.
    """
    match = session.get(Match, match_id)
    if not match:
        raise NotFound("Game not found")
    if match.motm_finalized:
        raise FailedPrecondition("Man of the Match is already finalized for this game")

    ballots = session.exec(select(Vote).where(Vote.match_id == match_id)).all()
    if not ballots:
        raise InvalidArgument("No votes found for this game")

    results = tally_ballots(ballots, player_names(session))
    winner = results[0]

    stats = session.exec(select(MatchStat).where(MatchStat.match_id == match_id)).all()
    # Clear first so the one-MOTM-per-match index never sees two flags
    for stat in stats:
        if stat.man_of_match:
            stat.man_of_match = False
            session.add(stat)
    session.flush()
    for stat in stats:
        if stat.player_id == winner.player_id:
            stat.man_of_match = True
            session.add(stat)

    match.motm_finalized = True
    session.add(match)
    session.commit()
    logger.info("MOTM finalized: game=%s player=%s (%s pts)", match_id, winner.player_id, winner.total_points)

    return FinalizeRead(
        game_id=match_id,
        motm_player_id=winner.player_id,
        motm_player_name=winner.player_name,
        results=results,
    )


def reopen_motm(session: Session, match_id: int) -> Match:
    """Undoes a finalize: clears MOTM flags and reopens voting."""
    match = session.get(Match, match_id)
    if not match:
        raise NotFound("Game not found")
    if not match.motm_finalized:
        raise FailedPrecondition("Man of the Match has not been finalized for this game")

    stats = session.exec(
        select(MatchStat).where(MatchStat.match_id == match_id, MatchStat.man_of_match == True)  # noqa: E712
    ).all()
    for stat in stats:
        stat.man_of_match = False
        session.add(stat)

    match.motm_finalized = False
    session.add(match)
    session.commit()
    session.refresh(match)
    logger.info("MOTM voting reopened: game=%s", match_id)
    return match


# ============================================
# Async readers (tally routes)
# ============================================
async def _get_match_or_404(db: AsyncSession, match_id: int) -> Match:
    match = await db.get(Match, match_id)
    if not match:
        raise NotFound("Game not found")
    return match


async def _names(db: AsyncSession) -> Dict[int, str]:
    players = (await db.execute(select(Player))).scalars().all()
    return {p.id: p.name for p in players}


async def load_tally(db: AsyncSession, match_id: int) -> TallyRead:
    match = await _get_match_or_404(db, match_id)
    ballots = (await db.execute(select(Vote).where(Vote.match_id == match_id))).scalars().all()
    return TallyRead(
        game_id=match_id,
        motm_finalized=match.motm_finalized,
        results=tally_ballots(ballots, await _names(db)),
    )


async def load_all_votes(db: AsyncSession, match_id: int) -> AllVotesRead:
    """Raw ballots (newest first) with player names, plus the tally."""
    await _get_match_or_404(db, match_id)
    ballots = (
        await db.execute(
            select(Vote).where(Vote.match_id == match_id).order_by(Vote.created_at.desc(), Vote.id.desc())
        )
    ).scalars().all()
    names = await _names(db)

    votes = [
        BallotDetail(
            vote_id=b.id,
            voter_name=names.get(b.voter_id),
            first_choice=names.get(b.first_choice),
            second_choice=names.get(b.second_choice) if b.second_choice else None,
            third_choice=names.get(b.third_choice) if b.third_choice else None,
            created_at=to_club_time(b.created_at),
        )
        for b in ballots
    ]
    return AllVotesRead(game_id=match_id, votes=votes, aggregate=tally_ballots(ballots, names))
