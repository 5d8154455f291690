# match_service.py
# Validated writes and read views for matches and their stat lines.

import logging
from typing import List, Optional

from sqlmodel import Session, select

from matchday_backend.core.clock import club_today
from matchday_backend.core.errors import FailedPrecondition, InvalidArgument, NotFound
from matchday_backend.models.match_model import (
    Match, MatchStat, StatEntry, MatchCreate, MatchUpdate,
    StatRead, MatchDetail, MatchRead, MatchSummary, ScorerLine, AssisterLine,
)
from matchday_backend.models.player_model import Player
from matchday_backend.models.vote_model import Vote
from matchday_backend.services.scoring import Scores, calculate_scores, derive_clean_sheets, winner_of

logger = logging.getLogger(__name__)


# ============================================
# Validation
# ============================================
def validate_stats(session: Session, stats: List[StatEntry]) -> None:
    """
    Checks a submitted stat list:
    - a player appears at most once
    - every player exists
    - at most one Man of the Match
    - at most one captain per team
    """
    seen = set()
    for entry in stats:
        if entry.player_id in seen:
            raise InvalidArgument(f"Player {entry.player_id} appears more than once")
        seen.add(entry.player_id)

    for player_id in seen:
        if not session.get(Player, player_id):
            raise NotFound(f"Player {player_id} not found")

    if sum(1 for e in stats if e.man_of_match) > 1:
        raise InvalidArgument("Only one player can be Man of the Match")

    for team in ("Black", "White"):
        if sum(1 for e in stats if e.team == team and e.is_captain) > 1:
            raise InvalidArgument(f"Team {team} has more than one captain")


def resolve_scores(entries, black_score: Optional[int], white_score: Optional[int]) -> Scores:
    """
    Final scores for a write.

    With stat lines, the scores are derived from them and any submitted score
    must agree. Without stat lines, the submitted scores are taken as-is.
    """
    entries = list(entries)
    if not entries:
        return Scores(black=black_score or 0, white=white_score or 0)

    derived = calculate_scores(entries)
    if black_score is not None and black_score != derived.black:
        raise InvalidArgument(
            f"Black score {black_score} does not match the stats ({derived.black})"
        )
    if white_score is not None and white_score != derived.white:
        raise InvalidArgument(
            f"White score {white_score} does not match the stats ({derived.white})"
        )
    return derived


def _insert_stats(session: Session, match_id: int, stats: List[StatEntry], scores: Scores) -> None:
    for entry in derive_clean_sheets(stats, scores):
        session.add(MatchStat(match_id=match_id, **entry.model_dump()))


def _keep_finalized_motm(existing: List[MatchStat], stats: List[StatEntry]) -> List[StatEntry]:
    winner_id = next((s.player_id for s in existing if s.man_of_match), None)
    if winner_id is not None and winner_id not in {e.player_id for e in stats}:
        raise FailedPrecondition(
            "Man of the Match is finalized for this player; reopen voting before removing them"
        )
    return [e.model_copy(update={"man_of_match": e.player_id == winner_id}) for e in stats]


# ============================================
# Writes
# ============================================
def create_match(session: Session, data: MatchCreate) -> Match:
    validate_stats(session, data.stats)
    scores = resolve_scores(data.stats, data.black_score, data.white_score)

    match = Match(
        date=data.date or club_today(),
        black_score=scores.black,
        white_score=scores.white,
    )
    session.add(match)
    session.flush()  # assigns match.id

    _insert_stats(session, match.id, data.stats, scores)
    session.commit()
    session.refresh(match)
    logger.info("Game created: id=%s %s %s-%s", match.id, match.date, match.black_score, match.white_score)
    return match


def update_match(session: Session, match_id: int, data: MatchUpdate) -> Match:
    """
    Partial update. A present `stats` list (even empty) replaces every stat
    row; delete and reinsert happen in the same transaction.

    Once Man of the Match is finalized the award belongs to the vote: the
    submitted `man_of_match` flags are ignored and the finalized winner keeps
    it. Dropping the winner from the stats needs a reopen first.
    """
    match = session.get(Match, match_id)
    if not match:
        raise NotFound("Game not found")

    existing = session.exec(select(MatchStat).where(MatchStat.match_id == match_id)).all()

    stats = data.stats
    if stats is not None and match.motm_finalized:
        stats = _keep_finalized_motm(existing, stats)

    if stats is not None:
        validate_stats(session, stats)
        entries = stats
    else:
        entries = existing

    if stats is None and data.black_score is None and data.white_score is None:
        scores = Scores(black=match.black_score, white=match.white_score)
    elif not entries:
        scores = Scores(
            black=match.black_score if data.black_score is None else data.black_score,
            white=match.white_score if data.white_score is None else data.white_score,
        )
    else:
        scores = resolve_scores(entries, data.black_score, data.white_score)

    if data.date is not None:
        match.date = data.date
    match.black_score = scores.black
    match.white_score = scores.white
    session.add(match)

    if stats is not None:
        for stat in existing:
            session.delete(stat)
        session.flush()  # unique (match, player) rows must be gone before reinsert
        _insert_stats(session, match.id, stats, scores)

    session.commit()
    session.refresh(match)
    logger.info("Game updated: id=%s %s %s-%s", match.id, match.date, match.black_score, match.white_score)
    return match


def delete_match(session: Session, match_id: int) -> None:
    """Removes a match with its stat lines and ballots."""
    match = session.get(Match, match_id)
    if not match:
        raise NotFound("Game not found")

    for vote in session.exec(select(Vote).where(Vote.match_id == match_id)).all():
        session.delete(vote)
    for stat in session.exec(select(MatchStat).where(MatchStat.match_id == match_id)).all():
        session.delete(stat)
    session.flush()
    session.delete(match)
    session.commit()
    logger.info("Game deleted: id=%s", match_id)


# ============================================
# Views
# ============================================
def match_read(match: Match) -> MatchRead:
    return MatchRead(
        id=match.id,
        date=match.date,
        black_score=match.black_score,
        white_score=match.white_score,
        winner=winner_of(match.black_score, match.white_score),
        motm_finalized=match.motm_finalized,
    )


def match_detail(session: Session, match_id: int) -> MatchDetail:
    """A match with every stat line, ordered by team then player name."""
    match = session.get(Match, match_id)
    if not match:
        raise NotFound("Game not found")

    rows = session.exec(
        select(MatchStat, Player)
        .join(Player, MatchStat.player_id == Player.id)
        .where(MatchStat.match_id == match_id)
        .order_by(MatchStat.team, Player.name)
    ).all()

    stats = [
        StatRead(
            player_id=stat.player_id,
            player_name=player.name,
            team=stat.team,
            goals=stat.goals,
            assists=stat.assists,
            own_goals=stat.own_goals,
            is_goalkeeper=stat.is_goalkeeper,
            is_captain=stat.is_captain,
            clean_sheet=stat.clean_sheet,
            man_of_match=stat.man_of_match,
        )
        for stat, player in rows
    ]
    return MatchDetail(**match_read(match).model_dump(), stats=stats)


def list_matches(session: Session) -> List[MatchSummary]:
    """All matches, newest first, with scorers, assisters and MOTM name."""
    matches = session.exec(select(Match).order_by(Match.date.desc(), Match.id.desc())).all()
    names = {p.id: p.name for p in session.exec(select(Player)).all()}

    by_match = {}
    for stat in session.exec(select(MatchStat)).all():
        by_match.setdefault(stat.match_id, []).append(stat)

    summaries = []
    for match in matches:
        stats = by_match.get(match.id, [])
        scorers = sorted(
            (s for s in stats if s.goals > 0),
            key=lambda s: (-s.goals, names.get(s.player_id, "")),
        )
        assisters = sorted(
            (s for s in stats if s.assists > 0),
            key=lambda s: (-s.assists, names.get(s.player_id, "")),
        )
        motm = next((s for s in stats if s.man_of_match), None)

        summaries.append(MatchSummary(
            **match_read(match).model_dump(),
            motm_player_name=names.get(motm.player_id) if motm else None,
            scorers=[ScorerLine(name=names.get(s.player_id, ""), goals=s.goals) for s in scorers],
            assisters=[AssisterLine(name=names.get(s.player_id, ""), assists=s.assists) for s in assisters],
        ))
    return summaries
