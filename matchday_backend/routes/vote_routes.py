# vote_routes.py
# Man of the Match ballots, tallies and the finalize/reopen actions.

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import Session

from matchday_backend.core.database import get_db, get_session
from matchday_backend.core.security import get_current_user, require_manager
from matchday_backend.models.match_model import MatchRead
from matchday_backend.models.user_model import User
from matchday_backend.models.vote_model import VoteSubmit, VoteRead, TallyRead, AllVotesRead, FinalizeRead
from matchday_backend.services import voting
from matchday_backend.services.match_service import match_read

router = APIRouter()


# ==========================================
# SUBMIT / REPLACE BALLOT
# ==========================================
@router.post("", response_model=VoteRead)
def submit_vote(
    data: VoteSubmit,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """
    Casts a ranked ballot (3/2/1 points). A second ballot from the same voter
    for the same game replaces the first.
    """
    vote = voting.submit_ballot(session, user, data)
    return voting.vote_to_read(vote)


# ==========================================
# TALLY / RAW BALLOTS
# ==========================================
@router.get("/{game_id}", response_model=TallyRead)
async def get_vote_results(game_id: int, db: AsyncSession = Depends(get_db)):
    return await voting.load_tally(db, game_id)


@router.get("/{game_id}/all", response_model=AllVotesRead)
async def get_all_votes(game_id: int, db: AsyncSession = Depends(get_db)):
    return await voting.load_all_votes(db, game_id)


# ==========================================
# FINALIZE / REOPEN (manager only)
# ==========================================
@router.post("/{game_id}/finalize", response_model=FinalizeRead)
def finalize_vote(
    game_id: int,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    """Locks in the Man of the Match. Rejected if already finalized."""
    return voting.finalize_motm(session, game_id)


@router.post("/{game_id}/reopen", response_model=MatchRead)
def reopen_vote(
    game_id: int,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    """Clears a finalized Man of the Match so voting can continue."""
    return match_read(voting.reopen_motm(session, game_id))
