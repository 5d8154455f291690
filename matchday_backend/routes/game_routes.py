# game_routes.py
# Match results: create/update/delete (manager only), list and detail views,
# and a draft preview that derives scores and clean sheets without saving.

from typing import List
from fastapi import APIRouter, Depends
from sqlmodel import Session

from matchday_backend.core.database import get_session
from matchday_backend.core.security import require_manager
from matchday_backend.models.match_model import (
    MatchCreate, MatchUpdate, MatchPreview, MatchDetail, MatchSummary, PreviewRead,
)
from matchday_backend.models.user_model import User
from matchday_backend.services import match_service
from matchday_backend.services.scoring import calculate_scores, derive_clean_sheets

router = APIRouter()


# ==========================================
# CREATE GAME
# ==========================================
@router.post("", response_model=MatchDetail, status_code=201)
def create_game(
    data: MatchCreate,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    """
    Records a game with its stat lines.
    Scores may be omitted; they are derived from goals and own goals.
    """
    match = match_service.create_match(session, data)
    return match_service.match_detail(session, match.id)


# ==========================================
# PREVIEW DRAFT
# ==========================================
@router.post("/preview", response_model=PreviewRead)
def preview_game(data: MatchPreview):
    """Scores and clean sheets for a draft, without writing anything."""
    scores = calculate_scores(data.stats)
    return PreviewRead(
        black_score=scores.black,
        white_score=scores.white,
        stats=derive_clean_sheets(data.stats, scores),
    )


# ==========================================
# LIST / GET
# ==========================================
@router.get("", response_model=List[MatchSummary])
def list_games(session: Session = Depends(get_session)):
    """All games, newest first."""
    return match_service.list_matches(session)


@router.get("/{game_id}", response_model=MatchDetail)
def get_game(game_id: int, session: Session = Depends(get_session)):
    return match_service.match_detail(session, game_id)


# ==========================================
# UPDATE / DELETE
# ==========================================
@router.put("/{game_id}", response_model=MatchDetail)
def update_game(
    game_id: int,
    data: MatchUpdate,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    match_service.update_match(session, game_id, data)
    return match_service.match_detail(session, game_id)


@router.delete("/{game_id}")
def delete_game(
    game_id: int,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    match_service.delete_match(session, game_id)
    return {"success": True}
