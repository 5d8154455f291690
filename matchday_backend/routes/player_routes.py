# player_routes.py
# Roster CRUD.

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from matchday_backend.core.database import get_session
from matchday_backend.core.errors import AlreadyExists, NotFound, PermissionDenied
from matchday_backend.core.security import get_current_user, require_manager
from matchday_backend.models.match_model import MatchStat
from matchday_backend.models.player_model import Player, PlayerCreate, PlayerUpdate, PlayerRead
from matchday_backend.models.user_model import User
from matchday_backend.services import voting

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_player_or_404(session: Session, player_id: int) -> Player:
    player = session.get(Player, player_id)
    if not player:
        raise NotFound("Player not found")
    return player


# ============================================
# CREATE PLAYER (manager only)
# ============================================
@router.post("", response_model=PlayerRead, status_code=201)
def create_player(
    data: PlayerCreate,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    if data.user_id:
        existing = session.exec(select(Player).where(Player.user_id == data.user_id)).first()
        if existing:
            raise AlreadyExists("A player with this user_id already exists")

    player = Player(
        name=data.name.strip(),
        nickname=data.nickname or None,
        user_id=data.user_id or None,
        role=data.role,
    )
    session.add(player)
    session.commit()
    session.refresh(player)
    logger.info("Player created: id=%s %r", player.id, player.name)
    return player


# ============================================
# LIST / GET
# ============================================
@router.get("", response_model=List[PlayerRead])
def list_players(session: Session = Depends(get_session)):
    """All players ordered by name."""
    return session.exec(select(Player).order_by(Player.name)).all()


@router.get("/{player_id}", response_model=PlayerRead)
def get_player(player_id: int, session: Session = Depends(get_session)):
    return _get_player_or_404(session, player_id)


# ============================================
# UPDATE PROFILE
# ============================================
@router.put("/{player_id}", response_model=PlayerRead)
def update_player(
    player_id: int,
    data: PlayerUpdate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """
    Partial profile edit (name, nickname, picture).
    Managers can edit anyone; a player can edit their own profile.
    """
    player = _get_player_or_404(session, player_id)
    if user.role != "manager" and user.player_id != player_id:
        raise PermissionDenied("You can only edit your own profile")

    # Explicit nulls clear nickname/picture; name rejects null at validation
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(player, field, value)

    session.add(player)
    session.commit()
    session.refresh(player)
    return player


# ============================================
# DELETE PLAYER (manager only)
# ============================================
@router.delete("/{player_id}")
def delete_player(
    player_id: int,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    """
    Deletes a player with their stat lines and the ballots they cast. Votes
    for them are struck from other ballots, leaving the other choices
    counted. Accounts bound to the player are unbound.
    """
    player = _get_player_or_404(session, player_id)

    for stat in session.exec(select(MatchStat).where(MatchStat.player_id == player_id)).all():
        session.delete(stat)

    voting.strike_player_from_ballots(session, player_id)

    for account in session.exec(select(User).where(User.player_id == player_id)).all():
        account.player_id = None
        session.add(account)

    session.flush()
    session.delete(player)
    session.commit()
    logger.info("Player deleted: id=%s", player_id)
    return {"success": True}
