# auth_routes.py
# Login/logout and account management.

import logging
from fastapi import APIRouter, Depends, Request, Response
from sqlmodel import Session, select

from matchday_backend.core.config import SESSION_COOKIE, SESSION_DAYS, TEST_MODE
from matchday_backend.core.database import get_session
from matchday_backend.core.errors import AlreadyExists, NotFound, Unauthenticated
from matchday_backend.core.security import (
    authenticate, close_session, extract_token, get_current_user, hash_password,
    open_session, require_manager,
)
from matchday_backend.models.player_model import Player
from matchday_backend.models.user_model import User, LoginRequest, LoginResponse, RegisterRequest, UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


# === LOGIN ===

@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, response: Response, session: Session = Depends(get_session)):
    """
    Verifies credentials and opens a session.
    The token is returned in the body and set as an httpOnly cookie.
    """
    user = authenticate(session, data.username, data.password)
    if not user:
        logger.warning("Failed login for %r", data.username)
        raise Unauthenticated("Invalid credentials")

    user_session = open_session(session, user)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=user_session.token,
        max_age=SESSION_DAYS * 24 * 3600,
        httponly=True,
        secure=not TEST_MODE,
        samesite="lax",
    )
    logger.info("Login: %s (%s)", user.username, user.role)
    return LoginResponse(token=user_session.token, role=user.role, player_id=user.player_id)


# === LOGOUT ===

@router.post("/logout")
def logout(request: Request, response: Response, session: Session = Depends(get_session)):
    """Ends the current session (if any) and clears the cookie."""
    token = extract_token(request)
    if token and close_session(session, token):
        logger.info("Logout")
    response.delete_cookie(SESSION_COOKIE)
    return {"success": True}


# === REGISTER (manager only) ===

@router.post("/register", response_model=UserRead, status_code=201)
def register(
    data: RegisterRequest,
    session: Session = Depends(get_session),
    manager: User = Depends(require_manager),
):
    existing = session.exec(select(User).where(User.username == data.username)).first()
    if existing:
        raise AlreadyExists("Username already taken")

    if data.player_id is not None and not session.get(Player, data.player_id):
        raise NotFound("Player not found")

    user = User(
        username=data.username,
        password_hash=hash_password(data.password),
        role=data.role,
        player_id=data.player_id,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Account created: %s (%s) by %s", user.username, user.role, manager.username)
    return user


# === CURRENT ACCOUNT ===

@router.get("/me", response_model=UserRead)
def me(user: User = Depends(get_current_user)):
    return user
