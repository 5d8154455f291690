# security.py
# Password hashing, server-side sessions and the auth dependencies used by
# the routes.

import secrets
import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlmodel import Session, select

from matchday_backend.core.config import SESSION_COOKIE, SESSION_DAYS
from matchday_backend.core.clock import as_utc, utc_now
from matchday_backend.core.database import get_session
from matchday_backend.core.errors import Unauthenticated, PermissionDenied
from matchday_backend.models.user_model import User, UserSession

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def authenticate(session: Session, username: str, password: str) -> Optional[User]:
    """Returns the user for valid credentials, else None."""
    user = session.exec(select(User).where(User.username == username)).first()
    if not user:
        # Same hashing cost whether or not the username exists
        pwd_context.dummy_verify()
        return None
    if not pwd_context.verify(password, user.password_hash):
        return None
    return user


def open_session(session: Session, user: User) -> UserSession:
    user_session = UserSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=utc_now() + timedelta(days=SESSION_DAYS),
    )
    session.add(user_session)
    session.commit()
    session.refresh(user_session)
    return user_session


def close_session(session: Session, token: str) -> bool:
    user_session = session.get(UserSession, token)
    if not user_session:
        return False
    session.delete(user_session)
    session.commit()
    return True


def extract_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, falling back to the session cookie."""
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        token = header[7:].strip()
        if token:
            return token
    return request.cookies.get(SESSION_COOKIE) or None


# ============================================
# Dependencies
# ============================================
def get_current_user(request: Request, session: Session = Depends(get_session)) -> User:
    token = extract_token(request)
    if not token:
        raise Unauthenticated("Missing session token")

    user_session = session.get(UserSession, token)
    if not user_session:
        raise Unauthenticated("Invalid session token")

    if as_utc(user_session.expires_at) <= utc_now():
        session.delete(user_session)
        session.commit()
        raise Unauthenticated("Session expired")

    user = session.get(User, user_session.user_id)
    if not user:
        raise Unauthenticated("Invalid session token")
    return user


def require_manager(user: User = Depends(get_current_user)) -> User:
    if user.role != "manager":
        raise PermissionDenied("Only managers can do this")
    return user
