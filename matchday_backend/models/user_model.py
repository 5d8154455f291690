# user_model.py
# Login accounts and server-side sessions.

from typing import Optional, Literal
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, constr

from matchday_backend.core.clock import utc_now


class User(SQLModel, table=True):
    """A login account. Players vote through the account bound to them."""
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    password_hash: str
    role: str = Field(default="player")         # "player" or "manager"
    player_id: Optional[int] = Field(default=None, foreign_key="player.id")


class UserSession(SQLModel, table=True):
    token: str = Field(primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime


# Pydantic request models (used for API input)
class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(BaseModel):
    """Request model for creating a login account (manager only)."""
    username: constr(min_length=1)
    password: constr(min_length=1)
    role: Literal["player", "manager"] = "player"
    player_id: Optional[int] = None


class LoginResponse(BaseModel):
    token: str
    role: str
    player_id: Optional[int] = None


class UserRead(BaseModel):
    id: int
    username: str
    role: str
    player_id: Optional[int] = None

    class Config:
        from_attributes = True
