# player_model.py
# Defines the Player table and the request/response schemas for the roster.

from typing import Optional, Literal
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, constr

PlayerRole = Literal["player", "manager"]


class Player(SQLModel, table=True):
    """A member of the squad. Referenced by stat rows and ballots."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    nickname: Optional[str] = None
    profile_picture: Optional[str] = None      # URL or storage key
    role: str = Field(default="player")        # "player" or "manager"

    # External identity binding; at most one player per identity.
    user_id: Optional[str] = Field(default=None, unique=True)


# -------------------------------
# Pydantic schemas for API input/output
# -------------------------------
class PlayerCreate(BaseModel):
    name: constr(min_length=1)
    nickname: Optional[str] = None
    user_id: Optional[str] = None
    role: PlayerRole = "player"


class PlayerUpdate(BaseModel):
    """Partial profile edit. Omitted fields are left unchanged; null clears them."""
    name: constr(min_length=1) = None          # may be omitted, never null
    nickname: Optional[str] = None
    profile_picture: Optional[str] = None


class PlayerRead(BaseModel):
    id: int
    name: str
    nickname: Optional[str] = None
    profile_picture: Optional[str] = None
    role: str
    user_id: Optional[str] = None

    class Config:
        from_attributes = True
