# vote_model.py
# Defines the Vote model (one ranked MOTM ballot per voter per match)
# and the tally/ballot schemas returned by the voting routes.

from typing import Optional, List
from datetime import datetime
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
from pydantic import BaseModel

from matchday_backend.core.clock import utc_now


class Vote(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("match_id", "voter_id", name="uq_vote_match_voter"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    voter_id: int = Field(foreign_key="player.id", index=True)

    first_choice: int = Field(foreign_key="player.id")
    second_choice: Optional[int] = Field(default=None, foreign_key="player.id")
    third_choice: Optional[int] = Field(default=None, foreign_key="player.id")

    created_at: datetime = Field(default_factory=utc_now)


# -------------------------------
# Pydantic schemas for API input/output
# -------------------------------
class VoteSubmit(BaseModel):
    game_id: int
    voter_id: Optional[int] = None      # defaults to the caller's own player
    first_choice: int
    second_choice: Optional[int] = None
    third_choice: Optional[int] = None


class VoteRead(BaseModel):
    id: int
    game_id: int
    voter_id: int
    first_choice: int
    second_choice: Optional[int] = None
    third_choice: Optional[int] = None
    created_at: datetime


class TallyLine(BaseModel):
    player_id: int
    player_name: str
    first_votes: int
    second_votes: int
    third_votes: int
    total_points: int


class TallyRead(BaseModel):
    game_id: int
    motm_finalized: bool
    results: List[TallyLine]


class BallotDetail(BaseModel):
    vote_id: int
    voter_name: Optional[str] = None
    first_choice: Optional[str] = None
    second_choice: Optional[str] = None
    third_choice: Optional[str] = None
    created_at: datetime


class AllVotesRead(BaseModel):
    game_id: int
    votes: List[BallotDetail]
    aggregate: List[TallyLine]


class FinalizeRead(BaseModel):
    game_id: int
    motm_player_id: int
    motm_player_name: str
    results: List[TallyLine]
