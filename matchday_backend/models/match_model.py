# match_model.py
# Defines the Match model (a played game between the Black and White bibs)
# and MatchStat (one row per player per match).

from typing import Optional, List, Literal
from datetime import date as date_type
from sqlalchemy import CheckConstraint, Index, UniqueConstraint, text
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, NonNegativeInt

Team = Literal["Black", "White"]


class Match(SQLModel, table=True):
    """A single recorded game. Stats and ballots are owned by it."""
    __table_args__ = (
        CheckConstraint("black_score >= 0", name="ck_match_black_score"),
        CheckConstraint("white_score >= 0", name="ck_match_white_score"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    date: date_type = Field(index=True)
    black_score: int = 0
    white_score: int = 0
    motm_finalized: bool = False


class MatchStat(SQLModel, table=True):
    """One player's line in one match."""
    __table_args__ = (
        UniqueConstraint("match_id", "player_id", name="uq_matchstat_match_player"),
        # At most one Man of the Match per match
        Index(
            "uq_matchstat_motm",
            "match_id",
            unique=True,
            sqlite_where=text("man_of_match = 1"),
        ),
        CheckConstraint("team IN ('Black', 'White')", name="ck_matchstat_team"),
        CheckConstraint("goals >= 0", name="ck_matchstat_goals"),
        CheckConstraint("assists >= 0", name="ck_matchstat_assists"),
        CheckConstraint("own_goals >= 0", name="ck_matchstat_own_goals"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    player_id: int = Field(foreign_key="player.id", index=True)

    team: str                                   # "Black" or "White"
    goals: int = 0
    assists: int = 0
    own_goals: int = 0
    is_goalkeeper: bool = False
    is_captain: bool = False
    clean_sheet: bool = False
    man_of_match: bool = False


# -------------------------------
# Pydantic schemas for API input/output
# -------------------------------
class StatEntry(BaseModel):
    """A stat line as submitted by a manager (or held in a draft)."""
    player_id: int
    team: Team
    goals: NonNegativeInt = 0
    assists: NonNegativeInt = 0
    own_goals: NonNegativeInt = 0
    is_goalkeeper: bool = False
    is_captain: bool = False
    clean_sheet: bool = False
    man_of_match: bool = False

    class Config:
        from_attributes = True


class MatchCreate(BaseModel):
    date: Optional[date_type] = None            # defaults to today (club timezone)
    black_score: Optional[NonNegativeInt] = None
    white_score: Optional[NonNegativeInt] = None
    stats: List[StatEntry] = []


class MatchUpdate(BaseModel):
    """Partial edit. A present `stats` list replaces every stat row."""
    date: Optional[date_type] = None
    black_score: Optional[NonNegativeInt] = None
    white_score: Optional[NonNegativeInt] = None
    stats: Optional[List[StatEntry]] = None


class MatchPreview(BaseModel):
    stats: List[StatEntry] = []


class StatRead(StatEntry):
    player_name: str


class MatchRead(BaseModel):
    id: int
    date: date_type
    black_score: int
    white_score: int
    winner: str
    motm_finalized: bool


class MatchDetail(MatchRead):
    stats: List[StatRead]


class ScorerLine(BaseModel):
    name: str
    goals: int


class AssisterLine(BaseModel):
    name: str
    assists: int


class MatchSummary(MatchRead):
    motm_player_name: Optional[str] = None
    scorers: List[ScorerLine] = []
    assisters: List[AssisterLine] = []


class PreviewRead(BaseModel):
    black_score: int
    white_score: int
    stats: List[StatEntry]
