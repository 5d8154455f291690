# stats_model.py
# Response schemas for the aggregate stats routes. Nothing here is a table:
# every aggregate is recomputed from Match/MatchStat rows on each request.

from typing import List, Optional
from datetime import date as date_type
from pydantic import BaseModel


class PlayerSummary(BaseModel):
    """Career totals for one player."""
    player_id: int
    player_name: str
    games_played: int = 0
    goals: int = 0
    assists: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    motm: int = 0
    clean_sheets: int = 0
    win_percentage: int = 0
    total_points: int = 0
    points_per_game: float = 0
    last5: List[str] = []


class TopPlayer(BaseModel):
    player_id: int
    player_name: str
    value: int
    games_played: int


class TeamStanding(BaseModel):
    team: str
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0


class MatchResultRow(BaseModel):
    game_id: int
    date: date_type
    black_score: int
    white_score: int
    winner: str
    motm: Optional[str] = None
