# stats_routes.py
# Read-only aggregates, recomputed from the full history on every request.

from typing import List
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from matchday_backend.core.config import TOP_LIMIT
from matchday_backend.core.database import get_db
from matchday_backend.core.errors import NotFound
from matchday_backend.models.stats_model import PlayerSummary, TopPlayer, TeamStanding
from matchday_backend.services import leaderboard
from matchday_backend.services.export import build_csv, build_xlsx, match_results

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ==========================================
# LEADERBOARD / PLAYER
# ==========================================
@router.get("/leaderboard", response_model=List[PlayerSummary])
async def get_leaderboard(db: AsyncSession = Depends(get_db)):
    """Career totals for every player, top scorers first."""
    return await leaderboard.load_leaderboard(db)


@router.get("/player/{player_id}", response_model=PlayerSummary)
async def get_player_stats(player_id: int, db: AsyncSession = Depends(get_db)):
    board = await leaderboard.load_leaderboard(db)
    for summary in board:
        if summary.player_id == player_id:
            return summary
    raise NotFound("Player not found")


# ==========================================
# TOP-N VIEWS
# ==========================================
async def _top(db: AsyncSession, metric: str, limit: int) -> List[TopPlayer]:
    board = await leaderboard.load_leaderboard(db)
    return leaderboard.top_players(board, metric, limit)


@router.get("/top-scorers", response_model=List[TopPlayer])
async def top_scorers(limit: int = Query(TOP_LIMIT, ge=1, le=100), db: AsyncSession = Depends(get_db)):
    return await _top(db, "goals", limit)


@router.get("/top-assisters", response_model=List[TopPlayer])
async def top_assisters(limit: int = Query(TOP_LIMIT, ge=1, le=100), db: AsyncSession = Depends(get_db)):
    return await _top(db, "assists", limit)


@router.get("/top-motm", response_model=List[TopPlayer])
async def top_motm(limit: int = Query(TOP_LIMIT, ge=1, le=100), db: AsyncSession = Depends(get_db)):
    return await _top(db, "motm", limit)


@router.get("/top-clean-sheets", response_model=List[TopPlayer])
async def top_clean_sheets(limit: int = Query(TOP_LIMIT, ge=1, le=100), db: AsyncSession = Depends(get_db)):
    return await _top(db, "clean_sheets", limit)


# ==========================================
# TEAM STANDINGS
# ==========================================
@router.get("/standings", response_model=List[TeamStanding])
async def get_standings(db: AsyncSession = Depends(get_db)):
    _, matches, _ = await leaderboard.load_history(db)
    return leaderboard.team_standings(matches)


# ==========================================
# EXPORT
# ==========================================
async def _export_data(db: AsyncSession):
    players, matches, stats = await leaderboard.load_history(db)
    names = {p.id: p.name for p in players}
    return (
        leaderboard.team_standings(matches),
        leaderboard.build_leaderboard(players, matches, stats),
        match_results(matches, stats, names),
    )


@router.get("/export")
async def export_csv(db: AsyncSession = Depends(get_db)):
    """Standings, player stats and match results as one CSV download."""
    standings, board, results = await _export_data(db)
    return Response(
        content=build_csv(standings, board, results),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="matchday-stats.csv"'},
    )


@router.get("/export.xlsx")
async def export_xlsx(db: AsyncSession = Depends(get_db)):
    standings, board, results = await _export_data(db)
    return Response(
        content=build_xlsx(standings, board, results),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="matchday-stats.xlsx"'},
    )
