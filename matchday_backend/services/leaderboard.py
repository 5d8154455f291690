# leaderboard.py
# Career aggregates recomputed from the full match history on every call.

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from matchday_backend.models.match_model import Match, MatchStat
from matchday_backend.models.player_model import Player
from matchday_backend.models.stats_model import PlayerSummary, TopPlayer, TeamStanding
from matchday_backend.services.scoring import result_for

LAST_N_RESULTS = 5

# metric name -> PlayerSummary attribute
TOP_METRICS = {
    "goals": "goals",
    "assists": "assists",
    "motm": "motm",
    "clean_sheets": "clean_sheets",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def points_per_game(total_points: int, games_played: int) -> float:
    if games_played <= 0:
        return 0.0
    ratio = Decimal(total_points) / Decimal(games_played)
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def win_percentage(wins: int, games_played: int) -> int:
    if games_played <= 0:
        return 0
    return round_half_up(100 * wins / games_played)


# ============================================
# Leaderboard Aggregator
# ============================================
def summarize_player(player: Player, stats: Iterable[MatchStat], matches: Dict[int, Match]) -> PlayerSummary:
    """
    Aggregates one player's stat rows.

    Win/draw/loss compares the player's team score with the other team's.
    `last5` is most recent first: match date descending, then match id
    descending.
    """
    summary = PlayerSummary(player_id=player.id, player_name=player.name)
    played = []

    for stat in stats:
        match = matches.get(stat.match_id)
        if match is None:
            continue
        result = result_for(stat.team, match.black_score, match.white_score)
        played.append((match.date, match.id, result))

        summary.games_played += 1
        summary.goals += stat.goals
        summary.assists += stat.assists
        summary.motm += int(stat.man_of_match)
        summary.clean_sheets += int(stat.clean_sheet)
        if result == "W":
            summary.wins += 1
        elif result == "D":
            summary.draws += 1
        else:
            summary.losses += 1

    summary.total_points = 3 * summary.wins + summary.draws
    summary.win_percentage = win_percentage(summary.wins, summary.games_played)
    summary.points_per_game = points_per_game(summary.total_points, summary.games_played)

    played.sort(key=lambda p: (p[0], p[1]), reverse=True)
    summary.last5 = [result for _, _, result in played[:LAST_N_RESULTS]]
    return summary


def build_leaderboard(players: Iterable[Player], matches: Iterable[Match], stats: Iterable[MatchStat]) -> List[PlayerSummary]:
    """Every player, including those without games; goals desc, then games desc, then name."""
    matches_by_id = {m.id: m for m in matches}
    stats_by_player: Dict[int, List[MatchStat]] = {}
    for stat in stats:
        stats_by_player.setdefault(stat.player_id, []).append(stat)

    board = [
        summarize_player(p, stats_by_player.get(p.id, []), matches_by_id)
        for p in players
    ]
    board.sort(key=lambda s: (-s.goals, -s.games_played, s.player_name.lower(), s.player_id))
    return board


def top_players(board: Iterable[PlayerSummary], metric: str, limit: int = 3) -> List[TopPlayer]:
    """Players with metric > 0, highest first, truncated to `limit`."""
    if metric not in TOP_METRICS:
        raise ValueError(f"Unknown metric: {metric}")
    attr = TOP_METRICS[metric]

    ranked = [s for s in board if getattr(s, attr) > 0]
    ranked.sort(key=lambda s: (-getattr(s, attr), s.player_name.lower(), s.player_id))
    return [
        TopPlayer(
            player_id=s.player_id,
            player_name=s.player_name,
            value=getattr(s, attr),
            games_played=s.games_played,
        )
        for s in ranked[:limit]
    ]


def team_standings(matches: Iterable[Match]) -> List[TeamStanding]:
    """League-style table for the two bibs (3 points a win, 1 a draw)."""
    table = {team: TeamStanding(team=team) for team in ("Black", "White")}

    for match in matches:
        for team, scored, conceded in (
            ("Black", match.black_score, match.white_score),
            ("White", match.white_score, match.black_score),
        ):
            row = table[team]
            row.games_played += 1
            row.goals_for += scored
            row.goals_against += conceded
            if scored > conceded:
                row.wins += 1
            elif scored == conceded:
                row.draws += 1
            else:
                row.losses += 1

    for row in table.values():
        row.goal_difference = row.goals_for - row.goals_against
        row.points = 3 * row.wins + row.draws
    return list(table.values())


# ============================================
# Async loaders (read routes)
# ============================================
async def load_history(db: AsyncSession):
    """Returns (players, matches, stats) as plain lists."""
    players = (await db.execute(select(Player).order_by(Player.name))).scalars().all()
    matches = (await db.execute(select(Match))).scalars().all()
    stats = (await db.execute(select(MatchStat))).scalars().all()
    return list(players), list(matches), list(stats)


async def load_leaderboard(db: AsyncSession) -> List[PlayerSummary]:
    players, matches, stats = await load_history(db)
    return build_leaderboard(players, matches, stats)
