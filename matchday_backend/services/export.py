# export.py
# Spreadsheet exports of the standings, the player leaderboard and the
# match results: CSV (three sections in one file) and XLSX (three sheets).

import csv
import io
from typing import Dict, Iterable, List

from openpyxl import Workbook
from openpyxl.styles import Font

from matchday_backend.models.match_model import Match, MatchStat
from matchday_backend.models.stats_model import MatchResultRow, PlayerSummary, TeamStanding
from matchday_backend.services.scoring import winner_of

STANDINGS_TITLE = "TEAM STANDINGS"
PLAYERS_TITLE = "PLAYER STATISTICS"
RESULTS_TITLE = "MATCH RESULTS"

STANDINGS_HEADER = [
    "Team", "Games Played", "Wins", "Draws", "Losses",
    "Goals For", "Goals Against", "Goal Difference", "Points",
]
PLAYERS_HEADER = [
    "Player Name", "Games Played", "Wins", "Draws", "Losses", "Total Points",
    "Points Per Game", "Win %", "Goals", "Assists", "MOTM", "Clean Sheets",
]
RESULTS_HEADER = ["Game ID", "Date", "Black Score", "White Score", "Winner", "Man of the Match"]


def match_results(matches: Iterable[Match], stats: Iterable[MatchStat], names: Dict[int, str]) -> List[MatchResultRow]:
    """Match list, newest first, with the MOTM name if one was awarded."""
    motm_by_match = {s.match_id: s.player_id for s in stats if s.man_of_match}
    rows = []
    for match in sorted(matches, key=lambda m: (m.date, m.id), reverse=True):
        motm_id = motm_by_match.get(match.id)
        rows.append(MatchResultRow(
            game_id=match.id,
            date=match.date,
            black_score=match.black_score,
            white_score=match.white_score,
            winner=winner_of(match.black_score, match.white_score),
            motm=names.get(motm_id) if motm_id is not None else None,
        ))
    return rows


def _win_pct_1dp(summary: PlayerSummary) -> str:
    if summary.games_played <= 0:
        return "0.0"
    return f"{100 * summary.wins / summary.games_played:.1f}"


def _standing_row(s: TeamStanding) -> list:
    return [
        s.team, s.games_played, s.wins, s.draws, s.losses,
        s.goals_for, s.goals_against, s.goal_difference, s.points,
    ]


def _player_row(p: PlayerSummary) -> list:
    return [
        p.player_name, p.games_played, p.wins, p.draws, p.losses, p.total_points,
        f"{p.points_per_game:.2f}", _win_pct_1dp(p), p.goals, p.assists, p.motm, p.clean_sheets,
    ]


def _result_row(r: MatchResultRow) -> list:
    return [r.game_id, r.date.isoformat(), r.black_score, r.white_score, r.winner, r.motm or "N/A"]


def _sections(standings, board, results):
    return [
        (STANDINGS_TITLE, STANDINGS_HEADER, [_standing_row(s) for s in standings]),
        (PLAYERS_TITLE, PLAYERS_HEADER, [_player_row(p) for p in board]),
        (RESULTS_TITLE, RESULTS_HEADER, [_result_row(r) for r in results]),
    ]


def build_csv(
    standings: Iterable[TeamStanding],
    board: Iterable[PlayerSummary],
    results: Iterable[MatchResultRow],
) -> str:
    """
    Three titled sections separated by a blank line. Fields are quoted by the
    csv module when needed, so names with commas or quotes survive.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    for index, (title, header, rows) in enumerate(_sections(standings, board, results)):
        if index:
            writer.writerow([])
        writer.writerow([title])
        writer.writerow(header)
        writer.writerows(rows)

    return buffer.getvalue()


def build_xlsx(
    standings: Iterable[TeamStanding],
    board: Iterable[PlayerSummary],
    results: Iterable[MatchResultRow],
) -> bytes:
    """Same data as build_csv, one worksheet per section."""
    wb = Workbook()
    wb.remove(wb.active)

    for title, header, rows in _sections(standings, board, results):
        ws = wb.create_sheet(title=title.title())
        ws.append(header)
        for cell in ws[1]:
            cell.font = Font(bold=True)
        for row in rows:
            ws.append(row)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
