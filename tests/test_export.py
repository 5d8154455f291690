import csv
import io
from datetime import date

from openpyxl import load_workbook

from matchday_backend.models.match_model import Match, MatchStat
from matchday_backend.models.player_model import Player
from matchday_backend.services.export import build_csv, build_xlsx, match_results
from matchday_backend.services.leaderboard import build_leaderboard, team_standings


def sample():
    players = [Player(id=1, name="Smith, John"), Player(id=2, name='Tom "Tank" Lee')]
    matches = [
        Match(id=1, date=date(2024, 4, 1), black_score=2, white_score=1),
        Match(id=2, date=date(2024, 4, 8), black_score=0, white_score=0),
    ]
    stats = [
        MatchStat(match_id=1, player_id=1, team="Black", goals=2, man_of_match=True),
        MatchStat(match_id=1, player_id=2, team="White", goals=1),
        MatchStat(match_id=2, player_id=1, team="Black"),
    ]
    names = {p.id: p.name for p in players}
    return (
        team_standings(matches),
        build_leaderboard(players, matches, stats),
        match_results(matches, stats, names),
    )


def test_csv_has_three_sections_separated_by_blank_lines():
    text = build_csv(*sample())
    blocks = text.strip("\n").split("\n\n")
    assert [b.splitlines()[0] for b in blocks] == ["TEAM STANDINGS", "PLAYER STATISTICS", "MATCH RESULTS"]
    assert blocks[0].splitlines()[1].startswith("Team,Games Played,Wins")


def test_csv_escapes_names_with_commas_and_quotes():
    text = build_csv(*sample())
    players_block = text.split("\n\n")[1]
    rows = list(csv.reader(io.StringIO(players_block)))
    names = [r[0] for r in rows[2:]]
    assert names == ["Smith, John", 'Tom "Tank" Lee']

    smith = rows[2]
    # games, wins, draws, losses, points, ppg, win %
    assert smith[1:8] == ["2", "1", "1", "0", "4", "2.00", "50.0"]


def test_match_results_newest_first_with_motm():
    text = build_csv(*sample())
    results_block = text.strip("\n").split("\n\n")[2]
    rows = list(csv.reader(io.StringIO(results_block)))[2:]
    assert rows[0] == ["2", "2024-04-08", "0", "0", "Draw", "N/A"]
    assert rows[1] == ["1", "2024-04-01", "2", "1", "Black", "Smith, John"]


def test_xlsx_has_one_sheet_per_section():
    wb = load_workbook(io.BytesIO(build_xlsx(*sample())))
    assert wb.sheetnames == ["Team Standings", "Player Statistics", "Match Results"]

    players = wb["Player Statistics"]
    assert players["A1"].value == "Player Name"
    assert players["A2"].value == "Smith, John"
    assert players.max_row == 3
