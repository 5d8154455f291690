from datetime import date, timedelta

import pytest

from matchday_backend.models.match_model import Match, MatchStat
from matchday_backend.models.player_model import Player
from matchday_backend.services.leaderboard import (
    build_leaderboard, points_per_game, team_standings, top_players, win_percentage,
)


def make_history(results):
    """results: list of 'W'/'D'/'L' for player 1 on Black, oldest first."""
    scores = {"W": (2, 1), "D": (1, 1), "L": (0, 3)}
    start = date(2024, 1, 1)
    matches, stats = [], []
    for i, result in enumerate(results, start=1):
        black, white = scores[result]
        matches.append(Match(id=i, date=start + timedelta(days=7 * i), black_score=black, white_score=white))
        stats.append(MatchStat(match_id=i, player_id=1, team="Black", goals=1 if result == "W" else 0))
    return matches, stats


def test_career_record_and_derived_ratios():
    matches, stats = make_history(["W"] * 6 + ["D"] * 2 + ["L"] * 2)
    board = build_leaderboard([Player(id=1, name="Ann")], matches, stats)
    ann = board[0]

    assert ann.games_played == 10
    assert (ann.wins, ann.draws, ann.losses) == (6, 2, 2)
    assert ann.total_points == 20
    assert ann.points_per_game == 2.0
    assert ann.win_percentage == 60
    assert ann.goals == 6


def test_wins_draws_losses_add_up_for_every_player():
    matches, stats = make_history(["W", "L", "D", "W"])
    # player 2 played every game for White
    stats += [MatchStat(match_id=m.id, player_id=2, team="White") for m in matches]
    board = build_leaderboard([Player(id=1, name="Ann"), Player(id=2, name="Bob")], matches, stats)
    for s in board:
        assert s.wins + s.draws + s.losses == s.games_played
    bob = next(s for s in board if s.player_id == 2)
    assert (bob.wins, bob.draws, bob.losses) == (1, 1, 2)


def test_last5_is_most_recent_first():
    matches, stats = make_history(["L", "W", "W", "D", "L", "W"])
    ann = build_leaderboard([Player(id=1, name="Ann")], matches, stats)[0]
    assert ann.last5 == ["W", "L", "D", "W", "W"]


def test_last5_same_day_uses_match_id():
    day = date(2024, 3, 2)
    matches = [
        Match(id=1, date=day, black_score=1, white_score=0),
        Match(id=2, date=day, black_score=0, white_score=1),
    ]
    stats = [MatchStat(match_id=m.id, player_id=1, team="Black") for m in matches]
    ann = build_leaderboard([Player(id=1, name="Ann")], matches, stats)[0]
    assert ann.last5 == ["L", "W"]


def test_player_without_games_is_all_zero():
    ghost = build_leaderboard([Player(id=3, name="Ghost")], [], [])[0]
    assert ghost.games_played == 0
    assert ghost.win_percentage == 0
    assert ghost.points_per_game == 0
    assert ghost.last5 == []


def test_ratio_rounding():
    assert win_percentage(1, 8) == 13        # 12.5 rounds up
    assert win_percentage(0, 0) == 0
    assert points_per_game(7, 3) == 2.33
    assert points_per_game(5, 3) == 1.67


def test_leaderboard_ordered_by_goals_then_games():
    matches = [Match(id=1, date=date(2024, 1, 1), black_score=3, white_score=0)]
    stats = [
        MatchStat(match_id=1, player_id=1, team="Black", goals=1),
        MatchStat(match_id=1, player_id=2, team="Black", goals=2),
    ]
    players = [Player(id=1, name="Ann"), Player(id=2, name="Bob"), Player(id=3, name="Cy")]
    board = build_leaderboard(players, matches, stats)
    assert [s.player_id for s in board] == [2, 1, 3]


def test_top_players_filters_sorts_and_truncates():
    matches = [Match(id=1, date=date(2024, 1, 1), black_score=6, white_score=0)]
    stats = [
        MatchStat(match_id=1, player_id=i, team="Black", goals=g, man_of_match=(i == 2))
        for i, g in [(1, 1), (2, 3), (3, 2), (4, 0)]
    ]
    players = [Player(id=i, name=f"P{i}") for i in range(1, 5)]
    board = build_leaderboard(players, matches, stats)

    top = top_players(board, "goals", limit=2)
    assert [(t.player_id, t.value) for t in top] == [(2, 3), (3, 2)]
    assert len(top_players(board, "goals", limit=10)) == 3

    motm = top_players(board, "motm")
    assert [(t.player_id, t.value, t.games_played) for t in motm] == [(2, 1, 1)]

    with pytest.raises(ValueError):
        top_players(board, "saves")


def test_team_standings():
    matches = [
        Match(id=1, date=date(2024, 1, 1), black_score=2, white_score=1),
        Match(id=2, date=date(2024, 1, 8), black_score=0, white_score=0),
        Match(id=3, date=date(2024, 1, 15), black_score=1, white_score=4),
    ]
    black, white = team_standings(matches)
    assert (black.team, black.wins, black.draws, black.losses) == ("Black", 1, 1, 1)
    assert (black.goals_for, black.goals_against, black.goal_difference, black.points) == (3, 5, -2, 4)
    assert (white.wins, white.points, white.goal_difference) == (1, 4, 2)
    assert white.games_played == 3
