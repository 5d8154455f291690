from datetime import date

import pytest

from matchday_backend.models.match_model import StatEntry
from matchday_backend.services.scoring import (
    DraftMatch, Scores, calculate_scores, derive_clean_sheets, result_for, winner_of,
)


def entry(player_id, team, goals=0, own_goals=0, **extra):
    return StatEntry(player_id=player_id, team=team, goals=goals, own_goals=own_goals, **extra)


# ---------------------------------------------
# Score Aggregator
# ---------------------------------------------
def test_empty_stats_score_nil_nil():
    assert calculate_scores([]) == Scores(black=0, white=0)


def test_own_goals_count_for_the_other_team():
    stats = [
        entry(1, "Black", goals=2),
        entry(2, "Black", own_goals=1),
        entry(3, "White", goals=1, own_goals=2),
    ]
    # Black: 2 goals + 2 white own goals; White: 1 goal + 1 black own goal
    assert calculate_scores(stats) == Scores(black=4, white=2)


def test_scores_equal_goals_plus_opponent_own_goals():
    stats = [
        entry(1, "Black", goals=3, own_goals=1),
        entry(2, "Black", goals=1),
        entry(3, "White", goals=2),
        entry(4, "White", own_goals=2),
    ]
    scores = calculate_scores(stats)
    black_goals = sum(e.goals for e in stats if e.team == "Black")
    white_goals = sum(e.goals for e in stats if e.team == "White")
    black_og = sum(e.own_goals for e in stats if e.team == "Black")
    white_og = sum(e.own_goals for e in stats if e.team == "White")
    assert scores.black == black_goals + white_og
    assert scores.white == white_goals + black_og


def test_winner_and_result():
    assert winner_of(2, 1) == "Black"
    assert winner_of(0, 3) == "White"
    assert winner_of(1, 1) == "Draw"
    assert result_for("Black", 2, 1) == "W"
    assert result_for("White", 2, 1) == "L"
    assert result_for("White", 2, 2) == "D"


# ---------------------------------------------
# Clean-Sheet Deriver
# ---------------------------------------------
def test_keeper_of_team_that_conceded_nothing_gets_clean_sheet():
    stats = [
        entry(1, "Black", goals=2, is_goalkeeper=True),
        entry(2, "White", is_goalkeeper=True),
    ]
    derived = {e.player_id: e for e in derive_clean_sheets(stats)}
    assert derived[1].clean_sheet is True
    assert derived[2].clean_sheet is False


def test_clean_sheet_derivation_is_idempotent():
    stats = [
        entry(1, "Black", goals=1, is_goalkeeper=True),
        entry(2, "White", is_goalkeeper=True, clean_sheet=True),
        entry(3, "White", clean_sheet=True),
    ]
    once = derive_clean_sheets(stats)
    twice = derive_clean_sheets(once)
    assert [e.clean_sheet for e in once] == [e.clean_sheet for e in twice]


def test_every_keeper_on_a_team_shares_the_flag():
    stats = [
        entry(1, "Black", is_goalkeeper=True),
        entry(2, "Black", is_goalkeeper=True),
        entry(3, "White", goals=1),
    ]
    assert [e.clean_sheet for e in derive_clean_sheets(stats)] == [False, False, False]

    stats[2] = entry(3, "White")
    assert [e.clean_sheet for e in derive_clean_sheets(stats)] == [True, True, False]


def test_outfield_players_never_keep_clean_sheet():
    stats = [entry(1, "Black", clean_sheet=True)]
    assert derive_clean_sheets(stats)[0].clean_sheet is False


# ---------------------------------------------
# DraftMatch
# ---------------------------------------------
def test_player_can_only_be_on_one_team():
    draft = DraftMatch(date=date(2024, 5, 1)).add_player(1, "Black")
    assert draft.add_player(1, "White") == draft
    assert [e.team for e in draft.entries] == ["Black"]


def test_updates_do_not_mutate_previous_draft():
    draft = DraftMatch().add_player(1, "Black")
    scored = draft.increment(1, "goals")
    assert draft.get(1).goals == 0
    assert scored.get(1).goals == 1


def test_goal_against_keeper_removes_clean_sheet():
    draft = (
        DraftMatch()
        .add_player(1, "Black")
        .add_player(2, "White")
        .toggle_goalkeeper(1)
    )
    assert draft.get(1).clean_sheet is True

    draft = draft.increment(2, "goals")
    assert draft.scores() == Scores(black=0, white=1)
    assert draft.get(1).clean_sheet is False

    draft = draft.increment(2, "goals", amount=-1)
    assert draft.get(1).clean_sheet is True


def test_own_goal_by_keeper_team_mate_breaks_clean_sheet():
    draft = DraftMatch().add_player(1, "Black").add_player(2, "Black").toggle_goalkeeper(1)
    draft = draft.increment(2, "own_goals")
    assert draft.scores() == Scores(black=0, white=1)
    assert draft.get(1).clean_sheet is False


def test_untoggling_keeper_clears_clean_sheet():
    draft = DraftMatch().add_player(1, "Black").toggle_goalkeeper(1)
    assert draft.get(1).clean_sheet is True
    assert draft.toggle_goalkeeper(1).get(1).clean_sheet is False


def test_one_captain_per_team():
    draft = (
        DraftMatch()
        .add_player(1, "Black")
        .add_player(2, "Black")
        .add_player(3, "White")
        .toggle_captain(1)
        .toggle_captain(3)
        .toggle_captain(2)
    )
    assert draft.get(1).is_captain is False
    assert draft.get(2).is_captain is True
    assert draft.get(3).is_captain is True


def test_move_player_resets_stat_line():
    draft = DraftMatch().add_player(1, "Black").increment(1, "goals").increment(1, "assists")
    moved = draft.move_player(1, "White")
    assert moved.get(1).team == "White"
    assert moved.get(1).goals == 0
    assert moved.get(1).assists == 0


def test_remove_player_and_team_lists():
    draft = DraftMatch().add_player(1, "Black").add_player(2, "White").add_player(3, "White")
    draft = draft.remove_player(2)
    assert [e.player_id for e in draft.team("White")] == [3]
    assert draft.get(2) is None


def test_invalid_updates_are_rejected():
    draft = DraftMatch().add_player(1, "Black")
    with pytest.raises(ValueError):
        draft.increment(1, "saves")
    with pytest.raises(ValueError):
        draft.set_stat(1, "goals", -1)
    with pytest.raises(ValueError):
        draft.add_player(2, "Red")


def test_payload_carries_derived_scores():
    draft = (
        DraftMatch(date=date(2024, 5, 1))
        .add_player(1, "Black")
        .add_player(2, "White")
        .set_stat(1, "goals", 3)
        .set_stat(2, "own_goals", 1)
    )
    payload = draft.to_payload()
    assert payload["date"] == "2024-05-01"
    assert (payload["black_score"], payload["white_score"]) == (4, 0)
    assert len(payload["stats"]) == 2
