# scoring.py
# Score aggregation and clean-sheet derivation for a match's stat lines,
# plus the DraftMatch value object the match-entry form is built on.

from typing import Iterable, List, NamedTuple, Optional, Tuple
from datetime import date as date_type
from pydantic import BaseModel

from matchday_backend.models.match_model import StatEntry

TEAMS = ("Black", "White")
COUNTING_FIELDS = ("goals", "assists", "own_goals")


class Scores(NamedTuple):
    black: int
    white: int


# ============================================
# Score Aggregator
# ============================================
def calculate_scores(entries: Iterable) -> Scores:
    """
    Team scores from stat lines.

    A team scores its own players' goals plus the opposing team's own goals.
    Works on anything with `team`, `goals` and `own_goals` attributes
    (StatEntry, MatchStat rows). Empty input gives 0-0.
    """
    black = 0
    white = 0
    for entry in entries:
        if entry.team == "Black":
            black += entry.goals
            white += entry.own_goals
        else:
            white += entry.goals
            black += entry.own_goals
    return Scores(black=black, white=white)


def goals_conceded(team: str, scores: Scores) -> int:
    return scores.white if team == "Black" else scores.black


def winner_of(black_score: int, white_score: int) -> str:
    if black_score > white_score:
        return "Black"
    if white_score > black_score:
        return "White"
    return "Draw"


def result_for(team: str, black_score: int, white_score: int) -> str:
    """'W', 'D' or 'L' from the point of view of `team`."""
    own, other = (black_score, white_score) if team == "Black" else (white_score, black_score)
    if own > other:
        return "W"
    if own == other:
        return "D"
    return "L"


# ============================================
# Clean-Sheet Deriver
# ============================================
def derive_clean_sheets(entries: Iterable[StatEntry], scores: Optional[Scores] = None) -> List[StatEntry]:
    """
    Returns the entries with `clean_sheet` recomputed.

    A goalkeeper keeps a clean sheet iff the opposing team scored 0. Every
    goalkeeper on a team gets the same flag. Non-goalkeepers never carry one.
    Pure and idempotent: the result depends only on the current entries.
    """
    entries = list(entries)
    if scores is None:
        scores = calculate_scores(entries)

    derived = []
    for entry in entries:
        clean_sheet = entry.is_goalkeeper and goals_conceded(entry.team, scores) == 0
        if clean_sheet != entry.clean_sheet:
            entry = entry.model_copy(update={"clean_sheet": clean_sheet})
        derived.append(entry)
    return derived


# ============================================
# DraftMatch: match-entry form state
# ============================================
class DraftMatch(BaseModel):
    """
    Serializable match being edited by a manager.

    Every update returns a new DraftMatch; clean sheets are re-derived after
    any change that can affect scores or goalkeeper flags.
    """
    date: Optional[date_type] = None
    entries: Tuple[StatEntry, ...] = ()

    class Config:
        frozen = True

    # --- lookups ---
    def get(self, player_id: int) -> Optional[StatEntry]:
        for entry in self.entries:
            if entry.player_id == player_id:
                return entry
        return None

    def team(self, team: str) -> List[StatEntry]:
        return [e for e in self.entries if e.team == team]

    def scores(self) -> Scores:
        return calculate_scores(self.entries)

    # --- updates ---
    def _replace(self, entries) -> "DraftMatch":
        return self.model_copy(update={"entries": tuple(derive_clean_sheets(entries))})

    def _update_entry(self, player_id: int, **changes) -> "DraftMatch":
        if self.get(player_id) is None:
            return self
        return self._replace(
            e.model_copy(update=changes) if e.player_id == player_id else e
            for e in self.entries
        )

    def add_player(self, player_id: int, team: str) -> "DraftMatch":
        """Adds a fresh stat line. No-op if the player is already on either team."""
        if team not in TEAMS:
            raise ValueError(f"Invalid team: {team}")
        if self.get(player_id) is not None:
            return self
        return self._replace(self.entries + (StatEntry(player_id=player_id, team=team),))

    def remove_player(self, player_id: int) -> "DraftMatch":
        return self._replace(e for e in self.entries if e.player_id != player_id)

    def move_player(self, player_id: int, team: str) -> "DraftMatch":
        """Moves a player to `team` with a reset stat line."""
        return self.remove_player(player_id).add_player(player_id, team)

    def increment(self, player_id: int, field: str, amount: int = 1) -> "DraftMatch":
        if field not in COUNTING_FIELDS:
            raise ValueError(f"Invalid stat field: {field}")
        entry = self.get(player_id)
        if entry is None:
            return self
        value = max(0, getattr(entry, field) + amount)
        return self._update_entry(player_id, **{field: value})

    def set_stat(self, player_id: int, field: str, value: int) -> "DraftMatch":
        if field not in COUNTING_FIELDS:
            raise ValueError(f"Invalid stat field: {field}")
        if value < 0:
            raise ValueError(f"{field} cannot be negative")
        return self._update_entry(player_id, **{field: value})

    def toggle_goalkeeper(self, player_id: int) -> "DraftMatch":
        entry = self.get(player_id)
        if entry is None:
            return self
        return self._update_entry(player_id, is_goalkeeper=not entry.is_goalkeeper)

    def toggle_captain(self, player_id: int) -> "DraftMatch":
        """Toggles the armband; at most one captain per team."""
        entry = self.get(player_id)
        if entry is None:
            return self
        entries = []
        for e in self.entries:
            if e.player_id == player_id:
                e = e.model_copy(update={"is_captain": not entry.is_captain})
            elif e.team == entry.team and e.is_captain:
                e = e.model_copy(update={"is_captain": False})
            entries.append(e)
        return self._replace(entries)

    def to_payload(self) -> dict:
        """Body for POST /games with the derived scores filled in."""
        scores = self.scores()
        return {
            "date": self.date.isoformat() if self.date else None,
            "black_score": scores.black,
            "white_score": scores.white,
            "stats": [e.model_dump() for e in self.entries],
        }
