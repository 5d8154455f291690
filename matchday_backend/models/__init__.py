# matchday_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Players
from .player_model import Player, PlayerCreate, PlayerUpdate, PlayerRead

# Matches and stat lines
from .match_model import (
    Match, MatchStat, StatEntry, MatchCreate, MatchUpdate, MatchPreview,
    StatRead, MatchRead, MatchDetail, MatchSummary, PreviewRead,
)

# MOTM voting
from .vote_model import (
    Vote, VoteSubmit, VoteRead, TallyLine, TallyRead, BallotDetail,
    AllVotesRead, FinalizeRead,
)

# Accounts and sessions
from .user_model import User, UserSession, LoginRequest, RegisterRequest, LoginResponse, UserRead

# Aggregate stats (response-only)
from .stats_model import PlayerSummary, TopPlayer, TeamStanding, MatchResultRow
