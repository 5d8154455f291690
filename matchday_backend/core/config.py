import os

# =====================================
# Global configuration for Matchday
# =====================================
# Every value can be overridden with an environment variable of the same
# name prefixed with MATCHDAY_.

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --- Database ---
DB_PATH = os.environ.get("MATCHDAY_DB_PATH", os.path.join(BASE_DIR, "matchday.db"))
SQL_ECHO = _env_bool("MATCHDAY_SQL_ECHO", False)

# --- Club locale ---
# Used for the default match date and for rendering ballot timestamps.
TIMEZONE = os.environ.get("MATCHDAY_TIMEZONE", "Europe/Copenhagen")

# --- Sessions ---
SESSION_DAYS = int(os.environ.get("MATCHDAY_SESSION_DAYS", "30"))
SESSION_COOKIE = "session"

# --- Bootstrap manager account (created on startup if missing) ---
MANAGER_USERNAME = os.environ.get("MATCHDAY_MANAGER_USERNAME", "manager")
MANAGER_PASSWORD = os.environ.get("MATCHDAY_MANAGER_PASSWORD", "change-me")

# --- Seeding ---
SEED_DEMO = _env_bool("MATCHDAY_SEED_DEMO", False)

# --- Stats ---
TOP_LIMIT = int(os.environ.get("MATCHDAY_TOP_LIMIT", "3"))

# --- Logging ---
LOG_LEVEL = os.environ.get("MATCHDAY_LOG_LEVEL", "INFO").upper()

# TEST_MODE:
# When True, testing features are enabled.
#   - Session cookie is not marked secure (works over plain http)
TEST_MODE = _env_bool("MATCHDAY_TEST_MODE", False)
