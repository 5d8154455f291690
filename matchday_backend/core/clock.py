# clock.py
# Time helpers. Timestamps are written timezone-aware in UTC and rendered in
# the club's timezone. SQLite hands them back naive, so readers normalize.

from datetime import datetime, date
import pytz

from matchday_backend.core.config import TIMEZONE

club_tz = pytz.timezone(TIMEZONE)


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def as_utc(value: datetime) -> datetime:
    """Stored timestamps come back without tzinfo; they are always UTC."""
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def club_now() -> datetime:
    return datetime.now(club_tz)


def club_today() -> date:
    """Default date for a newly recorded match."""
    return club_now().date()


def to_club_time(value: datetime) -> datetime:
    return as_utc(value).astimezone(club_tz)
