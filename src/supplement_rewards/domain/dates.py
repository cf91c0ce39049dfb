"""Calendar-day helpers used for record identity and streaks."""

from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

DATE_KEY_FORMAT = "%Y-%m-%d"

Clock = Callable[[], datetime]


def date_key(day: date | datetime) -> str:
    """Return the canonical ``yyyy-MM-dd`` key for a calendar day."""
    if isinstance(day, datetime):
        day = day.date()
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(key: str) -> date:
    """Parse a ``yyyy-MM-dd`` key back into a date."""
    return datetime.strptime(key, DATE_KEY_FORMAT).date()


def days_between(earlier: date, later: date) -> int:
    """Return the whole number of calendar days from ``earlier`` to ``later``."""
    return (later - earlier).days


def make_clock(timezone_name: str = "UTC") -> Clock:
    """Return a clock producing aware datetimes in the given timezone."""
    tz = ZoneInfo(timezone_name)

    def now() -> datetime:
        return datetime.now(tz=tz)

    return now
