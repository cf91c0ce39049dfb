"""Tests for date key helpers."""

from datetime import UTC, date, datetime, timedelta, timezone

from supplement_rewards.domain.dates import (
    date_key,
    days_between,
    make_clock,
    parse_date_key,
)
from supplement_rewards.domain.models import DailyRecord, FavoriteSupplement


def test_date_key_ignores_time_of_day() -> None:
    morning = datetime(2026, 4, 5, 0, 1, tzinfo=UTC)
    night = datetime(2026, 4, 5, 23, 59, tzinfo=UTC)

    assert date_key(morning) == date_key(night) == "2026-04-05"


def test_date_key_uses_local_calendar_day() -> None:
    local = datetime(2026, 4, 5, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

    assert date_key(local) == "2026-04-05"


def test_parse_date_key_roundtrip() -> None:
    assert parse_date_key("2026-12-31") == date(2026, 12, 31)


def test_days_between_crosses_years() -> None:
    assert days_between(date(2025, 12, 31), date(2026, 1, 1)) == 1


def test_composite_ids() -> None:
    assert DailyRecord.make_id("zinc", date(2026, 1, 2)) == "zinc_2026-01-02"
    assert FavoriteSupplement.make_id(None, "zinc") == "local_zinc"
    assert FavoriteSupplement.make_id("u1", "zinc") == "u1_zinc"


def test_make_clock_is_timezone_aware() -> None:
    now = make_clock("Europe/Berlin")()

    assert now.tzinfo is not None
