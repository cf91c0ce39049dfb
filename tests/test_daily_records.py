"""Tests for daily record lookups."""

from datetime import date

from supplement_rewards.domain.models import DailyRecord
from supplement_rewards.services.daily_records import DailyRecordService


def test_get_or_create_is_lazy_and_stable(store, clock) -> None:
    service = DailyRecordService(store, clock=clock)

    first = service.get_or_create("zinc", "Zinc", date(2026, 3, 2))
    second = service.get_or_create("zinc", "Zinc", date(2026, 3, 2))

    assert first.id == second.id == "zinc_2026-03-02"
    assert not first.is_taken
    assert len(store.query(DailyRecord)) == 1


def test_records_for_day_sorted_by_name(store, clock) -> None:
    service = DailyRecordService(store, clock=clock)
    service.get_or_create("zinc", "Zinc", clock.now)
    service.get_or_create("vitamin_c", "Vitamin C", clock.now)
    service.get_or_create("zinc", "Zinc", date(2026, 3, 3))

    records = service.records_for_day(clock.now)

    assert [record.supplement_name for record in records] == ["Vitamin C", "Zinc"]


def test_today_stats_counts_taken(ledger, clock) -> None:
    ledger.daily_records.get_or_create("iron", "Iron", clock.now)
    ledger.mark_supplement_taken("zinc", "Zinc")

    assert ledger.daily_records.today_stats() == (1, 2)
