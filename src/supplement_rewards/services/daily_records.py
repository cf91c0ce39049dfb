"""Per-day supplement intake records."""

from dataclasses import dataclass, field
from datetime import date, datetime

from supplement_rewards.domain.dates import Clock, date_key, make_clock
from supplement_rewards.domain.models import LOCAL_USER_ID, DailyRecord
from supplement_rewards.services.store import EntityStore


@dataclass
class DailyRecordService:
    """Looks up and lazily creates daily intake records."""

    store: EntityStore
    user_id: str = LOCAL_USER_ID
    clock: Clock = field(default_factory=make_clock)

    def get_or_create(
        self, supplement_id: str, supplement_name: str, day: date | datetime
    ) -> DailyRecord:
        """Return the record for (supplement, day), creating it if missing."""
        if isinstance(day, datetime):
            day = day.date()
        record_id = DailyRecord.make_id(supplement_id, day)
        existing = self.store.get(DailyRecord, record_id)
        if existing is not None:
            return existing
        record = DailyRecord(
            id=record_id,
            supplement_id=supplement_id,
            supplement_name=supplement_name,
            day=day,
            user_id=self.user_id,
        )
        self.store.upsert(record)
        return record

    def records_for_day(self, day: date | datetime) -> list[DailyRecord]:
        """Return all records for a calendar day sorted by supplement name."""
        suffix = f"_{date_key(day)}"
        return list(
            self.store.query(
                DailyRecord,
                predicate=lambda record: record.id.endswith(suffix),
                order_by=lambda record: record.supplement_name,
                user_id=self.user_id,
            )
        )

    def today_stats(self) -> tuple[int, int]:
        """Return (taken, total) for today's records."""
        records = self.records_for_day(self.clock())
        taken = sum(1 for record in records if record.is_taken)
        return taken, len(records)
