"""Local reminder scheduling for supplement intake."""

import logging
from dataclasses import dataclass, field
from datetime import time
from typing import Protocol

_logger = logging.getLogger(__name__)

DAILY_REMINDER_ID = "daily_reminder"


@dataclass(frozen=True)
class ReminderRequest:
    """A repeating daily reminder at a wall-clock time."""

    identifier: str
    title: str
    body: str
    at: time
    payload: dict[str, str] = field(default_factory=dict)


class ReminderScheduler(Protocol):
    """Delivery backend for local reminders."""

    async def add(self, request: ReminderRequest) -> None:
        """Schedule a reminder, replacing one with the same identifier."""

    async def remove(self, identifier: str) -> None:
        """Remove a pending reminder if it exists."""

    async def pending(self) -> list[ReminderRequest]:
        """Return pending reminders."""


def supplement_reminder_id(supplement_id: str, timing: str) -> str:
    """Return the reminder identifier for a supplement and time of day."""
    return f"supplement_{supplement_id}_{timing}"


@dataclass
class ReminderService:
    """Builds reminder requests and hands them to the scheduler."""

    scheduler: ReminderScheduler
    authorized: bool = True

    async def schedule_daily_reminder(
        self, at: time, enabled: bool
    ) -> ReminderRequest | None:
        """Replace the daily reminder, or just remove it when disabled."""
        await self.scheduler.remove(DAILY_REMINDER_ID)
        if not enabled:
            _logger.info("Daily reminder disabled")
            return None
        if not self.authorized:
            _logger.warning("Reminders not authorized; daily reminder skipped")
            return None
        request = ReminderRequest(
            identifier=DAILY_REMINDER_ID,
            title="Time for Your Supplements!",
            body="Don't forget to take your daily supplements and earn coins!",
            at=at.replace(second=0, microsecond=0),
        )
        await self.scheduler.add(request)
        _logger.info("Daily reminder scheduled: at=%s", request.at.strftime("%H:%M"))
        return request

    async def schedule_supplement_reminder(
        self, supplement_id: str, supplement_name: str, at: time, timing: str
    ) -> ReminderRequest | None:
        """Schedule a per-supplement reminder for a time of day."""
        if not self.authorized:
            return None
        identifier = supplement_reminder_id(supplement_id, timing)
        await self.scheduler.remove(identifier)
        request = ReminderRequest(
            identifier=identifier,
            title="Supplement Reminder",
            body=f"Time to take your {supplement_name}!",
            at=at.replace(second=0, microsecond=0),
            payload={"supplement_id": supplement_id, "timing": timing},
        )
        await self.scheduler.add(request)
        _logger.info(
            "Supplement reminder scheduled: supplement_id=%s timing=%s",
            supplement_id,
            timing,
        )
        return request

    async def cancel_supplement_reminder(self, supplement_id: str, timing: str) -> None:
        """Remove a per-supplement reminder."""
        await self.scheduler.remove(supplement_reminder_id(supplement_id, timing))

    async def pending(self) -> list[ReminderRequest]:
        """Return pending reminders sorted by time."""
        requests = await self.scheduler.pending()
        return sorted(requests, key=lambda request: (request.at, request.identifier))
