"""In-process reminder scheduler."""

from dataclasses import dataclass

from supplement_rewards.services.reminders import ReminderRequest, ReminderScheduler


@dataclass
class InMemoryReminderScheduler(ReminderScheduler):
    """Keeps pending reminders in memory for a host app to deliver."""

    _requests: dict[str, ReminderRequest]

    def __init__(self) -> None:
        self._requests = {}

    async def add(self, request: ReminderRequest) -> None:
        """Schedule a reminder, replacing one with the same identifier."""
        self._requests[request.identifier] = request

    async def remove(self, identifier: str) -> None:
        """Remove a pending reminder if it exists."""
        self._requests.pop(identifier, None)

    async def pending(self) -> list[ReminderRequest]:
        """Return pending reminders."""
        return list(self._requests.values())
