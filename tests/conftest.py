"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from supplement_rewards.adapters.memory_store import InMemoryEntityStore
from supplement_rewards.config import Settings
from supplement_rewards.containers import AppContainer, build_container
from supplement_rewards.domain.errors import StorageError
from supplement_rewards.domain.quiz import QuizDifficulty, QuizQuestion
from supplement_rewards.services.daily_records import DailyRecordService
from supplement_rewards.services.quiz import QuestionBank
from supplement_rewards.services.rewards import RewardsLedger
from supplement_rewards.services.store import Entity


@dataclass
class FixedClock:
    """Manually advanced clock."""

    now: datetime = field(
        default_factory=lambda: datetime(2026, 3, 2, 9, 30, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.now += timedelta(days=days, hours=hours)


class FlakyEntityStore(InMemoryEntityStore):
    """In-memory store whose writes can be switched to fail.

    ``fail_kinds`` restricts failures to the listed entity kinds and
    ``failures`` caps how many writes fail before the store recovers.
    """

    def __init__(
        self, fail_kinds: tuple[type, ...] = (), failures: int | None = None
    ) -> None:
        super().__init__()
        self.fail_writes = False
        self.fail_kinds = fail_kinds
        self.failures = failures

    def upsert(self, entity: Entity) -> None:
        if self.fail_writes and self._should_fail(entity):
            raise StorageError("disk full")
        super().upsert(entity)

    def _should_fail(self, entity: Entity) -> bool:
        if self.fail_kinds and not isinstance(entity, self.fail_kinds):
            return False
        if self.failures is None:
            return True
        if self.failures <= 0:
            return False
        self.failures -= 1
        return True


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeQuery:
    """Chainable stand-in for a Supabase table query."""

    rows: dict[str, dict[str, object]]
    action: str = "select"
    payload: dict[str, object] | None = None
    filters: list[tuple[str, object]] = field(default_factory=list)
    max_rows: int | None = None

    def select(self, *_columns: str) -> "FakeQuery":
        self.action = "select"
        return self

    def upsert(self, payload: dict[str, object]) -> "FakeQuery":
        self.action = "upsert"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.action = "delete"
        return self

    def eq(self, column: str, value: object) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.max_rows = count
        return self

    def execute(self) -> FakeResponse:
        if self.action == "upsert":
            assert self.payload is not None
            self.rows[str(self.payload["id"])] = dict(self.payload)
            return FakeResponse(data=[self.payload])
        matched = [
            row
            for row in self.rows.values()
            if all(row.get(column) == value for column, value in self.filters)
        ]
        if self.action == "delete":
            for row in matched:
                self.rows.pop(str(row["id"]), None)
        if self.max_rows is not None:
            matched = matched[: self.max_rows]
        return FakeResponse(data=matched)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, dict[str, dict[str, object]]] = field(default_factory=dict)
    fail: bool = False
    requests: list[tuple[str, FakeQuery]] = field(default_factory=list)

    def table(self, name: str) -> FakeQuery:
        if self.fail:
            raise ConnectionError("supabase unreachable")
        query = FakeQuery(rows=self.tables.setdefault(name, {}))
        self.requests.append((name, query))
        return query


def make_questions(
    difficulty: QuizDifficulty, count: int, prefix: str = "q"
) -> list[QuizQuestion]:
    return [
        QuizQuestion(
            id=f"{prefix}-{difficulty.value.lower()}-{index}",
            question=f"Question {index}?",
            options=["right", "wrong", "other", "none"],
            correct_answer="right",
            difficulty=difficulty,
        )
        for index in range(count)
    ]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


@pytest.fixture
def ledger(store: InMemoryEntityStore, clock: FixedClock) -> RewardsLedger:
    return RewardsLedger(
        store=store,
        daily_records=DailyRecordService(store, clock=clock),
        clock=clock,
    )


@pytest.fixture
def question_bank() -> QuestionBank:
    return QuestionBank(
        make_questions(QuizDifficulty.EASY, 6)
        + make_questions(QuizDifficulty.MEDIUM, 6)
        + make_questions(QuizDifficulty.HARD, 6)
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_backend="memory", data_file=tmp_path / "store.db")


@pytest.fixture
def container(settings: Settings, clock: FixedClock) -> AppContainer:
    return build_container(settings, clock=clock, rng=random.Random(7))
