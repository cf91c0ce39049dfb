"""Tests for entity store adapters."""

import sqlite3
from datetime import UTC, date, datetime, time
from pathlib import Path

import pytest

from supplement_rewards.adapters.memory_store import InMemoryEntityStore
from supplement_rewards.adapters.sqlite_store import SqliteEntityStore
from supplement_rewards.adapters.supabase_entity_store import SupabaseEntityStore
from supplement_rewards.domain.errors import StorageError
from supplement_rewards.domain.models import (
    DailyRecord,
    FavoriteSupplement,
    Gender,
    QuizHistoryRecord,
    RewardTransaction,
    TransactionType,
    UserProfile,
    UserRewardsSummary,
)
from tests.conftest import FakeSupabaseClient, FlakyEntityStore

NOW = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)

ENTITIES = [
    UserProfile(
        id="u1",
        user_name="Ada",
        email="ada@example.com",
        created_at=NOW,
        updated_at=NOW,
        gender=Gender.FEMALE,
        reminder_time=time(8, 0),
    ),
    DailyRecord(
        id="zinc_2026-03-02",
        supplement_id="zinc",
        supplement_name="Zinc",
        day=date(2026, 3, 2),
        is_taken=True,
        coins_awarded=5,
        taken_at=NOW,
        user_id="local",
    ),
    QuizHistoryRecord(
        id="quiz-1",
        attempt_date=NOW,
        total_questions=5,
        correct_count=4,
        incorrect_count=1,
        coins_earned=40,
        difficulty="Medium",
        user_id="local",
    ),
    RewardTransaction(
        id="tx-1",
        type=TransactionType.STREAK_BONUS,
        coins=50,
        title="7-day streak bonus!",
        timestamp=NOW,
        user_id="local",
    ),
    UserRewardsSummary(
        id="local",
        total_coins_earned=85,
        current_streak=7,
        longest_streak=7,
        last_activity_date=date(2026, 3, 2),
        supplements_taken=7,
        has_first_step_achievement=True,
        has_week_warrior_achievement=True,
    ),
    FavoriteSupplement(
        id="local_zinc",
        supplement_id="zinc",
        added_at=NOW,
        timing="evening",
        user_id="local",
    ),
]


@pytest.mark.parametrize("entity", ENTITIES, ids=lambda e: type(e).__name__)
def test_sqlite_store_persists_across_instances(tmp_path: Path, entity) -> None:
    path = tmp_path / "store.db"
    first = SqliteEntityStore(path)
    first.upsert(entity)
    first.close()

    reloaded = SqliteEntityStore(path)

    assert reloaded.get(type(entity), entity.id) == entity


@pytest.mark.parametrize("entity", ENTITIES, ids=lambda e: type(e).__name__)
def test_supabase_store_maps_rows(entity) -> None:
    client = FakeSupabaseClient()
    store = SupabaseEntityStore(client)

    store.upsert(entity)

    assert store.get(type(entity), entity.id) == entity


def test_sqlite_store_uses_one_table_per_kind(tmp_path: Path) -> None:
    path = tmp_path / "store.db"
    store = SqliteEntityStore(path)
    store.upsert_many(ENTITIES)
    store.close()

    with sqlite3.connect(path) as connection:
        tables = {
            row[0]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )
        }
        [day] = connection.execute("SELECT date FROM daily_records").fetchone()

    assert tables == {
        "users",
        "daily_records",
        "quiz_history",
        "reward_transactions",
        "rewards_summary",
        "favorites",
    }
    assert day == "2026-03-02"


def test_sqlite_batch_is_all_or_nothing(tmp_path: Path) -> None:
    store = SqliteEntityStore(tmp_path / "store.db")
    summary = UserRewardsSummary(id="local", total_coins_earned=5)
    store.upsert(summary)
    store._connection.execute(
        "CREATE TRIGGER reject_transactions BEFORE INSERT ON reward_transactions "
        "BEGIN SELECT RAISE(ABORT, 'disk full'); END"
    )
    transaction = ENTITIES[3]

    with pytest.raises(StorageError):
        store.upsert_many(
            [UserRewardsSummary(id="local", total_coins_earned=55), transaction]
        )

    assert store.get(UserRewardsSummary, "local") == summary
    assert store.get(RewardTransaction, transaction.id) is None


def test_sqlite_store_rejects_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "store.db"
    path.write_bytes(b"this is not a database file" * 100)

    with pytest.raises(StorageError):
        SqliteEntityStore(path)


def test_sqlite_query_filters_by_owner(tmp_path: Path) -> None:
    store = SqliteEntityStore(tmp_path / "store.db")
    mine = ENTITIES[3]
    theirs = RewardTransaction(
        id="tx-2",
        type=TransactionType.SUPPLEMENT_TAKEN,
        coins=5,
        title="Took Zinc",
        timestamp=NOW,
        user_id="someone-else",
    )
    store.upsert_many([mine, theirs])

    assert store.query(RewardTransaction, user_id="local") == [mine]
    assert len(store.query(RewardTransaction)) == 2


def test_memory_store_query_filters_sorts_and_limits() -> None:
    store = InMemoryEntityStore()
    for index in range(5):
        store.upsert(
            FavoriteSupplement(
                id=f"local_s{index}",
                supplement_id=f"s{index}",
                added_at=NOW.replace(hour=index),
                user_id="local",
            )
        )
    store.upsert(
        FavoriteSupplement(
            id="other_s9", supplement_id="s9", added_at=NOW, user_id="other"
        )
    )

    results = store.query(
        FavoriteSupplement,
        predicate=lambda favorite: favorite.supplement_id != "s4",
        order_by=lambda favorite: favorite.added_at,
        descending=True,
        limit=2,
        user_id="local",
    )

    assert [favorite.supplement_id for favorite in results] == ["s3", "s2"]


def test_memory_batch_restores_earlier_writes() -> None:
    store = FlakyEntityStore(fail_kinds=(RewardTransaction,))
    summary = UserRewardsSummary(id="local", total_coins_earned=5)
    store.upsert(summary)
    store.fail_writes = True

    with pytest.raises(StorageError):
        store.upsert_many(
            [UserRewardsSummary(id="local", total_coins_earned=55), ENTITIES[3]]
        )

    assert store.get(UserRewardsSummary, "local") == summary


def test_delete_reports_existence(tmp_path: Path) -> None:
    stores = (
        InMemoryEntityStore(),
        SqliteEntityStore(tmp_path / "store.db"),
        SupabaseEntityStore(FakeSupabaseClient()),
    )
    for store in stores:
        store.upsert(ENTITIES[-1])

        assert store.delete(FavoriteSupplement, "local_zinc") is True
        assert store.delete(FavoriteSupplement, "local_zinc") is False
        assert store.get(FavoriteSupplement, "local_zinc") is None


def test_supabase_query_pushes_owner_filter() -> None:
    client = FakeSupabaseClient()
    store = SupabaseEntityStore(client)
    store.upsert(ENTITIES[3])

    store.query(RewardTransaction, user_id="local")
    store.query(UserRewardsSummary, user_id="local")

    filters = [(name, query.filters) for name, query in client.requests[-2:]]
    assert filters == [
        ("reward_transactions", [("user_id", "local")]),
        ("rewards_summary", [("id", "local")]),
    ]


def test_supabase_failures_become_storage_errors() -> None:
    store = SupabaseEntityStore(FakeSupabaseClient(fail=True))

    with pytest.raises(StorageError):
        store.get(UserRewardsSummary, "local")
    with pytest.raises(StorageError):
        store.upsert(ENTITIES[0])
    with pytest.raises(StorageError):
        store.query(DailyRecord)
