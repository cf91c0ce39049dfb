"""Local SQLite entity store."""

import logging
import sqlite3
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from supplement_rewards.adapters.rows import (
    COLUMNS,
    OWNER_COLUMNS,
    from_row,
    table_for,
    to_row,
)
from supplement_rewards.domain.errors import StorageError
from supplement_rewards.services.store import (
    Entity,
    EntityStore,
    EntityT,
    apply_query,
)

_logger = logging.getLogger(__name__)


@dataclass
class SqliteEntityStore(EntityStore):
    """Durable on-device store with one table per entity kind.

    Every write runs in its own transaction; ``upsert_many`` commits all of
    its rows together or none of them.
    """

    path: Path
    _connection: sqlite3.Connection
    _lock: threading.Lock

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        try:
            if str(path) != ":memory:":
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                str(path), check_same_thread=False
            )
            self._connection.row_factory = sqlite3.Row
            with self._connection:
                for table, columns in COLUMNS.items():
                    self._connection.execute(_create_table_sql(table, columns))
        except (OSError, sqlite3.Error) as exc:
            _logger.exception("Failed to open store: path=%s", self.path)
            raise StorageError(f"Failed to open {self.path}") from exc

    def get(self, kind: type[EntityT], key: str) -> EntityT | None:
        """Return the entity of the given kind by id, if present."""
        table = table_for(kind)
        rows = self._fetch(f"SELECT * FROM {table} WHERE id = ?", (key,), table)
        if not rows:
            return None
        return from_row(kind, rows[0])  # type: ignore[return-value]

    def upsert(self, entity: Entity) -> None:
        """Insert or replace an entity row."""
        self.upsert_many([entity])

    def upsert_many(self, entities: Sequence[Entity]) -> None:
        """Write entity rows in a single transaction."""
        with self._lock:
            try:
                with self._connection:
                    for entity in entities:
                        table = table_for(type(entity))
                        row = to_row(entity)
                        columns = COLUMNS[table]
                        self._connection.execute(
                            _upsert_sql(table, columns),
                            [row.get(column) for column in columns],
                        )
            except sqlite3.Error as exc:
                _logger.exception("Store write failed: count=%s", len(entities))
                raise StorageError("Failed to write entities") from exc

    def delete(self, kind: type[Entity], key: str) -> bool:
        """Delete a row by id and return whether it existed."""
        table = table_for(kind)
        with self._lock:
            try:
                with self._connection:
                    cursor = self._connection.execute(
                        f"DELETE FROM {table} WHERE id = ?", (key,)
                    )
            except sqlite3.Error as exc:
                _logger.exception("Store delete failed: table=%s id=%s", table, key)
                raise StorageError(f"Failed to delete {table}/{key}") from exc
        return cursor.rowcount > 0

    def query(
        self,
        kind: type[EntityT],
        predicate: Callable[[EntityT], bool] | None = None,
        order_by: Callable[[EntityT], Any] | None = None,
        descending: bool = False,
        limit: int | None = None,
        user_id: str | None = None,
    ) -> Sequence[EntityT]:
        """Return rows of a kind, optionally restricted to one owner."""
        table = table_for(kind)
        if user_id is None:
            rows = self._fetch(f"SELECT * FROM {table}", (), table)
        else:
            owner = OWNER_COLUMNS[table]
            rows = self._fetch(
                f"SELECT * FROM {table} WHERE {owner} = ?", (user_id,), table
            )
        entities = [from_row(kind, row) for row in rows]
        return apply_query(
            entities, predicate, order_by, descending, limit  # type: ignore[arg-type]
        )

    def close(self) -> None:
        """Close the database connection."""
        self._connection.close()

    def _fetch(
        self, sql: str, params: Sequence[object], table: str
    ) -> list[dict[str, object]]:
        with self._lock:
            try:
                cursor = self._connection.execute(sql, params)
                return [dict(row) for row in cursor.fetchall()]
            except sqlite3.Error as exc:
                _logger.exception("Store read failed: table=%s", table)
                raise StorageError(f"Failed to read {table}") from exc


def _create_table_sql(table: str, columns: Sequence[str]) -> str:
    rest = ", ".join(columns[1:])
    return f"CREATE TABLE IF NOT EXISTS {table} (id TEXT PRIMARY KEY, {rest})"


def _upsert_sql(table: str, columns: Sequence[str]) -> str:
    names = ", ".join(columns)
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT OR REPLACE INTO {table} ({names}) VALUES ({placeholders})"
