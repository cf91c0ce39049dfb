"""Supabase-backed entity store."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from supabase import Client

from supplement_rewards.adapters.rows import OWNER_COLUMNS, from_row, table_for, to_row
from supplement_rewards.domain.errors import StorageError
from supplement_rewards.services.store import (
    Entity,
    EntityStore,
    EntityT,
    apply_query,
)

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseEntityStore(EntityStore):
    """Supabase implementation storing each entity kind in its own table."""

    client: Client

    def get(self, kind: type[EntityT], key: str) -> EntityT | None:
        """Return the entity of the given kind by id, if present."""
        table = table_for(kind)
        try:
            response = (
                self.client.table(table).select("*").eq("id", key).limit(1).execute()
            )
        except Exception as exc:
            _logger.exception("Supabase read failed: table=%s id=%s", table, key)
            raise StorageError(f"Failed to read {table}/{key}") from exc
        if response.data:
            return from_row(kind, response.data[0])  # type: ignore[return-value]
        return None

    def upsert(self, entity: Entity) -> None:
        """Insert or replace an entity row."""
        table = table_for(type(entity))
        try:
            self.client.table(table).upsert(to_row(entity)).execute()
        except Exception as exc:
            _logger.exception("Supabase write failed: table=%s id=%s", table, entity.id)
            raise StorageError(f"Failed to write {table}/{entity.id}") from exc

    def upsert_many(self, entities: Sequence[Entity]) -> None:
        """Upsert rows one by one in the given order.

        PostgREST offers no multi-table transaction, so a failure leaves the
        earlier rows written.
        """
        for entity in entities:
            self.upsert(entity)

    def delete(self, kind: type[Entity], key: str) -> bool:
        """Delete a row by id and return whether it existed."""
        table = table_for(kind)
        try:
            response = self.client.table(table).delete().eq("id", key).execute()
        except Exception as exc:
            _logger.exception("Supabase delete failed: table=%s id=%s", table, key)
            raise StorageError(f"Failed to delete {table}/{key}") from exc
        return bool(response.data)

    def query(
        self,
        kind: type[EntityT],
        predicate: Callable[[EntityT], bool] | None = None,
        order_by: Callable[[EntityT], Any] | None = None,
        descending: bool = False,
        limit: int | None = None,
        user_id: str | None = None,
    ) -> Sequence[EntityT]:
        """Return rows of a kind, filtered by owner server-side."""
        table = table_for(kind)
        try:
            request = self.client.table(table).select("*")
            if user_id is not None:
                request = request.eq(OWNER_COLUMNS[table], user_id)
            response = request.execute()
        except Exception as exc:
            _logger.exception("Supabase query failed: table=%s", table)
            raise StorageError(f"Failed to query {table}") from exc
        entities = [from_row(kind, row) for row in response.data or []]
        return apply_query(
            entities, predicate, order_by, descending, limit  # type: ignore[arg-type]
        )
