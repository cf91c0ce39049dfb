"""In-memory entity store."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from supplement_rewards.services.store import (
    Entity,
    EntityStore,
    EntityT,
    apply_query,
    owner_of,
)


@dataclass
class InMemoryEntityStore(EntityStore):
    """Volatile store keeping every entity kind in a dict keyed by id."""

    _tables: dict[type, dict[str, Entity]]

    def __init__(self) -> None:
        self._tables = {}

    def get(self, kind: type[EntityT], key: str) -> EntityT | None:
        """Return the entity of the given kind by id, if present."""
        return self._tables.get(kind, {}).get(key)  # type: ignore[return-value]

    def upsert(self, entity: Entity) -> None:
        """Insert or replace an entity."""
        self._tables.setdefault(type(entity), {})[entity.id] = entity

    def upsert_many(self, entities: Sequence[Entity]) -> None:
        """Write entities in order, restoring earlier ones if a write fails."""
        previous = [
            (type(entity), entity.id, self.get(type(entity), entity.id))
            for entity in entities
        ]
        written = 0
        try:
            for entity in entities:
                self.upsert(entity)
                written += 1
        except Exception:
            for kind, key, old in reversed(previous[:written]):
                table = self._tables.setdefault(kind, {})
                if old is None:
                    table.pop(key, None)
                else:
                    table[key] = old
            raise

    def delete(self, kind: type[Entity], key: str) -> bool:
        """Delete an entity and return whether it existed."""
        return self._tables.get(kind, {}).pop(key, None) is not None

    def query(
        self,
        kind: type[EntityT],
        predicate: Callable[[EntityT], bool] | None = None,
        order_by: Callable[[EntityT], Any] | None = None,
        descending: bool = False,
        limit: int | None = None,
        user_id: str | None = None,
    ) -> Sequence[EntityT]:
        """Return entities of a kind matching the predicate."""
        entities = [
            entity
            for entity in self._tables.get(kind, {}).values()
            if user_id is None or owner_of(entity) == user_id
        ]
        return apply_query(
            entities, predicate, order_by, descending, limit  # type: ignore[arg-type]
        )
