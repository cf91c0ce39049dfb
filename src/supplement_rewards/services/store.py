"""Entity store interface shared by all services."""

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar

from supplement_rewards.domain.models import (
    DailyRecord,
    FavoriteSupplement,
    QuizHistoryRecord,
    RewardTransaction,
    UserProfile,
    UserRewardsSummary,
)

Entity = (
    UserProfile
    | DailyRecord
    | QuizHistoryRecord
    | RewardTransaction
    | UserRewardsSummary
    | FavoriteSupplement
)
EntityT = TypeVar("EntityT", bound=Entity)

ENTITY_KINDS: tuple[type, ...] = (
    UserProfile,
    DailyRecord,
    QuizHistoryRecord,
    RewardTransaction,
    UserRewardsSummary,
    FavoriteSupplement,
)


class EntityStore(Protocol):
    """Persistence interface for every entity kind, keyed by ``entity.id``.

    Adapters raise ``StorageError`` when a read or write fails and must not
    keep an in-memory change that did not reach durable storage.
    """

    def get(self, kind: type[EntityT], key: str) -> EntityT | None:
        """Return the entity of the given kind by id, if present."""

    def upsert(self, entity: Entity) -> None:
        """Insert the entity or replace the existing one with the same id."""

    def upsert_many(self, entities: Sequence[Entity]) -> None:
        """Write several entities in order as one unit where the backend allows.

        Atomic adapters keep none of the writes when one fails.
        """

    def delete(self, kind: type[Entity], key: str) -> bool:
        """Delete an entity by id and return whether it existed."""

    def query(
        self,
        kind: type[EntityT],
        predicate: Callable[[EntityT], bool] | None = None,
        order_by: Callable[[EntityT], Any] | None = None,
        descending: bool = False,
        limit: int | None = None,
        user_id: str | None = None,
    ) -> Sequence[EntityT]:
        """Return entities of a kind matching the predicate.

        ``user_id`` limits the result to one owner and is applied by the
        backend where it can filter rows itself.
        """


def apply_query(
    entities: list[EntityT],
    predicate: Callable[[EntityT], bool] | None,
    order_by: Callable[[EntityT], Any] | None,
    descending: bool,
    limit: int | None,
) -> list[EntityT]:
    """Filter, sort and limit entities in memory."""
    results = [entity for entity in entities if predicate is None or predicate(entity)]
    if order_by is not None:
        results.sort(key=order_by, reverse=descending)
    if limit is not None:
        results = results[: max(limit, 0)]
    return results


def owner_of(entity: Entity) -> str | None:
    """Return the owning user id; summaries and profiles are keyed by it."""
    if isinstance(entity, UserRewardsSummary | UserProfile):
        return entity.id
    return entity.user_id
