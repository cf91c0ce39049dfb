"""Favorite supplement toggling."""

from dataclasses import dataclass, field

from supplement_rewards.domain.dates import Clock, make_clock
from supplement_rewards.domain.models import LOCAL_USER_ID, FavoriteSupplement
from supplement_rewards.services.store import EntityStore


@dataclass
class FavoritesService:
    """Marks supplements as favorites by the presence of a record."""

    store: EntityStore
    user_id: str = LOCAL_USER_ID
    clock: Clock = field(default_factory=make_clock)

    def toggle(self, supplement_id: str, timing: str = "morning") -> bool:
        """Flip the favorite state and return whether it is now a favorite."""
        favorite_id = FavoriteSupplement.make_id(self.user_id, supplement_id)
        if self.store.delete(FavoriteSupplement, favorite_id):
            return False
        self.store.upsert(
            FavoriteSupplement(
                id=favorite_id,
                supplement_id=supplement_id,
                added_at=self.clock(),
                timing=timing,
                user_id=self.user_id,
            )
        )
        return True

    def is_favorite(self, supplement_id: str) -> bool:
        """Return whether the supplement is a favorite."""
        favorite_id = FavoriteSupplement.make_id(self.user_id, supplement_id)
        return self.store.get(FavoriteSupplement, favorite_id) is not None

    def list_favorites(self) -> list[FavoriteSupplement]:
        """Return favorites, most recently added first."""
        return list(
            self.store.query(
                FavoriteSupplement,
                order_by=lambda favorite: favorite.added_at,
                descending=True,
                user_id=self.user_id,
            )
        )
