"""Read-only supplement catalog lookups."""

from dataclasses import dataclass

from supplement_rewards.domain.catalog import Supplement, SupplementCategory


@dataclass
class SupplementCatalog:
    """In-memory view over the bundled supplement reference data."""

    supplements: list[Supplement]

    def get(self, supplement_id: str) -> Supplement | None:
        """Return a supplement by id, if present."""
        for supplement in self.supplements:
            if supplement.id == supplement_id:
                return supplement
        return None

    def display_name(self, supplement_id: str) -> str:
        """Return the supplement name, falling back to the id."""
        supplement = self.get(supplement_id)
        return supplement.name if supplement else supplement_id

    def search(self, query: str | None) -> list[Supplement]:
        """Match name, description or benefits case-insensitively."""
        if not query:
            return list(self.supplements)
        needle = query.lower()
        return [
            supplement
            for supplement in self.supplements
            if needle in supplement.name.lower()
            or needle in supplement.description.lower()
            or any(needle in benefit.lower() for benefit in supplement.benefits)
        ]

    def by_category(self, category: SupplementCategory) -> list[Supplement]:
        """Return supplements in a display category."""
        return [s for s in self.supplements if s.category == category]
