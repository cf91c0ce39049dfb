"""Supplement reference data."""

from dataclasses import dataclass, field
from enum import Enum


class SupplementCategory(str, Enum):
    """Display grouping derived from a supplement's name."""

    VITAMIN = "Vitamins"
    MINERAL = "Minerals"
    HERBAL = "Herbal"
    SPECIALTY = "Specialty"


_MINERALS = ("zinc", "magnesium", "iron", "calcium", "selenium")
_HERBALS = ("triphala", "mumijo", "shilajit")

_MEAL_TIMING_DISPLAY = {
    "before_meal": "Before meal",
    "after_meal": "After meal",
    "with_meal": "With meal",
    "empty_stomach": "Empty stomach",
}


@dataclass(frozen=True)
class Supplement:
    """Read-only catalog entry for a supplement."""

    id: str
    name: str
    description: str = ""
    dosage: str = ""
    benefits: list[str] = field(default_factory=list)
    special_notes: str = ""
    synergies: list[str] = field(default_factory=list)
    incompatible_with: list[str] = field(default_factory=list)
    side_effects: list[str] = field(default_factory=list)
    food_sources: list[str] = field(default_factory=list)
    is_morning: bool = False
    is_midday: bool = False
    is_evening: bool = False
    meal_timing: str = "with_meal"
    unit: str = "mg"

    @property
    def category(self) -> SupplementCategory:
        name = self.name.lower()
        if "vitamin" in name:
            return SupplementCategory.VITAMIN
        if any(mineral in name for mineral in _MINERALS):
            return SupplementCategory.MINERAL
        if any(herbal in name for herbal in _HERBALS):
            return SupplementCategory.HERBAL
        return SupplementCategory.SPECIALTY

    @property
    def timing_display(self) -> str:
        times = []
        if self.is_morning:
            times.append("Morning")
        if self.is_midday:
            times.append("Midday")
        if self.is_evening:
            times.append("Evening")
        return ", ".join(times) if times else "Anytime"

    @property
    def meal_timing_display(self) -> str:
        return _MEAL_TIMING_DISPLAY.get(self.meal_timing, "With meal")
