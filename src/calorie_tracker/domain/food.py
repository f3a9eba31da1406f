"""Domain models for foods and the food log."""

from dataclasses import dataclass, field
from enum import StrEnum

# Placeholder values substituted when a catalog food is missing a nutrient
# value or a logged entry carries no measure.
MISSING_NUTRIENT_FALLBACK = 2.0
MISSING_WEIGHT_FALLBACK_G = 2.0


class MealSlot(StrEnum):
    """Meal slots a food entry can be logged under."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


MEAL_ORDER: tuple[MealSlot, ...] = (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER)


@dataclass(frozen=True)
class NutrientProfile:
    """Per-100g nutrient values; None means the catalog did not provide one."""

    energy_kcal: float | None = None
    protein_g: float | None = None
    fat_g: float | None = None
    carbs_g: float | None = None


@dataclass(frozen=True)
class Food:
    """A food as returned by the catalog."""

    food_id: str
    label: str
    nutrients: NutrientProfile = field(default_factory=NutrientProfile)
    known_as: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class Measure:
    """One serving interpretation of a food, in grams."""

    weight: float


@dataclass(frozen=True)
class LoggedFoodEntry:
    """A food paired with its candidate serving measures."""

    food: Food
    measures: tuple[Measure, ...] = ()

    @property
    def serving_weight(self) -> float:
        """Return the default serving weight used in calorie math."""
        if not self.measures:
            return MISSING_WEIGHT_FALLBACK_G
        return self.measures[0].weight

    @property
    def total_measure_weight(self) -> float:
        """Return the sum of all candidate measure weights."""
        return sum(measure.weight for measure in self.measures)


MealEntries = tuple[LoggedFoodEntry, ...]
DayLog = dict[str, MealEntries]
FoodLog = dict[str, DayLog]


def nutrient_or_fallback(value: float | None) -> float:
    """Return a nutrient value, substituting the placeholder when missing."""
    if value is None:
        return MISSING_NUTRIENT_FALLBACK
    return value
