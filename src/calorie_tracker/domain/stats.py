"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros."""

    day: date
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class IngredientShare:
    """Ingredient label with its logged weight."""

    text: str
    weight: float


@dataclass(frozen=True)
class MealBreakdown:
    """Per-meal card data."""

    meal: str
    title: str
    total_calories: float
    ingredients: list[IngredientShare]


@dataclass(frozen=True)
class TrendPoint:
    """Calories for one day of a trend chart."""

    day: date
    label: str
    calories: float
