"""Statistics derived from the food log."""

from dataclasses import dataclass
from datetime import date, timedelta

from calorie_tracker.domain.food import (
    MEAL_ORDER,
    FoodLog,
    nutrient_or_fallback,
)
from calorie_tracker.domain.stats import (
    DailyTotals,
    IngredientShare,
    MealBreakdown,
    TrendPoint,
)
from calorie_tracker.services.food_log import FoodLogStore

DEFAULT_DAILY_CALORIE_TARGET = 2500
TOP_INGREDIENTS = 3
MORE_INGREDIENTS_LABEL = "more"
TREND_DAYS = 7


@dataclass(frozen=True)
class DaySummary:
    """Everything the day dashboard shows."""

    totals: DailyTotals
    percent_of_target: float
    target: float
    meals: list[MealBreakdown]


@dataclass
class StatsService:
    """Service computing aggregates from the store's current snapshot."""

    store: FoodLogStore
    daily_calorie_target: float = DEFAULT_DAILY_CALORIE_TARGET

    def get_day_summary(self, day: date) -> DaySummary:
        """Return totals, goal progress and meal cards for a day."""
        food_log = self.store.snapshot()
        return DaySummary(
            totals=daily_totals(food_log, day),
            percent_of_target=percent_of_target(
                food_log, day, self.daily_calorie_target
            ),
            target=self.daily_calorie_target,
            meals=meal_breakdown(food_log, day),
        )

    def get_trend(self, end_day: date, days: int = TREND_DAYS) -> list[TrendPoint]:
        """Return daily calories for the days ending at end_day."""
        return calorie_trend(self.store.snapshot(), end_day, days)


def daily_totals(food_log: FoodLog, day: date) -> DailyTotals:
    """Sum weight-scaled nutrients for every entry logged on a day."""
    total = DailyTotals(day=day, calories=0.0, protein_g=0.0, fat_g=0.0, carbs_g=0.0)
    for entries in food_log.get(day.isoformat(), {}).values():
        for entry in entries:
            weight = entry.serving_weight
            nutrients = entry.food.nutrients
            total = DailyTotals(
                day=day,
                calories=total.calories + _scaled(nutrients.energy_kcal, weight),
                protein_g=total.protein_g + _scaled(nutrients.protein_g, weight),
                fat_g=total.fat_g + _scaled(nutrients.fat_g, weight),
                carbs_g=total.carbs_g + _scaled(nutrients.carbs_g, weight),
            )
    return total


def percent_of_target(food_log: FoodLog, day: date, target: float) -> float:
    """Return daily calories as a percentage of the target, clamped to 0..100."""
    if target <= 0:
        return 0.0
    ratio = daily_totals(food_log, day).calories / target * 100
    return max(0.0, min(100.0, ratio))


def meal_breakdown(food_log: FoodLog, day: date) -> list[MealBreakdown]:
    """Build meal cards for a day in breakfast, lunch, dinner order.

    Card calories are the catalog energy values summed as-is, without the
    serving-weight scaling daily_totals applies.
    """
    meals = food_log.get(day.isoformat(), {})
    cards: list[MealBreakdown] = []
    for meal in MEAL_ORDER:
        entries = meals.get(meal.value)
        if not entries:
            continue
        total_calories = sum(
            nutrient_or_fallback(entry.food.nutrients.energy_kcal) for entry in entries
        )
        ingredients = sorted(
            (
                IngredientShare(
                    text=entry.food.label, weight=entry.total_measure_weight
                )
                for entry in entries
            ),
            key=lambda ingredient: ingredient.weight,
            reverse=True,
        )
        cards.append(
            MealBreakdown(
                meal=meal.value,
                title=meal.value.capitalize(),
                total_calories=total_calories,
                ingredients=_collapse_ingredients(ingredients),
            )
        )
    return cards


def calorie_trend(
    food_log: FoodLog, end_day: date, days: int = TREND_DAYS
) -> list[TrendPoint]:
    """Return one point per day, oldest first, ending at end_day."""
    points = []
    for offset in range(days - 1, -1, -1):
        day = end_day - timedelta(days=offset)
        points.append(
            TrendPoint(
                day=day,
                label=day.strftime("%b %d"),
                calories=daily_totals(food_log, day).calories,
            )
        )
    return points


def _collapse_ingredients(
    ingredients: list[IngredientShare],
) -> list[IngredientShare]:
    top = ingredients[:TOP_INGREDIENTS]
    rest = ingredients[TOP_INGREDIENTS:]
    if rest:
        top.append(
            IngredientShare(
                text=MORE_INGREDIENTS_LABEL,
                weight=sum(ingredient.weight for ingredient in rest),
            )
        )
    return top


def _scaled(per_100g: float | None, weight: float) -> float:
    return nutrient_or_fallback(per_100g) * weight / 100
