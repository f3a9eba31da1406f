"""Conversion between the food log and its persisted record."""

from calorie_tracker.domain.food import (
    DayLog,
    Food,
    FoodLog,
    LoggedFoodEntry,
    Measure,
    NutrientProfile,
)

RECORD_VERSION = 0

_NUTRIENT_KEYS = {
    "energy_kcal": "ENERC_KCAL",
    "protein_g": "PROCNT",
    "fat_g": "FAT",
    "carbs_g": "CHOCDF",
}


class FoodLogDecodeError(ValueError):
    """Raised when a persisted record cannot be turned into a food log."""


def food_log_to_record(food_log: FoodLog) -> dict[str, object]:
    """Encode a food log as a JSON-compatible record."""
    return {
        "state": {
            "selectedFoodItems": {
                day: {
                    meal: [entry_to_dict(entry) for entry in entries]
                    for meal, entries in meals.items()
                }
                for day, meals in food_log.items()
            }
        },
        "version": RECORD_VERSION,
    }


def food_log_from_record(record: dict[str, object]) -> FoodLog:
    """Decode a persisted record into a food log.

    Empty meal lists and empty days are dropped so a restored log keeps the
    same shape as one built through the store.
    """
    state = record.get("state")
    if not isinstance(state, dict):
        raise FoodLogDecodeError("record has no state object")
    raw_items = state.get("selectedFoodItems", {})
    if not isinstance(raw_items, dict):
        raise FoodLogDecodeError("selectedFoodItems must be an object")

    food_log: FoodLog = {}
    for day, raw_meals in raw_items.items():
        if not isinstance(raw_meals, dict):
            raise FoodLogDecodeError(f"meals for {day} must be an object")
        meals: DayLog = {}
        for meal, raw_entries in raw_meals.items():
            if not isinstance(raw_entries, list):
                raise FoodLogDecodeError(f"entries for {day}/{meal} must be a list")
            entries = tuple(entry_from_dict(raw) for raw in raw_entries)
            if entries:
                meals[str(meal)] = entries
        if meals:
            food_log[str(day)] = meals
    return food_log


def entry_to_dict(entry: LoggedFoodEntry) -> dict[str, object]:
    """Encode a logged entry using the catalog's field names."""
    food: dict[str, object] = {
        "foodId": entry.food.food_id,
        "label": entry.food.label,
        "nutrients": {
            key: getattr(entry.food.nutrients, attr)
            for attr, key in _NUTRIENT_KEYS.items()
            if getattr(entry.food.nutrients, attr) is not None
        },
    }
    if entry.food.known_as is not None:
        food["knownAs"] = entry.food.known_as
    if entry.food.image is not None:
        food["image"] = entry.food.image
    return {
        "food": food,
        "measures": [{"weight": measure.weight} for measure in entry.measures],
    }


def entry_from_dict(raw: object) -> LoggedFoodEntry:
    """Decode a logged entry written by entry_to_dict."""
    if not isinstance(raw, dict):
        raise FoodLogDecodeError("entry must be an object")
    food = raw.get("food")
    if not isinstance(food, dict):
        raise FoodLogDecodeError("entry has no food object")
    food_id = food.get("foodId")
    label = food.get("label")
    if not isinstance(food_id, str) or not isinstance(label, str):
        raise FoodLogDecodeError("food requires string foodId and label")
    nutrients = food.get("nutrients") or {}
    if not isinstance(nutrients, dict):
        raise FoodLogDecodeError("nutrients must be an object")
    raw_measures = raw.get("measures") or []
    if not isinstance(raw_measures, list):
        raise FoodLogDecodeError("measures must be a list")

    return LoggedFoodEntry(
        food=Food(
            food_id=food_id,
            label=label,
            known_as=_optional_str(food.get("knownAs")),
            image=_optional_str(food.get("image")),
            nutrients=NutrientProfile(
                **{
                    attr: to_optional_float(nutrients.get(key))
                    for attr, key in _NUTRIENT_KEYS.items()
                }
            ),
        ),
        measures=tuple(
            Measure(weight=weight)
            for weight in (
                to_optional_float(measure.get("weight"))
                for measure in raw_measures
                if isinstance(measure, dict)
            )
            if weight is not None
        ),
    )


def to_optional_float(value: object) -> float | None:
    """Return a float for numeric input, otherwise None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _optional_str(value: object) -> str | None:
    if isinstance(value, str):
        return value
    return None
