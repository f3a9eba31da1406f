"""Parsing of the date and meal a view operates on."""

from datetime import date, timedelta

from calorie_tracker.domain.food import MealSlot


def parse_view_date(raw: str | None, today: date) -> date:
    """Return the ISO date in raw, or today when it is missing or malformed."""
    if not raw:
        return today
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        return today


def parse_meal_slot(raw: str | None) -> MealSlot:
    """Return the meal slot named by raw, defaulting to breakfast."""
    if not raw:
        return MealSlot.BREAKFAST
    try:
        return MealSlot(raw.strip().lower())
    except ValueError:
        return MealSlot.BREAKFAST


def human_readable_day(day: date, today: date) -> str:
    """Format a day as 'Today, May 1', 'Yesterday, Apr 30' or 'Apr 29'."""
    label = f"{day:%b} {day.day}"
    if day == today:
        return f"Today, {label}"
    if day == today - timedelta(days=1):
        return f"Yesterday, {label}"
    return label
