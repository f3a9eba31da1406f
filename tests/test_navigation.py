"""Tests for view parameter parsing."""

from datetime import date

import pytest

from calorie_tracker.domain.food import MealSlot
from calorie_tracker.services.navigation import (
    human_readable_day,
    parse_meal_slot,
    parse_view_date,
)

TODAY = date(2024, 5, 1)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-04-20", date(2024, 4, 20)),
        (" 2024-04-20 ", date(2024, 4, 20)),
        (None, TODAY),
        ("", TODAY),
        ("not-a-date", TODAY),
        ("2024-02-30", TODAY),
    ],
)
def test_parse_view_date(raw: str | None, expected: date) -> None:
    assert parse_view_date(raw, TODAY) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("lunch", MealSlot.LUNCH),
        ("Dinner", MealSlot.DINNER),
        (None, MealSlot.BREAKFAST),
        ("brunch", MealSlot.BREAKFAST),
    ],
)
def test_parse_meal_slot(raw: str | None, expected: MealSlot) -> None:
    assert parse_meal_slot(raw) == expected


def test_human_readable_day() -> None:
    assert human_readable_day(TODAY, TODAY) == "Today, May 1"
    assert human_readable_day(date(2024, 4, 30), TODAY) == "Yesterday, Apr 30"
    assert human_readable_day(date(2024, 4, 2), TODAY) == "Apr 2"
