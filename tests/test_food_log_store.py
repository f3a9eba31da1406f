"""Tests for the food log store."""

import random

from calorie_tracker.adapters.in_memory_food_log_repository import (
    InMemoryFoodLogRepository,
)
from calorie_tracker.domain.food import FoodLog
from calorie_tracker.services.food_log import FoodLogStore
from tests.conftest import FailingFoodLogRepository, make_entry


def _assert_no_empty_containers(food_log: FoodLog) -> None:
    for meals in food_log.values():
        assert meals
        for entries in meals.values():
            assert entries


def test_add_creates_day_and_meal(store: FoodLogStore) -> None:
    entry = make_entry()

    store.add_food_item("2024-05-01", "breakfast", entry)

    assert store.get_meal("2024-05-01", "breakfast") == (entry,)
    assert list(store.snapshot()) == ["2024-05-01"]


def test_add_keeps_duplicates_in_insertion_order(store: FoodLogStore) -> None:
    apple = make_entry("Apple")
    bread = make_entry("Bread")

    store.add_food_item("2024-05-01", "lunch", apple)
    store.add_food_item("2024-05-01", "lunch", bread)
    store.add_food_item("2024-05-01", "lunch", apple)

    assert store.get_meal("2024-05-01", "lunch") == (apple, bread, apple)


def test_previous_snapshot_is_not_mutated(store: FoodLogStore) -> None:
    store.add_food_item("2024-05-01", "breakfast", make_entry("Apple"))
    before = store.snapshot()

    store.add_food_item("2024-05-01", "breakfast", make_entry("Bread"))
    store.add_food_item("2024-05-01", "dinner", make_entry("Rice"))
    store.remove_food_item("2024-05-01", "breakfast", 0)

    assert [e.food.label for e in before["2024-05-01"]["breakfast"]] == ["Apple"]
    assert "dinner" not in before["2024-05-01"]
    assert before is not store.snapshot()


def test_remove_keeps_order_of_remaining(store: FoodLogStore) -> None:
    labels = ["A", "B", "C", "D"]
    for label in labels:
        store.add_food_item("2024-05-01", "dinner", make_entry(label))

    store.remove_food_item("2024-05-01", "dinner", 1)

    remaining = store.get_meal("2024-05-01", "dinner")
    assert [entry.food.label for entry in remaining] == ["A", "C", "D"]


def test_remove_last_entry_prunes_meal_and_day(store: FoodLogStore) -> None:
    store.add_food_item("2024-05-01", "breakfast", make_entry())
    store.add_food_item("2024-05-01", "lunch", make_entry())

    store.remove_food_item("2024-05-01", "breakfast", 0)
    assert "breakfast" not in store.snapshot()["2024-05-01"]

    store.remove_food_item("2024-05-01", "lunch", 0)
    assert store.snapshot() == {}


def test_remove_out_of_range_is_noop(
    store: FoodLogStore, repository: InMemoryFoodLogRepository
) -> None:
    store.add_food_item("2024-05-01", "breakfast", make_entry())
    before = store.snapshot()
    saved = repository.records.copy()
    notified: list[FoodLog] = []
    store.subscribe(notified.append)

    store.remove_food_item("2024-05-01", "breakfast", 1)
    store.remove_food_item("2024-05-01", "breakfast", -1)
    store.remove_food_item("2024-05-01", "dinner", 0)
    store.remove_food_item("2024-05-02", "breakfast", 0)

    assert store.snapshot() is before
    assert repository.records == saved
    assert notified == []


def test_get_day_never_returns_none(store: FoodLogStore) -> None:
    assert store.get_day("2030-01-01") == {}
    assert store.get_meal("2030-01-01", "lunch") == ()
    assert store.get_day_entries("2030-01-01") == []


def test_get_day_entries_spans_meals(store: FoodLogStore) -> None:
    store.add_food_item("2024-05-01", "breakfast", make_entry("Oats"))
    store.add_food_item("2024-05-01", "dinner", make_entry("Soup"))

    labels = [entry.food.label for entry in store.get_day_entries("2024-05-01")]

    assert labels == ["Oats", "Soup"]


def test_unknown_meal_key_is_stored_like_any_other(store: FoodLogStore) -> None:
    store.add_food_item("2024-05-01", "snack", make_entry())
    store.remove_food_item("2024-05-01", "snack", 0)

    assert store.snapshot() == {}


def test_mutations_persist_and_reload(repository: InMemoryFoodLogRepository) -> None:
    store = FoodLogStore(repository)
    store.load()
    store.add_food_item("2024-05-01", "breakfast", make_entry("Apple"))
    store.add_food_item("2024-05-02", "dinner", make_entry("Rice", weights=(200, 50)))

    restored = FoodLogStore(repository)
    restored.load()

    assert restored.snapshot() == store.snapshot()


def test_subscribers_notified_after_mutation(store: FoodLogStore) -> None:
    seen: list[FoodLog] = []
    unsubscribe = store.subscribe(seen.append)

    store.add_food_item("2024-05-01", "breakfast", make_entry())
    unsubscribe()
    store.add_food_item("2024-05-01", "breakfast", make_entry())

    assert len(seen) == 1
    assert len(seen[0]["2024-05-01"]["breakfast"]) == 1


def test_failing_listener_does_not_block_others(store: FoodLogStore) -> None:
    seen: list[FoodLog] = []

    def broken(_: FoodLog) -> None:
        raise RuntimeError("render failed")

    store.subscribe(broken)
    store.subscribe(seen.append)

    store.add_food_item("2024-05-01", "breakfast", make_entry())

    assert len(seen) == 1
    assert store.get_meal("2024-05-01", "breakfast")


def test_storage_failures_are_not_fatal() -> None:
    repository = FailingFoodLogRepository()
    store = FoodLogStore(repository)

    assert store.load() == {}
    store.add_food_item("2024-05-01", "breakfast", make_entry())

    assert repository.save_calls == 1
    assert store.get_meal("2024-05-01", "breakfast")


def test_unreadable_record_starts_empty() -> None:
    repository = InMemoryFoodLogRepository(records={"food-store": {"state": "oops"}})
    store = FoodLogStore(repository)

    assert store.load() == {}


def test_random_mutations_never_leave_empty_containers(
    store: FoodLogStore,
) -> None:
    rng = random.Random(7)
    days = ["2024-05-01", "2024-05-02", "2024-05-03"]
    meals = ["breakfast", "lunch", "dinner"]
    for step in range(300):
        day = rng.choice(days)
        meal = rng.choice(meals)
        if rng.random() < 0.5:
            store.add_food_item(day, meal, make_entry(f"Item {step}"))
        else:
            store.remove_food_item(day, meal, rng.randint(-1, 4))
        _assert_no_empty_containers(store.snapshot())
