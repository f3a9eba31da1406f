"""Food log store with copy-on-write snapshots and persistence."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from calorie_tracker.domain.food import (
    DayLog,
    FoodLog,
    LoggedFoodEntry,
    MealEntries,
)
from calorie_tracker.domain.serialization import (
    food_log_from_record,
    food_log_to_record,
)

DEFAULT_RECORD_NAME = "food-store"

_logger = logging.getLogger(__name__)

FoodLogListener = Callable[[FoodLog], None]


class FoodLogRepository(Protocol):
    """Persistence interface for the food log record."""

    def load(self, name: str) -> dict[str, object] | None:
        """Return the stored record, or None when nothing was saved yet."""

    def save(self, name: str, record: dict[str, object]) -> None:
        """Replace the stored record."""


@dataclass
class FoodLogStore:
    """Owns the date -> meal -> entries mapping.

    Every mutation builds a new top-level mapping and copies only the day it
    touches, so snapshots handed out earlier stay unchanged. Entries are
    frozen and stored in tuples. After each successful mutation the whole log
    is saved and subscribers are notified with the new snapshot.
    """

    repository: FoodLogRepository
    record_name: str = DEFAULT_RECORD_NAME
    _food_log: FoodLog = field(default_factory=dict, init=False)
    _listeners: list[FoodLogListener] = field(default_factory=list, init=False)

    def load(self) -> FoodLog:
        """Restore the food log from the repository."""
        try:
            record = self.repository.load(self.record_name)
        except Exception:
            _logger.exception("Failed to read food log %s", self.record_name)
            record = None

        if record is None:
            self._food_log = {}
            return self._food_log

        try:
            self._food_log = food_log_from_record(record)
        except ValueError:
            _logger.exception("Discarding unreadable food log %s", self.record_name)
            self._food_log = {}
        return self._food_log

    def snapshot(self) -> FoodLog:
        """Return the current food log snapshot."""
        return self._food_log

    def get_day(self, day: str) -> DayLog:
        """Return the meal mapping for a day, empty when nothing is logged."""
        return dict(self._food_log.get(day, {}))

    def get_meal(self, day: str, meal: str) -> MealEntries:
        """Return the entries logged for a meal, empty when absent."""
        return self._food_log.get(day, {}).get(meal, ())

    def get_day_entries(self, day: str) -> list[LoggedFoodEntry]:
        """Return every entry of a day across all meals."""
        return [
            entry
            for entries in self._food_log.get(day, {}).values()
            for entry in entries
        ]

    def add_food_item(self, day: str, meal: str, entry: LoggedFoodEntry) -> FoodLog:
        """Append an entry to a day's meal."""
        meals = dict(self._food_log.get(day, {}))
        meals[meal] = (*meals.get(meal, ()), entry)
        updated = dict(self._food_log)
        updated[day] = meals
        self._commit(updated)
        return self._food_log

    def remove_food_item(self, day: str, meal: str, index: int) -> FoodLog:
        """Remove the entry at index; out-of-range indexes are ignored."""
        entries = self._food_log.get(day, {}).get(meal)
        if entries is None or index < 0 or index >= len(entries):
            return self._food_log

        remaining = entries[:index] + entries[index + 1 :]
        meals = dict(self._food_log[day])
        if remaining:
            meals[meal] = remaining
        else:
            del meals[meal]
        updated = dict(self._food_log)
        if meals:
            updated[day] = meals
        else:
            del updated[day]
        self._commit(updated)
        return self._food_log

    def subscribe(self, listener: FoodLogListener) -> Callable[[], None]:
        """Register a listener called after each mutation."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, food_log: FoodLog) -> None:
        self._food_log = food_log
        self._persist()
        for listener in list(self._listeners):
            try:
                listener(food_log)
            except Exception:
                _logger.exception("Food log listener failed")

    def _persist(self) -> None:
        try:
            self.repository.save(self.record_name, food_log_to_record(self._food_log))
        except Exception:
            _logger.exception("Failed to save food log %s", self.record_name)
