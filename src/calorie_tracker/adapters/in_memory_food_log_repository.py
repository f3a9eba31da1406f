"""Process-local repository for the food log record."""

import copy
from dataclasses import dataclass, field

from calorie_tracker.services.food_log import FoodLogRepository


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """Keeps records in a dict; nothing survives the process."""

    records: dict[str, dict[str, object]] = field(default_factory=dict)

    def load(self, name: str) -> dict[str, object] | None:
        """Return a copy of the stored record."""
        record = self.records.get(name)
        return copy.deepcopy(record) if record is not None else None

    def save(self, name: str, record: dict[str, object]) -> None:
        """Store a copy of the record."""
        self.records[name] = copy.deepcopy(record)
