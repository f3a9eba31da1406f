"""JSON file repository for the food log record."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.services.food_log import FoodLogRepository


@dataclass
class JsonFileFoodLogRepository(FoodLogRepository):
    """Stores each named record as <directory>/<name>.json."""

    directory: Path

    def load(self, name: str) -> dict[str, object] | None:
        """Return the stored record, or None on first run."""
        path = self._path(name)
        if not path.exists():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not contain a JSON object")
        return data

    def save(self, name: str, record: dict[str, object]) -> None:
        """Write the record, replacing the previous file atomically."""
        path = self._path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(record, handle)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _path(self, name: str) -> Path:
        return Path(self.directory) / f"{name}.json"
