"""Food catalog service backed by the Edamam food database."""

import logging
from dataclasses import dataclass

from calorie_tracker.adapters.edamam_client import EdamamClient
from calorie_tracker.domain.food import Food, LoggedFoodEntry, Measure, NutrientProfile
from calorie_tracker.domain.serialization import to_optional_float
from calorie_tracker.services.cache import Cache

_logger = logging.getLogger(__name__)


@dataclass
class FoodCatalogService:
    """Searches the catalog and normalizes hits into loggable entries."""

    client: EdamamClient
    cache: Cache
    search_ttl_seconds: int = 3600
    debug: bool = False

    async def search(self, query: str) -> list[LoggedFoodEntry]:
        """Return candidate entries for a query, empty on any lookup failure."""
        cleaned = query.strip()
        if not cleaned:
            return []
        cache_key = f"edamam:parser:{cleaned.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return list(cached)

        try:
            payload = await self.client.parse(cleaned)
        except Exception as exc:
            _logger.warning(
                "Catalog lookup failed (query=%s, status=%s): %s",
                cleaned,
                _status_code_from_exception(exc),
                exc,
            )
            return []

        hints = payload.get("hints") if isinstance(payload, dict) else None
        if not isinstance(hints, list):
            _logger.warning("Catalog response for %s has no hints list", cleaned)
            return []
        entries = [entry for entry in map(_parse_hint, hints) if entry is not None]
        self.cache.set(cache_key, entries, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Catalog search: query=%s results=%s", cleaned, len(entries))
        return entries


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_hint(hint: object) -> LoggedFoodEntry | None:
    """Turn one catalog hint into an entry; None when it lacks an id or label."""
    if not isinstance(hint, dict):
        return None
    food = hint.get("food")
    if not isinstance(food, dict):
        return None
    food_id = food.get("foodId")
    label = food.get("label")
    if not food_id or not label:
        return None
    nutrients = food.get("nutrients")
    if not isinstance(nutrients, dict):
        nutrients = {}
    raw_measures = hint.get("measures")
    if not isinstance(raw_measures, list):
        raw_measures = []

    weights = (
        to_optional_float(measure.get("weight"))
        for measure in raw_measures
        if isinstance(measure, dict)
    )
    return LoggedFoodEntry(
        food=Food(
            food_id=str(food_id),
            label=str(label),
            known_as=_optional_str(food.get("knownAs")),
            image=_optional_str(food.get("image")),
            nutrients=NutrientProfile(
                energy_kcal=to_optional_float(nutrients.get("ENERC_KCAL")),
                protein_g=to_optional_float(nutrients.get("PROCNT")),
                fat_g=to_optional_float(nutrients.get("FAT")),
                carbs_g=to_optional_float(nutrients.get("CHOCDF")),
            ),
        ),
        measures=tuple(
            Measure(weight=weight) for weight in weights if weight is not None
        ),
    )


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None
