"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from calorie_tracker.adapters.edamam_client import EdamamClient
from calorie_tracker.adapters.in_memory_food_log_repository import (
    InMemoryFoodLogRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.food import Food, LoggedFoodEntry, Measure, NutrientProfile
from calorie_tracker.services.cache import InMemoryCache
from calorie_tracker.services.catalog import FoodCatalogService
from calorie_tracker.services.food_log import FoodLogRepository, FoodLogStore
from calorie_tracker.services.stats import StatsService

TODAY = date(2024, 5, 1)


def make_entry(
    label: str = "Apple",
    energy: float | None = 52,
    protein: float | None = 0.3,
    fat: float | None = 0.2,
    carbs: float | None = 14,
    weights: tuple[float, ...] = (150,),
    food_id: str | None = None,
) -> LoggedFoodEntry:
    """Build a logged entry with per-100g nutrients."""
    return LoggedFoodEntry(
        food=Food(
            food_id=food_id or f"food_{label.lower().replace(' ', '_')}",
            label=label,
            nutrients=NutrientProfile(
                energy_kcal=energy,
                protein_g=protein,
                fat_g=fat,
                carbs_g=carbs,
            ),
        ),
        measures=tuple(Measure(weight=weight) for weight in weights),
    )


def apple_hint() -> dict[str, object]:
    return {
        "food": {
            "foodId": "food_a1gb9ubb72c7snbuxr3weagwv0dd",
            "label": "Apple",
            "knownAs": "apple",
            "image": "https://www.edamam.com/food-img/42c/apple.jpg",
            "nutrients": {
                "ENERC_KCAL": 52,
                "PROCNT": 0.26,
                "FAT": 0.17,
                "CHOCDF": 13.81,
                "FIBTG": 2.4,
            },
        },
        "measures": [
            {"uri": "measure_unit", "label": "Whole", "weight": 182},
            {"uri": "measure_serving", "label": "Serving", "weight": 109},
        ],
    }


@dataclass
class FakeEdamamClient(EdamamClient):
    """Fake Edamam client with in-memory responses."""

    payload: dict[str, object] = field(
        default_factory=lambda: {"text": "apple", "hints": [apple_hint()]}
    )
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def parse(self, query: str) -> dict[str, object]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FailingFoodLogRepository(FoodLogRepository):
    """Repository whose reads and writes always fail."""

    save_calls: int = 0

    def load(self, name: str) -> dict[str, object] | None:
        raise OSError("storage unavailable")

    def save(self, name: str, record: dict[str, object]) -> None:
        self.save_calls += 1
        raise OSError("storage unavailable")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        edamam_app_id="app-id",
        edamam_app_key="app-key",
        storage_backend="memory",
        search_debounce_seconds=0.01,
    )


@pytest.fixture
def repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def store(repository: InMemoryFoodLogRepository) -> FoodLogStore:
    food_log_store = FoodLogStore(repository)
    food_log_store.load()
    return food_log_store


@pytest.fixture
def edamam_client() -> FakeEdamamClient:
    return FakeEdamamClient()


@pytest.fixture
def container(
    settings: Settings,
    store: FoodLogStore,
    edamam_client: FakeEdamamClient,
) -> AppContainer:
    catalog_service = FoodCatalogService(client=edamam_client, cache=InMemoryCache())
    stats_service = StatsService(
        store=store, daily_calorie_target=settings.daily_calorie_target
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_log_store=store,
        catalog_service=catalog_service,
        stats_service=stats_service,
        today=lambda: TODAY,
        close_resources=close_resources,
    )
