"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from supabase import create_client

from calorie_tracker.adapters.edamam_client import HttpxEdamamClient
from calorie_tracker.adapters.in_memory_food_log_repository import (
    InMemoryFoodLogRepository,
)
from calorie_tracker.adapters.json_file_food_log_repository import (
    JsonFileFoodLogRepository,
)
from calorie_tracker.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from calorie_tracker.config import Settings, require_supabase_credentials
from calorie_tracker.services.cache import InMemoryCache
from calorie_tracker.services.catalog import FoodCatalogService
from calorie_tracker.services.food_log import FoodLogRepository, FoodLogStore
from calorie_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_log_store: FoodLogStore
    catalog_service: FoodCatalogService
    stats_service: StatsService
    today: Callable[[], date]
    close_resources: Callable[[], Awaitable[None]]


def build_repository(settings: Settings) -> FoodLogRepository:
    """Create the food log repository for the configured backend."""
    if settings.storage_backend == "supabase":
        url, key = require_supabase_credentials(settings)
        return SupabaseFoodLogRepository(create_client(url, key))
    if settings.storage_backend == "memory":
        return InMemoryFoodLogRepository()
    return JsonFileFoodLogRepository(Path(settings.storage_dir))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    food_log_store = FoodLogStore(
        repository=build_repository(resolved_settings),
        record_name=resolved_settings.food_log_record_name,
    )
    food_log_store.load()
    edamam_client = HttpxEdamamClient.create(
        app_id=resolved_settings.edamam_app_id,
        app_key=resolved_settings.edamam_app_key,
        base_url=resolved_settings.edamam_base_url,
    )
    catalog_service = FoodCatalogService(
        client=edamam_client,
        cache=InMemoryCache(),
        search_ttl_seconds=resolved_settings.search_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )
    stats_service = StatsService(
        store=food_log_store,
        daily_calorie_target=resolved_settings.daily_calorie_target,
    )

    async def close_resources() -> None:
        await edamam_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_log_store=food_log_store,
        catalog_service=catalog_service,
        stats_service=stats_service,
        today=date.today,
        close_resources=close_resources,
    )
