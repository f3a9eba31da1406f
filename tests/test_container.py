"""Tests for container wiring."""

import asyncio
from pathlib import Path

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import build_container
from tests.conftest import make_entry


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.food_log_store.snapshot() == {}
    assert container.stats_service.store is container.food_log_store
    assert container.stats_service.daily_calorie_target == 2500
    asyncio.run(container.close_resources())


def test_file_backend_restores_previous_session(
    settings: Settings, tmp_path: Path
) -> None:
    file_settings = settings.model_copy(
        update={"storage_backend": "file", "storage_dir": str(tmp_path)}
    )
    first = build_container(file_settings)
    first.food_log_store.add_food_item("2024-05-01", "lunch", make_entry())
    asyncio.run(first.close_resources())

    second = build_container(file_settings)

    assert second.food_log_store.get_meal("2024-05-01", "lunch") == (make_entry(),)
    asyncio.run(second.close_resources())


def test_supabase_backend_requires_credentials(settings: Settings) -> None:
    supabase_settings = settings.model_copy(update={"storage_backend": "supabase"})

    with pytest.raises(ValueError):
        build_container(supabase_settings)
