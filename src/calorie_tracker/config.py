"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

StorageBackend = Literal["file", "supabase", "memory"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    edamam_app_id: str
    edamam_app_key: str
    edamam_base_url: str = "https://api.edamam.com"
    storage_backend: StorageBackend = "file"
    storage_dir: str = ".data"
    food_log_record_name: str = "food-store"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    daily_calorie_target: float = 2500
    search_debounce_seconds: float = 0.5
    search_cache_ttl_seconds: int = 3600
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def require_supabase_credentials(settings: Settings) -> tuple[str, str]:
    """Return the Supabase URL and key, failing when either is unset."""
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError(
            "storage_backend=supabase requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
        )
    return settings.supabase_url, settings.supabase_service_key
