"""Supabase repository for the food log record."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.services.food_log import FoodLogRepository

TABLE_NAME = "food_log_records"


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation storing the log as one named jsonb row."""

    client: Client
    table_name: str = TABLE_NAME

    def load(self, name: str) -> dict[str, object] | None:
        """Return the stored record for name."""
        response = (
            self.client.table(self.table_name)
            .select("payload")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        payload = response.data[0].get("payload")
        if not isinstance(payload, dict):
            return None
        return payload

    def save(self, name: str, record: dict[str, object]) -> None:
        """Upsert the record under name."""
        self.client.table(self.table_name).upsert(
            {
                "name": name,
                "payload": record,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="name",
        ).execute()
