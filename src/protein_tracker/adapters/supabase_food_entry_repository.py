"""Supabase repository for food entries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from protein_tracker.domain.logs import FoodEntry, MealTime, NewFoodEntry
from protein_tracker.services.entries import FoodEntryRepository

FOOD_ENTRY_COLUMNS = (
    "id, user_id, daily_log_id, food_name, protein_grams, meal_time, created_at"
)


@dataclass
class SupabaseFoodEntryRepository(FoodEntryRepository):
    """Supabase implementation for food entries."""

    client: Client

    def create_entry(
        self, user_id: UUID, daily_log_id: UUID, entry: NewFoodEntry
    ) -> FoodEntry:
        """Insert a food entry row and return it."""
        response = (
            self.client.table("food_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "daily_log_id": str(daily_log_id),
                    "food_name": entry.food_name,
                    "protein_grams": entry.protein_grams,
                    "meal_time": entry.meal_time.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return parse_food_entry(response.data[0])

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a food entry owned by the user."""
        self.client.table("food_entries").delete().eq("id", str(entry_id)).eq(
            "user_id", str(user_id)
        ).execute()


def parse_food_entry(row: dict[str, object]) -> FoodEntry:
    """Convert a food_entries row into a domain entry."""
    return FoodEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        daily_log_id=UUID(str(row["daily_log_id"])),
        food_name=str(row.get("food_name", "")),
        protein_grams=float(row.get("protein_grams") or 0.0),
        meal_time=MealTime(row.get("meal_time") or MealTime.OTHER.value),
        created_at=_parse_timestamp(row.get("created_at")),
    )


def _parse_timestamp(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError("food entry row has no created_at")
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
