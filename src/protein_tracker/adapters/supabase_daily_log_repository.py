"""Supabase repository for daily logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from protein_tracker.adapters.supabase_food_entry_repository import (
    FOOD_ENTRY_COLUMNS,
    parse_food_entry,
)
from protein_tracker.domain.logs import DailyLog, FoodEntry
from protein_tracker.services.daily_logs import DailyLogRepository


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily logs."""

    client: Client

    def upsert_daily_log(
        self, user_id: UUID, day: date, goal_protein: float
    ) -> DailyLog:
        """Create the (user, day) log if it is missing and return the stored row.

        The insert is ignored on conflict so an existing goal is never
        overwritten; the stored row is then read back.
        """
        response = (
            self.client.table("daily_logs")
            .upsert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "goal_protein": goal_protein,
                },
                on_conflict="user_id,date",
                ignore_duplicates=True,
            )
            .execute()
        )
        if response.data:
            return _parse_log(response.data[0])

        existing = (
            self.client.table("daily_logs")
            .select("id, user_id, date, goal_protein")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not existing.data:
            raise RuntimeError("Failed to upsert daily log")
        return _parse_log(existing.data[0])

    def list_entries_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodEntry]:
        """Return entries created in [start, end), most recent first."""
        response = (
            self.client.table("food_entries")
            .select(FOOD_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_food_entry(row) for row in response.data or []]

    def reassign_entries(
        self, user_id: UUID, entry_ids: list[UUID], daily_log_id: UUID
    ) -> None:
        """Point the given entries at another daily log."""
        if not entry_ids:
            return
        self.client.table("food_entries").update(
            {"daily_log_id": str(daily_log_id)}
        ).in_("id", [str(entry_id) for entry_id in entry_ids]).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_log(row: dict[str, object]) -> DailyLog:
    return DailyLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=date.fromisoformat(str(row["date"])),
        goal_protein=float(row.get("goal_protein") or 0.0),
    )
