"""Daily log reconciliation by the user's local calendar day."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from protein_tracker.domain.errors import StoreError
from protein_tracker.domain.logs import DailyLog, DailySnapshot, FoodEntry

_logger = logging.getLogger(__name__)


class DailyLogRepository(Protocol):
    """Persistence interface for daily logs and their entries."""

    def upsert_daily_log(
        self, user_id: UUID, day: date, goal_protein: float
    ) -> DailyLog:
        """Insert the (user, day) log if missing and return the stored row."""

    def list_entries_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodEntry]:
        """Return entries created in [start, end), most recent first."""

    def reassign_entries(
        self, user_id: UUID, entry_ids: list[UUID], daily_log_id: UUID
    ) -> None:
        """Point the given entries at another daily log."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def local_day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the UTC instants where the local day starts and the next begins."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


@dataclass
class DailyLogService:
    """Resolves today's log and repairs entries attached to the wrong day."""

    repository: DailyLogRepository
    clock: Callable[[], datetime] = field(default=_utc_now)

    def today(self, timezone_name: str) -> date:
        """Return the current calendar date in the given timezone."""
        return self.clock().astimezone(ZoneInfo(timezone_name)).date()

    def load_today(
        self, user_id: UUID, timezone_name: str, default_goal: float
    ) -> DailySnapshot:
        """Upsert today's log, fetch its entries and fix drifted ones."""
        tz = ZoneInfo(timezone_name)
        day = self.today(timezone_name)
        start, end = local_day_bounds(day, tz)

        try:
            log = self.repository.upsert_daily_log(user_id, day, default_goal)
            candidates = self.repository.list_entries_between(user_id, start, end)
        except Exception as exc:
            _logger.exception(
                "Failed to load daily log",
                extra={"user_id": str(user_id), "day": day.isoformat()},
            )
            raise StoreError("Error loading your data.") from exc

        entries = [
            entry
            for entry in candidates
            if entry.created_at.astimezone(tz).date() == day
        ]
        drifted = [entry for entry in entries if entry.daily_log_id != log.id]
        if not drifted:
            return DailySnapshot(log=log, entries=entries, repaired=0)

        try:
            self.repository.reassign_entries(
                user_id, [entry.id for entry in drifted], log.id
            )
        except Exception:
            _logger.exception(
                "Failed to repair drifted entries",
                extra={"user_id": str(user_id), "count": len(drifted)},
            )
            return DailySnapshot(log=log, entries=entries, repaired=0)

        _logger.info(
            "Repaired %s drifted entries for daily log %s", len(drifted), log.id
        )
        repaired_ids = {entry.id for entry in drifted}
        corrected = [
            _with_log(entry, log.id) if entry.id in repaired_ids else entry
            for entry in entries
        ]
        return DailySnapshot(log=log, entries=corrected, repaired=len(drifted))


def _with_log(entry: FoodEntry, daily_log_id: UUID) -> FoodEntry:
    return FoodEntry(
        id=entry.id,
        user_id=entry.user_id,
        daily_log_id=daily_log_id,
        food_name=entry.food_name,
        protein_grams=entry.protein_grams,
        meal_time=entry.meal_time,
        created_at=entry.created_at,
    )
