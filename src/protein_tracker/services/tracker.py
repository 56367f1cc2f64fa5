"""Entry point for working with a user's current day."""

from dataclasses import dataclass, field
from uuid import UUID

from protein_tracker.services.daily_logs import DailyLogService
from protein_tracker.services.entries import (
    EntryLedger,
    FoodEntryRepository,
    SuggestionCache,
)


@dataclass
class TrackerService:
    """Opens today's ledger for a user after reconciling the daily log."""

    daily_log_service: DailyLogService
    entry_repository: FoodEntryRepository
    default_goal: float
    suggestions: SuggestionCache = field(default_factory=SuggestionCache)

    def open_ledger(self, user_id: UUID, timezone_name: str) -> EntryLedger:
        """Reconcile today's log and return a ledger over its entries."""
        snapshot = self.daily_log_service.load_today(
            user_id, timezone_name, self.default_goal
        )
        return EntryLedger(
            repository=self.entry_repository,
            log=snapshot.log,
            entries=list(snapshot.entries),
            suggestions=self.suggestions,
        )

    def remember_suggestion(
        self, user_id: UUID, timezone_name: str, text: str
    ) -> None:
        """Keep the latest suggestion for the user's current local day."""
        day = self.daily_log_service.today(timezone_name)
        self.suggestions.put(user_id, day, text)
