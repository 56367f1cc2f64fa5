"""Food entry ledger for a single day."""

import logging
import math
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from protein_tracker.domain.errors import (
    EntryNotFoundError,
    StoreError,
    ValidationError,
)
from protein_tracker.domain.logs import DailyLog, FoodEntry, MealTime, NewFoodEntry
from protein_tracker.domain.progress import ProteinProgress

_logger = logging.getLogger(__name__)


class FoodEntryRepository(Protocol):
    """Persistence interface for food entries."""

    def create_entry(
        self, user_id: UUID, daily_log_id: UUID, entry: NewFoodEntry
    ) -> FoodEntry:
        """Insert a food entry and return the stored row."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a food entry owned by the user."""


def compute_progress(entries: list[FoodEntry], goal: float) -> ProteinProgress:
    """Return total, remaining and percent complete for the entries."""
    total = sum(entry.protein_grams for entry in entries)
    percent = min(100.0, 100.0 * total / goal) if goal > 0 else 100.0
    return ProteinProgress(
        goal=goal,
        total=float(total),
        remaining=max(0.0, goal - total),
        percent=percent,
    )


def parse_new_entry(
    food_name: object, protein_grams: object, meal_time: object = MealTime.SNACK
) -> NewFoodEntry:
    """Validate raw entry input."""
    if not isinstance(food_name, str) or not food_name.strip():
        raise ValidationError("Food name is required.")
    grams = _parse_grams(protein_grams)
    if grams is None:
        raise ValidationError("Protein grams must be a non-negative number.")
    try:
        slot = meal_time if isinstance(meal_time, MealTime) else MealTime(meal_time)
    except ValueError as exc:
        choices = ", ".join(item.value for item in MealTime)
        raise ValidationError(f"Meal time must be one of: {choices}.") from exc
    return NewFoodEntry(
        food_name=food_name.strip(), protein_grams=grams, meal_time=slot
    )


def _parse_grams(raw: object) -> float | None:
    if isinstance(raw, bool):
        return None
    if not isinstance(raw, int | float | str):
        return None
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


class SuggestionCache:
    """Last suggestion per user for their current day, held in process memory.

    Storing a suggestion for a new day drops the user's older days.
    """

    def __init__(self) -> None:
        self._items: dict[UUID, tuple[date, str]] = {}
        self._lock = threading.Lock()

    def get(self, user_id: UUID, day: date) -> str | None:
        """Return the cached suggestion for the user's day, if any."""
        with self._lock:
            item = self._items.get(user_id)
        if item is None or item[0] != day:
            return None
        return item[1]

    def put(self, user_id: UUID, day: date, text: str) -> None:
        """Cache the suggestion for the user's day."""
        with self._lock:
            self._items[user_id] = (day, text)

    def clear(self, user_id: UUID, day: date) -> None:
        """Forget the suggestion for the user's day."""
        with self._lock:
            item = self._items.get(user_id)
            if item is not None and item[0] == day:
                del self._items[user_id]


@dataclass
class EntryLedger:
    """Today's entries, most recent first, with derived progress."""

    repository: FoodEntryRepository
    log: DailyLog
    entries: list[FoodEntry] = field(default_factory=list)
    suggestions: SuggestionCache = field(default_factory=SuggestionCache)

    @property
    def progress(self) -> ProteinProgress:
        """Aggregates recomputed from the current entry list."""
        return compute_progress(self.entries, self.log.goal_protein)

    @property
    def suggestion(self) -> str | None:
        """Suggestion shown for today, cleared whenever intake grows."""
        return self.suggestions.get(self.log.user_id, self.log.date)

    @suggestion.setter
    def suggestion(self, text: str | None) -> None:
        if text is None:
            self.suggestions.clear(self.log.user_id, self.log.date)
        else:
            self.suggestions.put(self.log.user_id, self.log.date, text)

    def add(
        self,
        food_name: object,
        protein_grams: object,
        meal_time: object = MealTime.SNACK,
    ) -> FoodEntry:
        """Validate and store a new entry for today's log."""
        new_entry = parse_new_entry(food_name, protein_grams, meal_time)
        try:
            created = self.repository.create_entry(
                self.log.user_id, self.log.id, new_entry
            )
        except Exception as exc:
            _logger.exception(
                "Failed to add food entry", extra={"daily_log_id": str(self.log.id)}
            )
            raise StoreError("Error adding food.") from exc

        self.entries = [created, *self.entries]
        self.suggestion = None
        return created

    def delete(
        self,
        entry_id: UUID,
        confirm: Callable[[FoodEntry], bool] | None = None,
    ) -> bool:
        """Delete an entry after confirmation. Return False when declined."""
        entry = self.find(entry_id)
        if entry is None:
            raise EntryNotFoundError("Entry not found.")
        if confirm is not None and not confirm(entry):
            return False
        try:
            self.repository.delete_entry(self.log.user_id, entry_id)
        except Exception as exc:
            _logger.exception(
                "Failed to delete food entry", extra={"entry_id": str(entry_id)}
            )
            raise StoreError("Error deleting entry.") from exc

        self.entries = [item for item in self.entries if item.id != entry_id]
        return True

    def find(self, entry_id: UUID) -> FoodEntry | None:
        """Return the entry with the given id, if it is part of today."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None
