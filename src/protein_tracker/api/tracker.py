"""Endpoints for today's protein log."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from protein_tracker.api.dependencies import get_container, require_user, user_timezone
from protein_tracker.api.models import AddEntryRequest  # noqa: TC001

if TYPE_CHECKING:
    from protein_tracker.domain.logs import DailyLog, FoodEntry
    from protein_tracker.domain.progress import ProteinProgress

router = APIRouter(prefix="/api", tags=["tracker"])


@router.get("/today")
def today(
    request: Request,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(user_timezone),
) -> dict[str, object]:
    """Return today's log, its entries and progress toward the goal."""
    ledger = get_container(request).tracker_service.open_ledger(user_id, timezone_name)
    return {
        "log": _log_payload(ledger.log),
        "entries": [_entry_payload(entry) for entry in ledger.entries],
        "progress": _progress_payload(ledger.progress),
        "suggestion": ledger.suggestion,
    }


@router.post("/entries", status_code=status.HTTP_201_CREATED)
def add_entry(
    payload: AddEntryRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(user_timezone),
) -> dict[str, object]:
    """Log a food entry on today's log."""
    ledger = get_container(request).tracker_service.open_ledger(user_id, timezone_name)
    entry = ledger.add(payload.food_name, payload.protein_grams, payload.meal_time)
    return {
        "entry": _entry_payload(entry),
        "progress": _progress_payload(ledger.progress),
    }


@router.delete("/entries/{entry_id}")
def delete_entry(
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(user_timezone),
) -> dict[str, object]:
    """Delete one of today's entries."""
    ledger = get_container(request).tracker_service.open_ledger(user_id, timezone_name)
    ledger.delete(entry_id)
    return {"deleted": str(entry_id), "progress": _progress_payload(ledger.progress)}


def _log_payload(log: DailyLog) -> dict[str, object]:
    return {
        "id": str(log.id),
        "date": log.date.isoformat(),
        "goal_protein": log.goal_protein,
    }


def _entry_payload(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "daily_log_id": str(entry.daily_log_id),
        "food_name": entry.food_name,
        "protein_grams": entry.protein_grams,
        "meal_time": entry.meal_time.value,
        "created_at": entry.created_at.isoformat(),
    }


def _progress_payload(progress: ProteinProgress) -> dict[str, object]:
    return {
        "goal": progress.goal,
        "total": round(progress.total, 1),
        "remaining": round(progress.remaining, 1),
        "percent": round(progress.percent, 1),
        "goal_reached": progress.goal_reached,
    }
