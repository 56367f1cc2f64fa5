"""Domain models for daily logs and food entries."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class MealTime(Enum):
    """Meal slot a food entry is logged under."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    OTHER = "other"


@dataclass(frozen=True)
class DailyLog:
    """One log per user per local calendar day."""

    id: UUID
    user_id: UUID
    date: date
    goal_protein: float


@dataclass(frozen=True)
class FoodEntry:
    """A logged food item with its protein content."""

    id: UUID
    user_id: UUID
    daily_log_id: UUID
    food_name: str
    protein_grams: float
    meal_time: MealTime
    created_at: datetime


@dataclass(frozen=True)
class NewFoodEntry:
    """Validated input for a food entry that has not been stored yet."""

    food_name: str
    protein_grams: float
    meal_time: MealTime


@dataclass(frozen=True)
class DailySnapshot:
    """Today's log with the entries that belong to it."""

    log: DailyLog
    entries: list[FoodEntry]
    repaired: int
