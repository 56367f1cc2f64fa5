"""Shared test fixtures."""

import asyncio
import threading
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from protein_tracker.adapters.supabase_auth_client import AuthClient
from protein_tracker.config import Settings
from protein_tracker.containers import AppContainer
from protein_tracker.domain.logs import DailyLog, FoodEntry, MealTime, NewFoodEntry
from protein_tracker.services.daily_logs import DailyLogRepository, DailyLogService
from protein_tracker.services.entries import FoodEntryRepository
from protein_tracker.services.rate_limit import SlidingWindowRateLimiter
from protein_tracker.services.suggestions import SuggestionClient, SuggestionService
from protein_tracker.services.tracker import TrackerService

USER_ID = UUID("8f14e45f-ceea-467f-a0e6-1d4f6a3c2b11")
TOKEN = "valid-token"


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class ManualTimer:
    """Monotonic-style clock in seconds for the rate limiter."""

    value: float = 0.0

    def __call__(self) -> float:
        return self.value


@dataclass
class InMemoryStore(DailyLogRepository, FoodEntryRepository):
    """In-memory daily_logs and food_entries tables for tests."""

    logs: dict[tuple[UUID, date], DailyLog] = field(default_factory=dict)
    entries: dict[UUID, FoodEntry] = field(default_factory=dict)
    clock: FixedClock | None = None
    reassign_calls: list[list[UUID]] = field(default_factory=list)
    fail_upsert: bool = False
    fail_list: bool = False
    fail_reassign: bool = False
    fail_create: bool = False
    fail_delete: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def upsert_daily_log(
        self, user_id: UUID, day: date, goal_protein: float
    ) -> DailyLog:
        if self.fail_upsert:
            raise RuntimeError("upsert failed")
        with self._lock:
            key = (user_id, day)
            if key not in self.logs:
                self.logs[key] = DailyLog(
                    id=uuid4(), user_id=user_id, date=day, goal_protein=goal_protein
                )
            return self.logs[key]

    def list_entries_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodEntry]:
        if self.fail_list:
            raise RuntimeError("select failed")
        rows = [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and start <= entry.created_at < end
        ]
        return sorted(rows, key=lambda entry: entry.created_at, reverse=True)

    def reassign_entries(
        self, user_id: UUID, entry_ids: list[UUID], daily_log_id: UUID
    ) -> None:
        if self.fail_reassign:
            raise RuntimeError("update failed")
        self.reassign_calls.append(list(entry_ids))
        for entry_id in entry_ids:
            entry = self.entries[entry_id]
            if entry.user_id != user_id:
                continue
            self.entries[entry_id] = FoodEntry(
                id=entry.id,
                user_id=entry.user_id,
                daily_log_id=daily_log_id,
                food_name=entry.food_name,
                protein_grams=entry.protein_grams,
                meal_time=entry.meal_time,
                created_at=entry.created_at,
            )

    def create_entry(
        self, user_id: UUID, daily_log_id: UUID, entry: NewFoodEntry
    ) -> FoodEntry:
        if self.fail_create:
            raise RuntimeError("insert failed")
        created = FoodEntry(
            id=uuid4(),
            user_id=user_id,
            daily_log_id=daily_log_id,
            food_name=entry.food_name,
            protein_grams=entry.protein_grams,
            meal_time=entry.meal_time,
            created_at=self.clock() if self.clock else datetime.now(tz=UTC),
        )
        self.entries[created.id] = created
        return created

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        if self.fail_delete:
            raise RuntimeError("delete failed")
        entry = self.entries.get(entry_id)
        if entry and entry.user_id == user_id:
            del self.entries[entry_id]

    def seed_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        daily_log_id: UUID,
        created_at: datetime,
        food_name: str = "Chicken breast",
        protein_grams: float = 30.0,
        meal_time: MealTime = MealTime.LUNCH,
    ) -> FoodEntry:
        entry = FoodEntry(
            id=uuid4(),
            user_id=user_id,
            daily_log_id=daily_log_id,
            food_name=food_name,
            protein_grams=protein_grams,
            meal_time=meal_time,
            created_at=created_at,
        )
        self.entries[entry.id] = entry
        return entry


@dataclass
class FakeSuggestionClient(SuggestionClient):
    """Fake provider that records prompts."""

    text: str = "Have a cup of Greek yogurt (about 20g protein); it is quick."
    error: Exception | None = None
    delay_seconds: float = 0.0
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self, *, model: str, prompt: str, max_output_tokens: int, store: bool
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "max_output_tokens": max_output_tokens,
                "store": store,
            }
        )
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return self.text


@dataclass
class FakeAuthClient(AuthClient):
    """Fake auth client with a static token table."""

    tokens: dict[str, UUID] = field(default_factory=lambda: {TOKEN: USER_ID})

    def get_user_id(self, access_token: str) -> UUID | None:
        return self.tokens.get(access_token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        openai_api_key="openai-key",
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def suggestion_client() -> FakeSuggestionClient:
    return FakeSuggestionClient()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryStore,
    suggestion_client: FakeSuggestionClient,
) -> AppContainer:
    tracker_service = TrackerService(
        daily_log_service=DailyLogService(store),
        entry_repository=store,
        default_goal=settings.default_goal_protein,
    )
    suggestion_service = SuggestionService(
        client=suggestion_client,
        rate_limiter=SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        model=settings.openai_model,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_client=FakeAuthClient(),
        tracker_service=tracker_service,
        suggestion_service=suggestion_service,
        close_resources=close_resources,
    )
