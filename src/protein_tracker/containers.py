"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from protein_tracker.adapters.openai_suggestion_client import OpenAISuggestionClient
from protein_tracker.adapters.supabase_auth_client import AuthClient, SupabaseAuthClient
from protein_tracker.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from protein_tracker.adapters.supabase_food_entry_repository import (
    SupabaseFoodEntryRepository,
)
from protein_tracker.config import Settings
from protein_tracker.services.daily_logs import DailyLogService
from protein_tracker.services.rate_limit import SlidingWindowRateLimiter
from protein_tracker.services.suggestions import SuggestionService
from protein_tracker.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_client: AuthClient
    tracker_service: TrackerService
    suggestion_service: SuggestionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    daily_log_repository = SupabaseDailyLogRepository(supabase_client)
    food_entry_repository = SupabaseFoodEntryRepository(supabase_client)
    tracker_service = TrackerService(
        daily_log_service=DailyLogService(daily_log_repository),
        entry_repository=food_entry_repository,
        default_goal=resolved_settings.default_goal_protein,
    )
    openai_client = OpenAISuggestionClient.create(
        api_key=resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.suggestion_timeout_seconds,
    )
    suggestion_service = SuggestionService(
        client=openai_client,
        rate_limiter=SlidingWindowRateLimiter(
            max_requests=resolved_settings.rate_limit_max_requests,
            window_seconds=resolved_settings.rate_limit_window_seconds,
        ),
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
        max_output_tokens=resolved_settings.suggestion_max_output_tokens,
        timeout_seconds=resolved_settings.suggestion_timeout_seconds,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_client=SupabaseAuthClient(supabase_client),
        tracker_service=tracker_service,
        suggestion_service=suggestion_service,
        close_resources=close_resources,
    )
