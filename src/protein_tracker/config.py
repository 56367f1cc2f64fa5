"""Application configuration."""

import os
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    suggestion_max_output_tokens: int = Field(default=500, gt=0)
    suggestion_timeout_seconds: float = Field(default=15.0, gt=0)
    rate_limit_max_requests: int = Field(default=5, gt=0)
    rate_limit_window_seconds: float = Field(default=3600.0, gt=0)
    default_goal_protein: float = Field(default=120.0, gt=0)
    default_timezone: str = "UTC"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def is_valid_timezone(value: str) -> bool:
    """Return True when the value names a known IANA timezone."""
    if not value:
        return False
    try:
        ZoneInfo(value)
    except Exception:
        return False
    return True
