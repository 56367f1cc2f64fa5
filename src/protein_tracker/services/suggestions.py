"""AI meal suggestions for closing the remaining protein gap."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Protocol

from protein_tracker.domain.errors import (
    ProviderError,
    RateLimitError,
    ValidationError,
)
from protein_tracker.services.rate_limit import SlidingWindowRateLimiter

_logger = logging.getLogger(__name__)


class SuggestionClient(Protocol):
    """Interface for a text-completion provider."""

    async def complete(
        self, *, model: str, prompt: str, max_output_tokens: int, store: bool
    ) -> str:
        """Return generated text for the prompt."""


@dataclass(frozen=True)
class EntryRecap:
    """Name and protein of an entry already eaten today."""

    food_name: str
    protein_grams: float


def _finite_number(value: object) -> float | None:
    """Return the value as a finite float, or None for anything else."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_suggestion_request(
    remaining_protein: object, today_entries: object
) -> tuple[float, list[EntryRecap]]:
    """Validate the raw request fields."""
    remaining = _finite_number(remaining_protein)
    if remaining is None or remaining < 0:
        raise ValidationError("Invalid remainingProtein value")
    if not isinstance(today_entries, list):
        raise ValidationError("Invalid todayEntries value")

    recaps = []
    for raw in today_entries:
        if not isinstance(raw, dict):
            raise ValidationError("Invalid todayEntries value")
        name = raw.get("food_name")
        grams = _finite_number(raw.get("protein_grams"))
        if not isinstance(name, str) or grams is None:
            raise ValidationError("Invalid todayEntries value")
        recaps.append(EntryRecap(food_name=name, protein_grams=grams))
    return remaining, recaps


def build_prompt(remaining_protein: float, entries: list[EntryRecap]) -> str:
    """Render the suggestion prompt."""
    entries_context = ""
    if entries:
        lines = "\n".join(
            f"- {entry.food_name} ({entry.protein_grams:g}g protein)"
            for entry in entries
        )
        entries_context = f"Today they have eaten:\n{lines}\n\n"
    return (
        "You are a helpful nutrition assistant. A person needs "
        f"{remaining_protein:.1f}g more protein today to reach their daily goal.\n\n"
        f"{entries_context}"
        "Suggest ONE specific, simple meal or snack they can eat right now to help "
        "reach their protein goal. Include:\n"
        "1. The food/meal name\n"
        "2. Approximate protein content\n"
        "3. Why it's a good choice\n\n"
        "Keep it concise (2-3 sentences max) and practical. "
        "Focus on common, easy-to-find foods."
    )


@dataclass
class SuggestionService:
    """Validates, rate limits and forwards suggestion requests."""

    client: SuggestionClient
    rate_limiter: SlidingWindowRateLimiter
    model: str
    store: bool = False
    max_output_tokens: int = 500
    timeout_seconds: float = 15.0

    async def suggest(
        self, caller_id: str, remaining_protein: object, today_entries: object
    ) -> str:
        """Return a short meal suggestion for the caller."""
        remaining, recaps = parse_suggestion_request(remaining_protein, today_entries)

        decision = self.rate_limiter.allow(caller_id)
        if not decision.allowed:
            _logger.warning(
                "Suggestion rate limit hit",
                extra={
                    "caller_id": caller_id,
                    "retry_after": decision.retry_after_seconds,
                },
            )
            raise RateLimitError(retry_after=decision.retry_after_seconds or 1)

        prompt = build_prompt(remaining, recaps)
        try:
            text = await asyncio.wait_for(
                self.client.complete(
                    model=self.model,
                    prompt=prompt,
                    max_output_tokens=self.max_output_tokens,
                    store=self.store,
                ),
                timeout=self.timeout_seconds,
            )
        except Exception as exc:
            _logger.exception(
                "Suggestion provider call failed", extra={"model": self.model}
            )
            raise ProviderError(
                "Failed to generate suggestion. Please try again."
            ) from exc

        suggestion = text.strip() if isinstance(text, str) else ""
        if not suggestion:
            _logger.error("Suggestion provider returned no text")
            raise ProviderError("Failed to generate suggestion. Please try again.")
        return suggestion
