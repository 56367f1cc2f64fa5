"""OpenAI Responses API client for meal suggestions."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from protein_tracker.services.suggestions import SuggestionClient


@dataclass
class OpenAISuggestionClient(SuggestionClient):
    """Suggestion client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAISuggestionClient":
        """Create a client that fails fast instead of retrying."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=timeout_seconds, max_retries=0
            )
        )

    async def complete(
        self, *, model: str, prompt: str, max_output_tokens: int, store: bool
    ) -> str:
        """Call OpenAI Responses API and return the output text."""
        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": prompt}],
            max_output_tokens=max_output_tokens,
            store=store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
