"""Tests for the OpenAI suggestion adapter."""

import asyncio

import pytest

from protein_tracker.adapters.openai_suggestion_client import OpenAISuggestionClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "Try a tuna wrap.") -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_suggestion_client_returns_output_text() -> None:
    fake = _FakeOpenAI()
    client = OpenAISuggestionClient(client=fake)

    text = asyncio.run(
        client.complete(
            model="gpt-4.1-mini",
            prompt="Suggest a snack",
            max_output_tokens=500,
            store=False,
        )
    )

    assert text == "Try a tuna wrap."
    assert fake.responses.last_payload == {
        "model": "gpt-4.1-mini",
        "input": [{"role": "user", "content": "Suggest a snack"}],
        "max_output_tokens": 500,
        "store": False,
    }


def test_openai_suggestion_client_rejects_empty_output() -> None:
    client = OpenAISuggestionClient(client=_FakeOpenAI(output_text=""))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.complete(
                model="gpt-4.1-mini",
                prompt="Suggest a snack",
                max_output_tokens=500,
                store=False,
            )
        )


def test_create_disables_sdk_retries() -> None:
    client = OpenAISuggestionClient.create(api_key="openai-key", timeout_seconds=15)

    assert client.client.max_retries == 0
    asyncio.run(client.close())
