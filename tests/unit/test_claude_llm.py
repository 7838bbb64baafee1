"""Unit tests for ClaudeLLM provider."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import pytest

from voicerecap.services.llm.base import SUMMARY_SYSTEM_PROMPT
from voicerecap.services.llm.claude import ClaudeLLM


def _message(*blocks, stop_reason="end_turn"):
    """Minimal stand-in for ``anthropic.types.Message``."""
    return SimpleNamespace(content=list(blocks), stop_reason=stop_reason)


def _text(text: str):
    return SimpleNamespace(type="text", text=text)


def _status_error(cls, status_code: int):
    return cls(
        message=f"HTTP {status_code}",
        response=MagicMock(status_code=status_code, headers={}),
        body=None,
    )


@pytest.fixture
def settings():
    return SimpleNamespace(
        claude_api_key="sk-test-key",
        claude_model="claude-sonnet-4-20250514",
        summary_max_tokens=96,
    )


@pytest.fixture
def client():
    """Mocked ``AsyncAnthropic`` instance."""
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=_message(_text("Planned the trip")))
    return client


@pytest.fixture
def llm(settings, client):
    with (
        patch("voicerecap.services.llm.claude.get_settings", return_value=settings),
        patch("voicerecap.services.llm.claude.AsyncAnthropic", return_value=client),
    ):
        yield ClaudeLLM()


class TestClaudeLLMInit:
    def test_sdk_retries_disabled(self, settings):
        with (
            patch("voicerecap.services.llm.claude.get_settings", return_value=settings),
            patch("voicerecap.services.llm.claude.AsyncAnthropic") as client_cls,
        ):
            llm = ClaudeLLM(timeout=5.0)

        client_cls.assert_called_once_with(api_key="sk-test-key", timeout=5.0, max_retries=0)
        assert llm._max_tokens == 96

    def test_token_cap_override(self, settings):
        with (
            patch("voicerecap.services.llm.claude.get_settings", return_value=settings),
            patch("voicerecap.services.llm.claude.AsyncAnthropic"),
        ):
            llm = ClaudeLLM(model="claude-haiku-4-5", max_tokens=24)

        assert llm._model == "claude-haiku-4-5"
        assert llm._max_tokens == 24


class TestGenerate:
    async def test_request_shape(self, llm, client):
        result = await llm.generate("Transcript: hi")

        assert result == "Planned the trip"
        kwargs = client.messages.create.await_args.kwargs
        assert kwargs["system"] == SUMMARY_SYSTEM_PROMPT
        assert kwargs["messages"] == [{"role": "user", "content": "Transcript: hi"}]
        assert kwargs["max_tokens"] == 96

    async def test_joins_text_blocks_only(self, llm, client):
        client.messages.create.return_value = _message(
            SimpleNamespace(type="thinking", thinking="..."),
            _text("Booked "),
            _text("flights"),
        )

        assert await llm.generate("prompt") == "Booked flights"

    async def test_empty_output_raises(self, llm, client):
        client.messages.create.return_value = _message(stop_reason="max_tokens")

        with pytest.raises(RuntimeError, match="stop_reason=max_tokens"):
            await llm.generate("prompt")


class TestErrorTranslation:
    async def test_timeout(self, llm, client):
        client.messages.create.side_effect = anthropic.APITimeoutError(request=MagicMock())

        with pytest.raises(TimeoutError):
            await llm.generate("prompt")
        assert client.messages.create.await_count == 3

    async def test_overloaded_then_recovers(self, llm, client):
        client.messages.create.side_effect = [
            _status_error(anthropic.InternalServerError, 529),
            _message(_text("Second try")),
        ]

        assert await llm.generate("prompt") == "Second try"

    async def test_rate_limit_is_transient(self, llm, client):
        client.messages.create.side_effect = _status_error(anthropic.RateLimitError, 429)

        with pytest.raises(ConnectionError, match="429"):
            await llm.generate("prompt")

    async def test_auth_error_not_retried(self, llm, client):
        client.messages.create.side_effect = _status_error(anthropic.AuthenticationError, 401)

        with pytest.raises(RuntimeError, match="rejected"):
            await llm.generate("prompt")
        assert client.messages.create.await_count == 1
