"""
Claude LLM provider implementation.

Calls the Messages API through ``anthropic.AsyncAnthropic`` with the shared
one-line system prompt and a small output cap. The SDK's own retries are
disabled; ``transient_retry`` handles rate limits, overloads and network
errors instead.
"""

import logging

import anthropic
from anthropic import AsyncAnthropic

from voicerecap.core.config import get_settings
from voicerecap.services.llm.base import SUMMARY_SYSTEM_PROMPT, BaseLLM, transient_retry

logger = logging.getLogger(__name__)


def _translate(exc: anthropic.APIError) -> Exception:
    """Map an Anthropic SDK error onto the provider-neutral exception types."""
    if isinstance(exc, anthropic.APITimeoutError):
        return TimeoutError(f"Claude request timed out: {exc}")
    if isinstance(exc, anthropic.APIConnectionError):
        return ConnectionError(f"Claude unreachable: {exc}")
    if isinstance(exc, (anthropic.RateLimitError, anthropic.InternalServerError)):
        return ConnectionError(f"Claude temporarily unavailable ({exc.status_code})")
    return RuntimeError(f"Claude request rejected: {exc}")


class ClaudeLLM(BaseLLM):
    """Claude provider tuned for single-line answers."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float = 0.2,
        timeout: float = 30.0,
    ) -> None:
        settings = get_settings()
        self._model = model or settings.claude_model
        self._max_tokens = max_tokens or settings.summary_max_tokens
        self._temperature = temperature
        self._client = AsyncAnthropic(
            api_key=api_key or settings.claude_api_key,
            timeout=timeout,
            max_retries=0,
        )

    @transient_retry
    async def generate(self, prompt: str, **kwargs) -> str:
        try:
            response = await self._client.messages.create(
                model=self._model,
                system=kwargs.get("system", SUMMARY_SYSTEM_PROMPT),
                messages=[{"role": "user", "content": prompt}],
                max_tokens=kwargs.get("max_tokens", self._max_tokens),
                temperature=kwargs.get("temperature", self._temperature),
            )
        except anthropic.APIError as exc:
            logger.warning("Claude call failed: %s", exc)
            raise _translate(exc) from exc

        text = "".join(block.text for block in response.content if block.type == "text")
        if not text.strip():
            raise RuntimeError(f"Claude returned no text (stop_reason={response.stop_reason})")
        return text
