"""
Abstract base class for LLM providers.

All LLM implementations (Gemini, Claude, Ollama) must implement this
interface, so the summarization wrapper never depends on a vendor SDK.
Providers share the system prompt and the transient-error retry policy
defined here.
"""

from abc import ABC, abstractmethod

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

SUMMARY_SYSTEM_PROMPT = (
    "You summarize short spoken recordings for a head-worn display. "
    "Answer with exactly one line of plain text: no markdown, no quotes, "
    "no preamble, at most 20 words."
)

# Providers raise ConnectionError / TimeoutError only for failures worth retrying
transient_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=16),
    retry=retry_if_exception_type((ConnectionError, TimeoutError)),
    reraise=True,
)


class BaseLLM(ABC):
    """Interface that every LLM provider must implement."""

    @abstractmethod
    async def generate(self, prompt: str, **kwargs) -> str:
        """Generate a short text response.

        Implementations translate SDK failures into ``TimeoutError``,
        ``ConnectionError`` (transient, retryable) or ``RuntimeError``,
        and raise ``RuntimeError`` when the model returns no text.

        Args:
            prompt: The prompt to send to the model.
            **kwargs: ``system`` overrides ``SUMMARY_SYSTEM_PROMPT``;
                ``temperature`` and ``max_tokens`` override provider defaults.

        Returns:
            The model's text response.
        """
