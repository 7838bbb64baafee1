"""
One-line recording summarization service.

Wraps the configured LLM provider: turns an accumulated transcript into a
single-line summary and maps every provider failure onto one uniform
``SummarizationFailedError``.
"""

import logging
from dataclasses import dataclass

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from voicerecap.core.exceptions import SummarizationFailedError
from voicerecap.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

NO_SPEECH_SUMMARY = "No speech detected."

PROMPT_TEMPLATE = (
    "Please provide a one-line summary of the following transcript:\n\n"
    "{transcript}\n\n"
    "One-line summary:"
)


@dataclass(frozen=True)
class SummaryOutcome:
    """Result of a summarization attempt: either ``text`` or ``error`` is set."""

    text: str | None = None
    error: SummarizationFailedError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TranscriptSummarizer:
    """Summarizes a whole recording's transcript into one line."""

    def __init__(self, llm: BaseLLM) -> None:
        """Initialize with the configured LLM provider.

        Args:
            llm: An LLM provider implementing ``BaseLLM``.
        """
        self._llm = llm

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type((ConnectionError, TimeoutError)),
        reraise=True,
    )
    async def _call_llm(self, prompt: str) -> str:
        """Call LLM with retry for transient failures."""
        return await self._llm.generate(prompt)

    async def summarize(self, transcript: str) -> str:
        """Summarize a transcript into a single line.

        Empty or whitespace-only input short-circuits to
        ``NO_SPEECH_SUMMARY`` without calling the LLM.

        Args:
            transcript: Accumulated transcript, possibly with surrounding whitespace.

        Returns:
            The trimmed one-line summary.

        Raises:
            SummarizationFailedError: If the LLM call fails for any reason.
        """
        if not transcript or not transcript.strip():
            return NO_SPEECH_SUMMARY

        prompt = PROMPT_TEMPLATE.format(transcript=transcript)
        try:
            raw_response = await self._call_llm(prompt)
            return raw_response.strip()
        except Exception as exc:
            logger.error("Summary generation failed: %s", exc)
            raise SummarizationFailedError() from exc

    async def try_summarize(self, transcript: str) -> SummaryOutcome:
        """Like ``summarize()`` but returns the failure instead of raising it."""
        try:
            return SummaryOutcome(text=await self.summarize(transcript))
        except SummarizationFailedError as exc:
            return SummaryOutcome(error=exc)
