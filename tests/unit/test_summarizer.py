"""Unit tests for TranscriptSummarizer."""

import pytest

from voicerecap.core.exceptions import SummarizationFailedError
from voicerecap.services.summarization import NO_SPEECH_SUMMARY, TranscriptSummarizer


class TestSummarize:
    async def test_returns_trimmed_llm_output(self, summarizer, mock_llm):
        result = await summarizer.summarize("hello there ")

        assert result == "Said hello"
        mock_llm.generate.assert_awaited_once()

    async def test_prompt_embeds_transcript(self, summarizer, mock_llm):
        await summarizer.summarize("we should ship on friday ")

        prompt = mock_llm.generate.await_args.args[0]
        assert "one-line summary" in prompt
        assert "we should ship on friday " in prompt

    @pytest.mark.parametrize("transcript", ["", "   ", " \n\t "])
    async def test_blank_transcript_skips_llm(self, summarizer, mock_llm, transcript):
        result = await summarizer.summarize(transcript)

        assert result == NO_SPEECH_SUMMARY
        mock_llm.generate.assert_not_called()

    async def test_provider_error_is_uniform(self, summarizer, mock_llm):
        mock_llm.generate.side_effect = RuntimeError("Gemini API error: 403 quota project xyz")

        with pytest.raises(SummarizationFailedError) as exc_info:
            await summarizer.summarize("hello ")

        assert exc_info.value.detail == "Failed to generate summary"
        assert "xyz" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    async def test_malformed_response_is_uniform(self, summarizer, mock_llm):
        mock_llm.generate.return_value = None

        with pytest.raises(SummarizationFailedError):
            await summarizer.summarize("hello ")

    async def test_transient_error_retried_once(self, summarizer, mock_llm):
        mock_llm.generate.side_effect = [ConnectionError("reset"), "Recovered"]

        result = await summarizer.summarize("hello ")

        assert result == "Recovered"
        assert mock_llm.generate.await_count == 2

    async def test_persistent_timeout_fails(self, summarizer, mock_llm):
        mock_llm.generate.side_effect = TimeoutError("slow")

        with pytest.raises(SummarizationFailedError):
            await summarizer.summarize("hello ")
        assert mock_llm.generate.await_count == 2


class TestTrySummarize:
    async def test_success_outcome(self, summarizer):
        outcome = await summarizer.try_summarize("hello ")

        assert outcome.ok
        assert outcome.text == "Said hello"
        assert outcome.error is None

    async def test_failure_outcome(self, mock_llm):
        mock_llm.generate.side_effect = RuntimeError("boom")

        outcome = await TranscriptSummarizer(mock_llm).try_summarize("hello ")

        assert not outcome.ok
        assert outcome.text is None
        assert isinstance(outcome.error, SummarizationFailedError)
