"""Shared pytest fixtures for VoiceRecap test suite.

Provides a mock LLM provider, an in-memory session handle that records
what it displays, and a controller wired to both.
"""

from unittest.mock import AsyncMock

import pytest

from voicerecap.services.llm.base import BaseLLM
from voicerecap.services.recording import RecordingController
from voicerecap.services.sessions import SessionHandle, SessionRegistry
from voicerecap.services.summarization import TranscriptSummarizer

# ---------------------------------------------------------------------------
# Session handle
# ---------------------------------------------------------------------------


class RecordingHandle(SessionHandle):
    """In-memory handle: keeps every displayed line in ``shown``."""

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.shown: list[str] = []

    async def show_text(self, text: str) -> None:
        self.shown.append(text)


@pytest.fixture
def make_handle():
    """Factory for ``RecordingHandle`` instances."""
    return RecordingHandle


# ---------------------------------------------------------------------------
# LLM / summarizer
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm():
    """Create a mock LLM provider returning a fixed one-line summary."""
    llm = AsyncMock(spec=BaseLLM)
    llm.generate.return_value = "  Said hello \n"
    return llm


@pytest.fixture
def summarizer(mock_llm):
    return TranscriptSummarizer(mock_llm)


# ---------------------------------------------------------------------------
# Registry / controller
# ---------------------------------------------------------------------------


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def controller(registry, summarizer):
    """Controller with a fresh registry and the mock LLM."""
    return RecordingController(registry, summarizer, webview_base_url="http://glasses.test")
