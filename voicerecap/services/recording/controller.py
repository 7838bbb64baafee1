"""Recording state machine driven by start/stop requests and the transcription feed.

Each session is either idle or recording. Every state read and write here
is synchronous; the only awaits are display notices and the summarization
call. ``stop`` therefore flips the flag and snapshots the transcript before
it first yields to the event loop, and any fragment dispatched after that
point is excluded from the summary.

Usage::

    controller = RecordingController(SessionRegistry(), TranscriptSummarizer(llm))
    await controller.on_connect("s1", handle)
    await controller.start("s1")
    summary = await controller.stop("s1")
"""

import logging

from voicerecap.core.exceptions import (
    NoTranscriptError,
    NotRecordingError,
    SessionNotFoundError,
)
from voicerecap.core.models import TranscriptionEvent
from voicerecap.services.sessions import RecordingState, SessionHandle, SessionRegistry
from voicerecap.services.summarization import TranscriptSummarizer

logger = logging.getLogger(__name__)

RECORDING_NOTICE = "Recording..."
PROCESSING_NOTICE = "Processing recording..."
ERROR_NOTICE = "Error generating summary"


class RecordingController:
    """Start/stop recording per session and summarize what was heard.

    Args:
        registry: Session registry owned by the host application.
        summarizer: Wrapper around the configured LLM provider.
        webview_base_url: Control page URL announced to the device on connect.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        summarizer: TranscriptSummarizer,
        webview_base_url: str = "http://localhost:3000",
    ) -> None:
        self.registry = registry
        self._summarizer = summarizer
        self._webview_base_url = webview_base_url.rstrip("/")

    # -- Host hooks --------------------------------------------------------

    async def on_connect(self, session_id: str, handle: SessionHandle) -> None:
        """Register a newly connected session and route its feed here."""
        self.registry.on_connect(session_id, handle, self.on_transcription_event)
        await self._show(
            session_id,
            handle,
            f"Open {self._webview_base_url}?sessionId={session_id} to start recording",
        )

    def on_disconnect(
        self,
        session_id: str,
        reason: str | None = None,
        handle: SessionHandle | None = None,
    ) -> None:
        """Tear down a session; any in-flight summary for it is left to finish."""
        self.registry.on_disconnect(session_id, reason, handle)

    # -- Requests ----------------------------------------------------------

    async def start(self, session_id: str) -> None:
        """Begin (or restart) recording with an empty transcript.

        Raises:
            SessionNotFoundError: If the session is not connected.
        """
        handle, state = self._require(session_id)
        state.is_recording = True
        state.transcript = ""
        handle.logger.info("Recording started")
        await self._show(session_id, handle, RECORDING_NOTICE)

    async def stop(self, session_id: str) -> str:
        """Stop recording and summarize the captured transcript.

        Returns:
            The one-line summary.

        Raises:
            SessionNotFoundError: If the session is not connected.
            NotRecordingError: If the session is idle.
            SummarizationFailedError: If the LLM call failed.
        """
        handle, state = self._require(session_id)
        if not state.is_recording:
            raise NotRecordingError(session_id)

        # Must stay free of awaits up to the snapshot.
        state.is_recording = False
        transcript = state.transcript
        state.last_transcript = transcript
        handle.logger.info("Recording stopped (%d chars captured)", len(transcript))

        await self._show(session_id, handle, PROCESSING_NOTICE)
        return await self._summarize(session_id, handle, state, transcript)

    async def retry_summary(self, session_id: str) -> str:
        """Summarize the transcript captured by the last ``stop`` again.

        Raises:
            SessionNotFoundError: If the session is not connected.
            NoTranscriptError: If nothing has been recorded and stopped yet.
            SummarizationFailedError: If the LLM call failed.
        """
        handle, state = self._require(session_id)
        if state.last_transcript is None:
            raise NoTranscriptError(session_id)

        await self._show(session_id, handle, PROCESSING_NOTICE)
        return await self._summarize(session_id, handle, state, state.last_transcript)

    def status(self, session_id: str) -> RecordingState:
        """Return the live recording state of a connected session.

        Raises:
            SessionNotFoundError: If the session is not connected.
        """
        _, state = self._require(session_id)
        return state

    # -- Transcription feed ------------------------------------------------

    def on_transcription_event(self, session_id: str, event: TranscriptionEvent) -> None:
        """Append a final fragment while recording; drop everything else."""
        entry_state = self.registry.get_state(session_id)
        if entry_state is None:
            logger.debug("Dropping fragment for unknown session %s", session_id)
            return
        if not entry_state.is_recording or not event.is_final:
            return

        entry_state.transcript += event.text + " "
        handle = self.registry.lookup(session_id)
        if handle is not None:
            handle.logger.info("Adding transcription: %s", event.text)

    # -- Internals ---------------------------------------------------------

    def _require(self, session_id: str) -> tuple[SessionHandle, RecordingState]:
        handle = self.registry.lookup(session_id)
        state = self.registry.get_state(session_id)
        if handle is None or state is None:
            raise SessionNotFoundError(session_id)
        return handle, state

    async def _summarize(
        self,
        session_id: str,
        handle: SessionHandle,
        state: RecordingState,
        transcript: str,
    ) -> str:
        outcome = await self._summarizer.try_summarize(transcript)
        if not outcome.ok:
            handle.logger.error("Error generating summary")
            await self._show(session_id, handle, ERROR_NOTICE)
            raise outcome.error

        state.last_summary = outcome.text
        await self._show(session_id, handle, f"Summary: {outcome.text}")
        return outcome.text

    async def _show(self, session_id: str, handle: SessionHandle, text: str) -> None:
        """Display a notice if the handle still owns the session.

        Skipped after a disconnect or reconnect; transport failures are
        logged and never propagate into the request.
        """
        if self.registry.lookup(session_id) is not handle:
            logger.debug("Session %s gone; notice not displayed: %s", session_id, text)
            return
        try:
            await handle.show_text(text)
        except Exception:
            logger.warning("Failed to display notice on session %s", session_id, exc_info=True)
