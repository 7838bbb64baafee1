"""
Process-wide session registry.

Maps session ids to their device handle and recording state. The registry
is owned by the application instance (``app.state``), not a module global,
so every test can build its own.

Record and state are stored in one ``SessionEntry``: adding or removing an
entry is a single dict operation, so there is never a moment where one
exists without the other.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from voicerecap.core.models import TranscriptionEvent
from voicerecap.services.sessions.handle import SessionHandle, Unsubscribe

logger = logging.getLogger(__name__)

TranscriptionListener = Callable[[str, TranscriptionEvent], None]


@dataclass
class RecordingState:
    """Recording flag and accumulated text for one session."""

    is_recording: bool = False
    transcript: str = ""
    last_transcript: str | None = None
    last_summary: str | None = None


@dataclass
class SessionEntry:
    """A live session: its handle, recording state and feed subscription."""

    handle: SessionHandle
    state: RecordingState = field(default_factory=RecordingState)
    unsubscribe: Unsubscribe | None = None


class SessionRegistry:
    """Tracks connected sessions and tears their state down on disconnect."""

    def __init__(self) -> None:
        self._entries: dict[str, SessionEntry] = {}

    def on_connect(
        self,
        session_id: str,
        handle: SessionHandle,
        listener: TranscriptionListener | None = None,
    ) -> RecordingState:
        """Register a session with a fresh recording state.

        A second connect for the same id replaces the previous entry; the
        old handle's feed subscription is cancelled first so stale events
        cannot reach the new state.

        Args:
            session_id: Externally assigned session id.
            handle: Device capability for display and transcription events.
            listener: Receives ``(session_id, event)`` for every event on the feed.

        Returns:
            The new session's ``RecordingState``.
        """
        previous = self._entries.pop(session_id, None)
        if previous is not None:
            logger.warning("Session %s reconnected; replacing previous entry", session_id)
            if previous.unsubscribe is not None:
                previous.unsubscribe()

        entry = SessionEntry(handle=handle)
        if listener is not None:
            entry.unsubscribe = handle.subscribe_transcription(
                lambda event: listener(session_id, event)
            )
        self._entries[session_id] = entry
        logger.info("Session %s connected (%d active)", session_id, len(self._entries))
        return entry.state

    def on_disconnect(
        self,
        session_id: str,
        reason: str | None = None,
        handle: SessionHandle | None = None,
    ) -> None:
        """Remove a session's record and state together. Unknown ids are ignored.

        When ``handle`` is given, the entry is only removed if it still belongs
        to that handle, so a late disconnect from a replaced connection cannot
        tear down its successor.
        """
        entry = self._entries.get(session_id)
        if entry is None:
            logger.debug("Disconnect for unknown session %s ignored", session_id)
            return
        if handle is not None and entry.handle is not handle:
            logger.debug("Stale disconnect for replaced session %s ignored", session_id)
            return
        del self._entries[session_id]
        if entry.unsubscribe is not None:
            entry.unsubscribe()
        logger.info("Session %s disconnected: %s", session_id, reason or "no reason given")

    def lookup(self, session_id: str) -> SessionHandle | None:
        """Return the session's handle, or None if it is not connected."""
        entry = self._entries.get(session_id)
        return entry.handle if entry is not None else None

    def get_state(self, session_id: str) -> RecordingState | None:
        """Return the session's recording state, or None if it is not connected."""
        entry = self._entries.get(session_id)
        return entry.state if entry is not None else None

    def session_ids(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
