"""
Abstract device session handle.

A handle is the capability the host transport hands over on connect: it
displays text on the user's device, exposes a per-session logger, and
delivers the session's transcription feed to subscribers.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from voicerecap.core.models import TranscriptionEvent

TranscriptionCallback = Callable[[TranscriptionEvent], None]
Unsubscribe = Callable[[], None]


class SessionHandle(ABC):
    """Interface that every device transport must implement."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.logger = logging.getLogger(f"voicerecap.session.{session_id}")
        self._subscribers: list[TranscriptionCallback] = []

    @abstractmethod
    async def show_text(self, text: str) -> None:
        """Display a single line of text on the device."""

    def subscribe_transcription(self, callback: TranscriptionCallback) -> Unsubscribe:
        """Register ``callback`` for every transcription event of this session.

        Returns:
            A callable that removes the subscription; calling it twice is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch_transcription(self, event: TranscriptionEvent) -> None:
        """Deliver an event to all current subscribers, in subscription order."""
        for callback in list(self._subscribers):
            callback(event)
