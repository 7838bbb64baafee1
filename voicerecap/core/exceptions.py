"""
VoiceRecap exception hierarchy.

All application-specific exceptions inherit from VoiceRecapError,
enabling centralized error handling in the API middleware layer.
Every error is scoped to a single session request; none is fatal.
"""

from datetime import UTC, datetime


class VoiceRecapError(Exception):
    """Base exception for all VoiceRecap errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICERECAP_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class SessionNotFoundError(VoiceRecapError):
    """Raised when a request references a session with no live record."""

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id
        super().__init__(
            detail="Session not found",
            code="SESSION_NOT_FOUND",
            status_code=404,
        )


class NotRecordingError(VoiceRecapError):
    """Raised when stop is requested while the session is idle."""

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id
        super().__init__(
            detail="Not recording",
            code="NOT_RECORDING",
            status_code=400,
        )


class SummarizationFailedError(VoiceRecapError):
    """Raised when the text-generation call fails for any reason.

    The detail is deliberately generic: provider error shapes and the
    transcript never reach the caller.
    """

    def __init__(self, detail: str = "Failed to generate summary") -> None:
        super().__init__(
            detail=detail,
            code="SUMMARIZATION_FAILED",
            status_code=500,
        )


class NoTranscriptError(VoiceRecapError):
    """Raised when a summary retry is requested but nothing was recorded."""

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id
        super().__init__(
            detail="No transcript to summarize",
            code="NO_TRANSCRIPT",
            status_code=404,
        )
