"""
Pydantic v2 request / response models used across the API layer.

Covers health, recording control responses, device WebSocket messages,
and the error envelope.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime
    active_sessions: int = 0


# ---------------------------------------------------------------------------
# Recording control
# ---------------------------------------------------------------------------


class StartRecordingResponse(BaseModel):
    """POST /api/start response."""

    success: bool = True


class StopRecordingResponse(BaseModel):
    """POST /api/stop and POST /api/summary/retry response."""

    success: bool = True
    summary: str


class RecordingStatusResponse(BaseModel):
    """GET /api/status response describing one session's recording state."""

    session_id: str
    is_recording: bool
    transcript: str = ""
    last_summary: str | None = None
    can_retry: bool = False


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscriptionEvent(BaseModel):
    """One update from the upstream speech engine.

    Interim updates (``is_final=False``) may still be corrected by the
    engine and are never stored.
    """

    text: str
    is_final: bool = False


# ---------------------------------------------------------------------------
# WebSocket
# ---------------------------------------------------------------------------


class WebSocketMessageType(StrEnum):
    """Message types exchanged over the device WebSocket."""

    connected = "connected"
    transcription = "transcription"
    display = "display"
    error = "error"


class WebSocketMessage(BaseModel):
    """JSON message exchanged between the device and the server."""

    type: WebSocketMessageType
    data: dict = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error envelope returned by the API."""

    error: str
    code: str
    timestamp: str
