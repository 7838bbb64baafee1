"""
Recording control endpoints used by the webview.

Thin wrappers around ``RecordingController``; domain errors propagate to
the global handlers, which map them to 404 / 400 / 500 envelopes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from voicerecap.api.deps import ControllerDep
from voicerecap.core.models import (
    RecordingStatusResponse,
    StartRecordingResponse,
    StopRecordingResponse,
)
from voicerecap.services.sessions import RecordingState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recording"])

SessionId = Annotated[str, Query(alias="sessionId", min_length=1)]


def _to_response(session_id: str, state: RecordingState) -> RecordingStatusResponse:
    return RecordingStatusResponse(
        session_id=session_id,
        is_recording=state.is_recording,
        transcript=state.transcript,
        last_summary=state.last_summary,
        can_retry=state.last_transcript is not None,
    )


@router.post("/start", response_model=StartRecordingResponse)
async def start_recording(session_id: SessionId, controller: ControllerDep):
    """Start (or restart) recording for a connected session."""
    await controller.start(session_id)
    return StartRecordingResponse()


@router.post("/stop", response_model=StopRecordingResponse)
async def stop_recording(session_id: SessionId, controller: ControllerDep):
    """Stop recording and return the one-line summary."""
    summary = await controller.stop(session_id)
    logger.info("Session %s summarized: %s", session_id, summary)
    return StopRecordingResponse(summary=summary)


@router.post("/summary/retry", response_model=StopRecordingResponse)
async def retry_summary(session_id: SessionId, controller: ControllerDep):
    """Re-summarize the transcript captured by the last stop."""
    summary = await controller.retry_summary(session_id)
    return StopRecordingResponse(summary=summary)


@router.get("/status", response_model=RecordingStatusResponse)
async def recording_status(session_id: SessionId, controller: ControllerDep):
    """Report whether the session is recording and what has been captured."""
    return _to_response(session_id, controller.status(session_id))
