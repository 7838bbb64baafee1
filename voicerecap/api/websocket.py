"""WebSocket device transport.

The device (e.g. smart glasses companion) connects once per session and
streams speech-engine updates as JSON. The server pushes single-line
display notices back over the same socket.

Protocol:
    - Client sends: ``{"type": "transcription", "data": {"text": ..., "is_final": ...}}``
    - Server sends: ``{"type": "connected" | "display" | "error", "data": {...}}``

Connect and disconnect are forwarded to ``RecordingController.on_connect``
and ``on_disconnect``; transcription messages are dispatched to the
session's feed subscribers.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from voicerecap.api.deps import ControllerDep
from voicerecap.core.models import TranscriptionEvent, WebSocketMessage, WebSocketMessageType
from voicerecap.services.sessions import SessionHandle

logger = logging.getLogger(__name__)

router = APIRouter()


class WebSocketSessionHandle(SessionHandle):
    """Session handle backed by one device WebSocket."""

    def __init__(self, session_id: str, websocket: WebSocket) -> None:
        super().__init__(session_id)
        self._websocket = websocket

    async def send(self, msg_type: WebSocketMessageType, data: dict) -> None:
        msg = WebSocketMessage(type=msg_type, data=data)
        await self._websocket.send_json(msg.model_dump(mode="json"))

    async def show_text(self, text: str) -> None:
        await self.send(WebSocketMessageType.display, {"text": text})

    async def handle_raw(self, raw: str) -> None:
        """Parse one client message and feed it to subscribers.

        Malformed or unsupported messages are answered with an error
        message; the connection stays open.
        """
        try:
            msg = WebSocketMessage.model_validate_json(raw)
            if msg.type != WebSocketMessageType.transcription:
                await self.send(
                    WebSocketMessageType.error,
                    {"detail": f"Unsupported message type: {msg.type}"},
                )
                return
            event = TranscriptionEvent.model_validate(msg.data)
        except ValidationError as exc:
            self.logger.warning("Invalid message from device: %s", exc.errors()[:1])
            await self.send(WebSocketMessageType.error, {"detail": "Invalid message"})
            return

        self.dispatch_transcription(event)


@router.websocket("/ws/session")
async def session_ws(
    websocket: WebSocket,
    session_id: Annotated[str, Query(alias="sessionId", min_length=1)],
    controller: ControllerDep,
) -> None:
    """Device connection for one session.

    Query params:
        sessionId: Externally assigned session id, stable for the connection.
    """
    await websocket.accept()
    logger.info("Device WebSocket connected for session %s", session_id)

    handle = WebSocketSessionHandle(session_id, websocket)
    await handle.send(WebSocketMessageType.connected, {"session_id": session_id})
    await controller.on_connect(session_id, handle)

    reason = "server closed"
    try:
        while True:
            raw = await websocket.receive_text()
            await handle.handle_raw(raw)
    except WebSocketDisconnect as exc:
        reason = f"client disconnected (code {exc.code})"
    except Exception:
        logger.exception("Error on device WebSocket for session %s", session_id)
        reason = "transport error"
    finally:
        controller.on_disconnect(session_id, reason, handle)
