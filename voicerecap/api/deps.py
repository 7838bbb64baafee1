"""FastAPI dependencies resolving per-application services."""

from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from voicerecap.services.recording import RecordingController


def get_controller(connection: HTTPConnection) -> RecordingController:
    """Return the controller owned by the running application.

    Works for both HTTP requests and WebSocket connections.
    """
    return connection.app.state.controller


ControllerDep = Annotated[RecordingController, Depends(get_controller)]
