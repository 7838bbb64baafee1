"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, and the health endpoint. The module-level ``app`` instance
allows ``uvicorn voicerecap.api.app:app --reload``.

The session registry and recording controller live on ``app.state``;
each application instance owns its own sessions.
"""

from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from voicerecap.api import websocket
from voicerecap.api.middleware.error_handler import register_error_handlers
from voicerecap.api.routes import recording
from voicerecap.core.config import Settings, get_settings
from voicerecap.core.logging_setup import configure_logging
from voicerecap.core.models import HealthResponse
from voicerecap.services.llm import create_llm
from voicerecap.services.recording import RecordingController
from voicerecap.services.sessions import SessionRegistry
from voicerecap.services.summarization import TranscriptSummarizer


def build_controller(settings: Settings) -> RecordingController:
    """Wire a controller to a fresh registry and the configured LLM provider."""
    llm = create_llm(provider=settings.llm_provider)
    return RecordingController(
        registry=SessionRegistry(),
        summarizer=TranscriptSummarizer(llm),
        webview_base_url=settings.webview_base_url,
    )


def create_app(controller: RecordingController | None = None) -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Args:
        controller: Pre-built controller (tests inject one with a mock LLM).
            When omitted, one is built from settings at startup.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "controller", None) is None:
            app.state.controller = build_controller(settings)
        yield

    app = FastAPI(
        title="VoiceRecap",
        description="Per-session voice recording with one-line LLM summaries.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.controller = controller

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health(request: Request) -> HealthResponse:
        controller = request.app.state.controller
        return HealthResponse(
            timestamp=datetime.now(UTC),
            active_sessions=len(controller.registry) if controller is not None else 0,
        )

    # -- REST routes --
    app.include_router(recording.router, prefix="/api")

    # -- WebSocket --
    app.include_router(websocket.router)

    return app


app = create_app()
