"""Integration test fixtures for VoiceRecap.

Provides an async HTTP client and a sync TestClient (for WebSocket) bound
to an application whose controller uses the mock LLM from the root conftest.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from voicerecap.api.app import create_app


@pytest.fixture
def app(controller):
    """Create a fresh FastAPI application around the test controller."""
    return create_app(controller=controller)


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def test_client(app):
    """Synchronous TestClient for WebSocket tests."""
    with TestClient(app) as c:
        yield c
