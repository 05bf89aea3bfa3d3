"""Shared fixtures: settings and HTTP clients backed by mock transports."""

import httpx
import pytest

from src.fakecall.config import Settings

GEMINI_BASE = "https://gemini.test"
ELEVENLABS_BASE = "https://elevenlabs.test"


@pytest.fixture
def settings():
    """Settings with fake credentials and test base URLs."""
    return Settings(
        gemini_api_key="gemini-secret-key",
        elevenlabs_api_key="eleven-secret-key",
        gemini_api_url=GEMINI_BASE,
        elevenlabs_api_url=ELEVENLABS_BASE,
        conversation_timeout=10.0,
    )


@pytest.fixture
def make_client():
    """Factory for AsyncClients whose requests are answered by a handler."""
    def factory(handler, base_url: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=base_url)
    return factory
