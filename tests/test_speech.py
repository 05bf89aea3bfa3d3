"""Tests for the ElevenLabs speech relay."""

import json

import httpx
import pytest

from src.fakecall.characters import VOICES, CategoryKey
from src.fakecall.models import UpstreamError
from src.fakecall.speech import SpeechSynthesizer

FAKE_MP3 = b"ID3\x03\x00\x00\x00fake-mpeg-frames\xff\xfb"


def create_synthesizer(settings, make_client, handler):
    return SpeechSynthesizer(settings, client=make_client(handler, settings.elevenlabs_api_url))


@pytest.mark.asyncio
@pytest.mark.parametrize("character,key", [
    ("mom", CategoryKey.MOM),
    ("DAD", CategoryKey.DAD),
    ("Friend", CategoryKey.FRIEND),
    ("uncle", CategoryKey.MOM),
    (None, CategoryKey.MOM),
])
async def test_synthesize_uses_character_voice(settings, make_client, character, key):
    """Test the request goes to the voice matching the character."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, content=FAKE_MP3, headers={"Content-Type": "audio/mpeg"})

    synthesizer = create_synthesizer(settings, make_client, handler)
    result = await synthesizer.synthesize("Hi honey. [Pause 2s]", character)

    assert result.voice_id == VOICES[key]
    assert requests[0].url.path == f"/v1/text-to-speech/{VOICES[key]}"
    await synthesizer.close()


@pytest.mark.asyncio
async def test_synthesize_request_and_passthrough(settings, make_client):
    """Test payload, headers and untouched audio bytes."""
    captured = {}

    def handler(request):
        captured["request"] = request
        return httpx.Response(200, content=FAKE_MP3)

    synthesizer = create_synthesizer(settings, make_client, handler)
    result = await synthesizer.synthesize("Hello there", "dad")

    request = captured["request"]
    assert request.method == "POST"
    assert request.headers["xi-api-key"] == "eleven-secret-key"
    assert json.loads(request.read()) == {
        "text": "Hello there",
        "model_id": "eleven_turbo_v2",
        "voice_settings": {"stability": 0.5, "similarity_boost": 0.5},
    }
    assert result.audio == FAKE_MP3
    assert result.content_type == "audio/mpeg"


@pytest.mark.asyncio
async def test_synthesize_unauthorized(settings, make_client):
    """Test a 401 surfaces as UpstreamError with status and message."""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(
            401, json={"detail": {"status": "invalid_api_key", "message": "Invalid API key"}}
        )

    synthesizer = create_synthesizer(settings, make_client, handler)

    with pytest.raises(UpstreamError) as exc_info:
        await synthesizer.synthesize("Hello", "mom")

    error = exc_info.value
    assert error.status == 401
    assert error.status_text == "Unauthorized"
    assert error.message == "Invalid API key"
    assert error.detail["detail"]["status"] == "invalid_api_key"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_synthesize_network_error(settings, make_client):
    """Test a transport failure raises UpstreamError without a status."""
    def handler(request):
        raise httpx.ConnectError("connection refused")

    synthesizer = create_synthesizer(settings, make_client, handler)

    with pytest.raises(UpstreamError) as exc_info:
        await synthesizer.synthesize("Hello", "mom")

    assert exc_info.value.status is None
    assert exc_info.value.message == "connection refused"
