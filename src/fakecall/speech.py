"""Text-to-speech relay to ElevenLabs."""

import logging

import httpx

from .characters import resolve_voice_id
from .config import Settings
from .models import SynthesisResult, UpstreamError

logger = logging.getLogger(__name__)


class SpeechSynthesizer:
    """Turns conversation text into audio with a per-character ElevenLabs voice.

    One request per call, no retries, no streaming. The audio payload is
    returned exactly as ElevenLabs sent it.
    """

    MODEL_ID = "eleven_turbo_v2"
    VOICE_SETTINGS = {
        "stability": 0.5,
        "similarity_boost": 0.5,
    }
    CONTENT_TYPE = "audio/mpeg"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the synthesizer.

        Args:
            settings: Application settings. If None, loads from environment.
            client: HTTP client to use. If None, one is created and owned here.
        """
        if settings is None:
            from .config import get_settings
            settings = get_settings()

        self._settings = settings
        self._client = client or httpx.AsyncClient(base_url=settings.elevenlabs_api_url)

    async def synthesize(self, text: str, character: str | None = None) -> SynthesisResult:
        """Convert text to speech in the voice of the given character.

        Args:
            text: The text to speak.
            character: Character name (mom, dad, friend). Unknown or missing
                names use the default voice.

        Returns:
            The raw audio and the voice id used.

        Raises:
            UpstreamError: If ElevenLabs rejects the request or cannot be reached.
        """
        voice_id = resolve_voice_id(character)
        logger.info(f"Synthesizing audio for character {character!r} with voice {voice_id}")

        headers = {
            "xi-api-key": self._settings.elevenlabs_api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "text": text,
            "model_id": self.MODEL_ID,
            "voice_settings": dict(self.VOICE_SETTINGS),
        }

        try:
            response = await self._client.post(
                f"/v1/text-to-speech/{voice_id}", json=payload, headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            error = UpstreamError.from_httpx(e)
            logger.error(
                f"ElevenLabs API error: status={error.status} "
                f"status_text={error.status_text} message={error.message} detail={error.detail}"
            )
            raise error from e

        audio = response.content
        logger.info(f"Audio generated successfully, size: {len(audio)} bytes")
        return SynthesisResult(audio=audio, voice_id=voice_id, content_type=self.CONTENT_TYPE)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
