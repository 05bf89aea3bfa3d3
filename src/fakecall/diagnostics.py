"""Passthrough checks against the upstream providers."""

import logging
from typing import Any

import httpx

from .config import Settings
from .models import UpstreamError

logger = logging.getLogger(__name__)

GENERATE_CONTENT = "generateContent"


def filter_generate_content_models(models: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only models that support generateContent."""
    return [
        model for model in models
        if GENERATE_CONTENT in (model.get("supportedGenerationMethods") or [])
    ]


class Diagnostics:
    """Credential check for ElevenLabs and model listing for Gemini."""

    def __init__(
        self,
        settings: Settings | None = None,
        gemini_client: httpx.AsyncClient | None = None,
        elevenlabs_client: httpx.AsyncClient | None = None,
    ):
        if settings is None:
            from .config import get_settings
            settings = get_settings()

        self._settings = settings
        self._gemini = gemini_client or httpx.AsyncClient(base_url=settings.gemini_api_url)
        self._elevenlabs = elevenlabs_client or httpx.AsyncClient(
            base_url=settings.elevenlabs_api_url
        )

    async def _get_json(self, client: httpx.AsyncClient, path: str, headers: dict[str, str]) -> Any:
        try:
            response = await client.get(path, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamError.from_httpx(e) from e
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                "Upstream returned a non-JSON body",
                status=response.status_code,
                status_text=response.reason_phrase,
                detail=response.text,
            ) from e

    async def check_elevenlabs_key(self) -> dict[str, Any]:
        """Fetch the ElevenLabs account the configured key belongs to.

        Raises:
            UpstreamError: If the key is rejected or the API is unreachable.
        """
        logger.info("Testing ElevenLabs API key")
        try:
            account = await self._get_json(
                self._elevenlabs, "/v1/user", {"xi-api-key": self._settings.elevenlabs_api_key}
            )
        except UpstreamError as e:
            logger.error(f"ElevenLabs API key is invalid: {e.detail}")
            raise
        logger.info("ElevenLabs API key is valid")
        return account

    async def list_gemini_models(self) -> dict[str, Any]:
        """List Gemini models and the subset usable for text generation.

        Returns:
            Dict with ``allModels``, ``generateContentModels`` and
            ``suggestedModels`` (names of the generateContent models).

        Raises:
            UpstreamError: If the listing request fails.
        """
        logger.info("Listing available Gemini models")
        try:
            data = await self._get_json(
                self._gemini, "/v1/models", {"x-goog-api-key": self._settings.gemini_api_key}
            )
        except UpstreamError as e:
            logger.error(f"Error listing models: {e.detail}")
            raise

        listed = (data.get("models") if isinstance(data, dict) else None) or []
        if not isinstance(listed, list):
            listed = []
        models = [model for model in listed if isinstance(model, dict)]
        if len(models) != len(listed):
            logger.warning(f"Skipped {len(listed) - len(models)} malformed model entries")

        for model in models:
            methods = ", ".join(model.get("supportedGenerationMethods") or []) or "None"
            logger.debug(f"{model.get('name')}: {model.get('displayName')} ({methods})")

        generate_models = filter_generate_content_models(models)
        return {
            "allModels": models,
            "generateContentModels": generate_models,
            "suggestedModels": [model.get("name") for model in generate_models],
        }

    async def close(self) -> None:
        """Close both HTTP clients."""
        await self._gemini.aclose()
        await self._elevenlabs.aclose()
