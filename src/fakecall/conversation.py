"""Conversation generation using Gemini, with model and script fallbacks."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .characters import get_fallback_script, match_category
from .config import Settings
from .models import ConversationResult, UpstreamError

logger = logging.getLogger(__name__)

FALLBACK_NOTE = "Used fallback conversation"
UNEXPECTED_STRUCTURE = "Unexpected response structure"


@dataclass(frozen=True)
class ModelCandidate:
    """A Gemini model to try, in priority order."""
    name: str
    api_version: str = "v1"

    def generate_path(self) -> str:
        return f"/{self.api_version}/models/{self.name}:generateContent"


class ResponseShapeError(Exception):
    """Raised when Gemini answers successfully but without usable text."""

    pass


def extract_text(data: Any) -> str:
    """Pull the generated text out of a generateContent response.

    Raises:
        ResponseShapeError: If the response lacks ``candidates[0].content.parts[0].text``
            or that text is empty.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ResponseShapeError(UNEXPECTED_STRUCTURE) from e
    if not isinstance(text, str) or not text:
        raise ResponseShapeError(UNEXPECTED_STRUCTURE)
    return text


class ConversationResolver:
    """Generates one-sided phone call scripts.

    Candidate models are tried once each, in order. A model that does not
    exist (404) or answers in an unexpected shape is skipped; any other
    failure (bad key, quota, network) stops the search, since the remaining
    models would fail the same way. When nothing produces text, the canned
    script for the closest caller type is returned instead.
    """

    CANDIDATES: tuple[ModelCandidate, ...] = (
        ModelCandidate("gemini-1.5-flash"),
        ModelCandidate("gemini-1.5-pro"),
        ModelCandidate("gemini-pro"),
        ModelCandidate("gemini-1.0-pro"),
    )

    PROMPT_TEMPLATE = """
Generate a safe, realistic phone conversation where the user only hears one side of the conversation. Make sure that the things the caller is saying doesn't require specific answers for the conversation to make sense, it should stay generic in the sense that multiple answers could make sense.
Include short pauses [Pause 2s], [Pause 3s], etc., at natural breaks.
The conversation topic is: {convo_type}.
Return only the lines of the person the user is hearing.
"""

    def __init__(
        self,
        settings: Settings | None = None,
        candidates: tuple[ModelCandidate, ...] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the resolver.

        Args:
            settings: Application settings. If None, loads from environment.
            candidates: Models to try, overriding CANDIDATES.
            client: HTTP client to use. If None, one is created and owned here.
        """
        if settings is None:
            from .config import get_settings
            settings = get_settings()

        self._settings = settings
        self._candidates = candidates if candidates is not None else self.CANDIDATES
        self._timeout = settings.conversation_timeout
        self._client = client or httpx.AsyncClient(base_url=settings.gemini_api_url)

    @property
    def candidates(self) -> tuple[ModelCandidate, ...]:
        return self._candidates

    def build_prompt(self, convo_type: str) -> str:
        return self.PROMPT_TEMPLATE.format(convo_type=convo_type)

    async def _generate(self, candidate: ModelCandidate, prompt: str) -> str:
        response = await self._client.post(
            candidate.generate_path(),
            headers={
                "x-goog-api-key": self._settings.gemini_api_key,
                "Content-Type": "application/json",
            },
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=self._timeout,
        )
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            raise ResponseShapeError(UNEXPECTED_STRUCTURE) from e
        return extract_text(data)

    async def resolve(self, convo_type: str) -> ConversationResult:
        """Generate a conversation for the given topic, falling back to a canned script.

        Args:
            convo_type: Free-text description of who is calling and about what.

        Returns:
            The generated conversation and the model used, or the fallback
            script with a note and the last error observed.
        """
        logger.info(f"Generating conversation for: {convo_type}")
        prompt = self.build_prompt(convo_type)
        last_error: str | None = None

        for candidate in self._candidates:
            logger.info(f"Trying model: {candidate.name}")
            try:
                # httpx timeouts apply per phase; this bounds the whole request
                text = await asyncio.wait_for(
                    self._generate(candidate, prompt), timeout=self._timeout
                )
            except asyncio.TimeoutError:
                last_error = f"Model {candidate.name} timed out after {self._timeout:g}s"
                logger.warning(last_error)
                break
            except ResponseShapeError as e:
                logger.warning(f"Model {candidate.name} returned an unexpected response structure")
                last_error = str(e)
                continue
            except httpx.HTTPError as e:
                error = UpstreamError.from_httpx(e)
                last_error = error.message
                logger.warning(f"Model {candidate.name} failed: {error.message}")
                if error.status == 404:
                    continue
                break

            logger.info(f"Success with model: {candidate.name}")
            return ConversationResult(conversation=text, model_used=candidate.name)

        category = match_category(convo_type)
        logger.info(f"All models failed, using fallback conversation for '{category.value}'")
        return ConversationResult(
            conversation=get_fallback_script(convo_type),
            note=FALLBACK_NOTE,
            error=last_error,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
