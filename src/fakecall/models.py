"""Data models for conversation and speech results."""

import json
from dataclasses import dataclass
from typing import Any

import httpx


class UpstreamError(Exception):
    """Raised when a third-party API call fails.

    Attributes:
        status: Upstream HTTP status code, or None for transport failures
        status_text: Upstream reason phrase, if a response was received
        message: Human-readable failure description
        detail: Decoded error body (JSON when possible, else text)
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        status_text: str | None = None,
        detail: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.status_text = status_text
        self.detail = detail if detail is not None else message

    @classmethod
    def from_httpx(cls, exc: httpx.HTTPError) -> "UpstreamError":
        """Build an UpstreamError from an httpx status or transport error."""
        if not isinstance(exc, httpx.HTTPStatusError):
            return cls(str(exc) or exc.__class__.__name__)

        response = exc.response
        detail = decode_error_body(response)
        return cls(
            message=upstream_error_message(detail) or response.reason_phrase or str(exc),
            status=response.status_code,
            status_text=response.reason_phrase,
            detail=detail,
        )


def decode_error_body(response: httpx.Response) -> Any:
    """Decode an error response body as JSON, falling back to text."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def upstream_error_message(detail: Any) -> str | None:
    """Extract a message from the error payload shapes our upstreams return.

    Gemini nests it as ``{"error": {"message": ...}}``; ElevenLabs uses
    ``{"detail": {"message": ...}}`` or ``{"detail": "..."}``.
    """
    if not isinstance(detail, dict):
        return None
    for key in ("error", "detail"):
        value = detail.get(key)
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"]
        if isinstance(value, str):
            return value
    return None


@dataclass
class ConversationResult:
    """Outcome of a conversation request.

    Either generated text plus the model that produced it, or the canned
    fallback script plus a note and the last upstream error seen.
    """

    conversation: str
    model_used: str | None = None
    note: str | None = None
    error: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.model_used is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape returned to clients."""
        if not self.is_fallback:
            return {"conversation": self.conversation, "modelUsed": self.model_used}
        return {
            "conversation": self.conversation,
            "note": self.note,
            "error": self.error,
        }


@dataclass(frozen=True)
class SynthesisResult:
    """Raw audio returned by the speech provider, passed through untouched."""

    audio: bytes
    voice_id: str
    content_type: str = "audio/mpeg"
