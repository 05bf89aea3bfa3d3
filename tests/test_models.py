"""Tests for result models and upstream error decoding."""

import httpx

from src.fakecall.models import (
    ConversationResult,
    UpstreamError,
    upstream_error_message,
)


def status_error(status, **kwargs):
    request = httpx.Request("GET", "https://upstream.test/v1/thing")
    response = httpx.Response(status, request=request, **kwargs)
    return httpx.HTTPStatusError("failed", request=request, response=response)


def test_from_httpx_gemini_error():
    """Test Gemini's nested error message is extracted."""
    error = UpstreamError.from_httpx(
        status_error(404, json={"error": {"code": 404, "message": "model not found"}})
    )
    assert error.status == 404
    assert error.status_text == "Not Found"
    assert error.message == "model not found"


def test_from_httpx_text_body():
    """Test a plain-text body falls back to the reason phrase."""
    error = UpstreamError.from_httpx(status_error(502, text="upstream exploded"))
    assert error.status == 502
    assert error.message == "Bad Gateway"
    assert error.detail == "upstream exploded"


def test_from_httpx_transport_error():
    """Test transport errors carry no status."""
    error = UpstreamError.from_httpx(httpx.ConnectError("connection refused"))
    assert error.status is None
    assert error.message == "connection refused"
    assert error.detail == "connection refused"


def test_upstream_error_message_shapes():
    """Test message extraction across provider error formats."""
    assert upstream_error_message({"error": {"message": "a"}}) == "a"
    assert upstream_error_message({"detail": {"message": "b"}}) == "b"
    assert upstream_error_message({"detail": "c"}) == "c"
    assert upstream_error_message({"other": 1}) is None
    assert upstream_error_message("text") is None


def test_conversation_result_to_dict():
    """Test both result shapes serialize as clients expect."""
    generated = ConversationResult(conversation="hi", model_used="gemini-pro")
    assert not generated.is_fallback
    assert generated.to_dict() == {"conversation": "hi", "modelUsed": "gemini-pro"}

    fallback = ConversationResult(conversation="canned", note="Used fallback conversation")
    assert fallback.is_fallback
    assert fallback.to_dict() == {
        "conversation": "canned",
        "note": "Used fallback conversation",
        "error": None,
    }
