"""Tests for request-scoped, redacting logging."""

import logging

from src.fakecall.config import Settings
from src.fakecall.log_context import (
    REDACTED,
    RedactingFilter,
    RequestIdFilter,
    configure_logging,
    log_credential_status,
    request_id_var,
)


def make_record(msg, *args):
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


def test_redacting_filter_masks_secrets():
    """Test secret values are masked in the formatted message."""
    record = make_record(
        "HTTP Request: POST https://example.test/v1/models?key=%s", "super-secret"
    )
    assert RedactingFilter(["super-secret"]).filter(record)
    assert record.getMessage() == f"HTTP Request: POST https://example.test/v1/models?key={REDACTED}"


def test_redacting_filter_leaves_clean_records():
    """Test records without secrets are untouched."""
    record = make_record("nothing to hide %d", 42)
    RedactingFilter(["super-secret"]).filter(record)
    assert record.msg == "nothing to hide %d"
    assert record.getMessage() == "nothing to hide 42"


def test_request_id_filter():
    """Test the current request id is stamped on records."""
    token = request_id_var.set("req-1")
    try:
        record = make_record("hello")
        RequestIdFilter().filter(record)
        assert record.request_id == "req-1"
    finally:
        request_id_var.reset(token)

    record = make_record("hello")
    RequestIdFilter().filter(record)
    assert record.request_id == "-"


def test_configure_logging_does_not_stack_filters():
    """Test repeated configuration keeps one filter of each kind per handler."""
    settings = Settings(gemini_api_key="g-key", elevenlabs_api_key="e-key")
    configure_logging(settings)
    configure_logging(settings)

    for handler in logging.getLogger().handlers:
        kinds = [type(f) for f in handler.filters]
        assert kinds.count(RequestIdFilter) == 1
        assert kinds.count(RedactingFilter) == 1


def test_log_credential_status_never_logs_values(caplog):
    """Test startup credential logging reports presence only."""
    settings = Settings(gemini_api_key="very-secret-gemini", elevenlabs_api_key="")
    logger = logging.getLogger("fakecall.test")

    with caplog.at_level(logging.INFO, logger="fakecall.test"):
        log_credential_status(settings, logger)

    assert "very-secret-gemini" not in caplog.text
    assert "gemini API key is configured" in caplog.text
    assert "elevenlabs API key is missing" in caplog.text
