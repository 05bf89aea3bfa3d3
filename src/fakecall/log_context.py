"""Request-scoped, secret-redacting logging setup."""

import logging
import uuid
from contextvars import ContextVar

from .config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"
REDACTED = "***"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def new_request_id() -> str:
    """Generate a short id for correlating one request's log lines."""
    return uuid.uuid4().hex[:12]


class RequestIdFilter(logging.Filter):
    """Stamp each record with the id of the request being handled."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class RedactingFilter(logging.Filter):
    """Replace configured secret values in log output with a mask.

    httpx logs full request URLs at INFO level, so anything that may carry an
    API key has to pass through this filter before it reaches a handler.
    """

    def __init__(self, secrets: list[str] | None = None):
        super().__init__()
        self._secrets = [s for s in (secrets or []) if s]

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(settings: Settings) -> None:
    """Configure root logging and attach request-id and redaction filters.

    Safe to call more than once; filters are refreshed rather than stacked.
    """
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    for handler in root.handlers:
        for existing in list(handler.filters):
            if isinstance(existing, (RequestIdFilter, RedactingFilter)):
                handler.removeFilter(existing)
        handler.addFilter(RequestIdFilter())
        handler.addFilter(RedactingFilter(settings.secrets()))


def log_credential_status(settings: Settings, logger: logging.Logger) -> None:
    """Log which upstream credentials are configured, never their values."""
    for name, present in settings.credential_status().items():
        if present:
            logger.info(f"{name} API key is configured")
        else:
            logger.warning(
                f"{name} API key is missing; requests to {name} will fail until it is set"
            )
