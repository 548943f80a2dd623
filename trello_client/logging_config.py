"""Logging configuration for applications using the client.

The API key and token travel as query parameters, so any logged request URL
(httpx logs one per request at INFO) carries them. ``configure_logging``
installs a filter that masks them before records reach a handler.
"""

import logging
import os
import re

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_CREDENTIAL_PARAM = re.compile(r"([?&](?:key|token)=)[^&\s\"'<>]+")


def redact_credentials(text: str) -> str:
    """Mask ``key=`` and ``token=`` query parameter values in ``text``."""
    return _CREDENTIAL_PARAM.sub(r"\1***", text)


class CredentialFilter(logging.Filter):
    """Rewrites log records so API credentials never reach the output."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_credentials(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_log_level() -> int:
    """Get log level from LOG_LEVEL environment variable.

    Defaults to WARNING if not set.
    """
    level_name = os.getenv("LOG_LEVEL", "WARNING").upper()
    return getattr(logging, level_name, logging.WARNING)


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging for scripts built on the client.

    In verbose mode the client logs at DEBUG and httpx's per-request lines
    are shown at INFO with credentials masked. Otherwise httpx/httpcore stay
    at WARNING.

    Args:
        verbose: If True, override LOG_LEVEL to DEBUG
    """
    level = logging.DEBUG if verbose else get_log_level()

    logging.basicConfig(
        level=level,
        format=DEFAULT_FORMAT,
        force=True,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(CredentialFilter())

    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
