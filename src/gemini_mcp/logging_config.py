"""Logging setup - stderr only, with secret redaction.

stdout belongs to the MCP stdio transport, so every record goes to stderr.
"""

from __future__ import annotations

import logging
import re
import sys

from .domain.domain_type import LogLevel

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LEVELS: dict[LogLevel, int] = {
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.TRACE: logging.DEBUG,
}

_HANDLER_NAME = "gemini_mcp.stderr"


def sanitize_error_message(message: str) -> str:
    """Remove credentials that upstream errors sometimes echo back."""
    sanitized = re.sub(r"AIza[0-9A-Za-z_\-]{35}", "[REDACTED_API_KEY]", message)
    sanitized = re.sub(r"key=[0-9A-Za-z_\-]{20,}", "key=[REDACTED_API_KEY]", sanitized)
    return re.sub(r"Bearer\s+[A-Za-z0-9_\-\.]{20,}", "Bearer [REDACTED_TOKEN]", sanitized)


class RedactingFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return sanitize_error_message(super().format(record))


def configure_logging(level: LogLevel | str = LogLevel.INFO) -> logging.Logger:
    """Install the stderr handler on the package logger. Safe to call twice."""
    logger = logging.getLogger("gemini_mcp")
    logger.setLevel(LEVELS[LogLevel(level)])

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(RedactingFormatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


__all__ = ["LEVELS", "RedactingFormatter", "configure_logging", "sanitize_error_message"]
