"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for domain concepts.
Using StrEnum instead of plain Enum provides automatic string coercion
and better JSON serialization without custom encoders.
"""

from enum import StrEnum


class MessageRole(StrEnum):
    """Conversation Turn Authors.

    Gemini only distinguishes the human side ("user") from its own replies
    ("model"). There is no system role in history; system behaviour travels
    as a separate system instruction.
    """

    USER = "user"
    MODEL = "model"


class ErrorKind(StrEnum):
    """Discriminator for the DomainError tagged union.

    Each kind owns exactly one stable external error code (see ERROR_CODES
    in errors.py). Kinds are internal; codes are the public contract.
    """

    VALIDATION = "validation"
    API = "api"
    RATE_LIMIT = "rate_limit"
    MODEL_NOT_FOUND = "model_not_found"
    CONTENT_FILTERED = "content_filtered"
    TIMEOUT = "timeout"
    EXTERNAL_SERVICE = "external_service"
    CONFIGURATION = "configuration"
    TOOL_NOT_FOUND = "tool_not_found"
    INTERNAL = "internal"


class QueryStrategy(StrEnum):
    """Upstream Invocation Strategies for a Query.

    The Query use case picks one of these from the shape of its input
    (history present x streaming requested). Each value names the port
    method that will be called.

    Strategies:
        GENERATE: single request, no history
        GENERATE_WITH_HISTORY: chat session seeded with history
        GENERATE_BUFFERED: streamed upstream, returned as one response
        GENERATE_WITH_HISTORY_BUFFERED: chat session, streamed, returned whole
    """

    GENERATE = "generate"
    GENERATE_WITH_HISTORY = "generate_with_history"
    GENERATE_BUFFERED = "generate_buffered"
    GENERATE_WITH_HISTORY_BUFFERED = "generate_with_history_buffered"


class Environment(StrEnum):
    """Deployment environment names accepted by configuration."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(StrEnum):
    """Log verbosity names accepted by configuration.

    Mirrors the level vocabulary commonly used by MCP server deployments;
    logging_config.py maps each onto a stdlib logging level.
    """

    FATAL = "fatal"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"


__all__ = [
    "Environment",
    "ErrorKind",
    "LogLevel",
    "MessageRole",
    "QueryStrategy",
]
