"""Domain Errors - Closed Tagged Union of Failure Kinds.

Every failure the core can surface is one of the variants below. Variants are
frozen Pydantic models discriminated on ``kind``; each kind fixes a stable
external ``code`` (ERROR_CODES), which is part of the public contract.

Errors are returned as values (``T | DomainError``) through ports and use
cases rather than raised. The only exception is configuration failure at
startup, which aborts the process via ConfigurationFailure.

Example:
    >>> result = await port.generate(prompt)
    >>> if is_domain_error(result):
    ...     return error_envelope(result.code, result.message)
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, TypeGuard

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field, model_validator

from .domain_type import ErrorKind

ERROR_CODES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "VALIDATION_ERROR",
    ErrorKind.API: "GEMINI_API_ERROR",
    ErrorKind.RATE_LIMIT: "GEMINI_RATE_LIMIT",
    ErrorKind.MODEL_NOT_FOUND: "GEMINI_MODEL_NOT_FOUND",
    ErrorKind.CONTENT_FILTERED: "GEMINI_CONTENT_FILTERED",
    ErrorKind.TIMEOUT: "TIMEOUT_ERROR",
    ErrorKind.EXTERNAL_SERVICE: "EXTERNAL_SERVICE_ERROR",
    ErrorKind.CONFIGURATION: "CONFIGURATION_ERROR",
    ErrorKind.TOOL_NOT_FOUND: "TOOL_NOT_FOUND",
    ErrorKind.INTERNAL: "INTERNAL_ERROR",
}


class _DomainErrorBase(BaseModel):
    """Shared shape: every variant has a message and a code derived from kind."""

    kind: ErrorKind
    message: str

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    @computed_field
    @property
    def code(self) -> str:
        return ERROR_CODES[self.kind]

    def to_payload(self) -> dict[str, str]:
        """Public view used in error envelopes."""
        return {"code": self.code, "message": self.message}


def _fill_message(data: Any, render: Any) -> Any:
    if isinstance(data, dict) and not data.get("message"):
        return {**data, "message": render(data)}
    return data


class ValidationError(_DomainErrorBase):
    """Caller input is malformed or empty. Never reaches the provider."""

    kind: Literal[ErrorKind.VALIDATION] = ErrorKind.VALIDATION


class ApiError(_DomainErrorBase):
    """Provider failure that matched no more specific classification."""

    kind: Literal[ErrorKind.API] = ErrorKind.API
    status_code: int | None = None


class RateLimitError(_DomainErrorBase):
    """Provider rejected the call for quota/rate reasons (HTTP 429)."""

    kind: Literal[ErrorKind.RATE_LIMIT] = ErrorKind.RATE_LIMIT
    retry_after_ms: int | None = None
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_message(cls, data: Any) -> Any:
        def render(values: dict[str, Any]) -> str:
            retry_after_ms = values.get("retry_after_ms")
            if retry_after_ms is None:
                return "Rate limit exceeded"
            return f"Rate limit exceeded. Retry after {retry_after_ms}ms"

        return _fill_message(data, render)


class ModelNotFoundError(_DomainErrorBase):
    """Requested model does not exist (upstream 404 or catalogue miss)."""

    kind: Literal[ErrorKind.MODEL_NOT_FOUND] = ErrorKind.MODEL_NOT_FOUND
    model_name: str
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_message(cls, data: Any) -> Any:
        return _fill_message(data, lambda values: f"Model not found: {values.get('model_name')}")


class ContentFilteredError(_DomainErrorBase):
    """Prompt or response was blocked by provider safety settings."""

    kind: Literal[ErrorKind.CONTENT_FILTERED] = ErrorKind.CONTENT_FILTERED
    message: str = "Content was filtered due to safety settings"


class RequestTimeoutError(_DomainErrorBase):
    """Provider call did not settle within the configured deadline."""

    kind: Literal[ErrorKind.TIMEOUT] = ErrorKind.TIMEOUT
    timeout_ms: int
    message: str = "Request timed out"


class ExternalServiceError(_DomainErrorBase):
    """Provider failed in a way that carried no usable description."""

    kind: Literal[ErrorKind.EXTERNAL_SERVICE] = ErrorKind.EXTERNAL_SERVICE
    service: str


class ConfigurationError(_DomainErrorBase):
    """Environment configuration is missing or invalid."""

    kind: Literal[ErrorKind.CONFIGURATION] = ErrorKind.CONFIGURATION


class ToolNotFoundError(_DomainErrorBase):
    """Transport received a call for a tool name nobody registered."""

    kind: Literal[ErrorKind.TOOL_NOT_FOUND] = ErrorKind.TOOL_NOT_FOUND
    tool_name: str
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_message(cls, data: Any) -> Any:
        return _fill_message(data, lambda values: f"Tool not found: {values.get('tool_name')}")


class InternalError(_DomainErrorBase):
    """A handler raised unexpectedly; details stay in the server log."""

    kind: Literal[ErrorKind.INTERNAL] = ErrorKind.INTERNAL
    message: str = "An internal error occurred"


DomainError = Annotated[
    ValidationError
    | ApiError
    | RateLimitError
    | ModelNotFoundError
    | ContentFilteredError
    | RequestTimeoutError
    | ExternalServiceError
    | ConfigurationError
    | ToolNotFoundError
    | InternalError,
    Field(discriminator="kind"),
]

domain_error_adapter: TypeAdapter[DomainError] = TypeAdapter(DomainError)


def is_domain_error(value: object) -> TypeGuard[DomainError]:
    """Narrow a ``T | DomainError`` result to its error branch."""
    return isinstance(value, _DomainErrorBase)


class ConfigurationFailure(Exception):
    """Raised at startup when settings cannot be loaded.

    Configuration problems are fatal, so unlike the other kinds this one is
    raised. The wrapped ConfigurationError keeps the stable code.
    """

    def __init__(self, error: ConfigurationError):
        super().__init__(error.message)
        self.error = error


__all__ = [
    "ERROR_CODES",
    "ApiError",
    "ConfigurationError",
    "ConfigurationFailure",
    "ContentFilteredError",
    "DomainError",
    "ExternalServiceError",
    "InternalError",
    "ModelNotFoundError",
    "RateLimitError",
    "RequestTimeoutError",
    "ToolNotFoundError",
    "ValidationError",
    "domain_error_adapter",
    "is_domain_error",
]
