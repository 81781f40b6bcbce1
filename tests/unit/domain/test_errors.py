"""
Tests for the DomainError tagged union.

Demonstrates:
- Stable external codes per kind (public contract)
- Default messages derived from variant fields
- Discriminated parsing from plain payloads
"""

import pytest

from gemini_mcp.domain.domain_type import ErrorKind
from gemini_mcp.domain.errors import (
    ERROR_CODES,
    ApiError,
    ContentFilteredError,
    InternalError,
    ModelNotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ToolNotFoundError,
    ValidationError,
    domain_error_adapter,
    is_domain_error,
)


def test_every_kind_has_a_code():
    """Demonstrates: The code table is total over ErrorKind."""
    assert set(ERROR_CODES) == set(ErrorKind)


@pytest.mark.parametrize(
    ("error", "code", "message"),
    [
        (ValidationError(message="Prompt cannot be empty"), "VALIDATION_ERROR", "Prompt cannot be empty"),
        (RateLimitError(), "GEMINI_RATE_LIMIT", "Rate limit exceeded"),
        (RateLimitError(retry_after_ms=1500), "GEMINI_RATE_LIMIT", "Rate limit exceeded. Retry after 1500ms"),
        (ModelNotFoundError(model_name="gemini-x"), "GEMINI_MODEL_NOT_FOUND", "Model not found: gemini-x"),
        (ContentFilteredError(), "GEMINI_CONTENT_FILTERED", "Content was filtered due to safety settings"),
        (RequestTimeoutError(timeout_ms=50), "TIMEOUT_ERROR", "Request timed out"),
        (ToolNotFoundError(tool_name="nope"), "TOOL_NOT_FOUND", "Tool not found: nope"),
        (InternalError(), "INTERNAL_ERROR", "An internal error occurred"),
    ],
)
def test_error_code_and_default_message(error, code, message):
    """
    Demonstrates: Each variant fixes its code and renders its own message.

    These strings reach callers verbatim, so they are part of the contract.
    """
    assert error.code == code
    assert error.message == message
    assert error.to_payload() == {"code": code, "message": message}


def test_discriminated_union_parses_by_kind():
    """Demonstrates: kind selects the variant when parsing a payload."""
    error = domain_error_adapter.validate_python({"kind": "api", "message": "boom", "status_code": 500})

    assert isinstance(error, ApiError)
    assert error.status_code == 500


def test_is_domain_error_narrows_results():
    """Demonstrates: Results are values; the guard separates the branches."""
    assert is_domain_error(InternalError())
    assert not is_domain_error("plain value")
    assert not is_domain_error(None)
