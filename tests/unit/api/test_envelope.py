"""
Tests for the ToolResponse envelope.

Demonstrates:
- The wire shape has exactly one of data or error
"""

from gemini_mcp.api.contracts import ToolResponse
from gemini_mcp.domain.domain_value import TokenCountResult
from gemini_mcp.domain.errors import ContentFilteredError


def test_success_envelope_carries_only_data():
    """Demonstrates: No error key on success."""
    response = ToolResponse.ok(TokenCountResult(total_tokens=4, model="m1"))

    assert response.to_wire() == {"success": True, "data": {"total_tokens": 4, "model": "m1"}}


def test_failure_envelope_carries_only_error():
    """Demonstrates: No data key on failure; code and message from the domain error."""
    response = ToolResponse.from_error(ContentFilteredError())

    assert response.to_wire() == {
        "success": False,
        "error": {"code": "GEMINI_CONTENT_FILTERED", "message": "Content was filtered due to safety settings"},
    }
