"""
Tests for ToolRegistry dispatch and tool descriptors.

Demonstrates:
- Unknown tools and handler crashes become envelopes, never exceptions
- Advertised schemas follow configuration
"""

from gemini_mcp.api.contracts import ToolDescriptor, ToolResponse
from gemini_mcp.api.tools import (
    ToolDefinition,
    ToolRegistry,
    count_tokens_descriptor,
    list_models_descriptor,
    query_gemini_descriptor,
)


def test_registry_lists_tools_in_registration_order(tool_registry):
    """Demonstrates: Three tools, in a stable order."""
    names = [descriptor.name for descriptor in tool_registry.list_tools()]

    assert names == ["query_gemini", "list_gemini_models", "count_gemini_tokens"]
    assert tool_registry.has("query_gemini")
    assert tool_registry.get("nope") is None


async def test_unknown_tool_returns_tool_not_found(tool_registry):
    """Demonstrates: Dispatch miss is an envelope, not an exception."""
    response = await tool_registry.call("unknown_tool", {})

    assert response.to_wire() == {
        "success": False,
        "error": {"code": "TOOL_NOT_FOUND", "message": "Tool not found: unknown_tool"},
    }


async def test_handler_exception_becomes_internal_error(caplog):
    """
    Demonstrates: Registry is the last line before the transport.

    The exception detail is logged, never returned.
    """

    async def explode(arguments):
        raise RuntimeError("secret detail")

    registry = ToolRegistry()
    registry.register(
        ToolDefinition(
            descriptor=ToolDescriptor(name="boom", description="fails", input_schema={"type": "object"}),
            handler=explode,
        )
    )

    response = await registry.call("boom", {})

    assert response.to_wire() == {"success": False, "error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}}
    assert "secret detail" in caplog.text


async def test_stream_falls_back_to_single_envelope(tool_registry):
    """Demonstrates: Non-streaming tools still answer the streaming entry point."""
    envelopes = [envelope async for envelope in tool_registry.stream("list_gemini_models", None)]

    assert len(envelopes) == 1
    assert envelopes[0].data["count"] == 2


async def test_stream_unknown_tool(tool_registry):
    """Demonstrates: Same miss handling on the streaming path."""
    envelopes = [envelope async for envelope in tool_registry.stream("nope", None)]

    assert envelopes == [ToolResponse.failure("TOOL_NOT_FOUND", "Tool not found: nope")]


def test_query_descriptor_advertises_model_only_when_overridable(small_catalog):
    """Demonstrates: Schema follows the override switch."""
    open_schema = query_gemini_descriptor("m1", small_catalog, allow_model_override=True).input_schema
    closed_schema = query_gemini_descriptor("m1", small_catalog, allow_model_override=False).input_schema

    assert open_schema["properties"]["model"]["default"] == "m1"
    assert "Popular: m1, m2" in open_schema["properties"]["model"]["description"]
    assert "model" not in closed_schema["properties"]
    assert closed_schema["required"] == ["prompt"]


def test_descriptor_serializes_input_schema_camel_case():
    """Demonstrates: MCP clients expect inputSchema."""
    dumped = list_models_descriptor().model_dump(by_alias=True)

    assert set(dumped) == {"name", "description", "inputSchema"}
    assert dumped["inputSchema"]["properties"] == {}


def test_count_tokens_descriptor_requires_text():
    """Demonstrates: Required inputs advertised to clients."""
    schema = count_tokens_descriptor("m1").input_schema

    assert schema["required"] == ["text"]
    assert schema["properties"]["model"]["default"] == "m1"
