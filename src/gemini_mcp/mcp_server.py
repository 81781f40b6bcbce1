"""MCP stdio server

Advertises the registry's tools and answers every tools/call with a single
text content block holding the JSON envelope. stdout carries the protocol;
logging goes to stderr.
"""

import asyncio
import json
import logging
import sys
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .api.deps import create_tool_registry_from_settings
from .api.tools import ToolRegistry
from .config import load_settings
from .domain.errors import ConfigurationFailure
from .logging_config import configure_logging

SERVER_NAME = "gemini-mcp"

logger = logging.getLogger(__name__)


def create_server(registry: ToolRegistry) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        logger.debug("Listing %d tools", len(registry.list_tools()))
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in registry.list_tools()
        ]

    # Arguments are validated by the controllers so failures keep the envelope shape
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        response = await registry.call(name, arguments)
        return [types.TextContent(type="text", text=json.dumps(response.to_wire()))]

    return server


async def serve(registry: ToolRegistry) -> None:
    server = create_server(registry)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP server connected via stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console entry point: validate config, then serve over stdio until EOF."""
    try:
        settings = load_settings()
    except ConfigurationFailure as exc:
        print(f"Fatal error: {exc.error.message}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    logger.info(
        "Starting %s v%s (environment=%s, default_model=%s, max_output_tokens=%d, timeout_ms=%d)",
        SERVER_NAME,
        __version__,
        settings.environment,
        settings.gemini_default_model,
        settings.gemini_max_output_tokens,
        settings.gemini_timeout_ms,
    )

    registry = create_tool_registry_from_settings(settings)
    try:
        asyncio.run(serve(registry))
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    main()
