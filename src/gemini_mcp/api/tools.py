"""Tool Registry - maps external tool names to controller handlers.

Both transports (MCP stdio and HTTP) dispatch through ToolRegistry.call,
which is the boundary that guarantees no exception escapes to a caller:
unknown names become TOOL_NOT_FOUND envelopes and handler crashes become
INTERNAL_ERROR envelopes.

Tool descriptors are built by functions that take the server-side defaults
as arguments, so the advertised schema always matches configuration.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..domain.errors import InternalError, ToolNotFoundError
from ..domain.model_catalog import ModelCatalog
from .contracts import COUNT_GEMINI_TOKENS, LIST_GEMINI_MODELS, QUERY_GEMINI, ToolDescriptor, ToolResponse

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[ToolResponse]]
StreamingToolHandler = Callable[[Any], AsyncIterator[ToolResponse]]


class ToolDefinition(BaseModel):
    """A registered tool: its public descriptor plus the callables behind it."""

    descriptor: ToolDescriptor
    handler: ToolHandler
    stream_handler: StreamingToolHandler | None = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Name -> ToolDefinition, in registration order."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        self._tools[definition.name] = definition

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    def list_tools(self) -> list[ToolDescriptor]:
        return [definition.descriptor for definition in self._tools.values()]

    async def call(self, name: str, arguments: Any) -> ToolResponse:
        definition = self._tools.get(name)
        if definition is None:
            return ToolResponse.from_error(ToolNotFoundError(tool_name=name))

        logger.info("Tool invocation: %s", name)
        try:
            return await definition.handler(arguments)
        except Exception:
            logger.exception("Tool execution error: %s", name)
            return ToolResponse.from_error(InternalError())

    async def stream(self, name: str, arguments: Any) -> AsyncIterator[ToolResponse]:
        """Streaming dispatch; falls back to a single envelope for non-streaming tools."""
        definition = self._tools.get(name)
        if definition is None:
            yield ToolResponse.from_error(ToolNotFoundError(tool_name=name))
            return
        if definition.stream_handler is None:
            yield await self.call(name, arguments)
            return

        logger.info("Streaming tool invocation: %s", name)
        try:
            async for response in definition.stream_handler(arguments):
                yield response
        except Exception:
            logger.exception("Tool execution error: %s", name)
            yield ToolResponse.from_error(InternalError())


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


def query_gemini_descriptor(default_model: str, catalog: ModelCatalog, allow_model_override: bool = True) -> ToolDescriptor:
    properties: dict[str, Any] = {
        "prompt": {
            "type": "string",
            "description": "The prompt to send to Gemini. Be specific and clear.",
            "minLength": 1,
            "maxLength": 100_000,
        },
        "systemInstruction": {
            "type": "string",
            "description": "System instruction to set the behavior and persona of the model",
            "maxLength": 10_000,
        },
        "temperature": {
            "type": "number",
            "description": "Controls randomness. 0 = deterministic, 2 = most random. Default: 1.0",
            "minimum": 0,
            "maximum": 2,
        },
        "maxOutputTokens": {
            "type": "number",
            "description": "Maximum tokens in the response. Default varies by model.",
            "minimum": 1,
            "maximum": 8192,
        },
        "history": {
            "type": "array",
            "description": "Previous conversation turns for multi-turn conversations",
            "items": {
                "type": "object",
                "properties": {
                    "role": {"type": "string", "enum": ["user", "model"]},
                    "content": {"type": "string"},
                },
                "required": ["role", "content"],
            },
        },
        "stream": {
            "type": "boolean",
            "description": (
                "Stream response progressively. Enabled by default. "
                "Set to false only if you need the complete response at once."
            ),
            "default": True,
        },
    }
    if allow_model_override:
        properties["model"] = {
            "type": "string",
            "description": f"The Gemini model to use. {catalog.options_description()}",
            "default": default_model,
        }

    return ToolDescriptor(
        name=QUERY_GEMINI,
        description=(
            "Query Google's Gemini AI models for text generation, reasoning, and analysis tasks.\n\n"
            "Use this tool when you need to:\n"
            "- Get a second opinion or alternative perspective on a problem\n"
            "- Leverage Gemini's specific capabilities for certain reasoning tasks\n"
            "- Generate content using a different AI model\n"
            "- Compare responses between AI models\n\n"
            "The tool supports conversation history for multi-turn interactions.\n"
            "Streaming is enabled by default for better responsiveness."
        ),
        input_schema={"type": "object", "properties": properties, "required": ["prompt"]},
    )


def list_models_descriptor() -> ToolDescriptor:
    return ToolDescriptor(
        name=LIST_GEMINI_MODELS,
        description=(
            "List available Gemini AI models and their capabilities.\n\n"
            "Use this tool to:\n"
            "- Discover available Gemini models\n"
            "- Understand model capabilities and limitations\n"
            "- Choose the appropriate model for a specific task"
        ),
        input_schema={"type": "object", "properties": {}, "required": []},
    )


def count_tokens_descriptor(default_model: str, allow_model_override: bool = True) -> ToolDescriptor:
    properties: dict[str, Any] = {
        "text": {
            "type": "string",
            "description": "The text to count tokens for",
            "minLength": 1,
            "maxLength": 1_000_000,
        },
    }
    if allow_model_override:
        properties["model"] = {
            "type": "string",
            "description": "The model to use for tokenization",
            "default": default_model,
        }

    return ToolDescriptor(
        name=COUNT_GEMINI_TOKENS,
        description=(
            "Count the number of tokens in a text string for a specific Gemini model.\n\n"
            "Use this tool to:\n"
            "- Estimate prompt costs before making queries\n"
            "- Ensure prompts fit within model context limits\n"
            "- Optimize prompt length for efficiency"
        ),
        input_schema={"type": "object", "properties": properties, "required": ["text"]},
    )


__all__ = [
    "StreamingToolHandler",
    "ToolDefinition",
    "ToolHandler",
    "ToolRegistry",
    "count_tokens_descriptor",
    "list_models_descriptor",
    "query_gemini_descriptor",
]
