"""Tools API Router - thin HTTP layer over the tool registry.

Every call answers HTTP 200 with an envelope; failures are expressed in the
envelope's error field, never as HTTP errors.
"""

import json
from collections.abc import AsyncIterator
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from ..contracts import QUERY_GEMINI, ToolDescriptor
from ..deps import get_tool_registry
from ..tools import ToolRegistry

router = APIRouter(prefix="/tools", tags=["tools"])

NDJSON = "application/x-ndjson"


@router.get("", response_model=list[ToolDescriptor], response_model_by_alias=True)
async def list_tools(
    registry: Annotated[ToolRegistry, Depends(get_tool_registry)],
) -> list[ToolDescriptor]:
    """List registered tools with their input schemas."""
    return registry.list_tools()


@router.post(f"/{QUERY_GEMINI}/stream")
async def stream_query(
    registry: Annotated[ToolRegistry, Depends(get_tool_registry)],
    arguments: Annotated[dict[str, Any] | None, Body()] = None,
) -> StreamingResponse:
    """
    Incremental query_gemini.

    One JSON envelope per line; the stream ends after the completion chunk
    or after the first error envelope.
    """

    async def lines() -> AsyncIterator[str]:
        async for response in registry.stream(QUERY_GEMINI, arguments):
            yield json.dumps(response.to_wire()) + "\n"

    return StreamingResponse(lines(), media_type=NDJSON)


@router.post("/{tool_name}")
async def call_tool(
    tool_name: str,
    registry: Annotated[ToolRegistry, Depends(get_tool_registry)],
    arguments: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """Invoke a tool by name and return its envelope."""
    response = await registry.call(tool_name, arguments)
    return JSONResponse(content=response.to_wire())
