"""Liveness endpoint.

GET /health reports process status and package version. It never calls
Gemini, so a healthy answer says nothing about upstream availability.
"""

from fastapi import APIRouter

from ... import __version__
from ..contracts import HealthResponse

SERVICE_NAME = "gemini-mcp"

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", service=SERVICE_NAME, version=__version__)
