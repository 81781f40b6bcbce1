"""Gemini MCP - HTTP surface

FastAPI application exposing the same tool registry as the MCP stdio server,
for local inspection and testing through the generated docs.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from . import __version__
from .api.routers import health_router, tools_router
from .config import get_settings
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown logic"""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Starting gemini-mcp v%s (environment=%s, default_model=%s)",
        __version__,
        settings.environment,
        settings.gemini_default_model,
    )
    yield
    logger.info("Shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title="gemini-mcp",
        description="Google Gemini tools: query_gemini, list_gemini_models, count_gemini_tokens",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(health_router)
    app.include_router(tools_router)

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        """Redirect root to API docs"""
        return RedirectResponse(url="/docs")

    return app


app = create_app()
