"""API dependency wiring: settings -> adapter -> use cases -> controllers -> registry."""

from functools import lru_cache

from ..adapters.gemini import GoogleGeminiAdapter
from ..config import Settings, get_settings
from ..domain.model_catalog import ModelCatalog
from ..domain.ports import GenerativeModelPort
from ..service import CountTokensUseCase, ListModelsUseCase, QueryUseCase
from .controllers import CountTokensController, ListModelsController, QueryGeminiController
from .tools import (
    ToolDefinition,
    ToolRegistry,
    count_tokens_descriptor,
    list_models_descriptor,
    query_gemini_descriptor,
)


def create_tool_registry(
    port: GenerativeModelPort,
    catalog: ModelCatalog,
    default_model: str,
    default_max_output_tokens: int,
    allow_model_override: bool = True,
) -> ToolRegistry:
    """
    Build the three tools over any port implementation.

    Registry owns no configuration - every server-side default arrives here
    as an argument, so tests can wire a fake port with the same code path.
    """
    query_controller = QueryGeminiController(
        QueryUseCase(port),
        default_model=default_model,
        default_max_output_tokens=default_max_output_tokens,
        allow_model_override=allow_model_override,
    )
    list_controller = ListModelsController(ListModelsUseCase(port))
    count_controller = CountTokensController(
        CountTokensUseCase(port),
        default_model=default_model,
        allow_model_override=allow_model_override,
    )

    registry = ToolRegistry()
    registry.register(
        ToolDefinition(
            descriptor=query_gemini_descriptor(default_model, catalog, allow_model_override),
            handler=query_controller.handle,
            stream_handler=query_controller.handle_stream,
        )
    )
    registry.register(ToolDefinition(descriptor=list_models_descriptor(), handler=list_controller.handle))
    registry.register(
        ToolDefinition(
            descriptor=count_tokens_descriptor(default_model, allow_model_override),
            handler=count_controller.handle,
        )
    )
    return registry


def create_tool_registry_from_settings(settings: Settings) -> ToolRegistry:
    catalog = ModelCatalog.from_json_file(settings.model_catalog_path)
    adapter = GoogleGeminiAdapter.from_api_key(
        api_key=settings.gemini_api_key.get_secret_value(),
        timeout_ms=settings.gemini_timeout_ms,
        catalog=catalog,
    )
    return create_tool_registry(
        port=adapter,
        catalog=catalog,
        default_model=settings.gemini_default_model,
        default_max_output_tokens=settings.gemini_max_output_tokens,
        allow_model_override=settings.allow_caller_model_override,
    )


@lru_cache(maxsize=1)
def get_tool_registry() -> ToolRegistry:
    """Create the tool registry from configuration (cached singleton)."""
    return create_tool_registry_from_settings(get_settings())


__all__ = ["create_tool_registry", "create_tool_registry_from_settings", "get_tool_registry"]
