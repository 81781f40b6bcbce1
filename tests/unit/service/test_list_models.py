"""
Tests for ListModelsUseCase.

Demonstrates:
- Projection of catalog entries to public summaries
- Empty catalog is a result, not an error
"""

from gemini_mcp.domain.errors import ApiError
from gemini_mcp.service.list_models import ListModelsOutput, ListModelsUseCase


async def test_lists_summaries_in_catalog_order(fake_port):
    """Demonstrates: Order and count come straight from the port."""
    result = await ListModelsUseCase(fake_port).execute()

    assert isinstance(result, ListModelsOutput)
    assert result.count == 2
    assert [model.name for model in result.models] == ["m1", "m2"]


async def test_summaries_omit_limits(fake_port):
    """Demonstrates: Public view hides token limits and methods."""
    result = await ListModelsUseCase(fake_port).execute()

    first = result.model_dump(by_alias=True)["models"][0]
    assert first == {"name": "m1", "displayName": "Model One", "description": "First test model"}


async def test_empty_catalog_returns_zero_count(empty_port):
    """Demonstrates: Edge case handled as data."""
    result = await ListModelsUseCase(empty_port).execute()

    assert isinstance(result, ListModelsOutput)
    assert result.count == 0
    assert result.models == ()


async def test_port_error_passes_through(fake_port, monkeypatch):
    """Demonstrates: Errors from the port are returned unchanged."""
    error = ApiError(message="upstream down")

    async def failing_list_models():
        return error

    monkeypatch.setattr(fake_port, "list_models", failing_list_models)

    assert await ListModelsUseCase(fake_port).execute() is error
