"""
Shared test fixtures and configuration.

Environment strategy:
- All tests use .env.test (fake API key, no network)
- The Gemini provider is replaced by FakeGenerativeModel, an in-memory port
  that records every call and returns scripted results
"""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

ENV_FILE = Path(__file__).parent.parent / ".env.test"

load_dotenv(ENV_FILE, override=True)

from gemini_mcp.domain.domain_value import (  # noqa: E402
    GenerationResponse,
    Prompt,
    PromptWithHistory,
    StreamChunk,
    TokenCountResult,
    TokenUsage,
)
from gemini_mcp.domain.errors import DomainError, ModelNotFoundError  # noqa: E402
from gemini_mcp.domain.model_catalog import ModelCatalog, ModelInfo  # noqa: E402
from gemini_mcp.domain.ports import GenerativeModelPort  # noqa: E402


class FakeGenerativeModel(GenerativeModelPort):
    """
    Scriptable port double.

    Every method appends (method_name, args) to ``calls``. Results come from
    the ``response`` / ``token_count`` / ``chunks`` attributes, which tests
    overwrite with a value or a DomainError.
    """

    def __init__(self, catalog: ModelCatalog | None = None):
        self.catalog = catalog or ModelCatalog()
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.response: GenerationResponse | DomainError = GenerationResponse(
            text="fake response",
            model="gemini-2.5-flash",
            finish_reason="STOP",
            usage=TokenUsage(prompt_tokens=1, completion_tokens=2, total_tokens=3),
        )
        self.token_count: TokenCountResult | DomainError = TokenCountResult(total_tokens=42, model="gemini-2.5-flash")
        self.chunks: list[StreamChunk | DomainError] = [
            StreamChunk(text="Hello"),
            StreamChunk(text=" world"),
            StreamChunk.completion_marker(),
        ]

    def methods_called(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def generate(self, prompt: Prompt) -> GenerationResponse | DomainError:
        self.calls.append(("generate", (prompt,)))
        return self.response

    async def generate_with_history(self, prompt: PromptWithHistory) -> GenerationResponse | DomainError:
        self.calls.append(("generate_with_history", (prompt,)))
        return self.response

    async def generate_buffered(self, prompt: Prompt) -> GenerationResponse | DomainError:
        self.calls.append(("generate_buffered", (prompt,)))
        return self.response

    async def generate_with_history_buffered(self, prompt: PromptWithHistory) -> GenerationResponse | DomainError:
        self.calls.append(("generate_with_history_buffered", (prompt,)))
        return self.response

    async def stream_generate(self, prompt: Prompt) -> AsyncIterator[StreamChunk | DomainError]:
        self.calls.append(("stream_generate", (prompt,)))
        for chunk in self.chunks:
            yield chunk

    async def stream_generate_with_history(self, prompt: PromptWithHistory) -> AsyncIterator[StreamChunk | DomainError]:
        self.calls.append(("stream_generate_with_history", (prompt,)))
        for chunk in self.chunks:
            yield chunk

    async def count_tokens(self, text: str, model_name: str) -> TokenCountResult | DomainError:
        self.calls.append(("count_tokens", (text, model_name)))
        return self.token_count

    async def list_models(self) -> tuple[ModelInfo, ...] | DomainError:
        self.calls.append(("list_models", ()))
        return self.catalog.root

    async def get_model(self, model_name: str) -> ModelInfo | DomainError:
        self.calls.append(("get_model", (model_name,)))
        try:
            return self.catalog.find(model_name)
        except KeyError:
            return ModelNotFoundError(model_name=model_name)


@pytest.fixture
def model_catalog() -> ModelCatalog:
    """Load the real model catalog shipped with the package."""
    return ModelCatalog.from_json_file()


@pytest.fixture
def small_catalog() -> ModelCatalog:
    """Two-model catalog with predictable names."""
    return ModelCatalog.from_list(
        [
            {
                "name": "m1",
                "display_name": "Model One",
                "description": "First test model",
                "input_token_limit": 1000,
                "output_token_limit": 100,
                "supported_generation_methods": ["generateContent"],
            },
            {
                "name": "m2",
                "display_name": "Model Two",
                "description": "Second test model",
                "input_token_limit": 2000,
                "output_token_limit": 200,
            },
        ]
    )


@pytest.fixture
def fake_port(small_catalog: ModelCatalog) -> FakeGenerativeModel:
    """In-memory provider port backed by the small catalog."""
    return FakeGenerativeModel(small_catalog)


@pytest.fixture
def tool_registry(fake_port: FakeGenerativeModel, small_catalog: ModelCatalog):
    """Registry wired exactly like production, over the fake port."""
    from gemini_mcp.api.deps import create_tool_registry

    return create_tool_registry(
        port=fake_port,
        catalog=small_catalog,
        default_model="m1",
        default_max_output_tokens=1024,
    )


@pytest.fixture
def empty_port() -> FakeGenerativeModel:
    """Port whose catalog has no models."""
    return FakeGenerativeModel()
