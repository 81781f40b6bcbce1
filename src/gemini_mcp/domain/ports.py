"""Capability Port - What the Core Needs from a Generative-AI Provider.

Use cases depend on this abstract contract only; the provider SDK never
leaks past the adapter that implements it. Tests substitute an in-memory
double without touching the use cases.

Result Convention:
    Every blocking operation returns ``T | DomainError``; nothing is raised
    for provider failures. The two raw-stream operations yield
    ``StreamChunk | DomainError`` and stop after the completion marker or
    after the first error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from .domain_value import GenerationResponse, Prompt, PromptWithHistory, StreamChunk, TokenCountResult
from .errors import DomainError
from .model_catalog import ModelInfo


class GenerativeModelPort(ABC):
    """Abstract generative-text provider."""

    @abstractmethod
    async def generate(self, prompt: Prompt) -> GenerationResponse | DomainError:
        """Single request/response generation."""

    @abstractmethod
    async def generate_with_history(self, prompt: PromptWithHistory) -> GenerationResponse | DomainError:
        """Generation continuing a prior conversation."""

    @abstractmethod
    async def generate_buffered(self, prompt: Prompt) -> GenerationResponse | DomainError:
        """Stream upstream, return only the final aggregated response.

        Some providers drop idle connections on long generations; consuming
        a stream keeps the connection busy even when the caller wants one
        result.
        """

    @abstractmethod
    async def generate_with_history_buffered(self, prompt: PromptWithHistory) -> GenerationResponse | DomainError:
        """Buffered-stream generation continuing a prior conversation."""

    @abstractmethod
    def stream_generate(self, prompt: Prompt) -> AsyncIterator[StreamChunk | DomainError]:
        """Lazy, finite, non-restartable chunk sequence.

        Ends with one completion marker on success, or one DomainError on
        failure.
        """

    @abstractmethod
    def stream_generate_with_history(self, prompt: PromptWithHistory) -> AsyncIterator[StreamChunk | DomainError]:
        """Raw chunk sequence continuing a prior conversation."""

    @abstractmethod
    async def count_tokens(self, text: str, model_name: str) -> TokenCountResult | DomainError:
        """Tokenize text under the given model."""

    @abstractmethod
    async def list_models(self) -> tuple[ModelInfo, ...] | DomainError:
        """Display catalogue. Not a validation allow-list."""

    @abstractmethod
    async def get_model(self, model_name: str) -> ModelInfo | DomainError:
        """Catalogue lookup; ModelNotFoundError if absent."""


__all__ = ["GenerativeModelPort"]
