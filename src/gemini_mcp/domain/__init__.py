"""Domain Layer - Value Objects, Errors, and the Provider Port.

This module provides the core domain layer: the immutable shapes that flow
between components, the closed error taxonomy, the model catalogue, and the
abstract capability port the use cases depend on.

Key Components:
    - Prompt / PromptWithHistory: What to generate
    - GenerationResponse / StreamChunk / TokenCountResult: What comes back
    - DomainError: Tagged union of every failure the core can surface
    - ModelCatalog: Advisory, configuration-driven list of Gemini models
    - GenerativeModelPort: Abstract provider contract

Design Principles:
    - Immutable by Default: All domain models use frozen=True
    - Errors as Values: Ports and use cases return ``T | DomainError``
    - Provider Agnostic: Nothing here imports the Gemini SDK
"""

from .domain_type import Environment, ErrorKind, LogLevel, MessageRole, QueryStrategy
from .domain_value import (
    ChatMessage,
    GenerationResponse,
    Prompt,
    PromptWithHistory,
    StreamChunk,
    TokenCountResult,
    TokenUsage,
)
from .errors import (
    ERROR_CODES,
    ApiError,
    ConfigurationError,
    ConfigurationFailure,
    ContentFilteredError,
    DomainError,
    ExternalServiceError,
    InternalError,
    ModelNotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ToolNotFoundError,
    ValidationError,
    is_domain_error,
)
from .model_catalog import DEFAULT_CATALOG_PATH, ModelCatalog, ModelInfo, ModelSummary
from .ports import GenerativeModelPort

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "ERROR_CODES",
    "ApiError",
    "ChatMessage",
    "ConfigurationError",
    "ConfigurationFailure",
    "ContentFilteredError",
    "DomainError",
    "Environment",
    "ErrorKind",
    "ExternalServiceError",
    "GenerationResponse",
    "GenerativeModelPort",
    "InternalError",
    "LogLevel",
    "MessageRole",
    "ModelCatalog",
    "ModelInfo",
    "ModelNotFoundError",
    "ModelSummary",
    "Prompt",
    "PromptWithHistory",
    "QueryStrategy",
    "RateLimitError",
    "RequestTimeoutError",
    "StreamChunk",
    "TokenCountResult",
    "TokenUsage",
    "ToolNotFoundError",
    "ValidationError",
    "is_domain_error",
]
