from .health import HealthResponse
from .tools import (
    COUNT_GEMINI_TOKENS,
    LIST_GEMINI_MODELS,
    QUERY_GEMINI,
    CountTokensRequest,
    ErrorBody,
    HistoryTurn,
    QueryGeminiRequest,
    ToolDescriptor,
    ToolResponse,
)

__all__ = [
    "COUNT_GEMINI_TOKENS",
    "LIST_GEMINI_MODELS",
    "QUERY_GEMINI",
    "CountTokensRequest",
    "ErrorBody",
    "HealthResponse",
    "HistoryTurn",
    "QueryGeminiRequest",
    "ToolDescriptor",
    "ToolResponse",
]
