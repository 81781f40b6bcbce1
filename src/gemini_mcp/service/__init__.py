"""Use cases - thin orchestration over the GenerativeModelPort."""

from .count_tokens import CountTokensInput, CountTokensOutput, CountTokensUseCase
from .list_models import ListModelsOutput, ListModelsUseCase
from .query import QueryInput, QueryOutput, QueryUseCase, TokenUsageView, select_strategy

__all__ = [
    "CountTokensInput",
    "CountTokensOutput",
    "CountTokensUseCase",
    "ListModelsOutput",
    "ListModelsUseCase",
    "QueryInput",
    "QueryOutput",
    "QueryUseCase",
    "TokenUsageView",
    "select_strategy",
]
