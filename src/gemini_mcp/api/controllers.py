"""Controllers - schema-validate raw tool arguments, call a use case, wrap the result.

Controllers own the server-side defaults (model, max output tokens). They
receive them as constructor parameters at startup; nothing here reads
configuration on its own.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from ..domain.domain_value import ChatMessage
from ..domain.errors import is_domain_error
from ..service import CountTokensInput, CountTokensUseCase, ListModelsUseCase, QueryInput, QueryUseCase
from .contracts import CountTokensRequest, QueryGeminiRequest, ToolResponse

VALIDATION_ERROR = "VALIDATION_ERROR"

RequestT = TypeVar("RequestT", bound=BaseModel)


def _parse(schema: type[RequestT], raw: Any) -> RequestT | ToolResponse:
    """Validate raw arguments; on failure join every issue message with ", "."""
    try:
        return schema.model_validate({} if raw is None else raw)
    except SchemaValidationError as exc:
        return ToolResponse.failure(VALIDATION_ERROR, ", ".join(issue["msg"] for issue in exc.errors()))


class QueryGeminiController:
    """
    query_gemini boundary.

    Args:
        use_case: Query use case
        default_model: Used when the caller omits model, or always when
            overrides are disabled
        default_max_output_tokens: Used when the caller omits maxOutputTokens
        allow_model_override: Whether a caller-supplied model is honoured
    """

    def __init__(
        self,
        use_case: QueryUseCase,
        default_model: str,
        default_max_output_tokens: int,
        allow_model_override: bool = True,
    ):
        self._use_case = use_case
        self._default_model = default_model
        self._default_max_output_tokens = default_max_output_tokens
        self._allow_model_override = allow_model_override

    async def handle(self, raw: Any) -> ToolResponse:
        parsed = _parse(QueryGeminiRequest, raw)
        if isinstance(parsed, ToolResponse):
            return parsed

        result = await self._use_case.execute(self._to_input(parsed))
        if is_domain_error(result):
            return ToolResponse.from_error(result)
        return ToolResponse.ok(result)

    async def handle_stream(self, raw: Any) -> AsyncIterator[ToolResponse]:
        """One envelope per chunk; stops after the first error envelope."""
        parsed = _parse(QueryGeminiRequest, raw)
        if isinstance(parsed, ToolResponse):
            yield parsed
            return

        async for chunk in self._use_case.execute_stream(self._to_input(parsed)):
            if is_domain_error(chunk):
                yield ToolResponse.from_error(chunk)
                return
            yield ToolResponse.ok(chunk)

    def _to_input(self, request: QueryGeminiRequest) -> QueryInput:
        history = None
        if request.history is not None:
            history = tuple(ChatMessage(role=turn.role, content=turn.content) for turn in request.history)

        return QueryInput(
            prompt=request.prompt,
            model=self._resolve_model(request.model),
            system_instruction=request.system_instruction,
            temperature=request.temperature,
            max_output_tokens=request.max_output_tokens or self._default_max_output_tokens,
            history=history,
            stream=request.stream,
        )

    def _resolve_model(self, requested: str | None) -> str:
        if self._allow_model_override and requested:
            return requested
        return self._default_model


class ListModelsController:
    def __init__(self, use_case: ListModelsUseCase):
        self._use_case = use_case

    async def handle(self, raw: Any = None) -> ToolResponse:
        result = await self._use_case.execute()
        if is_domain_error(result):
            return ToolResponse.from_error(result)
        return ToolResponse.ok(result)


class CountTokensController:
    def __init__(self, use_case: CountTokensUseCase, default_model: str, allow_model_override: bool = True):
        self._use_case = use_case
        self._default_model = default_model
        self._allow_model_override = allow_model_override

    async def handle(self, raw: Any) -> ToolResponse:
        parsed = _parse(CountTokensRequest, raw)
        if isinstance(parsed, ToolResponse):
            return parsed

        model = parsed.model if self._allow_model_override and parsed.model else self._default_model
        result = await self._use_case.execute(CountTokensInput(text=parsed.text, model=model))
        if is_domain_error(result):
            return ToolResponse.from_error(result)
        return ToolResponse.ok(result)


__all__ = ["CountTokensController", "ListModelsController", "QueryGeminiController"]
