"""Query use case - validate, pick an upstream strategy, reshape the answer."""

from __future__ import annotations

from collections.abc import AsyncIterator

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..domain.domain_type import QueryStrategy
from ..domain.domain_value import ChatMessage, GenerationResponse, PromptWithHistory, StreamChunk
from ..domain.errors import DomainError, ValidationError, is_domain_error
from ..domain.ports import GenerativeModelPort


class QueryInput(BaseModel):
    """Use-case input, already schema-validated by the controller.

    stream=None means "not specified" and behaves like True.
    """

    prompt: str
    model: str
    system_instruction: str | None = None
    temperature: float | None = None
    max_output_tokens: int | None = None
    history: tuple[ChatMessage, ...] | None = None
    stream: bool | None = None

    model_config = ConfigDict(frozen=True)


class TokenUsageView(BaseModel):
    prompt: int
    completion: int
    total: int

    model_config = ConfigDict(frozen=True)


class QueryOutput(BaseModel):
    """Caller-facing result; serializes with camelCase keys."""

    response: str
    model: str
    finish_reason: str
    token_usage: TokenUsageView

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


def select_strategy(has_history: bool, stream: bool | None) -> QueryStrategy:
    """Pure (history x streaming) branch table.

    Only an explicit ``stream=False`` disables buffered streaming.
    """
    buffered = stream is not False
    if has_history:
        return QueryStrategy.GENERATE_WITH_HISTORY_BUFFERED if buffered else QueryStrategy.GENERATE_WITH_HISTORY
    return QueryStrategy.GENERATE_BUFFERED if buffered else QueryStrategy.GENERATE


class QueryUseCase:
    """
    Orchestrates one generation.

    Responsibilities:
    1. Reject blank prompts before any provider call
    2. Build the PromptWithHistory value
    3. Choose one of four port methods (no fallback between them)
    4. Pass port errors through untouched
    5. Rename usage counters into the output DTO
    """

    def __init__(self, port: GenerativeModelPort):
        self._port = port

    async def execute(self, request: QueryInput) -> QueryOutput | DomainError:
        invalid = self._validate(request)
        if invalid is not None:
            return invalid

        prompt = self._build_prompt(request)
        strategy = select_strategy(prompt.has_history, request.stream)
        invoke = {
            QueryStrategy.GENERATE: self._port.generate,
            QueryStrategy.GENERATE_WITH_HISTORY: self._port.generate_with_history,
            QueryStrategy.GENERATE_BUFFERED: self._port.generate_buffered,
            QueryStrategy.GENERATE_WITH_HISTORY_BUFFERED: self._port.generate_with_history_buffered,
        }[strategy]

        result = await invoke(prompt)
        if is_domain_error(result):
            return result
        return self._to_output(result)

    async def execute_stream(self, request: QueryInput) -> AsyncIterator[StreamChunk | DomainError]:
        """
        Incremental path: yield each chunk as the provider produces it.

        Same validation as execute, but only the history branch applies;
        the stream flag is irrelevant because this path never buffers.
        """
        invalid = self._validate(request)
        if invalid is not None:
            yield invalid
            return

        prompt = self._build_prompt(request)
        if prompt.has_history:
            stream = self._port.stream_generate_with_history(prompt)
        else:
            stream = self._port.stream_generate(prompt)

        async for item in stream:
            yield item

    @staticmethod
    def _validate(request: QueryInput) -> ValidationError | None:
        if not request.prompt.strip():
            return ValidationError(message="Prompt cannot be empty")
        return None

    @staticmethod
    def _build_prompt(request: QueryInput) -> PromptWithHistory:
        return PromptWithHistory(
            text=request.prompt,
            model=request.model,
            system_instruction=request.system_instruction,
            temperature=request.temperature,
            max_output_tokens=request.max_output_tokens,
            history=request.history,
        )

    @staticmethod
    def _to_output(response: GenerationResponse) -> QueryOutput:
        return QueryOutput(
            response=response.text,
            model=response.model,
            finish_reason=response.finish_reason,
            token_usage=TokenUsageView(
                prompt=response.usage.prompt_tokens,
                completion=response.usage.completion_tokens,
                total=response.usage.total_tokens,
            ),
        )


__all__ = ["QueryInput", "QueryOutput", "QueryUseCase", "TokenUsageView", "select_strategy"]
