"""CountTokens use case."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..domain.errors import DomainError, ValidationError, is_domain_error
from ..domain.ports import GenerativeModelPort


class CountTokensInput(BaseModel):
    text: str
    model: str

    model_config = ConfigDict(frozen=True)


class CountTokensOutput(BaseModel):
    total_tokens: int
    model: str

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CountTokensUseCase:
    """Blank text is rejected locally; everything else goes to the tokenizer."""

    def __init__(self, port: GenerativeModelPort):
        self._port = port

    async def execute(self, request: CountTokensInput) -> CountTokensOutput | DomainError:
        if not request.text.strip():
            return ValidationError(message="Text cannot be empty")

        result = await self._port.count_tokens(request.text, request.model)
        if is_domain_error(result):
            return result
        return CountTokensOutput(total_tokens=result.total_tokens, model=result.model)


__all__ = ["CountTokensInput", "CountTokensOutput", "CountTokensUseCase"]
