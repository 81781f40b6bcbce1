"""Tool call contracts - raw input schemas and the uniform response envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.domain_type import MessageRole
from ...domain.errors import DomainError

QUERY_GEMINI = "query_gemini"
LIST_GEMINI_MODELS = "list_gemini_models"
COUNT_GEMINI_TOKENS = "count_gemini_tokens"


class HistoryTurn(BaseModel):
    role: MessageRole
    content: str


class QueryGeminiRequest(BaseModel):
    """Raw query_gemini arguments (camelCase on the wire)."""

    prompt: str = Field(
        min_length=1,
        max_length=100_000,
        description="The prompt to send to Gemini. Be specific and clear.",
        examples=["Explain the CAP theorem in two sentences."],
    )
    model: str | None = Field(
        default=None,
        description="Gemini model name. Ignored when the server forces its default model.",
        examples=["gemini-2.5-flash"],
    )
    system_instruction: str | None = Field(default=None, max_length=10_000)
    temperature: float | None = Field(default=None, ge=0, le=2)
    max_output_tokens: int | None = Field(default=None, ge=1, le=8192)
    history: list[HistoryTurn] | None = Field(
        default=None,
        description="Previous conversation turns, oldest first",
    )
    stream: bool = Field(
        default=True,
        description="Stream upstream to keep long generations alive. Set false for a single request.",
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


class CountTokensRequest(BaseModel):
    """Raw count_gemini_tokens arguments."""

    text: str = Field(min_length=1, max_length=1_000_000, description="The text to count tokens for")
    model: str | None = Field(default=None, description="The model to use for tokenization")

    model_config = ConfigDict(protected_namespaces=())


class ErrorBody(BaseModel):
    code: str
    message: str

    model_config = ConfigDict(frozen=True)


class ToolResponse(BaseModel):
    """Uniform envelope: success carries data, failure carries error."""

    success: bool
    data: dict[str, Any] | None = None
    error: ErrorBody | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def ok(cls, data: BaseModel) -> ToolResponse:
        return cls(success=True, data=data.model_dump(mode="json", by_alias=True))

    @classmethod
    def failure(cls, code: str, message: str) -> ToolResponse:
        return cls(success=False, error=ErrorBody(code=code, message=message))

    @classmethod
    def from_error(cls, error: DomainError) -> ToolResponse:
        return cls.failure(error.code, error.message)

    def to_wire(self) -> dict[str, Any]:
        if self.error is not None:
            return {"success": False, "error": self.error.model_dump()}
        return {"success": True, "data": self.data}


class ToolDescriptor(BaseModel):
    """What a client sees in tools/list."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


__all__ = [
    "COUNT_GEMINI_TOKENS",
    "LIST_GEMINI_MODELS",
    "QUERY_GEMINI",
    "CountTokensRequest",
    "ErrorBody",
    "HistoryTurn",
    "QueryGeminiRequest",
    "ToolDescriptor",
    "ToolResponse",
]
