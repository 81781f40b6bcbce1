"""Value Layer - Immutable Shapes Passed Between Components.

Every model here is a frozen Pydantic value object. None of them own another
component's state and none carry behaviour beyond small derived views; the
lifecycle of each instance is a single request.

Flow:
    Prompt / PromptWithHistory  -> port -> GenerationResponse
                                        -> StreamChunk (incremental)
    text + model                -> port -> TokenCountResult

Validation of business rules (e.g. "prompt must not be blank") lives in the
use cases, not here. These models only describe shape.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .domain_type import MessageRole


class ChatMessage(BaseModel):
    """One prior turn of a conversation.

    Attributes:
        role: Who authored the turn (user or model)
        content: Plain text of the turn
    """

    role: MessageRole
    content: str

    model_config = ConfigDict(frozen=True)


class Prompt(BaseModel):
    """A single generation request.

    Optional generation parameters are None when the caller did not set them;
    the adapter forwards only the ones that are set.

    Attributes:
        text: Prompt text sent as the final user turn
        model: Model identifier (any string the provider accepts)
        system_instruction: Persona/behaviour instruction
        temperature: Sampling randomness, 0-2
        max_output_tokens: Upper bound on generated tokens
        top_p: Nucleus sampling cutoff
        top_k: Top-k sampling cutoff
    """

    text: str
    model: str
    system_instruction: str | None = None
    temperature: float | None = None
    max_output_tokens: int | None = None
    top_p: float | None = None
    top_k: int | None = None

    model_config = ConfigDict(frozen=True)


class PromptWithHistory(Prompt):
    """Prompt plus the ordered conversation that precedes it.

    History order is conversation order. None and an empty tuple both mean
    "no history"; see has_history.
    """

    history: tuple[ChatMessage, ...] | None = None

    @property
    def has_history(self) -> bool:
        return bool(self.history)


class TokenUsage(BaseModel):
    """Token accounting reported by the provider. Missing counters are 0."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    model_config = ConfigDict(frozen=True)


class GenerationResponse(BaseModel):
    """A completed generation.

    Attributes:
        text: Full response text
        model: Model that produced it
        finish_reason: Provider's free-form finish reason ("UNKNOWN" if absent)
        usage: Token counters
    """

    text: str
    model: str
    finish_reason: str
    usage: TokenUsage = TokenUsage()

    model_config = ConfigDict(frozen=True)


class StreamChunk(BaseModel):
    """One increment of a live generation.

    A successful raw stream ends with exactly one chunk where is_complete is
    True and text is empty. Serializes as {"text", "isComplete"}.
    """

    text: str
    is_complete: bool = False

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def completion_marker(cls) -> StreamChunk:
        return cls(text="", is_complete=True)


class TokenCountResult(BaseModel):
    """Tokenizer output for a text under a given model."""

    total_tokens: int
    model: str

    model_config = ConfigDict(frozen=True)


__all__ = [
    "ChatMessage",
    "GenerationResponse",
    "Prompt",
    "PromptWithHistory",
    "StreamChunk",
    "TokenCountResult",
    "TokenUsage",
]
