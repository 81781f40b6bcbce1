"""Google Gemini adapter - the only module that touches the google-genai SDK.

Implements GenerativeModelPort against ``google.genai.Client`` (async surface).

Responsibilities:
    - Translate Prompt/PromptWithHistory into GenerateContentConfig + contents
    - Race every blocking provider call against the configured timeout
    - Drain buffered streams and aggregate them into one GenerationResponse
    - Turn blocked prompts and filtered candidates (reported as response data)
      into ContentFilteredError
    - Classify provider failures into the closed DomainError set

Error Classification (best-effort):
    Gemini failures arrive as free-text messages. The classifier matches
    substrings ("429", "not found", "safety", ...) in a fixed order. This is
    a heuristic over upstream wording, not a contract with the provider; an
    upstream rewording silently downgrades a specific error to ApiError.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import AsyncIterator, Awaitable, Sequence
from typing import Any, TypeVar

from google import genai
from google.genai import types

from ..domain.domain_value import (
    ChatMessage,
    GenerationResponse,
    Prompt,
    PromptWithHistory,
    StreamChunk,
    TokenCountResult,
    TokenUsage,
)
from ..domain.errors import (
    ApiError,
    ContentFilteredError,
    DomainError,
    ExternalServiceError,
    ModelNotFoundError,
    RateLimitError,
    RequestTimeoutError,
)
from ..domain.model_catalog import ModelCatalog, ModelInfo
from ..domain.ports import GenerativeModelPort
from ..logging_config import sanitize_error_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROVIDER_NAME = "Gemini"
UNKNOWN_FINISH_REASON = "UNKNOWN"

# Finish reasons that mean the candidate was withheld by a content filter
FILTERED_FINISH_REASONS = frozenset({"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"})

_RETRY_AFTER_PATTERNS = (
    re.compile(r"retry in (\d+(?:\.\d+)?)\s*s", re.IGNORECASE),
    re.compile(r"retryDelay['\"]?\s*:\s*['\"]?(\d+(?:\.\d+)?)s", re.IGNORECASE),
)


class DeadlineExceeded(Exception):
    """Sentinel raised when the timeout wins the race."""


class ContentBlocked(Exception):
    """Sentinel raised when Gemini answers but withholds the content."""


def parse_retry_after_ms(message: str) -> int | None:
    for pattern in _RETRY_AFTER_PATTERNS:
        match = pattern.search(message)
        if match:
            return round(float(match.group(1)) * 1000)
    return None


class GoogleGeminiAdapter(GenerativeModelPort):
    """
    Gemini implementation of the capability port.

    The catalogue is advisory: any model string is forwarded to the API, and
    only get_model consults the catalogue.
    """

    def __init__(self, client: genai.Client, timeout_ms: int, catalog: ModelCatalog):
        self._client = client
        self._timeout_ms = timeout_ms
        self._catalog = catalog

    @classmethod
    def from_api_key(cls, api_key: str, timeout_ms: int, catalog: ModelCatalog) -> GoogleGeminiAdapter:
        return cls(client=genai.Client(api_key=api_key), timeout_ms=timeout_ms, catalog=catalog)

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    # ------------------------------------------------------------------
    # Blocking generation
    # ------------------------------------------------------------------

    async def generate(self, prompt: Prompt) -> GenerationResponse | DomainError:
        try:
            response = await self._with_timeout(
                self._client.aio.models.generate_content(
                    model=prompt.model,
                    contents=prompt.text,
                    config=self._build_config(prompt),
                )
            )
            return self._map_response(response, prompt.model)
        except Exception as exc:
            return self._map_error(exc, prompt.model)

    async def generate_with_history(self, prompt: PromptWithHistory) -> GenerationResponse | DomainError:
        try:
            chat = self._start_chat(prompt)
            response = await self._with_timeout(chat.send_message(prompt.text))
            return self._map_response(response, prompt.model)
        except Exception as exc:
            return self._map_error(exc, prompt.model)

    async def generate_buffered(self, prompt: Prompt) -> GenerationResponse | DomainError:
        try:
            opening = self._client.aio.models.generate_content_stream(
                model=prompt.model,
                contents=prompt.text,
                config=self._build_config(prompt),
            )
            return await self._with_timeout(self._consume_buffered(opening, prompt.model))
        except Exception as exc:
            return self._map_error(exc, prompt.model)

    async def generate_with_history_buffered(self, prompt: PromptWithHistory) -> GenerationResponse | DomainError:
        try:
            chat = self._start_chat(prompt)
            return await self._with_timeout(self._consume_buffered(chat.send_message_stream(prompt.text), prompt.model))
        except Exception as exc:
            return self._map_error(exc, prompt.model)

    # ------------------------------------------------------------------
    # Raw streams (no single deadline: they yield incrementally)
    # ------------------------------------------------------------------

    async def stream_generate(self, prompt: Prompt) -> AsyncIterator[StreamChunk | DomainError]:
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=prompt.model,
                contents=prompt.text,
                config=self._build_config(prompt),
            )
            async for chunk in stream:
                self._check_blocked(chunk)
                yield StreamChunk(text=chunk.text or "")
            yield StreamChunk.completion_marker()
        except Exception as exc:
            yield self._map_error(exc, prompt.model)

    async def stream_generate_with_history(self, prompt: PromptWithHistory) -> AsyncIterator[StreamChunk | DomainError]:
        try:
            chat = self._start_chat(prompt)
            stream = await chat.send_message_stream(prompt.text)
            async for chunk in stream:
                self._check_blocked(chunk)
                yield StreamChunk(text=chunk.text or "")
            yield StreamChunk.completion_marker()
        except Exception as exc:
            yield self._map_error(exc, prompt.model)

    # ------------------------------------------------------------------
    # Tokens and catalogue
    # ------------------------------------------------------------------

    async def count_tokens(self, text: str, model_name: str) -> TokenCountResult | DomainError:
        try:
            result = await self._with_timeout(self._client.aio.models.count_tokens(model=model_name, contents=text))
            return TokenCountResult(total_tokens=result.total_tokens or 0, model=model_name)
        except Exception as exc:
            return self._map_error(exc, model_name)

    async def list_models(self) -> tuple[ModelInfo, ...] | DomainError:
        return self._catalog.root

    async def get_model(self, model_name: str) -> ModelInfo | DomainError:
        try:
            return self._catalog.find(model_name)
        except KeyError:
            return ModelNotFoundError(model_name=model_name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _with_timeout(self, awaitable: Awaitable[T]) -> T:
        """Race the provider call against the timer; the loser is cancelled."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout_ms / 1000)
        except TimeoutError as exc:
            raise DeadlineExceeded from exc

    @staticmethod
    def _build_config(prompt: Prompt) -> types.GenerateContentConfig | None:
        """Forward only the generation parameters the caller actually set."""
        settings: dict[str, Any] = {
            "temperature": prompt.temperature,
            "max_output_tokens": prompt.max_output_tokens,
            "top_p": prompt.top_p,
            "top_k": prompt.top_k,
            "system_instruction": prompt.system_instruction,
        }
        present = {key: value for key, value in settings.items() if value is not None}
        if not present:
            return None
        return types.GenerateContentConfig(**present)

    @staticmethod
    def _map_history(history: Sequence[ChatMessage] | None) -> list[types.Content]:
        return [types.Content(role=message.role.value, parts=[types.Part(text=message.content)]) for message in history or ()]

    def _start_chat(self, prompt: PromptWithHistory) -> Any:
        return self._client.aio.chats.create(
            model=prompt.model,
            config=self._build_config(prompt),
            history=self._map_history(prompt.history),
        )

    async def _consume_buffered(self, opening: Awaitable[AsyncIterator[Any]], model: str) -> GenerationResponse:
        # Consuming every chunk keeps the connection alive, which prevents
        # idle-timeout disconnects on long generations. Chunk texts are only
        # joined into the final aggregate; nothing is surfaced incrementally.
        stream = await opening
        texts: list[str] = []
        finish_reason: str | None = None
        usage: Any = None
        async for chunk in stream:
            self._check_blocked(chunk)
            if chunk.text:
                texts.append(chunk.text)
            finish_reason = self._finish_reason(chunk) or finish_reason
            usage = getattr(chunk, "usage_metadata", None) or usage
        return GenerationResponse(
            text="".join(texts),
            model=model,
            finish_reason=finish_reason or UNKNOWN_FINISH_REASON,
            usage=self._map_usage(usage),
        )

    def _map_response(self, response: Any, model: str) -> GenerationResponse:
        self._check_blocked(response)
        return GenerationResponse(
            text=response.text or "",
            model=model,
            finish_reason=self._finish_reason(response) or UNKNOWN_FINISH_REASON,
            usage=self._map_usage(getattr(response, "usage_metadata", None)),
        )

    def _check_blocked(self, response: Any) -> None:
        """Gemini reports filtering as data, not as an exception.

        Raises:
            ContentBlocked: If the prompt was blocked or the first candidate
                stopped for a content-filter reason
        """
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None)
        if block_reason is not None:
            reason = str(getattr(block_reason, "value", block_reason))
            if reason != "BLOCKED_REASON_UNSPECIFIED":
                raise ContentBlocked(f"prompt blocked ({reason})")

        finish_reason = self._finish_reason(response)
        if finish_reason in FILTERED_FINISH_REASONS:
            raise ContentBlocked(f"candidate stopped ({finish_reason})")

    @staticmethod
    def _finish_reason(response: Any) -> str | None:
        candidates = getattr(response, "candidates", None)
        if not candidates:
            return None
        reason = getattr(candidates[0], "finish_reason", None)
        if reason is None:
            return None
        return str(getattr(reason, "value", reason))

    @staticmethod
    def _map_usage(usage: Any) -> TokenUsage:
        if usage is None:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=getattr(usage, "prompt_token_count", None) or 0,
            completion_tokens=getattr(usage, "candidates_token_count", None) or 0,
            total_tokens=getattr(usage, "total_token_count", None) or 0,
        )

    def _map_error(self, exc: Exception, model: str) -> DomainError:
        """Classify a provider failure. Order matters; first match wins."""
        if isinstance(exc, DeadlineExceeded):
            return RequestTimeoutError(timeout_ms=self._timeout_ms)
        if isinstance(exc, ContentBlocked):
            logger.warning("Gemini withheld content: %s", exc)
            return ContentFilteredError()

        raw = str(exc)
        if not raw:
            return ExternalServiceError(message="Unknown error occurred", service=PROVIDER_NAME)

        message = raw.lower()
        if "rate limit" in message or "429" in message:
            return RateLimitError(retry_after_ms=parse_retry_after_ms(raw))
        if "not found" in message or "404" in message:
            return ModelNotFoundError(model_name=model)
        if "safety" in message or "blocked" in message:
            return ContentFilteredError()

        cleaned = sanitize_error_message(raw)
        logger.error("Gemini API error: %s", cleaned)
        status = getattr(exc, "code", None)
        return ApiError(message=cleaned, status_code=status if isinstance(status, int) else None)


__all__ = ["ContentBlocked", "DeadlineExceeded", "GoogleGeminiAdapter", "parse_retry_after_ms"]
