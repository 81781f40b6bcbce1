"""
Tests for CountTokensUseCase.

Demonstrates:
- Local validation before the tokenizer call
- Exactly one port call with the requested model
"""

import pytest

from gemini_mcp.domain.domain_value import TokenCountResult
from gemini_mcp.domain.errors import ModelNotFoundError, ValidationError
from gemini_mcp.service.count_tokens import CountTokensInput, CountTokensOutput, CountTokensUseCase


async def test_counts_tokens_with_requested_model(fake_port):
    """Demonstrates: Text and model are forwarded once, verbatim."""
    fake_port.token_count = TokenCountResult(total_tokens=3, model="m2")

    result = await CountTokensUseCase(fake_port).execute(CountTokensInput(text="Test text", model="m2"))

    assert fake_port.calls == [("count_tokens", ("Test text", "m2"))]
    assert isinstance(result, CountTokensOutput)
    assert result.model_dump(by_alias=True) == {"totalTokens": 3, "model": "m2"}


@pytest.mark.parametrize("text", ["", "    "])
async def test_blank_text_is_rejected(fake_port, text):
    """Demonstrates: Validation error without a provider round-trip."""
    result = await CountTokensUseCase(fake_port).execute(CountTokensInput(text=text, model="m1"))

    assert isinstance(result, ValidationError)
    assert result.message == "Text cannot be empty"
    assert fake_port.calls == []


async def test_port_error_passes_through(fake_port):
    """Demonstrates: Tokenizer failures reach the caller unchanged."""
    fake_port.token_count = ModelNotFoundError(model_name="m9")

    result = await CountTokensUseCase(fake_port).execute(CountTokensInput(text="x", model="m9"))

    assert result.code == "GEMINI_MODEL_NOT_FOUND"
    assert result.message == "Model not found: m9"
