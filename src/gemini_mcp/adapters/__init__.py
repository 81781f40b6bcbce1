"""Provider adapters implementing GenerativeModelPort."""

from .gemini import GoogleGeminiAdapter

__all__ = ["GoogleGeminiAdapter"]
