"""Gemini tools exposed over MCP stdio and HTTP."""

__version__ = "0.1.0"

__all__ = ["__version__"]
