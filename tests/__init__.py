"""
Test suite for gemini-mcp.

Demonstrates testing patterns for a ports-and-adapters tool server:
- Use case tests against an in-memory port (no network)
- Adapter tests against a stand-in genai client
- Envelope contract tests at the controller and registry boundary
- Integration tests for the HTTP surface
"""
