"""
Liveness surface of the HTTP app.

Demonstrates:
- /health answers without settings or a Gemini client being wired
- The payload reports this package's name and version
- / points callers at the generated API docs
"""

import pytest
from fastapi.testclient import TestClient

from gemini_mcp import __version__


@pytest.fixture
def http():
    """App client with no dependency overrides; health must not need any."""
    from gemini_mcp.main import app

    return TestClient(app)


def test_health_reports_service_and_version(http: TestClient):
    """
    Demonstrates: Version comes from the installed package.

    Monitoring can tell which release answered without calling a tool.
    """
    response = http.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "gemini-mcp", "version": __version__}


def test_health_is_json(http: TestClient):
    """Demonstrates: Content type declared by the response model."""
    assert http.get("/health").headers["content-type"].startswith("application/json")


def test_root_redirects_to_docs(http: TestClient):
    """Demonstrates: Root is a pointer to the generated docs."""
    response = http.get("/", follow_redirects=False)

    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/docs"
