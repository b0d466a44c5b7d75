"""Unit tests for request middleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from recipe_visibility.core.middleware import LoggingMiddleware, RequestIDMiddleware
from recipe_visibility.observability.logging import get_context


pytestmark = pytest.mark.unit


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(LoggingMiddleware, exclude_paths={"/health"})
    app.add_middleware(RequestIDMiddleware)

    @app.get("/context")
    async def context() -> dict[str, object]:
        return get_context()

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return TestClient(app)


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    def test_propagates_incoming_id(self, client: TestClient) -> None:
        """Should reuse a well-formed incoming request id."""
        response = client.get("/context", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.json()["request_id"] == "abc-123"

    def test_generates_id_when_missing(self, client: TestClient) -> None:
        """Should generate an id for requests without one."""
        response = client.get("/context")

        assert len(response.headers["X-Request-ID"]) == 36

    def test_replaces_malformed_id(self, client: TestClient) -> None:
        """Should not echo ids with unexpected characters."""
        response = client.get("/context", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["X-Request-ID"] != "bad id with spaces"


class TestLoggingMiddleware:
    """Tests for LoggingMiddleware."""

    def test_binds_request_context(self, client: TestClient) -> None:
        """Should bind method and path for log correlation."""
        body = client.get("/context").json()

        assert body["method"] == "GET"
        assert body["path"] == "/context"

    def test_adds_timing_header(self, client: TestClient) -> None:
        """Should report processing time in the response headers."""
        response = client.get("/context")

        assert response.headers["X-Process-Time"].endswith("ms")

    def test_skips_excluded_paths(self, client: TestClient) -> None:
        """Should not time or log excluded paths."""
        response = client.get("/health")

        assert "X-Process-Time" not in response.headers
