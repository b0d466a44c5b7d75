"""Unit tests for logging configuration."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from loguru import logger

from recipe_visibility.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    setup_logging,
)


if TYPE_CHECKING:
    from collections.abc import Iterator


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    clear_context()
    yield
    clear_context()
    logger.remove()


class TestLogContext:
    """Tests for request context helpers."""

    def test_bind_merges_values(self) -> None:
        """Should merge later bindings into the context."""
        bind_context(request_id="req-1")
        bind_context(path="/admin/recipes")

        assert get_context() == {"request_id": "req-1", "path": "/admin/recipes"}

    def test_clear(self) -> None:
        """Should drop all bound values."""
        bind_context(request_id="req-1")

        clear_context()

        assert get_context() == {}


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_lines_include_context(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Should emit one JSON object per record with the request context."""
        setup_logging(log_level="INFO", log_format="json")
        bind_context(request_id="req-7")

        get_logger("recipe_visibility.test").info("Visibility propagated", count=2)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["message"] == "Visibility propagated"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "recipe_visibility.test"
        assert payload["request_id"] == "req-7"
        assert payload["count"] == 2

    def test_level_filters_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should drop records below the configured level."""
        setup_logging(log_level="WARNING", log_format="json")

        get_logger("recipe_visibility.test").info("hidden")

        assert capsys.readouterr().out == ""

    def test_text_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should render readable lines with the context appended."""
        setup_logging(log_level="DEBUG", log_format="text", is_development=True)
        bind_context(request_id="req-9")

        get_logger("recipe_visibility.test").debug("Relation graph built")

        out = capsys.readouterr().out
        assert "Relation graph built" in out
        assert "request_id=req-9" in out
