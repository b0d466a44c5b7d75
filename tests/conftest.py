"""Shared test fixtures for the recipe visibility service tests.

Tests run with APP_ENV=test so config/environments/test/ is loaded, and
every credential slot starts empty regardless of the developer's shell.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from recipe_visibility.core.config import get_settings
from recipe_visibility.core.config.settings import WRITE_TOKEN_SLOTS


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset cached settings and clear secrets around every test."""
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("CONFIG_DIR", raising=False)
    for slot in (*WRITE_TOKEN_SLOTS, "ADMIN_API_KEY"):
        monkeypatch.delenv(slot, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
