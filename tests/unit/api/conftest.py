"""Fixtures for HTTP-level endpoint tests.

The app is built with create_app but its lifespan never runs; the content
store client and write chain on app.state are replaced with fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from fakes import API_KEY, InMemoryRecipeStore, RecordingChannel, recipe
from recipe_visibility.factory import create_app
from recipe_visibility.services.visibility import WriteChain


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI


@pytest.fixture
def store() -> InMemoryRecipeStore:
    return InMemoryRecipeStore(
        [
            recipe("burger", "Smash Burger", "Pickled Onion", public=True),
            recipe("onion", "Pickled Onion"),
            recipe("soup", "Tomato Soup", enterprise=True),
        ]
    )


@pytest.fixture
def channel(store: InMemoryRecipeStore) -> RecordingChannel:
    return RecordingChannel("SANITY_API_WRITE_TOKEN", store=store)


@pytest.fixture
def app(
    monkeypatch: pytest.MonkeyPatch,
    store: InMemoryRecipeStore,
    channel: RecordingChannel,
) -> FastAPI:
    monkeypatch.setenv("ADMIN_API_KEY", API_KEY)
    application = create_app()
    application.state.content_store_client = store
    application.state.write_chain = WriteChain([channel], project_id="test-project")
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-API-Key": API_KEY},
    ) as ac:
        yield ac
