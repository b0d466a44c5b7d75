"""Unit tests for admin endpoints.

Tests cover:
- API key enforcement
- Visibility propagation over HTTP
- Error mapping for validation, permission and content store failures
- Catalog listing and pagination
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fakes import API_PREFIX, InMemoryRecipeStore, RecordingChannel
from recipe_visibility.content_store.channels import WriteOutcomeKind
from recipe_visibility.content_store.exceptions import ContentStoreResponseError
from recipe_visibility.core.config import get_settings
from recipe_visibility.services.visibility import WriteChain


if TYPE_CHECKING:
    from fastapi import FastAPI
    from httpx import AsyncClient


pytestmark = pytest.mark.unit

VISIBILITY_URL = f"{API_PREFIX}/admin/recipes/visibility"
RECIPES_URL = f"{API_PREFIX}/admin/recipes"


class _FailingStore(InMemoryRecipeStore):
    async def count_catalog_recipes(self, q: str | None, category: str | None) -> int:
        raise ContentStoreResponseError(500, "query failed")


class TestApiKey:
    """Tests for the admin API key gate."""

    async def test_rejects_missing_key(self, client: AsyncClient) -> None:
        """Should return 401 without the API key header."""
        response = await client.get(RECIPES_URL, headers={"X-API-Key": ""})

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    async def test_rejects_wrong_key(self, client: AsyncClient) -> None:
        """Should return 401 for a wrong key."""
        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "burger", "audience": "public", "value": True},
            headers={"X-API-Key": "nope"},
        )

        assert response.status_code == 401

    async def test_unconfigured_key(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should return 500 when the server has no API key."""
        monkeypatch.delenv("ADMIN_API_KEY")
        get_settings.cache_clear()

        response = await client.get(RECIPES_URL)

        assert response.status_code == 500
        assert response.json()["error"] == "CONFIGURATION_ERROR"


class TestUpdateVisibility:
    """Tests for PATCH /admin/recipes/visibility."""

    async def test_propagates_to_sub_recipes(
        self,
        client: AsyncClient,
        store: InMemoryRecipeStore,
        channel: RecordingChannel,
    ) -> None:
        """Should write the seed and every linked recipe."""
        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "burger", "audience": "enterprise", "value": True},
        )

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "updatedIds": ["burger", "onion"],
            "relatedIds": ["burger", "onion"],
            "updatedCount": 2,
            "relatedCount": 2,
        }
        assert store.recipes["burger"].visibility.public is True
        assert store.recipes["burger"].visibility.enterprise is True
        assert store.recipes["onion"].visibility.enterprise is True
        assert store.recipes["onion"].visibility.public is False
        assert [recipe_id for recipe_id, _ in channel.calls] == ["burger", "onion"]

    async def test_accepts_id_list(
        self,
        client: AsyncClient,
        channel: RecordingChannel,
    ) -> None:
        """Should combine ids and skip non-string entries."""
        response = await client.patch(
            VISIBILITY_URL,
            json={"ids": [" soup ", 7, None], "audience": "public", "value": True},
        )

        assert response.status_code == 200
        assert response.json()["updatedIds"] == ["soup"]
        assert [recipe_id for recipe_id, _ in channel.calls] == ["soup"]

    @pytest.mark.parametrize(
        "body",
        [
            {"audience": "public", "value": True},
            {"ids": [], "audience": "public", "value": True},
            {"ids": [1, "  "], "audience": "public", "value": True},
        ],
    )
    async def test_rejects_missing_ids(self, client: AsyncClient, body: dict) -> None:
        """Should return 400 when no usable id is given."""
        response = await client.patch(VISIBILITY_URL, json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "BAD_REQUEST"

    async def test_rejects_draft_ids(
        self,
        client: AsyncClient,
        channel: RecordingChannel,
    ) -> None:
        """Should refuse to update draft documents."""
        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "drafts.burger", "audience": "public", "value": False},
        )

        assert response.status_code == 400
        assert "drafts.burger" in response.json()["message"]
        assert channel.calls == []

    @pytest.mark.parametrize(
        ("body", "message"),
        [
            (
                {"id": "burger", "audience": "private", "value": True},
                'audience must be "public" or "enterprise"',
            ),
            (
                {"id": "burger", "value": True},
                'audience must be "public" or "enterprise"',
            ),
            (
                {"id": "burger", "audience": "public", "value": "yes"},
                "value must be a boolean",
            ),
            (
                {"id": "burger", "audience": "public"},
                "value must be a boolean",
            ),
        ],
    )
    async def test_rejects_invalid_audience_or_value(
        self,
        client: AsyncClient,
        channel: RecordingChannel,
        body: dict,
        message: str,
    ) -> None:
        """Should return 400 with the validation message."""
        response = await client.patch(VISIBILITY_URL, json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "BAD_REQUEST"
        assert response.json()["message"] == message
        assert channel.calls == []

    async def test_validates_input_before_credentials(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Should report bad input even when no write token is configured."""
        app.state.write_chain = WriteChain([])

        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "burger", "audience": "staff", "value": True},
        )

        assert response.status_code == 400

    async def test_ignores_non_string_id(
        self,
        client: AsyncClient,
        channel: RecordingChannel,
    ) -> None:
        """Should fall back to ids when id is not a string."""
        response = await client.patch(
            VISIBILITY_URL,
            json={"id": 42, "ids": ["soup"], "audience": "public", "value": True},
        )

        assert response.status_code == 200
        assert response.json()["updatedIds"] == ["soup"]
        assert [recipe_id for recipe_id, _ in channel.calls] == ["soup"]

    async def test_rejects_non_object_body(self, client: AsyncClient) -> None:
        """Should return 422 when the body is not a JSON object."""
        response = await client.patch(VISIBILITY_URL, json=["burger"])

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_unknown_recipe(self, client: AsyncClient) -> None:
        """Should return 404 when nothing was written."""
        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "ghost", "audience": "public", "value": True},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "No matching recipe found"

    async def test_permission_denied(
        self,
        client: AsyncClient,
        channel: RecordingChannel,
    ) -> None:
        """Should return 403 when the token cannot update documents."""
        channel.fail_on["burger"] = WriteOutcomeKind.PERMISSION_DENIED

        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "burger", "audience": "public", "value": False},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "FORBIDDEN"

    async def test_missing_write_credentials(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Should return 500 when no write token is configured."""
        app.state.write_chain = WriteChain([])

        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "burger", "audience": "public", "value": True},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "CONFIGURATION_ERROR"

    async def test_write_chain_not_initialized(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Should return 503 before startup created the write chain."""
        app.state.write_chain = None

        response = await client.patch(
            VISIBILITY_URL,
            json={"id": "burger", "audience": "public", "value": True},
        )

        assert response.status_code == 503


class TestListRecipes:
    """Tests for GET /admin/recipes."""

    async def test_lists_first_page(
        self,
        client: AsyncClient,
        store: InMemoryRecipeStore,
    ) -> None:
        """Should return items, paging fields and categories."""
        store.recipes["burger"].category_path = ["Mains", "Burgers"]
        store.recipes["soup"].category_path = ["Soups"]

        response = await client.get(RECIPES_URL)

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body["items"]] == ["onion", "burger", "soup"]
        assert body["items"][1] == {
            "id": "burger",
            "pluNumber": None,
            "title": "Smash Burger",
            "categoryPath": ["Mains", "Burgers"],
            "portions": None,
            "visibility": {"public": True, "enterprise": False},
        }
        assert body["total"] == 3
        assert body["page"] == 1
        assert body["pageSize"] == 10
        assert body["totalPages"] == 1
        assert body["categories"] == [
            {"name": "Mains", "count": 1},
            {"name": "Soups", "count": 1},
        ]

    async def test_search_and_page_size(self, client: AsyncClient) -> None:
        """Should filter by title and keep an allowed page size."""
        response = await client.get(RECIPES_URL, params={"q": "o", "pageSize": 50})

        body = response.json()
        assert [item["title"] for item in body["items"]] == [
            "Pickled Onion",
            "Tomato Soup",
        ]
        assert body["pageSize"] == 50

    async def test_unsupported_page_size(self, client: AsyncClient) -> None:
        """Should fall back to the default page size."""
        response = await client.get(RECIPES_URL, params={"pageSize": 25})

        assert response.json()["pageSize"] == 10

    async def test_clamps_page(self, client: AsyncClient) -> None:
        """Should clamp a page past the end to the last page."""
        response = await client.get(RECIPES_URL, params={"page": 5})

        body = response.json()
        assert body["page"] == 1
        assert len(body["items"]) == 3

    async def test_client_not_initialized(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Should return 503 without a content store client."""
        app.state.content_store_client = None

        response = await client.get(RECIPES_URL)

        assert response.status_code == 503
        assert response.json()["error"] == "SERVICE_UNAVAILABLE"

    async def test_content_store_error(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Should return 502 when the content store query fails."""
        app.state.content_store_client = _FailingStore()

        response = await client.get(RECIPES_URL)

        assert response.status_code == 502
        assert response.json()["error"] == "CONTENT_STORE_ERROR"
