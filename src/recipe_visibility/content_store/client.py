"""Content store HTTP read client.

Async client for the Sanity query API. All reads used by relation
building, visibility propagation, navigation and the admin catalog go
through ``ContentStoreClient``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import orjson
from pydantic import ValidationError

from recipe_visibility.content_store import queries
from recipe_visibility.content_store.exceptions import (
    ContentStoreConfigurationError,
    ContentStoreResponseError,
    ContentStoreTimeoutError,
    ContentStoreUnavailableError,
)
from recipe_visibility.content_store.schemas import (
    CatalogRecipeRow,
    RecipeTitleRow,
    RecipeVisibilityRow,
    RelationRecipe,
)
from recipe_visibility.core.config import get_settings
from recipe_visibility.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_visibility.core.config.settings import ContentStoreSettings


logger = get_logger(__name__)


def build_api_url(
    store: ContentStoreSettings,
    endpoint: str,
    *,
    use_cdn: bool = False,
) -> str:
    """Build a data API URL such as ``.../v2024-01-01/data/query/production``.

    Raises:
        ContentStoreConfigurationError: If no project id is configured.
    """
    if not store.project_id:
        msg = "Content store project id not configured (content_store.project_id)"
        raise ContentStoreConfigurationError(msg)
    host = store.cdn_host if use_cdn else store.api_host
    version = store.api_version.lstrip("v")
    return (
        f"https://{store.project_id}.{host}/v{version}"
        f"/data/{endpoint}/{store.dataset}"
    )


def error_message_from_response(response: httpx.Response) -> str:
    """Pull a readable error message out of a content store error body.

    The API answers with either ``{"message": ...}`` or
    ``{"error": {"description": ...}}`` depending on the endpoint. Failed
    mutations carry a generic description and list the actual causes under
    ``error.items[].error.description``; those are appended.
    """
    try:
        body = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("description"):
            return _with_item_errors(str(error["description"]), error.get("items"))
        if body.get("message"):
            return str(body["message"])
        if isinstance(error, str) and error:
            return error
    return response.text or f"HTTP {response.status_code}"


def _with_item_errors(description: str, items: Any) -> str:
    if not isinstance(items, list):
        return description
    causes = [
        str(item["error"]["description"])
        for item in items
        if isinstance(item, dict)
        and isinstance(item.get("error"), dict)
        and item["error"].get("description")
    ]
    if not causes:
        return description
    return f"{description}: {'; '.join(causes)}"


class ContentStoreClient:
    """HTTP client for reading recipe documents.

    Example:
        ```python
        client = ContentStoreClient()
        await client.initialize()

        recipes = await client.fetch_relation_recipes()

        await client.shutdown()
        ```
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize the client.

        Args:
            http_client: Optional pre-built client, mainly for tests.
        """
        self._settings = get_settings()
        self._http_client = http_client

    @property
    def query_url(self) -> str:
        """Query endpoint for the configured project and dataset."""
        store = self._settings.content_store
        return build_api_url(store, "query", use_cdn=store.use_cdn)

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        if self._http_client is None:
            headers = {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
            token = self._settings.read_token
            if token:
                headers["Authorization"] = f"Bearer {token}"
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.content_store.timeout),
                headers=headers,
            )
        logger.info("ContentStoreClient initialized", query_url=self.query_url)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("ContentStoreClient shutdown")

    async def query(self, groq: str, params: dict[str, Any] | None = None) -> Any:
        """Run a GROQ query and return its ``result`` value.

        Raises:
            ContentStoreUnavailableError: If the store is unreachable.
            ContentStoreTimeoutError: If the request times out.
            ContentStoreResponseError: For error statuses or malformed bodies.
        """
        if not self._http_client:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        url = self.query_url
        payload = orjson.dumps({"query": groq, "params": params or {}})

        try:
            response = await self._http_client.post(url, content=payload)
        except httpx.TimeoutException as e:
            logger.warning("Content store query timed out", url=url)
            raise ContentStoreTimeoutError(str(e)) from e
        except httpx.RequestError as e:
            logger.warning("Failed to reach content store", url=url, error=str(e))
            msg = f"Failed to reach content store: {e}"
            raise ContentStoreUnavailableError(msg) from e

        if response.status_code != 200:
            message = error_message_from_response(response)
            logger.warning(
                "Content store query failed",
                status_code=response.status_code,
                message=message,
            )
            raise ContentStoreResponseError(response.status_code, message)

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            msg = "Content store returned a non-JSON query response"
            raise ContentStoreResponseError(response.status_code, msg) from e

        if not isinstance(body, dict) or "result" not in body:
            msg = "Content store query response has no result"
            raise ContentStoreResponseError(response.status_code, msg)

        return body["result"]

    async def _query_rows(
        self,
        groq: str,
        model: type[Any],
        params: dict[str, Any] | None = None,
    ) -> list[Any]:
        result = await self.query(groq, params)
        if result is None:
            return []
        if not isinstance(result, list):
            msg = f"Expected a list of documents, got {type(result).__name__}"
            raise ContentStoreResponseError(200, msg)
        try:
            return [model.model_validate(row) for row in result]
        except ValidationError as e:
            msg = f"Malformed {model.__name__} document: {e}"
            raise ContentStoreResponseError(200, msg) from e

    async def fetch_relation_recipes(self) -> list[RelationRecipe]:
        """Fetch every published recipe with its title and ingredient lines."""
        rows = await self._query_rows(queries.RELATION_GRAPH_QUERY, RelationRecipe)
        logger.debug("Fetched relation corpus", recipe_count=len(rows))
        return rows

    async def fetch_visibility_rows(
        self, ids: Sequence[str]
    ) -> list[RecipeVisibilityRow]:
        """Fetch current visibility flags for the given recipe ids."""
        if not ids:
            return []
        return await self._query_rows(
            queries.VISIBILITY_ROWS_QUERY,
            RecipeVisibilityRow,
            {"ids": list(ids)},
        )

    async def fetch_recipe_titles(
        self, audience: str | None = None
    ) -> list[RecipeTitleRow]:
        """Fetch the title index, optionally restricted to one audience filter."""
        groq = (
            queries.ALL_TITLES_QUERY
            if audience is None
            else queries.audience_titles_query(audience)
        )
        return await self._query_rows(groq, RecipeTitleRow)

    async def count_catalog_recipes(
        self, q: str | None, category: str | None
    ) -> int:
        """Count recipes matching the admin catalog filters."""
        total = await self.query(
            queries.CATALOG_COUNT_QUERY, {"q": q, "category": category}
        )
        if isinstance(total, bool) or not isinstance(total, (int, float)):
            return 0
        return max(0, int(total))

    async def fetch_catalog_page(
        self,
        q: str | None,
        category: str | None,
        start: int,
        end: int,
    ) -> list[CatalogRecipeRow]:
        """Fetch one page of the admin catalog ordered by title then id."""
        return await self._query_rows(
            queries.CATALOG_ITEMS_QUERY,
            CatalogRecipeRow,
            {"q": q, "category": category, "start": start, "end": end},
        )

    async def fetch_catalog_categories(self) -> list[str | None]:
        """Fetch the first category of every recipe that has one."""
        result = await self.query(queries.CATALOG_CATEGORIES_QUERY)
        if not isinstance(result, list):
            return []
        return [row.get("category") for row in result if isinstance(row, dict)]
