"""FastAPI dependencies for service access.

The content store client and the write chain are created during
application startup and stored in app.state. Services are cheap wrappers
around them and are built per request.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from recipe_visibility.content_store.client import ContentStoreClient
from recipe_visibility.core.config import Settings, get_settings
from recipe_visibility.core.exceptions import ServiceUnavailableException
from recipe_visibility.services.catalog import CatalogService
from recipe_visibility.services.navigation import NavigationService
from recipe_visibility.services.relations import RelationService
from recipe_visibility.services.visibility import VisibilityService, WriteChain


async def get_content_store_client(request: Request) -> ContentStoreClient:
    """Get the content store client from app state.

    Raises:
        ServiceUnavailableException: 503 if the client is not initialized.
    """
    client: ContentStoreClient | None = getattr(
        request.app.state, "content_store_client", None
    )
    if client is None:
        raise ServiceUnavailableException("Content store client not available")
    return client


async def get_write_chain(request: Request) -> WriteChain:
    """Get the write chain from app state.

    Raises:
        ServiceUnavailableException: 503 if the chain is not initialized.
    """
    chain: WriteChain | None = getattr(request.app.state, "write_chain", None)
    if chain is None:
        raise ServiceUnavailableException("Content store writes not available")
    return chain


async def get_relation_service(
    client: Annotated[ContentStoreClient, Depends(get_content_store_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RelationService:
    return RelationService(client, marker=settings.relations.reference_marker)


async def get_visibility_service(
    client: Annotated[ContentStoreClient, Depends(get_content_store_client)],
    relations: Annotated[RelationService, Depends(get_relation_service)],
    write_chain: Annotated[WriteChain, Depends(get_write_chain)],
) -> VisibilityService:
    return VisibilityService(client, relations, write_chain)


async def get_navigation_service(
    client: Annotated[ContentStoreClient, Depends(get_content_store_client)],
) -> NavigationService:
    return NavigationService(client)


async def get_catalog_service(
    client: Annotated[ContentStoreClient, Depends(get_content_store_client)],
) -> CatalogService:
    return CatalogService(client)
