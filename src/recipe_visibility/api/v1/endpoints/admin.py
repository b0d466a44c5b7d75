"""Admin endpoints.

Provides:
- GET /admin/recipes for the paginated recipe catalog
- PATCH /admin/recipes/visibility for propagated visibility changes
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from recipe_visibility.api.dependencies import (
    get_catalog_service,
    get_visibility_service,
)
from recipe_visibility.api.errors import (
    content_store_http_error,
    visibility_http_error,
)
from recipe_visibility.auth import RequireApiKey
from recipe_visibility.content_store.exceptions import ContentStoreError
from recipe_visibility.core.exceptions import BadRequestException, NotFoundException
from recipe_visibility.observability.logging import get_logger
from recipe_visibility.schemas.catalog import (
    CatalogRecipeSchema,
    CatalogResponse,
    CategoryOptionSchema,
)
from recipe_visibility.schemas.visibility import (
    VisibilityUpdateRequest,
    VisibilityUpdateResponse,
)
from recipe_visibility.services.catalog import DEFAULT_PAGE_SIZE, CatalogService
from recipe_visibility.services.relations import normalize_recipe_ids
from recipe_visibility.services.visibility import (
    InvalidVisibilityRequestError,
    VisibilityChangeRequest,
    VisibilityError,
    VisibilityService,
)


logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[RequireApiKey])

DRAFT_PREFIX = "drafts."


@router.get(
    "/recipes",
    response_model=CatalogResponse,
    summary="List recipes",
    description=(
        "Paginated listing of published recipes with title search and "
        "category filter. Page size is 10, 50 or 100."
    ),
    responses={
        401: {"description": "Missing or invalid API key"},
        502: {"description": "Content store returned an error"},
        503: {"description": "Content store unavailable"},
    },
)
async def list_recipes(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str | None, Query(description="Title search")] = None,
    category: Annotated[str | None, Query(description="First category")] = None,
    page: Annotated[int, Query(description="1-based page number")] = 1,
    page_size: Annotated[
        int, Query(alias="pageSize", description="10, 50 or 100")
    ] = DEFAULT_PAGE_SIZE,
) -> CatalogResponse:
    """List one page of the recipe catalog."""
    try:
        result = await catalog.list_recipes(
            q, page=page, page_size=page_size, category=category
        )
    except ContentStoreError as e:
        logger.warning("Catalog listing failed", error=str(e))
        raise content_store_http_error(e) from e

    return CatalogResponse(
        items=[
            CatalogRecipeSchema.model_validate(item.model_dump())
            for item in result.items
        ],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        categories=[
            CategoryOptionSchema(name=option.name, count=option.count)
            for option in result.categories
        ],
    )


@router.patch(
    "/recipes/visibility",
    response_model=VisibilityUpdateResponse,
    summary="Set recipe visibility",
    description=(
        "Sets the public or enterprise flag on the given recipes and on every "
        "recipe linked to them through sub-recipe references. Writes are "
        "sequential and not rolled back on failure; repeat the request to "
        "finish a partially applied change."
    ),
    responses={
        400: {
            "description": "No usable recipe id, a draft id, or an invalid "
            "audience or value"
        },
        401: {"description": "Missing or invalid API key"},
        403: {"description": "Write token lacks update permission"},
        404: {"description": "No matching recipe was updated"},
        422: {"description": "Request body is not a JSON object"},
        500: {"description": "Write credentials missing or invalid"},
        502: {"description": "Content store returned an error"},
        503: {"description": "Content store unavailable"},
    },
)
async def update_visibility(
    request_body: VisibilityUpdateRequest,
    visibility: Annotated[VisibilityService, Depends(get_visibility_service)],
) -> VisibilityUpdateResponse:
    """Propagate one visibility flag across related recipes."""
    seed_ids = normalize_recipe_ids(request_body.seed_ids())
    if not seed_ids:
        raise BadRequestException("Provide a recipe id or a non-empty ids list")

    drafts = [recipe_id for recipe_id in seed_ids if recipe_id.startswith(DRAFT_PREFIX)]
    if drafts:
        raise BadRequestException(
            f"Draft documents cannot be updated: {', '.join(drafts)}"
        )

    try:
        change = VisibilityChangeRequest.create(
            seed_ids, request_body.audience, request_body.value
        )
    except InvalidVisibilityRequestError as e:
        raise visibility_http_error(e) from e

    logger.info(
        "Visibility update requested",
        seed_ids=seed_ids,
        audience=change.audience,
        value=change.value,
    )

    try:
        result = await visibility.set_visibility(
            change.seed_ids, change.audience, change.value
        )
    except VisibilityError as e:
        logger.warning("Visibility update failed", error=str(e))
        raise visibility_http_error(e) from e
    except ContentStoreError as e:
        logger.warning("Visibility update failed", error=str(e))
        raise content_store_http_error(e) from e

    if not result.updated_ids:
        raise NotFoundException("No matching recipe found")

    return VisibilityUpdateResponse(
        ok=True,
        updated_ids=result.updated_ids,
        related_ids=result.related_ids,
        updated_count=len(result.updated_ids),
        related_count=len(result.related_ids),
    )
