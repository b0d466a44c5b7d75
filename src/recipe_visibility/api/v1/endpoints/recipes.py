"""Recipe page endpoints.

Provides:
- POST /recipes/sub-recipe-targets for resolving PTN labels to recipes
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_visibility.api.dependencies import get_navigation_service
from recipe_visibility.api.errors import content_store_http_error
from recipe_visibility.auth import RequireApiKey
from recipe_visibility.content_store.exceptions import ContentStoreError
from recipe_visibility.observability.logging import get_logger
from recipe_visibility.schemas.navigation import (
    SubRecipeTargetSchema,
    SubRecipeTargetsRequest,
    SubRecipeTargetsResponse,
)
from recipe_visibility.services.navigation import NavigationService


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"], dependencies=[RequireApiKey])


@router.post(
    "/sub-recipe-targets",
    response_model=SubRecipeTargetsResponse,
    summary="Resolve sub-recipe labels",
    description=(
        "Maps each PTN label to the recipe it most likely names. "
        "directMatch is false for weaker matches that should be linked "
        "through a search; null means nothing matched."
    ),
    responses={
        401: {"description": "Missing or invalid API key"},
        422: {"description": "Request validation error"},
        502: {"description": "Content store returned an error"},
        503: {"description": "Content store unavailable"},
    },
)
async def find_sub_recipe_targets(
    request_body: SubRecipeTargetsRequest,
    navigation: Annotated[NavigationService, Depends(get_navigation_service)],
) -> SubRecipeTargetsResponse:
    """Resolve sub-recipe labels for a recipe page."""
    try:
        targets = await navigation.find_sub_recipe_targets(
            request_body.labels,
            request_body.audience,
            include_all=request_body.include_all,
        )
    except ContentStoreError as e:
        logger.warning("Sub-recipe resolution failed", error=str(e))
        raise content_store_http_error(e) from e

    return SubRecipeTargetsResponse(
        targets={
            label: (
                SubRecipeTargetSchema(
                    id=target.id,
                    title=target.title,
                    plu_number=target.plu_number,
                    direct_match=target.direct_match,
                )
                if target is not None
                else None
            )
            for label, target in targets.items()
        }
    )
