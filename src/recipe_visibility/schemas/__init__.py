"""Pydantic schemas for request/response validation."""

from recipe_visibility.schemas.base import (
    APIRequest,
    APIResponse,
    DownstreamResponse,
)
from recipe_visibility.schemas.catalog import (
    CatalogRecipeSchema,
    CatalogResponse,
    CategoryOptionSchema,
    RecipeVisibilitySchema,
)
from recipe_visibility.schemas.enums import Audience, AudienceFilter, HealthStatus
from recipe_visibility.schemas.navigation import (
    SubRecipeTargetSchema,
    SubRecipeTargetsRequest,
    SubRecipeTargetsResponse,
)
from recipe_visibility.schemas.visibility import (
    VisibilityUpdateRequest,
    VisibilityUpdateResponse,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "Audience",
    "AudienceFilter",
    "CatalogRecipeSchema",
    "CatalogResponse",
    "CategoryOptionSchema",
    "DownstreamResponse",
    "HealthStatus",
    "RecipeVisibilitySchema",
    "SubRecipeTargetSchema",
    "SubRecipeTargetsRequest",
    "SubRecipeTargetsResponse",
    "VisibilityUpdateRequest",
    "VisibilityUpdateResponse",
]
