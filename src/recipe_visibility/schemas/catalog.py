"""Admin recipe catalog schemas."""

from __future__ import annotations

from pydantic import Field

from recipe_visibility.schemas.base import APIResponse


class RecipeVisibilitySchema(APIResponse):
    """Publish flags of a recipe."""

    public: bool = False
    enterprise: bool = False


class CatalogRecipeSchema(APIResponse):
    """One row of the admin listing."""

    id: str
    plu_number: int | None = None
    title: str = ""
    category_path: list[str] | None = None
    portions: float | None = None
    visibility: RecipeVisibilitySchema = Field(default_factory=RecipeVisibilitySchema)


class CategoryOptionSchema(APIResponse):
    """Category filter option."""

    name: str
    count: int = Field(..., ge=0)


class CatalogResponse(APIResponse):
    """Page of the admin recipe listing."""

    items: list[CatalogRecipeSchema] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Recipes matching the filters")
    page: int = Field(..., ge=1)
    page_size: int = Field(..., description="One of 10, 50 or 100")
    total_pages: int = Field(..., ge=1)
    categories: list[CategoryOptionSchema] = Field(default_factory=list)
