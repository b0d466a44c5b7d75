"""Schemas for documents returned by the content store.

These mirror the projections in ``content_store.queries``. Recipe
documents are edited by hand, so every field tolerates nulls.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from recipe_visibility.schemas.base import DownstreamResponse
from recipe_visibility.schemas.enums import Audience


def _as_flag(value: Any) -> bool:
    return bool(value)


def _none_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _none_as_empty_str(value: Any) -> Any:
    return "" if value is None else value


Flag = Annotated[bool, BeforeValidator(_as_flag)]


class Visibility(DownstreamResponse):
    """Publish flags of one recipe. Missing flags read as False."""

    public: Flag = False
    enterprise: Flag = False

    def with_audience(self, audience: Audience | str, value: bool) -> Visibility:
        """Return a copy with one audience flag replaced and the other kept."""
        return self.model_copy(update={str(Audience(audience)): value})


def _none_as_visibility(value: Any) -> Any:
    return Visibility() if value is None else value


class IngredientLine(DownstreamResponse):
    """One ingredient line.

    ``item`` and ``text`` are free-form and not guaranteed to be strings.
    """

    item: Any = None
    text: Any = None


class RelationRecipe(DownstreamResponse):
    """Recipe projection used to build the relation graph."""

    id: str
    title: Annotated[str, BeforeValidator(_none_as_empty_str)] = ""
    ingredients: Annotated[
        list[IngredientLine], BeforeValidator(_none_as_empty_list)
    ] = Field(default_factory=list)


class RecipeVisibilityRow(DownstreamResponse):
    """Current visibility of one recipe."""

    id: str
    visibility: Annotated[Visibility, BeforeValidator(_none_as_visibility)] = Field(
        default_factory=Visibility
    )


class RecipeTitleRow(DownstreamResponse):
    """Title index entry used for sub-recipe navigation."""

    id: str
    title: Annotated[str, BeforeValidator(_none_as_empty_str)] = ""
    plu_number: int | None = None


class CatalogRecipeRow(DownstreamResponse):
    """Row of the admin recipe listing."""

    id: str
    plu_number: int | None = None
    title: Annotated[str, BeforeValidator(_none_as_empty_str)] = ""
    category_path: list[str] | None = None
    portions: float | None = None
    visibility: Annotated[Visibility, BeforeValidator(_none_as_visibility)] = Field(
        default_factory=Visibility
    )
