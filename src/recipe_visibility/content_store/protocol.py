"""Read surfaces the services depend on.

``ContentStoreClient`` implements both protocols over HTTP; tests use
in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_visibility.content_store.schemas import (
        CatalogRecipeRow,
        RecipeTitleRow,
        RecipeVisibilityRow,
        RelationRecipe,
    )


@runtime_checkable
class RecipeReader(Protocol):
    """Read operations on recipe documents."""

    async def fetch_relation_recipes(self) -> list[RelationRecipe]:
        """Fetch every published recipe with id, title and ingredient lines."""
        ...

    async def fetch_visibility_rows(
        self, ids: Sequence[str]
    ) -> list[RecipeVisibilityRow]:
        """Fetch current visibility flags for a set of ids."""
        ...

    async def fetch_recipe_titles(
        self, audience: str | None = None
    ) -> list[RecipeTitleRow]:
        """Fetch the title index, optionally limited to an audience filter."""
        ...


@runtime_checkable
class CatalogReader(Protocol):
    """Read operations behind the admin recipe listing."""

    async def count_catalog_recipes(
        self, q: str | None, category: str | None
    ) -> int: ...

    async def fetch_catalog_page(
        self,
        q: str | None,
        category: str | None,
        start: int,
        end: int,
    ) -> list[CatalogRecipeRow]: ...

    async def fetch_catalog_categories(self) -> list[str | None]: ...
