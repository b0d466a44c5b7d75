"""Admin recipe listing with search, category filter and pagination."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from recipe_visibility.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_visibility.content_store.protocol import CatalogReader
    from recipe_visibility.content_store.schemas import CatalogRecipeRow


logger = get_logger(__name__)

PAGE_SIZES = (10, 50, 100)
DEFAULT_PAGE_SIZE = PAGE_SIZES[0]


@dataclass(frozen=True)
class CategoryOption:
    """First-level category and the number of recipes in it."""

    name: str
    count: int


@dataclass
class CatalogPage:
    """One page of the admin listing."""

    items: list[CatalogRecipeRow]
    total: int
    page: int
    page_size: int
    total_pages: int
    categories: list[CategoryOption] = field(default_factory=list)


def normalize_page(value: object) -> int:
    """Coerce a requested page number to an integer of at least 1."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 1
    if not math.isfinite(value):
        return 1
    page = math.floor(value)
    return page if page > 0 else 1


def normalize_page_size(value: object) -> int:
    """Return ``value`` if it is an allowed page size, else the default."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_PAGE_SIZE
    return int(value) if value in PAGE_SIZES else DEFAULT_PAGE_SIZE


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CatalogService:
    """Paginated listing of non-draft recipes for administrators."""

    def __init__(self, reader: CatalogReader) -> None:
        self._reader = reader

    async def list_categories(self) -> list[CategoryOption]:
        """Count recipes per first category, sorted by name."""
        counts: dict[str, int] = {}
        for raw in await self._reader.fetch_catalog_categories():
            name = _clean(raw) if isinstance(raw, str) else None
            if name:
                counts[name] = counts.get(name, 0) + 1
        return [
            CategoryOption(name=name, count=count)
            for name, count in sorted(counts.items(), key=lambda item: item[0].lower())
        ]

    async def list_recipes(
        self,
        query: str | None = None,
        *,
        page: object = 1,
        page_size: object = DEFAULT_PAGE_SIZE,
        category: str | None = None,
    ) -> CatalogPage:
        """List one page of recipes matching a title search and category.

        The page is clamped to the last page when it runs past the end.
        """
        search = _clean(query)
        category = _clean(category)
        requested_page = normalize_page(page)
        size = normalize_page_size(page_size)
        q = f"*{search}*" if search else None

        total = await self._reader.count_catalog_recipes(q, category)
        total_pages = max(1, math.ceil(total / size))
        resolved_page = min(requested_page, total_pages)
        start = (resolved_page - 1) * size
        end = start + size

        categories = await self.list_categories()
        items = await self._reader.fetch_catalog_page(q, category, start, end)

        logger.debug(
            "Listed catalog page",
            query=search,
            category=category,
            page=resolved_page,
            page_size=size,
            total=total,
        )
        return CatalogPage(
            items=items,
            total=total,
            page=resolved_page,
            page_size=size,
            total_pages=total_pages,
            categories=categories,
        )
