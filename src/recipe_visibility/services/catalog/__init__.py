"""Admin recipe catalog."""

from recipe_visibility.services.catalog.service import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZES,
    CatalogPage,
    CatalogService,
    CategoryOption,
    normalize_page,
    normalize_page_size,
)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "PAGE_SIZES",
    "CatalogPage",
    "CatalogService",
    "CategoryOption",
    "normalize_page",
    "normalize_page_size",
]
