"""Sub-recipe navigation for recipe pages."""

from recipe_visibility.services.navigation.service import (
    NavigationService,
    SubRecipeTarget,
    normalize_labels,
)


__all__ = ["NavigationService", "SubRecipeTarget", "normalize_labels"]
