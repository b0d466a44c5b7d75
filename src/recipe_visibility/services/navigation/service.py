"""Sub-recipe navigation resolver.

Maps PTN labels shown on a recipe page to the recipes they most likely
name. Strong matches are direct links; weaker ones are still returned so
the page can fall back to a search for the recipe number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_visibility.observability.logging import get_logger
from recipe_visibility.schemas.enums import AudienceFilter
from recipe_visibility.services.relations.matching import (
    DIRECT_MATCH_THRESHOLD,
    FALLBACK_MATCH_THRESHOLD,
    TitleIndex,
)


if TYPE_CHECKING:
    from collections.abc import Iterable

    from recipe_visibility.content_store.protocol import RecipeReader
    from recipe_visibility.content_store.schemas import RecipeTitleRow


logger = get_logger(__name__)


@dataclass(frozen=True)
class SubRecipeTarget:
    """Recipe a label resolves to."""

    id: str
    title: str
    plu_number: int | None
    direct_match: bool


def normalize_labels(labels: Iterable[object] | None) -> list[str]:
    """Trim labels, drop empty and non-string values, dedupe keeping order."""
    if not labels:
        return []
    unique: dict[str, None] = {}
    for label in labels:
        if isinstance(label, str) and label.strip():
            unique.setdefault(label.strip(), None)
    return list(unique)


class NavigationService:
    """Read-only label to recipe resolution for recipe pages."""

    def __init__(self, reader: RecipeReader) -> None:
        self._reader = reader

    async def find_sub_recipe_targets(
        self,
        labels: Iterable[object] | None,
        audience: AudienceFilter | str = AudienceFilter.ALL,
        *,
        include_all: bool = False,
    ) -> dict[str, SubRecipeTarget | None]:
        """Resolve each label to its best matching recipe.

        Args:
            labels: Labels as extracted from ingredient lines.
            audience: Only recipes visible to this audience are candidates.
            include_all: Consider every non-draft recipe regardless of audience.

        Returns:
            One entry per unique trimmed label. None when no title scores at
            least the fallback threshold.
        """
        unique_labels = normalize_labels(labels)
        if not unique_labels:
            return {}

        scope = None if include_all else str(AudienceFilter(audience))
        rows = await self._reader.fetch_recipe_titles(scope)
        index: TitleIndex[RecipeTitleRow] = TitleIndex(rows, lambda row: row.title)

        targets: dict[str, SubRecipeTarget | None] = {}
        for label in unique_labels:
            match = index.best_match(label)
            if match is None or match.score < FALLBACK_MATCH_THRESHOLD:
                targets[label] = None
                continue
            targets[label] = SubRecipeTarget(
                id=match.entry.id,
                title=match.entry.title,
                plu_number=match.entry.plu_number,
                direct_match=match.score >= DIRECT_MATCH_THRESHOLD,
            )

        logger.debug(
            "Resolved sub-recipe targets",
            label_count=len(unique_labels),
            resolved_count=sum(1 for target in targets.values() if target),
            scope=scope or "all-recipes",
            candidate_count=len(index),
        )
        return targets
