"""Relation resolution service.

Loads the live recipe corpus, builds the relation graph and expands seed
recipes into their connected component.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_visibility.observability.logging import get_logger
from recipe_visibility.services.relations.graph import (
    RelationGraph,
    build_relation_graph,
    expand_component,
)
from recipe_visibility.services.relations.references import DEFAULT_MARKER


if TYPE_CHECKING:
    from collections.abc import Iterable

    from recipe_visibility.content_store.protocol import RecipeReader


logger = get_logger(__name__)


def normalize_recipe_ids(values: Iterable[object] | None) -> list[str]:
    """Trim ids, drop empty and non-string values, dedupe keeping order."""
    if not values:
        return []
    ids: dict[str, None] = {}
    for value in values:
        if not isinstance(value, str):
            continue
        trimmed = value.strip()
        if trimmed:
            ids.setdefault(trimmed, None)
    return list(ids)


class RelationService:
    """Resolves which recipes are linked to a set of seed recipes."""

    def __init__(self, reader: RecipeReader, marker: str = DEFAULT_MARKER) -> None:
        self._reader = reader
        self._marker = marker

    async def build_graph(self) -> RelationGraph:
        """Fetch the corpus and build a fresh relation graph."""
        recipes = await self._reader.fetch_relation_recipes()
        graph = build_relation_graph(recipes, self._marker)
        logger.debug(
            "Relation graph built",
            recipe_count=len(graph),
            edge_count=graph.edge_count(),
        )
        return graph

    async def resolve_related_ids(self, seed_ids: Iterable[str]) -> list[str]:
        """Return the connected component of the seeds, seeds included.

        Empty seeds return an empty list without reading the store.
        """
        seeds = normalize_recipe_ids(seed_ids)
        if not seeds:
            return []

        graph = await self.build_graph()
        related = expand_component(graph, seeds)
        logger.info(
            "Resolved related recipes",
            seed_count=len(seeds),
            related_count=len(related),
        )
        return related
