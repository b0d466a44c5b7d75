"""Relation graph over the recipe corpus.

Nodes are recipe ids. An undirected edge joins a recipe to the recipe its
PTN label resolves to with a score of at least ``EDGE_THRESHOLD``. The
graph is rebuilt from live documents for every request and never stored.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from recipe_visibility.services.relations.matching import EDGE_THRESHOLD, TitleIndex
from recipe_visibility.services.relations.references import (
    DEFAULT_MARKER,
    collect_reference_labels,
)


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from recipe_visibility.content_store.schemas import RelationRecipe


class RelationGraph:
    """Undirected adjacency map: recipe id -> directly related recipe ids."""

    def __init__(self) -> None:
        self._adjacency: dict[str, set[str]] = {}

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    @property
    def adjacency(self) -> dict[str, set[str]]:
        return self._adjacency

    def add_node(self, recipe_id: str) -> None:
        self._adjacency.setdefault(recipe_id, set())

    def add_edge(self, a: str, b: str) -> bool:
        """Link two recipes in both directions.

        Returns False for self-loops, which are never stored.
        """
        if a == b:
            return False
        self._adjacency.setdefault(a, set()).add(b)
        self._adjacency.setdefault(b, set()).add(a)
        return True

    def neighbours(self, recipe_id: str) -> set[str]:
        return self._adjacency.get(recipe_id, set())

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._adjacency.values()) // 2


def build_relation_graph(
    recipes: Sequence[RelationRecipe],
    marker: str = DEFAULT_MARKER,
) -> RelationGraph:
    """Build the relation graph for a corpus.

    Every recipe becomes a node. Each label is resolved against every
    title in corpus order; resolutions are memoized per label string for
    the duration of this build.
    """
    graph = RelationGraph()
    for recipe in recipes:
        graph.add_node(recipe.id)

    titles = TitleIndex(recipes, lambda recipe: recipe.title)
    resolved: dict[str, str | None] = {}

    for recipe in recipes:
        for label in collect_reference_labels(recipe.ingredients, marker):
            if label not in resolved:
                match = titles.best_match(label)
                resolved[label] = (
                    match.entry.id
                    if match is not None and match.score >= EDGE_THRESHOLD
                    else None
                )
            target_id = resolved[label]
            if target_id is not None:
                graph.add_edge(recipe.id, target_id)

    return graph


def expand_component(graph: RelationGraph, seeds: Iterable[str]) -> list[str]:
    """Return every recipe id reachable from the seeds, seeds included.

    Breadth-first with a visited set; only the reachable region is walked.
    Seeds unknown to the graph are kept as singletons. The result is in
    visitation order, seeds first.
    """
    visited: dict[str, None] = {}
    queue: deque[str] = deque()
    for seed in seeds:
        if seed in visited:
            continue
        visited[seed] = None
        queue.append(seed)

    while queue:
        current = queue.popleft()
        # Sorted so the visitation order does not depend on set ordering.
        for neighbour in sorted(graph.neighbours(current)):
            if neighbour in visited:
                continue
            visited[neighbour] = None
            queue.append(neighbour)

    return list(visited)
