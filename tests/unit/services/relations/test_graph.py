"""Unit tests for the relation graph and component expansion.

Tests cover:
- Edge creation at the edge threshold
- Undirected adjacency and self-reference handling
- Component expansion over chains, branches and disjoint seeds
"""

from __future__ import annotations

import pytest

from recipe_visibility.content_store.schemas import IngredientLine, RelationRecipe
from recipe_visibility.services.relations.graph import (
    RelationGraph,
    build_relation_graph,
    expand_component,
)


pytestmark = pytest.mark.unit


def _recipe(recipe_id: str, title: str, *refs: str) -> RelationRecipe:
    return RelationRecipe(
        id=recipe_id,
        title=title,
        ingredients=[IngredientLine(item=f"10 PTN {ref}") for ref in refs],
    )


class TestRelationGraph:
    """Tests for RelationGraph."""

    def test_add_edge_is_symmetric(self) -> None:
        """Should record both directions of an edge."""
        graph = RelationGraph()

        assert graph.add_edge("a", "b") is True

        assert graph.neighbours("a") == {"b"}
        assert graph.neighbours("b") == {"a"}
        assert graph.edge_count() == 1

    def test_rejects_self_loops(self) -> None:
        """Should never store an edge from a node to itself."""
        graph = RelationGraph()
        graph.add_node("a")

        assert graph.add_edge("a", "a") is False
        assert graph.neighbours("a") == set()

    def test_unknown_node_has_no_neighbours(self) -> None:
        """Should return an empty set for ids not in the graph."""
        assert RelationGraph().neighbours("missing") == set()


class TestBuildRelationGraph:
    """Tests for build_relation_graph."""

    def test_every_recipe_is_a_node(self) -> None:
        """Should include recipes without references as isolated nodes."""
        graph = build_relation_graph(
            [_recipe("a", "Chili Oil"), _recipe("b", "Steak Sandwich")]
        )

        assert len(graph) == 2
        assert "a" in graph
        assert graph.edge_count() == 0

    def test_reference_creates_undirected_edge(self) -> None:
        """Should link parent and sub-recipe in both directions."""
        graph = build_relation_graph(
            [
                _recipe("parent", "Steak Sandwich", "Pickled Red Onio"),
                _recipe("sub", "Pickled Red Onion"),
            ]
        )

        assert graph.neighbours("parent") == {"sub"}
        assert graph.neighbours("sub") == {"parent"}

    def test_score_at_edge_threshold_links(self) -> None:
        """Should create an edge for a 75% token overlap."""
        graph = build_relation_graph(
            [
                _recipe("parent", "Steak Sandwich", "roast garlic aioli base"),
                _recipe("sub", "Roasted Garlic Aioli Sauce"),
            ]
        )

        assert graph.neighbours("parent") == {"sub"}

    def test_score_below_edge_threshold_does_not_link(self) -> None:
        """Should not create an edge for a 60% token overlap."""
        graph = build_relation_graph(
            [
                _recipe("parent", "Steak Sandwich", "extra smoked special paprika butter"),
                _recipe("sub", "Smoked Paprika Butter"),
            ]
        )

        assert graph.edge_count() == 0

    def test_self_reference_adds_no_edge(self) -> None:
        """Should ignore a label that resolves to its own recipe."""
        graph = build_relation_graph([_recipe("a", "Chili Oil", "Chili Oil")])

        assert graph.neighbours("a") == set()

    def test_self_match_wins_over_weaker_candidate(self) -> None:
        """Should drop the label when the owner is the best match."""
        graph = build_relation_graph(
            [
                _recipe("a", "Chili Oil Noodles", "Chili Oil Noodles"),
                _recipe("b", "Chili Oil"),
            ]
        )

        assert graph.edge_count() == 0

    def test_best_match_picks_first_in_corpus_order(self) -> None:
        """Should link to the first of two equally good titles."""
        graph = build_relation_graph(
            [
                _recipe("a", "Steak Sandwich", "Chili Oil"),
                _recipe("b", "Chili Oil"),
                _recipe("c", "chili-oil"),
            ]
        )

        assert graph.neighbours("a") == {"b"}
        assert graph.neighbours("c") == set()

    def test_same_label_in_several_recipes(self) -> None:
        """Should link every recipe using a shared label."""
        graph = build_relation_graph(
            [
                _recipe("a", "Steak Sandwich", "Chili Oil"),
                _recipe("b", "Dumplings", "Chili Oil"),
                _recipe("c", "Chili Oil"),
            ]
        )

        assert graph.neighbours("c") == {"a", "b"}

    def test_tolerates_missing_titles_and_ingredients(self) -> None:
        """Should accept null titles and ingredient lists."""
        recipes = [
            RelationRecipe.model_validate({"id": "a", "title": None, "ingredients": None}),
            _recipe("b", "Dumplings", "Chili Oil"),
        ]

        graph = build_relation_graph(recipes)

        assert len(graph) == 2
        assert graph.edge_count() == 0


class TestExpandComponent:
    """Tests for expand_component."""

    @pytest.fixture
    def chain(self) -> RelationGraph:
        """A references B, B references C, C references D."""
        return build_relation_graph(
            [
                _recipe("a", "Burger Deluxe", "Burger Sauce"),
                _recipe("b", "Burger Sauce", "Smoked Mayo"),
                _recipe("c", "Smoked Mayo", "Chipotle Paste"),
                _recipe("d", "Chipotle Paste"),
                _recipe("x", "Lemon Curd"),
            ]
        )

    @pytest.mark.parametrize("seed", ["a", "b", "c", "d"])
    def test_reaches_whole_chain_from_any_member(
        self, chain: RelationGraph, seed: str
    ) -> None:
        """Should return the same component from any seed in it."""
        assert set(expand_component(chain, [seed])) == {"a", "b", "c", "d"}

    def test_seeds_come_first(self, chain: RelationGraph) -> None:
        """Should list seeds before the recipes reached from them."""
        related = expand_component(chain, ["c"])

        assert related[0] == "c"
        assert related[1:3] == ["b", "d"]

    def test_unions_disjoint_components(self, chain: RelationGraph) -> None:
        """Should return the union of every seed's component."""
        related = expand_component(chain, ["x", "d"])

        assert set(related) == {"a", "b", "c", "d", "x"}
        assert related[:2] == ["x", "d"]

    def test_keeps_unknown_seed_as_singleton(self, chain: RelationGraph) -> None:
        """Should include seeds the graph has never seen."""
        assert expand_component(chain, ["ghost"]) == ["ghost"]

    def test_isolated_recipe_is_its_own_component(self, chain: RelationGraph) -> None:
        """Should return only the seed for a recipe without edges."""
        assert expand_component(chain, ["x"]) == ["x"]

    def test_duplicate_seeds_are_visited_once(self, chain: RelationGraph) -> None:
        """Should not repeat ids."""
        related = expand_component(chain, ["a", "a", "b"])

        assert len(related) == len(set(related)) == 4

    def test_empty_seeds(self, chain: RelationGraph) -> None:
        """Should return an empty list without seeds."""
        assert expand_component(chain, []) == []

    def test_two_references_from_one_recipe_merge_three_recipes(self) -> None:
        """Should connect siblings through their common parent."""
        graph = build_relation_graph(
            [
                _recipe("parent", "Tasting Plate", "Chili Oil", "Lemon Curd"),
                _recipe("oil", "Chili Oil"),
                _recipe("curd", "Lemon Curd"),
            ]
        )

        assert set(expand_component(graph, ["oil"])) == {"parent", "oil", "curd"}
        assert set(expand_component(graph, ["curd"])) == {"parent", "oil", "curd"}
