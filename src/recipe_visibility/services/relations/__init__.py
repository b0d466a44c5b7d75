"""Sub-recipe relation detection: label extraction, title matching, graph."""

from recipe_visibility.services.relations.graph import (
    RelationGraph,
    build_relation_graph,
    expand_component,
)
from recipe_visibility.services.relations.matching import (
    DIRECT_MATCH_THRESHOLD,
    EDGE_THRESHOLD,
    FALLBACK_MATCH_THRESHOLD,
    TitleIndex,
    TitleMatch,
    normalize_comparable_text,
    score_title_match,
)
from recipe_visibility.services.relations.references import (
    collect_reference_labels,
    extract_reference,
)
from recipe_visibility.services.relations.service import (
    RelationService,
    normalize_recipe_ids,
)


__all__ = [
    "DIRECT_MATCH_THRESHOLD",
    "EDGE_THRESHOLD",
    "FALLBACK_MATCH_THRESHOLD",
    "RelationGraph",
    "RelationService",
    "TitleIndex",
    "TitleMatch",
    "build_relation_graph",
    "collect_reference_labels",
    "expand_component",
    "extract_reference",
    "normalize_comparable_text",
    "normalize_recipe_ids",
    "score_title_match",
]
