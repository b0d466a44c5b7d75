"""GROQ queries against the recipe dataset.

Every query excludes draft documents (ids under ``drafts.``).
"""

from __future__ import annotations

from typing import Final


RELATION_GRAPH_QUERY: Final[str] = """
*[
  _type == "recipe" &&
  !(_id in path("drafts.**"))
] | order(_id asc) {
  "id": _id,
  title,
  ingredients[]{ item, text }
}
"""

VISIBILITY_ROWS_QUERY: Final[str] = """
*[
  _type == "recipe" &&
  !(_id in path("drafts.**")) &&
  _id in $ids
]{
  "id": _id,
  visibility
}
"""

_TITLE_PROJECTION: Final[str] = """{
  "id": _id,
  title,
  pluNumber
}"""

ALL_TITLES_QUERY: Final[str] = f"""
*[
  _type == "recipe" &&
  !(_id in path("drafts.**"))
] | order(_id asc) {_TITLE_PROJECTION}
"""

CATALOG_FILTER: Final[str] = """
  _type == "recipe" &&
  !(_id in path("drafts.**")) &&
  (!defined($category) || $category in categoryPath) &&
  (!defined($q) || title match $q)
"""

CATALOG_COUNT_QUERY: Final[str] = f"count(*[{CATALOG_FILTER}])"

CATALOG_ITEMS_QUERY: Final[str] = f"""
*[{CATALOG_FILTER}] | order(title asc, _id asc)[$start...$end] {{
  "id": _id,
  pluNumber,
  title,
  categoryPath,
  portions,
  visibility
}}
"""

CATALOG_CATEGORIES_QUERY: Final[str] = """
*[
  _type == "recipe" &&
  !(_id in path("drafts.**")) &&
  defined(categoryPath[0]) &&
  string(categoryPath[0]) != ""
]{
  "category": categoryPath[0]
}
"""

_AUDIENCE_PREDICATES: Final[dict[str, str]] = {
    "public": "coalesce(visibility.public, false) == true",
    "enterprise": "coalesce(visibility.enterprise, false) == true",
    "all": (
        "(coalesce(visibility.public, false) == true || "
        "coalesce(visibility.enterprise, false) == true)"
    ),
}


def audience_titles_query(audience: str) -> str:
    """Build the title query restricted to recipes visible to an audience.

    Args:
        audience: One of "public", "enterprise" or "all".

    Raises:
        ValueError: If the audience is unknown.
    """
    try:
        predicate = _AUDIENCE_PREDICATES[audience]
    except KeyError:
        msg = f"Unknown audience filter: {audience!r}"
        raise ValueError(msg) from None
    return f"""
*[
  _type == "recipe" &&
  !(_id in path("drafts.**")) &&
  {predicate}
] | order(_id asc) {_TITLE_PROJECTION}
"""
