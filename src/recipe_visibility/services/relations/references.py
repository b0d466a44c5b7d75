"""Sub-recipe reference extraction.

Ingredient lines point at other recipes informally, e.g.
``"10 PTN Pickled Red Onion"`` refers to the recipe titled
"Pickled Red Onion". The text after the PTN marker is the label.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Iterable

    from recipe_visibility.content_store.schemas import IngredientLine


DEFAULT_MARKER = "PTN"


@lru_cache(maxsize=8)
def _marker_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(marker)}\b\s+(.+)$", re.IGNORECASE)


def extract_reference(value: Any, marker: str = DEFAULT_MARKER) -> str | None:
    """Return the sub-recipe label in an ingredient field, if any.

    >>> extract_reference("10 PTN Pickled Red Onion")
    'Pickled Red Onion'
    >>> extract_reference("2 kg red onion") is None
    True
    """
    if not isinstance(value, str):
        return None
    match = _marker_pattern(marker).search(value)
    if not match:
        return None
    label = match.group(1).strip()
    return label or None


def collect_reference_labels(
    ingredients: Iterable[IngredientLine] | None,
    marker: str = DEFAULT_MARKER,
) -> list[str]:
    """Collect the distinct labels of a recipe's ingredient lines.

    Both ``item`` and ``text`` of every line are scanned. First-seen
    order is kept so repeated builds visit labels identically.
    """
    if not ingredients:
        return []
    labels: dict[str, None] = {}
    for ingredient in ingredients:
        for field in (ingredient.item, ingredient.text):
            label = extract_reference(field, marker)
            if label:
                labels.setdefault(label, None)
    return list(labels)
