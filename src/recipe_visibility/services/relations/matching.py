"""Fuzzy matching of reference labels against recipe titles.

Scores are tiered, most specific first:

    120  exact match
    110  title starts with label
     95  label starts with title
     85  title contains label
     78  >= 90% of label tokens prefix-match a title token
     72  >= 75%
     68  >= 60%
      0  otherwise

Relation edges need ``EDGE_THRESHOLD``. Navigation links are direct at
``DIRECT_MATCH_THRESHOLD`` and shown as a weaker reference down to
``FALLBACK_MATCH_THRESHOLD``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


EDGE_THRESHOLD = 72
DIRECT_MATCH_THRESHOLD = 72
FALLBACK_MATCH_THRESHOLD = 60

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")

T = TypeVar("T")


def normalize_comparable_text(value: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one space, and trim."""
    return _NON_ALPHANUMERIC.sub(" ", value.lower()).strip()


def _token_overlap_score(label_norm: str, title_norm: str) -> int:
    label_tokens = label_norm.split()
    title_tokens = title_norm.split()
    if not label_tokens or not title_tokens:
        return 0

    matched = sum(
        1
        for label_token in label_tokens
        if any(
            title_token.startswith(label_token) or label_token.startswith(title_token)
            for title_token in title_tokens
        )
    )

    ratio = matched / len(label_tokens)
    if ratio >= 0.9:
        return 78
    if ratio >= 0.75:
        return 72
    if ratio >= 0.6:
        return 68
    return 0


def score_normalized(label_norm: str, title_norm: str) -> int:
    """Score two already-normalized strings."""
    if not label_norm or not title_norm:
        return 0
    if title_norm == label_norm:
        return 120
    if title_norm.startswith(label_norm):
        return 110
    if label_norm.startswith(title_norm):
        return 95
    if label_norm in title_norm:
        return 85
    return _token_overlap_score(label_norm, title_norm)


def score_title_match(label: str, title: str) -> int:
    """Score how well a reference label names a recipe title.

    The arguments are not interchangeable: ``score_title_match("red onion",
    "Red Onion Relish")`` is 110 while the reverse is 95.
    """
    return score_normalized(
        normalize_comparable_text(label),
        normalize_comparable_text(title),
    )


@dataclass(frozen=True)
class TitleMatch(Generic[T]):
    """Best title found for a label."""

    entry: T
    score: int


class TitleIndex(Generic[T]):
    """Pre-normalized titles in a fixed order.

    Entries are compared in insertion order and the first entry reaching
    the highest score wins, so results are reproducible for a given corpus
    order.
    """

    def __init__(self, entries: Iterable[T], title_of: Callable[[T], str]) -> None:
        self._rows: list[tuple[T, str]] = [
            (entry, normalize_comparable_text(title_of(entry) or ""))
            for entry in entries
        ]

    def __len__(self) -> int:
        return len(self._rows)

    def best_match(self, label: str) -> TitleMatch[T] | None:
        """Return the best scoring entry, or None when nothing scores above 0."""
        label_norm = normalize_comparable_text(label)
        if not label_norm:
            return None

        best: T | None = None
        best_score = 0
        for entry, title_norm in self._rows:
            score = score_normalized(label_norm, title_norm)
            if score > best_score:
                best_score = score
                best = entry

        if best is None:
            return None
        return TitleMatch(entry=best, score=best_score)
