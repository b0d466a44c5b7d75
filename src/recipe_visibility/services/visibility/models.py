"""Propagation request and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from recipe_visibility.schemas.enums import Audience
from recipe_visibility.services.relations.service import normalize_recipe_ids
from recipe_visibility.services.visibility.exceptions import (
    InvalidVisibilityRequestError,
)


if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class VisibilityChangeRequest:
    """Normalized operator input for one propagation."""

    seed_ids: tuple[str, ...]
    audience: Audience
    value: bool

    @classmethod
    def create(
        cls,
        seed_ids: Iterable[object] | None,
        audience: object,
        value: object,
    ) -> VisibilityChangeRequest:
        """Validate and normalize raw input.

        Raises:
            InvalidVisibilityRequestError: If audience or value is invalid.
        """
        try:
            parsed_audience = Audience(audience)
        except ValueError:
            msg = 'audience must be "public" or "enterprise"'
            raise InvalidVisibilityRequestError(msg) from None

        if not isinstance(value, bool):
            msg = "value must be a boolean"
            raise InvalidVisibilityRequestError(msg)

        return cls(
            seed_ids=tuple(normalize_recipe_ids(seed_ids)),
            audience=parsed_audience,
            value=value,
        )


@dataclass
class PropagationResult:
    """Outcome of a propagation.

    ``updated_ids`` lists every recipe written, including ones that
    already held the target value. ``related_ids`` is the whole expanded
    component and may contain ids the store does not know.
    """

    updated_ids: list[str] = field(default_factory=list)
    related_ids: list[str] = field(default_factory=list)
