"""Visibility propagation request and response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from recipe_visibility.schemas.base import APIRequest, APIResponse


class VisibilityUpdateRequest(APIRequest):
    """Request to change one audience flag on recipes and their relatives.

    Fields are accepted as sent; ids, audience and value are validated by
    the endpoint so that bad input gets a 400 with a specific message.
    """

    id: Any = Field(
        default=None,
        description="Single recipe id; ignored unless it is a string",
        examples=["recipe-123"],
    )
    ids: Any = Field(
        default=None,
        description="Recipe ids; non-string entries are ignored",
        examples=[["recipe-123", "recipe-456"]],
    )
    audience: Any = Field(
        default=None,
        description='Audience flag to change: "public" or "enterprise"',
        examples=["public"],
    )
    value: Any = Field(
        default=None,
        description="New flag value (boolean)",
        examples=[True],
    )

    def seed_ids(self) -> list[Any]:
        """Combine ``id`` and ``ids`` in request order."""
        seeds: list[Any] = [self.id]
        if isinstance(self.ids, list):
            seeds.extend(self.ids)
        return seeds


class VisibilityUpdateResponse(APIResponse):
    """Outcome of a propagated visibility change."""

    ok: bool = Field(default=True, description="Whether every write succeeded")
    updated_ids: list[str] = Field(
        default_factory=list,
        description="Recipes written, in write order",
    )
    related_ids: list[str] = Field(
        default_factory=list,
        description="Every recipe in the related group, seeds included",
    )
    updated_count: int = Field(default=0, ge=0)
    related_count: int = Field(default=0, ge=0)
