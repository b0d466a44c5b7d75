"""Sub-recipe navigation schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from recipe_visibility.schemas.base import APIRequest, APIResponse
from recipe_visibility.schemas.enums import AudienceFilter


class SubRecipeTargetsRequest(APIRequest):
    """Labels to resolve and the audience they are shown to."""

    labels: list[Any] = Field(
        default_factory=list,
        description="PTN labels from ingredient lines",
        examples=[["Pickled Red Onion", "Chili Oil"]],
    )
    audience: AudienceFilter = Field(
        default=AudienceFilter.ALL,
        description="Only recipes visible to this audience are candidates",
    )
    include_all: bool = Field(
        default=False,
        description="Consider every recipe regardless of visibility",
    )


class SubRecipeTargetSchema(APIResponse):
    """Recipe a label links to."""

    id: str
    title: str
    plu_number: int | None = Field(default=None, description="Recipe number")
    direct_match: bool = Field(
        ...,
        description="True for a confident match; False means link via search",
    )


class SubRecipeTargetsResponse(APIResponse):
    """Resolution per label; null when nothing matched."""

    targets: dict[str, SubRecipeTargetSchema | None] = Field(default_factory=dict)
