"""Visibility propagation exceptions.

Input and configuration errors are raised before the content store is
touched. The write-chain errors are raised once every channel has been
tried for a recipe; they carry the attempted channel names.
"""

from __future__ import annotations

from collections.abc import Sequence

from recipe_visibility.core.config.settings import WRITE_TOKEN_SLOTS


class VisibilityError(Exception):
    """Base exception for visibility propagation errors."""


class InvalidVisibilityRequestError(VisibilityError):
    """Raised when seed ids, audience or value are invalid."""


class WriteCredentialsMissingError(VisibilityError):
    """Raised when no write token slot is populated."""

    def __init__(self) -> None:
        slots = ", ".join(WRITE_TOKEN_SLOTS)
        super().__init__(
            f"Missing Sanity API token for updates. Set one of: {slots}."
        )


class WriteChainExhaustedError(VisibilityError):
    """Raised when no write channel could update a recipe."""

    def __init__(
        self,
        message: str,
        recipe_id: str,
        attempted_channels: Sequence[str],
    ) -> None:
        self.recipe_id = recipe_id
        self.attempted_channels = list(attempted_channels)
        super().__init__(message)


class WritePermissionError(WriteChainExhaustedError):
    """At least one channel was denied update permission."""

    def __init__(self, recipe_id: str, attempted_channels: Sequence[str]) -> None:
        tried = ", ".join(attempted_channels)
        super().__init__(
            "Sanity token lacks update permission for recipe documents. "
            f"Tried: {tried}. Configure a token with update grants "
            "(prefer SANITY_API_WRITE_TOKEN) and restart the service.",
            recipe_id,
            attempted_channels,
        )


class ProjectMismatchError(WriteChainExhaustedError):
    """Every failing channel holds a token for a different project."""

    def __init__(
        self,
        recipe_id: str,
        attempted_channels: Sequence[str],
        project_id: str | None,
    ) -> None:
        self.project_id = project_id
        project = project_id or "<missing-project-id>"
        super().__init__(
            f'Sanity write token does not belong to project "{project}". '
            "Create a write token in that exact project and set "
            "SANITY_API_WRITE_TOKEN.",
            recipe_id,
            attempted_channels,
        )


class InvalidWriteCredentialsError(WriteChainExhaustedError):
    """No channel succeeded and no failure could be classified."""

    def __init__(self, recipe_id: str, attempted_channels: Sequence[str]) -> None:
        super().__init__(
            "Failed to update recipe visibility due to missing or invalid "
            "Sanity token.",
            recipe_id,
            attempted_channels,
        )
