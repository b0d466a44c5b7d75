"""Ordered write-channel chain with outcome classification.

Channels are tried in priority order for each recipe. Host mismatches and
permission denials move on to the next channel; any other failure stops
the chain and is raised as is. Exhausting the chain raises the error of
the dominant failure class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from recipe_visibility.content_store.channels import (
    WriteOutcome,
    WriteOutcomeKind,
    build_write_channels,
)
from recipe_visibility.content_store.client import build_api_url
from recipe_visibility.content_store.exceptions import ContentStoreError
from recipe_visibility.observability.logging import get_logger
from recipe_visibility.observability.metrics import VISIBILITY_WRITES
from recipe_visibility.services.visibility.exceptions import (
    InvalidWriteCredentialsError,
    ProjectMismatchError,
    WritePermissionError,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_visibility.content_store.channels import WriteChannel
    from recipe_visibility.content_store.schemas import Visibility
    from recipe_visibility.core.config import Settings


logger = get_logger(__name__)


class WriteChain:
    """Priority list of write channels for visibility patches.

    Example:
        ```python
        chain = WriteChain.from_settings(get_settings())
        await chain.patch_visibility("recipe-1", Visibility(public=True))
        await chain.shutdown()
        ```
    """

    def __init__(
        self,
        channels: Sequence[WriteChannel],
        project_id: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the chain.

        Args:
            channels: Channels in the order they are tried.
            project_id: Configured project, quoted in mismatch errors.
            http_client: Client shared by the channels, closed on shutdown.
        """
        self._channels = list(channels)
        self._project_id = project_id
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings) -> WriteChain:
        """Build a chain with one Sanity channel per populated token slot.

        Raises:
            ContentStoreConfigurationError: If no project id is configured.
        """
        # Must fail before the shared client is opened.
        mutate_url = build_api_url(settings.content_store, "mutate")
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.content_store.timeout),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )
        channels = build_write_channels(settings, http_client, mutate_url)
        chain = cls(
            channels,
            project_id=settings.content_store.project_id,
            http_client=http_client,
        )
        logger.info("WriteChain initialized", channels=chain.sources)
        return chain

    @property
    def sources(self) -> list[str]:
        """Channel names in priority order."""
        return [channel.source for channel in self._channels]

    @property
    def is_configured(self) -> bool:
        """Whether at least one write credential is available."""
        return bool(self._channels)

    async def shutdown(self) -> None:
        """Release the shared HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("WriteChain shutdown")

    async def patch_visibility(
        self, recipe_id: str, visibility: Visibility
    ) -> WriteOutcome:
        """Write both visibility flags of one recipe through the chain.

        Returns:
            The successful outcome.

        Raises:
            WritePermissionError: If the chain is exhausted after a denial.
            ProjectMismatchError: If exhausted after host mismatches only.
            InvalidWriteCredentialsError: If exhausted otherwise.
            ContentStoreError: For any unclassified failure, immediately.
        """
        attempted: list[str] = []
        seen: set[WriteOutcomeKind] = set()

        for channel in self._channels:
            attempted.append(channel.source)
            outcome = await channel.patch_visibility(recipe_id, visibility)
            VISIBILITY_WRITES.labels(
                channel=channel.source, outcome=outcome.kind.value
            ).inc()

            if outcome.is_success:
                logger.debug(
                    "Recipe visibility written",
                    recipe_id=recipe_id,
                    channel=channel.source,
                )
                return outcome

            if outcome.is_recoverable:
                seen.add(outcome.kind)
                logger.warning(
                    "Write channel rejected update, trying next channel",
                    recipe_id=recipe_id,
                    channel=channel.source,
                    outcome=outcome.kind.value,
                    message=outcome.message,
                )
                continue

            logger.error(
                "Write channel failed",
                recipe_id=recipe_id,
                channel=channel.source,
                message=outcome.message,
            )
            if outcome.error is not None:
                raise outcome.error
            raise ContentStoreError(outcome.message or "Visibility write failed")

        if WriteOutcomeKind.PERMISSION_DENIED in seen:
            raise WritePermissionError(recipe_id, attempted)
        if WriteOutcomeKind.HOST_MISMATCH in seen:
            raise ProjectMismatchError(recipe_id, attempted, self._project_id)
        raise InvalidWriteCredentialsError(recipe_id, attempted)
