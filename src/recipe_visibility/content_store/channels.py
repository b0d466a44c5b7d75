"""Credentialed write channels to the content store.

A write channel commits one visibility patch using one API token. Instead
of raising, every attempt returns a tagged ``WriteOutcome`` so the caller
can decide whether to move on to the next channel:

- SUCCESS: the patch was committed
- HOST_MISMATCH: the token belongs to another project
- PERMISSION_DENIED: the token cannot update documents
- FATAL: anything else (network failure, unexpected status, ...)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

import httpx
import orjson

from recipe_visibility.content_store.client import (
    build_api_url,
    error_message_from_response,
)
from recipe_visibility.content_store.exceptions import (
    ContentStoreResponseError,
    ContentStoreTimeoutError,
    ContentStoreUnavailableError,
)
from recipe_visibility.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_visibility.content_store.schemas import Visibility
    from recipe_visibility.core.config import Settings


logger = get_logger(__name__)

HOST_MISMATCH_MARKER = "session does not match project host"
PERMISSION_DENIED_MARKER = "insufficient permissions"


class WriteOutcomeKind(StrEnum):
    """Result classes of a single channel attempt."""

    SUCCESS = "success"
    HOST_MISMATCH = "host_mismatch"
    PERMISSION_DENIED = "permission_denied"
    FATAL = "fatal"


@dataclass(frozen=True)
class WriteOutcome:
    """Tagged result of one write attempt on one channel."""

    kind: WriteOutcomeKind
    channel: str
    message: str | None = None
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        return self.kind is WriteOutcomeKind.SUCCESS

    @property
    def is_recoverable(self) -> bool:
        """Whether the next channel in the chain should be tried."""
        return self.kind in (
            WriteOutcomeKind.HOST_MISMATCH,
            WriteOutcomeKind.PERMISSION_DENIED,
        )


def classify_failure_message(message: str) -> WriteOutcomeKind:
    """Map a content store error message to an outcome kind."""
    lowered = message.lower()
    if HOST_MISMATCH_MARKER in lowered:
        return WriteOutcomeKind.HOST_MISMATCH
    if PERMISSION_DENIED_MARKER in lowered:
        return WriteOutcomeKind.PERMISSION_DENIED
    return WriteOutcomeKind.FATAL


class WriteChannel(Protocol):
    """Anything that can patch recipe visibility with one credential."""

    @property
    def source(self) -> str:
        """Name of the credential source, e.g. the environment slot."""
        ...

    async def patch_visibility(
        self, recipe_id: str, visibility: Visibility
    ) -> WriteOutcome:
        """Set both visibility flags of one recipe."""
        ...


class SanityWriteChannel:
    """Write channel backed by the Sanity mutate API and one token."""

    def __init__(
        self,
        source: str,
        token: str,
        mutate_url: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._source = source
        self._token = token
        self._mutate_url = mutate_url
        self._http_client = http_client

    @property
    def source(self) -> str:
        return self._source

    def __repr__(self) -> str:
        return f"SanityWriteChannel(source={self._source!r})"

    async def patch_visibility(
        self, recipe_id: str, visibility: Visibility
    ) -> WriteOutcome:
        """Commit a patch setting ``visibility.public`` and ``visibility.enterprise``."""
        payload = orjson.dumps(
            {
                "mutations": [
                    {
                        "patch": {
                            "id": recipe_id,
                            "set": {
                                "visibility.public": visibility.public,
                                "visibility.enterprise": visibility.enterprise,
                            },
                        }
                    }
                ]
            }
        )

        try:
            response = await self._http_client.post(
                self._mutate_url,
                content=payload,
                params={"returnIds": "true", "visibility": "sync"},
                headers={"Authorization": f"Bearer {self._token}"},
            )
        except httpx.TimeoutException as e:
            return WriteOutcome(
                kind=WriteOutcomeKind.FATAL,
                channel=self._source,
                message=str(e),
                error=ContentStoreTimeoutError(str(e)),
            )
        except httpx.RequestError as e:
            msg = f"Failed to reach content store: {e}"
            return WriteOutcome(
                kind=WriteOutcomeKind.FATAL,
                channel=self._source,
                message=msg,
                error=ContentStoreUnavailableError(msg),
            )

        if response.status_code == 200:
            return WriteOutcome(kind=WriteOutcomeKind.SUCCESS, channel=self._source)

        message = error_message_from_response(response)
        kind = classify_failure_message(message)
        return WriteOutcome(
            kind=kind,
            channel=self._source,
            message=message,
            error=(
                ContentStoreResponseError(response.status_code, message)
                if kind is WriteOutcomeKind.FATAL
                else None
            ),
        )


def build_write_channels(
    settings: Settings,
    http_client: httpx.AsyncClient,
    mutate_url: str | None = None,
) -> list[SanityWriteChannel]:
    """Build one channel per populated token slot, in priority order.

    A token configured in several slots is only tried once, under the
    first slot that holds it. ``mutate_url`` defaults to the configured
    project's mutate endpoint.
    """
    if mutate_url is None:
        mutate_url = build_api_url(settings.content_store, "mutate")
    channels: list[SanityWriteChannel] = []
    seen: set[str] = set()
    for source, token in settings.write_tokens:
        if token in seen:
            continue
        seen.add(token)
        channels.append(SanityWriteChannel(source, token, mutate_url, http_client))
    return channels
