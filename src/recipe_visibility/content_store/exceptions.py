"""Content store client exceptions.

Raised by the read client and by write channels. The endpoint layer maps
them to HTTP responses.
"""

from __future__ import annotations


class ContentStoreError(Exception):
    """Base exception for content store client errors."""


class ContentStoreConfigurationError(ContentStoreError):
    """Raised when the content store project is not configured."""


class ContentStoreUnavailableError(ContentStoreError):
    """Raised when the content store cannot be reached.

    This includes connection errors and timeouts.
    """


class ContentStoreTimeoutError(ContentStoreUnavailableError):
    """Raised when a request to the content store times out."""


class ContentStoreResponseError(ContentStoreError):
    """Raised when the content store returns an error or malformed response."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)
