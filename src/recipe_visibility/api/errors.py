"""Translation of domain errors into HTTP errors."""

from __future__ import annotations

from recipe_visibility.content_store.exceptions import (
    ContentStoreConfigurationError,
    ContentStoreError,
    ContentStoreUnavailableError,
)
from recipe_visibility.core.exceptions import (
    AppException,
    BadGatewayException,
    BadRequestException,
    ConfigurationException,
    ForbiddenException,
    ServiceUnavailableException,
)
from recipe_visibility.services.visibility.exceptions import (
    InvalidVisibilityRequestError,
    VisibilityError,
    WriteChainExhaustedError,
    WriteCredentialsMissingError,
    WritePermissionError,
)


def content_store_http_error(exc: ContentStoreError) -> AppException:
    """Map a content store failure to 500, 503 or 502."""
    if isinstance(exc, ContentStoreConfigurationError):
        return ConfigurationException(str(exc))
    if isinstance(exc, ContentStoreUnavailableError):
        return ServiceUnavailableException(str(exc))
    return BadGatewayException(str(exc))


def visibility_http_error(exc: VisibilityError) -> AppException:
    """Map a propagation failure to its HTTP error."""
    if isinstance(exc, InvalidVisibilityRequestError):
        return BadRequestException(str(exc))
    if isinstance(exc, WritePermissionError):
        return ForbiddenException(str(exc))
    if isinstance(exc, (WriteCredentialsMissingError, WriteChainExhaustedError)):
        return ConfigurationException(str(exc))
    return AppException(
        status_code=500,
        error="VISIBILITY_ERROR",
        message=str(exc),
    )
