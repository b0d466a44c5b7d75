"""Shared API key gate for admin and navigation routes.

Callers send the key configured in ``ADMIN_API_KEY`` in the header named
by ``api.api_key_header`` (``X-API-Key`` by default).
"""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, Request

from recipe_visibility.core.config import Settings, get_settings
from recipe_visibility.core.exceptions import (
    ConfigurationException,
    UnauthorizedException,
)
from recipe_visibility.observability.logging import get_logger


logger = get_logger(__name__)


async def require_api_key(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Reject the request unless it carries the configured API key.

    Raises:
        ConfigurationException: 500 if no key is configured on the server.
        UnauthorizedException: 401 if the key is missing or wrong.
    """
    expected = settings.ADMIN_API_KEY
    if not expected:
        logger.error("ADMIN_API_KEY is not configured")
        raise ConfigurationException("Server API key is not configured")

    provided = request.headers.get(settings.api.api_key_header)
    if not provided or not secrets.compare_digest(
        provided.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("Rejected request with invalid API key", path=request.url.path)
        raise UnauthorizedException


RequireApiKey = Depends(require_api_key)
