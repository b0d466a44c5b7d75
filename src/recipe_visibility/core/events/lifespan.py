"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: configure logging, open content store connections
- Application shutdown: close content store connections
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_visibility.content_store.client import ContentStoreClient
from recipe_visibility.core.config import Settings, get_settings
from recipe_visibility.observability.logging import get_logger, setup_logging
from recipe_visibility.services.visibility import WriteChain


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    await _init_content_store_client(app)
    _init_write_chain(app, settings)

    logger.info("Application startup complete")


async def _init_content_store_client(app: FastAPI) -> None:
    """Initialize the content store read client."""
    try:
        client = ContentStoreClient()
        await client.initialize()
        app.state.content_store_client = client
    except Exception:
        logger.exception(
            "Failed to initialize ContentStoreClient - recipe reads unavailable"
        )
        app.state.content_store_client = None


def _init_write_chain(app: FastAPI, settings: Settings) -> None:
    """Initialize the write chain from the configured token slots."""
    try:
        chain = WriteChain.from_settings(settings)
    except Exception:
        logger.exception("Failed to initialize WriteChain - visibility updates unavailable")
        app.state.write_chain = None
        return

    if not chain.is_configured:
        logger.warning("No Sanity write token configured - visibility updates will fail")
    app.state.write_chain = chain


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")

    if getattr(app.state, "write_chain", None):
        await app.state.write_chain.shutdown()

    if getattr(app.state, "content_store_client", None):
        await app.state.content_store_client.shutdown()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
