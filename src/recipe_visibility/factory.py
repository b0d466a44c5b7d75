"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application from settings
- Sets up the middleware stack
- Registers exception handlers
- Mounts API routers and the metrics endpoint
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from recipe_visibility.api.v1.router import router as v1_router
from recipe_visibility.core.config import Settings, get_settings
from recipe_visibility.core.events import lifespan
from recipe_visibility.core.exceptions import setup_exception_handlers
from recipe_visibility.core.middleware import LoggingMiddleware, RequestIDMiddleware
from recipe_visibility.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    show_docs = settings.is_non_production
    prefix = settings.api.v1_prefix

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description=(
            "Recipe visibility service - propagates publish flags across "
            "recipes linked by sub-recipe references"
        ),
        lifespan=lifespan,
        docs_url=f"{prefix}/docs" if show_docs else None,
        redoc_url=f"{prefix}/redoc" if show_docs else None,
        openapi_url=f"{prefix}/openapi.json" if show_docs else None,
        debug=settings.app.debug,
    )

    app.state.settings = settings

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    app.include_router(v1_router, prefix=prefix)
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware runs in reverse order of addition. From the request side:
    1. RequestIDMiddleware (binds the request id for logging)
    2. LoggingMiddleware (logs requests and timing)
    3. GZipMiddleware (compresses responses)
    """
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    prefix = settings.api.v1_prefix
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
            "/favicon.ico",
        },
    )

    app.add_middleware(RequestIDMiddleware)
