"""Request logging middleware.

Logs one line when a request starts and one when it completes, with the
status code and processing time. The time is also returned in the
``X-Process-Time`` header. Probe and metrics paths are not logged.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_visibility.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

SLOW_REQUEST_THRESHOLD = 2.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured request/response logging with timing."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | None = None,
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
        timing_header: str = "X-Process-Time",
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or set()
        self.slow_threshold = slow_threshold
        self.timing_header = timing_header

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=_client_ip(request),
        )
        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        elapsed_ms = round(elapsed * 1000, 2)

        response.headers[self.timing_header] = f"{elapsed_ms}ms"

        if elapsed > self.slow_threshold:
            logger.warning(
                "Request completed slowly",
                status_code=response.status_code,
                duration_ms=elapsed_ms,
            )
        else:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=elapsed_ms,
            )
        return response


def _client_ip(request: Request) -> str:
    # First hop of X-Forwarded-For is the original client.
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"
