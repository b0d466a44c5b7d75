"""Prometheus metrics instrumentation.

This module provides:
- FastAPI automatic request metrics
- Visibility propagation counters
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from recipe_visibility.core.config import get_settings
from recipe_visibility.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_visibility.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "recipe_visibility"

VISIBILITY_WRITES = Counter(
    "visibility_write_attempts_total",
    "Visibility patch attempts per write channel, by outcome",
    ["channel", "outcome"],
    namespace=METRIC_NAMESPACE,
)

PROPAGATION_RUNS = Counter(
    "visibility_propagations_total",
    "Visibility propagation requests, by audience and result",
    ["audience", "result"],
    namespace=METRIC_NAMESPACE,
)


def setup_metrics(app: FastAPI, settings: Settings | None = None) -> Instrumentator:
    """Configure Prometheus metrics instrumentation.

    Args:
        app: The FastAPI application instance.
        settings: Settings to use instead of get_settings().

    Returns:
        Configured Instrumentator instance.
    """
    settings = settings or get_settings()

    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)

    return instrumentator


__all__ = ["PROPAGATION_RUNS", "VISIBILITY_WRITES", "setup_metrics"]
