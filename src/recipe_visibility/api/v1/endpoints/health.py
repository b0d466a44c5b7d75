"""Health check endpoints.

Provides liveness and readiness probes for Kubernetes and load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from recipe_visibility.core.config import Settings, get_settings
from recipe_visibility.schemas.enums import HealthStatus


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness check response with dependency status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of external dependencies",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check if the service is alive. External dependencies are not checked."""
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying the content store is configured.",
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReadinessResponse:
    """Report whether reads and writes can be served.

    Reads need an initialized content store client. Writes also need at
    least one write token; without one the service is degraded but can
    still answer navigation and catalog requests.
    """
    dependencies: dict[str, str] = {}

    client = getattr(request.app.state, "content_store_client", None)
    dependencies["content_store"] = (
        HealthStatus.HEALTHY if client is not None else HealthStatus.UNHEALTHY
    )

    chain = getattr(request.app.state, "write_chain", None)
    dependencies["write_credentials"] = (
        HealthStatus.HEALTHY
        if chain is not None and chain.is_configured
        else HealthStatus.DEGRADED
    )

    if dependencies["content_store"] == HealthStatus.UNHEALTHY:
        overall = HealthStatus.UNHEALTHY
    elif dependencies["write_credentials"] == HealthStatus.DEGRADED:
        overall = HealthStatus.DEGRADED
    else:
        overall = HealthStatus.HEALTHY

    return ReadinessResponse(
        status=overall,
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
