"""Enumeration types shared by schemas and services."""

from __future__ import annotations

from enum import StrEnum


class Audience(StrEnum):
    """Visibility scopes a recipe can be published to.

    Each recipe carries one independent boolean per audience.
    """

    PUBLIC = "public"
    ENTERPRISE = "enterprise"


class AudienceFilter(StrEnum):
    """Audience scope for read-only lookups.

    ALL matches recipes visible to either audience.
    """

    PUBLIC = "public"
    ENTERPRISE = "enterprise"
    ALL = "all"


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
