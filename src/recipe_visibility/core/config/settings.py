"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (local, test, development, production)
- Environment variable loading for secrets and content store tokens
- Type validation and coercion
- Caching for performance
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# Ordered by write priority. The first populated slot is tried first.
WRITE_TOKEN_SLOTS: tuple[str, ...] = (
    "SANITY_API_WRITE_TOKEN",
    "SANITY_API_TOKEN",
    "SANITY_API_READ_TOKEN",
)


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Visibility Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1/recipe-visibility"
    api_key_header: str = "X-API-Key"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class ContentStoreSettings(BaseModel):
    """Sanity content store configuration.

    Reads and writes go to
    ``https://{project_id}.{api_host}/v{api_version}/data/...``.
    """

    project_id: str | None = None
    dataset: str = "production"
    api_version: str = "2024-01-01"
    api_host: str = "api.sanity.io"
    cdn_host: str = "apicdn.sanity.io"
    use_cdn: bool = False
    timeout: float = 10.0


class RelationsSettings(BaseModel):
    """Sub-recipe relation detection settings."""

    reference_marker: str = "PTN"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Environment variables
    2. .env file (secrets only)
    3. Environment-specific YAML files (config/environments/{APP_ENV}/)
    4. Base YAML files (config/base/)
    5. Default values in code

    Environment variables can override any setting using the nested delimiter '__'.
    For example: CONTENT_STORE__DATASET=staging overrides content_store.dataset.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    # =========================================================================
    # Environment Selection (from .env)
    # =========================================================================
    APP_ENV: str = "development"

    # =========================================================================
    # Nested Configuration Sections (from YAML)
    # =========================================================================
    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    content_store: ContentStoreSettings = ContentStoreSettings()
    relations: RelationsSettings = RelationsSettings()

    # =========================================================================
    # Secrets (from .env only - never in YAML)
    # =========================================================================
    ADMIN_API_KEY: str | None = None
    SANITY_API_WRITE_TOKEN: str | None = None
    SANITY_API_TOKEN: str | None = None
    SANITY_API_READ_TOKEN: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings loading order.

        Priority (highest to lowest):
        1. init_settings - Values passed to Settings()
        2. env_settings - Environment variables
        3. dotenv_settings - .env file (secrets)
        4. yaml_settings - YAML files (base + environment)
        5. file_secret_settings - Docker secrets
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Computed Fields
    # =========================================================================

    @property
    def write_tokens(self) -> list[tuple[str, str]]:
        """Populated write credential slots as (slot name, token), in priority order."""
        tokens: list[tuple[str, str]] = []
        for slot in WRITE_TOKEN_SLOTS:
            token = getattr(self, slot)
            if token and token.strip():
                tokens.append((slot, token.strip()))
        return tokens

    @property
    def read_token(self) -> str | None:
        """Token used for content store reads, if any."""
        return self.SANITY_API_READ_TOKEN or self.SANITY_API_TOKEN or None

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """Check if running in a non-production environment.

        Returns True for local, test, and development environments where
        API documentation and debug logging should be enabled.
        """
        return self.APP_ENV in ("local", "test", "development")

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Using lru_cache ensures settings are only loaded once,
    improving performance and consistency.
    """
    return Settings()
