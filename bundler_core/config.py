"""
Unified configuration for the bundler cleanup services.

This module provides a single Settings class that consolidates all
environment variables used by the sweepers, the scheduler and the API.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from bundler_core.retention.patterns import DEFAULT_STAGING_PATTERNS

# Determine project root for .env file loading (allows running from any CWD)
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Unified settings for the bundler cleanup services.

    Environment variables are loaded from .env file and can be overridden
    by actual environment variables.
    """

    # Service identification
    SERVICE_NAME: str = "bundler-cleanup"

    # PostgreSQL (bundler bookkeeping tables)
    POSTGRES_DSN: str = "host=localhost port=5432 dbname=bundler user=postgres password=postgres"

    # Staging area
    STAGING_DIRECTORY: str | None = None
    STAGING_DIRECTORY_PATTERNS: list[str] = list(DEFAULT_STAGING_PATTERNS)

    # Retention windows (days)
    STAGING_RETENTION_DAYS: int = 2
    DATASOURCE_RETENTION_DAYS: int = 14

    # Scheduled cleanup (Celery beat, UTC)
    CLEANUP_SCHEDULE_ENABLED: bool = True
    CLEANUP_SCHEDULE_HOUR: int = 0
    CLEANUP_SCHEDULE_MINUTE: int = 30

    # Redis / Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"

    # App host/port
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8081

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        extra="ignore"
    )


# Global settings instance
settings = Settings()  # type: ignore
