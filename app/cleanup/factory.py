from __future__ import annotations
"""
Factory for creating cleanup components.

Collaborators are wired here, from settings, and handed to the sweepers
through their constructors.
"""

from app.cleanup.services.cleanup_service import CleanupService
from app.cleanup.services.datasource_sweeper import DatasourceSweeper
from app.cleanup.services.disk_sweeper import DiskSweeper
from app.cleanup.services.repositories import (
    ArchiveRepository,
    FileEntryRepository,
    JobMetricsRepository,
    JobRepository,
)
from app.cleanup.services.staging_filesystem import LocalStagingFilesystem
from bundler_core.config import Settings, settings as default_settings
from bundler_core.retention.clock import RetentionClock, RetentionPolicy


def get_disk_sweeper(
    settings: Settings | None = None,
    retention_days: float | None = None,
    clock: RetentionClock | None = None,
) -> DiskSweeper:
    """
    Create a DiskSweeper for the configured staging area.

    Args:
        settings: Settings to read (defaults to the process settings).
        retention_days: Override for STAGING_RETENTION_DAYS.
        clock: Optional retention clock.
    """
    settings = settings or default_settings
    policy = RetentionPolicy.from_settings(settings)
    return DiskSweeper(
        staging_directory=settings.STAGING_DIRECTORY,
        patterns=settings.STAGING_DIRECTORY_PATTERNS,
        retention_days=policy.staging_days if retention_days is None else retention_days,
        clock=clock,
        filesystem=LocalStagingFilesystem(),
    )


def get_datasource_sweeper(
    settings: Settings | None = None,
    retention_days: float | None = None,
    clock: RetentionClock | None = None,
) -> DatasourceSweeper:
    """
    Create a DatasourceSweeper backed by the PostgreSQL repositories.

    Args:
        settings: Settings to read (defaults to the process settings).
        retention_days: Override for DATASOURCE_RETENTION_DAYS.
        clock: Optional retention clock.
    """
    settings = settings or default_settings
    policy = RetentionPolicy.from_settings(settings)
    return DatasourceSweeper(
        job_store=JobRepository(),
        archive_store=ArchiveRepository(),
        file_store=FileEntryRepository(),
        metrics_store=JobMetricsRepository(),
        retention_days=policy.datasource_days if retention_days is None else retention_days,
        clock=clock,
    )


def get_cleanup_service(
    settings: Settings | None = None,
    include_disk: bool = True,
    include_datasource: bool = True,
    staging_days: float | None = None,
    datasource_days: float | None = None,
) -> CleanupService:
    """
    Create a CleanupService with the selected sweepers.

    Both sweepers share one RetentionClock.
    """
    clock = RetentionClock()
    return CleanupService(
        disk_sweeper=(
            get_disk_sweeper(settings, retention_days=staging_days, clock=clock)
            if include_disk
            else None
        ),
        datasource_sweeper=(
            get_datasource_sweeper(settings, retention_days=datasource_days, clock=clock)
            if include_datasource
            else None
        ),
    )
