"""
CleanupService: runs both sweepers for one trigger.

The disk and datasource sweeps are independent. Neither depends on the
other's outcome, and there is no cross-store transaction: a job's staging
directory and its rows may be purged in different cycles.
"""

from __future__ import annotations

from loguru import logger

from app.cleanup.schemas import CleanupReport
from app.cleanup.services.datasource_sweeper import DatasourceSweeper
from app.cleanup.services.disk_sweeper import DiskSweeper
from bundler_core.retention.clock import utc_now


class CleanupService:
    """
    Entry point called by the scheduled and manual triggers.

    Usage:
        service = CleanupService(disk_sweeper=..., datasource_sweeper=...)
        report = service.cleanup()
    """

    def __init__(
        self,
        disk_sweeper: DiskSweeper | None = None,
        datasource_sweeper: DatasourceSweeper | None = None,
    ):
        self.disk_sweeper = disk_sweeper
        self.datasource_sweeper = datasource_sweeper

    def cleanup(self) -> CleanupReport:
        """Run every configured sweeper, disk first. Never raises."""
        report = CleanupReport(started_at=utc_now())
        logger.info(f"Cleanup service launched at [ {report.started_at.isoformat()} ].")

        if self.disk_sweeper is not None:
            report.disk = self.disk_sweeper.cleanup()
        if self.datasource_sweeper is not None:
            report.datasource = self.datasource_sweeper.cleanup()

        logger.info(f"Cleanup service run complete at [ {utc_now().isoformat()} ].")
        return report
