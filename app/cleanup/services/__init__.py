"""
Cleanup services package.

This package contains the retention sweepers and their store adapters:
- DiskSweeper: Staging area retention
- DatasourceSweeper: Job bookkeeping retention and orphan reconciliation
- CleanupService: Runs both for one trigger
"""

from .cleanup_service import CleanupService
from .datasource_sweeper import DatasourceSweeper
from .disk_sweeper import DiskSweeper
from .staging_filesystem import LocalStagingFilesystem

__all__ = [
    "CleanupService",
    "DatasourceSweeper",
    "DiskSweeper",
    "LocalStagingFilesystem",
]
