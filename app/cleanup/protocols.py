"""
Cleanup module protocols.

This module defines the collaborator contracts consumed by the sweepers.
Concrete adapters (PostgreSQL repositories, the local staging filesystem)
and test doubles both satisfy these protocols, and are passed to the
sweepers at construction time.

Store methods raise CollaboratorUnavailableError when their backend cannot
be reached. Deletes are idempotent: deleting a row that no longer exists
is a successful no-op.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from bundler_core.domain.models import DeletionResult, JobRecord


@runtime_checkable
class JobStore(Protocol):
    """Protocol for the JOBS table."""

    def all_job_ids(self) -> list[str]:
        """Return every job ID currently present."""
        ...

    def job_ids_older_than(self, cutoff: datetime) -> list[str]:
        """Return IDs of jobs created strictly before the cutoff."""
        ...

    def get_job(self, job_id: str) -> JobRecord | None:
        """Return a single job, or None if it does not exist."""
        ...

    def delete(self, job_id: str) -> None:
        """Delete a job row."""
        ...


@runtime_checkable
class ArchiveStore(Protocol):
    """Protocol for the ARCHIVE_JOBS table and its subordinate rows."""

    def all_job_ids(self) -> list[str]:
        """Return the distinct job IDs referenced by archive rows."""
        ...

    def deep_delete(self, job_id: str) -> None:
        """Delete the job's archive rows and every row subordinate to them."""
        ...


@runtime_checkable
class FileEntryStore(Protocol):
    """Protocol for the FILE_ENTRY table."""

    def all_job_ids(self) -> list[str]:
        """Return the distinct job IDs referenced by file-entry rows."""
        ...

    def delete(self, job_id: str) -> None:
        """Delete every file-entry row for the job."""
        ...


@runtime_checkable
class MetricsStore(Protocol):
    """Protocol for the BUNDLER_JOB_METRICS table."""

    def has_metrics(self, job_id: str) -> bool:
        """Whether a metrics record exists for the job."""
        ...


@runtime_checkable
class StagingFilesystem(Protocol):
    """Protocol for the on-disk staging area."""

    def list_entries(self, root: Path, pattern: str) -> list[Path]:
        """List immediate child directories of root whose name matches pattern."""
        ...

    def creation_time(self, entry: Path) -> datetime | None:
        """Creation time of an entry, or None if it cannot be read."""
        ...

    def delete_recursive(self, entry: Path) -> DeletionResult:
        """Delete an entry and everything below it."""
        ...
