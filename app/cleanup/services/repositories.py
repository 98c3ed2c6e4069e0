"""
PostgreSQL adapters for the bundler bookkeeping tables.

Each repository implements one of the store protocols consumed by the
DatasourceSweeper. Backend failures are raised as
CollaboratorUnavailableError carrying the store's name; deletes of rows
that no longer exist simply affect zero rows.

Tables:
    jobs                 job_id, state, created_at
    archive_jobs         job_id, archive_id, ...
    archive_elements     job_id, archive_id, ... (per-file entries of an archive)
    file_entry           job_id, ...
    bundler_job_metrics  job_id, ...
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

import psycopg
from loguru import logger

from bundler_core.domain.exceptions import UnknownJobStateTypeError
from bundler_core.domain.job_state import JobStateType
from bundler_core.domain.models import JobRecord
from bundler_core.infrastructure.postgres import get_db_connection
from bundler_core.runtime.errors import CollaboratorUnavailableError


class _PostgresStore:
    """Shared connection handling for the bookkeeping repositories."""

    collaborator = "Datasource"

    @contextmanager
    def _connection(self) -> Iterator[psycopg.Connection]:
        try:
            with get_db_connection() as conn:
                yield conn
        except psycopg.Error as e:
            raise CollaboratorUnavailableError(
                self.collaborator, message_debug=str(e), cause=e
            ) from e

    def _fetch_ids(self, query: str, params: tuple = ()) -> list[str]:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            rows = cursor.fetchall()
        return [row[0] for row in rows]


class JobRepository(_PostgresStore):
    """Repository for the JOBS table."""

    collaborator = "JobStore"

    def all_job_ids(self) -> list[str]:
        return self._fetch_ids("SELECT job_id FROM jobs")

    def job_ids_older_than(self, cutoff: datetime) -> list[str]:
        """
        IDs of jobs created strictly before the cutoff.

        Args:
            cutoff: Timezone-aware cutoff instant.
        """
        return self._fetch_ids(
            "SELECT job_id FROM jobs WHERE created_at < %s ORDER BY created_at",
            (cutoff,),
        )

    def get_job(self, job_id: str) -> JobRecord | None:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT job_id, state, created_at FROM jobs WHERE job_id = %s",
                (job_id,),
            )
            row = cursor.fetchone()

        if not row:
            return None

        try:
            state = JobStateType.from_string(row[1])
        except UnknownJobStateTypeError as e:
            logger.warning(f"Job [ {job_id} ] has an unrecognised state: {e}")
            state = None
        return JobRecord(job_id=row[0], state=state, created_at=row[2])

    def delete(self, job_id: str) -> None:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM jobs WHERE job_id = %s", (job_id,))
            conn.commit()
        logger.debug(f"Deleted JOBS row for job [ {job_id} ] (rows={cursor.rowcount})")


class ArchiveRepository(_PostgresStore):
    """Repository for the ARCHIVE_JOBS table and its ARCHIVE_ELEMENTS rows."""

    collaborator = "ArchiveStore"

    def all_job_ids(self) -> list[str]:
        return self._fetch_ids("SELECT DISTINCT job_id FROM archive_jobs")

    def deep_delete(self, job_id: str) -> None:
        """
        Delete a job's archives together with their per-file elements.

        Subordinate rows go first so a failure part way never leaves
        elements pointing at a missing archive.
        """
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM archive_elements WHERE job_id = %s", (job_id,))
            elements = cursor.rowcount
            cursor.execute("DELETE FROM archive_jobs WHERE job_id = %s", (job_id,))
            archives = cursor.rowcount
            conn.commit()
        logger.debug(
            f"Deep deleted archives for job [ {job_id} ] "
            f"(archives={archives}, elements={elements})"
        )


class FileEntryRepository(_PostgresStore):
    """Repository for the FILE_ENTRY table."""

    collaborator = "FileEntryStore"

    def all_job_ids(self) -> list[str]:
        return self._fetch_ids("SELECT DISTINCT job_id FROM file_entry")

    def delete(self, job_id: str) -> None:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM file_entry WHERE job_id = %s", (job_id,))
            conn.commit()
        logger.debug(f"Deleted FILE_ENTRY rows for job [ {job_id} ] (rows={cursor.rowcount})")


class JobMetricsRepository(_PostgresStore):
    """Repository for the BUNDLER_JOB_METRICS table."""

    collaborator = "MetricsStore"

    def has_metrics(self, job_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT 1 FROM bundler_job_metrics WHERE job_id = %s LIMIT 1",
                (job_id,),
            )
            row = cursor.fetchone()
        return row is not None
