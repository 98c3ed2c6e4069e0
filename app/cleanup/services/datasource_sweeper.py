"""
DatasourceSweeper: bounds growth of the bundler bookkeeping tables.

Runs three ordered reconciliation passes:

A. purge_expired_jobs - delete JOBS rows older than the datasource
   retention window, but only when a metrics record exists for them.
B. clean_orphaned_archive_records - deep delete ARCHIVE_JOBS rows whose
   job ID no longer exists in JOBS.
C. clean_orphaned_file_records - delete FILE_ENTRY rows whose job ID no
   longer exists in JOBS.

Pass A runs first so the jobs it removes are orphan sources for B and C
within the same invocation. Each pass is isolated: if one of its stores is
unavailable the pass logs the failing collaborator and stops, and the
next pass still runs.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Callable

from loguru import logger

from app.cleanup.protocols import ArchiveStore, FileEntryStore, JobStore, MetricsStore
from app.cleanup.schemas import PassResult, SweepSummary
from bundler_core.retention.clock import RetentionClock
from bundler_core.runtime.errors import CollaboratorUnavailableError

PURGE_EXPIRED_JOBS = "purge_expired_jobs"
CLEAN_ORPHANED_ARCHIVES = "clean_orphaned_archive_records"
CLEAN_ORPHANED_FILES = "clean_orphaned_file_records"


class DatasourceSweeper:
    """
    Removes expired job rows and reconciles orphaned archive/file rows.

    Usage:
        sweeper = DatasourceSweeper(
            job_store=JobRepository(),
            archive_store=ArchiveRepository(),
            file_store=FileEntryRepository(),
            metrics_store=JobMetricsRepository(),
            retention_days=14,
        )
        summary = sweeper.cleanup()
    """

    def __init__(
        self,
        job_store: JobStore,
        archive_store: ArchiveStore,
        file_store: FileEntryStore,
        metrics_store: MetricsStore,
        retention_days: float = 14,
        clock: RetentionClock | None = None,
    ):
        if retention_days < 0:
            raise ValueError(f"retention_days must not be negative, got {retention_days}")
        self.job_store = job_store
        self.archive_store = archive_store
        self.file_store = file_store
        self.metrics_store = metrics_store
        self.retention_days = retention_days
        self.clock = clock or RetentionClock()

    # ------------------------------------------------------------------
    # Pass A
    # ------------------------------------------------------------------

    def purge_expired_jobs(self, cutoff: datetime | None = None) -> PassResult:
        """
        Delete jobs older than the cutoff that have a metrics record.

        Expired jobs without metrics are preserved and reported with a
        warning so they can be investigated by hand.
        """
        cutoff = cutoff or self.clock.cutoff(self.retention_days)
        result = PassResult(name=PURGE_EXPIRED_JOBS)

        def run() -> None:
            expired = self.job_store.job_ids_older_than(cutoff)
            if not expired:
                logger.debug("There are currently no old jobs to process.")
                return

            for job_id in expired:
                if self.metrics_store.has_metrics(job_id):
                    logger.info(f"Removing old job [ {job_id} ].")
                    self.job_store.delete(job_id)
                    result.removed += 1
                else:
                    result.preserved += 1
                    logger.warning(
                        f"Job ID [ {job_id} ] is older than {self.retention_days} days"
                        f"{self._describe_job(job_id)}, yet it does not have an "
                        "associated metrics record. Please investigate."
                    )

        return self._run_pass(result, run, "Old job records will not be cleaned up.")

    def _describe_job(self, job_id: str) -> str:
        """Best-effort state/creation detail for the anomaly warning."""
        try:
            job = self.job_store.get_job(job_id)
        except CollaboratorUnavailableError:
            return ""
        if job is None:
            return ""
        state = job.state.value if job.state is not None else "unknown"
        created = job.created_at.isoformat() if job.created_at is not None else "unknown"
        return f" (state={state}, created_at={created})"

    # ------------------------------------------------------------------
    # Pass B
    # ------------------------------------------------------------------

    def clean_orphaned_archive_records(self) -> PassResult:
        """Deep delete archive rows whose job ID has no JOBS row."""
        result = PassResult(name=CLEAN_ORPHANED_ARCHIVES)

        def run() -> None:
            orphans = self._orphans(self.archive_store.all_job_ids())
            for job_id in orphans:
                logger.debug(f"Found orphaned ARCHIVE_JOBS records for job [ {job_id} ]. Removing...")
                self.archive_store.deep_delete(job_id)
                result.removed += 1

        return self._run_pass(
            result, run, "Any potential orphaned archive records will not be cleaned up."
        )

    # ------------------------------------------------------------------
    # Pass C
    # ------------------------------------------------------------------

    def clean_orphaned_file_records(self) -> PassResult:
        """Delete file-entry rows whose job ID has no JOBS row."""
        result = PassResult(name=CLEAN_ORPHANED_FILES)

        def run() -> None:
            orphans = self._orphans(self.file_store.all_job_ids())
            for job_id in orphans:
                logger.debug(f"Found orphaned FILE_ENTRY records for job [ {job_id} ]. Removing...")
                self.file_store.delete(job_id)
                result.removed += 1

        return self._run_pass(
            result, run, "Any potential orphaned file records will not be cleaned up."
        )

    def _orphans(self, referenced_ids: list[str] | None) -> list[str]:
        """Referenced job IDs with no JOBS row, read after any Pass A deletes."""
        if not referenced_ids:
            return []
        existing = set(self.job_store.all_job_ids() or [])
        return sorted(set(referenced_ids) - existing)

    # ------------------------------------------------------------------

    def _run_pass(
        self, result: PassResult, body: Callable[[], None], consequence: str
    ) -> PassResult:
        try:
            body()
        except CollaboratorUnavailableError as e:
            result.completed = False
            result.error = str(e)
            logger.error(
                f"[{e.debug_id}] Collaborator [ {e.collaborator} ] unavailable during "
                f"[ {result.name} ]: {e.message_debug or e.message_safe}. {consequence}"
            )
        except Exception as e:
            result.completed = False
            result.error = f"{type(e).__name__}: {e}"
            logger.exception(f"Unexpected error during [ {result.name} ]. {consequence}")
        return result

    def cleanup(self) -> SweepSummary:
        """
        Run passes A, B and C in order.

        Never raises. A failed pass does not prevent the following passes.

        Returns:
            SweepSummary: Totals plus a PassResult per pass.
        """
        start = time.monotonic()
        cutoff = None
        try:
            cutoff = self.clock.cutoff(self.retention_days)
        except Exception:
            logger.exception("Unable to compute the datasource retention cutoff.")

        passes = []
        if cutoff is not None:
            passes.append(self.purge_expired_jobs(cutoff))
        else:
            passes.append(
                PassResult(name=PURGE_EXPIRED_JOBS, completed=False, error="cutoff unavailable")
            )
        passes.append(self.clean_orphaned_archive_records())
        passes.append(self.clean_orphaned_file_records())

        elapsed_ms = int((time.monotonic() - start) * 1000)
        removed = sum(p.removed for p in passes)
        preserved = sum(p.preserved for p in passes)
        logger.info(
            f"Datasource cleanup completed in [ {elapsed_ms} ] ms "
            f"(removed={removed}, preserved={preserved}, "
            f"failed_passes={sum(1 for p in passes if not p.completed)})."
        )
        return SweepSummary(
            sweeper="datasource",
            removed=removed,
            preserved=preserved,
            failed=sum(1 for p in passes if not p.completed),
            elapsed_ms=elapsed_ms,
            cutoff=cutoff,
            passes=passes,
        )
