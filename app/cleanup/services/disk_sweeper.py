"""
DiskSweeper: bounds growth of the on-disk staging area.

Lists staging directories matching the known job-artifact naming patterns
and recursively deletes those created before the staging retention cutoff.
Governed only by naming pattern and filesystem creation time; the sweeper
never consults the datasource.
"""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Iterable

from loguru import logger

from app.cleanup.protocols import StagingFilesystem
from app.cleanup.schemas import SweepSummary
from app.cleanup.services.staging_filesystem import LocalStagingFilesystem
from bundler_core.domain.exceptions import ConfigurationMissingError
from bundler_core.domain.models import DeletionResult, StagingArtifact
from bundler_core.retention.clock import RetentionClock
from bundler_core.retention.patterns import DEFAULT_STAGING_PATTERNS, validate_patterns

STAGING_DIRECTORY_SETTING = "STAGING_DIRECTORY"


class DiskSweeper:
    """
    Removes expired job working directories from the staging area.

    Usage:
        sweeper = DiskSweeper("/data/staging", retention_days=2)
        summary = sweeper.cleanup()
        print(summary.removed, summary.elapsed_ms)
    """

    def __init__(
        self,
        staging_directory: str | Path | None,
        patterns: Iterable[str] = DEFAULT_STAGING_PATTERNS,
        retention_days: float = 2,
        clock: RetentionClock | None = None,
        filesystem: StagingFilesystem | None = None,
    ):
        """
        Args:
            staging_directory: Root of the staging area (may be None; the
                sweep is then disabled at invocation time).
            patterns: Regexes naming job staging directories.
            retention_days: Directories older than this are removed.
            clock: Source of the cutoff instant.
            filesystem: Staging filesystem adapter.

        Raises:
            ValueError: If retention_days is negative or a pattern is invalid.
        """
        if retention_days < 0:
            raise ValueError(f"retention_days must not be negative, got {retention_days}")
        self.staging_directory = staging_directory
        self.patterns = validate_patterns(list(patterns))
        self.retention_days = retention_days
        self.clock = clock or RetentionClock()
        self.filesystem = filesystem or LocalStagingFilesystem()

    def resolve_staging_root(self) -> Path:
        """
        Resolve and validate the staging root.

        Raises:
            ConfigurationMissingError: If the root is unset, absent or not a directory.
        """
        if self.staging_directory is None or not str(self.staging_directory).strip():
            raise ConfigurationMissingError(
                STAGING_DIRECTORY_SETTING,
                f"Target staging area not defined. Please check the value of "
                f"setting [ {STAGING_DIRECTORY_SETTING} ].",
            )

        root = Path(self.staging_directory).expanduser()
        if not root.exists():
            raise ConfigurationMissingError(
                STAGING_DIRECTORY_SETTING,
                f"The target staging area [ {root} ] does not exist.",
            )
        if not root.is_dir():
            raise ConfigurationMissingError(
                STAGING_DIRECTORY_SETTING,
                f"The target staging area [ {root} ] is not a directory.",
            )
        return root

    def collect_candidates(self, root: Path) -> list[StagingArtifact]:
        """
        Collect staging artifacts matching any configured pattern.

        An entry matched by several patterns is returned once. A pattern
        whose listing fails is logged and skipped.
        """
        seen: dict[Path, None] = {}
        for pattern in self.patterns:
            logger.debug(
                f"Checking for on-disk bundles to remove. Using staging directory "
                f"[ {root} ] and pattern [ {pattern} ]."
            )
            try:
                entries = self.filesystem.list_entries(root, pattern)
            except OSError as e:
                logger.warning(
                    f"Unable to list staging directory [ {root} ] for pattern "
                    f"[ {pattern} ]: {e}"
                )
                continue
            for entry in entries:
                seen.setdefault(Path(entry), None)

        return [
            StagingArtifact(path=entry, created_at=self._read_creation_time(entry))
            for entry in seen
        ]

    def _read_creation_time(self, entry: Path) -> datetime | None:
        try:
            return self.filesystem.creation_time(entry)
        except OSError as e:
            logger.error(
                f"Unable to obtain the creation time of [ {entry} ]: {e}. "
                "Entry will not be deleted."
            )
            return None

    def cleanup(self) -> SweepSummary:
        """
        Run one staging area sweep.

        Never raises. A missing or invalid staging root disables the sweep
        for this invocation.

        Returns:
            SweepSummary: Counts of removed, failed and skipped directories.
        """
        start = time.monotonic()
        removed = failed = skipped = 0
        cutoff = None
        disabled = False

        try:
            root = self.resolve_staging_root()
        except ConfigurationMissingError as e:
            logger.error(f"{e.message_safe} The disk cleanup process will not execute.")
            root = None
            disabled = True

        if root is not None:
            cutoff = self.clock.cutoff(self.retention_days)
            try:
                candidates = self.collect_candidates(root)
            except Exception as e:
                logger.exception(f"Unable to collect staging area candidates: {e}")
                candidates = []

            for artifact in candidates:
                if artifact.created_at is None:
                    skipped += 1
                    continue

                if artifact.created_at >= cutoff:
                    logger.debug(f"Directory [ {artifact.path} ] not ready to delete.")
                    continue

                logger.info(f"Recursively deleting expired directory [ {artifact.path} ].")
                result = self._delete(artifact.path)
                if result is DeletionResult.REMOVED:
                    removed += 1
                elif result is DeletionResult.FAILED:
                    failed += 1

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            f"Staging area cleanup completed in [ {elapsed_ms} ] ms and removed "
            f"[ {removed} ] directories (failed={failed}, skipped={skipped})."
        )
        return SweepSummary(
            sweeper="disk",
            removed=removed,
            failed=failed,
            skipped=skipped,
            disabled=disabled,
            elapsed_ms=elapsed_ms,
            cutoff=cutoff,
        )

    def _delete(self, entry: Path) -> DeletionResult:
        try:
            return self.filesystem.delete_recursive(entry)
        except OSError as e:
            logger.warning(
                f"Unexpected error while removing target directory [ {entry} ]: {e}. "
                "Target directory not deleted."
            )
        except Exception as e:
            logger.exception(
                f"Unexpected error while removing target directory [ {entry} ]: {e}. "
                "Continuing with the remaining directories."
            )
        return DeletionResult.FAILED
