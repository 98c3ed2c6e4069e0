"""
Local filesystem adapter for the bundler staging area.

Implements the StagingFilesystem protocol on top of pathlib. Deletion is a
post-order walk driven by an explicit stack: every file and subdirectory is
removed before the directory holding it, so an interrupted delete never
leaves a parent missing while its children are still present. Tree depth
is bounded only by the filesystem.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from bundler_core.domain.models import DeletionResult
from bundler_core.retention.patterns import matches


class LocalStagingFilesystem:
    """
    Staging area on a locally mounted filesystem.

    Usage:
        fs = LocalStagingFilesystem()
        for entry in fs.list_entries(Path("/data/staging"), r"job_\\w+"):
            if fs.creation_time(entry) < cutoff:
                fs.delete_recursive(entry)
    """

    def list_entries(self, root: Path, pattern: str) -> list[Path]:
        """
        List immediate child directories of root whose name matches pattern.

        Matching is case-insensitive and covers the whole name. Symlinks
        are never returned, even when they point at a directory.

        Raises:
            OSError: If root cannot be listed.
        """
        entries = [
            child
            for child in Path(root).iterdir()
            if not child.is_symlink() and child.is_dir() and matches(child.name, pattern)
        ]
        return sorted(entries)

    def creation_time(self, entry: Path) -> datetime | None:
        """
        Creation time of an entry as a UTC datetime.

        Uses st_birthtime where the platform records it and falls back to
        st_mtime elsewhere. Returns None if the entry cannot be stat'ed.
        """
        try:
            stat_result = Path(entry).lstat()
        except OSError as e:
            logger.error(
                f"Unable to read the file attributes of [ {entry} ]: {e}. "
                "Entry will not be deleted."
            )
            return None

        timestamp = getattr(stat_result, "st_birthtime", None)
        if timestamp is None:
            timestamp = stat_result.st_mtime
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    def delete_recursive(self, entry: Path) -> DeletionResult:
        """
        Delete an entry and everything below it.

        Failures are logged per path and do not stop the walk.

        Returns:
            DeletionResult: MISSING if the entry was already gone, REMOVED if
            nothing is left, FAILED if any path below it survived.
        """
        entry = Path(entry)
        if not entry.exists() and not entry.is_symlink():
            logger.debug(f"Entry [ {entry} ] already removed.")
            return DeletionResult.MISSING

        failures = self._delete_tree(entry)
        if failures:
            logger.warning(
                f"Directory [ {entry} ] only partially removed: "
                f"{failures} path(s) could not be deleted."
            )
            return DeletionResult.FAILED
        return DeletionResult.REMOVED

    def _delete_tree(self, root: Path) -> int:
        """Post-order delete below and including root. Returns the failure count."""
        failures = 0
        # Directories still holding a path that could not be removed.
        blocked: set[Path] = set()
        stack: list[tuple[Path, bool]] = [(root, False)]

        while stack:
            path, expanded = stack.pop()

            if expanded:
                if path in blocked:
                    continue
                if self._rmdir(path):
                    failures += 1
                    self._block_parents(path, root, blocked)
                continue

            if path.is_symlink() or not path.is_dir():
                if self._unlink(path):
                    failures += 1
                    self._block_parents(path, root, blocked)
                continue

            try:
                children = list(path.iterdir())
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning(f"Unable to list directory [ {path} ]: {e}. Directory not deleted.")
                failures += 1
                self._block_parents(path, root, blocked)
                continue

            stack.append((path, True))
            stack.extend((child, False) for child in children)

        return failures

    @staticmethod
    def _block_parents(path: Path, root: Path, blocked: set[Path]) -> None:
        while path != root:
            path = path.parent
            if path in blocked:
                return
            blocked.add(path)

    @staticmethod
    def _rmdir(path: Path) -> int:
        try:
            path.rmdir()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Unable to remove directory [ {path} ]: {e}.")
            return 1
        return 0

    @staticmethod
    def _unlink(path: Path) -> int:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Unable to remove file [ {path} ]: {e}. Target file not deleted.")
            return 1
        return 0
