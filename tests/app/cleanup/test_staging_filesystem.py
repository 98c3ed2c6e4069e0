"""
Unit tests for LocalStagingFilesystem.

The staging filesystem should:
1. List only immediate child directories matching a pattern
2. Report creation times as UTC datetimes
3. Delete trees post-order, continuing past individual failures
"""

import pathlib
from datetime import datetime, timezone

import pytest

from app.cleanup.services.staging_filesystem import LocalStagingFilesystem
from bundler_core.domain.models import DeletionResult


class TestListEntries:
    """Tests for pattern based listing."""

    def test_matches_case_insensitively(self, tmp_path):
        """JOB_1 and job_2 should both match job_\\w+."""
        (tmp_path / "JOB_1").mkdir()
        (tmp_path / "job_2").mkdir()
        (tmp_path / "merge_3").mkdir()

        entries = LocalStagingFilesystem().list_entries(tmp_path, r"job_\w+")

        assert [e.name for e in entries] == ["JOB_1", "job_2"]

    def test_ignores_files_and_nested_directories(self, tmp_path):
        """Only immediate child directories are candidates."""
        (tmp_path / "job_file").write_text("x")
        (tmp_path / "outer" / "job_nested").mkdir(parents=True)

        entries = LocalStagingFilesystem().list_entries(tmp_path, r"job_\w+")

        assert entries == []

    def test_requires_whole_name_match(self, tmp_path):
        """A pattern match in the middle of a name is not enough."""
        (tmp_path / "old_job_1").mkdir()

        entries = LocalStagingFilesystem().list_entries(tmp_path, r"job_\w+")

        assert entries == []

    def test_ignores_symlinked_directories(self, tmp_path):
        """Symlinks into other trees are never candidates."""
        target = tmp_path / "elsewhere"
        target.mkdir()
        staging = tmp_path / "staging"
        staging.mkdir()
        (staging / "job_link").symlink_to(target, target_is_directory=True)

        entries = LocalStagingFilesystem().list_entries(staging, r"job_\w+")

        assert entries == []


class TestCreationTime:
    """Tests for creation time lookup."""

    def test_returns_utc_datetime(self, tmp_path):
        entry = tmp_path / "job_1"
        entry.mkdir()

        created = LocalStagingFilesystem().creation_time(entry)

        assert isinstance(created, datetime)
        assert created.tzinfo == timezone.utc

    def test_missing_entry_returns_none(self, tmp_path):
        """Unreadable entries yield None rather than raising."""
        assert LocalStagingFilesystem().creation_time(tmp_path / "gone") is None


class TestDeleteRecursive:
    """Tests for post-order recursive deletion."""

    def test_deletes_whole_tree(self, tmp_path):
        root = tmp_path / "job_1"
        (root / "a" / "b").mkdir(parents=True)
        (root / "a" / "b" / "f.txt").write_text("x")
        (root / "top.txt").write_text("y")

        assert LocalStagingFilesystem().delete_recursive(root) is DeletionResult.REMOVED
        assert not root.exists()

    def test_missing_entry_reports_missing(self, tmp_path):
        """Deleting something already gone is reported as missing, not an error."""
        assert LocalStagingFilesystem().delete_recursive(tmp_path / "job_gone") is DeletionResult.MISSING

    def test_deletes_tree_deeper_than_recursion_limit(self, tmp_path):
        """The walk is iterative, so nesting depth never raises RecursionError."""
        root = tmp_path / "job_1"
        deepest = root
        deepest.mkdir()
        for _ in range(1200):
            deepest = deepest / "d"
            deepest.mkdir()
        (deepest / "leaf.bin").write_bytes(b"x")

        assert LocalStagingFilesystem().delete_recursive(root) is DeletionResult.REMOVED
        assert not root.exists()

    def test_does_not_follow_symlinks(self, tmp_path):
        """A symlink inside a job tree is unlinked, its target survives."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "keep.txt").write_text("keep")
        root = tmp_path / "job_1"
        root.mkdir()
        (root / "link").symlink_to(outside, target_is_directory=True)

        assert LocalStagingFilesystem().delete_recursive(root) is DeletionResult.REMOVED
        assert (outside / "keep.txt").exists()

    def test_failure_mid_walk_continues_and_keeps_parent(self, tmp_path, monkeypatch):
        """A file that can't be removed is logged; siblings still go, parent stays."""
        root = tmp_path / "job_1"
        (root / "sub").mkdir(parents=True)
        (root / "sub" / "locked.bin").write_bytes(b"x")
        (root / "sub" / "free.bin").write_bytes(b"y")
        (root / "other.bin").write_bytes(b"z")

        original_unlink = pathlib.Path.unlink

        def flaky_unlink(self, *args, **kwargs):
            if self.name == "locked.bin":
                raise PermissionError(13, "Permission denied", str(self))
            return original_unlink(self, *args, **kwargs)

        monkeypatch.setattr(pathlib.Path, "unlink", flaky_unlink)

        result = LocalStagingFilesystem().delete_recursive(root)

        assert result is DeletionResult.FAILED
        assert (root / "sub" / "locked.bin").exists()
        assert not (root / "sub" / "free.bin").exists()
        assert not (root / "other.bin").exists()
        # Parents of the surviving file are never removed before it.
        assert (root / "sub").is_dir()
        assert root.is_dir()
