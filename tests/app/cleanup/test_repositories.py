"""
Unit tests for the PostgreSQL store adapters.

Tests the queries issued by each repository using mocked PostgreSQL, and
that backend failures surface as CollaboratorUnavailableError.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import psycopg
import pytest

from app.cleanup.services.repositories import (
    ArchiveRepository,
    FileEntryRepository,
    JobMetricsRepository,
    JobRepository,
)
from bundler_core.domain.job_state import JobStateType
from bundler_core.runtime.errors import CollaboratorUnavailableError


def executed_queries(cursor) -> list[str]:
    return [" ".join(str(c.args[0]).split()).upper() for c in cursor.execute.call_args_list]


class TestJobRepository:
    """Tests for the JOBS table adapter."""

    def test_all_job_ids(self, mock_postgres):
        mock_postgres["cursor"].fetchall.return_value = [("a",), ("b",)]

        assert JobRepository().all_job_ids() == ["a", "b"]
        assert executed_queries(mock_postgres["cursor"]) == ["SELECT JOB_ID FROM JOBS"]

    def test_job_ids_older_than_passes_cutoff(self, mock_postgres):
        """The cutoff is bound as a parameter, not formatted into SQL."""
        cutoff = datetime(2024, 1, 1, tzinfo=timezone.utc)
        mock_postgres["cursor"].fetchall.return_value = [("old",)]

        result = JobRepository().job_ids_older_than(cutoff)

        assert result == ["old"]
        query, params = mock_postgres["cursor"].execute.call_args[0]
        assert "created_at < %s" in query
        assert params == (cutoff,)

    def test_get_job_parses_state(self, mock_postgres):
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        mock_postgres["cursor"].fetchone.return_value = ("job-1", "COMPLETE", created)

        job = JobRepository().get_job("job-1")

        assert job.state is JobStateType.COMPLETE
        assert job.created_at == created

    def test_get_job_unknown_state_is_none(self, mock_postgres):
        mock_postgres["cursor"].fetchone.return_value = ("job-1", "exploded", None)

        job = JobRepository().get_job("job-1")

        assert job is not None
        assert job.state is None

    def test_get_missing_job_returns_none(self, mock_postgres):
        mock_postgres["cursor"].fetchone.return_value = None

        assert JobRepository().get_job("missing") is None

    def test_delete_commits(self, mock_postgres):
        JobRepository().delete("job-1")

        assert executed_queries(mock_postgres["cursor"]) == ["DELETE FROM JOBS WHERE JOB_ID = %S"]
        mock_postgres["connection"].commit.assert_called_once()


class TestArchiveRepository:
    """Tests for the ARCHIVE_JOBS adapter."""

    def test_all_job_ids_is_distinct(self, mock_postgres):
        mock_postgres["cursor"].fetchall.return_value = [("1",)]

        ArchiveRepository().all_job_ids()

        assert "DISTINCT" in executed_queries(mock_postgres["cursor"])[0]

    def test_deep_delete_removes_elements_before_archives(self, mock_postgres):
        """Subordinate element rows are deleted first, in one transaction."""
        ArchiveRepository().deep_delete("job-1")

        queries = executed_queries(mock_postgres["cursor"])
        assert queries[0].startswith("DELETE FROM ARCHIVE_ELEMENTS")
        assert queries[1].startswith("DELETE FROM ARCHIVE_JOBS")
        mock_postgres["connection"].commit.assert_called_once()


class TestFileEntryRepository:
    """Tests for the FILE_ENTRY adapter."""

    def test_delete_removes_all_rows_for_job(self, mock_postgres):
        FileEntryRepository().delete("job-1")

        query, params = mock_postgres["cursor"].execute.call_args[0]
        assert "DELETE FROM file_entry" in query
        assert params == ("job-1",)


class TestJobMetricsRepository:
    """Tests for the BUNDLER_JOB_METRICS adapter."""

    def test_has_metrics_true_when_row_found(self, mock_postgres):
        mock_postgres["cursor"].fetchone.return_value = (1,)

        assert JobMetricsRepository().has_metrics("job-1") is True

    def test_has_metrics_false_when_no_row(self, mock_postgres):
        mock_postgres["cursor"].fetchone.return_value = None

        assert JobMetricsRepository().has_metrics("job-1") is False


class TestCollaboratorFailures:
    """Backend failures are reported with the store's name."""

    @pytest.mark.parametrize(
        "repository, call, name",
        [
            (JobRepository(), lambda r: r.all_job_ids(), "JobStore"),
            (ArchiveRepository(), lambda r: r.deep_delete("x"), "ArchiveStore"),
            (FileEntryRepository(), lambda r: r.all_job_ids(), "FileEntryStore"),
            (JobMetricsRepository(), lambda r: r.has_metrics("x"), "MetricsStore"),
        ],
    )
    def test_connection_failure_raises_collaborator_unavailable(self, repository, call, name):
        with patch(
            "app.cleanup.services.repositories.get_db_connection",
            side_effect=psycopg.OperationalError("connection refused"),
        ):
            with pytest.raises(CollaboratorUnavailableError) as exc_info:
                call(repository)

        assert exc_info.value.collaborator == name
        assert exc_info.value.retryable is True

    def test_query_failure_raises_collaborator_unavailable(self, mock_postgres):
        mock_postgres["cursor"].execute.side_effect = psycopg.errors.UndefinedTable("no jobs")

        with pytest.raises(CollaboratorUnavailableError) as exc_info:
            JobRepository().all_job_ids()

        assert "no jobs" in exc_info.value.message_debug


# --- Fixtures ---


@pytest.fixture
def mock_postgres():
    """Provides mock PostgreSQL connection and cursor."""
    with patch("app.cleanup.services.repositories.get_db_connection") as mock_get_conn:
        mock_conn = MagicMock()
        mock_cursor = MagicMock()

        mock_conn.cursor.return_value = mock_cursor
        mock_conn.__enter__ = MagicMock(return_value=mock_conn)
        mock_conn.__exit__ = MagicMock(return_value=False)

        mock_get_conn.return_value = mock_conn

        yield {
            "connection": mock_conn,
            "cursor": mock_cursor,
        }
