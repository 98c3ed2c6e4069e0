"""Unit tests for the run_cleanup CLI."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from app.cleanup.schemas import CleanupReport, SweepSummary
from scripts.run_cleanup import build_parser, main


class TestRunCleanupArguments:
    """Tests for argument parsing."""

    def test_scope_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--disk-only", "--datasource-only"])

    def test_retention_overrides(self):
        args = build_parser().parse_args(["--staging-days", "1.5", "--datasource-days", "30"])

        assert args.staging_days == 1.5
        assert args.datasource_days == 30


class TestRunCleanupMain:
    """Tests for running the CLI."""

    def test_disk_only_prints_report(self, capsys):
        service = MagicMock()
        service.cleanup.return_value = CleanupReport(
            started_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
            disk=SweepSummary(sweeper="disk", removed=2),
        )

        with patch("scripts.run_cleanup.get_cleanup_service", return_value=service) as factory, \
                patch("scripts.run_cleanup.setup_logging"):
            main(["--disk-only", "--staging-days", "1"])

        factory.assert_called_once_with(
            include_disk=True,
            include_datasource=False,
            staging_days=1.0,
            datasource_days=None,
        )
        output = json.loads(capsys.readouterr().out)
        assert output["disk"]["removed"] == 2
