#!/usr/bin/env python3
"""
CLI utility to run the bundler retention sweep once.

Usage:
    python scripts/run_cleanup.py
    python scripts/run_cleanup.py --disk-only --staging-days 1
    python scripts/run_cleanup.py --datasource-only --datasource-days 30
"""

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.cleanup.factory import get_cleanup_service
from bundler_core.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the bundler retention sweep")
    scope = parser.add_mutually_exclusive_group()
    scope.add_argument("--disk-only", action="store_true", help="Only sweep the staging area")
    scope.add_argument(
        "--datasource-only", action="store_true", help="Only sweep the job datasource"
    )
    parser.add_argument(
        "--staging-days",
        type=float,
        default=None,
        help="Override staging retention in days (defaults to settings.STAGING_RETENTION_DAYS)",
    )
    parser.add_argument(
        "--datasource-days",
        type=float,
        default=None,
        help="Override datasource retention in days (defaults to settings.DATASOURCE_RETENTION_DAYS)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging()

    service = get_cleanup_service(
        include_disk=not args.datasource_only,
        include_datasource=not args.disk_only,
        staging_days=args.staging_days,
        datasource_days=args.datasource_days,
    )
    report = service.cleanup()
    print(json.dumps(report.model_dump(mode="json"), indent=2, default=str))


if __name__ == "__main__":
    main()
