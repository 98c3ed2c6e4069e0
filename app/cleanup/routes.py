"""
Cleanup API routes.

Monitoring and manual trigger endpoints:
- isAlive: liveness with application and host name
- startCleanup: run the full cleanup synchronously and return its report
"""

from __future__ import annotations

import socket

from fastapi import APIRouter, Depends
from loguru import logger

from app.cleanup.factory import get_cleanup_service
from app.cleanup.schemas import CleanupReport
from app.cleanup.services.cleanup_service import CleanupService

APPLICATION_NAME = "BundlerCleanup"

router = APIRouter()


def cleanup_service_dependency() -> CleanupService:
    """Build the CleanupService for a request (overridable in tests)."""
    return get_cleanup_service()


@router.get("/isAlive")
def is_alive() -> dict:
    """Report that the application is responding to requests."""
    return {
        "status": "ok",
        "application": APPLICATION_NAME,
        "host": socket.gethostname(),
    }


@router.get("/startCleanup", response_model=CleanupReport)
def start_cleanup(service: CleanupService = Depends(cleanup_service_dependency)):
    """
    Manually launch the cleanup process.

    Runs both sweepers to completion on the request thread. Sweep
    failures are reported in the summaries, never as HTTP errors.
    """
    logger.info("CleanupService manually launched.")
    report = service.cleanup()
    logger.info("CleanupService manual launch complete.")
    return report
