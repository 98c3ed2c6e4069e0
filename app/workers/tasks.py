"""
Celery task definitions for the cleanup triggers.

Each task runs its sweep synchronously to completion and returns the
summary as JSON. Sweeps never raise, so the tasks are not retried.
"""

from loguru import logger

from app.cleanup.factory import get_cleanup_service
from app.workers.celery_app import celery_app


@celery_app.task(name="app.workers.tasks.run_cleanup")
def run_cleanup() -> dict:
    """Run the disk and datasource sweeps."""
    logger.info("Scheduled cleanup triggered")
    report = get_cleanup_service().cleanup()
    return report.model_dump(mode="json")


@celery_app.task(name="app.workers.tasks.run_disk_cleanup")
def run_disk_cleanup() -> dict:
    """Run only the staging area sweep."""
    report = get_cleanup_service(include_datasource=False).cleanup()
    return report.model_dump(mode="json")


@celery_app.task(name="app.workers.tasks.run_datasource_cleanup")
def run_datasource_cleanup() -> dict:
    """Run only the datasource sweep."""
    report = get_cleanup_service(include_disk=False).cleanup()
    return report.model_dump(mode="json")
