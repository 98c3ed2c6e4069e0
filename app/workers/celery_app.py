"""
Celery application configuration.

This module configures the Celery app with Redis as broker and backend,
and registers the daily cleanup in the beat schedule.
"""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging as celery_setup_logging
from loguru import logger

from bundler_core.config import settings
from bundler_core.logging import setup_logging

# Create Celery app
celery_app = Celery(
    "bundler_cleanup",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=[
        "app.workers.tasks",
    ],
)

# Configuration
celery_app.conf.update(
    # Serialization
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    # Timezone
    timezone="UTC",
    enable_utc=True,
    # Task tracking
    task_track_started=True,
    # Results
    result_expires=3600,  # Results expire after 1 hour
    # Worker settings
    worker_prefetch_multiplier=1,
    worker_concurrency=1,  # Sweeps run one at a time per worker
)


def build_beat_schedule(enabled: bool, hour: int, minute: int) -> dict:
    """
    Beat schedule for the periodic cleanup trigger.

    Args:
        enabled: Whether the scheduled trigger is active.
        hour: Hour of day (UTC) to fire.
        minute: Minute of the hour to fire.
    """
    if not enabled:
        return {}
    return {
        "bundler-cleanup-daily": {
            "task": "app.workers.tasks.run_cleanup",
            "schedule": crontab(hour=hour, minute=minute),
        }
    }


celery_app.conf.beat_schedule = build_beat_schedule(
    settings.CLEANUP_SCHEDULE_ENABLED,
    settings.CLEANUP_SCHEDULE_HOUR,
    settings.CLEANUP_SCHEDULE_MINUTE,
)


@celery_setup_logging.connect
def _configure_worker_logging(**kwargs):
    setup_logging()


logger.info(f"Celery app configured with broker: {settings.CELERY_BROKER_URL}")
