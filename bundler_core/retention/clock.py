"""
Retention clock: computes cutoff instants from retention windows.

Pure computation, no I/O. The clock reads "now" from an injectable
callable so tests can pin time.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class RetentionClock:
    """
    Computes ``now - window`` for a configured retention window.

    Usage:
        clock = RetentionClock()
        cutoff = clock.cutoff(14)  # anything created before this is expired
    """

    def __init__(self, now: Callable[[], datetime] = utc_now):
        self._now = now

    def cutoff(self, window_days: float) -> datetime:
        """
        Compute the cutoff instant for a retention window.

        Args:
            window_days: Retention window in days.

        Returns:
            datetime: ``now - window_days``.

        Raises:
            ValueError: If window_days is negative.
        """
        if window_days < 0:
            raise ValueError(f"Retention window must not be negative, got {window_days}")
        return self._now() - timedelta(days=window_days)


class RetentionPolicy(BaseModel):
    """
    Retention windows for the two stores.

    Attributes:
        staging_days: Short window for on-disk staging artifacts.
        datasource_days: Long window for job bookkeeping rows.
    """

    staging_days: float = Field(default=2, ge=0)
    datasource_days: float = Field(default=14, ge=0)

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings) -> "RetentionPolicy":
        return cls(
            staging_days=settings.STAGING_RETENTION_DAYS,
            datasource_days=settings.DATASOURCE_RETENTION_DAYS,
        )
