"""
Pydantic schemas for the cleanup module.

Summaries returned by the sweepers and served by the manual trigger
endpoint.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PassResult(BaseModel):
    """Outcome of one datasource sweep pass."""

    name: str
    completed: bool = True
    removed: int = 0
    preserved: int = 0
    error: Optional[str] = None


class SweepSummary(BaseModel):
    """Outcome of one sweeper invocation."""

    sweeper: str
    removed: int = 0
    failed: int = 0
    skipped: int = 0
    preserved: int = 0
    disabled: bool = False
    elapsed_ms: int = 0
    cutoff: Optional[datetime] = None
    passes: list[PassResult] = Field(default_factory=list)


class CleanupReport(BaseModel):
    """Response model for a full cleanup run."""

    started_at: datetime
    disk: Optional[SweepSummary] = None
    datasource: Optional[SweepSummary] = None
