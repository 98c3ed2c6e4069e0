"""
Domain models for the records the sweepers reason about.

Only the attributes retention decisions depend on are modelled here;
the job pipeline owns the full row shapes.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from bundler_core.domain.job_state import JobStateType


class JobRecord(BaseModel):
    """A row in the JOBS table."""

    job_id: str = Field(..., description="Job identifier (primary key)")
    state: Optional[JobStateType] = Field(None, description="None when the stored state is unrecognised")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = {"frozen": True}


class StagingArtifact(BaseModel):
    """On-disk working directory of one job."""

    path: Path
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}


class DeletionResult(str, Enum):
    """Outcome of deleting one staging artifact."""

    REMOVED = "removed"
    MISSING = "missing"  # already gone before the delete started
    FAILED = "failed"
