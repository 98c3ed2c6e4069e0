"""
Job lifecycle states as stored in the JOBS table.
"""

from __future__ import annotations

from enum import Enum

from bundler_core.domain.exceptions import UnknownJobStateTypeError


class JobStateType(str, Enum):
    """
    Status of a bundler job.

    Usage:
        state = JobStateType.from_string(" Complete ")
        assert state is JobStateType.COMPLETE
    """
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    INVALID_REQUEST = "invalid_request"
    COMPRESSING = "compressing"
    CREATING_HASH = "creating_hash"
    COMPLETE = "complete"
    ERROR = "error"

    @classmethod
    def from_string(cls, text: str | None) -> "JobStateType":
        """
        Convert stored text to its JobStateType.

        Surrounding whitespace is ignored and the comparison is
        case-insensitive. There is no default value.

        Raises:
            UnknownJobStateTypeError: If text does not name a known state.
        """
        if text is not None:
            candidate = text.strip().lower()
            for state in cls:
                if state.value == candidate:
                    return state
        raise UnknownJobStateTypeError(
            f"Unknown job state type requested! Job State Type requested [ {text} ]."
        )
