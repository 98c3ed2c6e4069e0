"""
Service errors with retry classification.

Store adapters raise CollaboratorUnavailableError (retryable) when their
backend cannot be reached; configuration problems surface as terminal
errors. The sweepers use the distinction to tell a transient outage apart
from a deployment that will never work without operator action.
"""

from __future__ import annotations

import uuid


class ErrorCode:
    """Error codes carried by ServiceError.code."""

    COLLABORATOR_UNAVAILABLE = "COLLABORATOR_UNAVAILABLE"
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"


class ServiceError(Exception):
    """Service error with retry classification.

    Attributes:
        code: Error code for programmatic handling.
        message_safe: Message fit for logs and HTTP responses.
        message_debug: Optional backend detail (driver message, DSN host).
        retryable: Whether a later attempt may succeed.
        cause: Optional underlying exception.
        debug_id: Short identifier for log correlation.
    """

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        retryable: bool = False,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(message_safe)
        self.code = code
        self.message_safe = message_safe
        self.message_debug = message_debug
        self.retryable = retryable
        self.cause = cause
        self.debug_id = debug_id or str(uuid.uuid4())[:8]

    def __str__(self) -> str:
        return f"[{self.code}] {self.message_safe}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, "
            f"message_safe={self.message_safe!r}, "
            f"retryable={self.retryable}, "
            f"debug_id={self.debug_id!r})"
        )


class RetryableError(ServiceError):
    """The next scheduled sweep may succeed (backend down, connection refused)."""

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=True,
            cause=cause,
            debug_id=debug_id,
        )


class TerminalError(ServiceError):
    """Nothing changes until an operator fixes the deployment."""

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
        )


class CollaboratorUnavailableError(RetryableError):
    """A store the sweepers depend on could not be reached or queried.

    Attributes:
        collaborator: Name of the failing collaborator (e.g. "JobStore").
    """

    def __init__(
        self,
        collaborator: str,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=ErrorCode.COLLABORATOR_UNAVAILABLE,
            message_safe=f"{collaborator} is unavailable",
            message_debug=message_debug,
            cause=cause,
            debug_id=debug_id,
        )
        self.collaborator = collaborator
