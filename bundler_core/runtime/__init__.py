"""
Service runtime layer for bundler-cleanup.

This package provides shared error semantics:
- ServiceError: Standardized errors with retry semantics
- CollaboratorUnavailableError: A store adapter could not reach its backend
- TerminalError: Failures that retrying cannot fix (missing configuration)
"""

from .errors import (
    CollaboratorUnavailableError,
    ErrorCode,
    RetryableError,
    ServiceError,
    TerminalError,
)

__all__ = [
    "CollaboratorUnavailableError",
    "ErrorCode",
    "ServiceError",
    "RetryableError",
    "TerminalError",
]
