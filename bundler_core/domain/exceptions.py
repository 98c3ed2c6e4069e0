"""
Standard exceptions for bundler-cleanup.

This module defines the hierarchy of exceptions used across the platform.
"""

from bundler_core.runtime.errors import ErrorCode, TerminalError


class CleanupError(Exception):
    """Base exception for all bundler-cleanup errors."""
    pass


class ConfigurationMissingError(CleanupError, TerminalError):
    """A required configuration value is undefined or points nowhere usable.

    Terminal: retrying without changing the setting cannot succeed.
    """

    def __init__(self, setting: str, message: str):
        super().__init__(code=ErrorCode.CONFIGURATION_MISSING, message_safe=message)
        self.setting = setting


class UnknownJobStateTypeError(CleanupError):
    """A job row carries a state string that is not a known JobStateType."""
    pass
