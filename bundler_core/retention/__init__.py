"""
Retention policy primitives shared by the disk and datasource sweepers.
"""

from bundler_core.retention.clock import RetentionClock, RetentionPolicy, utc_now
from bundler_core.retention.patterns import (
    DEFAULT_STAGING_PATTERNS,
    matches,
    validate_patterns,
)

__all__ = [
    "DEFAULT_STAGING_PATTERNS",
    "RetentionClock",
    "RetentionPolicy",
    "matches",
    "utc_now",
    "validate_patterns",
]
