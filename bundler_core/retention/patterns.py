"""
Naming patterns for on-disk staging artifacts.

Every bundling job (and every PDF merge job) works inside its own staging
directory named ``<prefix>_<job id>``. Only directories whose names match
one of these patterns are ever considered by the disk sweeper; anything
else in the staging area is left alone.
"""

from __future__ import annotations

import re
from functools import lru_cache

DEFAULT_STAGING_PATTERNS: tuple[str, ...] = (
    r"job_\w+",
    r"bundle_\w+",
    r"merge_\w+",
)


@lru_cache(maxsize=64)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a staging pattern for case-insensitive whole-name matching."""
    return re.compile(pattern, re.IGNORECASE)


def matches(name: str, pattern: str) -> bool:
    """
    Check whether a staging entry name matches a pattern.

    The whole name must match; ``JOB_20230101`` matches ``job_\\w+`` but
    ``old_job_20230101`` does not.
    """
    return compile_pattern(pattern).fullmatch(name) is not None


def validate_patterns(patterns: list[str] | tuple[str, ...]) -> list[str]:
    """
    Validate a list of patterns, returning them unchanged.

    Raises:
        ValueError: If a pattern is empty or is not a valid regular expression.
    """
    validated = []
    for pattern in patterns:
        if not pattern or not pattern.strip():
            raise ValueError("Staging directory patterns must not be empty")
        try:
            compile_pattern(pattern)
        except re.error as e:
            raise ValueError(f"Invalid staging directory pattern {pattern!r}: {e}") from e
        validated.append(pattern)
    return validated
