"""
Shared utilities for the Practice Scheduling API.

Argument validators used by the public conflict functions.
"""

from .validators import (
    validate_max_suggestions,
    validate_pattern_present,
    validate_positive_minutes,
)

__all__ = [
    "validate_max_suggestions",
    "validate_pattern_present",
    "validate_positive_minutes",
]
