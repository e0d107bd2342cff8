"""
Scheduling Argument Validators

Fail-fast checks for call arguments that pydantic models do not cover
(plain ints and optional objects passed straight to the API functions).
"""

from typing import Any, Optional

from practice_scheduling.scheduling.exceptions import InvalidSchedulingInput
from practice_scheduling.scheduling.models import RecurrencePattern


def validate_positive_minutes(value: Any, field_name: str = "minutes") -> int:
    """
    Validate a positive whole number of minutes.

    Args:
        value: Value to validate
        field_name: Name of field for error messages

    Returns:
        int: Validated minutes

    Raises:
        InvalidSchedulingInput: If value is missing, not an integer or not positive
    """
    if value is None:
        raise InvalidSchedulingInput(f"{field_name} is required")

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSchedulingInput(f"{field_name} must be an integer number of minutes")

    if value <= 0:
        raise InvalidSchedulingInput(f"{field_name} must be positive, got {value}")

    return value


def validate_max_suggestions(value: Any, field_name: str = "max_suggestions") -> int:
    """
    Validate the number of suggestions requested.

    Raises:
        InvalidSchedulingInput: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidSchedulingInput(f"{field_name} must be a positive integer, got {value!r}")

    return value


def validate_pattern_present(pattern: Optional[RecurrencePattern]) -> RecurrencePattern:
    """
    Validate that a recurrence pattern was supplied.

    Raises:
        InvalidSchedulingInput: If pattern is missing or of the wrong type
    """
    if pattern is None:
        raise InvalidSchedulingInput("Recurrence pattern is required")

    if not isinstance(pattern, RecurrencePattern):
        raise InvalidSchedulingInput(
            f"pattern must be a RecurrencePattern, got {type(pattern).__name__}"
        )

    return pattern
