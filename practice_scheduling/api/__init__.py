"""
Practice Scheduling API

Structure:
    api/
    ├── __init__.py              # This file
    ├── conflicts.py             # Public conflict / slot functions
    └── shared/                  # Shared utilities
        ├── __init__.py
        └── validators.py        # Argument validators

Usage:
    from practice_scheduling.api import check_appointment_conflicts

    report = check_appointment_conflicts(candidate, new_start, None, bookings, provider)
"""

from . import shared
from .conflicts import (
    check_appointment_conflicts,
    check_date_range_conflicts,
    check_recurring_appointment_conflicts,
    get_available_time_slots,
    is_time_slot_available,
    suggest_alternative_recurring_slots,
    suggest_alternative_slots,
)

__all__ = [
    "shared",
    "check_appointment_conflicts",
    "check_date_range_conflicts",
    "check_recurring_appointment_conflicts",
    "get_available_time_slots",
    "is_time_slot_available",
    "suggest_alternative_recurring_slots",
    "suggest_alternative_slots",
]
