"""
Practice Scheduling

Decision engine for a multi-provider clinical practice: validates proposed
appointments (single or recurring) against provider working hours, breaks
and other bookings, and proposes alternative slots.
"""

__version__ = "0.1.0"

from .api import (
    check_appointment_conflicts,
    check_date_range_conflicts,
    check_recurring_appointment_conflicts,
    get_available_time_slots,
    is_time_slot_available,
    suggest_alternative_recurring_slots,
    suggest_alternative_slots,
)
from .scheduling.config import SchedulingSettings
from .scheduling.exceptions import InvalidSchedulingInput, RecurrenceLimitExceeded, SchedulingError
from .scheduling.models import (
    Appointment,
    AppointmentKind,
    AppointmentStatus,
    BreakInterval,
    ConflictReport,
    DailyAvailability,
    OccurrenceConflict,
    ProviderProfile,
    RecurrenceFrequency,
    RecurrencePattern,
    RecurringConflictReport,
    TimeSpan,
    Weekday,
)
