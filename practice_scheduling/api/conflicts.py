"""
Conflict API

Public, synchronous functions called by the calendar UI:
- check_appointment_conflicts: validate a move/resize of one appointment
- is_time_slot_available: yes/no for a time and duration
- get_available_time_slots: conflict-free start times for a day
- check_recurring_appointment_conflicts: per-occurrence report for a series
- suggest_alternative_slots / suggest_alternative_recurring_slots
- check_date_range_conflicts: bookings of a provider grouped by day

Every function is a pure function of its arguments. Business-rule
violations come back in the returned reports; only invalid arguments raise.
"""

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Union

from practice_scheduling.scheduling import resolver, slots
from practice_scheduling.scheduling.config import SchedulingSettings
from practice_scheduling.scheduling.models import (
	Appointment,
	AppointmentStatus,
	ConflictReport,
	ProviderProfile,
	RecurrencePattern,
	RecurringConflictReport,
	TimeSpan,
)
from practice_scheduling.scheduling.overlap import check_single_occurrence_conflict

from .shared import validate_max_suggestions, validate_pattern_present, validate_positive_minutes


def check_appointment_conflicts(
	candidate: Appointment,
	requested_start: datetime,
	duration_override_minutes: Optional[int] = None,
	existing_appointments: Iterable[Appointment] = (),
	provider: Optional[ProviderProfile] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> ConflictReport:
	"""
	Verifica si candidate puede moverse a requested_start.

	Args:
		candidate: cita que se mueve o redimensiona
		requested_start: nuevo inicio
		duration_override_minutes: nueva duración (por defecto la actual)
		existing_appointments: citas del profesional
		provider: perfil del profesional; sin él solo se validan solapamientos y duración
		ignore_statuses: estados que no ocupan tiempo

	Returns:
		ConflictReport

	Example:
		report = check_appointment_conflicts(appt, datetime(2026, 1, 20, 10, 30), None, bookings, provider)
		if report.has_conflict:
			print(report.reason, [a.id for a in report.conflicting_appointments])
	"""
	if duration_override_minutes is not None:
		duration = validate_positive_minutes(duration_override_minutes, "duration_override_minutes")
	else:
		duration = candidate.duration_minutes

	moved = candidate.with_span(TimeSpan.starting_at(requested_start, duration))

	return check_single_occurrence_conflict(
		moved,
		existing_appointments,
		provider,
		ignore_statuses=ignore_statuses
	)


def is_time_slot_available(
	instant: datetime,
	duration_minutes: int,
	provider_id: str,
	existing_appointments: Iterable[Appointment],
	provider: Optional[ProviderProfile] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> bool:
	"""True si [instant, instant + duration) está libre para el profesional."""
	duration_minutes = validate_positive_minutes(duration_minutes, "duration_minutes")

	probe = Appointment(
		provider_id=provider_id,
		span=TimeSpan.starting_at(instant, duration_minutes)
	)
	report = check_single_occurrence_conflict(
		probe,
		existing_appointments,
		provider,
		ignore_statuses=ignore_statuses
	)

	return not report.has_conflict


def get_available_time_slots(
	target_date: Union[date, datetime],
	provider: ProviderProfile,
	existing_appointments: Iterable[Appointment],
	slot_duration_minutes: Optional[int] = None,
	min_step_minutes: Optional[int] = None,
	settings: Optional[SchedulingSettings] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[datetime]:
	"""
	Inicios libres del día, cada min_step_minutes.

	Los valores omitidos salen de settings (30 y 15 minutos por defecto).
	"""
	settings = settings or SchedulingSettings()

	if slot_duration_minutes is None:
		slot_duration_minutes = settings.default_slot_duration_minutes
	if min_step_minutes is None:
		min_step_minutes = settings.default_step_minutes

	return slots.find_available_slots(
		target_date,
		provider,
		existing_appointments,
		slot_duration_minutes=validate_positive_minutes(slot_duration_minutes, "slot_duration_minutes"),
		step_minutes=validate_positive_minutes(min_step_minutes, "min_step_minutes"),
		ignore_statuses=ignore_statuses
	)


def check_recurring_appointment_conflicts(
	base_appointment: Appointment,
	pattern: RecurrencePattern,
	existing_appointments: Iterable[Appointment] = (),
	provider: Optional[ProviderProfile] = None,
	settings: Optional[SchedulingSettings] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> RecurringConflictReport:
	"""Reporte de conflictos por ocurrencia para una serie."""
	pattern = validate_pattern_present(pattern)

	return resolver.check_recurring_conflicts(
		base_appointment,
		pattern,
		existing_appointments,
		provider,
		settings=settings,
		ignore_statuses=ignore_statuses
	)


def suggest_alternative_slots(
	appointment: Appointment,
	requested_instant: datetime,
	provider: ProviderProfile,
	existing_appointments: Iterable[Appointment],
	max_suggestions: Optional[int] = None,
	settings: Optional[SchedulingSettings] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[datetime]:
	"""Slots del mismo día más cercanos a requested_instant."""
	settings = settings or SchedulingSettings()
	if max_suggestions is None:
		max_suggestions = settings.max_suggestions

	return slots.suggest_alternative_slots(
		appointment,
		requested_instant,
		provider,
		existing_appointments,
		max_suggestions=validate_max_suggestions(max_suggestions),
		step_minutes=settings.default_step_minutes,
		ignore_statuses=ignore_statuses
	)


def suggest_alternative_recurring_slots(
	base_appointment: Appointment,
	pattern: RecurrencePattern,
	existing_appointments: Iterable[Appointment],
	provider: ProviderProfile,
	max_suggestions: Optional[int] = None,
	settings: Optional[SchedulingSettings] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[datetime]:
	"""
	Fechas de inicio alternativas sin conflictos para toda la serie.

	La búsqueda se limita a settings.recurring_search_horizon_days días.
	"""
	pattern = validate_pattern_present(pattern)
	settings = settings or SchedulingSettings()
	if max_suggestions is None:
		max_suggestions = settings.max_recurring_suggestions

	return resolver.suggest_alternative_recurring_slots(
		base_appointment,
		pattern,
		existing_appointments,
		provider,
		max_suggestions=validate_max_suggestions(max_suggestions),
		settings=settings,
		ignore_statuses=ignore_statuses
	)


def check_date_range_conflicts(
	start_date: Union[date, datetime],
	end_date: Union[date, datetime],
	provider_id: str,
	existing_appointments: Iterable[Appointment]
) -> Dict[str, List[Appointment]]:
	"""Citas del profesional agrupadas por día ("YYYY-MM-DD")."""
	return resolver.check_date_range_conflicts(start_date, end_date, provider_id, existing_appointments)
