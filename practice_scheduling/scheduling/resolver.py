"""
Conflict Resolver

Recurring conflict checks and searches built on the single-occurrence engine:
- Per-occurrence conflict report for a recurring series
- Alternative start dates for a conflicting series
- Per-day booking map for a date range
"""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Union

from practice_scheduling.logging_config import get_logger

from .config import SchedulingSettings
from .exceptions import InvalidSchedulingInput
from .models import (
	Appointment,
	AppointmentStatus,
	OccurrenceConflict,
	ProviderProfile,
	RecurrencePattern,
	RecurringConflictReport,
)
from .overlap import check_single_occurrence_conflict
from .recurrence import expand

logger = get_logger(__name__)


def _other_bookings(
	base_appointment: Appointment,
	existing_appointments: Iterable[Appointment]
) -> List[Appointment]:
	# Las ocurrencias ya generadas de la misma serie no compiten con ella
	if base_appointment.id is None:
		return list(existing_appointments)
	return [
		appt for appt in existing_appointments
		if appt.recurrence_group_id != base_appointment.id
	]


def check_recurring_conflicts(
	base_appointment: Appointment,
	pattern: RecurrencePattern,
	existing_appointments: Iterable[Appointment],
	provider: Optional[ProviderProfile] = None,
	settings: Optional[SchedulingSettings] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> RecurringConflictReport:
	"""
	Chequea cada ocurrencia de la serie.

	Args:
		base_appointment: primera ocurrencia de la serie
		pattern: patrón de recurrencia
		existing_appointments: citas existentes
		provider: perfil del profesional (opcional)
		settings: límites (max_recurring_occurrences)
		ignore_statuses: estados que no ocupan tiempo

	Returns:
		RecurringConflictReport con solo las ocurrencias en conflicto

	Raises:
		RecurrenceLimitExceeded: si la serie supera el tope configurado
	"""
	if pattern is None:
		raise InvalidSchedulingInput("Recurrence pattern is required")

	settings = settings or SchedulingSettings()
	others = _other_bookings(base_appointment, existing_appointments)
	ignored = frozenset(ignore_statuses or ())

	per_occurrence = []
	checked = 0

	for span in expand(pattern, base_appointment.span, limit=settings.max_recurring_occurrences):
		checked += 1
		report = check_single_occurrence_conflict(
			base_appointment.with_span(span),
			others,
			provider,
			ignore_statuses=ignored
		)

		if report.has_conflict:
			per_occurrence.append(OccurrenceConflict(
				date=span.start,
				conflicts=report.conflicting_appointments,
				reason=report.reason
			))

	logger.debug(
		"recurring_conflict_check",
		provider_id=base_appointment.provider_id,
		occurrences=checked,
		conflicting=len(per_occurrence)
	)

	return RecurringConflictReport(
		has_conflicts=bool(per_occurrence),
		per_occurrence=per_occurrence,
		occurrences_checked=checked
	)


def suggest_alternative_recurring_slots(
	base_appointment: Appointment,
	pattern: RecurrencePattern,
	existing_appointments: Iterable[Appointment],
	provider: ProviderProfile,
	max_suggestions: int = 3,
	settings: Optional[SchedulingSettings] = None,
	horizon_days: Optional[int] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[datetime]:
	"""
	Busca fechas de inicio alternativas para una serie en conflicto.

	Prueba días sucesivos después del inicio original (misma hora del día)
	y acepta los primeros cuyo patrón completo queda sin conflictos.
	Las fechas cuya serie queda vacía (inicio posterior a end_date) se descartan.

	Args:
		base_appointment: primera ocurrencia original
		pattern: patrón de recurrencia
		existing_appointments: citas existentes
		provider: perfil del profesional
		max_suggestions: cantidad máxima de fechas
		settings: límites (recurring_search_horizon_days, max_recurring_occurrences)
		horizon_days: sobreescribe el horizonte de búsqueda
		ignore_statuses: estados que no ocupan tiempo

	Returns:
		list[datetime]: inicios propuestos, en orden cronológico
	"""
	if max_suggestions <= 0:
		raise InvalidSchedulingInput(f"max_suggestions must be positive, got {max_suggestions}")

	settings = settings or SchedulingSettings()
	horizon = horizon_days if horizon_days is not None else settings.recurring_search_horizon_days
	if horizon <= 0:
		raise InvalidSchedulingInput(f"horizon_days must be positive, got {horizon}")

	existing_appointments = list(existing_appointments)
	ignored = frozenset(ignore_statuses or ())
	suggestions = []

	for offset in range(1, horizon + 1):
		shifted = base_appointment.with_span(base_appointment.span.shifted(timedelta(days=offset)))
		report = check_recurring_conflicts(
			shifted,
			pattern,
			existing_appointments,
			provider,
			settings=settings,
			ignore_statuses=ignored
		)

		if report.occurrences_checked and not report.has_conflicts:
			suggestions.append(shifted.start)
			if len(suggestions) >= max_suggestions:
				break

	if len(suggestions) < max_suggestions:
		logger.warning(
			"recurring_search_horizon_exhausted",
			provider_id=provider.id,
			horizon_days=horizon,
			found=len(suggestions),
			requested=max_suggestions
		)

	return suggestions


def check_date_range_conflicts(
	start_date: Union[date, datetime],
	end_date: Union[date, datetime],
	provider_id: str,
	existing_appointments: Iterable[Appointment]
) -> Dict[str, List[Appointment]]:
	"""
	Agrupa por día las citas del profesional en un rango (inclusivo).

	Returns:
		dict: {
			"2026-01-15": [Appointment, ...],
			...
		}
		Solo incluye días con citas.
	"""
	if isinstance(start_date, datetime):
		start_date = start_date.date()
	if isinstance(end_date, datetime):
		end_date = end_date.date()

	if start_date > end_date:
		raise InvalidSchedulingInput(f"start_date ({start_date}) must not be after end_date ({end_date})")

	by_day: Dict[str, List[Appointment]] = {}

	for appt in existing_appointments:
		if appt.provider_id != provider_id:
			continue
		day = appt.start.date()
		if start_date <= day <= end_date:
			by_day.setdefault(day.strftime("%Y-%m-%d"), []).append(appt)

	return dict(sorted(by_day.items()))
