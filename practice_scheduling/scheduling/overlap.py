"""
Overlap Detection Service

Detects scheduling conflicts for a single occurrence, considering:
- Provider working hours and breaks (when a provider profile is given)
- Other bookings of the same provider (half-open overlap)
- Service duration constraints (min / max minutes)
"""

from datetime import timedelta
from typing import Iterable, List, Optional

from practice_scheduling.logging_config import get_logger

from .availability import (
	get_daily_availability,
	intervals_overlap,
	is_within_working_hours,
	overlaps_break,
)
from .exceptions import InvalidSchedulingInput
from .models import (
	Appointment,
	AppointmentStatus,
	ConflictReport,
	ProviderProfile,
	TimeSpan,
	Weekday,
)

logger = get_logger(__name__)

OVERLAP_REASON = "Appointment overlaps with existing bookings"


def spans_overlap(span_a: TimeSpan, span_b: TimeSpan) -> bool:
	"""[a0, a1) y [b0, b1) se solapan sii a0 < b1 AND b0 < a1 (simétrico)."""
	return intervals_overlap(span_a.start, span_a.end, span_b.start, span_b.end)


def find_overlapping_appointments(
	provider_id: str,
	span: TimeSpan,
	existing_appointments: Iterable[Appointment],
	exclude_appointment: Optional[str] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[Appointment]:
	"""
	Detecta citas existentes que se solapan con span.

	Args:
		provider_id: profesional a revisar
		span: rango a validar
		existing_appointments: citas conocidas (de cualquier profesional)
		exclude_appointment: id de la cita a excluir (para reprogramaciones)
		ignore_statuses: estados que no ocupan tiempo (p. ej. cancelled)

	Returns:
		list[Appointment]: solapamientos, en el orden recibido

	Algoritmo:
		1. Filtrar por provider_id
		2. Excluir exclude_appointment
		3. Excluir estados ignorados
		4. Aplicar predicado semiabierto
	"""
	ignored = frozenset(ignore_statuses or ())
	overlapping = []

	for appt in existing_appointments:
		if appt.provider_id != provider_id:
			continue
		if exclude_appointment is not None and appt.id == exclude_appointment:
			continue
		if appt.status in ignored:
			continue
		if spans_overlap(span, appt.span):
			overlapping.append(appt)

	return overlapping


def check_working_hours(span: TimeSpan, provider: ProviderProfile) -> Optional[str]:
	"""
	Valida span contra el horario del profesional.

	Returns:
		str con el motivo del conflicto, o None si es válido
	"""
	daily = get_daily_availability(provider, span.start)

	if daily is None:
		weekday = Weekday.of(span.start.date())
		return f"Provider {provider.display_name} is unavailable on {weekday.label}"

	# Un span que cruza medianoche nunca cabe en un día de trabajo
	crosses_midnight = span.end.date() != span.start.date()

	if (
		crosses_midnight
		or not is_within_working_hours(span.start, daily)
		or not is_within_working_hours(span.end, daily)
	):
		return f"Appointment is outside working hours ({daily.window})"

	break_period = overlaps_break(span, daily)
	if break_period is not None:
		return f"Appointment conflicts with {break_period.label} ({break_period.window})"

	return None


def check_duration_constraints(candidate: Appointment, duration_minutes: int) -> Optional[str]:
	if candidate.min_duration_minutes is not None and duration_minutes < candidate.min_duration_minutes:
		return f"Appointment duration must be at least {candidate.min_duration_minutes} minutes"

	if candidate.max_duration_minutes is not None and duration_minutes > candidate.max_duration_minutes:
		return f"Appointment duration cannot exceed {candidate.max_duration_minutes} minutes"

	return None


def check_single_occurrence_conflict(
	candidate: Appointment,
	existing_appointments: Iterable[Appointment],
	provider: Optional[ProviderProfile] = None,
	duration_override_minutes: Optional[int] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> ConflictReport:
	"""
	Evalúa si candidate puede ocupar su span.

	Args:
		candidate: cita a validar (su id se excluye de los solapamientos)
		existing_appointments: citas existentes
		provider: perfil del profesional; si es None se omiten horario y pausas
		duration_override_minutes: duración alternativa (al redimensionar)
		ignore_statuses: estados de citas que no ocupan tiempo

	Returns:
		ConflictReport

	Algoritmo:
		1. Calcular duración efectiva
		2. Horario y pausas (si hay provider)
		3. Solapamientos (siempre se ejecuta, para que la UI resalte todo)
		4. Restricciones de duración
		5. Reportar el primer motivo y el conjunto completo de solapamientos

	Raises:
		InvalidSchedulingInput: si duration_override_minutes no es positivo
	"""
	# 1. Duración efectiva
	span = candidate.span
	if duration_override_minutes is not None:
		if duration_override_minutes <= 0:
			raise InvalidSchedulingInput(
				f"duration_override_minutes must be positive, got {duration_override_minutes}"
			)
		span = TimeSpan(start=span.start, end=span.start + timedelta(minutes=duration_override_minutes))

	reasons = []

	# 2. Horario del profesional
	if provider is not None:
		working_hours_reason = check_working_hours(span, provider)
		if working_hours_reason:
			reasons.append(working_hours_reason)

	# 3. Solapamientos
	overlapping = find_overlapping_appointments(
		candidate.provider_id,
		span,
		existing_appointments,
		exclude_appointment=candidate.id,
		ignore_statuses=ignore_statuses
	)
	if overlapping:
		reasons.append(OVERLAP_REASON)

	# 4. Duración
	duration_reason = check_duration_constraints(candidate, span.duration_minutes)
	if duration_reason:
		reasons.append(duration_reason)

	if not reasons:
		return ConflictReport(has_conflict=False)

	logger.debug(
		"occurrence_conflict",
		provider_id=candidate.provider_id,
		start=span.start.isoformat(),
		end=span.end.isoformat(),
		reasons=reasons,
		overlapping=len(overlapping)
	)

	return ConflictReport(
		has_conflict=True,
		conflicting_appointments=overlapping,
		reason=reasons[0],
		reasons=reasons
	)
