"""
Recurrence Expansion Service

Expands a RecurrencePattern into concrete occurrences:
- Lazy TimeSpan sequence (expand)
- Concrete occurrence appointments for a series (generate_recurring_appointments)
"""

from datetime import datetime, timedelta
from typing import Iterator, List, Optional

from dateutil.relativedelta import relativedelta

from .exceptions import InvalidSchedulingInput, RecurrenceLimitExceeded
from .models import Appointment, RecurrenceFrequency, RecurrencePattern, TimeSpan


def expand(
	pattern: RecurrencePattern,
	start_span: TimeSpan,
	limit: Optional[int] = None
) -> Iterator[TimeSpan]:
	"""
	Genera perezosamente un TimeSpan por ocurrencia.

	Args:
		pattern: patrón de recurrencia (siempre terminado)
		start_span: primera ocurrencia; cuenta para occurrence_count
		limit: tope duro de ocurrencias; superarlo lanza RecurrenceLimitExceeded

	Returns:
		Iterator[TimeSpan]: todas con la misma duración que start_span

	Reglas:
		- daily: +interval días
		- weekly sin days_of_week: +7*interval días
		- weekly con days_of_week: siguiente día seleccionado, solo en semanas
		  cuyo índice (desde la semana de start_span) es múltiplo de interval
		- monthly: base + k*interval meses, con day_of_month si existe;
		  meses cortos se recortan al último día

	Cada llamada empieza de nuevo desde start_span.
	"""
	if pattern is None:
		raise InvalidSchedulingInput("Recurrence pattern is required")
	if limit is not None and limit <= 0:
		raise InvalidSchedulingInput(f"limit must be positive, got {limit}")

	return _expand(pattern, start_span, limit)


def _expand(
	pattern: RecurrencePattern,
	start_span: TimeSpan,
	limit: Optional[int]
) -> Iterator[TimeSpan]:
	duration = start_span.end - start_span.start
	emitted = 0

	for start in _occurrence_starts(pattern, start_span.start):
		if pattern.end_date is not None and start > pattern.end_date:
			return
		if pattern.occurrence_count is not None and emitted >= pattern.occurrence_count:
			return
		if limit is not None and emitted >= limit:
			raise RecurrenceLimitExceeded(limit)

		yield TimeSpan(start=start, end=start + duration)
		emitted += 1


def _occurrence_starts(pattern: RecurrencePattern, base: datetime) -> Iterator[datetime]:
	"""Secuencia infinita de inicios; la terminación la aplica _expand."""
	if pattern.frequency == RecurrenceFrequency.DAILY:
		step = timedelta(days=pattern.interval)
		current = base
		while True:
			yield current
			current += step

	elif pattern.frequency == RecurrenceFrequency.WEEKLY:
		if pattern.days_of_week:
			yield from _weekly_day_set_starts(pattern, base)
		else:
			step = timedelta(weeks=pattern.interval)
			current = base
			while True:
				yield current
				current += step

	elif pattern.frequency == RecurrenceFrequency.MONTHLY:
		yield base
		months = pattern.interval
		while True:
			if pattern.day_of_month:
				yield base + relativedelta(months=months, day=pattern.day_of_month)
			else:
				yield base + relativedelta(months=months)
			months += pattern.interval

	else:
		raise InvalidSchedulingInput(f"Unsupported frequency: {pattern.frequency}")


def _weekly_day_set_starts(pattern: RecurrencePattern, base: datetime) -> Iterator[datetime]:
	# Semanas ancladas al lunes de la semana de base
	week_anchor = base.date() - timedelta(days=base.weekday())
	selected = {int(day) for day in pattern.days_of_week}

	yield base
	current = base
	while True:
		current += timedelta(days=1)
		week_index = (current.date() - week_anchor).days // 7
		if current.weekday() in selected and week_index % pattern.interval == 0:
			yield current


def generate_recurring_appointments(
	base_appointment: Appointment,
	pattern: RecurrencePattern,
	limit: Optional[int] = None
) -> List[Appointment]:
	"""
	Materializa la serie completa como citas.

	Cada ocurrencia recibe id "{base.id}-{n}" (n desde 0) y
	recurrence_group_id = base.id.
	"""
	occurrences = []

	for index, span in enumerate(expand(pattern, base_appointment.span, limit=limit)):
		occurrence_id = f"{base_appointment.id}-{index}" if base_appointment.id is not None else None
		occurrences.append(base_appointment.model_copy(update={
			"id": occurrence_id,
			"span": span,
			"recurrence_group_id": base_appointment.id
		}))

	return occurrences
