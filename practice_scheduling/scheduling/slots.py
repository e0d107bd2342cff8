"""
Slot Generation Service

Generates conflict-free start instants for a day, considering:
- Provider working hours and breaks
- Existing bookings of the provider
- Proximity to a requested time (for alternative suggestions)
"""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Union

from .availability import day_window, get_daily_availability, get_working_intervals, subtract_block
from .exceptions import InvalidSchedulingInput
from .models import Appointment, AppointmentStatus, ProviderProfile, TimeSpan
from .overlap import check_single_occurrence_conflict, find_overlapping_appointments


def _as_date(value: Union[date, datetime]) -> date:
	return value.date() if isinstance(value, datetime) else value


def find_available_slots(
	target_date: Union[date, datetime],
	provider: ProviderProfile,
	existing_appointments: Iterable[Appointment],
	slot_duration_minutes: int = 30,
	step_minutes: int = 15,
	exclude_appointment_id: Optional[str] = None,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[datetime]:
	"""
	Genera los inicios de slot disponibles para un día.

	Args:
		target_date: fecha a revisar
		provider: perfil del profesional
		existing_appointments: citas existentes
		slot_duration_minutes: duración de cada slot
		step_minutes: avance entre candidatos
		exclude_appointment_id: cita que se está moviendo (no se bloquea a sí misma)
		ignore_statuses: estados que no ocupan tiempo

	Returns:
		list[datetime]: inicios en orden cronológico ascendente

	Algoritmo:
		1. Obtener el horario del día (sin horario -> [])
		2. Desde la apertura, avanzar step_minutes
		3. Descartar slots que terminan después del cierre
		4. Emitir el inicio si el chequeo de conflicto es limpio
	"""
	if slot_duration_minutes <= 0:
		raise InvalidSchedulingInput(f"slot_duration_minutes must be positive, got {slot_duration_minutes}")
	if step_minutes <= 0:
		raise InvalidSchedulingInput(f"step_minutes must be positive, got {step_minutes}")

	target_date = _as_date(target_date)
	daily = get_daily_availability(provider, target_date)
	if daily is None:
		return []

	existing_appointments = list(existing_appointments)
	ignored = frozenset(ignore_statuses or ())
	day_start, day_end = day_window(daily, target_date)
	slot_duration = timedelta(minutes=slot_duration_minutes)
	step = timedelta(minutes=step_minutes)

	slots = []
	current_slot_start = day_start

	while current_slot_start < day_end:
		current_slot_end = current_slot_start + slot_duration

		# El slot debe caber completo antes del cierre
		if current_slot_end > day_end:
			break

		probe = Appointment(
			id=exclude_appointment_id,
			provider_id=provider.id,
			span=TimeSpan(start=current_slot_start, end=current_slot_end)
		)
		report = check_single_occurrence_conflict(
			probe,
			existing_appointments,
			provider,
			ignore_statuses=ignored
		)

		if not report.has_conflict:
			slots.append(current_slot_start)

		current_slot_start += step

	return slots


def suggest_alternative_slots(
	appointment: Appointment,
	requested_instant: datetime,
	provider: ProviderProfile,
	existing_appointments: Iterable[Appointment],
	max_suggestions: int = 5,
	step_minutes: int = 15,
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[datetime]:
	"""
	Propone los slots del mismo día más cercanos a requested_instant.

	Ordena por distancia absoluta; empates en orden cronológico.
	Retorna [] si ese día no hay slots (el caller decide si buscar otro día).
	ignore_statuses se aplica igual que en el chequeo de conflictos.
	"""
	if max_suggestions <= 0:
		raise InvalidSchedulingInput(f"max_suggestions must be positive, got {max_suggestions}")

	available = find_available_slots(
		requested_instant.date(),
		provider,
		existing_appointments,
		slot_duration_minutes=appointment.duration_minutes,
		step_minutes=step_minutes,
		exclude_appointment_id=appointment.id,
		ignore_statuses=ignore_statuses
	)

	ranked = sorted(
		available,
		key=lambda slot: (abs((slot - requested_instant).total_seconds()), slot)
	)
	return ranked[:max_suggestions]


def get_free_intervals(
	target_date: Union[date, datetime],
	provider: ProviderProfile,
	existing_appointments: Iterable[Appointment],
	ignore_statuses: Optional[Iterable[AppointmentStatus]] = None
) -> List[Dict[str, datetime]]:
	"""
	Ventanas libres del día: intervalos trabajables menos citas del profesional.

	Returns:
		list[dict]: [{"start": datetime, "end": datetime}, ...] ordenados
	"""
	target_date = _as_date(target_date)
	daily = get_daily_availability(provider, target_date)
	if daily is None:
		return []

	intervals = get_working_intervals(daily, target_date)
	day_start, day_end = day_window(daily, target_date)

	bookings = find_overlapping_appointments(
		provider.id,
		TimeSpan(start=day_start, end=day_end),
		existing_appointments,
		ignore_statuses=ignore_statuses
	)

	for appt in bookings:
		intervals = subtract_block(intervals, {"start": appt.start, "end": appt.end})

	return intervals
