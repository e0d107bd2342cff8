"""
Availability Service

Pure predicates over a provider's weekly working-hours template:
- Working-hours inclusion (inclusive boundaries)
- Break overlap (half-open semantics)
- Working minutes per day
- Working intervals (open window minus breaks)
"""

from datetime import date, datetime, time
from typing import Dict, List, Optional, Tuple, Union

from .models import BreakInterval, DailyAvailability, ProviderProfile, TimeSpan


def _minutes_of_day(value: Union[time, datetime]) -> int:
	return value.hour * 60 + value.minute


def intervals_overlap(
	start_a: datetime,
	end_a: datetime,
	start_b: datetime,
	end_b: datetime
) -> bool:
	"""
	Predicado de solapamiento semiabierto: [a0, a1) y [b0, b1) se solapan
	sii a0 < b1 AND b0 < a1.

	Compartido por el chequeo de pausas y el de citas existentes.
	"""
	return start_a < end_b and start_b < end_a


def is_within_working_hours(instant: datetime, daily: DailyAvailability) -> bool:
	"""
	Verifica que la hora del día de instant esté dentro del horario.

	Ambos extremos son inclusivos: una cita que termina exactamente al
	cierre es válida.

	Args:
		instant: datetime local naive
		daily: horario del día

	Returns:
		bool
	"""
	minutes = _minutes_of_day(instant)
	return _minutes_of_day(daily.start) <= minutes <= _minutes_of_day(daily.end)


def overlaps_break(span: TimeSpan, daily: DailyAvailability) -> Optional[BreakInterval]:
	"""
	Retorna la primera pausa (en el orden listado) que se solapa con span.

	Las pausas se anclan a la fecha de span.start.

	Args:
		span: intervalo candidato
		daily: horario del día con sus pausas

	Returns:
		BreakInterval o None si ninguna pausa se solapa
	"""
	day = span.start.date()

	for break_period in daily.breaks:
		break_start = datetime.combine(day, break_period.start)
		break_end = datetime.combine(day, break_period.end)

		if intervals_overlap(span.start, span.end, break_start, break_end):
			return break_period

	return None


def total_working_minutes(daily: DailyAvailability) -> int:
	"""Minutos del día menos la suma de pausas, nunca negativo."""
	total = _minutes_of_day(daily.end) - _minutes_of_day(daily.start)

	for break_period in daily.breaks:
		total -= _minutes_of_day(break_period.end) - _minutes_of_day(break_period.start)

	return max(0, total)


def get_break_periods(daily: DailyAvailability) -> List[BreakInterval]:
	return list(daily.breaks)


def get_daily_availability(
	provider: ProviderProfile,
	target_date: Union[date, datetime]
) -> Optional[DailyAvailability]:
	"""Horario del profesional para el día de la semana de target_date."""
	if isinstance(target_date, datetime):
		target_date = target_date.date()
	return provider.availability_for(target_date)


def day_window(daily: DailyAvailability, target_date: date) -> Tuple[datetime, datetime]:
	"""Apertura y cierre del día como datetimes."""
	return (
		datetime.combine(target_date, daily.start),
		datetime.combine(target_date, daily.end)
	)


def get_working_intervals(
	daily: DailyAvailability,
	target_date: Union[date, datetime]
) -> List[Dict[str, datetime]]:
	"""
	Obtiene los intervalos trabajables de un día.

	Args:
		daily: horario del día
		target_date: fecha concreta

	Returns:
		list[dict]: [
			{"start": datetime, "end": datetime},
			...
		]

	Algoritmo:
		1. Construir el intervalo de apertura a cierre
		2. Restar cada pausa
		3. Merge intervalos adyacentes/overlapping
		4. Retornar lista ordenada
	"""
	if isinstance(target_date, datetime):
		target_date = target_date.date()

	day_start, day_end = day_window(daily, target_date)
	intervals = [{"start": day_start, "end": day_end}]

	for break_period in daily.breaks:
		block = {
			"start": datetime.combine(target_date, break_period.start),
			"end": datetime.combine(target_date, break_period.end)
		}
		intervals = subtract_block(intervals, block)

	return _merge_intervals(intervals)


def subtract_block(
	intervals: List[Dict[str, datetime]],
	block: Dict[str, datetime]
) -> List[Dict[str, datetime]]:
	"""Resta un bloqueo de todos los intervalos."""
	result = []
	for interval in intervals:
		result.extend(_interval_subtract(interval, block))
	return result


def _merge_intervals(intervals: List[Dict[str, datetime]]) -> List[Dict[str, datetime]]:
	"""
	Une intervalos adyacentes o overlapping.

	Args:
		intervals: lista de intervalos {"start": datetime, "end": datetime}

	Returns:
		list: intervalos merged, ordenados por start
	"""
	if not intervals:
		return []

	ordered = sorted(intervals, key=lambda x: x["start"])
	merged = [dict(ordered[0])]

	for current in ordered[1:]:
		last_merged = merged[-1]

		if current["start"] <= last_merged["end"]:
			if current["end"] > last_merged["end"]:
				last_merged["end"] = current["end"]
		else:
			merged.append(dict(current))

	return merged


def _interval_subtract(
	interval: Dict[str, datetime],
	block: Dict[str, datetime]
) -> List[Dict[str, datetime]]:
	"""
	Resta un bloqueo de un intervalo.

	Args:
		interval: {"start": datetime, "end": datetime} - intervalo original
		block: {"start": datetime, "end": datetime} - bloqueo a restar

	Returns:
		list: 0, 1 o 2 intervalos resultantes
	"""
	# Sin solapamiento
	if not intervals_overlap(interval["start"], interval["end"], block["start"], block["end"]):
		return [interval]

	pieces = []

	# Parte inicial antes del bloqueo
	if block["start"] > interval["start"]:
		pieces.append({"start": interval["start"], "end": block["start"]})

	# Parte final después del bloqueo
	if block["end"] < interval["end"]:
		pieces.append({"start": block["end"], "end": interval["end"]})

	return pieces
