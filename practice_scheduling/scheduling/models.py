"""
Scheduling Value Objects

Immutable pydantic models passed into the engine by the caller:
- TimeSpan / Appointment (candidate and existing bookings)
- BreakInterval / DailyAvailability / ProviderProfile (working hours)
- RecurrencePattern (always terminated, by date or by count)
- ConflictReport / RecurringConflictReport (verdicts returned by the engine)

All instants are naive local wall-clock datetimes with minute precision.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum, IntEnum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Weekday(IntEnum):
	"""Día de la semana, numerado como date.weekday() (Monday=0)."""
	MONDAY = 0
	TUESDAY = 1
	WEDNESDAY = 2
	THURSDAY = 3
	FRIDAY = 4
	SATURDAY = 5
	SUNDAY = 6

	@property
	def label(self) -> str:
		return self.name.capitalize()

	@classmethod
	def of(cls, value: date) -> "Weekday":
		return cls(value.weekday())

	@classmethod
	def parse(cls, value: Any) -> "Weekday":
		"""Acepta Weekday, int (0-6) o nombre ("monday", "Mon")."""
		if isinstance(value, cls):
			return value
		if isinstance(value, str) and not value.strip().isdigit():
			key = value.strip().upper()
			for day in cls:
				if day.name == key or day.name[:3] == key:
					return day
			raise ValueError(f"Unknown weekday: {value!r}")
		return cls(int(value))


class AppointmentKind(str, Enum):
	ORDINARY = "ordinary"
	BREAK = "break"
	TENTATIVE = "tentative"


class AppointmentStatus(str, Enum):
	SCHEDULED = "scheduled"
	CHECKED_IN = "checked_in"
	COMPLETED = "completed"
	CANCELLED = "cancelled"
	NO_SHOW = "no_show"


class RecurrenceFrequency(str, Enum):
	DAILY = "daily"
	WEEKLY = "weekly"
	MONTHLY = "monthly"


def _naive_minute(value: datetime) -> datetime:
	if value.tzinfo is not None:
		raise ValueError("instants must be naive local datetimes (no timezone)")
	return value.replace(second=0, microsecond=0)


def format_hhmm(value: time) -> str:
	return value.strftime("%H:%M")


class TimeSpan(BaseModel):
	"""Intervalo semiabierto [start, end)."""

	model_config = ConfigDict(frozen=True)

	start: datetime
	end: datetime

	@field_validator("start", "end")
	@classmethod
	def _truncate_to_minute(cls, value: datetime) -> datetime:
		return _naive_minute(value)

	@model_validator(mode="after")
	def _check_order(self) -> "TimeSpan":
		if self.start >= self.end:
			raise ValueError(f"span start ({self.start}) must be before end ({self.end})")
		return self

	@classmethod
	def starting_at(cls, start: datetime, minutes: int) -> "TimeSpan":
		return cls(start=start, end=start + timedelta(minutes=minutes))

	@property
	def duration_minutes(self) -> int:
		return int((self.end - self.start).total_seconds() // 60)

	def shifted(self, delta: timedelta) -> "TimeSpan":
		return TimeSpan(start=self.start + delta, end=self.end + delta)


class Appointment(BaseModel):
	"""
	Cita candidata o existente.

	id es opcional: las sondas sintéticas (búsqueda de slots) no tienen id
	y por lo tanto nunca se auto-excluyen.
	"""

	model_config = ConfigDict(frozen=True)

	id: Optional[str] = None
	provider_id: str
	span: TimeSpan
	kind: AppointmentKind = AppointmentKind.ORDINARY
	status: AppointmentStatus = AppointmentStatus.SCHEDULED
	title: Optional[str] = None
	min_duration_minutes: Optional[int] = Field(default=None, gt=0)
	max_duration_minutes: Optional[int] = Field(default=None, gt=0)
	recurrence_group_id: Optional[str] = None

	@model_validator(mode="after")
	def _check_duration_bounds(self) -> "Appointment":
		if (
			self.min_duration_minutes is not None
			and self.max_duration_minutes is not None
			and self.min_duration_minutes > self.max_duration_minutes
		):
			raise ValueError("min_duration_minutes cannot be greater than max_duration_minutes")
		return self

	@property
	def start(self) -> datetime:
		return self.span.start

	@property
	def end(self) -> datetime:
		return self.span.end

	@property
	def duration_minutes(self) -> int:
		return self.span.duration_minutes

	def with_span(self, span: TimeSpan) -> "Appointment":
		return self.model_copy(update={"span": span})


class BreakInterval(BaseModel):
	model_config = ConfigDict(frozen=True)

	start: time
	end: time
	label: str = "Break"

	@model_validator(mode="after")
	def _check_order(self) -> "BreakInterval":
		if self.start >= self.end:
			raise ValueError(f"break '{self.label}' start must be before end")
		return self

	@property
	def window(self) -> str:
		return f"{format_hhmm(self.start)} - {format_hhmm(self.end)}"


class DailyAvailability(BaseModel):
	"""Horario de un día de la semana con sus pausas (en orden)."""

	model_config = ConfigDict(frozen=True)

	start: time
	end: time
	breaks: List[BreakInterval] = Field(default_factory=list)

	@model_validator(mode="after")
	def _check_order(self) -> "DailyAvailability":
		if self.start >= self.end:
			raise ValueError("working day start must be before end")
		return self

	@property
	def window(self) -> str:
		return f"{format_hhmm(self.start)} - {format_hhmm(self.end)}"


class ProviderProfile(BaseModel):
	"""Profesional y su plantilla semanal. Un día ausente = no disponible."""

	model_config = ConfigDict(frozen=True)

	id: str
	name: Optional[str] = None
	weekly_availability: Dict[Weekday, DailyAvailability] = Field(default_factory=dict)

	@field_validator("weekly_availability", mode="before")
	@classmethod
	def _parse_weekday_keys(cls, value: Any) -> Any:
		if isinstance(value, dict):
			return {Weekday.parse(key): daily for key, daily in value.items() if daily is not None}
		return value

	@property
	def display_name(self) -> str:
		return self.name or self.id

	def availability_for(self, target_date: date) -> Optional[DailyAvailability]:
		return self.weekly_availability.get(Weekday.of(target_date))


class RecurrencePattern(BaseModel):
	"""
	Patrón de recurrencia.

	Exactamente uno de end_date / occurrence_count debe estar presente:
	no existe variante sin terminación.
	"""

	model_config = ConfigDict(frozen=True)

	frequency: RecurrenceFrequency
	interval: int = Field(default=1, gt=0)
	days_of_week: Optional[FrozenSet[Weekday]] = None
	day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
	end_date: Optional[datetime] = None
	occurrence_count: Optional[int] = Field(default=None, gt=0)

	@field_validator("days_of_week", mode="before")
	@classmethod
	def _parse_days(cls, value: Any) -> Any:
		if value is None:
			return None
		days = frozenset(Weekday.parse(day) for day in value)
		return days or None

	@field_validator("end_date", mode="before")
	@classmethod
	def _end_of_day(cls, value: Any) -> Any:
		# Una fecha sin hora incluye el día completo
		if isinstance(value, date) and not isinstance(value, datetime):
			return datetime.combine(value, time.max)
		return value

	@field_validator("end_date")
	@classmethod
	def _naive_end(cls, value: Optional[datetime]) -> Optional[datetime]:
		if value is not None and value.tzinfo is not None:
			raise ValueError("end_date must be a naive local datetime (no timezone)")
		return value

	@model_validator(mode="after")
	def _check_shape(self) -> "RecurrencePattern":
		if (self.end_date is None) == (self.occurrence_count is None):
			raise ValueError(
				"recurrence pattern must be terminated by exactly one of end_date or occurrence_count"
			)
		if self.days_of_week is not None and self.frequency != RecurrenceFrequency.WEEKLY:
			raise ValueError("days_of_week only applies to weekly recurrence")
		if self.day_of_month is not None and self.frequency != RecurrenceFrequency.MONTHLY:
			raise ValueError("day_of_month only applies to monthly recurrence")
		return self


class ConflictReport(BaseModel):
	"""
	Veredicto para una ocurrencia.

	reason es el primer motivo en orden de chequeo; reasons los contiene todos.
	conflicting_appointments siempre es el conjunto completo de solapamientos.
	"""

	model_config = ConfigDict(frozen=True)

	has_conflict: bool
	conflicting_appointments: List[Appointment] = Field(default_factory=list)
	reason: Optional[str] = None
	reasons: List[str] = Field(default_factory=list)


class OccurrenceConflict(BaseModel):
	model_config = ConfigDict(frozen=True)

	date: datetime
	conflicts: List[Appointment] = Field(default_factory=list)
	reason: Optional[str] = None


class RecurringConflictReport(BaseModel):
	model_config = ConfigDict(frozen=True)

	has_conflicts: bool
	per_occurrence: List[OccurrenceConflict] = Field(default_factory=list)
	occurrences_checked: int = 0
