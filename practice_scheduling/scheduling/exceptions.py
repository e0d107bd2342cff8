"""
Scheduling Exceptions

Only programmer/input errors are raised. Business-rule violations
(outside working hours, overlapping bookings, duration out of bounds)
are returned inside ConflictReport / RecurringConflictReport instead.
"""


class SchedulingError(Exception):
	"""Excepción base del motor de agendamiento."""
	pass


class InvalidSchedulingInput(SchedulingError, ValueError):
	"""Argumentos inválidos (duraciones no positivas, patrón ausente, etc.)."""
	pass


class RecurrenceLimitExceeded(InvalidSchedulingInput):
	"""La expansión de una recurrencia supera el tope configurado."""

	def __init__(self, limit: int):
		self.limit = limit
		super().__init__(
			f"Recurrence expansion exceeds the configured cap of {limit} occurrences; "
			f"use an earlier end_date or a smaller occurrence_count"
		)
