"""
Tests for scheduling/resolver.py

Tests recurring conflict reports, alternative series start dates,
and the per-day booking map.
"""

import unittest
from datetime import date, datetime

from practice_scheduling.scheduling.config import SchedulingSettings
from practice_scheduling.scheduling.exceptions import InvalidSchedulingInput, RecurrenceLimitExceeded
from practice_scheduling.scheduling.models import AppointmentStatus, RecurrenceFrequency, RecurrencePattern, Weekday
from practice_scheduling.scheduling.recurrence import generate_recurring_appointments
from practice_scheduling.scheduling.resolver import (
	check_date_range_conflicts,
	check_recurring_conflicts,
	suggest_alternative_recurring_slots
)

from .factories import MONDAY, at, make_appointment, make_daily, make_provider


class TestResolver(unittest.TestCase):
	"""Tests for recurring conflict resolution."""

	def setUp(self):
		"""Set up test data before each test."""
		self.provider = make_provider(make_daily("09:00", "17:00", breaks=[("12:00", "13:00", "Lunch")]))
		self.base = make_appointment("series-1", at(10, 0), at(11, 0))
		self.weekly_four = RecurrencePattern(frequency=RecurrenceFrequency.WEEKLY, occurrence_count=4)
		# Choca con la tercera ocurrencia (lunes 2026-02-02)
		self.blocker = make_appointment("blocker", datetime(2026, 2, 2, 10, 30), datetime(2026, 2, 2, 11, 30))

	def test_no_conflicts(self):
		"""Test a clean weekly series."""
		result = check_recurring_conflicts(self.base, self.weekly_four, [], self.provider)

		self.assertFalse(result.has_conflicts)
		self.assertEqual(result.per_occurrence, [])
		self.assertEqual(result.occurrences_checked, 4)

	def test_collects_only_conflicting_occurrences(self):
		"""Test that only the conflicting occurrence is reported."""
		result = check_recurring_conflicts(self.base, self.weekly_four, [self.blocker], self.provider)

		self.assertTrue(result.has_conflicts)
		self.assertEqual(len(result.per_occurrence), 1)
		self.assertEqual(result.per_occurrence[0].date, datetime(2026, 2, 2, 10, 0))
		self.assertEqual(result.per_occurrence[0].conflicts, [self.blocker])

	def test_working_hours_conflict_in_series(self):
		"""Test daily series that lands on the weekend."""
		pattern = RecurrencePattern(frequency=RecurrenceFrequency.DAILY, occurrence_count=7)

		result = check_recurring_conflicts(self.base, pattern, [], self.provider)

		self.assertEqual(
			[c.date.date() for c in result.per_occurrence],
			[date(2026, 1, 24), date(2026, 1, 25)]
		)
		self.assertIn("unavailable on Saturday", result.per_occurrence[0].reason)
		self.assertEqual(result.per_occurrence[0].conflicts, [])

	def test_series_members_do_not_conflict_with_series(self):
		"""Test rechecking a series against its own generated occurrences."""
		series = generate_recurring_appointments(self.base, self.weekly_four)

		result = check_recurring_conflicts(self.base, self.weekly_four, series, self.provider)

		self.assertFalse(result.has_conflicts)

	def test_without_provider(self):
		"""Test degraded mode: only overlaps are considered."""
		pattern = RecurrencePattern(frequency=RecurrenceFrequency.DAILY, occurrence_count=7)

		result = check_recurring_conflicts(self.base, pattern, [])

		self.assertFalse(result.has_conflicts)

	def test_occurrence_cap(self):
		"""Test that the configured cap fails fast."""
		pattern = RecurrencePattern(frequency=RecurrenceFrequency.DAILY, occurrence_count=50)
		settings = SchedulingSettings(max_recurring_occurrences=10)

		with self.assertRaises(RecurrenceLimitExceeded):
			check_recurring_conflicts(self.base, pattern, [], self.provider, settings=settings)

	def test_missing_pattern(self):
		"""Test that a missing pattern raises."""
		with self.assertRaises(InvalidSchedulingInput):
			check_recurring_conflicts(self.base, None, [], self.provider)

	def test_suggest_alternative_recurring_slots(self):
		"""Test shifted start dates that avoid the blocker."""
		result = suggest_alternative_recurring_slots(
			self.base, self.weekly_four, [self.blocker], self.provider, max_suggestions=3
		)

		# Martes, miércoles y jueves siguientes a la misma hora
		self.assertEqual(result, [
			datetime(2026, 1, 20, 10, 0),
			datetime(2026, 1, 21, 10, 0),
			datetime(2026, 1, 22, 10, 0)
		])

	def test_suggest_alternative_recurring_slots_skips_conflicting_days(self):
		"""Test that a day whose series hits the blocker is skipped."""
		blocker = make_appointment("tue-blocker", datetime(2026, 1, 27, 10, 0), datetime(2026, 1, 27, 10, 30))

		result = suggest_alternative_recurring_slots(
			self.base, self.weekly_four, [blocker], self.provider, max_suggestions=2
		)

		self.assertEqual(result, [datetime(2026, 1, 21, 10, 0), datetime(2026, 1, 22, 10, 0)])

	def test_suggest_alternative_recurring_slots_respects_horizon(self):
		"""Test that the day search stops at the horizon."""
		pattern = RecurrencePattern(
			frequency=RecurrenceFrequency.WEEKLY,
			days_of_week=[Weekday.MONDAY],
			occurrence_count=2
		)

		result = suggest_alternative_recurring_slots(
			self.base, pattern, [], self.provider, max_suggestions=5, horizon_days=3
		)

		# Los inicios desplazados (mar, mié, jue) saltan al lunes siguiente
		self.assertEqual(len(result), 3)
		self.assertEqual(result[0], datetime(2026, 1, 20, 10, 0))

	def test_suggest_alternative_recurring_slots_skips_empty_series(self):
		"""Test that a start after end_date is never suggested."""
		pattern = RecurrencePattern(frequency=RecurrenceFrequency.DAILY, end_date=datetime(2026, 1, 20, 23, 0))

		result = suggest_alternative_recurring_slots(
			self.base, pattern, [], self.provider, max_suggestions=3, horizon_days=5
		)

		self.assertEqual(result, [datetime(2026, 1, 20, 10, 0)])

	def test_ignore_statuses(self):
		"""Test that ignored statuses reach both the check and the alternative search."""
		cancelled = self.blocker.model_copy(update={"status": AppointmentStatus.CANCELLED})
		ignored = [AppointmentStatus.CANCELLED]

		report = check_recurring_conflicts(
			self.base, self.weekly_four, [cancelled], self.provider, ignore_statuses=ignored
		)
		# Bloquea el martes 27, segunda ocurrencia de la serie desplazada un día
		cancelled_tuesday = make_appointment(
			"tue-cancelled", datetime(2026, 1, 27, 10, 0), datetime(2026, 1, 27, 11, 0),
			status=AppointmentStatus.CANCELLED
		)
		suggestions = suggest_alternative_recurring_slots(
			self.base, self.weekly_four, [cancelled_tuesday], self.provider,
			max_suggestions=1, ignore_statuses=ignored
		)

		self.assertFalse(report.has_conflicts)
		self.assertEqual(suggestions, [datetime(2026, 1, 20, 10, 0)])

	def test_check_date_range_conflicts(self):
		"""Test bookings grouped by day for one provider."""
		bookings = [
			make_appointment("a", at(10, 0), at(11, 0)),
			make_appointment("b", at(14, 0), at(15, 0)),
			make_appointment("c", datetime(2026, 1, 21, 9, 0), datetime(2026, 1, 21, 10, 0)),
			make_appointment("d", datetime(2026, 1, 30, 9, 0), datetime(2026, 1, 30, 10, 0)),
			make_appointment("e", at(10, 0), at(11, 0), provider_id="provider-2")
		]

		result = check_date_range_conflicts(MONDAY, date(2026, 1, 25), "provider-1", bookings)

		self.assertEqual(list(result), ["2026-01-19", "2026-01-21"])
		self.assertEqual([a.id for a in result["2026-01-19"]], ["a", "b"])

	def test_check_date_range_conflicts_invalid_range(self):
		"""Test an inverted range."""
		with self.assertRaises(InvalidSchedulingInput):
			check_date_range_conflicts(date(2026, 2, 1), date(2026, 1, 1), "provider-1", [])


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
