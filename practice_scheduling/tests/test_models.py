"""
Tests for scheduling/models.py

Tests input validation of the value objects.
"""

import unittest
from datetime import datetime, time, timezone

from pydantic import ValidationError

from practice_scheduling.scheduling.models import (
	Appointment,
	BreakInterval,
	DailyAvailability,
	TimeSpan,
	Weekday
)

from .factories import at


class TestModels(unittest.TestCase):
	"""Tests for value object validation."""

	def test_span_requires_start_before_end(self):
		"""Test start >= end is rejected."""
		with self.assertRaises(ValidationError):
			TimeSpan(start=at(10, 0), end=at(10, 0))
		with self.assertRaises(ValidationError):
			TimeSpan(start=at(11, 0), end=at(10, 0))

	def test_span_truncates_to_minute(self):
		"""Test minute precision."""
		result = TimeSpan(start=at(10, 0).replace(second=42), end=at(10, 30).replace(microsecond=5))

		self.assertEqual(result.start, at(10, 0))
		self.assertEqual(result.end, at(10, 30))
		self.assertEqual(result.duration_minutes, 30)

	def test_span_rejects_timezone_aware(self):
		"""Test that aware datetimes are refused."""
		with self.assertRaises(ValidationError):
			TimeSpan(start=datetime(2026, 1, 19, 9, tzinfo=timezone.utc), end=datetime(2026, 1, 19, 10, tzinfo=timezone.utc))

	def test_appointment_duration_bounds(self):
		"""Test min greater than max is rejected."""
		with self.assertRaises(ValidationError):
			Appointment(
				provider_id="p",
				span=TimeSpan(start=at(9), end=at(10)),
				min_duration_minutes=60,
				max_duration_minutes=30
			)

	def test_appointment_is_immutable(self):
		"""Test frozen value objects."""
		appt = Appointment(id="a", provider_id="p", span=TimeSpan(start=at(9), end=at(10)))
		with self.assertRaises(ValidationError):
			appt.provider_id = "q"

	def test_break_and_day_order(self):
		"""Test start < end for breaks and working days."""
		with self.assertRaises(ValidationError):
			BreakInterval(start=time(13, 0), end=time(12, 0), label="Lunch")
		with self.assertRaises(ValidationError):
			DailyAvailability(start=time(17, 0), end=time(9, 0))

	def test_weekday_parse(self):
		"""Test weekday parsing from names and numbers."""
		self.assertEqual(Weekday.parse("Wednesday"), Weekday.WEDNESDAY)
		self.assertEqual(Weekday.parse("sun"), Weekday.SUNDAY)
		self.assertEqual(Weekday.parse(4), Weekday.FRIDAY)
		self.assertEqual(Weekday.of(at(9).date()), Weekday.MONDAY)
		with self.assertRaises(ValueError):
			Weekday.parse("someday")


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
