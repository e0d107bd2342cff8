"""
Tests for scheduling/config.py and api/shared/validators.py

Tests settings defaults, environment overrides, and argument validators.
"""

import unittest

from pydantic import ValidationError

from practice_scheduling.api.shared import (
	validate_max_suggestions,
	validate_pattern_present,
	validate_positive_minutes
)
from practice_scheduling.scheduling.config import SchedulingSettings
from practice_scheduling.scheduling.exceptions import InvalidSchedulingInput
from practice_scheduling.scheduling.models import RecurrenceFrequency, RecurrencePattern


class TestConfig(unittest.TestCase):
	"""Tests for settings and validators."""

	def test_defaults(self):
		"""Test default settings values."""
		settings = SchedulingSettings()

		self.assertEqual(settings.default_slot_duration_minutes, 30)
		self.assertEqual(settings.default_step_minutes, 15)
		self.assertEqual(settings.max_suggestions, 5)
		self.assertEqual(settings.max_recurring_suggestions, 3)

	def test_from_env_overrides(self):
		"""Test PRACTICE_SCHEDULING_* overrides."""
		settings = SchedulingSettings.from_env({
			"PRACTICE_SCHEDULING_MAX_SUGGESTIONS": "8",
			"PRACTICE_SCHEDULING_RECURRING_SEARCH_HORIZON_DAYS": " 30 ",
			"PRACTICE_SCHEDULING_DEFAULT_STEP_MINUTES": "",
			"UNRELATED": "1"
		})

		self.assertEqual(settings.max_suggestions, 8)
		self.assertEqual(settings.recurring_search_horizon_days, 30)
		self.assertEqual(settings.default_step_minutes, 15)

	def test_from_env_rejects_invalid(self):
		"""Test that invalid overrides fail validation."""
		with self.assertRaises(ValidationError):
			SchedulingSettings.from_env({"PRACTICE_SCHEDULING_MAX_SUGGESTIONS": "0"})

	def test_validate_positive_minutes(self):
		"""Test minutes validation."""
		self.assertEqual(validate_positive_minutes(30), 30)
		for bad in (None, 0, -5, 1.5, True, "30"):
			with self.assertRaises(InvalidSchedulingInput):
				validate_positive_minutes(bad)

	def test_validate_max_suggestions(self):
		"""Test suggestion count validation."""
		self.assertEqual(validate_max_suggestions(3), 3)
		with self.assertRaises(InvalidSchedulingInput):
			validate_max_suggestions(0)

	def test_validate_pattern_present(self):
		"""Test pattern presence validation."""
		pattern = RecurrencePattern(frequency=RecurrenceFrequency.DAILY, occurrence_count=2)
		self.assertIs(validate_pattern_present(pattern), pattern)
		with self.assertRaises(InvalidSchedulingInput):
			validate_pattern_present(None)
		with self.assertRaises(InvalidSchedulingInput):
			validate_pattern_present({"frequency": "daily"})


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
