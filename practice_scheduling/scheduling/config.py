"""
Scheduling Settings

Defaults for slot search and recurrence caps. Settings are plain values
built by the caller and passed down explicitly; nothing here is global.
"""

import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


ENV_PREFIX = "PRACTICE_SCHEDULING_"


class SchedulingSettings(BaseModel):
	"""Límites y valores por defecto del motor de agendamiento."""

	model_config = ConfigDict(frozen=True)

	default_slot_duration_minutes: int = Field(default=30, gt=0, description="Slot length used when none is given")
	default_step_minutes: int = Field(default=15, gt=0, description="Granularity of slot search")
	max_suggestions: int = Field(default=5, gt=0, description="Alternatives returned for a single appointment")
	max_recurring_suggestions: int = Field(default=3, gt=0, description="Alternative series start dates returned")
	recurring_search_horizon_days: int = Field(
		default=90,
		gt=0,
		description="How many days after the original start are probed for recurring alternatives"
	)
	max_recurring_occurrences: int = Field(
		default=520,
		gt=0,
		description="Hard cap on occurrences expanded from a single pattern"
	)

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SchedulingSettings":
		"""
		Construye settings leyendo overrides PRACTICE_SCHEDULING_<CAMPO>.

		Args:
			environ: mapping de variables (por defecto os.environ)

		Returns:
			SchedulingSettings validado

		Example:
			PRACTICE_SCHEDULING_MAX_SUGGESTIONS=8 -> max_suggestions=8
		"""
		environ = os.environ if environ is None else environ
		overrides: Dict[str, Any] = {}

		for field_name in cls.model_fields:
			value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
			if value is not None and value.strip():
				overrides[field_name] = value.strip()

		return cls(**overrides)
