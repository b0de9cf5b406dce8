"""Pydantic schema for the gardener profile that drives calendar generation."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from biocal.models.enums import (
	ClimateType,
	ExperienceLevel,
	Goal,
	GrowingSpace,
	RainPattern,
	SoilType,
	SummerType,
	SunExposure,
	TimeAvailable,
	WaterAccess,
	WinterType,
)


class UserProfile(BaseModel):
	"""Snapshot of location, climate, garden setup and preferences.

	Only ``country`` is required; every calculation falls back to a default
	when an optional field is missing.
	"""

	model_config = ConfigDict(frozen=True)

	# ── Location ────────────────────────────────────────────────────────────
	country: str = Field(min_length=1, max_length=100)
	state: str | None = Field(default=None, max_length=100)
	city: str | None = Field(default=None, max_length=100)
	latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
	longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

	# ── Climate ─────────────────────────────────────────────────────────────
	hardiness_zone: str | None = Field(default=None, max_length=10)
	climate_type: ClimateType | None = None
	summer_type: SummerType | None = None
	winter_type: WinterType | None = None
	rain_pattern: RainPattern | None = None
	avg_summer_high: float | None = None
	last_spring_frost: date | None = None
	first_fall_frost: date | None = None

	# ── Garden setup ────────────────────────────────────────────────────────
	growing_space: list[GrowingSpace] = Field(default_factory=list)
	sun_exposure: SunExposure | None = None
	soil_type: SoilType | None = None
	water_access: list[WaterAccess] = Field(default_factory=list)

	# ── Time & goals ────────────────────────────────────────────────────────
	time_available: TimeAvailable | None = None
	goals: list[Goal] = Field(default_factory=list)
	experience_level: ExperienceLevel | None = None

	# ── Preferences ─────────────────────────────────────────────────────────
	top_crops: list[str] = Field(default_factory=list)
	constraints: list[str] = Field(default_factory=list, max_length=5)

	# ── Settings ────────────────────────────────────────────────────────────
	advanced_mode: bool = False
	created_at: datetime | None = None
	updated_at: datetime | None = None
