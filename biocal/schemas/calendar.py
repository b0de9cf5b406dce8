"""Pydantic schemas for computed calendar days."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from biocal.models.enums import (
	BiodynamicDayType,
	EvidenceLevel,
	MoonPhase,
	PermacultureCategory,
	SeasonalMode,
)
from biocal.schemas.profile import UserProfile


class PermacultureTip(BaseModel):
	model_config = ConfigDict(frozen=True)

	category: PermacultureCategory
	title: str
	description: str


class PhilosophySection(BaseModel):
	model_config = ConfigDict(frozen=True)

	title: str
	content: str


class ScienceSection(BaseModel):
	model_config = ConfigDict(frozen=True)

	title: str
	content: str
	evidence_level: EvidenceLevel


class EducationalContent(BaseModel):
	model_config = ConfigDict(frozen=True)

	philosophy_section: PhilosophySection
	science_section: ScienceSection


class TaskRecommendation(BaseModel):
	model_config = ConfigDict(frozen=True)

	best_actions: list[str] = Field(max_length=5)
	avoid_actions: list[str] = Field(max_length=2)
	best_crops: list[str] = Field(max_length=4)
	micro_task: str


class CalendarDay(BaseModel):
	"""One computed day; identity is its ``date`` and it is never mutated."""

	model_config = ConfigDict(frozen=True)

	date: dt.date
	moon_phase: MoonPhase
	day_type: BiodynamicDayType
	seasonal_mode: SeasonalMode
	best_actions: list[str]
	avoid_actions: list[str]
	best_crops: list[str]
	micro_task: str
	permaculture_tip: PermacultureTip
	educational_content: EducationalContent | None = None


class CalendarRead(BaseModel):
	start: dt.date
	days: list[CalendarDay]


class CalendarPreviewRequest(BaseModel):
	profile: UserProfile
	start: dt.date | None = None
	days: int | None = Field(default=None, ge=1)
	include_educational_content: bool = False


class DayTypeGuide(BaseModel):
	day_type: BiodynamicDayType
	element: str
	description: str
	recommended_crops: list[str]
	best_activities: list[str]
	avoid_activities: list[str]


class MoonPhaseGuide(BaseModel):
	phase: MoonPhase
	emoji: str
	advice: str
	waxing: bool
	waning: bool


class SeasonalModeGuide(BaseModel):
	mode: SeasonalMode
	description: str
	priorities: list[str]
	good_for: list[str]


class CalendarGuideRead(BaseModel):
	day_types: list[DayTypeGuide]
	moon_phases: list[MoonPhaseGuide]
	seasonal_modes: list[SeasonalModeGuide]
