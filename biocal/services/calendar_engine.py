"""Calendar generation engine: orchestrates the per-day pipeline over a date range."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from biocal.models.enums import BiodynamicDayType, EvidenceLevel, MoonPhase
from biocal.schemas.calendar import (
	CalendarDay,
	EducationalContent,
	PhilosophySection,
	ScienceSection,
)
from biocal.schemas.profile import UserProfile
from biocal.services.biodynamic import calculate_day_type
from biocal.services.moon_phase import calculate_moon_phase
from biocal.services.permaculture import select_permaculture_tip
from biocal.services.season_inference import infer_seasonal_mode
from biocal.services.task_recommender import generate_task_recommendations

DEFAULT_DAYS = 30
WEEK_DAYS = 7
NEXT_DAY_TYPE_SEARCH_DAYS = 30

_PHILOSOPHY: dict[BiodynamicDayType, str] = {
	BiodynamicDayType.root: (
		"Biodynamic agriculture views root days as times when Earth forces are strongest, "
		"making it ideal for working with root vegetables that store energy below ground."
	),
	BiodynamicDayType.leaf: (
		"Leaf days align with Water element, supporting lush vegetative growth. Traditional "
		"farmers have long observed better leafy crop establishment during these periods."
	),
	BiodynamicDayType.flower: (
		"Flower days correspond to Air element, thought to enhance aromatic and essential oil "
		"content in flowering plants and herbs."
	),
	BiodynamicDayType.fruit: (
		"Fruit days align with Fire element, traditionally seen as favorable for fruiting crops "
		"and seed-saving activities."
	),
}

_SCIENCE: dict[BiodynamicDayType, str] = {
	BiodynamicDayType.root: (
		"While controlled studies on biodynamic planting are limited, some research suggests moon "
		"phases may influence soil moisture availability and germination rates."
	),
	BiodynamicDayType.leaf: (
		"Plant physiology research shows that water uptake varies with environmental factors. Some "
		"farmers report anecdotal success timing leaf crop planting with moon phases."
	),
	BiodynamicDayType.flower: (
		"Essential oil content in herbs can vary based on harvest timing. Traditional timing methods "
		"complement modern understanding of volatile compound production."
	),
	BiodynamicDayType.fruit: (
		"Fruit ripening is influenced by multiple factors including temperature, light, and plant "
		"hormones. Moon phase timing is one traditional consideration among many."
	),
}


@dataclass(frozen=True, slots=True)
class CalendarConfig:
	days_to_generate: int = DEFAULT_DAYS
	include_educational_content: bool = False

	def __post_init__(self) -> None:
		if self.days_to_generate < 1:
			raise ValueError("days_to_generate must be at least 1")


def educational_content(day_type: BiodynamicDayType, moon_phase: MoonPhase) -> EducationalContent:
	"""Philosophy and science notes for a day; currently keyed on day type only."""
	return EducationalContent(
		philosophy_section=PhilosophySection(
			title="Traditional Wisdom",
			content=_PHILOSOPHY[day_type],
		),
		science_section=ScienceSection(
			title="Modern Understanding",
			content=_SCIENCE[day_type],
			evidence_level=EvidenceLevel.traditional,
		),
	)


def generate_day(
	profile: UserProfile,
	day: date,
	include_educational_content: bool = False,
) -> CalendarDay:
	moon_phase = calculate_moon_phase(day)
	day_type = calculate_day_type(day)
	seasonal_mode = infer_seasonal_mode(profile, day)
	recommendation = generate_task_recommendations(profile, day_type, moon_phase, seasonal_mode, day)

	return CalendarDay(
		date=day,
		moon_phase=moon_phase,
		day_type=day_type,
		seasonal_mode=seasonal_mode,
		best_actions=recommendation.best_actions,
		avoid_actions=recommendation.avoid_actions,
		best_crops=recommendation.best_crops,
		micro_task=recommendation.micro_task,
		permaculture_tip=select_permaculture_tip(day),
		educational_content=(
			educational_content(day_type, moon_phase) if include_educational_content else None
		),
	)


def generate_calendar(
	profile: UserProfile,
	start: date,
	config: CalendarConfig | None = None,
) -> list[CalendarDay]:
	"""Consecutive day records; index ``i`` is ``start + i`` days."""
	config = config or CalendarConfig()
	return [
		generate_day(profile, start + timedelta(days=offset), config.include_educational_content)
		for offset in range(config.days_to_generate)
	]


def get_today(profile: UserProfile, today: date) -> CalendarDay:
	return generate_day(profile, today)


def get_week(profile: UserProfile, today: date) -> list[CalendarDay]:
	return generate_calendar(profile, today, CalendarConfig(days_to_generate=WEEK_DAYS))


def filter_by_day_type(days: Iterable[CalendarDay], day_type: BiodynamicDayType) -> list[CalendarDay]:
	return [day for day in days if day.day_type == day_type]


def find_next_day_type(
	profile: UserProfile,
	day_type: BiodynamicDayType,
	start: date,
) -> CalendarDay | None:
	"""First day on or after ``start`` with ``day_type``, searching a bounded window."""
	for offset in range(NEXT_DAY_TYPE_SEARCH_DAYS):
		candidate = generate_day(profile, start + timedelta(days=offset))
		if candidate.day_type == day_type:
			return candidate
	return None
