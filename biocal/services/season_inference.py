"""Seasonal mode inference from profile climate data and calendar month."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import NamedTuple

from biocal.models.enums import SeasonalMode
from biocal.schemas.profile import UserProfile

HEAT_THRESHOLD = 85.0
COLD_ZONE_MAX = 6
WARM_ZONE_MIN = 9

_ZONE_PREFIX = re.compile(r"^\s*([+-]?\d+)")

_WINTER_MONTHS = frozenset({11, 0, 1})
_SPRING_MONTHS = frozenset({2, 3})
_LATE_SPRING_MONTHS = frozenset({4, 5})
_SUMMER_MONTHS = frozenset({6, 7})
_FALL_MONTHS = frozenset({8, 9})

_DESCRIPTIONS: dict[SeasonalMode, str] = {
	SeasonalMode.seed_starting: "Start seeds indoors for transplanting after last frost.",
	SeasonalMode.transplanting: "Move seedlings outdoors and direct sow warm-season crops.",
	SeasonalMode.succession_planting: "Keep beds productive by sowing quick crops as others finish.",
	SeasonalMode.heat_management: "Protect plants from heat stress, provide shade, and ensure adequate water.",
	SeasonalMode.harvest: "Harvest mature crops, preserve food, and save seeds.",
	SeasonalMode.cover_cropping: "Plant cover crops to protect and enrich soil over winter.",
	SeasonalMode.dormancy: "Light maintenance, mulching, and planning the next season.",
}

_PRIORITIES: dict[SeasonalMode, list[str]] = {
	SeasonalMode.seed_starting: [
		"Start seeds indoors",
		"Harden off seedlings",
		"Prepare transplant beds",
		"Monitor frost dates",
	],
	SeasonalMode.transplanting: [
		"Transplant hardened seedlings",
		"Direct sow warm crops",
		"Mulch beds",
		"Install supports",
	],
	SeasonalMode.succession_planting: [
		"Sow quick crops every 2 weeks",
		"Water consistently",
		"Weed regularly",
		"Side-dress with compost",
	],
	SeasonalMode.heat_management: [
		"Provide afternoon shade",
		"Deep water less frequently",
		"Apply mulch heavily",
		"Harvest early morning",
	],
	SeasonalMode.harvest: [
		"Harvest at peak ripeness",
		"Preserve and store",
		"Save seeds",
		"Remove spent plants",
	],
	SeasonalMode.cover_cropping: [
		"Sow winter cover crops",
		"Mulch perennial beds",
		"Protect tender plants",
		"Build soil structure",
	],
	SeasonalMode.dormancy: [
		"Mulch heavily",
		"Protect from freeze",
		"Prune dormant trees",
		"Plan next season",
	],
}

_GOOD_TIMES: dict[str, frozenset[SeasonalMode]] = {
	"planting": frozenset({SeasonalMode.seed_starting, SeasonalMode.transplanting, SeasonalMode.succession_planting}),
	"harvesting": frozenset({SeasonalMode.succession_planting, SeasonalMode.harvest}),
	"pruning": frozenset({SeasonalMode.dormancy}),
	"soil_work": frozenset({SeasonalMode.seed_starting, SeasonalMode.cover_cropping}),
	"transplanting": frozenset({SeasonalMode.transplanting}),
}


GOOD_TIME_ACTIVITIES: tuple[str, ...] = tuple(_GOOD_TIMES)


class ClimateFlags(NamedTuple):
	cold: bool
	warm: bool


def parse_zone_number(zone: str | None) -> int | None:
	"""Leading integer of a hardiness zone such as ``"7b"``; ``None`` if absent."""
	if not zone:
		return None
	match = _ZONE_PREFIX.match(zone)
	if match is None:
		return None
	return int(match.group(1))


def climate_flags(profile: UserProfile) -> ClimateFlags:
	zone = parse_zone_number(profile.hardiness_zone)
	if zone is None:
		return ClimateFlags(cold=False, warm=False)
	return ClimateFlags(cold=zone <= COLD_ZONE_MAX, warm=zone >= WARM_ZONE_MIN)


def adjusted_month(profile: UserProfile, day: date | datetime) -> int:
	"""Zero-based month, shifted by six for the southern hemisphere."""
	month = day.month - 1
	if profile.latitude is not None and profile.latitude < 0:
		return (month + 6) % 12
	return month


def infer_seasonal_mode(profile: UserProfile, day: date | datetime) -> SeasonalMode:
	month = adjusted_month(profile, day)

	if month in _WINTER_MONTHS:
		# Cold and warm zones share the same winter mode; see climate_flags().
		return SeasonalMode.dormancy
	if month in _SPRING_MONTHS:
		return SeasonalMode.seed_starting
	if month in _LATE_SPRING_MONTHS:
		return SeasonalMode.transplanting
	if month in _SUMMER_MONTHS:
		if profile.avg_summer_high is not None and profile.avg_summer_high > HEAT_THRESHOLD:
			return SeasonalMode.heat_management
		return SeasonalMode.succession_planting
	if month in _FALL_MONTHS:
		return SeasonalMode.harvest
	return SeasonalMode.cover_cropping


def seasonal_mode_description(mode: SeasonalMode) -> str:
	return _DESCRIPTIONS[mode]


def seasonal_priorities(mode: SeasonalMode) -> list[str]:
	return list(_PRIORITIES[mode])


def is_good_time_for(mode: SeasonalMode, activity: str) -> bool:
	return mode in _GOOD_TIMES.get(activity, frozenset())
