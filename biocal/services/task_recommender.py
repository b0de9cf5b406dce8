"""Task recommendation engine.

Combines the biodynamic day type, moon phase, seasonal mode and the
gardener's profile into a short list of actions, crops and one micro-task.
Variety comes from a generator seeded by ``country + date``, so the same
profile and day always yield the same recommendations.

The RNG draw order is part of the contract: best-action shuffle, then the
best-crop shuffle, then the micro-task draw.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import date, datetime

from biocal.models.enums import BiodynamicDayType, ExperienceLevel, MoonPhase, SeasonalMode
from biocal.schemas.calendar import TaskRecommendation
from biocal.schemas.profile import UserProfile
from biocal.services.rng import calendar_seed, seed_random, shuffle

MAX_BEST_ACTIONS = 5
MAX_AVOID_ACTIONS = 2
MAX_BEST_CROPS = 4
DAY_TYPE_ACTION_PICKS = 2

BEGINNER_HINT = "Focus on easy-to-grow varieties"
NEW_MOON_AVOID = "Avoid major planting - rest and plan"

_DAY_TYPE_ACTIONS: dict[BiodynamicDayType, list[str]] = {
	BiodynamicDayType.root: [
		"Plant root vegetables (carrots, potatoes, beets)",
		"Harvest root crops for storage",
		"Work on soil improvement and composting",
		"Prune to encourage root development",
	],
	BiodynamicDayType.leaf: [
		"Sow leafy greens and herbs",
		"Fertilize with nitrogen-rich amendments",
		"Harvest lettuce, spinach, and kale",
		"Water deeply to encourage leaf growth",
	],
	BiodynamicDayType.flower: [
		"Plant flowers and flowering herbs",
		"Harvest herbs for highest essential oil content",
		"Sow broccoli, cauliflower, artichokes",
		"Deadhead flowers to encourage blooming",
	],
	BiodynamicDayType.fruit: [
		"Plant fruiting vegetables (tomatoes, peppers, beans)",
		"Harvest fruits at peak ripeness",
		"Prune fruit trees and berry bushes",
		"Save seeds from best fruit producers",
	],
}

_MOON_HINTS: dict[MoonPhase, str] = {
	MoonPhase.waxing_crescent: "Good time for sowing above-ground crops",
	MoonPhase.first_quarter: "Good time for sowing above-ground crops",
	MoonPhase.full: "Excellent for transplanting and harvesting",
	MoonPhase.waning_gibbous: "Focus on root crops and soil building",
	MoonPhase.last_quarter: "Focus on root crops and soil building",
}

_SEASONAL_ACTIONS: dict[SeasonalMode, list[str]] = {
	SeasonalMode.seed_starting: ["Start seeds indoors", "Prepare seed starting mix"],
	SeasonalMode.transplanting: ["Harden off seedlings", "Transplant after frost"],
	SeasonalMode.succession_planting: ["Sow quick crops every 2 weeks"],
	SeasonalMode.heat_management: ["Apply mulch heavily", "Provide shade cloth"],
	SeasonalMode.harvest: ["Harvest regularly", "Preserve excess produce"],
	SeasonalMode.cover_cropping: ["Sow cover crops", "Prepare garlic beds"],
	SeasonalMode.dormancy: ["Protect perennials", "Plan next season"],
}

_AVOID_ACTIONS: dict[BiodynamicDayType, list[str]] = {
	BiodynamicDayType.root: ["Avoid planting leafy greens", "Postpone flower planting"],
	BiodynamicDayType.leaf: ["Avoid root crop sowing", "Postpone fruiting crop planting"],
	BiodynamicDayType.flower: ["Avoid heavy root work", "Postpone leaf crop harvesting"],
	BiodynamicDayType.fruit: ["Avoid transplanting leafy greens", "Postpone root crop work"],
}

_CROPS: dict[BiodynamicDayType, list[str]] = {
	BiodynamicDayType.root: ["Carrots", "Potatoes", "Beets", "Turnips", "Radishes", "Onions", "Garlic"],
	BiodynamicDayType.leaf: ["Lettuce", "Spinach", "Kale", "Chard", "Cabbage", "Celery", "Parsley"],
	BiodynamicDayType.flower: ["Broccoli", "Cauliflower", "Artichokes", "Sunflowers", "Chamomile", "Calendula"],
	BiodynamicDayType.fruit: ["Tomatoes", "Peppers", "Cucumbers", "Squash", "Beans", "Peas", "Melons"],
}

MICRO_TASKS: tuple[str, ...] = (
	"Check soil moisture in one container",
	"Deadhead 5 spent flowers",
	"Pull weeds from one bed",
	"Inspect plants for pests (5 min)",
	"Add compost to one plant",
	"Thin one row of seedlings",
	"Water one dry plant deeply",
	"Record one observation in journal",
	"Harvest greens for tonight's salad",
	"Collect fallen leaves for mulch",
)


def generate_task_recommendations(
	profile: UserProfile,
	day_type: BiodynamicDayType,
	moon_phase: MoonPhase,
	seasonal_mode: SeasonalMode,
	day: date | datetime,
) -> TaskRecommendation:
	rng = seed_random(calendar_seed(profile, day))
	best_actions = best_actions_for(day_type, moon_phase, seasonal_mode, profile, rng)
	avoid_actions = avoid_actions_for(day_type, moon_phase)
	best_crops = best_crops_for(day_type, profile, rng)
	micro_task = micro_task_for(rng)
	return TaskRecommendation(
		best_actions=best_actions,
		avoid_actions=avoid_actions,
		best_crops=best_crops,
		micro_task=micro_task,
	)


def best_actions_for(
	day_type: BiodynamicDayType,
	moon_phase: MoonPhase,
	seasonal_mode: SeasonalMode,
	profile: UserProfile,
	rng: Callable[[], float],
) -> list[str]:
	actions = shuffle(_DAY_TYPE_ACTIONS[day_type], rng)[:DAY_TYPE_ACTION_PICKS]

	moon_hint = _MOON_HINTS.get(moon_phase)
	if moon_hint is not None:
		actions.append(moon_hint)

	seasonal = _SEASONAL_ACTIONS.get(seasonal_mode)
	if seasonal:
		actions.append(seasonal[0])

	if profile.experience_level == ExperienceLevel.beginner:
		actions.append(BEGINNER_HINT)

	return actions[:MAX_BEST_ACTIONS]


def avoid_actions_for(day_type: BiodynamicDayType, moon_phase: MoonPhase) -> list[str]:
	avoid = list(_AVOID_ACTIONS[day_type])
	if moon_phase == MoonPhase.new:
		avoid.append(NEW_MOON_AVOID)
	# Truncation happens after the append, so the day-type entries take precedence.
	return avoid[:MAX_AVOID_ACTIONS]


def best_crops_for(
	day_type: BiodynamicDayType,
	profile: UserProfile,
	rng: Callable[[], float],
) -> list[str]:
	crops = _CROPS[day_type]
	if profile.top_crops:
		favourites = [name.lower() for name in profile.top_crops]
		matching = [crop for crop in crops if any(fav in crop.lower() for fav in favourites)]
		if matching:
			crops = matching
	return shuffle(crops, rng)[:MAX_BEST_CROPS]


def micro_task_for(rng: Callable[[], float]) -> str:
	return MICRO_TASKS[math.floor(rng() * len(MICRO_TASKS))]
