"""Biodynamic day-type rotation and its reference tables."""

from __future__ import annotations

from datetime import date, datetime

from biocal.models.enums import BiodynamicDayType

REFERENCE_ROOT_DAY = date(2024, 1, 1)

_CYCLE: tuple[BiodynamicDayType, ...] = (
	BiodynamicDayType.root,
	BiodynamicDayType.flower,
	BiodynamicDayType.leaf,
	BiodynamicDayType.fruit,
)

_ELEMENTS: dict[BiodynamicDayType, str] = {
	BiodynamicDayType.root: "🜃 Earth",
	BiodynamicDayType.leaf: "🜄 Water",
	BiodynamicDayType.flower: "🜁 Air",
	BiodynamicDayType.fruit: "🜂 Fire",
}

_DESCRIPTIONS: dict[BiodynamicDayType, str] = {
	BiodynamicDayType.root: (
		"Focus on root vegetables like carrots, potatoes, beets, and radishes. "
		"Good for soil work and underground development."
	),
	BiodynamicDayType.leaf: (
		"Ideal for leafy greens like lettuce, spinach, kale, and herbs. "
		"Supports vigorous vegetative growth."
	),
	BiodynamicDayType.flower: (
		"Perfect for flowers, broccoli, cauliflower, and artichokes. "
		"Enhances blooming and aromatic plants."
	),
	BiodynamicDayType.fruit: (
		"Best for tomatoes, peppers, beans, peas, and fruit trees. "
		"Supports fruiting and seed development."
	),
}

_RECOMMENDED_CROPS: dict[BiodynamicDayType, list[str]] = {
	BiodynamicDayType.root: ["Carrots", "Potatoes", "Beets", "Radishes", "Turnips", "Onions", "Garlic"],
	BiodynamicDayType.leaf: ["Lettuce", "Spinach", "Kale", "Chard", "Cabbage", "Basil", "Parsley"],
	BiodynamicDayType.flower: ["Broccoli", "Cauliflower", "Artichoke", "Chamomile", "Calendula", "Roses"],
	BiodynamicDayType.fruit: ["Tomatoes", "Peppers", "Beans", "Peas", "Squash", "Cucumbers", "Melons"],
}

_BEST_ACTIVITIES: dict[BiodynamicDayType, list[str]] = {
	BiodynamicDayType.root: [
		"Plant root vegetables",
		"Harvest root crops",
		"Work compost into soil",
		"Prepare beds",
		"Transplant perennials",
	],
	BiodynamicDayType.leaf: [
		"Sow leafy greens",
		"Harvest salad crops",
		"Water and fertilize",
		"Prune for bushy growth",
		"Mow lawn",
	],
	BiodynamicDayType.flower: [
		"Plant flowers",
		"Harvest herbs for drying",
		"Deadhead blooms",
		"Collect seeds",
		"Prune flowering shrubs",
	],
	BiodynamicDayType.fruit: [
		"Plant fruiting crops",
		"Harvest ripe fruit",
		"Save seeds",
		"Prune fruit trees",
		"Fertilize fruiting plants",
	],
}

_AVOID_ACTIVITIES: dict[BiodynamicDayType, list[str]] = {
	BiodynamicDayType.root: ["Heavy leaf pruning", "Flower deadheading"],
	BiodynamicDayType.leaf: ["Root disturbance", "Fruit harvesting"],
	BiodynamicDayType.flower: ["Root vegetable planting", "Heavy watering"],
	BiodynamicDayType.fruit: ["Transplanting leafy crops", "Soil cultivation"],
}


def days_since_reference(day: date | datetime) -> int:
	"""Whole days between ``day`` and the reference root day (time of day ignored)."""
	if isinstance(day, datetime):
		day = day.date()
	return (day - REFERENCE_ROOT_DAY).days


def calculate_day_type(day: date | datetime) -> BiodynamicDayType:
	# Python modulo floors, so dates before the reference wrap correctly.
	index = days_since_reference(day) % len(_CYCLE)
	return _CYCLE[index]


def day_type_element(day_type: BiodynamicDayType) -> str:
	return _ELEMENTS[day_type]


def day_type_description(day_type: BiodynamicDayType) -> str:
	return _DESCRIPTIONS[day_type]


def recommended_crops(day_type: BiodynamicDayType) -> list[str]:
	return list(_RECOMMENDED_CROPS[day_type])


def best_activities(day_type: BiodynamicDayType) -> list[str]:
	return list(_BEST_ACTIVITIES[day_type])


def avoid_activities(day_type: BiodynamicDayType) -> list[str]:
	return list(_AVOID_ACTIVITIES[day_type])
