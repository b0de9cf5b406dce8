"""Daily permaculture tip selection."""

from __future__ import annotations

from datetime import date

from biocal.models.enums import PermacultureCategory
from biocal.schemas.calendar import PermacultureTip

TIPS: tuple[PermacultureTip, ...] = (
	PermacultureTip(
		category=PermacultureCategory.water_retention,
		title="Mulch for Moisture",
		description=(
			"Apply 3-4 inches of organic mulch to reduce evaporation and keep soil cool. "
			"Wood chips, straw, or shredded leaves work great."
		),
	),
	PermacultureTip(
		category=PermacultureCategory.soil_building,
		title="Chop and Drop",
		description=(
			"Cut back nitrogen-fixing plants and leave cuttings in place as mulch. "
			"This feeds soil organisms and builds fertility."
		),
	),
	PermacultureTip(
		category=PermacultureCategory.companion_planting,
		title="Three Sisters Garden",
		description=(
			"Plant corn, beans, and squash together. Corn provides structure, "
			"beans fix nitrogen, squash shades soil and deters pests."
		),
	),
	PermacultureTip(
		category=PermacultureCategory.pest_management,
		title="Habitat for Beneficials",
		description=(
			"Plant flowers to attract predatory insects. "
			"Yarrow, dill, and fennel support lacewings and parasitic wasps."
		),
	),
	PermacultureTip(
		category=PermacultureCategory.landscape_design,
		title="Zone Planning",
		description=(
			"Place frequently-used plants close to your door (Zone 1). "
			"Less-visited areas can be farther away (Zones 2-5)."
		),
	),
	PermacultureTip(
		category=PermacultureCategory.perennials,
		title="Food Forest Layers",
		description=(
			"Stack functions: canopy trees, understory, shrubs, herbaceous, ground cover, "
			"root crops, and vines create a productive ecosystem."
		),
	),
)


def select_permaculture_tip(day: date) -> PermacultureTip:
	return TIPS[day.day % len(TIPS)]
