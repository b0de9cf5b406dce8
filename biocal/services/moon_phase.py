"""Lunar phase approximation over a fixed synodic month."""

from __future__ import annotations

from datetime import UTC, date, datetime

from biocal.models.enums import MoonPhase

SYNODIC_MONTH_DAYS = 29.53058867
REFERENCE_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=UTC)

_SECONDS_PER_DAY = 86400.0

# Upper bound of each phase as a fraction of the cycle; the last phase runs to 1.0.
_PHASE_BOUNDARIES: tuple[tuple[float, MoonPhase], ...] = (
	(1 / 16, MoonPhase.new),
	(4 / 16, MoonPhase.waxing_crescent),
	(5 / 16, MoonPhase.first_quarter),
	(8 / 16, MoonPhase.waxing_gibbous),
	(9 / 16, MoonPhase.full),
	(12 / 16, MoonPhase.waning_gibbous),
	(13 / 16, MoonPhase.last_quarter),
)

_EMOJI: dict[MoonPhase, str] = {
	MoonPhase.new: "🌑",
	MoonPhase.waxing_crescent: "🌒",
	MoonPhase.first_quarter: "🌓",
	MoonPhase.waxing_gibbous: "🌔",
	MoonPhase.full: "🌕",
	MoonPhase.waning_gibbous: "🌖",
	MoonPhase.last_quarter: "🌗",
	MoonPhase.waning_crescent: "🌘",
}

_PLANTING_ADVICE: dict[MoonPhase, str] = {
	MoonPhase.new: "Rest period. Good for planning and soil preparation.",
	MoonPhase.waxing_crescent: "Excellent for sowing leafy annuals and grains.",
	MoonPhase.first_quarter: "Ideal for planting above-ground crops that produce seeds outside fruit.",
	MoonPhase.waxing_gibbous: "Best time for planting crops that produce seeds inside fruit.",
	MoonPhase.full: "Peak energy. Good for transplanting and watering.",
	MoonPhase.waning_gibbous: "Plant root crops and perennials.",
	MoonPhase.last_quarter: "Focus on pruning, harvesting, and composting.",
	MoonPhase.waning_crescent: "Rest and observe. Minimal disturbance to plants.",
}

_WAXING = frozenset({MoonPhase.waxing_crescent, MoonPhase.first_quarter, MoonPhase.waxing_gibbous})
_WANING = frozenset({MoonPhase.waning_gibbous, MoonPhase.last_quarter, MoonPhase.waning_crescent})


def _as_utc(moment: date | datetime) -> datetime:
	if isinstance(moment, datetime):
		if moment.tzinfo is None:
			return moment.replace(tzinfo=UTC)
		return moment.astimezone(UTC)
	return datetime(moment.year, moment.month, moment.day, tzinfo=UTC)


def cycle_position(moment: date | datetime) -> float:
	"""Days elapsed since the latest reference new moon, in ``[0, SYNODIC_MONTH_DAYS)``."""
	elapsed = (_as_utc(moment) - REFERENCE_NEW_MOON).total_seconds() / _SECONDS_PER_DAY
	return elapsed % SYNODIC_MONTH_DAYS


def calculate_moon_phase(moment: date | datetime) -> MoonPhase:
	"""Map a date (midnight UTC) or datetime onto one of the eight named phases."""
	position = cycle_position(moment)
	for fraction, phase in _PHASE_BOUNDARIES:
		if position < fraction * SYNODIC_MONTH_DAYS:
			return phase
	return MoonPhase.waning_crescent


def moon_emoji(phase: MoonPhase) -> str:
	return _EMOJI.get(phase, "🌑")


def is_waxing(phase: MoonPhase) -> bool:
	return phase in _WAXING


def is_waning(phase: MoonPhase) -> bool:
	return phase in _WANING


def moon_planting_advice(phase: MoonPhase) -> str:
	return _PLANTING_ADVICE[phase]
