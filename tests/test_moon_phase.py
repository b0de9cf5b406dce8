from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from biocal.models.enums import MoonPhase
from biocal.services.moon_phase import (
    REFERENCE_NEW_MOON,
    SYNODIC_MONTH_DAYS,
    calculate_moon_phase,
    cycle_position,
    is_waning,
    is_waxing,
    moon_emoji,
    moon_planting_advice,
)


def test_reference_instant_is_new_moon() -> None:
    assert cycle_position(REFERENCE_NEW_MOON) == pytest.approx(0.0)
    assert calculate_moon_phase(REFERENCE_NEW_MOON) == MoonPhase.new


def test_full_moon_half_a_cycle_after_reference() -> None:
    assert calculate_moon_phase(REFERENCE_NEW_MOON + timedelta(days=15)) == MoonPhase.full


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        (date(2000, 1, 6), MoonPhase.waning_crescent),
        (date(2000, 1, 10), MoonPhase.waxing_crescent),
        (date(2000, 1, 21), MoonPhase.waxing_gibbous),
        (date(2024, 1, 1), MoonPhase.waning_gibbous),
    ],
)
def test_dates_use_utc_midnight(day: date, expected: MoonPhase) -> None:
    assert calculate_moon_phase(day) == expected


def test_dates_before_reference_stay_in_cycle_range() -> None:
    position = cycle_position(date(1999, 6, 1))
    assert 0.0 <= position < SYNODIC_MONTH_DAYS


def test_naive_datetime_is_treated_as_utc() -> None:
    naive = datetime(2024, 3, 15, 12, 0)
    aware = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)
    assert cycle_position(naive) == pytest.approx(cycle_position(aware))


def test_phase_boundaries_follow_sixteenths_of_the_cycle() -> None:
    sixteenth = SYNODIC_MONTH_DAYS / 16
    just_after = timedelta(seconds=60)
    just_before = -just_after

    def at(fraction: int, offset: timedelta) -> MoonPhase:
        return calculate_moon_phase(REFERENCE_NEW_MOON + timedelta(days=fraction * sixteenth) + offset)

    assert at(1, just_before) == MoonPhase.new
    assert at(1, just_after) == MoonPhase.waxing_crescent
    assert at(4, just_after) == MoonPhase.first_quarter
    assert at(5, just_after) == MoonPhase.waxing_gibbous
    assert at(8, just_after) == MoonPhase.full
    assert at(9, just_after) == MoonPhase.waning_gibbous
    assert at(12, just_after) == MoonPhase.last_quarter
    assert at(13, just_after) == MoonPhase.waning_crescent
    assert at(16, just_before) == MoonPhase.waning_crescent


def test_every_phase_is_reached_within_one_cycle() -> None:
    seen = {calculate_moon_phase(date(2024, 1, 1) + timedelta(days=offset)) for offset in range(30)}
    assert seen == set(MoonPhase)


def test_waxing_and_waning_are_disjoint() -> None:
    for phase in MoonPhase:
        assert not (is_waxing(phase) and is_waning(phase))
    assert not is_waxing(MoonPhase.new)
    assert not is_waning(MoonPhase.full)
    assert is_waxing(MoonPhase.first_quarter)
    assert is_waning(MoonPhase.last_quarter)


def test_every_phase_has_emoji_and_advice() -> None:
    for phase in MoonPhase:
        assert moon_emoji(phase)
        assert moon_planting_advice(phase)
    assert moon_emoji(MoonPhase.full) == "🌕"


def test_phase_repeats_after_one_synodic_month() -> None:
    cycle = timedelta(days=SYNODIC_MONTH_DAYS)
    start = datetime(2024, 2, 1, 12, 0, tzinfo=UTC)
    for offset in range(0, 29, 3):
        moment = start + timedelta(days=offset, hours=7)
        assert calculate_moon_phase(moment) == calculate_moon_phase(moment + cycle)
