"""Seeded pseudo-random helpers with fixed-width 32-bit arithmetic.

The hash and LCG wrap at 32 bits explicitly so a seed string produces the
same sequence on every platform and interpreter.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import TypeVar

from biocal.schemas.profile import UserProfile

T = TypeVar("T")

UINT32_MODULUS = 2**32
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223

_INT32_SIGN_BIT = 2**31


def _to_int32(value: int) -> int:
	value &= 0xFFFFFFFF
	return value - UINT32_MODULUS if value >= _INT32_SIGN_BIT else value


def hash_code(text: str) -> int:
	"""Polynomial (×31) hash over UTF-16 code units, absolute value of the int32 result."""
	encoded = text.encode("utf-16-le", "surrogatepass")
	value = 0
	for offset in range(0, len(encoded), 2):
		unit = encoded[offset] | (encoded[offset + 1] << 8)
		value = _to_int32(value * 31 + unit)
	return abs(value)


def seed_random(seed: str) -> Callable[[], float]:
	"""Return a generator of values in ``[0, 1)``; each call advances the LCG once."""
	state = hash_code(seed)

	def next_value() -> float:
		nonlocal state
		state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % UINT32_MODULUS
		return state / UINT32_MODULUS

	return next_value


def shuffle(items: Sequence[T], rng: Callable[[], float]) -> list[T]:
	"""Fisher–Yates shuffle into a new list, walking from the last index down."""
	shuffled = list(items)
	for i in range(len(shuffled) - 1, 0, -1):
		j = math.floor(rng() * (i + 1))
		shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
	return shuffled


def iso_timestamp(day: date | datetime) -> str:
	"""UTC-midnight ISO-8601 timestamp with millisecond precision."""
	if isinstance(day, datetime):
		day = day.date()
	return f"{day.isoformat()}T00:00:00.000Z"


def calendar_seed(profile: UserProfile, day: date | datetime) -> str:
	return profile.country + iso_timestamp(day)
