"""Roster-wide attendance aggregation."""

from __future__ import annotations

import math
import re
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Sequence

from coachboard.roster.player import Player

# Leading decimal number, e.g. "85", "85.5%", " -3.2e1 games"
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _parse_leading_number(value: str) -> float:
    match = _LEADING_NUMBER.match(value)
    if not match:
        return 0.0
    return float(match.group(0))


def resolve_attendance(value: Any) -> float:
    """Return an attendance percentage as a number.

    Numbers are used as-is, strings are read up to the first non-numeric
    character (``"85%"`` is 85), and anything else, including unparseable
    strings and non-finite values, counts as 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        number = _parse_leading_number(value)
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going towards +infinity.

    50.5 -> 51, -0.5 -> 0, -1.5 -> -1. Computed on the decimal form of
    ``value`` so float noise does not move a half across the boundary.
    """
    shifted = Decimal(repr(float(value))) + Decimal("0.5")
    return int(shifted.to_integral_value(rounding=ROUND_FLOOR))


def average_attendance(roster: Sequence[Player]) -> int:
    """Average attendance across the whole roster as a whole percentage.

    Players with missing or unparseable attendance still count, as 0.
    """
    if not roster:
        return 0
    total = sum(resolve_attendance(player.attendance) for player in roster)
    return round_half_up(total / len(roster))
