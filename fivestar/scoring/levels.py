import math
from typing import Optional

from fivestar.core.thresholds import STAR_LEVELS, StarThresholds


def _usable(value: Optional[float]) -> bool:
    if value is None:
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return not math.isnan(number) and number >= 0


def star_level(value: Optional[float], table: StarThresholds) -> int:
    """
    Walk the breakpoints from level 5 down to 2 and return the first
    level the value meets or exceeds; anything below level 2 is level 1.

    Missing, NaN or negative values are level 1. A table without one of
    the levels 2..5 raises ThresholdTableError.
    """
    breakpoints = [(level, table.breakpoint(level)) for level in STAR_LEVELS]

    if not _usable(value):
        return 1

    for level, minimum in breakpoints:
        if float(value) >= minimum:
            return level
    return 1


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))
