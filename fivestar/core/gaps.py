from dataclasses import dataclass
from typing import Optional

from fivestar.core.thresholds import QMBenchmark, StarThresholds
from fivestar.scoring.levels import star_level, _usable
from fivestar.scoring.quality import _clamp_percent, is_worse_than


@dataclass(frozen=True)
class StarGap:
    gap: float
    threshold: float
    target_star_level: int
    current_star_level: int


def next_star_gap(current_value: Optional[float], table: StarThresholds) -> Optional[StarGap]:
    """
    Distance from the current value to the next unearned star level.

    None once the value has reached level 5 (including values above the
    level-5 breakpoint); the gap only ever points upward.
    """
    current = star_level(current_value, table)
    if current >= 5:
        return None

    target = current + 1
    threshold = table.breakpoint(target)

    value = float(current_value) if _usable(current_value) else 0.0

    return StarGap(
        gap=round(threshold - value, 4),
        threshold=threshold,
        target_star_level=target,
        current_star_level=current,
    )


def fte_needed(gap: float, residents: int, hours_per_fte: float = 8.0) -> float:
    """Additional FTE-equivalents per day needed to close an HPRD gap."""
    if gap <= 0 or residents <= 0 or hours_per_fte <= 0:
        return 0.0
    return gap * residents / hours_per_fte


def benchmark_gap(benchmark: QMBenchmark, observed: Optional[float]) -> Optional[float]:
    """
    Percentage points between the observed value and the "good" tier,
    or None when the measure is already at or better than "good".
    """
    value = _clamp_percent(observed)
    if value is None:
        return None
    if not is_worse_than(benchmark, value, benchmark.good):
        return None
    return round(abs(value - benchmark.good), 4)
