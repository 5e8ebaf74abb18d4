"""
Quality measure scoring.

Every comparison goes through ``is_worse_than`` so the direction flag
of a measure (higher_is_worse) is consulted in exactly one place.
"""

import logging
import math
from typing import Dict, Optional

from fivestar.core.thresholds import QMBenchmark, ThresholdTables, TIERS
from fivestar.scoring.levels import star_level

logger = logging.getLogger(__name__)

POOR = "poor"


def _clamp_percent(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return max(0.0, min(100.0, number))


def is_worse_than(benchmark: QMBenchmark, observed: float, reference: float) -> bool:
    """True when ``observed`` is strictly worse than ``reference`` for this measure."""
    if benchmark.higher_is_worse:
        return observed > reference
    return observed < reference


def qm_benchmark_tier(
    measure: str,
    observed: Optional[float],
    benchmarks: Dict[str, QMBenchmark],
) -> str:
    """
    Observed percentage -> excellent / good / average / poor.

    ``measure`` may be a measure key or a CMS measure code. Unknown
    measures and missing values are "poor".
    """
    bench = benchmarks.get(measure)
    if bench is None:
        bench = next((b for b in benchmarks.values() if b.cms_code == measure), None)
    if bench is None:
        logger.warning("Unknown quality measure %r; defaulting tier to poor", measure)
        return POOR

    value = _clamp_percent(observed)
    if value is None:
        return POOR

    for tier in TIERS[:-1]:
        if not is_worse_than(bench, value, bench.tier_value(tier)):
            return tier
    return POOR


def tier_for(tables: ThresholdTables, measure: str, observed: Optional[float]) -> str:
    return qm_benchmark_tier(measure, observed, tables.quality_measures)


def qm_points_star_level(points: Optional[float], tables: ThresholdTables) -> int:
    """Total QM points -> QM star level."""
    return star_level(points, tables.qm_point_thresholds)
