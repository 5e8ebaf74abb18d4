from .levels import star_level, round_half_up
from .staffing import (
    staffing_star_level,
    staffing_star_rating,
    case_mix_adjusted_hprd,
    facility_case_mix_index,
)
from .quality import qm_benchmark_tier, qm_points_star_level, is_worse_than
from .health import health_inspection_points, deficiency_points, cycle_weighted_score
from .gg import expected_gg_score, observed_gg_score, score_gg_discharge
from .overall import calculate_overall_rating

__all__ = [
    "star_level",
    "round_half_up",
    "staffing_star_level",
    "staffing_star_rating",
    "case_mix_adjusted_hprd",
    "facility_case_mix_index",
    "qm_benchmark_tier",
    "qm_points_star_level",
    "is_worse_than",
    "health_inspection_points",
    "deficiency_points",
    "cycle_weighted_score",
    "expected_gg_score",
    "observed_gg_score",
    "score_gg_discharge",
    "calculate_overall_rating",
]
