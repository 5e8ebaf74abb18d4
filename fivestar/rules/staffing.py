"""
Staffing rules.

Order: total-HPRD gap, RN-HPRD gap, weekend coverage, RN turnover,
total nursing turnover. Each check fires independently.
"""

import math
from typing import Callable, List, Optional

from fivestar.core.gaps import fte_needed, next_star_gap
from fivestar.core.schema import STAFFING, Facility, Recommendation, StaffingMetrics
from fivestar.core.thresholds import ThresholdTables
from fivestar.rules.common import cost_for_fte, rating_priority
from fivestar.scoring.staffing import case_mix_adjusted_hprd


def check_total_hprd(
    staffing: StaffingMetrics, facility: Facility, tables: ThresholdTables
) -> Optional[Recommendation]:
    hprd = case_mix_adjusted_hprd(
        staffing.total_nurse_hprd, staffing.case_mix_index, tables.national_average_cmi
    )
    if hprd is None:
        return None

    gap = next_star_gap(hprd, tables.total_hprd)
    if gap is None or gap.gap <= 0:
        return None

    rules = tables.staffing_rules
    fte = fte_needed(gap.gap, facility.residents, rules.hours_per_fte)

    return Recommendation(
        id="staffing-total-hprd",
        category=STAFFING,
        priority=rating_priority(facility.rating_for(STAFFING)),
        title="Increase Total Nursing Hours",
        description=(
            f"Current total nursing HPRD is {hprd:.2f}. To achieve {gap.target_star_level}-star "
            f"staffing, you need {gap.threshold:.2f} HPRD."
        ),
        current_value=round(hprd, 2),
        target_value=gap.threshold,
        estimated_impact=1.0,
        estimated_cost=cost_for_fte(fte, rules.fte_cost_bands),
        timeframe="short_term",
        action_steps=(
            f"Hire approximately {math.ceil(fte)} additional nursing staff (CNAs/LPNs)",
            "Review scheduling to maximize coverage during peak care times",
            "Consider agency staffing as a bridge while recruiting permanent staff",
            "Evaluate current staff retention - turnover may be creating gaps",
            "Ensure accurate PBJ reporting to get credit for all staff hours",
        ),
    )


def check_rn_hprd(
    staffing: StaffingMetrics, facility: Facility, tables: ThresholdTables
) -> Optional[Recommendation]:
    hprd = staffing.rn_hprd
    if hprd is None:
        return None

    gap = next_star_gap(hprd, tables.rn_hprd)
    if gap is None or gap.gap <= 0:
        return None

    fte = fte_needed(gap.gap, facility.residents, tables.staffing_rules.hours_per_fte)

    return Recommendation(
        id="staffing-rn-hprd",
        category=STAFFING,
        priority=rating_priority(facility.rating_for(STAFFING)),
        title="Increase RN Staffing Hours",
        description=(
            f"Current RN HPRD is {hprd:.2f}. RN staffing is a critical component. "
            f"Target: {gap.threshold:.2f} HPRD for {gap.target_star_level}-star."
        ),
        current_value=hprd,
        target_value=gap.threshold,
        estimated_impact=1.0,
        estimated_cost="high",
        timeframe="short_term",
        action_steps=(
            f"Recruit {math.ceil(fte)} additional RNs",
            "Offer competitive salary and sign-on bonuses in current market",
            "Partner with local nursing schools for RN recruitment",
            "Consider RN leadership roles to attract experienced nurses",
            "Evaluate if some LPN positions could be upgraded to RN roles",
        ),
    )


def check_weekend_coverage(
    staffing: StaffingMetrics, facility: Facility, tables: ThresholdTables
) -> Optional[Recommendation]:
    weekday = staffing.total_nurse_hprd
    weekend = staffing.weekend_total_nurse_hprd
    if weekday is None or weekend is None or weekday <= 0:
        return None

    rules = tables.staffing_rules
    if weekend >= weekday * rules.weekend_ratio_floor:
        return None

    return Recommendation(
        id="staffing-weekend",
        category=STAFFING,
        priority="medium",
        title="Improve Weekend Staffing",
        description=(
            f"Weekend staffing ({weekend:.2f} HPRD) is {weekend / weekday:.0%} of weekday "
            "staffing. CMS evaluates weekend staffing separately."
        ),
        current_value=weekend,
        target_value=round(weekday * rules.weekend_ratio_target, 2),
        estimated_impact=0.5,
        estimated_cost="medium",
        timeframe="immediate",
        action_steps=(
            "Offer weekend differential pay incentives",
            "Create dedicated weekend-only positions",
            "Rotate weekend coverage fairly among all staff",
            "Use per diem staff to fill weekend gaps",
        ),
    )


def check_rn_turnover(
    staffing: StaffingMetrics, facility: Facility, tables: ThresholdTables
) -> Optional[Recommendation]:
    rate = staffing.rn_turnover_rate
    rules = tables.staffing_rules
    if rate is None or rate <= rules.rn_turnover_limit:
        return None

    return Recommendation(
        id="staffing-turnover-rn",
        category=STAFFING,
        priority="high",
        title="Reduce RN Turnover",
        description=(
            f"RN turnover rate of {rate:.1f}% is high. High turnover affects quality "
            "and increases costs."
        ),
        current_value=rate,
        target_value=rules.rn_turnover_target,
        estimated_impact=0.5,
        estimated_cost="low",
        timeframe="long_term",
        action_steps=(
            "Conduct exit interviews to understand why RNs leave",
            "Review compensation compared to market rates",
            "Improve working conditions and support",
            "Create career advancement opportunities",
            "Implement mentorship programs for new RNs",
            "Address nurse-to-patient ratios",
        ),
    )


def check_total_turnover(
    staffing: StaffingMetrics, facility: Facility, tables: ThresholdTables
) -> Optional[Recommendation]:
    rate = staffing.total_nurse_turnover_rate
    rules = tables.staffing_rules
    if rate is None or rate <= rules.total_turnover_limit:
        return None

    return Recommendation(
        id="staffing-turnover-total",
        category=STAFFING,
        priority="high",
        title="Reduce Overall Staff Turnover",
        description=(
            f"Total nursing turnover of {rate:.1f}% creates instability. Focus on retention."
        ),
        current_value=rate,
        target_value=rules.total_turnover_target,
        estimated_impact=0.5,
        estimated_cost="low",
        timeframe="long_term",
        action_steps=(
            "Survey staff to identify pain points",
            "Improve scheduling flexibility",
            "Recognize and reward long-term employees",
            "Create positive workplace culture",
            "Provide adequate training and support",
            "Address staffing levels to reduce burnout",
        ),
    )


STAFFING_CHECKS: List[Callable[..., Optional[Recommendation]]] = [
    check_total_hprd,
    check_rn_hprd,
    check_weekend_coverage,
    check_rn_turnover,
    check_total_turnover,
]


def generate_staffing_recommendations(
    staffing: StaffingMetrics,
    facility: Facility,
    tables: ThresholdTables,
) -> List[Recommendation]:
    recs = []
    for check in STAFFING_CHECKS:
        rec = check(staffing, facility, tables)
        if rec is not None:
            recs.append(rec)
    return recs
