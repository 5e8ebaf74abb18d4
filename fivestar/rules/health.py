"""
Health inspection rules.

Checks on the most recent survey (deficiency count, severe citations,
fines) plus repeat-category detection over the citation list.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

from fivestar.core.schema import (
    HEALTH_INSPECTION,
    DeficiencyRecord,
    Facility,
    HealthInspectionRecord,
    Recommendation,
    most_recent_first,
)
from fivestar.core.thresholds import SEVERE_LETTERS, ThresholdTables
from fivestar.rules.common import make_id, rating_priority


def check_deficiency_count(
    latest: HealthInspectionRecord, facility: Facility
) -> Optional[Recommendation]:
    total = latest.deficiency_total()
    national = latest.national_avg_deficiencies
    if national is None or total <= national:
        return None

    return Recommendation(
        id="hi-deficiency-count",
        category=HEALTH_INSPECTION,
        priority=rating_priority(facility.rating_for(HEALTH_INSPECTION)),
        title="Reduce Deficiency Count",
        description=(
            f"{total} deficiencies vs national average of {national:.1f}. "
            "Focus on systemic issues."
        ),
        current_value=total,
        target_value=math.floor(national),
        estimated_impact=1.0,
        estimated_cost="medium",
        timeframe="long_term",
        action_steps=(
            "Analyze pattern of deficiencies - what areas repeat?",
            "Conduct internal mock surveys regularly",
            "Implement quality assurance and performance improvement (QAPI) program",
            "Train staff on common deficiency areas",
            "Engage DON and Administrator in quality improvement",
            "Address root causes, not just symptoms",
        ),
    )


def severe_deficiency_count(
    latest: Optional[HealthInspectionRecord],
    deficiencies: Sequence[DeficiencyRecord],
) -> int:
    """G-L citations on the latest survey; falls back to the citation list
    when the survey record carries no severity breakdown."""
    if latest is not None and latest.severity_counts:
        return latest.severe_count()
    return sum(1 for d in deficiencies if d.resolved_code() in SEVERE_LETTERS)


def check_severe_deficiencies(severe: int) -> Optional[Recommendation]:
    if severe <= 0:
        return None

    return Recommendation(
        id="hi-severe-deficiencies",
        category=HEALTH_INSPECTION,
        priority="high",
        title="Eliminate Severe Deficiencies",
        description=(
            f"{severe} severe deficiencies (G-L level) significantly impact ratings. "
            "These indicate actual harm or immediate jeopardy."
        ),
        current_value=severe,
        target_value=0,
        estimated_impact=2.0,
        estimated_cost="high",
        timeframe="immediate",
        action_steps=(
            "Review all severe deficiencies from recent surveys",
            "Develop immediate corrective action plans",
            "Identify system failures that led to harm",
            "Implement safeguards to prevent recurrence",
            "Consider external consultant for high-risk areas",
            "Board/leadership engagement on quality issues",
        ),
    )


def most_frequent_category(deficiencies: Sequence[DeficiencyRecord]) -> Optional[Tuple[str, int]]:
    """Most cited category; ties go to the category seen first."""
    counts: Dict[str, int] = {}
    for d in deficiencies:
        key = d.grouping_key()
        if key:
            counts[key] = counts.get(key, 0) + 1

    best: Optional[Tuple[str, int]] = None
    for category, count in counts.items():
        if best is None or count > best[1]:
            best = (category, count)
    return best


def check_repeat_category(
    deficiencies: Sequence[DeficiencyRecord], minimum: int = 2
) -> Optional[Recommendation]:
    top = most_frequent_category(deficiencies)
    if top is None or top[1] < minimum:
        return None

    category, count = top
    return Recommendation(
        id=make_id("hi", "category", category),
        category=HEALTH_INSPECTION,
        priority="medium",
        title=f"Address {category} Deficiencies",
        description=(
            f'{count} deficiencies in "{category}" category suggests a systemic issue '
            "requiring focused intervention."
        ),
        current_value=count,
        target_value=0,
        estimated_impact=0.5,
        estimated_cost="medium",
        timeframe="short_term",
        action_steps=(
            f"Review all {category} deficiencies in detail",
            "Identify common root causes",
            "Develop targeted training for staff",
            "Update policies and procedures if needed",
            "Assign specific accountability for improvement",
            "Monitor with regular audits",
        ),
    )


def check_fines(latest: HealthInspectionRecord) -> Optional[Recommendation]:
    if not latest.fine_amount or latest.fine_amount <= 0:
        return None

    return Recommendation(
        id="hi-fines",
        category=HEALTH_INSPECTION,
        priority="high",
        title="Address Issues Leading to Fines",
        description=(
            f"${latest.fine_amount:,.0f} in fines indicates serious compliance issues. "
            "Fines heavily impact ratings."
        ),
        current_value=latest.fine_amount,
        target_value=0,
        estimated_impact=1.5,
        estimated_cost="high",
        timeframe="immediate",
        action_steps=(
            "Review the specific citations that led to fines",
            "Develop comprehensive corrective action plan",
            "Consider engaging compliance consultant",
            "Implement monitoring systems to catch issues early",
            "Regular leadership rounds to observe care delivery",
        ),
    )


def generate_health_recommendations(
    inspections: Sequence[HealthInspectionRecord],
    deficiencies: Sequence[DeficiencyRecord],
    facility: Facility,
    tables: ThresholdTables,
) -> List[Recommendation]:
    """
    Surveys are ordered newest first by survey date (undated surveys
    last); only the newest drives the survey-level checks.
    """
    inspections = most_recent_first(inspections)
    deficiencies = list(deficiencies or ())
    latest = inspections[0] if inspections else None

    candidates = []
    if latest is not None:
        candidates.append(check_deficiency_count(latest, facility))
    candidates.append(check_severe_deficiencies(severe_deficiency_count(latest, deficiencies)))
    candidates.append(check_repeat_category(deficiencies, tables.health.repeat_category_minimum))
    if latest is not None:
        candidates.append(check_fines(latest))

    return [rec for rec in candidates if rec is not None]
