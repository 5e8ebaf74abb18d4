"""
Quality measure rules.

One template per tracked measure. A measure fires when its observed
value is worse than the "average" benchmark tier, judged through the
measure's direction flag; the target is always the "good" tier.
"""

import logging
from typing import Any, Dict, List, Optional

from fivestar.core.schema import QUALITY_MEASURES, Facility, QualityMeasureSet, Recommendation
from fivestar.core.thresholds import ThresholdTables
from fivestar.rules.common import escalate
from fivestar.scoring.quality import _clamp_percent, is_worse_than

logger = logging.getLogger(__name__)


QM_RULE_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "antipsychotic": {
        "title": "Reduce Antipsychotic Medication Use",
        "description": (
            "{value:.1f}% of residents receive antipsychotics. This is a high-visibility "
            "measure. Target: below {target:g}%."
        ),
        "priority": "high",
        "impact": 1.0,
        "cost": "low",
        "timeframe": "short_term",
        "steps": (
            "Review all residents on antipsychotics for appropriate diagnosis",
            "Implement gradual dose reduction (GDR) program",
            "Train staff in non-pharmacological interventions for behaviors",
            "Use person-centered care approaches",
            "Engage pharmacist in medication reviews",
            "Document behavioral symptoms and interventions thoroughly",
            "Consider music therapy, pet therapy, and activity programs",
        ),
    },
    "pressure_ulcers": {
        "title": "Reduce Pressure Ulcer Incidence",
        "description": (
            "{value:.1f}% of residents have pressure ulcers. Strong correlation with "
            "quality of care. Target: {target:g}%."
        ),
        "priority": "high",
        "impact": 1.0,
        "cost": "medium",
        "timeframe": "short_term",
        "steps": (
            "Implement comprehensive skin assessment on admission",
            "Establish turning/repositioning schedule with documentation",
            "Invest in pressure-relieving mattresses and surfaces",
            "Ensure adequate nutrition and hydration",
            "Train CNAs on early identification of skin breakdown",
            "Conduct weekly wound rounds",
            "Use Braden Scale for risk assessment",
        ),
    },
    "falls": {
        "title": "Reduce Fall Incidence",
        "description": (
            "{value:.1f}% of residents experienced falls. Falls can lead to serious "
            "injuries and lawsuits. Target: {target:g}%."
        ),
        "priority": "medium",
        "impact": 0.5,
        "cost": "medium",
        "timeframe": "short_term",
        "steps": (
            "Complete fall risk assessment on every resident",
            "Implement individualized fall prevention plans",
            "Review medications that increase fall risk",
            "Ensure adequate lighting and clear pathways",
            "Use bed/chair alarms for high-risk residents",
            "Provide proper footwear to residents",
            "Staff training on fall prevention",
            "Post-fall huddles to identify root causes",
        ),
    },
    "catheter": {
        "title": "Reduce Indwelling Catheter Use",
        "description": (
            "{value:.1f}% of residents have catheters. Removing unnecessary catheters "
            "reduces infection risk. Target: {target:g}%."
        ),
        "priority": "medium",
        "impact": 0.5,
        "cost": "low",
        "timeframe": "immediate",
        "steps": (
            "Review all catheter orders for medical necessity",
            "Implement catheter removal protocol",
            "Train on proper catheter care to prevent infections",
            "Establish toileting programs as alternatives",
            "Document clear criteria for catheter use",
        ),
    },
    "rehospitalization": {
        "title": "Reduce Rehospitalization Rate",
        "description": (
            "{value:.1f}% rehospitalization affects both quality rating and "
            "reimbursement. Target: {target:g}%."
        ),
        "priority": "high",
        "impact": 1.0,
        "cost": "medium",
        "timeframe": "short_term",
        "steps": (
            "Improve hospital-to-SNF transition communication",
            "Medication reconciliation on admission",
            "Early identification of declining residents",
            "Develop INTERACT or similar early warning system",
            "Train staff to recognize and respond to changes in condition",
            "Strengthen physician/NP coverage",
            "Consider telehealth for after-hours concerns",
        ),
    },
    "flu_vaccine": {
        "title": "Improve Flu Vaccination Rate",
        "description": (
            "Only {value:.1f}% of residents received flu vaccine. Easy win for quality "
            "measures. Target: {target:g}%."
        ),
        "priority": "low",
        "impact": 0.25,
        "cost": "low",
        "timeframe": "immediate",
        "steps": (
            "Implement standing orders for flu vaccination",
            "Educate families about vaccine benefits",
            "Coordinate with pharmacy for vaccine supply",
            "Document all vaccinations and refusals properly",
        ),
    },
}

TRACKED_MEASURES = (
    "antipsychotic",
    "pressure_ulcers",
    "falls",
    "catheter",
    "rehospitalization",
    "flu_vaccine",
)


def check_measure(
    measure: str,
    qm: QualityMeasureSet,
    facility: Facility,
    tables: ThresholdTables,
) -> Optional[Recommendation]:
    template = QM_RULE_TEMPLATES[measure]
    bench = tables.benchmark(measure)
    if bench is None:
        logger.warning("No benchmark configured for %s; skipping", measure)
        return None

    value = _clamp_percent(qm.value_for(measure))
    if value is None or not is_worse_than(bench, value, bench.average):
        return None

    priority = template["priority"]
    at_poor_band = value == bench.poor or is_worse_than(bench, value, bench.poor)
    if facility.rating_for(QUALITY_MEASURES) <= 2 or at_poor_band:
        priority = escalate(priority)

    return Recommendation(
        id=f"qm-{measure.replace('_', '-')}",
        category=QUALITY_MEASURES,
        priority=priority,
        title=template["title"],
        description=template["description"].format(value=value, target=bench.good),
        current_value=value,
        target_value=bench.good,
        estimated_impact=template["impact"],
        estimated_cost=template["cost"],
        timeframe=template["timeframe"],
        action_steps=tuple(template["steps"]),
    )


def generate_quality_recommendations(
    qm: QualityMeasureSet,
    facility: Facility,
    tables: ThresholdTables,
) -> List[Recommendation]:
    recs = []
    for measure in TRACKED_MEASURES:
        rec = check_measure(measure, qm, facility, tables)
        if rec is not None:
            recs.append(rec)
    return recs
