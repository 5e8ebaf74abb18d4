"""
GG Discharge Function Score
---------------------------
Short-stay functional improvement (self-care + mobility).

- Expected score: OLS-style linear model over admission function,
  age band, primary diagnosis, BIMS band, comorbidity flags and
  length-of-stay band; unreadable covariates fall back to the
  reference band
- Observed score: sum of ten discharge items, each 1..6
- Missing or "activity not attempted" discharge codes are imputed from
  the admission item plus the expected per-item improvement, never 0
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from fivestar.core.schema import GG_ITEMS, GGInput, GGItemResult, GGResult, _to_float
from fivestar.core.thresholds import AGE_BANDS, BIMS_BANDS, LOS_BANDS, GGCoefficients
from fivestar.scoring.levels import round_half_up

logger = logging.getLogger(__name__)

ITEM_MIN = 1
ITEM_MAX = 6

_DIAGNOSIS_PATTERNS = (
    ("hip_fracture", ("hip", "femur")),
    ("stroke", ("stroke", "cva")),
    ("joint_replacement", ("joint", "knee", "replacement")),
    ("medical_complex", ("medically complex", "medical complex")),
)

_COMORBIDITY_PATTERNS = {
    "diabetes": ("diabetes",),
    "heart_failure": ("heart", "chf"),
    "copd": ("copd", "pulmonary"),
    "renal": ("renal", "kidney"),
    "dementia": ("dementia", "alzheimer"),
}


# -------------------------------------------------
# COVARIATES
# -------------------------------------------------
def item_score(value: Any) -> Optional[int]:
    """Valid GG performance code (1..6) -> int; anything else -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            return None
        value = int(text)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer() or not ITEM_MIN <= number <= ITEM_MAX:
        return None
    return int(number)


def _item_value(scores: Optional[Dict[str, Any]], key: str, code: str) -> Any:
    if not scores:
        return None
    if key in scores:
        return scores[key]
    return scores.get(code)


def admission_items(gg_input: GGInput) -> List[int]:
    """Admission item scores; invalid admission codes count as dependent (1)."""
    items = []
    for key, code, _ in GG_ITEMS:
        score = item_score(_item_value(gg_input.admission, key, code))
        items.append(score if score is not None else ITEM_MIN)
    return items


def age_band(age: Any) -> str:
    """Non-numeric or missing ages fall in the 75-84 reference band."""
    age = _to_float(age)
    if age is None:
        return "75_84"
    if age < 65:
        return "under_65"
    if age < 75:
        return "65_74"
    if age < 85:
        return "75_84"
    return "85_plus"


def bims_band(bims: Any) -> str:
    bims = _to_float(bims)
    if bims is None:
        return "moderate"
    score = max(0, min(15, int(bims)))
    if score >= 13:
        return "intact"
    if score >= 8:
        return "moderate"
    return "severe"


def los_band(length_of_stay: Any) -> str:
    days = _to_float(length_of_stay)
    if days is None or days < 0:
        return "7_20"
    if days < 7:
        return "under_7"
    if days < 21:
        return "7_20"
    return "21_plus"


def diagnosis_category(diagnosis: Optional[str]) -> str:
    text = str(diagnosis or "").lower()
    for category, needles in _DIAGNOSIS_PATTERNS:
        if any(n in text for n in needles):
            return category
    return "other"


def comorbidity_flags(comorbidities) -> Dict[str, int]:
    texts = [str(c).lower() for c in comorbidities or ()]
    return {
        name: int(any(n in text for text in texts for n in needles))
        for name, needles in _COMORBIDITY_PATTERNS.items()
    }


def _design(gg_input: GGInput, coefficients: GGCoefficients) -> Tuple[np.ndarray, np.ndarray]:
    """Covariate vector and matching coefficient vector."""
    x: List[float] = [float(sum(admission_items(gg_input)))]
    beta: List[float] = [coefficients.admission_points]

    band = age_band(gg_input.age)
    for name in AGE_BANDS:
        x.append(1.0 if name == band else 0.0)
        beta.append(coefficients.age.get(name, 0.0))

    dx = diagnosis_category(gg_input.primary_diagnosis)
    for name, weight in coefficients.diagnosis.items():
        x.append(1.0 if name == dx else 0.0)
        beta.append(weight)

    cognition = bims_band(gg_input.bims)
    for name in BIMS_BANDS:
        x.append(1.0 if name == cognition else 0.0)
        beta.append(coefficients.bims.get(name, 0.0))

    flags = comorbidity_flags(gg_input.comorbidities)
    for name, weight in coefficients.comorbidities.items():
        x.append(float(flags.get(name, 0)))
        beta.append(weight)

    stay = los_band(gg_input.length_of_stay)
    for name in LOS_BANDS:
        x.append(1.0 if name == stay else 0.0)
        beta.append(coefficients.length_of_stay.get(name, 0.0))

    return np.asarray(x, dtype=float), np.asarray(beta, dtype=float)


# -------------------------------------------------
# SCORES
# -------------------------------------------------
def expected_gg_score(gg_input: GGInput, coefficients: GGCoefficients) -> float:
    x, beta = _design(gg_input, coefficients)
    expected = coefficients.intercept + float(np.dot(x, beta))
    low, high = coefficients.score_range
    return round(float(np.clip(expected, low, high)), 2)


def observed_gg_score(
    gg_input: GGInput,
    expected: float,
) -> Tuple[int, Tuple[GGItemResult, ...]]:
    """Observed discharge score and per-item breakdown (with imputation)."""
    admission = admission_items(gg_input)
    delta = (expected - sum(admission)) / len(GG_ITEMS)

    results = []
    for (key, code, _), admitted in zip(GG_ITEMS, admission):
        discharge = item_score(_item_value(gg_input.discharge, key, code))
        imputed = discharge is None
        if imputed:
            discharge = max(ITEM_MIN, min(ITEM_MAX, round_half_up(admitted + delta)))
            logger.debug("Imputed discharge %s as %d", key, discharge)

        results.append(GGItemResult(
            item=key,
            admission=admitted,
            discharge=discharge,
            imputed=imputed,
            improvement=discharge - admitted,
        ))

    return sum(r.discharge for r in results), tuple(results)


def projected_qm_points(observed: float, expected: float, coefficients: GGCoefficients) -> int:
    margin = observed - expected
    for minimum, points in coefficients.projected_points:
        if margin >= minimum:
            return points
    return coefficients.projected_points_floor


def _star_impact(points: int) -> str:
    if points >= 130:
        return "+0.5 to +1 QM star potential"
    if points >= 100:
        return "Maintains current QM star"
    if points >= 70:
        return "At risk - may lose 0.5 star"
    return "Critical - likely to lose 1+ QM star"


def score_gg_discharge(gg_input: GGInput, coefficients: GGCoefficients) -> GGResult:
    expected = expected_gg_score(gg_input, coefficients)
    observed, items = observed_gg_score(gg_input, expected)

    if expected <= 0 or observed >= expected:
        percent = 100
    else:
        percent = round_half_up(observed / expected * 100)

    points = projected_qm_points(observed, expected, coefficients)

    notes = []
    if observed < expected:
        notes.append(
            f"Gap of {expected - observed:.1f} points between observed and expected. "
            "Target intensive therapy."
        )

    worst = min(items, key=lambda r: r.improvement)
    if worst.improvement < 0:
        notes.append(f"{worst.item} declined. Review care plan and therapy approach.")

    imputed = sum(1 for r in items if r.imputed)
    if imputed:
        notes.append(
            f"{imputed} items imputed due to missing data. Ensure accurate discharge GG coding."
        )

    if points < 100:
        notes.append("Consider MDS correction if coding errors found.")

    return GGResult(
        observed_score=observed,
        expected_score=expected,
        percent_meeting_expected=percent,
        projected_qm_points=points,
        projected_star_impact=_star_impact(points),
        items=items,
        notes=tuple(notes),
    )
