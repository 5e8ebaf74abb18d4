import logging
from collections import Counter
from typing import Iterable, Optional, Sequence

from fivestar.core.schema import DeficiencyRecord
from fivestar.core.thresholds import DeficiencyPointMatrix

logger = logging.getLogger(__name__)


def deficiency_points(deficiency: DeficiencyRecord, matrix: DeficiencyPointMatrix) -> int:
    """Scope/severity -> points. Unresolvable citations score 0."""
    code = deficiency.resolved_code()
    scope = deficiency.resolved_scope()
    if code is None or scope is None:
        logger.warning("Cannot resolve scope/severity for tag %s; scoring 0", deficiency.tag)
        return 0

    points = matrix.points_for(code, scope)
    return points if points is not None else 0


def has_repeat_tags(deficiencies: Iterable[DeficiencyRecord]) -> bool:
    counts = Counter(d.tag.strip().upper() for d in deficiencies if d.tag and d.tag.strip())
    return any(count > 1 for count in counts.values())


def health_inspection_points(
    deficiencies: Sequence[DeficiencyRecord],
    matrix: DeficiencyPointMatrix,
    repeat_multiplier: float = 1.0,
) -> float:
    """
    Sum of matrix points over one survey's citations.

    When the same tag is cited more than once the total is scaled by
    ``repeat_multiplier``.
    """
    total = sum(deficiency_points(d, matrix) for d in deficiencies or ())

    if repeat_multiplier and repeat_multiplier > 1.0 and has_repeat_tags(deficiencies or ()):
        return total * repeat_multiplier
    return float(total)


def cycle_weighted_score(
    cycle_scores: Sequence[Optional[float]],
    weights: Sequence[float] = (0.75, 0.25),
) -> Optional[float]:
    """
    Weighted health inspection score over survey cycles, most recent
    first. Missing cycles are dropped and the remaining weights
    renormalised; None when no cycle has a score.
    """
    pairs = [
        (score, weight)
        for score, weight in zip(cycle_scores, weights)
        if score is not None and score >= 0
    ]
    weight_total = sum(weight for _, weight in pairs)
    if not pairs or weight_total <= 0:
        return None
    return sum(score * weight for score, weight in pairs) / weight_total
