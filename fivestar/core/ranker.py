from typing import Iterable, List

from fivestar.core.schema import Recommendation

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
COST_ORDER = {"low": 0, "medium": 1, "high": 2}


def _rank_key(rec: Recommendation):
    return (
        PRIORITY_ORDER.get(rec.priority, len(PRIORITY_ORDER)),
        -rec.estimated_impact,
        COST_ORDER.get(rec.estimated_cost, len(COST_ORDER)),
    )


def rank_recommendations(recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    """
    Priority (high first), then impact (largest first), then cost
    (cheapest first). ``sorted`` is stable, so full ties keep their
    generation order.
    """
    return sorted(recommendations, key=_rank_key)
