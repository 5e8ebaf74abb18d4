from fivestar.core.ranker import rank_recommendations
from fivestar.core.schema import Recommendation


def _rec(rec_id, priority, impact, cost):
    return Recommendation(
        id=rec_id,
        category="staffing",
        priority=priority,
        title=rec_id,
        description="",
        current_value=0,
        target_value=0,
        estimated_impact=impact,
        estimated_cost=cost,
        timeframe="short_term",
    )


def test_priority_then_impact_then_cost():
    recs = [
        _rec("low", "low", 3.0, "low"),
        _rec("medium-big", "medium", 1.0, "high"),
        _rec("high-small", "high", 0.5, "low"),
        _rec("high-big-costly", "high", 2.0, "high"),
        _rec("high-big-cheap", "high", 2.0, "low"),
    ]

    ranked = [r.id for r in rank_recommendations(recs)]

    assert ranked == ["high-big-cheap", "high-big-costly", "high-small", "medium-big", "low"]


def test_full_ties_keep_input_order():
    recs = [_rec(f"r{i}", "medium", 0.5, "medium") for i in range(6)]
    assert [r.id for r in rank_recommendations(recs)] == [f"r{i}" for i in range(6)]


def test_empty_input():
    assert rank_recommendations([]) == []
