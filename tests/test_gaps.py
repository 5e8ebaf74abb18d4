import pytest

from fivestar.core.gaps import benchmark_gap, fte_needed, next_star_gap


def test_gap_to_next_level(tables):
    gap = next_star_gap(3.00, tables.total_hprd)

    assert gap.current_star_level == 2
    assert gap.target_star_level == 3
    assert gap.threshold == 3.35
    assert gap.gap == pytest.approx(0.35)


def test_gap_from_level_one(tables):
    gap = next_star_gap(0.40, tables.rn_hprd)

    assert gap.target_star_level == 2
    assert gap.threshold == 0.48
    assert gap.gap == pytest.approx(0.08)


@pytest.mark.parametrize("value", [4.09, 4.5, 12.0])
def test_no_gap_at_top_level(tables, value):
    assert next_star_gap(value, tables.total_hprd) is None


def test_missing_value_points_at_level_two(tables):
    gap = next_star_gap(None, tables.total_hprd)
    assert gap.target_star_level == 2
    assert gap.gap == pytest.approx(2.82)


def test_gap_is_always_positive(tables):
    for cents in range(0, 409):
        gap = next_star_gap(cents / 100, tables.total_hprd)
        assert gap is not None and gap.gap > 0


def test_fte_needed():
    assert fte_needed(0.35, 100) == pytest.approx(4.375)
    assert fte_needed(0.35, 0) == 0.0
    assert fte_needed(-1.0, 100) == 0.0


def test_benchmark_gap(tables):
    antipsychotic = tables.benchmark("antipsychotic")
    flu = tables.benchmark("flu_vaccine")

    assert benchmark_gap(antipsychotic, 22.0) == pytest.approx(10.0)
    assert benchmark_gap(antipsychotic, 11.0) is None
    assert benchmark_gap(flu, 85.0) == pytest.approx(10.0)
    assert benchmark_gap(flu, None) is None
