from dataclasses import replace
from datetime import date

import pytest

from fivestar.core.schema import (
    DeficiencyRecord,
    HealthInspectionRecord,
    LongStayMeasures,
    QualityMeasureSet,
    ShortStayMeasures,
    StaffingMetrics,
    most_recent_first,
)
from fivestar.rules import (
    generate_health_recommendations,
    generate_quality_recommendations,
    generate_staffing_recommendations,
)
from fivestar.rules.common import cost_for_fte, escalate, make_id
from fivestar.rules.health import most_frequent_category


def _by_id(recs):
    return {rec.id: rec for rec in recs}


# -------------------------------------------------
# Staffing
# -------------------------------------------------

def test_low_staffing_targets_next_level(facility, tables):
    staffing = StaffingMetrics(total_nurse_hprd=3.00, rn_hprd=0.40)

    recs = _by_id(generate_staffing_recommendations(staffing, facility, tables))

    assert set(recs) == {"staffing-total-hprd", "staffing-rn-hprd"}
    assert recs["staffing-total-hprd"].target_value == 3.35
    assert recs["staffing-total-hprd"].estimated_cost == "medium"
    assert recs["staffing-rn-hprd"].target_value == 0.48
    assert recs["staffing-rn-hprd"].estimated_cost == "high"


def test_staffing_priority_follows_domain_rating(facility, tables):
    staffing = StaffingMetrics(total_nurse_hprd=3.00)
    weak = replace(facility, staffing_rating=2)

    assert generate_staffing_recommendations(staffing, facility, tables)[0].priority == "medium"
    assert generate_staffing_recommendations(staffing, weak, tables)[0].priority == "high"


def test_weekend_and_turnover_checks(facility, tables):
    staffing = StaffingMetrics(
        total_nurse_hprd=4.20,
        rn_hprd=0.80,
        weekend_total_nurse_hprd=3.50,
        rn_turnover_rate=55.0,
        total_nurse_turnover_rate=61.0,
    )

    recs = _by_id(generate_staffing_recommendations(staffing, facility, tables))

    assert list(recs) == ["staffing-weekend", "staffing-turnover-rn", "staffing-turnover-total"]
    assert recs["staffing-weekend"].target_value == pytest.approx(3.99)
    assert recs["staffing-turnover-rn"].target_value == 30.0
    assert recs["staffing-turnover-total"].target_value == 40.0


def test_turnover_limits_are_exclusive(facility, tables):
    staffing = StaffingMetrics(rn_turnover_rate=50.0, total_nurse_turnover_rate=60.0)
    assert generate_staffing_recommendations(staffing, facility, tables) == []


def test_case_mix_adjusts_total_hprd(facility, tables):
    adjusted = replace(tables, national_average_cmi=1.0)
    staffing = StaffingMetrics(total_nurse_hprd=4.20, case_mix_index=1.25)

    recs = _by_id(generate_staffing_recommendations(staffing, facility, adjusted))

    # 4.20 / 1.25 = 3.36 -> level 3, next breakpoint 3.88
    assert recs["staffing-total-hprd"].current_value == 3.36
    assert recs["staffing-total-hprd"].target_value == 3.88


# -------------------------------------------------
# Quality measures
# -------------------------------------------------

def test_high_antipsychotic_use(facility, tables):
    qm = QualityMeasureSet(long_stay=LongStayMeasures(percent_antipsychotic_meds=22))

    recs = generate_quality_recommendations(qm, facility, tables)

    assert len(recs) == 1
    assert recs[0].id == "qm-antipsychotic"
    assert recs[0].priority == "high"
    assert recs[0].current_value == 22
    assert recs[0].target_value == 12


def test_measure_at_average_does_not_fire(facility, tables):
    qm = QualityMeasureSet(long_stay=LongStayMeasures(percent_antipsychotic_meds=15))
    assert generate_quality_recommendations(qm, facility, tables) == []


def test_falls_escalate_with_low_rating(facility, tables):
    qm = QualityMeasureSet(long_stay=LongStayMeasures(percent_with_falls=27))

    assert generate_quality_recommendations(qm, facility, tables)[0].priority == "medium"

    weak = replace(facility, quality_measure_rating=2)
    assert generate_quality_recommendations(qm, weak, tables)[0].priority == "high"


def test_flu_vaccine_fires_when_low(facility, tables):
    low = QualityMeasureSet(long_stay=LongStayMeasures(percent_with_flu_vaccine=85))
    very_low = QualityMeasureSet(long_stay=LongStayMeasures(percent_with_flu_vaccine=70))
    fine = QualityMeasureSet(long_stay=LongStayMeasures(percent_with_flu_vaccine=96))

    recs = generate_quality_recommendations(low, facility, tables)
    assert [r.id for r in recs] == ["qm-flu-vaccine"]
    assert recs[0].priority == "low"
    assert recs[0].target_value == 95

    assert generate_quality_recommendations(very_low, facility, tables)[0].priority == "high"
    assert generate_quality_recommendations(fine, facility, tables) == []


def test_short_stay_rehospitalization(facility, tables):
    qm = QualityMeasureSet(short_stay=ShortStayMeasures(percent_rehospitalized=24.0))

    recs = generate_quality_recommendations(qm, facility, tables)

    assert [r.id for r in recs] == ["qm-rehospitalization"]
    assert recs[0].target_value == 18


# -------------------------------------------------
# Health inspections
# -------------------------------------------------

def test_repeat_tag_is_flagged(facility, tables):
    citations = [DeficiencyRecord(tag="F689"), DeficiencyRecord(tag="F689")]

    recs = generate_health_recommendations([], citations, facility, tables)

    assert [r.id for r in recs] == ["hi-category-f689"]
    assert recs[0].current_value == 2


def test_single_citation_is_not_a_pattern(facility, tables):
    citations = [DeficiencyRecord(tag="F689"), DeficiencyRecord(tag="F880")]
    assert generate_health_recommendations([], citations, facility, tables) == []


@pytest.mark.parametrize("rating", [1, 3, 5])
def test_severe_deficiency_always_high(facility, tables, rating):
    survey = HealthInspectionRecord(severity_counts={"K": 1})
    rated = replace(facility, health_inspection_rating=rating)

    recs = _by_id(generate_health_recommendations([survey], [], rated, tables))

    assert recs["hi-severe-deficiencies"].priority == "high"
    assert recs["hi-severe-deficiencies"].current_value == 1


def test_severe_count_from_citations(facility, tables):
    citations = [DeficiencyRecord(tag="F600", category="Abuse", severity_code="G")]

    recs = _by_id(generate_health_recommendations([], citations, facility, tables))

    assert "hi-severe-deficiencies" in recs


def test_deficiency_count_and_fines(facility, tables):
    survey = HealthInspectionRecord(
        total_deficiencies=12,
        national_avg_deficiencies=8.5,
        fine_amount=12500.0,
    )

    recs = _by_id(generate_health_recommendations([survey], [], facility, tables))

    assert recs["hi-deficiency-count"].target_value == 8
    assert recs["hi-deficiency-count"].priority == "medium"
    assert recs["hi-fines"].priority == "high"
    assert recs["hi-fines"].current_value == 12500.0


def test_only_latest_survey_is_checked(facility, tables):
    latest = HealthInspectionRecord(total_deficiencies=3, national_avg_deficiencies=8.5)
    older = HealthInspectionRecord(total_deficiencies=20, national_avg_deficiencies=8.5, fine_amount=900)

    assert generate_health_recommendations([latest, older], [], facility, tables) == []


def test_category_tie_goes_to_first_seen():
    citations = [
        DeficiencyRecord(tag="F880", category="Infection Control"),
        DeficiencyRecord(tag="F689", category="Quality of Care"),
        DeficiencyRecord(tag="F881", category="Infection Control"),
        DeficiencyRecord(tag="F684", category="Quality of Care"),
    ]
    assert most_frequent_category(citations) == ("Infection Control", 2)


# -------------------------------------------------
# Helpers
# -------------------------------------------------

def test_rule_helpers():
    assert escalate("low") == "high"
    assert escalate("high", to="medium") == "high"
    assert cost_for_fte(6.0, {"high": 5.0, "medium": 2.0}) == "high"
    assert cost_for_fte(1.0, {"high": 5.0, "medium": 2.0}) == "low"
    assert make_id("hi", "category", "Infection Control") == "hi-category-infection-control"


def test_newest_survey_drives_checks_regardless_of_order(facility, tables):
    older = HealthInspectionRecord(
        survey_date=date(2021, 6, 1), severity_counts={"K": 1}, fine_amount=90000.0
    )
    newer = HealthInspectionRecord(survey_date=date(2024, 5, 20), severity_counts={"D": 2})

    assert generate_health_recommendations([older, newer], [], facility, tables) == []


def test_undated_surveys_sort_last(facility, tables):
    undated = HealthInspectionRecord(severity_counts={"K": 1})
    dated = HealthInspectionRecord(survey_date=date(2023, 1, 10), severity_counts={"D": 1})

    assert most_recent_first([undated, dated]) == [dated, undated]
    assert generate_health_recommendations([undated, dated], [], facility, tables) == []
