from dataclasses import replace
from datetime import date

from fivestar.core.schema import (
    HealthInspectionRecord,
    LongStayMeasures,
    QualityMeasureSet,
    StaffingMetrics,
)
from fivestar.narrative import summarize_facility


def test_struggling_facility_summary(facility, tables):
    struggling = replace(
        facility,
        overall_rating=2,
        health_inspection_rating=2,
        staffing_rating=4,
        quality_measure_rating=5,
        abuse_icon=True,
    )
    staffing = StaffingMetrics(total_nurse_hprd=4.2, rn_turnover_rate=20.0)
    qm = QualityMeasureSet(
        long_stay=LongStayMeasures(percent_antipsychotic_meds=6.0, percent_with_flu_vaccine=85.0)
    )
    survey = HealthInspectionRecord(
        severity_counts={"D": 10, "G": 2},
        national_avg_deficiencies=8.5,
        fine_amount=5000.0,
    )

    summary = summarize_facility(struggling, [survey], staffing, qm, tables)

    assert "Low overall rating requires immediate attention" in summary.critical_issues
    assert "Strong staffing levels" in summary.strengths
    assert "Exceeds recommended staffing levels" in summary.strengths
    assert "Low RN turnover indicates stable leadership" in summary.strengths
    assert "Low antipsychotic use - good dementia care practices" in summary.strengths
    assert "Increasing flu vaccination rate is easy improvement" in summary.quick_wins
    assert "2 severe deficiencies must be addressed immediately" in summary.critical_issues
    assert "$5,000 in fines indicates serious issues" in summary.critical_issues
    assert "Abuse icon - investigate and address immediately" in summary.critical_issues
    assert "Fewer deficiencies than national average" not in summary.strengths


def test_ratings_only_summary(facility):
    summary = summarize_facility(facility)

    assert summary.strengths == []
    assert summary.critical_issues == []
    assert summary.quick_wins == []


def test_engine_summary_uses_engine_tables(engine, five_star_facility, clean_inspection):
    summary = engine.summarize(five_star_facility, health_inspections=[clean_inspection])

    assert "Strong overall rating" in summary.strengths
    assert "Fewer deficiencies than national average" in summary.strengths


def test_strength_lines_use_their_own_thresholds(facility, tables):
    staffing = StaffingMetrics(total_nurse_hprd=3.9)
    qm = QualityMeasureSet(long_stay=LongStayMeasures(percent_antipsychotic_meds=11.0))

    summary = summarize_facility(facility, staffing=staffing, quality_measures=qm, tables=tables)

    assert "Exceeds recommended staffing levels" not in summary.strengths
    assert "Low antipsychotic use - good dementia care practices" not in summary.strengths
    assert summary.quick_wins == []


def test_rn_turnover_critical_threshold(facility, tables):
    staffing = StaffingMetrics(rn_turnover_rate=55.0)

    default = summarize_facility(facility, staffing=staffing, tables=tables)
    strict = replace(tables, staffing_rules=replace(tables.staffing_rules, rn_turnover_critical=50.0))
    flagged = summarize_facility(facility, staffing=staffing, tables=strict)

    assert "High RN turnover destabilizes care quality" not in default.critical_issues
    assert "High RN turnover destabilizes care quality" in flagged.critical_issues


def test_summary_reads_newest_survey(facility, tables):
    older = HealthInspectionRecord(
        survey_date=date(2021, 6, 1), severity_counts={"G": 3}, fine_amount=90000.0
    )
    newer = HealthInspectionRecord(
        survey_date=date(2024, 5, 20), severity_counts={"D": 2}, national_avg_deficiencies=8.5
    )

    summary = summarize_facility(facility, [older, newer], tables=tables)

    assert "Fewer deficiencies than national average" in summary.strengths
    assert summary.critical_issues == []
