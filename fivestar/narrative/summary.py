# fivestar/narrative/summary.py
from typing import Optional, Sequence

from fivestar.core.schema import (
    FacilitySummary,
    Facility,
    HealthInspectionRecord,
    QualityMeasureSet,
    StaffingMetrics,
    most_recent_first,
)
from fivestar.core.thresholds import ThresholdTables, default_tables
from fivestar.scoring.quality import _clamp_percent, is_worse_than


def _rating_lines(facility: Facility, summary: FacilitySummary) -> None:
    if facility.overall_rating >= 4:
        summary.strengths.append("Strong overall rating")
    if facility.overall_rating <= 2:
        summary.critical_issues.append("Low overall rating requires immediate attention")

    if facility.health_inspection_rating >= 4:
        summary.strengths.append("Excellent health inspection performance")
    elif facility.health_inspection_rating <= 2:
        summary.critical_issues.append(
            "Poor health inspection rating - focus on survey readiness"
        )

    if facility.staffing_rating >= 4:
        summary.strengths.append("Strong staffing levels")
    elif facility.staffing_rating <= 2:
        summary.weaknesses.append("Staffing levels below CMS thresholds")

    if facility.quality_measure_rating >= 4:
        summary.strengths.append("Good clinical quality measures")
    elif facility.quality_measure_rating <= 2:
        summary.weaknesses.append("Quality measures need improvement")


def _staffing_lines(staffing: StaffingMetrics, tables: ThresholdTables, summary: FacilitySummary) -> None:
    rules = tables.staffing_rules
    if staffing.rn_turnover_rate is not None:
        if staffing.rn_turnover_rate < rules.rn_turnover_target:
            summary.strengths.append("Low RN turnover indicates stable leadership")
        elif staffing.rn_turnover_rate > rules.rn_turnover_critical:
            summary.critical_issues.append("High RN turnover destabilizes care quality")

    hprd = staffing.total_nurse_hprd
    if hprd is not None and hprd >= tables.summary.strong_total_hprd:
        summary.strengths.append("Exceeds recommended staffing levels")


def _quality_lines(qm: QualityMeasureSet, tables: ThresholdTables, summary: FacilitySummary) -> None:
    antipsychotic = _clamp_percent(qm.value_for("antipsychotic"))
    bench = tables.benchmark("antipsychotic")
    if antipsychotic is not None and bench is not None:
        if is_worse_than(bench, tables.summary.low_antipsychotic, antipsychotic):
            summary.strengths.append("Low antipsychotic use - good dementia care practices")
        elif is_worse_than(bench, antipsychotic, bench.average):
            summary.quick_wins.append("Antipsychotic reduction is a high-visibility quick win")

    quick_wins = (
        ("flu_vaccine", "Increasing flu vaccination rate is easy improvement"),
        ("catheter", "Catheter removal program can improve QMs quickly"),
    )
    for measure, line in quick_wins:
        value = _clamp_percent(qm.value_for(measure))
        bench = tables.benchmark(measure)
        if value is not None and bench is not None and is_worse_than(bench, value, bench.average):
            summary.quick_wins.append(line)


def _inspection_lines(latest: HealthInspectionRecord, summary: FacilitySummary) -> None:
    national = latest.national_avg_deficiencies
    if national is not None and latest.deficiency_total() < national:
        summary.strengths.append("Fewer deficiencies than national average")

    severe = latest.severe_count()
    if severe > 0:
        summary.critical_issues.append(
            f"{severe} severe deficiencies must be addressed immediately"
        )

    if latest.fine_amount > 0:
        summary.critical_issues.append(
            f"${latest.fine_amount:,.0f} in fines indicates serious issues"
        )


def summarize_facility(
    facility: Facility,
    health_inspections: Optional[Sequence[HealthInspectionRecord]] = None,
    staffing: Optional[StaffingMetrics] = None,
    quality_measures: Optional[QualityMeasureSet] = None,
    tables: Optional[ThresholdTables] = None,
) -> FacilitySummary:
    """
    Plain-language snapshot: strengths, weaknesses, critical issues and
    quick wins. Sections with no data are simply left out.
    """
    tables = tables or default_tables()
    summary = FacilitySummary()

    _rating_lines(facility, summary)

    if staffing is not None:
        _staffing_lines(staffing, tables, summary)

    if quality_measures is not None:
        _quality_lines(quality_measures, tables, summary)

    surveys = most_recent_first(health_inspections)
    if surveys:
        _inspection_lines(surveys[0], summary)

    if facility.abuse_icon:
        summary.critical_issues.append("Abuse icon - investigate and address immediately")

    if facility.is_special_focus:
        summary.critical_issues.append(
            "Special Focus Facility status requires intensive improvement plan"
        )

    return summary
