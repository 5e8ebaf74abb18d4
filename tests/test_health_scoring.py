import pytest

from fivestar.core.errors import ThresholdTableError
from fivestar.core.schema import DeficiencyRecord, HealthInspectionRecord
from fivestar.core.thresholds import DeficiencyPointMatrix
from fivestar.scoring import cycle_weighted_score, deficiency_points, health_inspection_points


def test_matrix_lookup_by_letter(tables):
    matrix = tables.health.matrix
    assert deficiency_points(DeficiencyRecord(tag="F880", severity_code="D"), matrix) == 4
    assert deficiency_points(DeficiencyRecord(tag="F600", severity_code="K"), matrix) == 150
    assert deficiency_points(DeficiencyRecord(tag="F550", severity_code="b"), matrix) == 0


def test_code_derived_from_scope_and_severity(tables):
    citation = DeficiencyRecord(tag="F689", severity="Immediate Jeopardy", scope="Isolated")
    assert citation.resolved_code() == "J"
    assert deficiency_points(citation, tables.health.matrix) == 50

    harm = DeficiencyRecord(tag="F686", severity="Actual harm", scope="widespread")
    assert harm.resolved_code() == "I"


def test_unresolvable_citation_scores_zero(tables):
    citation = DeficiencyRecord(tag="F999", severity_code="Z")
    assert deficiency_points(citation, tables.health.matrix) == 0


def test_survey_points_sum(tables):
    citations = [
        DeficiencyRecord(tag="F880", severity_code="D"),
        DeficiencyRecord(tag="F600", severity_code="K"),
    ]
    assert health_inspection_points(citations, tables.health.matrix) == 154


def test_repeat_tag_multiplier(tables):
    citations = [
        DeficiencyRecord(tag="F689", severity_code="G"),
        DeficiencyRecord(tag="F689", severity_code="G"),
    ]
    matrix = tables.health.matrix
    assert health_inspection_points(citations, matrix) == 40
    assert health_inspection_points(
        citations, matrix, tables.health.repeat_multiplier
    ) == pytest.approx(60)


def test_no_multiplier_without_repeats(tables):
    citations = [
        DeficiencyRecord(tag="F689", severity_code="G"),
        DeficiencyRecord(tag="F880", severity_code="G"),
    ]
    assert health_inspection_points(citations, tables.health.matrix, 1.5) == 40


def test_empty_survey_scores_zero(tables):
    assert health_inspection_points([], tables.health.matrix, 1.5) == 0


def test_cycle_weights(tables):
    assert cycle_weighted_score([100, 40], tables.health.cycle_weights) == pytest.approx(85)
    assert cycle_weighted_score([100, None]) == pytest.approx(100)
    assert cycle_weighted_score([]) is None


def test_matrix_must_grow_with_severity():
    rows = {letter: {"isolated": 1, "pattern": 2, "widespread": 3} for letter in "ABCDEFGHIJKL"}
    rows["E"] = {"isolated": 0, "pattern": 0, "widespread": 0}
    with pytest.raises(ThresholdTableError):
        DeficiencyPointMatrix.from_mapping(rows)


def test_matrix_requires_every_letter():
    rows = {letter: {"isolated": 1, "pattern": 2, "widespread": 3} for letter in "ABCDEFGHIJK"}
    with pytest.raises(ThresholdTableError):
        DeficiencyPointMatrix.from_mapping(rows)


def test_inspection_record_from_flat_columns():
    record = HealthInspectionRecord.from_dict({
        "surveyDate": "2024-03-18",
        "deficiencySeverityLevelD": 3,
        "deficiencySeverityLevelG": 1,
        "fineAmount": "12500",
        "nationalAvgDeficiencies": 8.9,
    })
    assert record.survey_date.isoformat() == "2024-03-18"
    assert record.deficiency_total() == 4
    assert record.severe_count() == 1
    assert record.fine_amount == 12500.0


def test_deficiency_record_from_dict():
    citation = DeficiencyRecord.from_dict({
        "deficiencyTag": "F689",
        "deficiencyCategory": "Quality of Care",
        "scopeSeverityCode": "g",
        "surveyDate": "03/18/2024",
        "isCorrected": "Y",
    })
    assert citation.tag == "F689"
    assert citation.resolved_code() == "G"
    assert citation.resolved_scope() == "isolated"
    assert citation.survey_date.year == 2024
    assert citation.is_corrected
