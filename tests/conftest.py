import pytest

from fivestar.core.schema import (
    DeficiencyRecord,
    Facility,
    HealthInspectionRecord,
    LongStayMeasures,
    QualityMeasureSet,
    ShortStayMeasures,
    StaffingMetrics,
)
from fivestar.core.thresholds import default_tables
from fivestar.engine import RecommendationEngine


@pytest.fixture
def tables():
    return default_tables()


@pytest.fixture
def engine(tables):
    return RecommendationEngine(tables)


@pytest.fixture
def facility():
    """
    Mid-pack facility: 3 stars everywhere, 100 residents.
    """
    return Facility(provider_id="015009", name="Sample Care Center", beds=120, residents=100)


@pytest.fixture
def five_star_facility():
    return Facility(
        provider_id="015010",
        name="Top Rated Nursing",
        residents=80,
        overall_rating=5,
        health_inspection_rating=5,
        staffing_rating=5,
        quality_measure_rating=5,
    )


@pytest.fixture
def strong_staffing():
    return StaffingMetrics(
        total_nurse_hprd=4.30,
        rn_hprd=0.85,
        weekend_total_nurse_hprd=4.10,
        rn_turnover_rate=22.0,
        total_nurse_turnover_rate=35.0,
    )


@pytest.fixture
def strong_quality():
    return QualityMeasureSet(
        long_stay=LongStayMeasures(
            percent_antipsychotic_meds=6.0,
            percent_with_pressure_ulcers=2.0,
            percent_with_falls=15.0,
            percent_with_catheter=0.5,
            percent_with_flu_vaccine=99.0,
        ),
        short_stay=ShortStayMeasures(percent_rehospitalized=12.0),
    )


@pytest.fixture
def clean_inspection():
    return HealthInspectionRecord(
        severity_counts={"D": 2},
        national_avg_deficiencies=8.5,
    )


@pytest.fixture
def repeat_citations():
    return [
        DeficiencyRecord(tag="F689", severity_code="D"),
        DeficiencyRecord(tag="F689", severity_code="E"),
        DeficiencyRecord(tag="F880", severity_code="D"),
    ]
