"""
Record schemas for the rating engine.

Every record is a frozen value object. ``from_dict`` constructors accept
the JSON-like rows handed over by the persistence layer (camelCase or
snake_case keys) and default anything missing at this boundary, so the
scoring code never has to guess.
"""

import math
from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dateutil import parser as date_parser

from fivestar.core.thresholds import SCOPES, SEVERE_LETTERS, SEVERITY_LETTERS


HEALTH_INSPECTION = "health_inspection"
STAFFING = "staffing"
QUALITY_MEASURES = "quality_measures"
CATEGORIES = (HEALTH_INSPECTION, STAFFING, QUALITY_MEASURES)

PRIORITIES = ("high", "medium", "low")
COST_TIERS = ("low", "medium", "high")
TIMEFRAMES = ("immediate", "short_term", "long_term")


# -------------------------------------------------
# BOUNDARY COERCION HELPERS
# -------------------------------------------------
def _norm(key: str) -> str:
    return key.replace("_", "").lower()


def _lookup(data: Dict[str, Any], *names: str) -> Any:
    """Find the first of ``names`` in ``data``, ignoring case and underscores."""
    index = {_norm(k): v for k, v in data.items()}
    for name in names:
        value = index.get(_norm(name))
        if value is not None:
            return value
    return None


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "y", "yes", "true", "t"}
    return bool(value)


def _to_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError):
        return None


def _to_rating(value: Any, default: int = 3) -> int:
    rating = _to_int(value)
    if rating is None:
        return default
    return max(1, min(5, rating))


# =====================================================
# FACILITY
# =====================================================

@dataclass(frozen=True)
class Facility:
    provider_id: str
    name: str = ""
    beds: Optional[int] = None
    residents: int = 0
    ownership_type: Optional[str] = None
    state: Optional[str] = None
    is_special_focus: bool = False
    abuse_icon: bool = False
    overall_rating: int = 3
    health_inspection_rating: int = 3
    staffing_rating: int = 3
    quality_measure_rating: int = 3
    total_fines: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Facility":
        return cls(
            provider_id=str(_lookup(data, "provider_id", "federalProviderNumber", "ccn") or ""),
            name=str(_lookup(data, "name", "providerName") or ""),
            beds=_to_int(_lookup(data, "beds", "numberOfCertifiedBeds")),
            residents=_to_int(_lookup(data, "residents", "numberOfResidents")) or 0,
            ownership_type=_lookup(data, "ownership_type"),
            state=_lookup(data, "state"),
            is_special_focus=_to_bool(_lookup(data, "is_special_focus", "specialFocus")),
            abuse_icon=_to_bool(_lookup(data, "abuse_icon")),
            overall_rating=_to_rating(_lookup(data, "overall_rating")),
            health_inspection_rating=_to_rating(_lookup(data, "health_inspection_rating")),
            staffing_rating=_to_rating(_lookup(data, "staffing_rating")),
            quality_measure_rating=_to_rating(_lookup(data, "quality_measure_rating", "qm_rating")),
            total_fines=_to_float(_lookup(data, "total_fines")),
        )

    def rating_for(self, category: str) -> int:
        rating = {
            HEALTH_INSPECTION: self.health_inspection_rating,
            STAFFING: self.staffing_rating,
            QUALITY_MEASURES: self.quality_measure_rating,
        }.get(category, self.overall_rating)
        return max(1, min(5, int(rating)))


# =====================================================
# STAFFING
# =====================================================

@dataclass(frozen=True)
class StaffingMetrics:
    total_nurse_hprd: Optional[float] = None
    rn_hprd: Optional[float] = None
    lpn_hprd: Optional[float] = None
    cna_hprd: Optional[float] = None
    weekend_total_nurse_hprd: Optional[float] = None
    weekend_rn_hprd: Optional[float] = None
    rn_turnover_rate: Optional[float] = None
    total_nurse_turnover_rate: Optional[float] = None
    admin_turnover_rate: Optional[float] = None
    state_avg_total_hprd: Optional[float] = None
    national_avg_total_hprd: Optional[float] = None
    case_mix_index: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaffingMetrics":
        return cls(**{
            f.name: _to_float(_lookup(data, f.name))
            for f in fields(cls)
        })


# =====================================================
# QUALITY MEASURES
# =====================================================

@dataclass(frozen=True)
class LongStayMeasures:
    percent_with_pressure_ulcers: Optional[float] = None
    percent_physically_restrained: Optional[float] = None
    percent_with_urinary_infection: Optional[float] = None
    percent_with_increased_help_with_adls: Optional[float] = None
    percent_with_falls: Optional[float] = None
    percent_with_major_falls: Optional[float] = None
    percent_with_depression_symptoms: Optional[float] = None
    percent_antipsychotic_meds: Optional[float] = None
    percent_with_catheter: Optional[float] = None
    percent_with_weight_loss: Optional[float] = None
    percent_with_flu_vaccine: Optional[float] = None
    percent_with_pneumonia_vaccine: Optional[float] = None


@dataclass(frozen=True)
class ShortStayMeasures:
    percent_rehospitalized: Optional[float] = None
    percent_with_emergency_visit: Optional[float] = None
    percent_with_pressure_ulcers: Optional[float] = None
    percent_with_new_or_worsened_pressure_ulcers: Optional[float] = None
    percent_improved_function: Optional[float] = None
    percent_discharged_to_community: Optional[float] = None
    percent_new_antipsychotic: Optional[float] = None


# measure key -> (stay, field)
MEASURE_FIELDS: Dict[str, Tuple[str, str]] = {
    "antipsychotic": ("long_stay", "percent_antipsychotic_meds"),
    "pressure_ulcers": ("long_stay", "percent_with_pressure_ulcers"),
    "falls": ("long_stay", "percent_with_falls"),
    "major_falls": ("long_stay", "percent_with_major_falls"),
    "catheter": ("long_stay", "percent_with_catheter"),
    "uti": ("long_stay", "percent_with_urinary_infection"),
    "restraints": ("long_stay", "percent_physically_restrained"),
    "adl_decline": ("long_stay", "percent_with_increased_help_with_adls"),
    "depression": ("long_stay", "percent_with_depression_symptoms"),
    "weight_loss": ("long_stay", "percent_with_weight_loss"),
    "flu_vaccine": ("long_stay", "percent_with_flu_vaccine"),
    "rehospitalization": ("short_stay", "percent_rehospitalized"),
    "discharge_to_community": ("short_stay", "percent_discharged_to_community"),
    "functional_improvement": ("short_stay", "percent_improved_function"),
    "new_antipsychotic": ("short_stay", "percent_new_antipsychotic"),
}


@dataclass(frozen=True)
class QualityMeasureSet:
    long_stay: LongStayMeasures = field(default_factory=LongStayMeasures)
    short_stay: ShortStayMeasures = field(default_factory=ShortStayMeasures)
    state_averages: Dict[str, float] = field(default_factory=dict)
    national_averages: Dict[str, float] = field(default_factory=dict)
    qm_points: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QualityMeasureSet":
        long_raw = _lookup(data, "long_stay") or {}
        short_raw = _lookup(data, "short_stay") or {}
        aliases = {"percent_discharged_to_community": "percentDischaredToCommunity"}

        def _section(section_cls, raw):
            return section_cls(**{
                f.name: _to_float(_lookup(raw, f.name, aliases.get(f.name, f.name)))
                for f in fields(section_cls)
            })

        def _averages(raw):
            return {k: v for k, v in ((k, _to_float(v)) for k, v in (raw or {}).items()) if v is not None}

        return cls(
            long_stay=_section(LongStayMeasures, long_raw),
            short_stay=_section(ShortStayMeasures, short_raw),
            state_averages=_averages(_lookup(data, "state_averages")),
            national_averages=_averages(_lookup(data, "national_averages")),
            qm_points=_to_float(_lookup(data, "qm_points", "overall_qm_score")),
        )

    def value_for(self, measure: str) -> Optional[float]:
        location = MEASURE_FIELDS.get(measure)
        if location is None:
            return None
        stay, attr = location
        return getattr(getattr(self, stay), attr)


# =====================================================
# HEALTH INSPECTIONS
# =====================================================

@dataclass(frozen=True)
class HealthInspectionRecord:
    survey_date: Optional[date] = None
    survey_type: str = "Standard"
    severity_counts: Dict[str, int] = field(default_factory=dict)
    total_deficiencies: Optional[int] = None
    fine_amount: float = 0.0
    payment_denial_days: int = 0
    state_avg_deficiencies: Optional[float] = None
    national_avg_deficiencies: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HealthInspectionRecord":
        counts = {}
        nested = _lookup(data, "severity_counts") or {}
        for letter in SEVERITY_LETTERS:
            count = _to_int(nested.get(letter)) if nested else None
            if count is None:
                count = _to_int(_lookup(data, f"deficiencySeverityLevel{letter}"))
            if count:
                counts[letter] = max(0, count)

        return cls(
            survey_date=_to_date(_lookup(data, "survey_date")),
            survey_type=str(_lookup(data, "survey_type") or "Standard"),
            severity_counts=counts,
            total_deficiencies=_to_int(_lookup(data, "total_deficiencies")),
            fine_amount=max(0.0, _to_float(_lookup(data, "fine_amount")) or 0.0),
            payment_denial_days=max(0, _to_int(_lookup(data, "payment_denial_days")) or 0),
            state_avg_deficiencies=_to_float(_lookup(data, "state_avg_deficiencies")),
            national_avg_deficiencies=_to_float(_lookup(data, "national_avg_deficiencies")),
        )

    def deficiency_total(self) -> int:
        if self.total_deficiencies is not None:
            return self.total_deficiencies
        return sum(self.severity_counts.values())

    def severe_count(self) -> int:
        return sum(self.severity_counts.get(letter, 0) for letter in SEVERE_LETTERS)


def most_recent_first(
    inspections: Optional[Sequence[HealthInspectionRecord]],
) -> List[HealthInspectionRecord]:
    """
    Surveys ordered newest first by ``survey_date``.

    Undated surveys go last; equal dates keep their input order.
    """
    return sorted(
        inspections or (),
        key=lambda r: (r.survey_date is None, -r.survey_date.toordinal() if r.survey_date else 0),
    )


# CMS grid: rows = severity band, columns = isolated / pattern / widespread
_SEVERITY_GRID = {
    "minimal": ("A", "B", "C"),
    "potential": ("D", "E", "F"),
    "actual": ("G", "H", "I"),
    "immediate_jeopardy": ("J", "K", "L"),
}


def _severity_band(severity: Optional[str]) -> Optional[str]:
    if not severity:
        return None
    text = severity.strip().lower()
    if "jeopardy" in text or text == "ij":
        return "immediate_jeopardy"
    if "actual" in text:
        return "actual"
    if "minimal" in text and "more than" not in text:
        return "minimal"
    if "potential" in text:
        return "potential"
    return None


@dataclass(frozen=True)
class DeficiencyRecord:
    tag: str
    category: str = ""
    description: str = ""
    severity_code: Optional[str] = None
    scope: Optional[str] = None
    severity: Optional[str] = None
    survey_date: Optional[date] = None
    is_corrected: bool = False
    correction_date: Optional[date] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeficiencyRecord":
        code = _lookup(data, "severity_code", "scope_severity_code", "scopeSeverity")
        return cls(
            tag=str(_lookup(data, "tag", "deficiency_tag") or ""),
            category=str(_lookup(data, "category", "deficiency_category") or ""),
            description=str(_lookup(data, "description", "deficiency_description") or ""),
            severity_code=str(code).strip().upper() if code else None,
            scope=_lookup(data, "scope"),
            severity=_lookup(data, "severity"),
            survey_date=_to_date(_lookup(data, "survey_date")),
            is_corrected=_to_bool(_lookup(data, "is_corrected")),
            correction_date=_to_date(_lookup(data, "correction_date")),
        )

    def resolved_scope(self) -> Optional[str]:
        if self.scope and self.scope.strip().lower() in SCOPES:
            return self.scope.strip().lower()
        code = self.resolved_code(use_scope=False)
        if code:
            return SCOPES[SEVERITY_LETTERS.index(code) % 3]
        return None

    def resolved_code(self, use_scope: bool = True) -> Optional[str]:
        if self.severity_code and self.severity_code.upper() in SEVERITY_LETTERS:
            return self.severity_code.upper()
        if not use_scope:
            return None

        band = _severity_band(self.severity)
        scope = (self.scope or "").strip().lower()
        if band is None or scope not in SCOPES:
            return None
        return _SEVERITY_GRID[band][SCOPES.index(scope)]

    def grouping_key(self) -> str:
        return self.category.strip() or self.tag.strip()


# =====================================================
# RECOMMENDATION (ENGINE OUTPUT)
# =====================================================

@dataclass(frozen=True)
class Recommendation:
    id: str
    category: str
    priority: str
    title: str
    description: str
    current_value: float
    target_value: float
    estimated_impact: float
    estimated_cost: str
    timeframe: str
    action_steps: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["action_steps"] = list(self.action_steps)
        return data


@dataclass(frozen=True)
class RatingProjection:
    overall: int
    health: float
    staffing: float
    quality_measures: float
    current_overall: int
    health_improvement: float = 0.0
    staffing_improvement: float = 0.0
    quality_measures_improvement: float = 0.0
    methodology_overall: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =====================================================
# GG DISCHARGE FUNCTION
# =====================================================

# (item key, MDS item code, label)
GG_ITEMS: Tuple[Tuple[str, str, str], ...] = (
    ("eating", "GG0130A3", "Eating"),
    ("oral_hygiene", "GG0130B3", "Oral Hygiene"),
    ("toileting_hygiene", "GG0130C3", "Toileting Hygiene"),
    ("sit_to_lying", "GG0170B3", "Sit to Lying"),
    ("lying_to_sitting", "GG0170C3", "Lying to Sitting"),
    ("sit_to_stand", "GG0170D3", "Sit to Stand"),
    ("transfer", "GG0170E3", "Chair/Bed-to-Chair Transfer"),
    ("toilet_transfer", "GG0170F3", "Toilet Transfer"),
    ("walk_10ft", "GG0170G3", "Walk 10 feet"),
    ("walk_50ft", "GG0170I3", "Walk 50 feet with 2 turns"),
)


@dataclass(frozen=True)
class GGInput:
    admission: Dict[str, Any]
    discharge: Optional[Dict[str, Any]] = None
    age: Optional[float] = None
    primary_diagnosis: str = ""
    bims: Optional[int] = None
    comorbidities: Tuple[str, ...] = ()
    length_of_stay: Optional[int] = None


@dataclass(frozen=True)
class GGItemResult:
    item: str
    admission: int
    discharge: int
    imputed: bool
    improvement: int


@dataclass(frozen=True)
class GGResult:
    observed_score: int
    expected_score: float
    percent_meeting_expected: int
    projected_qm_points: int
    projected_star_impact: str
    items: Tuple[GGItemResult, ...]
    notes: Tuple[str, ...] = ()

    @property
    def imputed_count(self) -> int:
        return sum(1 for item in self.items if item.imputed)


# =====================================================
# SUMMARY
# =====================================================

@dataclass(frozen=True)
class FacilitySummary:
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    critical_issues: List[str] = field(default_factory=list)
    quick_wins: List[str] = field(default_factory=list)
