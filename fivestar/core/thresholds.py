"""
Threshold Tables
----------------
Static lookup data for the Five-Star methodology, as explicit records.

Rules:
- Built once from a config dict (defaults or YAML overrides)
- Frozen after build; the engine never mutates a table
- A malformed table raises ThresholdTableError at build time
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from fivestar.config.defaults import DEFAULT_CONFIG
from fivestar.core.errors import ThresholdTableError


STAR_LEVELS: Tuple[int, ...] = (5, 4, 3, 2)
TIERS: Tuple[str, ...] = ("excellent", "good", "average", "poor")
SEVERITY_LETTERS: Tuple[str, ...] = tuple("ABCDEFGHIJKL")
SEVERE_LETTERS: Tuple[str, ...] = tuple("GHIJKL")
SCOPES: Tuple[str, ...] = ("isolated", "pattern", "widespread")

AGE_BANDS = ("under_65", "65_74", "75_84", "85_plus")
BIMS_BANDS = ("intact", "moderate", "severe")
LOS_BANDS = ("under_7", "7_20", "21_plus")


# =====================================================
# STAR BREAKPOINTS
# =====================================================

@dataclass(frozen=True)
class StarThresholds:
    """Descending breakpoints for levels 5..2; level 1 is implicit."""
    name: str
    levels: Dict[int, float]

    @classmethod
    def from_mapping(cls, name: str, mapping: Dict[Any, Any]) -> "StarThresholds":
        if not isinstance(mapping, dict):
            raise ThresholdTableError(f"{name}: expected a mapping of star level to breakpoint")

        levels = {int(k): float(v) for k, v in mapping.items() if int(k) != 1}
        table = cls(name=name, levels=levels)
        table.validate()
        return table

    def validate(self) -> None:
        missing = [lvl for lvl in STAR_LEVELS if lvl not in self.levels]
        if missing:
            raise ThresholdTableError(f"{self.name}: missing star level(s) {missing}")

        for upper, lower in zip(STAR_LEVELS, STAR_LEVELS[1:]):
            if self.levels[upper] < self.levels[lower]:
                raise ThresholdTableError(
                    f"{self.name}: level {upper} breakpoint {self.levels[upper]} "
                    f"is below level {lower} breakpoint {self.levels[lower]}"
                )

    def breakpoint(self, level: int) -> float:
        try:
            return self.levels[level]
        except KeyError:
            raise ThresholdTableError(f"{self.name}: no breakpoint for level {level}") from None


# =====================================================
# QUALITY MEASURE BENCHMARKS
# =====================================================

@dataclass(frozen=True)
class QMBenchmark:
    key: str
    name: str
    excellent: float
    good: float
    average: float
    poor: float
    higher_is_worse: bool = True
    cms_code: Optional[str] = None
    national_average: Optional[float] = None

    @classmethod
    def from_mapping(cls, key: str, mapping: Dict[str, Any]) -> "QMBenchmark":
        bands = mapping.get("benchmarks") or {}
        missing = [t for t in TIERS if t not in bands]
        if missing:
            raise ThresholdTableError(f"measure {key}: missing benchmark tier(s) {missing}")

        direction = mapping.get("higher_is_worse", True)
        if not isinstance(direction, bool):
            raise ThresholdTableError(f"measure {key}: higher_is_worse must be a boolean")

        national = mapping.get("national_average")
        benchmark = cls(
            key=key,
            name=mapping.get("name") or key,
            excellent=float(bands["excellent"]),
            good=float(bands["good"]),
            average=float(bands["average"]),
            poor=float(bands["poor"]),
            higher_is_worse=direction,
            cms_code=mapping.get("cms_code"),
            national_average=float(national) if national is not None else None,
        )
        benchmark.validate()
        return benchmark

    def validate(self) -> None:
        values = [self.tier_value(t) for t in TIERS]
        ordered = values == sorted(values) if self.higher_is_worse else values == sorted(values, reverse=True)
        if not ordered:
            raise ThresholdTableError(
                f"measure {self.key}: tiers {dict(zip(TIERS, values))} are out of order "
                f"for higher_is_worse={self.higher_is_worse}"
            )

    def tier_value(self, tier: str) -> float:
        if tier not in TIERS:
            raise ThresholdTableError(f"measure {self.key}: unknown tier {tier!r}")
        return getattr(self, tier)


# =====================================================
# HEALTH INSPECTION POINT MATRIX
# =====================================================

@dataclass(frozen=True)
class DeficiencyPointMatrix:
    points: Dict[str, Dict[str, int]]

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Dict[str, Any]]) -> "DeficiencyPointMatrix":
        points = {}
        for letter in SEVERITY_LETTERS:
            row = mapping.get(letter)
            if not isinstance(row, dict):
                raise ThresholdTableError(f"deficiency matrix: missing row for severity {letter}")
            try:
                points[letter] = {scope: int(row[scope]) for scope in SCOPES}
            except KeyError as exc:
                raise ThresholdTableError(
                    f"deficiency matrix: severity {letter} missing scope {exc.args[0]!r}"
                ) from None

        matrix = cls(points=points)
        matrix.validate()
        return matrix

    def validate(self) -> None:
        for letter in SEVERITY_LETTERS:
            row = [self.points[letter][s] for s in SCOPES]
            if row != sorted(row):
                raise ThresholdTableError(f"deficiency matrix: severity {letter} decreases with scope")

        for scope in SCOPES:
            column = [self.points[letter][scope] for letter in SEVERITY_LETTERS]
            if column != sorted(column):
                raise ThresholdTableError(f"deficiency matrix: {scope} column decreases with severity")

    def points_for(self, letter: str, scope: str) -> Optional[int]:
        row = self.points.get(letter)
        if row is None:
            return None
        return row.get(scope)


@dataclass(frozen=True)
class HealthInspectionTables:
    matrix: DeficiencyPointMatrix
    repeat_multiplier: float = 1.5
    cycle_weights: Tuple[float, ...] = (0.75, 0.25)
    repeat_category_minimum: int = 2


# =====================================================
# GG DISCHARGE FUNCTION REGRESSION
# =====================================================

@dataclass(frozen=True)
class GGCoefficients:
    intercept: float
    admission_points: float
    age: Dict[str, float]
    diagnosis: Dict[str, float]
    bims: Dict[str, float]
    comorbidities: Dict[str, float]
    score_range: Tuple[float, float] = (0.0, 150.0)
    projected_points: Tuple[Tuple[float, int], ...] = ()
    projected_points_floor: int = 20
    length_of_stay: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> "GGCoefficients":
        if "intercept" not in mapping or "admission_points" not in mapping:
            raise ThresholdTableError("gg regression: intercept and admission_points are required")

        for section, required in (("age", AGE_BANDS), ("bims", BIMS_BANDS), ("diagnosis", ("other",))):
            missing = [k for k in required if k not in (mapping.get(section) or {})]
            if missing:
                raise ThresholdTableError(f"gg regression: {section} missing {missing}")

        low, high = mapping.get("score_range", (0, 150))
        if low > high:
            raise ThresholdTableError(f"gg regression: invalid score range {low}..{high}")

        bands = tuple(
            sorted(((float(m), int(p)) for m, p in mapping.get("projected_points", ())), reverse=True)
        )

        return cls(
            intercept=float(mapping["intercept"]),
            admission_points=float(mapping["admission_points"]),
            age={k: float(v) for k, v in mapping["age"].items()},
            diagnosis={k: float(v) for k, v in mapping["diagnosis"].items()},
            bims={k: float(v) for k, v in mapping["bims"].items()},
            comorbidities={k: float(v) for k, v in (mapping.get("comorbidities") or {}).items()},
            score_range=(float(low), float(high)),
            projected_points=bands,
            projected_points_floor=int(mapping.get("projected_points_floor", 20)),
            length_of_stay={k: float(v) for k, v in (mapping.get("length_of_stay") or {}).items()},
        )


# =====================================================
# RULE TRIGGERS & PROJECTION
# =====================================================

@dataclass(frozen=True)
class StaffingRuleSettings:
    weekend_ratio_floor: float = 0.90
    weekend_ratio_target: float = 0.95
    rn_turnover_limit: float = 50.0
    rn_turnover_target: float = 30.0
    rn_turnover_critical: float = 60.0
    total_turnover_limit: float = 60.0
    total_turnover_target: float = 40.0
    hours_per_fte: float = 8.0
    fte_cost_bands: Dict[str, float] = field(default_factory=lambda: {"high": 5.0, "medium": 2.0})


@dataclass(frozen=True)
class SummarySettings:
    strong_total_hprd: float = 4.0
    low_antipsychotic: float = 10.0


@dataclass(frozen=True)
class ProjectionSettings:
    damping: float = 0.5
    weights: Dict[str, float] = field(
        default_factory=lambda: {"health_inspection": 0.4, "staffing": 0.3, "quality_measures": 0.3}
    )


# =====================================================
# AGGREGATE
# =====================================================

@dataclass(frozen=True)
class ThresholdTables:
    total_hprd: StarThresholds
    rn_hprd: StarThresholds
    quality_measures: Dict[str, QMBenchmark]
    qm_point_thresholds: StarThresholds
    health: HealthInspectionTables
    gg: GGCoefficients
    staffing_rules: StaffingRuleSettings = field(default_factory=StaffingRuleSettings)
    projection: ProjectionSettings = field(default_factory=ProjectionSettings)
    summary: SummarySettings = field(default_factory=SummarySettings)
    nursing_cmis: Dict[str, float] = field(default_factory=dict)
    national_average_cmi: Optional[float] = None
    weekend_penalty_ratio: float = 0.93

    def benchmark(self, measure: str) -> Optional[QMBenchmark]:
        """Resolve a measure by key ("antipsychotic") or CMS code ("N031.04")."""
        if measure in self.quality_measures:
            return self.quality_measures[measure]
        for bench in self.quality_measures.values():
            if bench.cms_code and bench.cms_code == measure:
                return bench
        return None


def build_tables(config: Dict[str, Any]) -> ThresholdTables:
    staffing = config.get("staffing") or {}
    health = config.get("health_inspection") or {}
    rules = dict(config.get("staffing_rules") or {})
    projection = config.get("projection") or {}
    summary = config.get("summary") or {}

    cycle_weights = tuple(float(w) for w in health.get("cycle_weights", (0.75, 0.25)))
    if not cycle_weights or any(w < 0 for w in cycle_weights):
        raise ThresholdTableError(f"health inspection: invalid cycle weights {cycle_weights}")

    weights = projection.get("weights") or ProjectionSettings().weights
    missing = [k for k in ("health_inspection", "staffing", "quality_measures") if k not in weights]
    if missing:
        raise ThresholdTableError(f"projection: missing domain weight(s) {missing}")

    national_cmi = staffing.get("national_average_cmi")

    return ThresholdTables(
        total_hprd=StarThresholds.from_mapping("total_hprd", staffing.get("total_hprd")),
        rn_hprd=StarThresholds.from_mapping("rn_hprd", staffing.get("rn_hprd")),
        quality_measures={
            key: QMBenchmark.from_mapping(key, measure)
            for key, measure in (config.get("quality_measures") or {}).items()
        },
        qm_point_thresholds=StarThresholds.from_mapping(
            "qm_point_thresholds", config.get("qm_point_thresholds")
        ),
        health=HealthInspectionTables(
            matrix=DeficiencyPointMatrix.from_mapping(health.get("deficiency_points") or {}),
            repeat_multiplier=float(health.get("repeat_deficiency_multiplier", 1.0)),
            cycle_weights=cycle_weights,
            repeat_category_minimum=int(health.get("repeat_category_minimum", 2)),
        ),
        gg=GGCoefficients.from_mapping(config.get("gg_regression") or {}),
        staffing_rules=StaffingRuleSettings(**rules),
        projection=ProjectionSettings(
            damping=float(projection.get("damping", 0.5)),
            weights={k: float(v) for k, v in weights.items()},
        ),
        summary=SummarySettings(**{k: float(v) for k, v in summary.items()}),
        nursing_cmis={k: float(v) for k, v in (config.get("nursing_cmis") or {}).items()},
        national_average_cmi=float(national_cmi) if national_cmi else None,
        weekend_penalty_ratio=float(staffing.get("weekend_penalty_ratio", 0.93)),
    )


@lru_cache(maxsize=1)
def default_tables() -> ThresholdTables:
    return build_tables(DEFAULT_CONFIG)
