"""
Recommendation Engine
---------------------
Single entry point for the dashboard.

Rules:
- Each domain runs only when its data slice is present
- Estimated impact never exceeds a domain's headroom to 5 stars
- Output is always a list (empty means "no issues detected")
- Pure: same inputs, same list, same order
"""

from dataclasses import replace
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence

from fivestar.config.loader import load_config
from fivestar.core.ranker import rank_recommendations
from fivestar.core.schema import (
    HEALTH_INSPECTION,
    QUALITY_MEASURES,
    STAFFING,
    DeficiencyRecord,
    Facility,
    FacilitySummary,
    HealthInspectionRecord,
    QualityMeasureSet,
    RatingProjection,
    Recommendation,
    StaffingMetrics,
)
from fivestar.core.thresholds import ThresholdTables, build_tables, default_tables
from fivestar.narrative.summary import summarize_facility
from fivestar.rules.health import generate_health_recommendations
from fivestar.rules.quality import generate_quality_recommendations
from fivestar.rules.staffing import generate_staffing_recommendations
from fivestar.scoring.levels import round_half_up
from fivestar.scoring.overall import calculate_overall_rating
from fivestar.utils.logger import get_logger

logger = get_logger(__name__)


class RecommendationEngine:
    def __init__(self, tables: Optional[ThresholdTables] = None):
        self.tables = tables or default_tables()

    @classmethod
    def from_config(cls, path: Optional[str] = None) -> "RecommendationEngine":
        return cls(build_tables(load_config(path)))

    # -------------------------------------------------
    # ANALYSIS
    # -------------------------------------------------
    def analyze(
        self,
        facility: Facility,
        health_inspections: Optional[Sequence[HealthInspectionRecord]] = None,
        deficiencies: Optional[Sequence[DeficiencyRecord]] = None,
        staffing: Optional[StaffingMetrics] = None,
        quality_measures: Optional[QualityMeasureSet] = None,
    ) -> List[Recommendation]:
        recommendations: List[Recommendation] = []

        if staffing is not None:
            recommendations.extend(
                generate_staffing_recommendations(staffing, facility, self.tables)
            )
        else:
            logger.debug("No staffing data for %s; skipping staffing rules", facility.provider_id)

        if quality_measures is not None:
            recommendations.extend(
                generate_quality_recommendations(quality_measures, facility, self.tables)
            )
        else:
            logger.debug("No quality measures for %s; skipping QM rules", facility.provider_id)

        if health_inspections or deficiencies:
            recommendations.extend(
                generate_health_recommendations(
                    health_inspections or (), deficiencies or (), facility, self.tables
                )
            )
        else:
            logger.debug("No inspection data for %s; skipping health rules", facility.provider_id)

        ranked = rank_recommendations(self._cap_impact(r, facility) for r in recommendations)
        logger.info("Generated %d recommendation(s) for %s", len(ranked), facility.provider_id)
        return ranked

    @staticmethod
    def _cap_impact(rec: Recommendation, facility: Facility) -> Recommendation:
        headroom = max(0, 5 - facility.rating_for(rec.category))
        if rec.estimated_impact <= headroom:
            return rec
        return replace(rec, estimated_impact=float(headroom))

    # -------------------------------------------------
    # "TINKER STAR" PROJECTION
    # -------------------------------------------------
    def project_rating(
        self,
        facility: Facility,
        selected: Iterable[Recommendation],
    ) -> RatingProjection:
        """
        Conservative projection: each selected recommendation contributes
        ``estimated_impact x damping`` to its domain, capped at the
        domain's headroom. Overall = weighted domain average, rounded
        half up and clamped to 1..5.
        """
        settings = self.tables.projection
        gains = {HEALTH_INSPECTION: 0.0, STAFFING: 0.0, QUALITY_MEASURES: 0.0}

        for rec in selected:
            if rec.category in gains:
                gains[rec.category] += max(0.0, rec.estimated_impact) * settings.damping

        projected = {}
        for category in gains:
            current = facility.rating_for(category)
            gains[category] = min(gains[category], 5 - current)
            projected[category] = min(5.0, current + gains[category])

        weight_total = sum(settings.weights[c] for c in gains) or 1.0
        combined = sum(projected[c] * settings.weights[c] for c in gains) / weight_total
        overall = max(1, min(5, round_half_up(combined)))

        methodology = calculate_overall_rating(
            round_half_up(projected[HEALTH_INSPECTION]),
            round_half_up(projected[STAFFING]),
            round_half_up(projected[QUALITY_MEASURES]),
            abuse_icon=facility.abuse_icon,
            special_focus=facility.is_special_focus,
        )

        return RatingProjection(
            overall=overall,
            health=projected[HEALTH_INSPECTION],
            staffing=projected[STAFFING],
            quality_measures=projected[QUALITY_MEASURES],
            current_overall=facility.rating_for("overall"),
            health_improvement=gains[HEALTH_INSPECTION],
            staffing_improvement=gains[STAFFING],
            quality_measures_improvement=gains[QUALITY_MEASURES],
            methodology_overall=methodology,
        )

    # -------------------------------------------------
    # SUMMARY
    # -------------------------------------------------
    def summarize(
        self,
        facility: Facility,
        health_inspections: Optional[Sequence[HealthInspectionRecord]] = None,
        staffing: Optional[StaffingMetrics] = None,
        quality_measures: Optional[QualityMeasureSet] = None,
    ) -> FacilitySummary:
        return summarize_facility(
            facility,
            health_inspections=health_inspections,
            staffing=staffing,
            quality_measures=quality_measures,
            tables=self.tables,
        )


@lru_cache(maxsize=1)
def _default_engine() -> RecommendationEngine:
    return RecommendationEngine()


def analyze(
    facility: Facility,
    health_inspections: Optional[Sequence[HealthInspectionRecord]] = None,
    deficiencies: Optional[Sequence[DeficiencyRecord]] = None,
    staffing: Optional[StaffingMetrics] = None,
    quality_measures: Optional[QualityMeasureSet] = None,
) -> List[Recommendation]:
    return _default_engine().analyze(
        facility, health_inspections, deficiencies, staffing, quality_measures
    )


def project_rating(facility: Facility, selected: Iterable[Recommendation]) -> RatingProjection:
    return _default_engine().project_rating(facility, selected)
