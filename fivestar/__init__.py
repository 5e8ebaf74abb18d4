"""
Five-Star Engine

CMS Five-Star scoring and improvement recommendations for
nursing facilities.
"""

from .__version__ import __version__

from .core.errors import FiveStarError, ThresholdTableError
from .core.schema import (
    Facility,
    StaffingMetrics,
    LongStayMeasures,
    ShortStayMeasures,
    QualityMeasureSet,
    HealthInspectionRecord,
    DeficiencyRecord,
    Recommendation,
    RatingProjection,
    GGInput,
    GGResult,
    FacilitySummary,
)
from .core.thresholds import ThresholdTables, build_tables, default_tables
from .engine import RecommendationEngine, analyze, project_rating

__all__ = [
    "__version__",
    "FiveStarError",
    "ThresholdTableError",
    "Facility",
    "StaffingMetrics",
    "LongStayMeasures",
    "ShortStayMeasures",
    "QualityMeasureSet",
    "HealthInspectionRecord",
    "DeficiencyRecord",
    "Recommendation",
    "RatingProjection",
    "GGInput",
    "GGResult",
    "FacilitySummary",
    "ThresholdTables",
    "build_tables",
    "default_tables",
    "RecommendationEngine",
    "analyze",
    "project_rating",
]
