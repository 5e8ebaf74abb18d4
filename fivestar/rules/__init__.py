from .staffing import generate_staffing_recommendations
from .quality import generate_quality_recommendations
from .health import generate_health_recommendations

__all__ = [
    "generate_staffing_recommendations",
    "generate_quality_recommendations",
    "generate_health_recommendations",
]
