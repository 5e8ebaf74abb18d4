from .export import (
    EXPORT_COLUMNS,
    recommendation_records,
    recommendations_to_frame,
    export_recommendations_csv,
)

__all__ = [
    "EXPORT_COLUMNS",
    "recommendation_records",
    "recommendations_to_frame",
    "export_recommendations_csv",
]
