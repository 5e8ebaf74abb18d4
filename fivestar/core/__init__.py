from .errors import FiveStarError, ThresholdTableError
from .thresholds import ThresholdTables, build_tables, default_tables

__all__ = [
    "FiveStarError",
    "ThresholdTableError",
    "ThresholdTables",
    "build_tables",
    "default_tables",
]
