"""
Recommendation Export
---------------------
Flattens engine output for the dashboard's table and CSV downloads.

Rules:
- Column order is fixed (EXPORT_COLUMNS)
- Action steps are joined into one cell
- An empty recommendation list still yields the header row
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import pandas as pd

from fivestar.core.schema import Recommendation


EXPORT_COLUMNS: List[str] = [
    "id",
    "category",
    "priority",
    "title",
    "description",
    "current_value",
    "target_value",
    "estimated_impact",
    "estimated_cost",
    "timeframe",
    "action_steps",
]

STEP_SEPARATOR = "; "


def recommendation_records(recommendations: Iterable[Recommendation]) -> List[Dict[str, Any]]:
    records = []
    for rec in recommendations:
        row = rec.to_dict()
        row["action_steps"] = STEP_SEPARATOR.join(rec.action_steps)
        records.append({col: row[col] for col in EXPORT_COLUMNS})
    return records


def recommendations_to_frame(recommendations: Iterable[Recommendation]) -> pd.DataFrame:
    return pd.DataFrame(recommendation_records(recommendations), columns=EXPORT_COLUMNS)


def export_recommendations_csv(
    recommendations: Iterable[Recommendation],
    path: Union[str, Path],
) -> Path:
    """Write a UTF-8 CSV with BOM (opens cleanly in Excel)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    recommendations_to_frame(recommendations).to_csv(path, index=False, encoding="utf-8-sig")
    return path
