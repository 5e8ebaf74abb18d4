import re
from typing import Dict


def rating_priority(rating: int) -> str:
    """Domains at 1-2 stars get high priority; everything else medium."""
    return "high" if rating <= 2 else "medium"


def escalate(priority: str, to: str = "high") -> str:
    order = ("high", "medium", "low")
    return to if order.index(to) < order.index(priority) else priority


def cost_for_fte(fte: float, bands: Dict[str, float]) -> str:
    if fte > bands.get("high", 5.0):
        return "high"
    if fte > bands.get("medium", 2.0):
        return "medium"
    return "low"


def make_id(*parts: str) -> str:
    """Deterministic slug id, e.g. make_id("hi", "category", "Infection Control")."""
    text = "-".join(p for p in parts if p)
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
