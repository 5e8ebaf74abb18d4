import logging
from typing import Dict, Optional

from fivestar.core.thresholds import StarThresholds, ThresholdTables
from fivestar.scoring.levels import star_level, _usable

logger = logging.getLogger(__name__)


def staffing_star_level(hprd: Optional[float], table: StarThresholds) -> int:
    """HPRD (total nursing or RN) -> star level 1..5."""
    return star_level(hprd, table)


def case_mix_adjusted_hprd(
    reported_hprd: Optional[float],
    facility_cmi: Optional[float],
    national_cmi: Optional[float],
) -> Optional[float]:
    """
    Adjusted HPRD = (reported HPRD / facility CMI) x national average CMI.

    Returns the reported value unchanged when either CMI is missing or
    non-positive.
    """
    if reported_hprd is None:
        return None
    if not facility_cmi or not national_cmi or facility_cmi <= 0 or national_cmi <= 0:
        return reported_hprd
    return reported_hprd / facility_cmi * national_cmi


def facility_case_mix_index(
    cmg_counts: Dict[str, int],
    nursing_cmis: Dict[str, float],
) -> Optional[float]:
    """Census-weighted mean nursing CMI over PDPM case-mix groups."""
    weighted = 0.0
    census = 0
    for group, count in (cmg_counts or {}).items():
        cmi = nursing_cmis.get(str(group).upper())
        if cmi is None:
            logger.debug("Ignoring unknown nursing case-mix group %s", group)
            continue
        if not count or count < 0:
            continue
        weighted += cmi * count
        census += count

    if census == 0:
        return None
    return weighted / census


def staffing_star_rating(
    total_hprd: Optional[float],
    rn_hprd: Optional[float],
    tables: ThresholdTables,
    weekend_hprd: Optional[float] = None,
) -> int:
    """
    Domain rating: the weaker of the total-nursing and RN levels, one
    star lower when weekend staffing falls under the weekend ratio.
    """
    level = min(
        staffing_star_level(total_hprd, tables.total_hprd),
        staffing_star_level(rn_hprd, tables.rn_hprd),
    )

    if _usable(weekend_hprd) and _usable(total_hprd) and total_hprd > 0:
        if weekend_hprd < total_hprd * tables.weekend_penalty_ratio:
            level -= 1

    return max(1, level)
