def _clamp_star(value: int) -> int:
    return max(1, min(5, int(value)))


def calculate_overall_rating(
    health_rating: int,
    staffing_rating: int,
    qm_rating: int,
    abuse_icon: bool = False,
    special_focus: bool = False,
) -> int:
    """
    CMS overall rating from the three domain ratings.

    Steps:
    1. Start with the health inspection rating
    2. Staffing 4-5 stars adds one; staffing 1 star removes one
    3. QM 5 stars adds one (no more than health + 1 when health is 1);
       QM 1 star removes one
    4. Caps: abuse icon <= 2, special focus <= 3, staffing 1 star <= 3
    """
    health = _clamp_star(health_rating)
    staffing = _clamp_star(staffing_rating)
    qm = _clamp_star(qm_rating)

    overall = health

    if staffing >= 4:
        overall += 1
    elif staffing == 1:
        overall -= 1

    if qm == 5:
        if health == 1:
            overall = min(overall + 1, health + 1)
        else:
            overall += 1
    elif qm == 1:
        overall -= 1

    if abuse_icon:
        overall = min(overall, 2)
    if special_focus:
        overall = min(overall, 3)
    if staffing == 1:
        overall = min(overall, 3)

    return _clamp_star(overall)
