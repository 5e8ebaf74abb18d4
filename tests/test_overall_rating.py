import pytest

from fivestar.scoring import calculate_overall_rating


@pytest.mark.parametrize(
    "health, staffing, qm, expected",
    [
        (3, 3, 3, 3),
        (3, 4, 5, 5),
        (4, 5, 5, 5),
        (2, 1, 3, 1),
        (1, 1, 1, 1),
        (1, 3, 5, 2),
        (5, 1, 3, 3),
        (3, 3, 1, 2),
    ],
)
def test_overall_rating_steps(health, staffing, qm, expected):
    assert calculate_overall_rating(health, staffing, qm) == expected


def test_abuse_icon_caps_at_two():
    assert calculate_overall_rating(5, 5, 5, abuse_icon=True) == 2


def test_special_focus_caps_at_three():
    assert calculate_overall_rating(5, 5, 5, special_focus=True) == 3


def test_out_of_range_inputs_are_clamped():
    assert calculate_overall_rating(9, 0, 3) == 3
