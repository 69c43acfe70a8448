from __future__ import annotations

import math

import pytest

from achievements.progress import (
    NO_ACHIEVEMENTS,
    STATUS_ALMOST_THERE,
    STATUS_COMPLETE,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    STATUS_NO_ACHIEVEMENTS,
    STATUS_STARTED,
    calculate,
)


def test_nearly_complete_game():
    progress = calculate(50, 49)

    assert progress.percentage == 98
    assert progress.status == STATUS_ALMOST_THERE
    assert progress.is_complete is False
    assert progress.bar_width == '98%'


def test_complete_game():
    progress = calculate(50, 50)

    assert progress.percentage == 100
    assert progress.status == STATUS_COMPLETE
    assert progress.is_complete is True
    assert progress.show_ribbon is True
    assert progress.css_class == 'complete'


@pytest.mark.parametrize('earned', [0, 5, 1000, -3, None])
def test_zero_total_means_no_achievements(earned):
    progress = calculate(0, earned)

    assert progress is NO_ACHIEVEMENTS
    assert progress.status == STATUS_NO_ACHIEVEMENTS
    assert progress.is_complete is False
    assert progress.percentage == 0
    assert progress.bar_width == '2px'


def test_earned_above_total_is_capped():
    progress = calculate(20, 25)

    assert progress.capped_earned == 20
    assert progress.earned == 20
    assert progress.is_complete is True
    assert progress.percentage == 100


@pytest.mark.parametrize(
    ('total', 'earned', 'status'),
    [
        (100, 0, STATUS_NOT_STARTED),
        (100, 1, STATUS_STARTED),
        (100, 24, STATUS_STARTED),
        (100, 25, STATUS_IN_PROGRESS),
        (100, 74, STATUS_IN_PROGRESS),
        (100, 75, STATUS_ALMOST_THERE),
        (100, 99, STATUS_ALMOST_THERE),
    ],
)
def test_status_bands(total, earned, status):
    assert calculate(total, earned).status == status


def test_rounds_half_up():
    assert calculate(8, 1).percentage == 13
    assert calculate(8, 3).percentage == 38


def test_not_started_keeps_minimum_bar_width():
    progress = calculate(300, 1)

    assert progress.percentage == 0
    assert progress.status == STATUS_NOT_STARTED
    assert progress.bar_width == '2px'


def test_inputs_are_sanitized():
    assert calculate('40', '10').percentage == 25
    assert calculate(10.9, 5.7).total == 10
    assert calculate(10.9, 5.7).earned == 5
    assert calculate(math.inf, 3) is NO_ACHIEVEMENTS
    assert calculate(10, math.nan).status == STATUS_NOT_STARTED
    assert calculate(10, -4).earned == 0
    assert calculate('lots', 1) is NO_ACHIEVEMENTS


def test_oversized_counts_are_treated_as_unusable():
    assert calculate(10**400, 3) is NO_ACHIEVEMENTS
    assert calculate(10, 10**400).earned == 0


def test_percentage_stays_in_range():
    for total in range(0, 30):
        for earned in range(0, 40):
            progress = calculate(total, earned)
            assert 0 <= progress.percentage <= 100
            if progress.is_complete:
                assert progress.percentage == 100


def test_to_dict_exposes_display_fields():
    data = calculate(4, 1).to_dict()

    assert data == {
        'percentage': 25,
        'earned': 1,
        'total': 4,
        'status': STATUS_IN_PROGRESS,
        'displayPercentage': '25%',
        'isComplete': False,
        'barWidth': '25%',
        'cssClass': '',
        'showRibbon': False,
    }
