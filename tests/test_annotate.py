from __future__ import annotations

from datetime import date

import pytest

from lunarcal.features.annotate import annotate
from lunarcal.features.config import Weekday, countdown_label, solar_date_label, weekday_of


TODAY = date(2025, 1, 1)


@pytest.mark.parametrize(
    "solar, countdown",
    [
        (date(2025, 1, 29), "D-28"),
        (date(2025, 1, 1), "D-DAY"),
        (date(2024, 12, 31), "D+1"),
    ],
)
def test_countdown(solar, countdown):
    assert annotate(solar, TODAY).countdown == countdown


def test_weekday_is_sunday_zero():
    a = annotate(date(2025, 1, 29), TODAY)
    assert a.weekday == Weekday.WED
    assert int(a.weekday) == 3
    assert a.weekday_label == "수요일"
    assert a.delta_days == 28

    assert weekday_of(date(2025, 2, 2)) == Weekday.SUN
    assert weekday_of(date(2025, 2, 1)) == Weekday.SAT


def test_scenario_date_annotation():
    a = annotate(date(2027, 2, 6), date(2025, 6, 1))
    assert a.weekday == Weekday.SAT
    assert a.weekday_label == "토요일"
    assert a.countdown == "D-615"


def test_labels():
    assert countdown_label(0) == "D-DAY"
    assert countdown_label(-30) == "D+30"
    assert solar_date_label(date(2025, 1, 29)) == "2025년 1월 29일"
