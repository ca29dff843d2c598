# src/lunarcal/features/annotate.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from lunarcal.core.dateutil import days_between
from lunarcal.features.config import (
    Weekday,
    countdown_label,
    weekday_label,
    weekday_of,
)


@dataclass(frozen=True)
class Annotation:
    """
    Weekday and D-Day countdown for one solar date, relative to ``today``.
    """
    weekday: Weekday
    weekday_label: str
    countdown: str
    delta_days: int


def annotate(solar_date: date, today: date) -> Annotation:
    """
    Both inputs are plain dates (midnight-normalized), so the day difference is exact.
    """
    wd = weekday_of(solar_date)
    delta = days_between(today, solar_date)
    return Annotation(
        weekday=wd,
        weekday_label=weekday_label(wd),
        countdown=countdown_label(delta),
        delta_days=delta,
    )
