# src/lunarcal/features/config.py
from __future__ import annotations

"""
Feature-level configuration / constants (Korean reference locale).

- 요일 (weekday): Sunday-zero index => label
- D-Day countdown labels
- display labels for solar / lunar dates
- CSV export constants (Google Calendar import layout)
"""

from datetime import date
from enum import IntEnum
from typing import Dict, List

# ============================================================
# 요일 (weekday)
#   Sunday=0 .. Saturday=6
#   Python date.weekday() is Monday=0, so n = (weekday() + 1) % 7
# ============================================================


class Weekday(IntEnum):
    SUN = 0
    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6


WEEKDAY_LABEL_BY_NO: Dict[int, str] = {
    0: "일요일",
    1: "월요일",
    2: "화요일",
    3: "수요일",
    4: "목요일",
    5: "금요일",
    6: "토요일",
}


def weekday_of(d: date) -> Weekday:
    return Weekday((d.weekday() + 1) % 7)


def weekday_label(wd: Weekday) -> str:
    return WEEKDAY_LABEL_BY_NO[int(wd)]


# ============================================================
# D-Day
#   delta > 0 : D-{delta}
#   delta < 0 : D+{abs(delta)}
#   delta = 0 : D-DAY
# ============================================================
DDAY_TODAY_LABEL = "D-DAY"


def countdown_label(delta_days: int) -> str:
    n = int(delta_days)
    if n > 0:
        return f"D-{n}"
    if n < 0:
        return f"D+{abs(n)}"
    return DDAY_TODAY_LABEL


# ============================================================
# display labels
# ============================================================
def solar_date_label(d: date) -> str:
    """2025-01-29 -> '2025년 1월 29일'"""
    return f"{d.year}년 {d.month}월 {d.day}일"


def lunar_month_day_label(month: int, day: int) -> str:
    return f"음력 {int(month)}월 {int(day)}일"


# ============================================================
# CSV export
# ============================================================
CSV_BOM = "\ufeff"
CSV_HEADER: List[str] = ["Subject", "Start Date", "All Day Event"]
CSV_ALL_DAY = "TRUE"
CSV_FILENAME_SUFFIX = "_음력달력.csv"
CSV_FILENAME_FALLBACK_STEM = "anniversary"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"

# Windows/macOS path-hostile characters
FILENAME_HOSTILE_CHARS = '\\/:*?"<>|'
