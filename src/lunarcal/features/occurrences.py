# src/lunarcal/features/occurrences.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from lunarcal.core.config import LunarCalConfig
from lunarcal.core.reference import ReferenceTable
from lunarcal.core.resolve import resolve_solar_date
from lunarcal.features.annotate import annotate
from lunarcal.features.config import (
    Weekday,
    lunar_month_day_label,
    solar_date_label,
)

log = logging.getLogger("lunarcal.features.occurrences")


def normalize_title(title: str) -> str:
    """Collapse all whitespace runs (newlines included) into single spaces."""
    return " ".join(str(title).split())


@dataclass(frozen=True)
class LunarAnniversary:
    """
    User input: a recurring date in the lunar calendar.

    Only range checks are done; 윤달 / short (29-day) months are not modeled.
    """
    title: str
    month: int
    day: int

    def __post_init__(self) -> None:
        t = normalize_title(self.title)
        if not t:
            raise ValueError("title must not be empty")
        object.__setattr__(self, "title", t)
        if not (1 <= int(self.month) <= 12):
            raise ValueError(f"lunar month out of range: {self.month}")
        if not (1 <= int(self.day) <= 30):
            raise ValueError(f"lunar day out of range: {self.day}")

    @property
    def label(self) -> str:
        return f"{self.title} ({lunar_month_day_label(self.month, self.day)})"


@dataclass(frozen=True)
class ResolvedOccurrence:
    year: int
    solar_date: date
    weekday: Weekday
    weekday_label: str
    countdown: str

    @property
    def date_label(self) -> str:
        return solar_date_label(self.solar_date)


@dataclass(frozen=True)
class ConversionResult:
    """
    One conversion: occurrences ascend by year, at most one per year, none before ``today``.
    """
    anniversary: LunarAnniversary
    today: date
    occurrences: Tuple[ResolvedOccurrence, ...] = ()

    def __len__(self) -> int:
        return len(self.occurrences)

    @property
    def is_empty(self) -> bool:
        return not self.occurrences

    @property
    def summary(self) -> str:
        return f"총 {len(self.occurrences)}개의 향후 양력 날짜를 표시했습니다. (오늘 이후 날짜만 포함)"


def generate_occurrences(
    table: ReferenceTable,
    anniversary: LunarAnniversary,
    today: date,
    *,
    config: Optional[LunarCalConfig] = None,
) -> ConversionResult:
    """
    Resolve the anniversary for every year in the configured range (2025..2050 inclusive).

    Years with no reference data or a date before ``today`` are skipped;
    an empty result is the normal "no data" outcome, not an error.
    """
    cfg = config or LunarCalConfig()

    out: List[ResolvedOccurrence] = []
    skipped_missing = 0
    skipped_past = 0
    for year in cfg.range.years():
        solar = resolve_solar_date(
            table,
            anniversary.month,
            anniversary.day,
            year,
            config=cfg.resolution,
        )
        if solar is None:
            skipped_missing += 1
            continue
        if solar < today:
            skipped_past += 1
            continue

        a = annotate(solar, today)
        out.append(
            ResolvedOccurrence(
                year=year,
                solar_date=solar,
                weekday=a.weekday,
                weekday_label=a.weekday_label,
                countdown=a.countdown,
            )
        )

    log.debug(
        "generate lunar=%02d/%02d today=%s found=%d missing=%d past=%d",
        anniversary.month, anniversary.day, today, len(out), skipped_missing, skipped_past,
    )
    return ConversionResult(anniversary=anniversary, today=today, occurrences=tuple(out))
