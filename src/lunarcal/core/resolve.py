# src/lunarcal/core/resolve.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Literal, Optional

from .config import ResolutionConfig
from .dateutil import replace_year
from .reference import ReferenceEntry, ReferenceTable

log = logging.getLogger("lunarcal.core.resolve")

ResolutionMethod = Literal["exact", "approx"]


@dataclass(frozen=True)
class Resolution:
    """
    How a (lunar month/day, solar year) pair was resolved.

    - method="exact": the table holds that lunar month/day inside target_year
    - method="approx": nearest reference year moved by linear drift correction
    """
    solar_date: date
    method: ResolutionMethod
    reference: ReferenceEntry
    year_delta: int
    shift_days: int


def drift_shift_days(year_delta: int, drift_days_per_year: float) -> int:
    """
    Signed day shift for a reference that is ``year_delta`` years away.

    Positive delta (target after reference) moves the date earlier.
    Rounded half-up on the magnitude so +n / -n give mirrored shifts.
    """
    magnitude = int(math.floor(abs(year_delta) * drift_days_per_year + 0.5))
    if year_delta > 0:
        return -magnitude
    if year_delta < 0:
        return magnitude
    return 0


def _nearest_reference(
    candidates: List[ReferenceEntry],
    target_year: int,
    config: ResolutionConfig,
) -> ReferenceEntry:
    # earlier: (distance, year) ascending / later: (distance, -year) ascending
    # min() keeps the first of equal keys -> table order among same-year duplicates
    sign = 1 if config.tie_break == "earlier" else -1
    return min(
        candidates,
        key=lambda e: (abs(target_year - e.solar.year), sign * e.solar.year),
    )


def explain_resolution(
    table: ReferenceTable,
    month: int,
    day: int,
    target_year: int,
    *,
    config: Optional[ResolutionConfig] = None,
) -> Optional[Resolution]:
    """
    Resolve lunar (month, day) to a solar date in ``target_year``.

    Returns None when the table has no entry for that lunar month/day at all.
    """
    if not (1 <= month <= 12):
        raise ValueError(f"lunar month out of range: {month}")
    if not (1 <= day <= 30):
        raise ValueError(f"lunar day out of range: {day}")
    cfg = config or ResolutionConfig()

    candidates = table.matching(month, day)
    if not candidates:
        return None

    for e in candidates:
        if e.solar.year == target_year:
            return Resolution(solar_date=e.solar, method="exact", reference=e, year_delta=0, shift_days=0)

    ref = _nearest_reference(candidates, target_year, cfg)
    year_delta = target_year - ref.solar.year
    shift = drift_shift_days(year_delta, cfg.drift_days_per_year)
    solar = replace_year(ref.solar, target_year) + timedelta(days=shift)

    log.debug(
        "approx lunar=%02d/%02d year=%d ref=%s delta=%d shift=%d -> %s",
        month, day, target_year, ref.solar, year_delta, shift, solar,
    )
    return Resolution(solar_date=solar, method="approx", reference=ref, year_delta=year_delta, shift_days=shift)


def resolve_solar_date(
    table: ReferenceTable,
    month: int,
    day: int,
    target_year: int,
    *,
    config: Optional[ResolutionConfig] = None,
) -> Optional[date]:
    """Solar date for lunar (month, day) in ``target_year``, or None if not found."""
    r = explain_resolution(table, month, day, target_year, config=config)
    return None if r is None else r.solar_date
