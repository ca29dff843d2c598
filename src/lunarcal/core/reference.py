# src/lunarcal/core/reference.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .config import LUNARCAL_REFERENCE_PATH_ENV
from .dateutil import parse_ymd, parse_ymd_fields

log = logging.getLogger("lunarcal.core.reference")

DEFAULT_REFERENCE_PATH = Path(__file__).resolve().parents[1] / "data" / "base_dates.txt"


@dataclass(frozen=True)
class LunarYMD:
    """
    Lunar calendar date as written in the table.

    NOTE:
      - day 30 is valid in any month, so this is not a Gregorian date
      - 윤달 (leap months) are not distinguished; month is the plain number
    """
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not (1 <= self.month <= 12):
            raise ValueError(f"lunar month out of range: {self.month}")
        if not (1 <= self.day <= 30):
            raise ValueError(f"lunar day out of range: {self.day}")

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class ReferenceEntry:
    """
    One known correspondence: solar (Gregorian) date <-> lunar date.

    Only lunar.month / lunar.day are used for matching.
    """
    solar: date
    lunar: LunarYMD

    @property
    def lunar_month_day(self) -> Tuple[int, int]:
        return self.lunar.month, self.lunar.day


@dataclass(frozen=True)
class ReferenceTable:
    """
    Ordered, immutable set of reference entries.

    Duplicates per lunar (month, day) are allowed (several years of observations).
    Source order is kept so every lookup is deterministic.
    """
    entries: Tuple[ReferenceEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ReferenceEntry]:
        return iter(self.entries)

    def matching(self, month: int, day: int) -> List[ReferenceEntry]:
        return [e for e in self.entries if e.lunar.month == month and e.lunar.day == day]

    def solar_year_span(self) -> Optional[Tuple[int, int]]:
        if not self.entries:
            return None
        years = [e.solar.year for e in self.entries]
        return min(years), max(years)


def _parse_line(line: str) -> Optional[ReferenceEntry]:
    parts = line.split(",")
    if len(parts) != 2:
        return None
    try:
        solar = parse_ymd(parts[0])
        lunar = LunarYMD(*parse_ymd_fields(parts[1]))
    except ValueError:
        return None
    return ReferenceEntry(solar=solar, lunar=lunar)


def load_reference_table(raw_text: str) -> ReferenceTable:
    """
    Parse ``solar,lunar`` lines (both ``YYYY-MM-DD``) into a ReferenceTable.

    - blank lines and ``#`` comments are ignored
    - malformed lines are dropped (never raised); the asset is static data
    """
    out: List[ReferenceEntry] = []
    skipped = 0
    for lineno, raw in enumerate(raw_text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        entry = _parse_line(line)
        if entry is None:
            skipped += 1
            log.debug("skip malformed reference line %d: %r", lineno, raw)
            continue
        out.append(entry)

    if skipped:
        log.debug("reference table: %d entries loaded, %d lines skipped", len(out), skipped)
    return ReferenceTable(entries=tuple(out))


def resolve_reference_path(path: Optional[Union[str, Path]] = None) -> Path:
    if path is not None:
        return Path(path).expanduser()
    env = os.environ.get(LUNARCAL_REFERENCE_PATH_ENV, "").strip()
    if env:
        return Path(env).expanduser()
    return DEFAULT_REFERENCE_PATH


def read_reference_table(path: Optional[Union[str, Path]] = None) -> ReferenceTable:
    """
    Read the reference asset (bundled data/base_dates.txt unless overridden).

    A missing file is a deployment error and propagates as FileNotFoundError.
    """
    p = resolve_reference_path(path)
    table = load_reference_table(p.read_text(encoding="utf-8"))
    log.info("reference table loaded: path=%s entries=%d", p, len(table))
    return table
