# src/lunarcal/core/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal

TieBreak = Literal["earlier", "later"]

LUNARCAL_REFERENCE_PATH_ENV = "LUNARCAL_REFERENCE_PATH"
LUNARCAL_TZ_ENV = "LUNARCAL_TZ"
DEFAULT_TZ = "Asia/Seoul"


@dataclass(frozen=True)
class ResolutionConfig:
    """
    Lunar -> solar resolution parameters.

    drift_days_per_year:
        Linear lunar/solar drift per year of separation from the reference entry.
        (354-day lunar year vs 365-day solar year; older tables used 11.0)
    tie_break:
        Which reference year wins when two are equally close to the target year.
    """
    drift_days_per_year: float = 10.875
    tie_break: TieBreak = "earlier"

    def __post_init__(self) -> None:
        if self.drift_days_per_year < 0:
            raise ValueError(f"drift_days_per_year must be >= 0: {self.drift_days_per_year}")
        if self.tie_break not in ("earlier", "later"):
            raise ValueError(f"tie_break must be 'earlier' or 'later': {self.tie_break!r}")


@dataclass(frozen=True)
class RangeConfig:
    start_year: int = 2025
    end_year: int = 2050

    def __post_init__(self) -> None:
        if self.end_year < self.start_year:
            raise ValueError("end_year must be >= start_year")

    def years(self) -> range:
        return range(self.start_year, self.end_year + 1)


@dataclass(frozen=True)
class LunarCalConfig:
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    range: RangeConfig = field(default_factory=RangeConfig)
