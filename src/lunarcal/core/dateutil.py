# src/lunarcal/core/dateutil.py
from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Tuple

_YMD_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def parse_ymd_fields(s: str) -> Tuple[int, int, int]:
    """
    Split ``YYYY-MM-DD`` into (year, month, day) ints without calendar validation.

    Single-digit month/day fields are accepted (``2025-1-9``) since hand-maintained
    reference tables contain both forms.
    """
    m = _YMD_RE.match(s.strip())
    if m is None:
        raise ValueError(f"invalid date: {s!r} (expected YYYY-MM-DD)")
    y, mo, d = (int(x) for x in m.groups())
    return y, mo, d


def parse_ymd(s: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a Gregorian date.

    Raises
    ------
    ValueError
        If the text is not a year-month-day triple or the date does not exist.
    """
    y, mo, d = parse_ymd_fields(s)
    return date(y, mo, d)


def replace_year(d: date, year: int) -> date:
    """
    Move ``d`` into ``year`` keeping month/day.

    02-29 into a non-leap year rolls over to 03-01.
    """
    try:
        return d.replace(year=year)
    except ValueError:
        return date(year, 2, 28) + timedelta(days=1)


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is before start)."""
    return (end - start).days
