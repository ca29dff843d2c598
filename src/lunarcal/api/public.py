from __future__ import annotations

import logging
import os
import time
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field

from lunarcal.core.config import DEFAULT_TZ, LUNARCAL_TZ_ENV, LunarCalConfig
from lunarcal.core.reference import ReferenceTable, read_reference_table
from lunarcal.core.resolve import explain_resolution
from lunarcal.features.config import CSV_MEDIA_TYPE
from lunarcal.features.export import suggested_filename, to_csv
from lunarcal.features.occurrences import (
    ConversionResult,
    LunarAnniversary,
    generate_occurrences,
)

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("lunarcal.api.public")

NO_DATA_DETAIL = "해당 음력 날짜에 대한 양력 변환 데이터를 찾을 수 없습니다."


# ============================================================
# Response Models
# ============================================================
class Occurrence(BaseModel):
    year: int
    solar_date: date
    date_label: str = Field(description="YYYY년 M월 D일")
    weekday: int = Field(ge=0, le=6, description="Sunday=0 .. Saturday=6")
    weekday_label: str
    countdown: str = Field(description="D-n / D-DAY / D+n")
    method: Optional[str] = Field(default=None, description="exact | approx (debug only)")
    reference_solar_date: Optional[date] = Field(default=None, description="debug only")


class ConvertResponse(BaseModel):
    title: str
    lunar_month: int
    lunar_day: int
    event_label: str
    today: date
    summary: str
    count: int
    occurrences: List[Occurrence] = Field(default_factory=list)


class ReferenceResponse(BaseModel):
    entries: int
    solar_year_min: Optional[int] = None
    solar_year_max: Optional[int] = None
    lunar_month_days: int = Field(description="distinct lunar month/day keys")


# ============================================================
# Reference table cache (loaded once per process)
# ============================================================
@lru_cache(maxsize=1)
def _table() -> ReferenceTable:
    return read_reference_table()


def _config() -> LunarCalConfig:
    return LunarCalConfig()


# ============================================================
# Helpers: parsing & tz
# ============================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid date format: {s} (expected YYYY-MM-DD)") from e


def _get_tzinfo(tz: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz)
    except ZoneInfoNotFoundError as e:
        raise HTTPException(status_code=422, detail=f"Unknown timezone: {tz}") from e


def _today(tz: Optional[str] = None) -> date:
    name = (tz or "").strip() or os.environ.get(LUNARCAL_TZ_ENV, "").strip() or DEFAULT_TZ
    return datetime.now(_get_tzinfo(name)).date()


def _anniversary(title: str, month: int, day: int) -> LunarAnniversary:
    try:
        return LunarAnniversary(title=title, month=month, day=day)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _content_disposition(filename: str) -> str:
    # ASCII fallback + RFC 5987 for non-ASCII (Korean) names
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace("?", "_").replace('"', "_")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def convert(
    title: str,
    month: int,
    day: int,
    *,
    today: date,
    table: Optional[ReferenceTable] = None,
    config: Optional[LunarCalConfig] = None,
) -> ConversionResult:
    ann = LunarAnniversary(title=title, month=month, day=day)
    tbl = table if table is not None else _table()
    cfg = config if config is not None else _config()
    return generate_occurrences(tbl, ann, today, config=cfg)


def result_to_dict(
    result: ConversionResult,
    *,
    table: Optional[ReferenceTable] = None,
    config: Optional[LunarCalConfig] = None,
    debug: bool = False,
) -> Dict[str, Any]:
    ann = result.anniversary
    tbl = table if table is not None else _table()
    cfg = config if config is not None else _config()

    occurrences: List[Dict[str, Any]] = []
    for occ in result.occurrences:
        row: Dict[str, Any] = {
            "year": occ.year,
            "solar_date": occ.solar_date.isoformat(),
            "date_label": occ.date_label,
            "weekday": int(occ.weekday),
            "weekday_label": occ.weekday_label,
            "countdown": occ.countdown,
        }
        if debug:
            r = explain_resolution(tbl, ann.month, ann.day, occ.year, config=cfg.resolution)
            if r is not None:
                row["method"] = r.method
                row["reference_solar_date"] = r.reference.solar.isoformat()
        occurrences.append(row)

    return {
        "title": ann.title,
        "lunar_month": ann.month,
        "lunar_day": ann.day,
        "event_label": ann.label,
        "today": result.today.isoformat(),
        "summary": result.summary,
        "count": len(occurrences),
        "occurrences": occurrences,
    }


def convert_anniversary(
    title: str,
    month: int,
    day: int,
    *,
    today: str | date,
    table: Optional[ReferenceTable] = None,
    config: Optional[LunarCalConfig] = None,
    debug: bool = False,
) -> Dict[str, Any]:
    """
    Lunar anniversary -> solar dates for 2025..2050 (JSON-ready dict).

    ``count == 0`` is the "no data" outcome (nothing in the table, or every year already past).
    """
    t = today if isinstance(today, date) else date.fromisoformat(str(today))
    result = convert(title, month, day, today=t, table=table, config=config)
    return result_to_dict(result, table=table, config=config, debug=debug)


# ============================================================
# Endpoints
# ============================================================
@router.get("/convert", response_model=ConvertResponse)
def get_convert(
    title: str = Query(..., min_length=1, description="event title"),
    month: int = Query(..., ge=1, le=12, description="lunar month"),
    day: int = Query(..., ge=1, le=30, description="lunar day"),
    today_str: Optional[str] = Query(None, alias="today", description="YYYY-MM-DD (default: today in LUNARCAL_TZ)"),
    tz: Optional[str] = Query(None, description="zone used when today is omitted"),
    debug: bool = Query(False, description="include resolution method per year"),
    timing: bool = Query(False, description="log timing (검증용)"),
) -> ConvertResponse:
    today = _parse_iso_date(today_str) if today_str else _today(tz)
    ann = _anniversary(title, month, day)

    t0 = time.perf_counter()
    result = generate_occurrences(_table(), ann, today, config=_config())
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /convert lunar=%02d/%02d today=%s count=%d total=%.3fs", month, day, today, len(result), t1 - t0)

    if result.is_empty:
        raise HTTPException(status_code=404, detail=NO_DATA_DETAIL)

    return ConvertResponse(**result_to_dict(result, debug=debug))


@router.get("/convert.csv")
def get_convert_csv(
    title: str = Query(..., min_length=1, description="event title"),
    month: int = Query(..., ge=1, le=12, description="lunar month"),
    day: int = Query(..., ge=1, le=30, description="lunar day"),
    today_str: Optional[str] = Query(None, alias="today", description="YYYY-MM-DD (default: today in LUNARCAL_TZ)"),
    tz: Optional[str] = Query(None, description="zone used when today is omitted"),
) -> Response:
    today = _parse_iso_date(today_str) if today_str else _today(tz)
    ann = _anniversary(title, month, day)

    result = generate_occurrences(_table(), ann, today, config=_config())
    if result.is_empty:
        raise HTTPException(status_code=404, detail=NO_DATA_DETAIL)

    return Response(
        content=to_csv(result),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(suggested_filename(result))},
    )


@router.get("/reference", response_model=ReferenceResponse)
def get_reference() -> ReferenceResponse:
    tbl = _table()
    span = tbl.solar_year_span()
    keys = {e.lunar_month_day for e in tbl}
    return ReferenceResponse(
        entries=len(tbl),
        solar_year_min=span[0] if span else None,
        solar_year_max=span[1] if span else None,
        lunar_month_days=len(keys),
    )
