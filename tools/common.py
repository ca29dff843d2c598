from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from lunarcal.core.config import DEFAULT_TZ, LUNARCAL_REFERENCE_PATH_ENV, LUNARCAL_TZ_ENV
from lunarcal.core.reference import ReferenceTable, read_reference_table, resolve_reference_path


@dataclass(frozen=True)
class ReferenceConfig:
    path: Path
    skip_reason: Optional[str]


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--today", help="YYYY-MM-DD (default: today in LUNARCAL_TZ)")
    parser.add_argument("--tz", default="")
    parser.add_argument("--reference-path", default="", help=f"overrides {LUNARCAL_REFERENCE_PATH_ENV}")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--verbose", action="store_true")


def parse_date(s: str) -> date:
    return date.fromisoformat(s)


def resolve_today(args: argparse.Namespace, parser: argparse.ArgumentParser) -> date:
    if args.today:
        try:
            return parse_date(args.today)
        except ValueError:
            parser.error(f"invalid --today: {args.today} (expected YYYY-MM-DD)")
    tz = (args.tz or "").strip() or os.environ.get(LUNARCAL_TZ_ENV, "").strip() or DEFAULT_TZ
    try:
        return datetime.now(ZoneInfo(tz)).date()
    except (ZoneInfoNotFoundError, ValueError):
        parser.error(f"unknown timezone: {tz}")


def resolve_reference(path_arg: str) -> ReferenceConfig:
    p = resolve_reference_path((path_arg or "").strip() or None)
    if p.exists():
        return ReferenceConfig(path=p, skip_reason=None)
    return ReferenceConfig(path=p, skip_reason=f"reference table not found: {p}")


def load_reference(args: argparse.Namespace) -> ReferenceTable:
    ref = resolve_reference(args.reference_path)
    if ref.skip_reason:
        skip(ref.skip_reason)
    return read_reference_table(ref.path)


def dump_json(obj: object) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def skip(msg: str) -> None:
    print(f"SKIP: {msg}")
    sys.exit(0)
