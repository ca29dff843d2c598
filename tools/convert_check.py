from __future__ import annotations

"""
Anniversary conversion check script.

Uses:
- lunarcal.api.public.convert / result_to_dict
- lunarcal.features.export.save_csv
"""

import argparse
import logging

from lunarcal.api.public import convert, result_to_dict
from lunarcal.features.export import ExportFailure, save_csv

from tools.common import add_common_args, dump_json, load_reference, resolve_today


def main() -> int:
    parser = argparse.ArgumentParser(description="Lunar anniversary (음력 기념일) -> solar dates check")
    add_common_args(parser)
    parser.add_argument("--title", required=True)
    parser.add_argument("--month", type=int, required=True, help="lunar month 1..12")
    parser.add_argument("--day", type=int, required=True, help="lunar day 1..30")
    parser.add_argument("--csv-dir", default="", help="save CSV into this directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    table = load_reference(args)
    today = resolve_today(args, parser)

    try:
        result = convert(args.title, args.month, args.day, today=today, table=table)
    except ValueError as e:
        parser.error(str(e))

    if args.json:
        dump_json(result_to_dict(result, table=table, debug=args.verbose))
    else:
        print(result.anniversary.label)
        if result.is_empty:
            print("no data")
        for occ in result.occurrences:
            print(f"{occ.year}  {occ.solar_date.isoformat()}  {occ.weekday_label}  {occ.countdown}")
        print(result.summary)

    if args.csv_dir and not result.is_empty:
        try:
            path = save_csv(result, args.csv_dir)
        except ExportFailure as e:
            print(f"ERROR: {e}")
            return 1
        print(f"saved: {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
