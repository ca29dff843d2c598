from __future__ import annotations

"""
Reference table check script.

For each lunar month/day in the table: covered solar years, and for each target year
whether resolution is exact or approximated (with reference year and shift).
"""

import argparse
from collections import defaultdict
from typing import Dict, List, Tuple

from lunarcal.core.config import RangeConfig
from lunarcal.core.resolve import explain_resolution

from tools.common import add_common_args, dump_json, load_reference


def main() -> None:
    parser = argparse.ArgumentParser(description="Reference table (기준 날짜표) check")
    add_common_args(parser)
    parser.add_argument("--start-year", type=int, default=RangeConfig().start_year)
    parser.add_argument("--end-year", type=int, default=RangeConfig().end_year)
    args = parser.parse_args()

    table = load_reference(args)
    years = RangeConfig(start_year=args.start_year, end_year=args.end_year).years()

    by_key: Dict[Tuple[int, int], List[int]] = defaultdict(list)
    for e in table:
        by_key[e.lunar_month_day].append(e.solar.year)

    rows = []
    for (month, day) in sorted(by_key):
        covered = sorted(by_key[(month, day)])
        per_year = []
        for y in years:
            r = explain_resolution(table, month, day, y)
            if r is None:
                continue
            per_year.append(
                {
                    "year": y,
                    "solar_date": r.solar_date.isoformat(),
                    "method": r.method,
                    "reference_year": r.reference.solar.year,
                    "shift_days": r.shift_days,
                }
            )

        if args.json:
            rows.append({"lunar": f"{month:02d}/{day:02d}", "covered_years": covered, "years": per_year})
            continue

        exact = sum(1 for p in per_year if p["method"] == "exact")
        print(f"{month:02d}/{day:02d}  refs={len(covered)}  exact={exact}/{len(per_year)}  years={covered[0]}..{covered[-1]}")
        if args.verbose:
            for p in per_year:
                print(
                    f"    {p['year']}  {p['solar_date']}  {p['method']:<6}  "
                    f"ref={p['reference_year']} shift={p['shift_days']:+d}"
                )

    if args.json:
        dump_json({"entries": len(table), "rows": rows})


if __name__ == "__main__":
    main()
