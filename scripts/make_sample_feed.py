#!/usr/bin/env python
from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from pathlib import Path

STATUSES = ["pending", "working", "finished"]
TASKS = ["Fix pump", "Order parts", "Call supplier", "Inspect line", "Update stock sheet", "Clean filters"]


def _mmddyy(value: date) -> str:
    return f"{value.month:02d}-{value.day:02d}-{value.year % 100:02d}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample team sheet export (CSV)")
    parser.add_argument("--output", required=True, help="output file path (.csv)")
    parser.add_argument("--days", type=int, default=7, help="number of days back from today to cover")
    parser.add_argument("--employee", action="append", default=None, help="employee name (repeatable)")
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    employees = args.employee or ["Abdullah", "Ayesha"]
    rng = random.Random(args.seed)
    today = date.today()

    lines = ["date,employeeName,work,status"]
    for offset in range(args.days - 1, -1, -1):
        day = _mmddyy(today - timedelta(days=offset))
        for employee in employees:
            for task in rng.sample(TASKS, k=2):
                lines.append(f"{day},{employee},{task},{rng.choice(STATUSES).title()}")

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print(f"sample feed written: {output} ({len(lines) - 1} rows)")


if __name__ == "__main__":
    main()
