#!/usr/bin/env python3
"""Sample leave workbook generator.

Writes a deliberately messy leave export for manual runs of ``leave-ledger``:
- Header labels that do not name the columns (column roles must be inferred)
- Employee name only on the first row of each block (forward-filled on ingest)
- Dates as real date cells, serial numbers, and ``DD/MM/YYYY`` text
- A weekday column, a value column (hours for hourly leave, 1 otherwise)
- A few carried-balance rows that aggregation excludes
"""
from __future__ import annotations

import argparse
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

WEEKDAYS = ["الاثنين", "الثلاثاء", "الاربعاء", "الخميس", "الجمعة", "السبت", "الاحد"]

DEFAULT_NAMES = [
    "أحمد علي حسن",
    "فاطمة محمد جاسم",
    "علي كريم عبد الله",
    "زينب حسين كاظم",
    "مصطفى جبار سلمان",
]

LEAVE_TYPES = ["اجازة اعتيادية", "اجازة مرضية", "زمنية", "اجازة طويلة"]
LEAVE_WEIGHTS = [0.55, 0.15, 0.25, 0.05]

SERIAL_EPOCH = datetime(1899, 12, 30)


def _date_cell(day: datetime, style: int) -> Any:
    if style == 0:
        return day
    if style == 1:
        return (day - SERIAL_EPOCH).days
    return day.strftime("%d/%m/%Y")


def generate_rows(names: list[str], entries_per_employee: int, year: int, seed: int = 42) -> list[list[Any]]:
    """Data rows ``[name, date, weekday, type, value]``; name set on block start only."""
    rng = np.random.default_rng(seed)
    rows: list[list[Any]] = []
    for name in names:
        start = datetime(year, 1, 1) + timedelta(days=int(rng.integers(0, 300)))
        for i in range(entries_per_employee):
            day = start + timedelta(days=int(rng.integers(0, 60)))
            leave_type = str(rng.choice(LEAVE_TYPES, p=LEAVE_WEIGHTS))
            value: Any = int(rng.integers(1, 6)) if leave_type == "زمنية" else 1
            rows.append(
                [
                    name if i == 0 else None,
                    _date_cell(day, int(rng.integers(0, 3))),
                    WEEKDAYS[day.weekday()],
                    leave_type,
                    value,
                ]
            )
        # carried balance line, excluded from summaries
        rows.append([None, _date_cell(start, 0), WEEKDAYS[start.weekday()], "رصد مسائي", 2])
    return rows


def create_workbook(
    output_path: Path,
    names: list[str],
    entries_per_employee: int,
    year: int,
    seed: int = 42,
) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    header = ["م", "البيان", "", "التفاصيل", "ملاحظات"]
    df = pd.DataFrame(generate_rows(names, entries_per_employee, year, seed), columns=header)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="الاجازات", index=False)
    print(f"Created workbook: {output_path}")
    print(f"  Employees: {len(names)}")
    print(f"  Rows: {len(df)}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample leave workbook")
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--entries", type=int, default=12, help="Leave rows per employee (default: 12)")
    parser.add_argument("--year", type=int, default=datetime.now().year)
    parser.add_argument("--names", nargs="+", default=DEFAULT_NAMES)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    if args.entries <= 0:
        print("Error: --entries must be positive", file=sys.stderr)
        return 1

    create_workbook(args.output, args.names, args.entries, args.year, args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
