from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

"""Spreadsheet date helpers.

Records carry dates as ``DD-MM-YYYY`` text. Parsing is lenient: anything
that is not three numeric D/M/Y parts forming a real calendar date yields
``None`` and the caller decides whether the entry still counts.
"""

__all__ = [
    "DATE_TEXT_RE",
    "SPREADSHEET_EPOCH",
    "format_dmy",
    "serial_to_date",
    "parse_sheet_date",
    "month_bounds",
]

DATE_TEXT_RE = re.compile(r"^\d{1,2}[-/]\d{1,2}[-/]\d{2,4}$")

# Day zero of the 1900 date system (accounts for the fictitious 1900-02-29)
SPREADSHEET_EPOCH = datetime(1899, 12, 30)

_SPLIT_RE = re.compile(r"[-/]")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


def format_dmy(value: date) -> str:
    return f"{value.day:02d}-{value.month:02d}-{value.year}"


def serial_to_date(serial: float) -> date | None:
    """Convert a spreadsheet serial day number to a calendar date (UTC)."""
    try:
        return (SPREADSHEET_EPOCH + timedelta(days=serial)).date()
    except OverflowError:
        return None


def _int_prefix(text: str) -> int | None:
    match = _INT_PREFIX_RE.match(text)
    return int(match.group(1)) if match else None


def parse_sheet_date(text: str) -> date | None:
    """Parse ``D-M-Y`` / ``D/M/Y`` text. Two-digit years pivot at 50."""
    parts = _SPLIT_RE.split(str(text))
    if len(parts) != 3:
        return None
    day, month, year = (_int_prefix(p) for p in parts)
    if day is None or month is None or year is None:
        return None
    if year <= 1000:
        year = 1900 + year if year > 50 else 2000 + year
    try:
        return date(year, month, day)
    except ValueError:
        return None


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
