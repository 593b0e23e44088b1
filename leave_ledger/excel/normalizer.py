from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any

from ..models.cell import Cell, CellKind
from ..models.records import CANONICAL_HEADERS, CanonicalRecord
from ..services.dates import format_dmy, serial_to_date
from ..services.numerals import js_number_text, round_hours
from .classifier import DEFAULT_SAMPLE_SIZE, ColumnRoles, classify_columns

"""Row cleaning: classified columns + raw rows -> canonical records.

Spreadsheets often state an employee's name once above a block of their leave
rows; blank name cells inherit the most recent non-blank name. The carried
name is threaded through an explicit accumulator.
"""

__all__ = [
    "CleanResult",
    "format_date_cell",
    "clean_rows",
    "classify_and_clean",
]


@dataclass(frozen=True)
class CleanResult:
    records: list[CanonicalRecord] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)


def format_date_cell(cell: Cell) -> str:
    """Canonical ``DD-MM-YYYY`` for date and serial-number cells.

    Anything else (free text, numbers <= 1) is kept as its string form.
    """
    if cell.kind is CellKind.DATE:
        value = cell.raw
        if isinstance(value, datetime):
            value = value.date()
        return format_dmy(value)
    if cell.kind is CellKind.NUMBER and cell.raw > 1:
        converted = serial_to_date(cell.raw)
        if converted is not None:
            return format_dmy(converted)
    if cell.kind is CellKind.NUMBER:
        return js_number_text(cell.raw)
    return str(cell.raw)


def _stored_value(cell: Cell) -> Any:
    """Cell value in a JSON-storable form.

    Dates become ``DD-MM-YYYY``, clock times ``H:MM`` and durations a number
    of hours; text, numbers and booleans are kept as read.
    """
    raw = cell.raw
    if cell.kind is CellKind.DATE:
        return format_date_cell(cell)
    if isinstance(raw, time):
        return f"{raw.hour}:{raw.minute:02d}"
    if isinstance(raw, timedelta):
        return round_hours(raw.total_seconds() / 3600)
    if raw is None or isinstance(raw, (str, int, float, bool)):
        return raw
    return str(raw)


def _value_field(raw: Any) -> Any:
    cell = Cell.of(raw)
    if raw is None or (cell.is_empty and not isinstance(raw, str)):
        return ""
    if cell.is_empty:
        return raw
    return _stored_value(cell)


def _clean_row(row: dict[str, Any], roles: ColumnRoles, current_name: str) -> tuple[CanonicalRecord | None, str]:
    """Clean one row given the carried name; returns (record or None, carried name)."""
    name = Cell.of(row.get(roles.name)).text
    if name:
        current_name = name
    date_cell = Cell.of(row.get(roles.date))
    leave_type = Cell.of(row.get(roles.type)).text
    if not (date_cell.truthy and leave_type):
        return None, current_name

    weekday: Any = ""
    if roles.day is not None:
        day_cell = Cell.of(row.get(roles.day))
        if day_cell.truthy:
            weekday = _stored_value(day_cell)
    value: Any = ""
    if roles.value is not None:
        value = _value_field(row.get(roles.value))

    record = CanonicalRecord(
        employee_name=current_name,
        date=format_date_cell(date_cell),
        weekday=weekday,
        leave_type=leave_type,
        value=value,
    )
    return record, current_name


def clean_rows(rows: Iterable[dict[str, Any]], roles: ColumnRoles) -> CleanResult:
    records: list[CanonicalRecord] = []
    current_name = ""
    for row in rows:
        record, current_name = _clean_row(row, roles, current_name)
        if record is not None:
            records.append(record)
    return CleanResult(records=records, headers=list(CANONICAL_HEADERS))


def classify_and_clean(rows: Sequence[dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> CleanResult:
    """Infer column roles from a sample, then clean every row.

    Raises:
        MissingColumnsError: name, date or type column could not be inferred
    """
    if not rows:
        return CleanResult()
    roles = classify_columns(rows, sample_size)
    return clean_rows(rows, roles)
