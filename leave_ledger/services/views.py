from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from ..models.records import DEFAULT_WORKDAY_HOURS, CanonicalRecord, EmployeeRecord
from ..models.summary import EmployeeSummary, LeaveSummaryItem
from .dates import parse_sheet_date
from .leave_types import HOURLY_SUMMARY, REGULAR_LEAVE, SICK_LEAVE, SICK_MARKER
from .names import arabic_sort_key
from .numerals import format_days_arabic, js_number_text, round_hours, to_arabic_numerals

"""Read-only views over records and summaries.

Period filtering happens on records before aggregation; ranking, sick-leave
listing and the tab-separated summary table work on finished summaries.
"""

__all__ = [
    "SUMMARY_COLUMN_ORDER",
    "filter_records_by_period",
    "available_years",
    "search_records",
    "filter_summaries",
    "leave_type_columns",
    "regular_and_hourly_days",
    "total_leave_days",
    "ranked_groups",
    "alphabetical_ranking",
    "short_sick_leaves",
    "summary_table",
    "summary_table_text",
]

# Column order of summary item types; remaining types follow by collation
SUMMARY_COLUMN_ORDER = (REGULAR_LEAVE, SICK_LEAVE, HOURLY_SUMMARY)

SHORT_SICK_MAX_DAYS = 5


def filter_records_by_period(
    records: Sequence[CanonicalRecord], year: int | None = None, month: int | None = None
) -> list[CanonicalRecord]:
    """Records dated in ``year`` (and ``month`` when given).

    ``year=None`` keeps everything, undated records included; otherwise
    records whose date does not parse are dropped. ``month`` without a
    year is ignored.
    """
    if year is None:
        return list(records)
    kept = []
    for record in records:
        d = parse_sheet_date(record.date)
        if d is None or d.year != year:
            continue
        if month is not None and d.month != month:
            continue
        kept.append(record)
    return kept


def available_years(records: Sequence[CanonicalRecord]) -> list[int]:
    years = {d.year for d in (parse_sheet_date(r.date) for r in records) if d is not None}
    return sorted(years, reverse=True)


def _field_text(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return js_number_text(value)
    return str(value)


def search_records(records: Sequence[CanonicalRecord], term: str) -> list[CanonicalRecord]:
    """Case-insensitive substring match over every field of a record."""
    if not term:
        return list(records)
    needle = term.lower()
    return [
        r for r in records
        if any(needle in _field_text(v).lower() for v in r.to_dict().values())
    ]


def filter_summaries(summaries: Sequence[EmployeeSummary], term: str) -> list[EmployeeSummary]:
    if not term:
        return list(summaries)
    needle = term.lower()
    return [s for s in summaries if needle in s.name.lower()]


def _column_key(leave_type: str) -> tuple[int, tuple[str, str]]:
    if leave_type in SUMMARY_COLUMN_ORDER:
        return SUMMARY_COLUMN_ORDER.index(leave_type), ("", "")
    return len(SUMMARY_COLUMN_ORDER), arabic_sort_key(leave_type)


def leave_type_columns(summaries: Sequence[EmployeeSummary]) -> list[str]:
    """Distinct summary item types across all employees, in column order."""
    types = {item.type for s in summaries for item in s.leaves}
    return sorted(types, key=_column_key)


def regular_and_hourly_days(summary: EmployeeSummary) -> int:
    return sum(
        item.day_count for item in summary.leaves if item.type in (REGULAR_LEAVE, HOURLY_SUMMARY)
    )


def total_leave_days(summary: EmployeeSummary) -> int:
    return sum(item.day_count for item in summary.leaves)


def _hourly_days(summary: EmployeeSummary) -> int:
    for item in summary.leaves:
        if item.type == HOURLY_SUMMARY:
            return item.day_count
    return 0


def ranked_groups(summaries: Sequence[EmployeeSummary]) -> dict[int, list[EmployeeSummary]]:
    """Employees with at least one regular+hourly day, grouped by that total.

    Groups ascend by total. Within a group, employees without hourly days
    come first, then by name.
    """
    groups: dict[int, list[EmployeeSummary]] = {}
    for summary in summaries:
        total = regular_and_hourly_days(summary)
        if total >= 1:
            groups.setdefault(total, []).append(summary)
    return {
        total: sorted(
            groups[total],
            key=lambda s: (_hourly_days(s) > 0, arabic_sort_key(s.name)),
        )
        for total in sorted(groups)
    }


def alphabetical_ranking(summaries: Sequence[EmployeeSummary]) -> list[EmployeeSummary]:
    ranked = [s for s in summaries if regular_and_hourly_days(s) >= 1]
    return sorted(ranked, key=lambda s: arabic_sort_key(s.name))


def short_sick_leaves(
    summaries: Sequence[EmployeeSummary], max_days: int = SHORT_SICK_MAX_DAYS
) -> list[tuple[str, LeaveSummaryItem]]:
    """Sick-leave periods of at most ``max_days`` days, shortest first."""
    found = [
        (s.name, item)
        for s in summaries
        for item in s.leaves
        if SICK_MARKER in item.type and item.day_count <= max_days
    ]
    found.sort(key=lambda pair: (pair[1].day_count, arabic_sort_key(pair[0])))
    return found


def _days_and_hours(days: float, hours: float) -> str:
    parts = []
    if days > 0:
        parts.append(f"{to_arabic_numerals(days)} يوم")
    if hours > 0:
        parts.append(f"{to_arabic_numerals(hours)} ساعة")
    return " و ".join(parts)


def _grand_total(summary: EmployeeSummary, workday_hours: int) -> str:
    days = sum(item.day_count for item in summary.leaves)
    hours = sum(item.hour_count for item in summary.leaves)
    if hours >= workday_hours:
        days += math.floor(hours / workday_hours)
        hours = math.fmod(hours, workday_hours)
    return _days_and_hours(days, round_hours(hours)) or "٠"


def summary_table(
    summaries: Sequence[EmployeeSummary], roster: Sequence[EmployeeRecord]
) -> list[list[str]]:
    """Header row plus one row of display strings per employee."""
    columns = leave_type_columns(summaries)
    workday_by_name: dict[str, int] = {}
    for employee in roster:
        workday_by_name.setdefault(employee.name, employee.workday_hours)

    table = [["الاسم", *columns, "مجموع الاجازات الاعتيادية", "المجموع الكلي"]]
    for summary in summaries:
        row = [summary.name]
        for column in columns:
            items = [item for item in summary.leaves if item.type == column]
            row.append(
                _days_and_hours(
                    sum(item.day_count for item in items),
                    sum(item.hour_count for item in items),
                )
            )
        regular_total = regular_and_hourly_days(summary)
        row.append(format_days_arabic(regular_total) if regular_total > 0 else "-")
        workday_hours = workday_by_name.get(summary.name) or DEFAULT_WORKDAY_HOURS
        row.append(_grand_total(summary, workday_hours))
        table.append(row)
    return table


def summary_table_text(summaries: Sequence[EmployeeSummary], roster: Sequence[EmployeeRecord]) -> str:
    """Tab-separated rendering of summary_table (clipboard format)."""
    return "\n".join("\t".join(row) for row in summary_table(summaries, roster))
