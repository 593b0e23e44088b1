from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date

from ..models.records import DEFAULT_WORKDAY_HOURS, CanonicalRecord, EmployeeRecord
from ..models.summary import EmployeeSummary, LeaveEntry, LeaveSummaryItem
from .dates import format_dmy, parse_sheet_date
from .leave_types import (
    HOURLY_LEAVE,
    HOURLY_SUMMARY,
    REGULAR_LEAVE,
    canonical_leave_type,
    effective_workday_hours,
    is_excluded_type,
    is_period_type,
    type_order_key,
)
from .names import NameResolver, arabic_sort_key
from .numerals import parse_leading_number, round_hours, to_arabic_numerals

"""Leave aggregation: canonical records + roster -> per-employee summaries.

The result is a pure function of its inputs and is rebuilt wholesale on every
change to either (see LeaveLedger.recompute). Three summarization policies
apply per leave type:

- hourly leave: hours summed with the prior carry-over, converted to whole
  days by the employee's workday length, remainder kept as hours
- sick / extended leave: dates merged into contiguous periods
- everything else: an entry count plus a per-month listing of day numbers
"""

__all__ = [
    "GroupedLeaves",
    "group_records",
    "aggregate",
]

logger = logging.getLogger(__name__)

# employee name -> leave type -> entries, in first-seen order
GroupedLeaves = dict[str, dict[str, list[LeaveEntry]]]

DAY_SEPARATOR = "،"
MONTH_SEPARATOR = " | "


def group_records(records: Sequence[CanonicalRecord], resolver: NameResolver) -> GroupedLeaves:
    grouped: GroupedLeaves = {}
    for record in records:
        if not record.employee_name:
            continue
        name = resolver.resolve(record.employee_name)
        leave_type = canonical_leave_type(record.leave_type)
        if not name or not record.date or not leave_type:
            continue
        if is_excluded_type(leave_type):
            continue
        entry = LeaveEntry(date=str(record.date), value=parse_leading_number(record.value))
        grouped.setdefault(name, {}).setdefault(leave_type, []).append(entry)
    return grouped


def _hourly_item(entries: list[LeaveEntry], prior_hours: float, workday_hours: float) -> LeaveSummaryItem | None:
    sheet_hours = sum(e.value for e in entries)
    total = sheet_hours + prior_hours
    if total <= 0:
        return None
    details: list[str] = []
    if entries:
        details.append(
            f"إجمالي {to_arabic_numerals(sheet_hours)} ساعة عبر {to_arabic_numerals(len(entries))} إدخال"
        )
    if prior_hours > 0:
        details.append(f"{to_arabic_numerals(prior_hours)} ساعة رصيد سابق")
    return LeaveSummaryItem(
        type=HOURLY_SUMMARY,
        day_count=math.floor(total / workday_hours),
        hour_count=round_hours(math.fmod(total, workday_hours)),
        date_details=" + ".join(details),
    )


def _valid_dates(entries: list[LeaveEntry]) -> list[date]:
    parsed = [parse_sheet_date(e.date) for e in entries]
    skipped = sum(1 for d in parsed if d is None)
    if skipped:
        logger.debug("skipped %d unparseable leave dates", skipped)
    return sorted(d for d in parsed if d is not None)


def _contiguous_periods(dates: list[date]) -> list[tuple[date, date]]:
    periods: list[tuple[date, date]] = []
    if not dates:
        return periods
    start = end = dates[0]
    for current in dates[1:]:
        if (current - end).days == 1:
            end = current
        else:
            periods.append((start, end))
            start = end = current
    periods.append((start, end))
    return periods


def _period_items(leave_type: str, entries: list[LeaveEntry]) -> list[LeaveSummaryItem]:
    items: list[LeaveSummaryItem] = []
    for start, end in _contiguous_periods(_valid_dates(entries)):
        day_count = (end - start).days + 1
        if day_count <= 1:
            details = format_dmy(start)
        else:
            details = f"من {format_dmy(start)} إلى {format_dmy(end)}"
        items.append(LeaveSummaryItem(type=leave_type, day_count=day_count, hour_count=0, date_details=details))
    return items


def _listing_item(leave_type: str, entries: list[LeaveEntry]) -> LeaveSummaryItem:
    by_month: dict[tuple[int, int], list[int]] = {}
    for d in _valid_dates(entries):
        by_month.setdefault((d.year, d.month), []).append(d.day)
    parts = []
    for (year, month), days in by_month.items():
        day_text = DAY_SEPARATOR.join(to_arabic_numerals(day) for day in sorted(days))
        parts.append(f"{day_text}/{to_arabic_numerals(month)}/{to_arabic_numerals(year)}")
    return LeaveSummaryItem(
        type=leave_type,
        day_count=len(entries),
        hour_count=0,
        date_details=MONTH_SEPARATOR.join(parts),
    )


def _summarize_employee(
    name: str,
    leaves_by_type: dict[str, list[LeaveEntry]],
    employee: EmployeeRecord | None,
    default_workday_hours: int,
) -> EmployeeSummary:
    prior_hours = (employee.prior_hourly_balance or 0) if employee else 0
    workday_hours = effective_workday_hours(
        employee.workday_hours if employee else None,
        (e.value for e in leaves_by_type.get(REGULAR_LEAVE, [])),
        default_workday_hours,
    )

    types = list(leaves_by_type)
    if prior_hours != 0 and HOURLY_LEAVE not in leaves_by_type:
        types.append(HOURLY_LEAVE)
    types.sort(key=lambda t: type_order_key(t, arabic_sort_key))

    items: list[LeaveSummaryItem] = []
    for leave_type in types:
        entries = leaves_by_type.get(leave_type, [])
        if leave_type == HOURLY_LEAVE:
            item = _hourly_item(entries, prior_hours, workday_hours)
            if item is not None:
                items.append(item)
        elif is_period_type(leave_type):
            items.extend(_period_items(leave_type, entries))
        else:
            items.append(_listing_item(leave_type, entries))

    return EmployeeSummary(
        name=name,
        leaves=tuple(items),
        initial_balance=employee.balance if employee else None,
        photo=employee.photo if employee else None,
    )


def aggregate(
    records: Sequence[CanonicalRecord],
    roster: Sequence[EmployeeRecord],
    default_workday_hours: int = DEFAULT_WORKDAY_HOURS,
) -> list[EmployeeSummary]:
    """Build one EmployeeSummary per known or sheet-only employee.

    Employees are ordered by Arabic collation; unresolved sheet names are
    listed alongside roster names. Never raises for malformed records.
    """
    resolver = NameResolver(roster)
    grouped = group_records(records, resolver)

    by_name: dict[str, EmployeeRecord] = {}
    for employee in roster:
        by_name.setdefault(employee.name, employee)

    names = sorted(set(grouped) | set(by_name), key=arabic_sort_key)
    summaries = [
        _summarize_employee(name, grouped.get(name, {}), by_name.get(name), default_workday_hours)
        for name in names
    ]
    logger.debug("aggregated %d records into %d employee summaries", len(records), len(summaries))
    return summaries
