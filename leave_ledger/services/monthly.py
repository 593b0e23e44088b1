from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from ..models.records import DEFAULT_WORKDAY_HOURS, CanonicalRecord, EmployeeRecord
from ..models.summary import HourlyLeaves, MonthlyReportRow, RegularLeaves
from .dates import month_bounds, parse_sheet_date
from .leave_types import LONG_MARKER, SICK_MARKER, effective_workday_hours, is_hourly_type, is_regular_type
from .names import NameResolver
from .numerals import parse_leading_number, round_hours, to_arabic_numerals

"""Month-end balance projection.

For a target month every roster employee gets: the month's regular leave
days, the month's share of converted hourly leave, sick/extended leave date
ranges, and the remaining balance after everything up to month end.
"""

__all__ = [
    "monthly_report",
]

REGULAR_DAY_SEPARATOR = "، "

# Unparseable dates sort before every month: counted in the running totals,
# never listed in a month
UNDATED = date.min


@dataclass(frozen=True)
class _DatedRecord:
    record: CanonicalRecord
    day: date


def _dated(records: Sequence[CanonicalRecord]) -> list[_DatedRecord]:
    return [_DatedRecord(record, parse_sheet_date(record.date) or UNDATED) for record in records]


def _hours(records: Sequence[_DatedRecord]) -> float:
    return sum(parse_leading_number(r.record.value) for r in records if is_hourly_type(r.record.leave_type))


def _date_range(records: Sequence[_DatedRecord], marker: str) -> str:
    """Single day -> ``D/M/Y``; several -> ``maxDay-minDay/year``."""
    days = sorted(r.day for r in records if marker in r.record.leave_type)
    if not days:
        return ""
    first, last = days[0], days[-1]
    if first == last:
        return to_arabic_numerals(f"{first.day}/{first.month}/{first.year}")
    return to_arabic_numerals(f"{last.day}-{first.day}/{first.year}")


def _project_employee(
    employee: EmployeeRecord,
    records: Sequence[CanonicalRecord],
    month_start: date,
    month_end: date,
    default_workday_hours: int,
) -> MonthlyReportRow:
    workday_hours = effective_workday_hours(
        employee.workday_hours,
        (parse_leading_number(r.value) for r in records if is_regular_type(r.leave_type)),
        default_workday_hours,
    )
    dated = _dated(records)
    before_month = [r for r in dated if r.day < month_start]
    in_month = [r for r in dated if month_start <= r.day <= month_end]
    through_month = [r for r in dated if r.day <= month_end]

    regular_in_month = [r for r in in_month if is_regular_type(r.record.leave_type)]
    regular_dates = REGULAR_DAY_SEPARATOR.join(
        to_arabic_numerals(d) for d in sorted(r.day.day for r in regular_in_month)
    )

    prior_hours = employee.prior_hourly_balance or 0
    hours_before = _hours(before_month) + prior_hours
    days_before = math.floor(hours_before / workday_hours)
    hours_at_end = hours_before + _hours(in_month)
    days_at_end = math.floor(hours_at_end / workday_hours)
    remaining_hours = math.fmod(hours_at_end, workday_hours)

    regular_through_month = sum(1 for r in through_month if is_regular_type(r.record.leave_type))
    balance = employee.balance or 0

    return MonthlyReportRow(
        name=employee.name,
        initial_balance=balance,
        regular_leaves=RegularLeaves(count=len(regular_in_month), dates=regular_dates),
        hourly_leaves=HourlyLeaves(days=days_at_end - days_before, hours=round_hours(remaining_hours)),
        sick_leave_range=_date_range(in_month, SICK_MARKER),
        long_leave_range=_date_range(in_month, LONG_MARKER),
        final_balance=balance - regular_through_month - days_at_end,
    )


def monthly_report(
    year: int,
    month: int,
    records: Sequence[CanonicalRecord],
    roster: Sequence[EmployeeRecord],
    default_workday_hours: int = DEFAULT_WORKDAY_HOURS,
) -> list[MonthlyReportRow]:
    """Project month-end balances for every roster employee, in roster order.

    Raises:
        ValueError: month outside 1..12
    """
    month_start, month_end = month_bounds(year, month)
    # fresh resolver: no cache shared with an aggregation run
    resolver = NameResolver(roster)
    by_employee: dict[str, list[CanonicalRecord]] = {}
    for record in records:
        if record.employee_name:
            by_employee.setdefault(resolver.resolve(record.employee_name), []).append(record)
    return [
        _project_employee(employee, by_employee.get(employee.name, []), month_start, month_end, default_workday_hours)
        for employee in roster
    ]
