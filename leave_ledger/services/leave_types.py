from __future__ import annotations

import re
from collections.abc import Iterable

"""Leave-type vocabulary shared by aggregation and monthly reporting.

Type labels come straight from the spreadsheets, so most checks are keyword
containment rather than equality.
"""

__all__ = [
    "REGULAR_LEAVE",
    "SICK_LEAVE",
    "HOURLY_LEAVE",
    "HOURLY_SUMMARY",
    "canonical_leave_type",
    "is_excluded_type",
    "is_hourly_type",
    "is_regular_type",
    "is_period_type",
    "type_order_key",
    "effective_workday_hours",
]

REGULAR_LEAVE = "اجازة اعتيادية"
SICK_LEAVE = "اجازة مرضية"
HOURLY_LEAVE = "اجازة زمنية"
# Label of the single item the hourly group is reported under
HOURLY_SUMMARY = "ملخص الزمنيات"

HOURLY_PREFIX = "زمنية"
REGULAR_MARKER = "اعتيادية"
SICK_MARKER = "مرضية"
LONG_MARKER = "طويلة"
CARRIED_BALANCE_MARKER = "رصد"
EVENING_MARKER = "مسائي"

TYPE_PRIORITY = (REGULAR_LEAVE, SICK_LEAVE, HOURLY_LEAVE)
OVERRIDE_WORKDAY_HOURS = (6, 7)

_WHITESPACE_RE = re.compile(r"\s+")


def canonical_leave_type(raw: str) -> str:
    text = str(raw).strip()
    if text.startswith(HOURLY_PREFIX):
        return HOURLY_LEAVE
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_excluded_type(leave_type: str) -> bool:
    """Evening carried-balance adjustments are bookkeeping, not leave."""
    return CARRIED_BALANCE_MARKER in leave_type and EVENING_MARKER in leave_type


def is_hourly_type(raw: str) -> bool:
    return canonical_leave_type(raw) == HOURLY_LEAVE


def is_regular_type(raw: str) -> bool:
    return REGULAR_MARKER in str(raw)


def is_period_type(leave_type: str) -> bool:
    """Sick and extended leave are reported as contiguous date periods."""
    return SICK_MARKER in leave_type or LONG_MARKER in leave_type


def type_order_key(leave_type: str, collate) -> tuple[int, object]:
    if leave_type in TYPE_PRIORITY:
        return (TYPE_PRIORITY.index(leave_type), "")
    return (len(TYPE_PRIORITY), collate(leave_type))


def effective_workday_hours(stored: int | None, regular_values: Iterable[float], default: int = 7) -> int | float:
    """Stored workday hours, overridden by what the sheet shows.

    The first regular-leave entry records a full day's hours; when it reads
    exactly 6 or 7 that wins over the roster value.
    """
    hours = stored or default
    for value in regular_values:
        if value in OVERRIDE_WORKDAY_HOURS:
            hours = int(value)
        break
    return hours
