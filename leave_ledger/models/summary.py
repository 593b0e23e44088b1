from __future__ import annotations

from dataclasses import dataclass, field

"""Aggregation output models (rebuilt on every run, never persisted)."""

__all__ = [
    "LeaveEntry",
    "LeaveSummaryItem",
    "EmployeeSummary",
    "RegularLeaves",
    "HourlyLeaves",
    "MonthlyReportRow",
]


@dataclass(frozen=True)
class LeaveEntry:
    date: str
    value: float


@dataclass(frozen=True)
class LeaveSummaryItem:
    type: str
    day_count: int
    hour_count: float
    date_details: str


@dataclass(frozen=True)
class EmployeeSummary:
    name: str
    leaves: tuple[LeaveSummaryItem, ...] = field(default_factory=tuple)
    initial_balance: int | None = None
    photo: str | None = None


@dataclass(frozen=True)
class RegularLeaves:
    count: int
    dates: str


@dataclass(frozen=True)
class HourlyLeaves:
    days: int
    hours: float


@dataclass(frozen=True)
class MonthlyReportRow:
    """One employee line of the month-end balance report."""
    name: str
    initial_balance: int
    regular_leaves: RegularLeaves
    hourly_leaves: HourlyLeaves
    sick_leave_range: str  # "" when no sick leave in the month
    long_leave_range: str
    final_balance: int
