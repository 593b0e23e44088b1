from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..services.numerals import js_number_text

"""Persistent record models: CanonicalRecord and EmployeeRecord.

Both serialize to the key layout of the blobs written by the earlier
browser-based tool (Arabic display labels for leave records, camelCase for
employees) so an exported store can be loaded as-is.
"""

__all__ = [
    "CANONICAL_HEADERS",
    "CanonicalRecord",
    "EmployeeRecord",
    "DEFAULT_WORKDAY_HOURS",
]

# Fixed output header list: name, date, weekday, leaveType, value
CANONICAL_HEADERS: list[str] = ["الاسم", "التاريخ", "يوم العمل", "نوع الاجازة", "القيمة"]

DEFAULT_WORKDAY_HOURS = 7


@dataclass(frozen=True)
class CanonicalRecord:
    """One cleaned leave event.

    ``date`` is ``DD-MM-YYYY`` when the source cell was recognisably a date,
    otherwise the source text unchanged. ``value`` keeps the source cell
    (number or text) or ``""`` when absent.
    """
    employee_name: str
    date: str
    weekday: Any  # day-role cell in stored form, "" when absent
    leave_type: str
    value: int | float | str = ""

    def dedup_key(self) -> str:
        return "|".join(
            [self.employee_name, self.date, self.leave_type, _value_text(self.value)]
        )

    def to_dict(self) -> dict[str, Any]:
        name, date, weekday, leave_type, value = CANONICAL_HEADERS
        return {
            name: self.employee_name,
            date: self.date,
            weekday: self.weekday,
            leave_type: self.leave_type,
            value: self.value,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> CanonicalRecord:
        name, date, weekday, leave_type, value = CANONICAL_HEADERS
        raw_value = data.get(value)
        return CanonicalRecord(
            employee_name=str(data.get(name) or ""),
            date=str(data.get(date) or ""),
            weekday=data.get(weekday) or "",
            leave_type=str(data.get(leave_type) or ""),
            value="" if raw_value is None else raw_value,
        )


def _value_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return js_number_text(value)
    return str(value)


@dataclass(frozen=True)
class EmployeeRecord:
    """Roster entry. ``id`` is the identity key; ``username`` is unique
    case-insensitively across the roster (enforced by services.roster)."""
    id: str
    name: str
    balance: int
    username: str
    password: str
    photo: str | None = None  # base64 data URL
    prior_hourly_balance: float = 0
    workday_hours: int = DEFAULT_WORKDAY_HOURS

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "balance": self.balance,
            "username": self.username,
            "password": self.password,
            "priorHourlyBalance": self.prior_hourly_balance,
            "workdayHours": self.workday_hours,
        }
        if self.photo is not None:
            data["photo"] = self.photo
        return data

    @staticmethod
    def from_dict(data: dict[str, Any]) -> EmployeeRecord:
        return EmployeeRecord(
            id=str(data["id"]),
            name=str(data["name"]),
            balance=_whole_number(data.get("balance"), "balance", 0),
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
            photo=data.get("photo"),
            prior_hourly_balance=data.get("priorHourlyBalance") or 0,
            workday_hours=_whole_number(data.get("workdayHours"), "workdayHours", DEFAULT_WORKDAY_HOURS) or DEFAULT_WORKDAY_HOURS,
        )


def _whole_number(value: Any, field_name: str, default: int) -> int:
    """Integer field of a stored employee; fractional values are rejected, not truncated."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a whole number, got {value!r}")
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{field_name} must be a whole number, got {value!r}")
    return int(number)
