from __future__ import annotations

import csv
import io
import random
import string
import time
import uuid
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from ..errors import RosterError
from ..models.records import DEFAULT_WORKDAY_HOURS, EmployeeRecord
from .names import arabic_sort_key

"""Roster maintenance.

Every function takes the current roster and returns a new list; records
are frozen. The returned roster is always sorted by the Arabic collation
key of the name. Usernames are unique ignoring case.
"""

__all__ = [
    "BALANCE_CORRECTION_DAYS",
    "sort_roster",
    "generate_username",
    "generate_password",
    "add_employee",
    "update_employee",
    "remove_employee",
    "find_employee",
    "deduct_balance",
    "seed_roster",
    "filter_employees",
    "credentials_csv",
]

BALANCE_CORRECTION_DAYS = 5

_PASSWORD_ALPHABET = string.ascii_letters + string.digits


def sort_roster(roster: Sequence[EmployeeRecord]) -> list[EmployeeRecord]:
    return sorted(roster, key=lambda e: arabic_sort_key(e.name))


def generate_username(rng: random.Random | None = None) -> str:
    """Two-digit username suggestion (``00``..``99``)."""
    rng = rng or random.SystemRandom()
    return f"{rng.randrange(100):02d}"


def generate_password(length: int = 7, rng: random.Random | None = None) -> str:
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(_PASSWORD_ALPHABET) for _ in range(length))


def _check_fields(name: str, username: str, password: str) -> None:
    if not name or not username or not password:
        raise RosterError("يرجى إدخال جميع الحقول بشكل صحيح.")


def _check_username(roster: Sequence[EmployeeRecord], username: str, exclude_id: str | None = None) -> None:
    wanted = username.lower()
    if any(e.id != exclude_id and e.username.lower() == wanted for e in roster):
        raise RosterError("اسم المستخدم هذا موجود بالفعل. يرجى اختيار اسم آخر.")


def add_employee(
    roster: Sequence[EmployeeRecord],
    name: str,
    balance: int,
    username: str,
    password: str,
    workday_hours: int = DEFAULT_WORKDAY_HOURS,
    prior_hourly_balance: float = 0,
    photo: str | None = None,
) -> tuple[list[EmployeeRecord], EmployeeRecord]:
    """Append a new employee; returns (new roster, created record).

    Raises:
        RosterError: blank name/username/password, or username taken
    """
    name, username, password = name.strip(), username.strip(), password.strip()
    _check_fields(name, username, password)
    _check_username(roster, username)
    employee = EmployeeRecord(
        id=uuid.uuid4().hex,
        name=name,
        balance=int(balance),
        username=username,
        password=password,
        photo=photo,
        prior_hourly_balance=prior_hourly_balance,
        workday_hours=int(workday_hours),
    )
    return sort_roster([*roster, employee]), employee


def find_employee(roster: Sequence[EmployeeRecord], employee_id: str) -> EmployeeRecord:
    for employee in roster:
        if employee.id == employee_id:
            return employee
    raise RosterError(f"unknown employee id: {employee_id}")


def update_employee(roster: Sequence[EmployeeRecord], employee_id: str, **changes: Any) -> list[EmployeeRecord]:
    """Replace fields of one employee (same validation as add_employee)."""
    current = find_employee(roster, employee_id)
    for key in ("name", "username", "password"):
        if key in changes:
            changes[key] = str(changes[key]).strip()
    updated = replace(current, **changes)
    _check_fields(updated.name, updated.username, updated.password)
    _check_username(roster, updated.username, exclude_id=employee_id)
    return sort_roster([updated if e.id == employee_id else e for e in roster])


def remove_employee(roster: Sequence[EmployeeRecord], employee_id: str) -> list[EmployeeRecord]:
    find_employee(roster, employee_id)
    return [e for e in roster if e.id != employee_id]


def deduct_balance(roster: Sequence[EmployeeRecord], days: int = BALANCE_CORRECTION_DAYS) -> list[EmployeeRecord]:
    """Subtract ``days`` from every employee's balance (one-off correction)."""
    return [replace(e, balance=e.balance - days) for e in roster]


def seed_roster(
    names: Sequence[str],
    balances: Sequence[int] = (),
    hourly_balances: Sequence[float] = (),
) -> list[EmployeeRecord]:
    """Initial roster with deterministic credentials.

    Usernames are ``100 + index``; passwords are the first word of the name
    followed by ``10 + index``. Missing balances default to 0.
    """
    stamp = int(time.time() * 1000)
    roster = []
    for index, name in enumerate(names):
        first_name = name.split(" ")[0]
        roster.append(
            EmployeeRecord(
                id=f"{stamp}-{index}",
                name=name,
                balance=balances[index] if index < len(balances) else 0,
                username=str(100 + index),
                password=f"{first_name}{10 + index}",
                prior_hourly_balance=hourly_balances[index] if index < len(hourly_balances) else 0,
                workday_hours=DEFAULT_WORKDAY_HOURS,
            )
        )
    return sort_roster(roster)


def filter_employees(roster: Sequence[EmployeeRecord], term: str) -> list[EmployeeRecord]:
    """Case-insensitive match on name or username."""
    if not term:
        return list(roster)
    needle = term.lower()
    return [e for e in roster if needle in e.name.lower() or needle in e.username.lower()]


def credentials_csv(roster: Sequence[EmployeeRecord]) -> str:
    """Name/username/password export, BOM-prefixed for spreadsheet apps."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(["الاسم", "اسم المستخدم", "كلمة المرور"])
    for e in roster:
        writer.writerow([e.name, e.username, e.password])
    return "﻿" + buf.getvalue().rstrip("\n")
