from __future__ import annotations

import random

import pytest

from leave_ledger.errors import RosterError
from leave_ledger.models.records import EmployeeRecord
from leave_ledger.services.roster import (
    add_employee,
    credentials_csv,
    deduct_balance,
    filter_employees,
    find_employee,
    generate_password,
    generate_username,
    remove_employee,
    seed_roster,
    update_employee,
)


def _emp(id: str, name: str, username: str, balance: int = 10) -> EmployeeRecord:
    return EmployeeRecord(id=id, name=name, balance=balance, username=username, password="pw")


def test_add_employee_sorts_and_assigns_id():
    roster = [_emp("1", "زيد كريم", "Ab")]
    updated, created = add_employee(roster, "  أحمد علي ", 12, "77", "secret")
    assert [e.name for e in updated] == ["أحمد علي", "زيد كريم"]
    assert created.name == "أحمد علي"
    assert created.balance == 12
    assert created.workday_hours == 7
    assert len(created.id) == 32
    # input roster untouched
    assert len(roster) == 1


@pytest.mark.parametrize("name,username,password", [("", "u", "p"), ("x", " ", "p"), ("x", "u", "")])
def test_add_employee_requires_all_fields(name, username, password):
    with pytest.raises(RosterError, match="يرجى إدخال جميع الحقول"):
        add_employee([], name, 1, username, password)


def test_add_employee_rejects_username_clash_ignoring_case():
    with pytest.raises(RosterError, match="اسم المستخدم هذا موجود"):
        add_employee([_emp("1", "زيد", "Ab")], "علي", 1, "aB", "p")


def test_update_employee_keeps_own_username_but_not_others():
    roster = [_emp("1", "زيد", "ab"), _emp("2", "علي", "cd")]
    updated = update_employee(roster, "1", username="AB", balance=3)
    assert find_employee(updated, "1").balance == 3
    assert find_employee(updated, "1").username == "AB"
    with pytest.raises(RosterError):
        update_employee(roster, "1", username="CD")
    with pytest.raises(RosterError, match="unknown employee id"):
        update_employee(roster, "9", balance=1)


def test_update_employee_resorts_on_rename():
    roster = [_emp("1", "أحمد", "a"), _emp("2", "باسم", "b")]
    updated = update_employee(roster, "1", name="يوسف")
    assert [e.id for e in updated] == ["2", "1"]


def test_remove_and_deduct():
    roster = [_emp("1", "أحمد", "a", balance=3), _emp("2", "باسم", "b", balance=10)]
    assert [e.id for e in remove_employee(roster, "1")] == ["2"]
    with pytest.raises(RosterError):
        remove_employee(roster, "3")
    assert [e.balance for e in deduct_balance(roster)] == [-2, 5]
    assert [e.balance for e in deduct_balance(roster, days=1)] == [2, 9]


def test_seed_roster_credentials_and_order():
    roster = seed_roster(["زينب علي", "أحمد حسن"], balances=[10])
    assert [(e.name, e.username, e.password, e.balance) for e in roster] == [
        ("أحمد حسن", "101", "أحمد11", 0),
        ("زينب علي", "100", "زينب10", 10),
    ]
    assert roster[0].id.endswith("-1")


def test_generated_credentials_shape():
    rng = random.Random(7)
    username = generate_username(rng)
    assert len(username) == 2 and username.isdigit()
    password = generate_password(rng=rng)
    assert len(password) == 7 and password.isalnum() and password.isascii()


def test_filter_employees_matches_name_or_username():
    roster = [_emp("1", "أحمد علي", "Ahmed"), _emp("2", "باسم", "b7")]
    assert [e.id for e in filter_employees(roster, "علي")] == ["1"]
    assert [e.id for e in filter_employees(roster, "AHM")] == ["1"]
    assert [e.id for e in filter_employees(roster, "B7")] == ["2"]
    assert filter_employees(roster, "") == roster


def test_credentials_csv(roster):
    text = credentials_csv(roster)
    assert text.startswith("﻿")
    assert text[1:].split("\n") == [
        '"الاسم","اسم المستخدم","كلمة المرور"',
        '"أحمد علي حسن","101","أحمد11"',
        '"فاطمة محمد جاسم","102","فاطمة12"',
    ]
