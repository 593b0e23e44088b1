from __future__ import annotations

import pytest

from leave_ledger.models.records import EmployeeRecord
from leave_ledger.models.summary import HourlyLeaves, RegularLeaves
from leave_ledger.services.monthly import monthly_report


def _emp(name: str, **kwargs) -> EmployeeRecord:
    fields = dict(id=name, name=name, balance=30, username=name, password="p")
    fields.update(kwargs)
    return EmployeeRecord(**fields)


@pytest.fixture()
def feb_records(rec):
    name = "فاطمة حسن"
    return [
        rec(name, "10-01-2024", "اجازة اعتيادية"),
        rec(name, "20-02-2024", "اجازة اعتيادية"),
        rec(name, "15-02-2024", "اجازة اعتيادية"),
        rec(name, "05-03-2024", "اجازة اعتيادية"),
        rec(name, "05-01-2024", "زمنية", 5),
        rec(name, "10-02-2024", "زمنية", 6),
        rec(name, "03-02-2024", "اجازة مرضية"),
        rec(name, "06-02-2024", "اجازة مرضية"),
        rec(name, "04-02-2024", "اجازة مرضية"),
    ]


def test_monthly_projection(feb_records):
    roster = [_emp("فاطمة حسن", prior_hourly_balance=3)]
    [row] = monthly_report(2024, 2, feb_records, roster)
    assert row.name == "فاطمة حسن"
    assert row.initial_balance == 30
    assert row.regular_leaves == RegularLeaves(count=2, dates="١٥، ٢٠")
    # 8h before Feb -> 1 day; 14h at end of Feb -> 2 days, 0h
    assert row.hourly_leaves == HourlyLeaves(days=1, hours=0)
    assert row.sick_leave_range == "٦-٣/٢٠٢٤"
    assert row.long_leave_range == ""
    # three regular days up to end of Feb, two converted hourly days
    assert row.final_balance == 25


def test_single_day_range_is_full_date(rec):
    records = [rec("علي حسن", "12-03-2024", "اجازة مرضية"), rec("علي حسن", "13-03-2024", "اجازة طويلة")]
    [row] = monthly_report(2024, 3, records, [_emp("علي حسن")])
    assert row.sick_leave_range == "١٢/٣/٢٠٢٤"
    assert row.long_leave_range == "١٣/٣/٢٠٢٤"
    assert row.regular_leaves == RegularLeaves(count=0, dates="")
    assert row.final_balance == 30


def test_sheet_names_resolved_against_roster(rec):
    records = [rec("فاطمه", "01-04-2024", "اجازة اعتيادية")]
    [row] = monthly_report(2024, 4, records, [_emp("فاطمة حسن")])
    assert row.regular_leaves.count == 1


def test_rows_follow_roster_order_and_ignore_unknown_names(rec):
    roster = [_emp("يوسف كريم"), _emp("احمد جاسم")]
    records = [rec("شخص غريب", "01-04-2024", "اجازة اعتيادية")]
    rows = monthly_report(2024, 4, records, roster)
    assert [r.name for r in rows] == ["يوسف كريم", "احمد جاسم"]
    assert all(r.regular_leaves.count == 0 for r in rows)


def test_workday_override_applies_to_hours(rec):
    records = [
        rec("علي حسن", "01-01-2024", "اجازة اعتيادية", 6),
        rec("علي حسن", "02-05-2024", "زمنية", 8),
    ]
    [row] = monthly_report(2024, 5, records, [_emp("علي حسن", workday_hours=7)])
    assert row.hourly_leaves == HourlyLeaves(days=1, hours=2)
    assert row.final_balance == 30 - 1 - 1


def test_undated_regular_leave_still_reduces_balance(rec):
    records = [
        rec("علي حسن", "05-01-2024", "اجازة اعتيادية"),
        rec("علي حسن", "بدون تاريخ", "اجازة اعتيادية"),
    ]
    [row] = monthly_report(2024, 1, records, [_emp("علي حسن")])
    # listed only under its own month, counted in the running balance
    assert row.regular_leaves == RegularLeaves(count=1, dates="٥")
    assert row.final_balance == 28


def test_undated_hours_count_before_the_month(rec):
    records = [
        rec("علي حسن", "bad", "زمنية", 7),
        rec("علي حسن", "10-05-2024", "اجازة مرضية"),
        rec("علي حسن", "غير معروف", "اجازة مرضية"),
    ]
    [row] = monthly_report(2024, 5, records, [_emp("علي حسن")])
    # 7 undated hours form a full day already used before May
    assert row.hourly_leaves == HourlyLeaves(days=0, hours=0)
    assert row.final_balance == 29
    assert row.sick_leave_range == "١٠/٥/٢٠٢٤"


def test_month_out_of_range():
    with pytest.raises(ValueError):
        monthly_report(2024, 13, [], [])
