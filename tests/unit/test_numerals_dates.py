from __future__ import annotations

from datetime import date

import pytest

from leave_ledger.services.dates import month_bounds, parse_sheet_date, serial_to_date
from leave_ledger.services.leave_types import (
    HOURLY_LEAVE,
    canonical_leave_type,
    effective_workday_hours,
    is_excluded_type,
    is_period_type,
)
from leave_ledger.services.numerals import (
    format_days_arabic,
    format_leave_count,
    from_arabic_numerals,
    js_number_text,
    parse_leading_number,
    to_arabic_numerals,
)


@pytest.mark.parametrize(
    "value,expected",
    [(7, "7"), (7.0, "7"), (2.5, "2.5"), (-0.0, "0"), (1e21, "1e+21"), (1.5e-7, "1.5e-7")],
)
def test_js_number_text(value, expected):
    assert js_number_text(value) == expected


def test_arabic_numerals_both_ways():
    assert to_arabic_numerals(2024) == "٢٠٢٤"
    assert to_arabic_numerals(3.0) == "٣"
    assert to_arabic_numerals("12/3") == "١٢/٣"
    assert from_arabic_numerals("١٢٣") == "123"


@pytest.mark.parametrize(
    "value,expected",
    [(None, 0.0), ("", 0.0), ("abc", 0.0), ("7 ساعات", 7.0), ("1.5h", 1.5), (" 2 ", 2.0), (4, 4.0), (float("nan"), 0.0)],
)
def test_parse_leading_number(value, expected):
    assert parse_leading_number(value) == expected


@pytest.mark.parametrize(
    "count,expected",
    [(0, "٠ يوم"), (1, "يوم واحد"), (2, "يومان"), (3, "ثلاثة أيام"), (10, "عشرة أيام"), (11, "١١ يومًا"), ("x", "٠ يوم")],
)
def test_format_days_arabic(count, expected):
    assert format_days_arabic(count) == expected


def test_format_leave_count():
    assert format_leave_count(2, 3.456) == "٢ يوم و ٣.٤٦ ساعة"
    assert format_leave_count(0, 4) == "٤ ساعة"
    assert format_leave_count(0, 0) == "لا يوجد"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("05-01-2024", date(2024, 1, 5)),
        ("5/1/2024", date(2024, 1, 5)),
        ("5/1/24", date(2024, 1, 5)),
        ("5/1/99", date(1999, 1, 5)),
        ("31-02-2024", None),
        ("2024", None),
        ("غير معروف", None),
    ],
)
def test_parse_sheet_date(text, expected):
    assert parse_sheet_date(text) == expected


def test_serial_and_month_bounds():
    assert serial_to_date(45292) == date(2024, 1, 1)
    assert serial_to_date(1e12) is None
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(ValueError):
        month_bounds(2024, 0)


def test_leave_type_rules():
    assert canonical_leave_type("زمنية صباحية") == HOURLY_LEAVE
    assert canonical_leave_type("  اجازة   مرضية ") == "اجازة مرضية"
    assert is_excluded_type("رصد مسائي")
    assert not is_excluded_type("رصد")
    assert is_period_type("اجازة طويلة")
    assert is_period_type("اجازة مرضية")
    assert not is_period_type("اجازة اعتيادية")


def test_effective_workday_hours():
    assert effective_workday_hours(None, []) == 7
    assert effective_workday_hours(8, []) == 8
    assert effective_workday_hours(8, [6.0, 7.0]) == 6
    assert effective_workday_hours(6, [7]) == 7
    # only the first regular entry is inspected
    assert effective_workday_hours(8, [1, 7]) == 8
