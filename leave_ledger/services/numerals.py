from __future__ import annotations

import math
import re
from typing import Any

"""Locale-aware numeral formatting and lenient number parsing.

Display strings use Eastern Arabic digits. Numbers are first rendered the way
a spreadsheet/JS front end renders them (``7`` not ``7.0``), because stored
records and dedup keys were produced that way and must keep matching.
"""

__all__ = [
    "js_number_text",
    "to_arabic_numerals",
    "from_arabic_numerals",
    "parse_leading_number",
    "is_numeric_text",
    "round_hours",
    "format_days_arabic",
    "format_leave_count",
]

_WESTERN = "0123456789"
_EASTERN = "٠١٢٣٤٥٦٧٨٩"
_TO_EASTERN = str.maketrans(_WESTERN, _EASTERN)
_TO_WESTERN = str.maketrans(_EASTERN, _WESTERN)

_NUMBER_BODY = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_LEADING_NUMBER_RE = re.compile(rf"^{_NUMBER_BODY}")
_FULL_NUMBER_RE = re.compile(rf"^{_NUMBER_BODY}$")
_EXPONENT_RE = re.compile(r"e([+-])0*(\d)")

# 3..10 take the plural noun, anything above takes the singular accusative
_DAY_WORDS = ["ثلاثة", "أربعة", "خمسة", "ستة", "سبعة", "ثمانية", "تسعة", "عشرة"]


def js_number_text(value: int | float) -> str:
    """Render a number like ``String(n)`` in a browser: no trailing ``.0``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return _EXPONENT_RE.sub(r"e\1\2", repr(value))


def to_arabic_numerals(value: Any) -> str:
    if isinstance(value, (int, float)):
        text = js_number_text(value)
    else:
        text = str(value)
    return text.translate(_TO_EASTERN)


def from_arabic_numerals(text: str) -> str:
    return text.translate(_TO_WESTERN)


def parse_leading_number(value: Any) -> float:
    """Parse the leading decimal number of a cell, 0 when there is none.

    ``"7 ساعات"`` parses as 7; ``"abc"``, ``""`` and ``None`` parse as 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
        return 0.0 if math.isnan(number) else number
    match = _LEADING_NUMBER_RE.match(str(value).strip())
    if match is None:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def is_numeric_text(text: str) -> bool:
    """Whether the whole (stripped) text is a finite decimal literal."""
    return _FULL_NUMBER_RE.match(text.strip()) is not None


def round_hours(value: float) -> float:
    rounded = round(value, 2)
    return rounded + 0.0  # drop negative zero


def format_days_arabic(count: Any) -> str:
    try:
        num = float(count)
    except (TypeError, ValueError):
        return "٠ يوم"
    if math.isnan(num) or num <= 0:
        return "٠ يوم"
    if num == 1:
        return "يوم واحد"
    if num == 2:
        return "يومان"
    if 3 <= num <= 10 and num.is_integer():
        return f"{_DAY_WORDS[int(num) - 3]} أيام"
    return f"{to_arabic_numerals(num)} يومًا"


def format_leave_count(days: int | float, hours: float) -> str:
    """``N يوم و M ساعة``, or ``لا يوجد`` when both parts are zero."""
    parts: list[str] = []
    if days > 0:
        parts.append(f"{to_arabic_numerals(days)} يوم")
    formatted_hours = round_hours(hours)
    if formatted_hours > 0:
        parts.append(f"{to_arabic_numerals(formatted_hours)} ساعة")
    return " و ".join(parts) if parts else "لا يوجد"
