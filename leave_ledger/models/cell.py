from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from ..services.numerals import js_number_text

"""Closed cell variant used by the column classifier and row normalizer.

A spreadsheet cell arrives as whatever the workbook reader produced (text,
int/float, datetime, pandas Timestamp/NaT, None). ``Cell.of`` folds that into
one of four kinds so the per-role rules can match on ``kind`` instead of
probing runtime types everywhere.
"""

__all__ = [
    "CellKind",
    "Cell",
]


class CellKind(Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    raw: Any  # value exactly as read (None for EMPTY)

    @staticmethod
    def of(value: Any) -> Cell:
        if value is None:
            return Cell(CellKind.EMPTY, None)
        # pandas.Timestamp subclasses datetime; NaT does not compare equal to itself
        if isinstance(value, (datetime, date)):
            if value != value:  # NaT
                return Cell(CellKind.EMPTY, None)
            return Cell(CellKind.DATE, value)
        if isinstance(value, bool):
            return Cell(CellKind.TEXT, value)
        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                return Cell(CellKind.EMPTY, None)
            return Cell(CellKind.NUMBER, value)
        if str(value).strip() == "":
            return Cell(CellKind.EMPTY, None)
        return Cell(CellKind.TEXT, value)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def text(self) -> str:
        """Stripped string form (numbers without a trailing ``.0``)."""
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.NUMBER:
            return js_number_text(self.raw)
        if isinstance(self.raw, bool):
            return "true" if self.raw else "false"
        return str(self.raw).strip()

    @property
    def truthy(self) -> bool:
        """Whether the raw value would count as present (0 and '' do not)."""
        if self.kind is CellKind.EMPTY:
            return False
        if self.kind is CellKind.NUMBER:
            return self.raw != 0
        if isinstance(self.raw, bool):
            return self.raw
        if self.kind is CellKind.TEXT:
            return str(self.raw) != ""
        return True
