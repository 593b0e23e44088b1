from __future__ import annotations

import math
from datetime import datetime

import pandas as pd

from leave_ledger.models.cell import Cell, CellKind


def test_cell_kinds():
    assert Cell.of(None).kind is CellKind.EMPTY
    assert Cell.of(math.nan).kind is CellKind.EMPTY
    assert Cell.of(pd.NaT).kind is CellKind.EMPTY
    assert Cell.of("  ").kind is CellKind.EMPTY
    assert Cell.of(pd.Timestamp("2024-01-01")).kind is CellKind.DATE
    assert Cell.of(datetime(2024, 1, 1)).kind is CellKind.DATE
    assert Cell.of(3).kind is CellKind.NUMBER
    assert Cell.of(2.5).kind is CellKind.NUMBER
    assert Cell.of(True).kind is CellKind.TEXT
    assert Cell.of("نص").kind is CellKind.TEXT


def test_cell_text_and_truthiness():
    assert Cell.of(7.0).text == "7"
    assert Cell.of("  اجازة ").text == "اجازة"
    assert Cell.of(0).truthy is False
    assert Cell.of(0.5).truthy is True
    assert Cell.of("x").truthy is True
    assert Cell.of(None).truthy is False
    assert Cell.of(datetime(2024, 1, 1)).truthy is True
