# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from leave_ledger.logging.init import reset_logging
from leave_ledger.models.records import CanonicalRecord, EmployeeRecord


@pytest.fixture(autouse=True)
def _fresh_logging():
    # handlers bind sys.stdout at setup time; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """store_path: ./data/ledger.json
logs_dir: ./logs
sample_size: 50
default_workday_hours: 7
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "leave_ledger.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def _write_workbook(path: Path, sheets: dict[str, list[list[Any]]]) -> Path:
    """Write sheets given as rows; the first row of each sheet is its header."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, rows: list[list[Any]] | None = None, sheet: str = "Sheet1", sheets: dict[str, list[list[Any]]] | None = None) -> Path:
        return _write_workbook(temp_workdir / "data" / name, sheets if sheets is not None else {sheet: rows or []})
    return _make


LEAVE_HEADER = ["الموظف", "التاريخ", "اليوم", "النوع", "المدة"]


@pytest.fixture()
def leave_rows() -> list[list[Any]]:
    """A small leave export: name stated once per block, mixed date cells."""
    return [
        LEAVE_HEADER,
        ["أحمد علي حسن", datetime(2024, 1, 7), "الاحد", "اجازة اعتيادية", 1],
        [None, datetime(2024, 1, 8), "الاثنين", "اجازة اعتيادية", 1],
        [None, "10-01-2024", "الاربعاء", "زمنية", 3],
        ["فاطمة محمد جاسم", 45296, "الجمعة", "اجازة مرضية", 1],
        [None, 45297, "السبت", "اجازة مرضية", 1],
        [None, "20/01/2024", "السبت", "رصد مسائي", 2],
    ]


@pytest.fixture()
def roster() -> list[EmployeeRecord]:
    return [
        EmployeeRecord(id="1", name="أحمد علي حسن", balance=30, username="101", password="أحمد11"),
        EmployeeRecord(
            id="2",
            name="فاطمة محمد جاسم",
            balance=20,
            username="102",
            password="فاطمة12",
            prior_hourly_balance=3,
        ),
    ]


@pytest.fixture()
def rec() -> Callable[..., CanonicalRecord]:
    def _rec(name: str, date: str, leave_type: str, value: Any = 1, weekday: Any = "") -> CanonicalRecord:
        return CanonicalRecord(employee_name=name, date=date, weekday=weekday, leave_type=leave_type, value=value)
    return _rec
