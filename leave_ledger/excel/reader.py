from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from ..errors import LedgerError

"""Workbook reader.

Every sheet is read headerless; the first row supplies the column labels and
the remaining rows become ``{label: value}`` dicts. Blank header cells get
``__EMPTY`` style labels and repeated labels get a ``_N`` suffix so no column
is lost. Literal strings such as ``NA`` stay text; only empty cells are null.
"""

__all__ = [
    "WorkbookReadError",
    "SheetData",
    "read_excel_file",
    "normalize_sheet",
    "read_workbook",
    "read_workbook_rows",
]


class WorkbookReadError(LedgerError):
    """Raised when a file cannot be opened or parsed as a workbook."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]]


def read_excel_file(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read a workbook returning raw DataFrames keyed by sheet name."""
    try:
        xls = pd.ExcelFile(path, engine="openpyxl")
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook {path}: {e}") from e
    wanted = set(target_sheets) if target_sheets is not None else None
    dfs: dict[str, pd.DataFrame] = {}
    with xls:
        for name in xls.sheet_names:
            if wanted is not None and str(name) not in wanted:
                continue
            dfs[str(name)] = xls.parse(name, header=None, keep_default_na=False, na_values=[""])
    return dfs


def _header_labels(values: list[Any]) -> list[str]:
    labels: list[str] = []
    seen: dict[str, int] = {}
    for value in values:
        base = "" if _is_missing(value) else str(value).strip()
        if not base:
            base = "__EMPTY"
        count = seen.get(base, 0)
        seen[base] = count + 1
        labels.append(base if count == 0 else f"{base}_{count}")
    return labels


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NaT:
        return True
    return isinstance(value, float) and math.isnan(value)


def _plain_value(value: Any) -> Any:
    """Convert pandas/numpy scalars to plain Python values."""
    if _is_missing(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item") and not isinstance(value, (str, bytes, datetime)):
        value = value.item()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> SheetData:
    """Apply the first row as header and collect non-blank data rows."""
    if df.shape[0] == 0:
        return SheetData(sheet_name=sheet_name, columns=[], rows=[])
    columns = _header_labels(df.iloc[0].tolist())
    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        if raw.isna().all():
            continue
        rows.append({col: _plain_value(val) for col, val in zip(columns, raw.tolist(), strict=False)})
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)


def read_workbook(path: Path) -> list[SheetData]:
    return [normalize_sheet(df, name) for name, df in read_excel_file(path).items()]


def read_workbook_rows(path: Path) -> list[dict[str, Any]]:
    """All sheets' data rows, in sheet order."""
    rows: list[dict[str, Any]] = []
    for sheet in read_workbook(path):
        rows.extend(sheet.rows)
    return rows
