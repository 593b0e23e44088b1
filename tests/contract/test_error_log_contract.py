from __future__ import annotations

import json
import re
from pathlib import Path

from leave_ledger.cli import main as cli_main

"""Error log contract: JSON Lines, one object per rejected file."""

REQUIRED_KEYS = {"timestamp", "file", "sheet", "row", "error_type", "message"}
ALLOWED_TYPES = {"DUPLICATE_FILE", "MISSING_COLUMNS", "EMPTY_INPUT", "READ_ERROR", "INGEST_ERROR"}
TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")


def test_error_log_lines(temp_workdir: Path, write_config, make_workbook, leave_rows, capsys):
    good = make_workbook("jan.xlsx", leave_rows)
    bad = make_workbook("numbers.xlsx", [["a", "b"], ["x", 3]])
    assert cli_main(["ingest", str(good), str(bad), str(good)]) == 2

    logs = sorted((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    assert f"INFO error log written: {Path('logs') / logs[0].name}" in capsys.readouterr().out

    entries = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert len(entries) == 2
    for entry in entries:
        assert set(entry) == REQUIRED_KEYS
        assert entry["error_type"] in ALLOWED_TYPES
        assert TIMESTAMP_RE.match(entry["timestamp"])
        assert entry["sheet"] == "<FILE_LEVEL>"
        assert entry["row"] == -1
    missing, duplicate = entries
    assert missing["file"] == "numbers.xlsx"
    assert missing["error_type"] == "MISSING_COLUMNS"
    assert "'الاسم'" in missing["message"]
    assert duplicate["error_type"] == "DUPLICATE_FILE"


def test_no_log_file_without_errors(temp_workdir: Path, write_config, make_workbook, leave_rows):
    assert cli_main(["ingest", str(make_workbook("jan.xlsx", leave_rows))]) == 0
    assert list((temp_workdir / "logs").glob("errors-*.log")) == []
