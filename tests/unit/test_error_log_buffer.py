from __future__ import annotations

import json
import re
from pathlib import Path

from leave_ledger.logging.error_log import ErrorLogBuffer
from leave_ledger.models.error_record import ErrorRecord


def test_flush_without_records_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    buf.record(file="a.xlsx", error_type="MISSING_COLUMNS", message="لم نتمكن", sheet="<FILE_LEVEL>")
    buf.append(ErrorRecord.create("b.xlsx", "Sheet1", 4, "EMPTY_INPUT", "فارغ"))
    assert len(buf) == 2
    path = buf.flush()
    assert path is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [line["file"] for line in lines] == ["a.xlsx", "b.xlsx"]
    assert lines[0]["row"] == -1
    assert lines[0]["message"] == "لم نتمكن"
    assert set(lines[0]) == {"timestamp", "file", "sheet", "row", "error_type", "message"}
    assert len(buf) == 0

    # later flushes append to the same file
    buf.record(file="c.xlsx", error_type="READ_ERROR", message="x")
    assert buf.flush() == path
    assert len(path.read_text(encoding="utf-8").splitlines()) == 3


def test_error_record_timestamp_is_utc_z():
    record = ErrorRecord.create("a.xlsx", "<FILE_LEVEL>", -1, "DUPLICATE_FILE", "m")
    assert record.timestamp.endswith("Z")
    assert json.loads(record.to_json_line())["error_type"] == "DUPLICATE_FILE"
