from __future__ import annotations

import re
from pathlib import Path

from leave_ledger.cli import main as cli_main

"""SUMMARY line contract: one line, fixed key order, integer counts."""

SUMMARY_RE = re.compile(
    r"^SUMMARY files=(\d+) ingested=(\d+) failed=(\d+) duplicate_files=(\d+) "
    r"new_records=(\d+) duplicate_records=(\d+) elapsed_sec=(\d+(?:\.\d+)?)$"
)


def _summary_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("SUMMARY")]


def test_summary_line_format(temp_workdir: Path, write_config, make_workbook, leave_rows, capsys):
    good = make_workbook("jan.xlsx", leave_rows)
    bad = make_workbook("numbers.xlsx", [["a", "b"], ["x", 3]])
    cli_main(["ingest", str(good), str(bad), str(good)])

    [line] = _summary_lines(capsys.readouterr().out)
    m = SUMMARY_RE.match(line)
    assert m is not None, line
    files, ingested, failed, dup_files, new_records, dup_records, _ = m.groups()
    assert (files, ingested, failed, dup_files, new_records, dup_records) == ("3", "1", "1", "1", "6", "0")
    assert int(ingested) + int(failed) + int(dup_files) == int(files)


def test_summary_line_for_empty_directory(temp_workdir: Path, write_config, capsys):
    assert cli_main(["ingest", "data"]) == 0
    [line] = _summary_lines(capsys.readouterr().out)
    assert SUMMARY_RE.match(line).group(1) == "0"
