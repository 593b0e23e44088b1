from __future__ import annotations

from ..models.ingest_result import FileStatus, IngestRunResult

"""SUMMARY line rendering for an ingest run.

Format:
SUMMARY files={n} ingested={ok} failed={failed} duplicate_files={dup}
new_records={new} duplicate_records={skipped} elapsed_sec={elapsed}
(single line; the ``SUMMARY`` label itself is added by log_summary)
"""

__all__ = [
    "format_elapsed",
    "render_summary_line",
]


def format_elapsed(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: IngestRunResult) -> str:
    """Render the SUMMARY line for a finished run.

    >>> render_summary_line(IngestRunResult(file_stats=[], elapsed_seconds=0))
    'SUMMARY files=0 ingested=0 failed=0 duplicate_files=0 new_records=0 duplicate_records=0 elapsed_sec=0'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"ingested={result.count(FileStatus.SUCCESS)} "
        f"failed={result.count(FileStatus.FAILED)} "
        f"duplicate_files={result.count(FileStatus.DUPLICATE)} "
        f"new_records={result.new_records} "
        f"duplicate_records={result.duplicate_records} "
        f"elapsed_sec={format_elapsed(result.elapsed_seconds)}"
    )
