from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .records import CanonicalRecord

"""Ingestion result models.

IngestOutcome is what a single ``ingest`` call returns; FileStat and
IngestRunResult aggregate a multi-file run for the SUMMARY line.
"""

__all__ = [
    "FileStatus",
    "IngestOutcome",
    "FileStat",
    "IngestRunResult",
]


class FileStatus(Enum):
    """Outcome of one workbook in a batch run.

    - SUCCESS: cleaned and appended (possibly zero new records, all duplicates)
    - DUPLICATE: file name already ingested, rejected untouched
    - FAILED: unreadable, missing columns, or no usable rows
    """
    SUCCESS = "success"
    DUPLICATE = "duplicate"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestOutcome:
    new_records: list[CanonicalRecord]
    duplicate_count: int


@dataclass(frozen=True)
class FileStat:
    file_name: str
    status: FileStatus
    new_records: int = 0
    duplicate_records: int = 0
    error: str | None = None


@dataclass(frozen=True)
class IngestRunResult:
    """Aggregated results of ingesting a batch of workbooks."""
    file_stats: list[FileStat]
    elapsed_seconds: float

    @property
    def total_files(self) -> int:
        return len(self.file_stats)

    def count(self, status: FileStatus) -> int:
        return sum(1 for s in self.file_stats if s.status is status)

    @property
    def new_records(self) -> int:
        return sum(s.new_records for s in self.file_stats)

    @property
    def duplicate_records(self) -> int:
        return sum(s.duplicate_records for s in self.file_stats)
