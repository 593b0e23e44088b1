"""Domain models for the leave ledger.

Cells and canonical records are produced by ingestion; summaries and report
rows are produced by aggregation and never persisted.
"""

from .cell import Cell, CellKind
from .error_record import ErrorRecord
from .ingest_result import FileStat, FileStatus, IngestOutcome, IngestRunResult
from .records import CANONICAL_HEADERS, CanonicalRecord, EmployeeRecord
from .summary import (
    EmployeeSummary,
    HourlyLeaves,
    LeaveEntry,
    LeaveSummaryItem,
    MonthlyReportRow,
    RegularLeaves,
)

__all__ = [
    # Ingestion models
    "Cell",
    "CellKind",
    "CANONICAL_HEADERS",
    "CanonicalRecord",
    "EmployeeRecord",
    "ErrorRecord",
    "FileStat",
    "FileStatus",
    "IngestOutcome",
    "IngestRunResult",
    # Aggregation models
    "EmployeeSummary",
    "HourlyLeaves",
    "LeaveEntry",
    "LeaveSummaryItem",
    "MonthlyReportRow",
    "RegularLeaves",
]
