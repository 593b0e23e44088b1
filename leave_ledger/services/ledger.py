from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from ..config.loader import LedgerConfig
from ..errors import DuplicateFileError, EmptyInputError, LedgerError, MissingColumnsError
from ..excel.classifier import DEFAULT_SAMPLE_SIZE
from ..excel.reader import WorkbookReadError, read_workbook_rows
from ..logging.error_log import ErrorLogBuffer
from ..models.ingest_result import FileStat, FileStatus, IngestOutcome, IngestRunResult
from ..models.records import DEFAULT_WORKDAY_HOURS, CanonicalRecord, EmployeeRecord
from ..models.summary import EmployeeSummary, MonthlyReportRow
from ..store.json_store import JsonStore
from ..store.repository import LeaveRepository
from . import roster as roster_ops
from .aggregator import aggregate
from .ingest import describe_outcome, ingest
from .monthly import monthly_report
from .progress import ProgressTracker
from .views import filter_records_by_period, filter_summaries

"""LeaveLedger: the stored record set plus the derived summaries.

Owns the single-writer mutation path: every ingest or roster change is
persisted first, then the summaries are rebuilt from scratch. Batch ingest
never aborts on a bad file; each failure becomes a FileStat and an
ErrorRecord in the JSON Lines error log.
"""

__all__ = [
    "FILE_LEVEL_SHEET",
    "ERROR_TYPES",
    "scan_workbooks",
    "LeaveLedger",
]

logger = logging.getLogger(__name__)

FILE_LEVEL_SHEET = "<FILE_LEVEL>"

ERROR_TYPES: dict[type[LedgerError], str] = {
    DuplicateFileError: "DUPLICATE_FILE",
    MissingColumnsError: "MISSING_COLUMNS",
    EmptyInputError: "EMPTY_INPUT",
    WorkbookReadError: "READ_ERROR",
}

WORKBOOK_SUFFIXES = (".xlsx", ".xlsm")


def scan_workbooks(directory: Path) -> list[Path]:
    """Workbooks directly under ``directory`` (non-recursive), sorted by name."""
    if not directory.is_dir():
        raise WorkbookReadError(f"not a directory: {directory}")
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in WORKBOOK_SUFFIXES and not p.name.startswith("~$")
    )


class LeaveLedger:
    def __init__(
        self,
        repository: LeaveRepository,
        *,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        default_workday_hours: int = DEFAULT_WORKDAY_HOURS,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.repository = repository
        self.sample_size = sample_size
        self.default_workday_hours = default_workday_hours
        self.error_log = error_log if error_log is not None else ErrorLogBuffer()
        self._records = repository.load_records()
        self._roster = repository.load_roster()
        self._processed_files = repository.load_processed_files()
        self._summaries: list[EmployeeSummary] | None = None

    @classmethod
    def from_config(cls, config: LedgerConfig) -> LeaveLedger:
        return cls(
            LeaveRepository(JsonStore(config.store_path)),
            sample_size=config.sample_size,
            default_workday_hours=config.default_workday_hours,
            error_log=ErrorLogBuffer(config.logs_dir),
        )

    @property
    def records(self) -> list[CanonicalRecord]:
        return list(self._records)

    @property
    def roster(self) -> list[EmployeeRecord]:
        return list(self._roster)

    @property
    def processed_files(self) -> list[str]:
        return list(self._processed_files)

    # ---- derived state ----

    def recompute(self) -> list[EmployeeSummary]:
        self._summaries = aggregate(self._records, self._roster, self.default_workday_hours)
        return self._summaries

    @property
    def summaries(self) -> list[EmployeeSummary]:
        if self._summaries is None:
            return self.recompute()
        return self._summaries

    def summaries_for(self, year: int | None = None, month: int | None = None, term: str = "") -> list[EmployeeSummary]:
        """Summaries of the records in a period, optionally filtered by name."""
        if year is None:
            result = self.summaries
        else:
            period = filter_records_by_period(self._records, year, month)
            result = aggregate(period, self._roster, self.default_workday_hours)
        return filter_summaries(result, term)

    def monthly_report(self, year: int, month: int) -> list[MonthlyReportRow]:
        return monthly_report(year, month, self._records, self._roster, self.default_workday_hours)

    # ---- ingestion ----

    def ingest_rows(self, file_name: str, rows: Sequence[dict[str, Any]]) -> IngestOutcome:
        outcome = ingest(file_name, rows, self._records, self._processed_files, self.sample_size)
        records = self._records + outcome.new_records
        processed_files = self._processed_files + [file_name]
        # in-memory state follows the store only once both blobs are written
        self.repository.save_records(records)
        self.repository.save_processed_files(processed_files)
        self._records = records
        self._processed_files = processed_files
        self.recompute()
        return outcome

    def ingest_file(self, path: Path) -> IngestOutcome:
        path = Path(path)
        if path.name in self._processed_files:
            raise DuplicateFileError(path.name)
        return self.ingest_rows(path.name, read_workbook_rows(path))

    def _record_failure(self, path: Path, error: LedgerError) -> None:
        error_type = ERROR_TYPES.get(type(error), "INGEST_ERROR")
        self.error_log.record(file=path.name, sheet=FILE_LEVEL_SHEET, error_type=error_type, message=str(error))

    def ingest_files(self, paths: Iterable[Path]) -> IngestRunResult:
        """Ingest workbooks one by one, collecting per-file results."""
        paths = [Path(p) for p in paths]
        start = time.perf_counter()
        stats: list[FileStat] = []
        with ProgressTracker(len(paths)) as progress:
            for path in paths:
                progress.start_file(path)
                try:
                    outcome = self.ingest_file(path)
                except DuplicateFileError as e:
                    logger.warning("%s: %s", path.name, e)
                    self._record_failure(path, e)
                    stats.append(FileStat(path.name, FileStatus.DUPLICATE, error=str(e)))
                except (MissingColumnsError, EmptyInputError, WorkbookReadError) as e:
                    logger.warning("%s: %s", path.name, e)
                    self._record_failure(path, e)
                    stats.append(FileStat(path.name, FileStatus.FAILED, error=str(e)))
                else:
                    message = describe_outcome(path.name, outcome)
                    if outcome.new_records:
                        logger.info(message)
                    else:
                        logger.warning(message)
                    stats.append(
                        FileStat(
                            path.name,
                            FileStatus.SUCCESS,
                            new_records=len(outcome.new_records),
                            duplicate_records=outcome.duplicate_count,
                        )
                    )
                progress.set_postfix(records=len(self._records))
                progress.finish_file()

        log_path = self.error_log.flush()
        if log_path is not None:
            logger.info("error log written: %s", log_path)
        return IngestRunResult(file_stats=stats, elapsed_seconds=time.perf_counter() - start)

    # ---- roster ----

    def _set_roster(self, roster: list[EmployeeRecord]) -> None:
        self._roster = roster
        self.repository.save_roster(roster)
        self.recompute()

    def add_employee(self, name: str, balance: int, username: str, password: str, **kwargs: Any) -> EmployeeRecord:
        roster, employee = roster_ops.add_employee(self._roster, name, balance, username, password, **kwargs)
        self._set_roster(roster)
        return employee

    def update_employee(self, employee_id: str, **changes: Any) -> None:
        self._set_roster(roster_ops.update_employee(self._roster, employee_id, **changes))

    def remove_employee(self, employee_id: str) -> None:
        self._set_roster(roster_ops.remove_employee(self._roster, employee_id))

    def deduct_balance(self, days: int = roster_ops.BALANCE_CORRECTION_DAYS) -> None:
        self._set_roster(roster_ops.deduct_balance(self._roster, days))

    def seed_roster(
        self, names: Sequence[str], balances: Sequence[int] = (), hourly_balances: Sequence[float] = ()
    ) -> bool:
        """Install an initial roster when none is stored; returns True if seeded."""
        if self._roster:
            return False
        self._set_roster(roster_ops.seed_roster(names, balances, hourly_balances))
        return True

    def clear_all(self) -> None:
        self.repository.clear()
        self._records = []
        self._roster = []
        self._processed_files = []
        self._summaries = None
