from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the ingestion error log.

One record per rejected file (or per sheet when the failure can be pinned to
one). ``row`` is -1 when the failure is file-level, which is the case for
every error the classifier and ingestion step raise today.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Workbook file name being ingested
        sheet: Sheet name, or "<FILE_LEVEL>" when the whole workbook was rejected
        row: Row number (1-based). -1 for file-level errors
        error_type: UPPER_SNAKE classification (MISSING_COLUMNS, DUPLICATE_FILE, ...)
        message: User-facing error message
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # asdict keeps the key set fixed
        return json.dumps(asdict(self), ensure_ascii=False)
