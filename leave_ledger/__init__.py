"""Leave ledger: spreadsheet leave exports -> canonical records -> summaries.

Public entry points mirror the core operations used by the CLI and by any
presentation layer sitting on top of the stored record set.
"""

from .errors import (
    DuplicateFileError,
    EmptyInputError,
    LedgerError,
    MissingColumnsError,
)
from .excel.normalizer import classify_and_clean
from .services.aggregator import aggregate
from .services.ingest import ingest
from .services.monthly import monthly_report
from .services.names import resolve_name

__version__ = "0.3.0"

__all__ = [
    "__version__",
    # Core operations
    "aggregate",
    "classify_and_clean",
    "ingest",
    "monthly_report",
    "resolve_name",
    # Errors
    "DuplicateFileError",
    "EmptyInputError",
    "LedgerError",
    "MissingColumnsError",
]
