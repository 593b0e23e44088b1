from __future__ import annotations

"""Error taxonomy for the leave ledger.

Classification and ingestion failures are raised as typed exceptions carrying
a user-facing (Arabic) message. Aggregation and reporting never raise for bad
data; malformed cells are coerced instead (see services.numerals /
services.dates).
"""

__all__ = [
    "LedgerError",
    "MissingColumnsError",
    "EmptyInputError",
    "DuplicateFileError",
    "RosterError",
    "StoreError",
]

# Display labels of the required roles, in reporting order.
ROLE_LABELS = {
    "name": "الاسم",
    "date": "التاريخ",
    "type": "نوع الاجازة",
}


class LedgerError(Exception):
    """Base exception for all ledger failures surfaced to callers."""


class MissingColumnsError(LedgerError):
    """Raised when name/date/type columns cannot be inferred from content."""

    def __init__(self, missing_roles: list[str]) -> None:
        self.missing_roles = list(missing_roles)
        labels = "، ".join(f"'{ROLE_LABELS.get(r, r)}'" for r in self.missing_roles)
        super().__init__(
            f"لم نتمكن من تحديد الأعمدة التالية تلقائيًا: {labels}. "
            "يرجى التأكد من أن الملف يحتوي على هذه الأعمدة."
        )


class EmptyInputError(LedgerError):
    """Raised when a file has no rows, or no usable rows after cleaning."""


class DuplicateFileError(LedgerError):
    """Raised when a file name has already been ingested."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f'تم تحميل هذا الملف "{file_name}" مسبقًا.')


class RosterError(LedgerError):
    """Raised for invalid roster mutations (blank fields, duplicate username)."""


class StoreError(LedgerError):
    """Raised when the persisted store cannot be decoded."""
