from __future__ import annotations

from typing import Any

from ..errors import StoreError
from ..models.records import CanonicalRecord, EmployeeRecord
from .json_store import JsonStore

"""Typed access to the three blobs the ledger persists."""

__all__ = [
    "EMPLOYEES_KEY",
    "LEAVE_DATA_KEY",
    "PROCESSED_FILES_KEY",
    "LeaveRepository",
]

# Blob names kept from the browser-storage layout
EMPLOYEES_KEY = "employeeLeaveBalances"
LEAVE_DATA_KEY = "leaveDataRecords"
PROCESSED_FILES_KEY = "processedFileNames"


def _as_list(value: Any, key: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise StoreError(f"store blob '{key}' must be a list, got {type(value).__name__}")
    return value


class LeaveRepository:
    def __init__(self, store: JsonStore) -> None:
        self.store = store

    def load_records(self) -> list[CanonicalRecord]:
        raw = _as_list(self.store.get(LEAVE_DATA_KEY), LEAVE_DATA_KEY)
        return [CanonicalRecord.from_dict(item) for item in raw]

    def save_records(self, records: list[CanonicalRecord]) -> None:
        self.store.set(LEAVE_DATA_KEY, [r.to_dict() for r in records])

    def load_roster(self) -> list[EmployeeRecord]:
        raw = _as_list(self.store.get(EMPLOYEES_KEY), EMPLOYEES_KEY)
        try:
            return [EmployeeRecord.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"invalid employee entry in store: {e}") from e

    def save_roster(self, roster: list[EmployeeRecord]) -> None:
        self.store.set(EMPLOYEES_KEY, [e.to_dict() for e in roster])

    def load_processed_files(self) -> list[str]:
        return [str(name) for name in _as_list(self.store.get(PROCESSED_FILES_KEY), PROCESSED_FILES_KEY)]

    def save_processed_files(self, names: list[str]) -> None:
        self.store.set(PROCESSED_FILES_KEY, list(names))

    def clear(self) -> None:
        self.store.clear()
