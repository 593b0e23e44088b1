"""Durable key-value storage of records, roster and ingested file names."""

from .json_store import JsonStore
from .repository import LeaveRepository

__all__ = [
    "JsonStore",
    "LeaveRepository",
]
