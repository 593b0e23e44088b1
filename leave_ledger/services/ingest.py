from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Sequence
from typing import Any

from ..errors import DuplicateFileError, EmptyInputError
from ..excel.classifier import DEFAULT_SAMPLE_SIZE
from ..excel.normalizer import classify_and_clean
from ..models.ingest_result import IngestOutcome
from ..models.records import CanonicalRecord
from .numerals import to_arabic_numerals

"""Ingestion of one parsed workbook into the stored record set.

The file-name check runs before any parsing; duplicate records (against the
store and within the file itself) are dropped and reported as a count.
"""

__all__ = [
    "dedupe_records",
    "ingest",
    "describe_outcome",
]

logger = logging.getLogger(__name__)


def dedupe_records(
    candidates: Iterable[CanonicalRecord], existing: Iterable[CanonicalRecord]
) -> tuple[list[CanonicalRecord], int]:
    """Return (records not seen before, number dropped as duplicates)."""
    seen = {r.dedup_key() for r in existing}
    unique: list[CanonicalRecord] = []
    duplicates = 0
    for record in candidates:
        key = record.dedup_key()
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        unique.append(record)
    return unique, duplicates


def ingest(
    file_name: str,
    raw_rows: Sequence[dict[str, Any]],
    existing_records: Sequence[CanonicalRecord],
    processed_files: Collection[str] = (),
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> IngestOutcome:
    """Classify, clean and dedupe one file's rows.

    Raises:
        DuplicateFileError: file name already ingested
        EmptyInputError: no rows, or no usable rows after cleaning
        MissingColumnsError: name/date/type columns not found
    """
    if file_name in processed_files:
        raise DuplicateFileError(file_name)
    if not raw_rows:
        raise EmptyInputError("الملف فارغ أو لا يحتوي على بيانات.")

    cleaned = classify_and_clean(raw_rows, sample_size)
    if not cleaned.records:
        raise EmptyInputError("لم يتم العثور على بيانات صالحة في الملف بعد المعالجة.")

    new_records, duplicate_count = dedupe_records(cleaned.records, existing_records)
    logger.debug(
        "%s: %d cleaned, %d new, %d duplicate",
        file_name, len(cleaned.records), len(new_records), duplicate_count,
    )
    return IngestOutcome(new_records=new_records, duplicate_count=duplicate_count)


def describe_outcome(file_name: str, outcome: IngestOutcome) -> str:
    """User-facing notification text for an ingestion outcome."""
    if not outcome.new_records:
        return (
            f'الملف "{file_name}" لم يضف أي سجلات جديدة. '
            f"تم تجاهل {to_arabic_numerals(outcome.duplicate_count)} سجلات لكونها مكررة."
        )
    message = (
        f'تمت معالجة الملف "{file_name}". '
        f"أُضيفت {to_arabic_numerals(len(outcome.new_records))} سجلات جديدة."
    )
    if outcome.duplicate_count > 0:
        message += f" وتم تجاهل {to_arabic_numerals(outcome.duplicate_count)} سجلات مكررة."
    return message
