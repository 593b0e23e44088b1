from __future__ import annotations

import time

import numpy as np
import pytest

from leave_ledger.excel.normalizer import classify_and_clean
from leave_ledger.models.records import CanonicalRecord, EmployeeRecord
from leave_ledger.services.aggregator import aggregate
from leave_ledger.services.ingest import dedupe_records

"""Throughput budget for the in-memory pipeline.

Synthetic data only; budgets are loose so CI stays green on slow runners.
"""

LEAVE_TYPES = np.array(["اجازة اعتيادية", "اجازة مرضية", "زمنية", "اجازة طويلة"])


def _synthetic_rows(employees: int, per_employee: int, seed: int = 42) -> list[dict]:
    rng = np.random.default_rng(seed)
    rows = []
    for e in range(employees):
        name = f"موظف رقم {e}"
        days = rng.integers(1, 29, size=per_employee)
        months = rng.integers(1, 13, size=per_employee)
        types = rng.choice(LEAVE_TYPES, size=per_employee)
        for i in range(per_employee):
            rows.append(
                {
                    "الاسم": name if i == 0 else None,
                    "التاريخ": f"{int(days[i]):02d}-{int(months[i]):02d}-2024",
                    "النوع": str(types[i]),
                    "القيمة": int(rng.integers(1, 6)),
                }
            )
    return rows


@pytest.mark.parametrize("employees,per_employee", [(200, 100)])
def test_pipeline_throughput(employees: int, per_employee: int):
    rows = _synthetic_rows(employees, per_employee)
    roster = [
        EmployeeRecord(id=str(i), name=f"موظف رقم {i}", balance=30, username=str(i), password="p")
        for i in range(employees)
    ]

    start = time.perf_counter()
    records = classify_and_clean(rows).records
    unique, _ = dedupe_records(records, [])
    summaries = aggregate(unique, roster)
    elapsed = time.perf_counter() - start

    assert len(records) == employees * per_employee
    assert all(isinstance(r, CanonicalRecord) for r in unique)
    assert len(summaries) == employees
    throughput = len(rows) / elapsed
    assert elapsed < 30, f"pipeline too slow: {elapsed:.2f}s"
    assert throughput > 1_000, f"throughput {throughput:.0f} rows/s"
