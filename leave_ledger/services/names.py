from __future__ import annotations

import re
from collections.abc import Sequence

from ..models.records import EmployeeRecord

"""Canonical name resolution.

Sheet names drift from roster names (missing middle names, hamza on the
alef, taa marbuta written as haa, stray spaces). Names are compared in a
normalized form; when no exact match exists we fall back to substring
containment in either direction and prefer the closest length.
"""

__all__ = [
    "normalize_name",
    "arabic_sort_key",
    "NameResolver",
    "resolve_name",
]

_WHITESPACE_RE = re.compile(r"\s+")
_ALEF_VARIANTS_RE = re.compile("[أإآ]")

# Collation: hamza-carrying alefs sort with the bare alef, harakat and tatweel are ignored
_COLLATION_FOLD = str.maketrans({"أ": "ا", "إ": "ا", "آ": "ا", "ٱ": "ا", "ـ": None})
_HARAKAT_RE = re.compile("[\u064b-\u0652\u0670]")


def normalize_name(name: str) -> str:
    if not name:
        return ""
    text = _WHITESPACE_RE.sub("", name.strip())
    text = _ALEF_VARIANTS_RE.sub("ا", text)
    return text.replace("ة", "ه").replace("ى", "ي")


def arabic_sort_key(text: str) -> tuple[str, str]:
    """Sort key approximating Arabic locale collation; ties fall back to the raw text."""
    primary = _HARAKAT_RE.sub("", text.translate(_COLLATION_FOLD))
    return (primary, text)


class NameResolver:
    """Resolve sheet names against one roster snapshot.

    Results are memoized per instance, so create one resolver per
    aggregation/report run; a roster change needs a new resolver.
    """

    def __init__(self, roster: Sequence[EmployeeRecord]) -> None:
        self._roster = list(roster)
        self._normalized = [(normalize_name(emp.name), emp) for emp in self._roster]
        self._exact: dict[str, EmployeeRecord] = {}
        for key, emp in self._normalized:
            self._exact[key] = emp
        self._cache: dict[str, str] = {}

    def resolve(self, sheet_name: str) -> str:
        if not sheet_name:
            return sheet_name
        cached = self._cache.get(sheet_name)
        if cached is not None:
            return cached
        resolved = self._resolve_uncached(sheet_name)
        self._cache[sheet_name] = resolved
        return resolved

    def _resolve_uncached(self, sheet_name: str) -> str:
        target = normalize_name(sheet_name)
        exact = self._exact.get(target)
        if exact is not None:
            return exact.name

        candidates = [
            (key, emp)
            for key, emp in self._normalized
            if target in key or key in target
        ]
        if not candidates:
            return sheet_name
        # min() keeps the first of equally close candidates, i.e. roster order
        _, best = min(candidates, key=lambda c: abs(len(c[0]) - len(target)))
        return best.name


def resolve_name(sheet_name: str, roster: Sequence[EmployeeRecord]) -> str:
    """One-off resolution; use NameResolver directly for batches."""
    return NameResolver(roster).resolve(sheet_name)
