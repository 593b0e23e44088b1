from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import MissingColumnsError
from ..models.cell import Cell, CellKind
from ..services.dates import DATE_TEXT_RE
from ..services.numerals import is_numeric_text

"""Column-role inference for leave spreadsheets.

Headers in the exports we receive are unreliable (merged title rows, blank
labels, free-form Arabic), so columns are identified by content: each cell of
a sample votes for at most one role, votes are summed per column, and roles
are handed out greedily so no column serves two roles.
"""

__all__ = [
    "ROLES",
    "ROLE_PRIORITY",
    "REQUIRED_ROLES",
    "WEEKDAY_NAMES",
    "LEAVE_KEYWORDS",
    "ColumnRoles",
    "score_cell",
    "score_columns",
    "classify_columns",
]

logger = logging.getLogger(__name__)

ROLES = ("name", "date", "day", "type", "value")
ROLE_PRIORITY = ("date", "type", "name", "day", "value")
REQUIRED_ROLES = ("name", "date", "type")
DEFAULT_SAMPLE_SIZE = 50

WEEKDAY_NAMES = frozenset(
    ["الاحد", "الاثنين", "الثلاثاء", "الاربعاء", "الخميس", "الجمعة", "السبت"]
)
LEAVE_KEYWORDS = ("اجازة", "زمنية", "رصد")


@dataclass(frozen=True)
class ColumnRoles:
    """Column label chosen for each semantic role (None when unresolved)."""
    name: str | None = None
    date: str | None = None
    day: str | None = None
    type: str | None = None
    value: str | None = None

    def missing_required(self) -> list[str]:
        return [role for role in REQUIRED_ROLES if getattr(self, role) is None]


def score_cell(cell: Cell) -> dict[str, int]:
    """Votes one cell casts, as ``{role: weight}``.

    The ``id`` bucket only soaks up integer-looking cells (employee numbers,
    serials) and is never assigned as a role.
    """
    if cell.kind is CellKind.EMPTY:
        return {}
    text = cell.text
    if cell.kind is CellKind.DATE or DATE_TEXT_RE.match(text):
        return {"date": 1}
    if text in WEEKDAY_NAMES:
        return {"day": 1}
    lowered = text.lower()
    if any(keyword in lowered for keyword in LEAVE_KEYWORDS):
        return {"type": 1}

    number: float | None = None
    if cell.kind is CellKind.NUMBER:
        number = float(cell.raw)
    elif is_numeric_text(text):
        number = float(text)
    if number is not None and number == number and abs(number) != float("inf"):
        if "." in text:
            return {"value": 3}
        votes: dict[str, int] = {}
        if 0 < number <= 24:
            votes["value"] = 1
        if number > 24:
            votes["id"] = 2
        elif number >= 1:
            votes["id"] = 1
        return votes

    if " " in text and len(text) > 5 and not is_numeric_text(text):
        return {"name": 1}
    return {"other": 1}


def score_columns(rows: Sequence[dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> dict[str, Counter[str]]:
    headers = list(rows[0].keys()) if rows else []
    scores: dict[str, Counter[str]] = {h: Counter() for h in headers}
    for row in rows[: min(len(rows), sample_size)]:
        for header in headers:
            scores[header].update(score_cell(Cell.of(row.get(header))))
    return scores


def _best_header(scores: dict[str, Counter[str]], role: str, used: set[str]) -> str | None:
    best: str | None = None
    max_score = 0
    for header, counter in scores.items():
        if header in used:
            continue
        if counter[role] > max_score:
            max_score = counter[role]
            best = header
    return best


def classify_columns(rows: Sequence[dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> ColumnRoles:
    """Map each role to a column label using a content sample.

    Raises:
        MissingColumnsError: when name, date or type cannot be resolved
    """
    scores = score_columns(rows, sample_size)
    used: set[str] = set()
    mapping: dict[str, str | None] = {}
    for role in ROLE_PRIORITY:
        header = _best_header(scores, role, used)
        mapping[role] = header
        if header is not None:
            used.add(header)
    roles = ColumnRoles(**mapping)
    logger.debug(
        "column roles: %s",
        ", ".join(f"{r}={getattr(roles, r)!r}" for r in ROLES),
    )
    missing = roles.missing_required()
    if missing:
        raise MissingColumnsError(missing)
    return roles
