"""Ordered views of a record list.

Sorting never mutates its input and is stable in both directions: records
with equal keys keep their original relative order.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Sequence

from liyao.tenders.models import Tender
from liyao.view.collation import text_sort_key
from liyao.view.columns import ColumnKey


class Direction(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def arrow(self) -> str:
        return "▲" if self is Direction.ASCENDING else "▼"

    def flipped(self) -> Direction:
        if self is Direction.ASCENDING:
            return Direction.DESCENDING
        return Direction.ASCENDING


@dataclass(frozen=True)
class SortState:
    """``column_key=None`` means insertion order."""

    column_key: ColumnKey | None = None
    direction: Direction = Direction.ASCENDING

    def toggle(self, column: ColumnKey) -> SortState:
        """Header click: same column flips direction, a new one starts ascending."""
        if column == self.column_key:
            return replace(self, direction=self.direction.flipped())
        return SortState(column_key=column, direction=Direction.ASCENDING)


def _budget_key(record: Tender) -> tuple[int, Decimal]:
    # Missing budgets order below every number.
    if record.budget is None:
        return (0, Decimal(0))
    return (1, record.budget)


def sort_key_for(column: ColumnKey, text_key: Callable[[str], Any] | None = None) -> Callable[[Tender], Any]:
    if column.is_numeric:
        return _budget_key
    collate = text_key or text_sort_key()
    attr = column.value
    return lambda record: collate(getattr(record, attr))


def sort_records(
    records: Sequence[Tender],
    state: SortState,
    text_key: Callable[[str], Any] | None = None,
) -> list[Tender]:
    """Return a new list of *records* ordered by *state*."""
    if state.column_key is None:
        return list(records)
    return sorted(
        records,
        key=sort_key_for(state.column_key, text_key),
        reverse=state.direction is Direction.DESCENDING,
    )
