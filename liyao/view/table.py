"""Sort and pagination view-state for the tender table.

``TenderTable`` owns a :class:`~liyao.view.sorter.SortState` and a
:class:`~liyao.view.paginator.PageState`.  The visible rows are recomputed
from scratch whenever the records or the sort change; the record list itself
is never modified.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from liyao.tenders.formatting import format_budget
from liyao.tenders.models import Tender
from liyao.view.collation import text_sort_key
from liyao.view.columns import COLUMNS, ColumnKey
from liyao.view.paginator import PageState, page_label, page_number_label, page_slice, total_pages
from liyao.view.sorter import SortState, sort_records


def format_cell(record: Tender, column: ColumnKey) -> str:
    if column is ColumnKey.BUDGET:
        return format_budget(record.budget)
    return getattr(record, column.value)


class TenderTable:
    def __init__(
        self,
        page_size: int | None = None,
        text_key: Callable[[str], Any] | None = None,
    ) -> None:
        self._page = PageState(page_size=page_size) if page_size is not None else PageState()
        self._text_key = text_key or text_sort_key()
        self._records: tuple[Tender, ...] = ()
        self._sort = SortState()
        self._sorted: list[Tender] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def sort_state(self) -> SortState:
        return self._sort

    @property
    def page_state(self) -> PageState:
        return self._page

    @property
    def total_records(self) -> int:
        return len(self._records)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self._sorted), self._page.page_size)

    @property
    def sorted_records(self) -> list[Tender]:
        return list(self._sorted)

    @property
    def rows(self) -> list[Tender]:
        return page_slice(self._sorted, self._page)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def load(self, records: Sequence[Tender]) -> None:
        """Replace the dataset: insertion order, first page."""
        self._records = tuple(records)
        self._sort = SortState()
        self._resort()

    def sort_by(self, column: ColumnKey) -> None:
        """Header click on *column*; always returns to the first page."""
        self._sort = self._sort.toggle(column)
        self._resort()

    def next_page(self) -> None:
        self._page = self._page.next(len(self._sorted))

    def previous_page(self) -> None:
        self._page = self._page.previous(len(self._sorted))

    def go_to(self, page: int) -> None:
        self._page = self._page.go_to(page, len(self._sorted))

    def _resort(self) -> None:
        self._sorted = sort_records(self._records, self._sort, self._text_key)
        self._page = self._page.first().clamp(len(self._sorted))

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------
    @property
    def summary_label(self) -> str:
        return f"共 {self.total_records} 筆"

    @property
    def page_label(self) -> str:
        return page_label(self._page, len(self._sorted))

    @property
    def page_number_label(self) -> str:
        return page_number_label(self._page)

    def header_labels(self) -> list[str]:
        labels = []
        for column in COLUMNS:
            label = column.header
            if column == self._sort.column_key:
                label = f"{label} {self._sort.direction.arrow}"
            labels.append(label)
        return labels

    def row_cells(self) -> list[list[str]]:
        return [[format_cell(record, column) for column in COLUMNS] for record in self.rows]
