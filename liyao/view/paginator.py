"""Fixed-size pagination over a sorted sequence.

``PageState`` is immutable; navigation returns a new state clamped to
``[1, total_pages]``.  Nothing here raises for out-of-range page numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence, TypeVar

from liyao.config import settings

T = TypeVar("T")


def total_pages(total_records: int, page_size: int) -> int:
    """``ceil(total_records / page_size)``, never less than 1."""
    return max(1, -(-total_records // page_size))


@dataclass(frozen=True)
class PageState:
    current_page: int = 1
    page_size: int = field(default_factory=lambda: settings.page_size)

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    def clamp(self, total_records: int) -> PageState:
        page = min(max(self.current_page, 1), total_pages(total_records, self.page_size))
        if page == self.current_page:
            return self
        return replace(self, current_page=page)

    def go_to(self, page: int, total_records: int) -> PageState:
        return replace(self, current_page=page).clamp(total_records)

    def next(self, total_records: int) -> PageState:
        return self.go_to(self.current_page + 1, total_records)

    def previous(self, total_records: int) -> PageState:
        return self.go_to(self.current_page - 1, total_records)

    def first(self) -> PageState:
        return replace(self, current_page=1)


def page_slice(items: Sequence[T], state: PageState) -> list[T]:
    """Items ``[(page-1)*size, page*size)`` of *items*, clamped to its bounds."""
    start = (state.current_page - 1) * state.page_size
    return list(items[start:start + state.page_size])


def page_label(state: PageState, total_records: int) -> str:
    return f"{state.current_page} / {total_pages(total_records, state.page_size)}"


def page_number_label(state: PageState) -> str:
    return f"第 {state.current_page} 頁"
