"""Table columns and their display headers."""

from __future__ import annotations

from enum import Enum


class ColumnKey(str, Enum):
    AGENCY_NAME = "agency_name"
    TENDER_NAME = "tender_name"
    TENDER_MODE = "tender_mode"
    PROCUREMENT_NATURE = "procurement_nature"
    ANNOUNCEMENT_DATE = "announcement_date"
    DEADLINE = "deadline"
    BUDGET = "budget"

    @property
    def header(self) -> str:
        return HEADERS[self]

    @property
    def is_numeric(self) -> bool:
        return self is ColumnKey.BUDGET


# Display order of the table.
HEADERS: dict[ColumnKey, str] = {
    ColumnKey.AGENCY_NAME: "機關名稱",
    ColumnKey.TENDER_NAME: "標案名稱",
    ColumnKey.TENDER_MODE: "招標方式",
    ColumnKey.PROCUREMENT_NATURE: "採購性質",
    ColumnKey.ANNOUNCEMENT_DATE: "公告日期",
    ColumnKey.DEADLINE: "截止投標",
    ColumnKey.BUDGET: "預算金額",
}

COLUMNS: tuple[ColumnKey, ...] = tuple(HEADERS)


def parse_column(value: str) -> ColumnKey | None:
    """Resolve a column from its key (``budget``) or header (``預算金額``)."""
    value = value.strip()
    for column in COLUMNS:
        if value in (column.value, column.header):
            return column
    return None
