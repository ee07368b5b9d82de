"""View package — sorting, pagination, chart feed and table view-state."""

from liyao.view.charts import ChartDataFeed, ChartRenderer
from liyao.view.columns import COLUMNS, ColumnKey, parse_column
from liyao.view.paginator import PageState, page_slice, total_pages
from liyao.view.sorter import Direction, SortState, sort_records
from liyao.view.table import TenderTable

__all__ = [
    "ChartDataFeed",
    "ChartRenderer",
    "ColumnKey",
    "COLUMNS",
    "Direction",
    "PageState",
    "page_slice",
    "parse_column",
    "sort_records",
    "SortState",
    "TenderTable",
    "total_pages",
]
