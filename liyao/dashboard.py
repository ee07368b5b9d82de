"""Composition root for one dashboard session.

A :class:`Dashboard` is the single place where the crawl controller, the
chart feed and the table view are created and wired together.  Closing it
tears all three down and cancels any outstanding timer.

Data flow::

    trigger ─▶ CrawlController ─(Success)─▶ TenderTable.load  (insertion order, page 1)
                                   └───────▶ ChartDataFeed     (records unchanged)
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from liyao.crawl.controller import CrawlController, Fetch
from liyao.crawl.state import CrawlState, Error, Loading, Success
from liyao.crawl.timer import Scheduler
from liyao.tenders.fetcher import fetch_tenders
from liyao.view.charts import ChartDataFeed
from liyao.view.columns import ColumnKey
from liyao.view.table import TenderTable


class Dashboard:
    def __init__(
        self,
        fetch: Fetch = fetch_tenders,
        *,
        page_size: int | None = None,
        budget_seconds: int | None = None,
        tick_interval: float | None = None,
        scheduler: Scheduler | None = None,
        text_key: Callable[[str], Any] | None = None,
    ) -> None:
        self.controller = CrawlController(
            fetch,
            budget_seconds=budget_seconds,
            tick_interval=tick_interval,
            scheduler=scheduler,
        )
        self.charts = ChartDataFeed(self.controller)
        self.table = TenderTable(page_size=page_size, text_key=text_key)
        self.controller.subscribe(self._on_state)

    def _on_state(self, state: CrawlState) -> None:
        if isinstance(state, Success):
            self.table.load(state.records)
        elif isinstance(state, Loading) and state.elapsed_seconds == 0:
            self.table.load(())

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def crawl(self) -> asyncio.Task[None] | None:
        return self.controller.trigger()

    def sort_by(self, column: ColumnKey) -> None:
        self.table.sort_by(column)

    def close(self) -> None:
        self.charts.close()
        self.controller.close()

    async def __aenter__(self) -> Dashboard:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # What the user sees
    # ------------------------------------------------------------------
    @property
    def trigger_label(self) -> str:
        return self.controller.trigger_label

    @property
    def trigger_enabled(self) -> bool:
        return self.controller.trigger_enabled

    @property
    def loading_visible(self) -> bool:
        return self.controller.is_loading

    @property
    def elapsed_label(self) -> str:
        return f"{self.controller.elapsed_seconds}秒"

    @property
    def percent_label(self) -> str:
        return f"{self.controller.progress_percent}%"

    @property
    def error_visible(self) -> bool:
        return isinstance(self.controller.state, Error)

    @property
    def error_message(self) -> str | None:
        state = self.controller.state
        return state.message if isinstance(state, Error) else None

    @property
    def results_visible(self) -> bool:
        return isinstance(self.controller.state, Success)

    @property
    def charts_visible(self) -> bool:
        return self.charts.visible
