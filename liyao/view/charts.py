"""Hands the current dataset to chart renderers.

The feed does no aggregation; grouping and counting belong to each
renderer.  It exposes only the records of the active ``Success`` state, so
nothing from a previous crawl is visible while a new one is loading.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from liyao.crawl.controller import CrawlController
from liyao.crawl.state import CrawlState, Success
from liyao.tenders.models import Tender

logger = logging.getLogger(__name__)


class ChartRenderer(Protocol):
    records: Sequence[Tender]


class ChartDataFeed:
    def __init__(self, controller: CrawlController) -> None:
        self._records: tuple[Tender, ...] = ()
        self._visible = False
        self._source: Success | None = None
        self._renderers: list[ChartRenderer] = []
        self._unsubscribe = controller.subscribe(self._on_state)
        self._on_state(controller.state)

    @property
    def records(self) -> tuple[Tender, ...]:
        return self._records

    @property
    def visible(self) -> bool:
        return self._visible

    def attach(self, renderer: ChartRenderer) -> None:
        """Register *renderer*; it receives the current records immediately."""
        self._renderers.append(renderer)
        renderer.records = self._records

    def close(self) -> None:
        self._unsubscribe()
        self._renderers.clear()

    def _on_state(self, state: CrawlState) -> None:
        if isinstance(state, Success):
            if state is self._source:
                return
            self._source = state
            self._records = state.records
            self._visible = True
            logger.debug("Publishing %d record(s) to %d chart(s)", len(self._records), len(self._renderers))
            for renderer in self._renderers:
                renderer.records = self._records
        else:
            self._source = None
            self._records = ()
            self._visible = False
