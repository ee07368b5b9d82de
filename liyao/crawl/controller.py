"""Crawl lifecycle orchestration.

``CrawlController`` owns the :data:`~liyao.crawl.state.CrawlState`, the
:class:`~liyao.crawl.timer.ProgressTimer` and the fetched record list.  One
crawl ("attempt") runs at a time:

    Idle ──trigger──▶ Loading(0) ──tick──▶ Loading(n) ──▶ Success | Error
                          ▲                                     │
                          └───────────────trigger───────────────┘

Every attempt gets a monotonically increasing id.  Tick and fetch-completion
callbacks carry the id of the attempt that scheduled them and are dropped
when it is no longer the current one.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Awaitable, Callable, Sequence

from liyao.crawl.state import CrawlState, Error, Idle, Loading, Success
from liyao.crawl.timer import ProgressTimer, Scheduler, progress_percent
from liyao.tenders.fetcher import fetch_tenders
from liyao.tenders.models import Tender

logger = logging.getLogger(__name__)

READY_LABEL = "開始爬取標案資料"
LOADING_LABEL = "爬取中..."

Fetch = Callable[[], Awaitable[Sequence[Tender]]]
StateListener = Callable[[CrawlState], None]


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class CrawlController:
    """Single-trigger, no-overlap crawl state machine.

    Must be driven from a running asyncio event loop.  Listeners registered
    with :meth:`subscribe` are called synchronously after every transition,
    including each progress tick.
    """

    def __init__(
        self,
        fetch: Fetch = fetch_tenders,
        *,
        budget_seconds: int | None = None,
        tick_interval: float | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._fetch = fetch
        self._timer = ProgressTimer(
            budget_seconds=budget_seconds,
            interval=tick_interval,
            scheduler=scheduler,
        )
        self._state: CrawlState = Idle()
        self._attempt = 0
        self._task: asyncio.Task[None] | None = None
        self._listeners: list[StateListener] = []
        self._closed = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> CrawlState:
        return self._state

    @property
    def attempt(self) -> int:
        return self._attempt

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def records(self) -> tuple[Tender, ...]:
        """Records of the active ``Success`` state; empty otherwise."""
        if isinstance(self._state, Success):
            return self._state.records
        return ()

    @property
    def trigger_enabled(self) -> bool:
        return not self.is_loading

    @property
    def trigger_label(self) -> str:
        return LOADING_LABEL if self.is_loading else READY_LABEL

    @property
    def elapsed_seconds(self) -> int:
        if isinstance(self._state, Loading):
            return self._state.elapsed_seconds
        return 0

    @property
    def progress_percent(self) -> int:
        return progress_percent(self.elapsed_seconds, self._timer.budget_seconds)

    @property
    def timer_running(self) -> bool:
        return self._timer.running

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, state: CrawlState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def trigger(self) -> asyncio.Task[None] | None:
        """Start a new crawl attempt.

        Ignored (returns ``None``) while a crawl is already loading or after
        :meth:`close`.  Otherwise enters ``Loading(0)``, starts the progress
        timer, issues the fetch and returns the task awaiting it.

        Raises:
            RuntimeError: If called without a running event loop.
        """
        if self._closed:
            logger.debug("Trigger ignored: controller is closed")
            return None
        if self.is_loading:
            logger.debug("Trigger ignored: attempt %d still loading", self._attempt)
            return None

        loop = asyncio.get_running_loop()
        self._attempt += 1
        attempt = self._attempt
        logger.info("Crawl attempt %d started", attempt)

        self._set_state(Loading(elapsed_seconds=0))
        self._timer.start(partial(self._on_tick, attempt))
        self._task = loop.create_task(self._acquire(attempt))
        return self._task

    async def _acquire(self, attempt: int) -> None:
        try:
            records = await self._fetch()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Crawl attempt %d failed: %s", attempt, exc)
            self._finish(attempt, Error(message=_error_message(exc)))
        else:
            self._finish(attempt, Success(records=tuple(records)))

    def _finish(self, attempt: int, state: CrawlState) -> None:
        if attempt != self._attempt or not self.is_loading:
            logger.debug("Dropping stale completion of attempt %d", attempt)
            return
        self._timer.stop()
        self._task = None
        if isinstance(state, Success):
            logger.info("Crawl attempt %d succeeded with %d record(s)", attempt, len(state.records))
        self._set_state(state)

    def _on_tick(self, attempt: int, elapsed_seconds: int) -> None:
        if attempt != self._attempt or not self.is_loading:
            logger.debug("Dropping stale tick of attempt %d", attempt)
            return
        self._set_state(Loading(elapsed_seconds=elapsed_seconds))

    def close(self) -> None:
        """Cancel the timer and any pending fetch; further triggers are ignored.

        A controller closed mid-crawl returns to ``Idle``.  Idempotent.
        """
        if self._closed:
            return
        self._closed = True
        self._attempt += 1
        self._timer.stop()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        if self.is_loading:
            self._set_state(Idle())
        self._listeners.clear()
        logger.debug("Controller closed")

    async def __aenter__(self) -> CrawlController:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
