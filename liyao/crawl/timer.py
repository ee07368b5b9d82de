"""Time-driven progress estimate for an in-flight crawl.

The acquisition call is indeterminate, so progress is simulated: one tick
per ``interval`` seconds, mapped linearly onto a fixed duration budget.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

from liyao.config import settings

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with the ``call_later`` half of :class:`asyncio.AbstractEventLoop`."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable: ...


def progress_percent(elapsed_seconds: int, budget_seconds: int) -> int:
    """Return ``min(100, floor(elapsed / budget * 100))``."""
    return min(100, elapsed_seconds * 100 // budget_seconds)


class ProgressTimer:
    """Cancellable repeating tick source.

    Each :meth:`start` opens a new generation; a callback scheduled by an
    older generation finds the generation changed and returns without
    touching anything, so nothing keeps ticking once :meth:`stop` ran.
    """

    def __init__(
        self,
        budget_seconds: int | None = None,
        interval: float | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.budget_seconds = budget_seconds if budget_seconds is not None else settings.progress_budget
        self.interval = interval if interval is not None else settings.tick_interval
        if self.budget_seconds <= 0:
            raise ValueError(f"budget_seconds must be positive, got {self.budget_seconds}")
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")

        self._scheduler = scheduler
        self._generation = 0
        self._handle: Cancellable | None = None
        self._on_tick: Callable[[int], None] | None = None
        self.elapsed_seconds = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def percent(self) -> int:
        return progress_percent(self.elapsed_seconds, self.budget_seconds)

    def start(self, on_tick: Callable[[int], None]) -> None:
        """Reset to zero and call *on_tick(elapsed_seconds)* once per interval."""
        self.stop()
        self.elapsed_seconds = 0
        self._on_tick = on_tick
        self._schedule(self._generation)

    def stop(self) -> None:
        """Cancel the pending tick.  Safe to call when not running."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._on_tick = None
        self._generation += 1

    def _schedule(self, generation: int) -> None:
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(self.interval, self._fire, generation)

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self._on_tick is None:
            logger.debug("Dropping stale tick from timer generation %d", generation)
            return
        self.elapsed_seconds += 1
        on_tick = self._on_tick
        self._schedule(generation)
        on_tick(self.elapsed_seconds)
