"""Shared fixtures: sample tenders and a deterministic timer scheduler."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Any, Callable

import pytest

from liyao.tenders.models import Tender, parse_tenders

SAMPLE_PAYLOAD: list[dict[str, Any]] = [
    {
        "id": 1,
        "agency_name": "臺灣菸酒股份有限公司善化啤酒廠",
        "tender_name": "善化啤酒廠冷凍室甘水輸送泵",
        "tender_mode": "公開招標",
        "procurement_nature": "財物類",
        "announcement_date": "115/02/23",
        "deadline": "115/02/25",
        "budget": "2995020",
    },
    {
        "id": 2,
        "agency_name": "國立臺灣大學醫學院附設醫院",
        "tender_name": "新竹醫院115年家具更新案",
        "tender_mode": "限制性招標",
        "procurement_nature": "工程類",
        "announcement_date": "115/02/23",
        "deadline": "115/03/02",
        "budget": "9116383",
    },
    {
        "id": 3,
        "agency_name": "測試機關C",
        "tender_name": "測試標案C",
        "tender_mode": "公開招標",
        "procurement_nature": "勞務類",
        "announcement_date": "115/02/24",
        "deadline": "115/03/05",
        "budget": "500000",
    },
]


def make_tender(tender_id: int, **overrides: Any) -> Tender:
    data: dict[str, Any] = {
        "id": tender_id,
        "agency_name": f"機關{tender_id}",
        "tender_name": f"標案{tender_id}",
        "tender_mode": "公開招標",
        "procurement_nature": "財物類",
        "announcement_date": "115/02/23",
        "deadline": "115/03/01",
        "budget": 1000 * tender_id,
    }
    data.update(overrides)
    return Tender.model_validate(data)


class _FakeHandle:
    def __init__(self, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Stand-in for the event loop's ``call_later`` with a manual clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, _FakeHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _FakeHandle:
        handle = _FakeHandle(callback, args)
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), handle))
        return handle

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            self.now = when
            if not handle.cancelled:
                handle.callback(*handle.args)
        self.now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)


class GatedFetch:
    """Fetch collaborator whose result is released by the test."""

    def __init__(self) -> None:
        self.calls = 0
        self._futures: list[asyncio.Future] = []

    async def __call__(self) -> list[Tender]:
        self.calls += 1
        future = asyncio.get_running_loop().create_future()
        self._futures.append(future)
        return await future

    def resolve(self, records: list[Tender]) -> None:
        self._futures[-1].set_result(records)

    def reject(self, exc: BaseException) -> None:
        self._futures[-1].set_exception(exc)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def gated_fetch() -> GatedFetch:
    return GatedFetch()


@pytest.fixture
def sample_tenders() -> list[Tender]:
    return parse_tenders(SAMPLE_PAYLOAD)


@pytest.fixture
def tender_factory() -> Callable[..., Tender]:
    return make_tender


@pytest.fixture
def sample_payload() -> list[dict[str, Any]]:
    return [dict(item) for item in SAMPLE_PAYLOAD]
