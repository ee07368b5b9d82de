"""Crawl lifecycle states.

``CrawlState`` is a tagged union: exactly one of :class:`Idle`,
:class:`Loading`, :class:`Success` or :class:`Error` is active at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from liyao.tenders.models import Tender


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    elapsed_seconds: int = 0


@dataclass(frozen=True)
class Success:
    records: tuple[Tender, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Error:
    message: str


CrawlState = Union[Idle, Loading, Success, Error]
