"""Crawl package — lifecycle state machine and progress timer."""

from liyao.crawl.controller import LOADING_LABEL, READY_LABEL, CrawlController
from liyao.crawl.state import CrawlState, Error, Idle, Loading, Success
from liyao.crawl.timer import ProgressTimer, progress_percent

__all__ = [
    "CrawlController",
    "CrawlState",
    "Error",
    "Idle",
    "Loading",
    "LOADING_LABEL",
    "ProgressTimer",
    "progress_percent",
    "READY_LABEL",
    "Success",
]
