"""Tender package — record model, acquisition and display helpers."""

from liyao.tenders.fetcher import fetch_tenders
from liyao.tenders.formatting import format_budget
from liyao.tenders.models import Tender, parse_tenders

__all__ = ["fetch_tenders", "format_budget", "parse_tenders", "Tender"]
