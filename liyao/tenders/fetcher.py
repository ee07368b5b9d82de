"""Acquisition collaborator: fetches the current tender set over HTTP."""

from __future__ import annotations

import logging

import httpx

from liyao.config import settings
from liyao.tenders.models import Tender, parse_tenders

logger = logging.getLogger(__name__)

TENDERS_PATH = "/api/tenders"


async def fetch_tenders() -> list[Tender]:
    """Fetch every tender from ``GET /api/tenders`` on the configured API.

    Takes no parameters; the base address and timeout come from
    :data:`liyao.config.settings`.  Transport errors are raised unchanged so
    their message can be shown to the user verbatim.

    Raises:
        httpx.HTTPStatusError: If the server answers with a 4xx/5xx status.
        httpx.TransportError: On connection failures and timeouts.
        pydantic.ValidationError: If the body is not a list of tenders.
    """
    async with httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    ) as client:
        response = await client.get(TENDERS_PATH)
        response.raise_for_status()
        payload = response.json()

    tenders = parse_tenders(payload)
    logger.info("Fetched %d tender(s) from %s", len(tenders), settings.tenders_url)
    return tenders
