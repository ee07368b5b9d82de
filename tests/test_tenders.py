"""Tests for the tender record model, fetcher and display helpers.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_tenders`` tests.
- ``settings.api_base_url`` is pinned per test so the mocked route is known.
"""

from __future__ import annotations

from decimal import Decimal

import httpx
import pytest
import respx
from pydantic import ValidationError

from liyao.tenders.fetcher import TENDERS_PATH, fetch_tenders
from liyao.tenders.formatting import format_budget
from liyao.tenders.models import Tender, parse_tenders

_BASE = "http://tenders.test"
_URL = _BASE + TENDERS_PATH


@pytest.fixture(autouse=True)
def pinned_api(monkeypatch):
    monkeypatch.setattr("liyao.tenders.fetcher.settings.api_base_url", _BASE)
    monkeypatch.setattr("liyao.tenders.fetcher.settings.request_timeout", 5.0)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class TestTenderModel:
    def test_numeric_string_budget_becomes_decimal(self, sample_payload) -> None:
        tender = parse_tenders(sample_payload)[0]
        assert tender.budget == Decimal("2995020")
        assert tender.tender_mode == "公開招標"

    def test_numeric_budget_accepted(self, sample_payload) -> None:
        tender = Tender.model_validate({**sample_payload[0], "budget": 500000})
        assert tender.budget == Decimal(500000)

    def test_blank_budget_is_none(self, sample_payload) -> None:
        tender = Tender.model_validate({**sample_payload[0], "budget": ""})
        assert tender.budget is None

    def test_grouped_budget_string(self, sample_payload) -> None:
        tender = Tender.model_validate({**sample_payload[0], "budget": "1,234,567"})
        assert tender.budget == Decimal(1234567)

    def test_non_numeric_budget_rejected(self, sample_payload) -> None:
        with pytest.raises(ValidationError):
            Tender.model_validate({**sample_payload[0], "budget": "未公開"})

    def test_non_finite_budget_rejected(self, sample_payload) -> None:
        with pytest.raises(ValidationError):
            Tender.model_validate({**sample_payload[0], "budget": "NaN"})

    def test_records_are_immutable(self, sample_payload) -> None:
        tender = parse_tenders(sample_payload)[0]
        with pytest.raises(ValidationError):
            tender.tender_name = "changed"  # type: ignore[misc]

    def test_payload_must_be_a_list(self, sample_payload) -> None:
        with pytest.raises(ValidationError):
            parse_tenders({"items": sample_payload})


# ---------------------------------------------------------------------------
# format_budget
# ---------------------------------------------------------------------------

class TestFormatBudget:
    def test_group_separators(self) -> None:
        assert format_budget(Decimal("500000")) == "500,000"
        assert format_budget(Decimal("9116383")) == "9,116,383"

    def test_integral_decimal_drops_fraction(self) -> None:
        assert format_budget(Decimal("2995020.0")) == "2,995,020"

    def test_fraction_kept(self) -> None:
        assert format_budget(Decimal("1234.5")) == "1,234.5"

    def test_missing_budget(self) -> None:
        assert format_budget(None) == "-"


# ---------------------------------------------------------------------------
# fetch_tenders
# ---------------------------------------------------------------------------

class TestFetchTenders:
    async def test_returns_parsed_tenders(self, sample_payload) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(200, json=sample_payload))
            tenders = await fetch_tenders()

        assert route.called
        assert [t.id for t in tenders] == [1, 2, 3]
        assert tenders[1].agency_name == "國立臺灣大學醫學院附設醫院"
        assert tenders[2].budget == Decimal(500000)

    async def test_requests_tender_endpoint_with_get(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(200, json=[]))
            assert await fetch_tenders() == []

        request = route.calls.last.request
        assert request.method == "GET"
        assert request.url.path == "/api/tenders"

    async def test_http_error_raises(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(500, text="boom"))
            with pytest.raises(httpx.HTTPStatusError):
                await fetch_tenders()

    async def test_network_error_message_passes_through(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(side_effect=httpx.ConnectError("Network Error"))
            with pytest.raises(httpx.ConnectError, match="Network Error"):
                await fetch_tenders()

    async def test_malformed_payload_raises_validation_error(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(200, json=[{"id": "x"}]))
            with pytest.raises(ValidationError):
                await fetch_tenders()
