"""Data models for tender records."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator


class Tender(BaseModel):
    """One procurement announcement as served by ``GET /api/tenders``.

    Records are immutable once fetched.  Every field except ``id`` and
    ``budget`` is an opaque display string; dates are never parsed.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    agency_name: str
    tender_name: str
    tender_mode: str
    procurement_nature: str
    announcement_date: str
    deadline: str
    budget: Decimal | None = None

    @field_validator("budget", mode="before")
    @classmethod
    def _coerce_budget(cls, value: Any) -> Any:
        # The API sends budgets as numeric strings ("2995020") or numbers.
        if value is None:
            return None
        if isinstance(value, str):
            value = value.replace(",", "").strip()
            if not value:
                return None
        try:
            budget = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"budget is not numeric: {value!r}") from exc
        if not budget.is_finite():
            raise ValueError(f"budget is not finite: {value!r}")
        return budget


_TENDER_LIST = TypeAdapter(list[Tender])


def parse_tenders(payload: Any) -> list[Tender]:
    """Validate a decoded JSON array into a list of :class:`Tender`.

    Raises:
        pydantic.ValidationError: If *payload* does not match the wire shape.
    """
    return _TENDER_LIST.validate_python(payload)
