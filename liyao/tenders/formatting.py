"""Display helpers for tender fields."""

from __future__ import annotations

from decimal import Decimal


def format_budget(budget: Decimal | None) -> str:
    """Render *budget* with thousands separators (``500000`` → ``500,000``)."""
    if budget is None:
        return "-"
    if budget == budget.to_integral_value():
        return f"{int(budget):,}"
    return f"{budget:,}"
