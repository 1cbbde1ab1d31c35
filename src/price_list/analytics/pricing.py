"""Price history analytics for list rows."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..domain import PriceEntry, Quantity

BAR_MAX_WIDTH = 190

_METRIC_UNITS = {"g": "kg", "ml": "l"}


@dataclass(frozen=True, slots=True)
class PriceBar:
    price: float
    date: str
    unit_price: float | None
    change: float
    width: int


def normalize_quantity(quantity: Quantity, unit: str | None) -> tuple[Quantity, str]:
    """Rescale large gram/millilitre quantities to kg/l."""
    quantity = quantity if quantity is not None else ""
    unit = unit or ""
    if _is_number(quantity) and quantity >= 1000 and unit in _METRIC_UNITS:
        return round(0.001 * quantity, 2), _METRIC_UNITS[unit]
    return quantity, unit


def percentage_change(history: Sequence[PriceEntry]) -> int | None:
    """Rounded percent change of the current price against the previous one.

    Returns ``None`` when there is no previous price to compare against.
    """
    if len(history) < 2:
        return None
    current, previous = history[0].price, history[1].price
    if previous == 0:
        return None
    return round((current - previous) / previous * 100)


def price_unit_suffix(unit: str | None, sales_price: bool) -> str:
    if sales_price:
        return ""
    return _METRIC_UNITS.get(unit or "", "stk")


def price_history_bars(history: Sequence[PriceEntry]) -> list[PriceBar]:
    """Bar geometry and per-entry change for a newest-first history.

    Each entry is compared with the next older one; the oldest entry has a
    change of zero.
    """
    if not history:
        return []
    max_price = max(entry.price for entry in history)
    bars = []
    for index, entry in enumerate(history):
        width = math.ceil(entry.price / max_price * BAR_MAX_WIDTH) if max_price > 0 else 0
        change = 0.0
        if index + 1 < len(history):
            older = history[index + 1].price
            if older != 0:
                change = (entry.price - older) / older * 100
        bars.append(PriceBar(price=entry.price, date=entry.date, unit_price=entry.unit_price, change=change, width=width))
    return bars


def format_change(change: float) -> str:
    return f"{'+' if change >= 0 else ''}{change:.0f}%"


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
