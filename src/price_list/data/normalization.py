"""Normalize raw product dump records into :class:`Product` objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..domain import PriceEntry, Product, Quantity
from ..utils.errors import ItemsLoadError

_SCALED_UNITS = {"g", "ml"}


def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _as_float(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as err:
        raise ItemsLoadError(f"Invalid {field_name}: {value!r}") from err


def _quantity(value: Any) -> Quantity:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        return text or None
    return int(number) if number.is_integer() else number


def derive_unit_price(price: float, quantity: Quantity, unit: str | None) -> float:
    """Price per kg/l for gram/millilitre items, per piece otherwise."""
    if not isinstance(quantity, (int, float)) or quantity <= 0:
        return price
    if unit in _SCALED_UNITS:
        return price / quantity * 1000
    return price / quantity


def normalize_price_history(raw_history: Any, price: float) -> list[PriceEntry]:
    entries = []
    for raw in raw_history or []:
        if not isinstance(raw, Mapping):
            raise ItemsLoadError(f"Invalid price history entry: {raw!r}")
        unit_price = _pick(raw, "unit_price", "unitPrice")
        entries.append(
            PriceEntry(
                price=_as_float(raw.get("price"), "history price"),
                date=str(raw.get("date", "")),
                unit_price=float(unit_price) if unit_price is not None else None,
            )
        )
    if not entries:
        entries.append(PriceEntry(price=price, date=""))
    entries.sort(key=lambda entry: entry.date, reverse=True)
    return entries


def normalize_item_record(raw: Mapping[str, Any]) -> Product:
    """Accepts both the camelCase dump layout and snake_case keys."""
    if not isinstance(raw, Mapping):
        raise ItemsLoadError(f"Item record must be an object, got {type(raw).__name__}")

    store = str(_pick(raw, "store", default="")).strip()
    item_id = str(_pick(raw, "id", default="")).strip()
    if not store or not item_id:
        raise ItemsLoadError(f"Item record is missing store or id: {dict(raw)!r}")

    price = _as_float(_pick(raw, "price"), "price")
    unit = _pick(raw, "unit")
    quantity = _quantity(_pick(raw, "quantity"))
    unit_price = _pick(raw, "unit_price", "unitPrice")

    return Product(
        store=store,
        id=item_id,
        unique_id=str(_pick(raw, "unique_id", "uniqueId", default=f"{store}-{item_id}")),
        name=str(_pick(raw, "name", default="")),
        category=str(_pick(raw, "category", default="")),
        price=price,
        unit_price=_as_float(unit_price, "unit price") if unit_price is not None else derive_unit_price(price, quantity, unit),
        unit=str(unit) if unit is not None else None,
        quantity=quantity,
        is_weighted=bool(_pick(raw, "is_weighted", "isWeighted", default=False)),
        is_organic=bool(_pick(raw, "is_organic", "isOrganic", "bio", default=False)),
        available=not bool(_pick(raw, "unavailable", default=False)) and bool(_pick(raw, "available", default=True)),
        url=_pick(raw, "url"),
        price_history=normalize_price_history(_pick(raw, "price_history", "priceHistory"), price),
    )
