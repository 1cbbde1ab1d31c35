"""Flattened JSON/CSV export of the listed products."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

import pandas as pd

from ..domain import Product
from ..stores import get_store

ExportFormat = Literal["JSON", "CSV"]

EXPORT_FIELDS = [
    "store",
    "id",
    "name",
    "category",
    "price",
    "priceHistory",
    "isWeighted",
    "unit",
    "quantity",
    "organic",
    "available",
    "url",
]


@dataclass(frozen=True, slots=True)
class ExportFile:
    filename: str
    mime: str
    data: str


def flatten_items(items: Sequence[Product]) -> list[dict[str, Any]]:
    """Rename and flatten products into export records."""
    return [
        {
            "store": item.store,
            "id": item.id,
            "name": item.name,
            "category": item.category,
            "price": item.price,
            "priceHistory": [
                {"date": entry.date, "price": entry.price, "unitPrice": entry.unit_price}
                for entry in item.price_history
            ],
            "isWeighted": item.is_weighted,
            "unit": item.unit,
            "quantity": item.quantity,
            "organic": item.is_organic,
            "available": item.available,
            "url": get_store(item.store).get_url(item),
        }
        for item in items
    ]


def items_to_json(records: Sequence[dict[str, Any]]) -> str:
    return json.dumps(list(records), ensure_ascii=False, indent=2)


def items_to_csv(records: Sequence[dict[str, Any]]) -> str:
    """Header line plus one comma-separated row per record."""
    frame = pd.DataFrame(list(records), columns=EXPORT_FIELDS, dtype=object)
    frame["priceHistory"] = frame["priceHistory"].map(lambda history: json.dumps(history, ensure_ascii=False))
    return frame.to_csv(index=False, lineterminator="\n")


def build_export(items: Sequence[Product], fmt: ExportFormat) -> ExportFile | None:
    if not items:
        return None
    records = flatten_items(items)
    if fmt == "JSON":
        return ExportFile("items.json", "application/json", items_to_json(records))
    if fmt == "CSV":
        return ExportFile("items.csv", "text/csv", items_to_csv(records))
    raise ValueError(f"Unsupported export format: {fmt}")
