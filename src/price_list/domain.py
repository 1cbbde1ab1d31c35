from __future__ import annotations

"""Domain models and configuration types."""

import json
from types import MappingProxyType
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Union, get_args

from .utils.errors import ViewStateError

SortType = Literal["price-asc", "price-desc", "quantity-asc", "quantity-desc", "store-and-name", "similarity"]
SORT_TYPES: tuple[str, ...] = get_args(SortType)

Quantity = Union[float, int, str, None]


@dataclass(slots=True)
class PriceEntry:
    price: float
    date: str
    unit_price: float | None = None


@dataclass(slots=True)
class Product:
    store: str
    id: str
    unique_id: str
    name: str
    price: float
    unit_price: float
    price_history: list[PriceEntry]
    category: str = ""
    unit: str | None = None
    quantity: Quantity = None
    is_weighted: bool = False
    is_organic: bool = False
    available: bool = True
    url: str | None = None
    chart: bool = False


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    """By-value snapshot of the settings the sort engine and analytics read."""

    sales_price: bool = True
    sort_type: SortType = "price-asc"


@dataclass(slots=True)
class ListControls:
    """Live control values of one list instance."""

    sales_price: bool = True
    sort_type: SortType = "price-asc"
    show_chart: bool = False

    def config(self) -> DisplayConfig:
        return DisplayConfig(sales_price=self.sales_price, sort_type=self.sort_type)


@dataclass(frozen=True, slots=True)
class ViewState:
    """Serializable snapshot of every user-configurable display setting.

    Only primitive values are held so the state can travel through a URL.
    ``chart_state`` is owned by the chart and treated as an opaque mapping;
    the snapshot keeps a read-only copy of it.
    """

    sales_price: bool = True
    sort_type: SortType = "price-asc"
    show_chart: bool = False
    prices_expanded: bool = False
    chart_state: Mapping[str, Any] | None = field(default=None, hash=False)
    items_to_chart: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.chart_state is not None:
            object.__setattr__(self, "chart_state", MappingProxyType(dict(self.chart_state)))
        object.__setattr__(self, "items_to_chart", tuple(self.items_to_chart))

    def to_dict(self) -> dict[str, Any]:
        return {
            "sales_price": self.sales_price,
            "sort_type": self.sort_type,
            "show_chart": self.show_chart,
            "prices_expanded": self.prices_expanded,
            "chart_state": dict(self.chart_state) if self.chart_state is not None else None,
            "items_to_chart": list(self.items_to_chart),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Any) -> "ViewState":
        if not isinstance(data, Mapping):
            raise ViewStateError(f"View state must be an object, got {type(data).__name__}")

        flags = {}
        for name in ("sales_price", "show_chart", "prices_expanded"):
            value = data.get(name)
            if not isinstance(value, bool):
                raise ViewStateError(f"View state field '{name}' must be a boolean")
            flags[name] = value

        sort_type = data.get("sort_type")
        if sort_type not in SORT_TYPES:
            raise ViewStateError(f"Unknown sort type: {sort_type!r}")

        chart_state = data.get("chart_state")
        if chart_state is not None and not isinstance(chart_state, Mapping):
            raise ViewStateError("View state field 'chart_state' must be an object or null")

        items_to_chart = data.get("items_to_chart", [])
        if not isinstance(items_to_chart, list) or not all(isinstance(i, str) for i in items_to_chart):
            raise ViewStateError("View state field 'items_to_chart' must be a list of ids")

        return cls(
            sort_type=sort_type,
            chart_state=dict(chart_state) if chart_state is not None else None,
            items_to_chart=tuple(items_to_chart),
            **flags,
        )

    @classmethod
    def from_json(cls, raw: str) -> "ViewState":
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as err:
            raise ViewStateError(f"View state is not valid JSON: {err}") from err
        return cls.from_dict(data)


def build_lookup(items: Iterable[Product]) -> dict[str, Product]:
    """Index products by unique id."""
    return {item.unique_id: item for item in items}
