"""Plotly price-history chart for items marked for charting."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable

import pandas as pd
import plotly.graph_objects as go

from ..domain import Product
from ..i18n import i18n
from ..stores import get_store
from ..utils.logging import get_logger

logger = get_logger(__name__)

HISTORY_COLUMNS = ["date", "unique_id", "name", "store", "price"]


@dataclass(frozen=True, slots=True)
class ItemsChartState:
    sum_total: bool = False
    sum_stores: bool = False
    only_today: bool = False
    percentage_change: bool = False
    start_date: str | None = None
    end_date: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ItemsChartState":
        """Build a state from a mapping, ignoring unknown or mistyped keys."""
        defaults = cls()
        values = {}
        for f in fields(cls):
            value = data.get(f.name, getattr(defaults, f.name))
            default = getattr(defaults, f.name)
            if isinstance(default, bool) and not isinstance(value, bool):
                continue
            if f.name.endswith("_date") and value is not None and not isinstance(value, str):
                continue
            values[f.name] = value
        return cls(**values)


def price_history_frame(items: Sequence[Product], only_today: bool = False) -> pd.DataFrame:
    """Long-form price history, one row per item and date."""
    records = []
    for item in items:
        history = item.price_history[:1] if only_today else item.price_history
        for entry in history:
            records.append(
                {"date": entry.date, "unique_id": item.unique_id, "name": item.name, "store": item.store, "price": entry.price}
            )
    if not records:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    frame = pd.DataFrame.from_records(records, columns=HISTORY_COLUMNS)
    frame["date"] = pd.to_datetime(frame["date"]).dt.normalize()
    return frame.sort_values(["unique_id", "date"]).reset_index(drop=True)


def price_sum_series(history: pd.DataFrame) -> pd.Series:
    """Sum of prices per date, carrying each item's last known price forward."""
    if history.empty:
        return pd.Series(dtype=float)
    wide = history.pivot_table(index="date", columns="unique_id", values="price", aggfunc="last").sort_index()
    return wide.ffill().sum(axis=1, min_count=1)


def _rebase(series: pd.Series) -> pd.Series:
    non_na = series.dropna()
    if non_na.empty or non_na.iloc[0] == 0:
        return series
    return (series / non_na.iloc[0] - 1) * 100


def make_items_chart(items: Sequence[Product], state: ItemsChartState, title: str = "") -> go.Figure:
    """Build a line chart of the price history of ``items``."""
    fig = go.Figure()
    history = price_history_frame(items, state.only_today)
    if state.start_date:
        history = history[history["date"] >= pd.Timestamp(state.start_date)]
    if state.end_date:
        history = history[history["date"] <= pd.Timestamp(state.end_date)]

    if history.empty:
        fig.add_annotation(text=i18n("No data selected"), showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
        fig.update_layout(title=title, template="plotly_white")
        return fig

    transform = _rebase if state.percentage_change else (lambda series: series)
    shape = "hv"

    if state.sum_total:
        total = transform(price_sum_series(history))
        fig.add_trace(go.Scatter(x=total.index, y=total.values, mode="lines", name=i18n("Price sum"), line_shape=shape))

    if state.sum_stores:
        for store_id, store_history in history.groupby("store", sort=True):
            store_sum = transform(price_sum_series(store_history))
            label = i18n("Price sum for store", get_store(str(store_id)).display_name)
            fig.add_trace(go.Scatter(x=store_sum.index, y=store_sum.values, mode="lines", name=label, line_shape=shape))

    if not state.sum_total and not state.sum_stores:
        for _, item_history in history.groupby("unique_id", sort=False):
            series = transform(item_history.set_index("date")["price"])
            first = item_history.iloc[0]
            label = f"{get_store(first['store']).display_name} {first['name']}"
            fig.add_trace(go.Scatter(x=series.index, y=series.values, mode="lines+markers", name=label, line_shape=shape))

    fig.update_layout(
        title=title,
        xaxis_title="",
        yaxis_title=i18n("Percentage change") if state.percentage_change else i18n("Price"),
        hovermode="x unified",
        template="plotly_white",
    )
    return fig


class ItemsChart:
    """Chart panel embedded in a list.

    The list hands over its items and treats :attr:`state` as an opaque,
    JSON-compatible mapping.
    """

    def __init__(self, state_changed: Callable[[], None] | None = None) -> None:
        self.items: list[Product] = []
        self.visible = False
        self.state_changed = state_changed or (lambda: None)
        self._state = ItemsChartState()

    @property
    def state(self) -> dict[str, Any]:
        return asdict(self._state)

    @state.setter
    def state(self, value: Mapping[str, Any]) -> None:
        self._state = ItemsChartState.from_mapping(value)

    @property
    def chart_state(self) -> ItemsChartState:
        return self._state

    def toggle(self) -> bool:
        self.visible = not self.visible
        return self.visible

    def update_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        logger.debug("Chart state changed: %s", changes)
        self.state_changed()

    def charted_items(self) -> list[Product]:
        return [item for item in self.items if item.chart]

    def figure(self, title: str = "") -> go.Figure:
        return make_items_chart(self.charted_items(), self._state, title=title)
