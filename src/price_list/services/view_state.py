"""Capture and restore the observable configuration of a list."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from ..domain import ListControls, Product, ViewState
from ..utils.errors import ViewStateError
from ..utils.logging import get_logger
from .sorting import similarity_allowed

logger = get_logger(__name__)


class ChartPanel(Protocol):
    items: list[Product]
    visible: bool

    @property
    def state(self) -> dict[str, Any]:
        ...

    @state.setter
    def state(self, value: Mapping[str, Any]) -> None:
        ...


class ViewStateController:
    """Reads the live controls into a :class:`ViewState` and writes one back."""

    def __init__(self, controls: ListControls, chart: ChartPanel) -> None:
        self.controls = controls
        self.chart = chart
        self.restored = False

    def capture(self, items: Sequence[Product], prices_expanded: bool) -> ViewState:
        return ViewState(
            sales_price=self.controls.sales_price,
            sort_type=self.controls.sort_type,
            show_chart=self.controls.show_chart,
            prices_expanded=prices_expanded,
            chart_state=self.chart.state,
            items_to_chart=tuple(item.unique_id for item in items if item.chart),
        )

    def restore(self, state: ViewState, items: Sequence[Product], lookup: Mapping[str, Product]) -> bool:
        """Apply ``state`` to the live controls and return its expansion flag."""
        self.controls.show_chart = state.show_chart
        self.chart.visible = state.show_chart
        self.controls.sales_price = state.sales_price

        if state.sort_type == "similarity" and not similarity_allowed(len(items)):
            logger.info("Not restoring similarity sort for %d items", len(items))
        else:
            self.controls.sort_type = state.sort_type

        for item in items:
            item.chart = False
        missing = 0
        for unique_id in state.items_to_chart:
            item = lookup.get(unique_id)
            if item is None:
                missing += 1
                continue
            item.chart = True
        if missing:
            logger.debug("Skipped %d charted ids missing from the lookup", missing)

        if state.show_chart and state.chart_state:
            self.chart.state = state.chart_state
        return state.prices_expanded

    def restore_from_source(
        self,
        source: Mapping[str, str] | None,
        key: str,
        items: Sequence[Product],
        lookup: Mapping[str, Product],
    ) -> bool | None:
        """Restore once from ``source[key]``.

        Returns the restored expansion flag, or ``None`` when nothing was
        applied. Absent or malformed values leave the current state alone.
        """
        if self.restored or not items or source is None:
            return None
        self.restored = True

        raw = source.get(key)
        if not raw:
            return None
        try:
            state = ViewState.from_json(raw)
        except ViewStateError as err:
            logger.debug("Ignoring malformed view state for %s: %s", key, err)
            return None
        return self.restore(state, items, lookup)
