"""The product list: sorting, paging, view state, chart and export."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Callable

from ..analytics.similarity import SimilarityRanker
from ..domain import ListControls, Product, SortType, ViewState, build_lookup
from ..services.export import ExportFile, ExportFormat, build_export
from ..services.paging import PAGE_SIZE, ExposureHub, IncrementalRenderer, RenderPass, VisibilityNotifier
from ..services.sorting import SortOption, similarity_allowed, sort_items, sort_options
from ..services.view_state import ViewStateController
from ..utils.logging import get_logger
from ..viz.price_charts import ItemsChart
from .rows import ItemRow, build_item_row, chevron

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ListView:
    """What a UI surface needs to draw the list header and its rows."""

    count: int
    chevron: str
    controls: ListControls
    sort_options: list[SortOption]
    chart_visible: bool
    enable_item_chart: bool
    render_pass: RenderPass[ItemRow]

    @property
    def rows(self) -> list[ItemRow]:
        return self.render_pass.rows


class ItemsList:
    def __init__(
        self,
        instance_id: str = "items",
        initial_sort: SortType = "price-asc",
        highlights: Sequence[str] = (),
        state_changed: Callable[[ViewState], None] | None = None,
        state_source: Mapping[str, str] | None = None,
        downloader: Callable[[ExportFile], None] | None = None,
        chart: ItemsChart | None = None,
        ranker: SimilarityRanker | None = None,
        enable_item_chart: bool = True,
        page_size: int = PAGE_SIZE,
        notifier: VisibilityNotifier | None = None,
    ) -> None:
        self.instance_id = instance_id
        self.initial_sort = initial_sort
        self.highlights = list(highlights)
        self.state_changed = state_changed or (lambda state: None)
        self.state_source = state_source
        self.downloader = downloader
        self.ranker = ranker
        self.enable_item_chart = enable_item_chart

        self.items: list[Product] = []
        self.lookup: dict[str, Product] = {}
        self.prices_expanded = False

        self.controls = ListControls(sort_type=initial_sort)
        self.chart = chart or ItemsChart()
        self.chart.state_changed = self._notify
        self.view_state = ViewStateController(self.controls, self.chart)

        self.notifier = notifier if notifier is not None else ExposureHub()
        self.renderer: IncrementalRenderer[ItemRow] = IncrementalRenderer(
            self._build_row, self.notifier, page_size=page_size
        )
        self._view: ListView | None = None

    @property
    def rows(self) -> list[ItemRow]:
        return self.renderer.rows

    @property
    def view(self) -> ListView | None:
        return self._view

    def set_items(self, items: Sequence[Product], lookup: Mapping[str, Product] | None = None) -> ListView | None:
        """Replace the collection, reset per-collection state and re-render."""
        self.items = list(items)
        self.lookup = dict(lookup) if lookup is not None else build_lookup(self.items)
        self.chart.items = list(self.items)
        self.chart.visible = False
        self.controls.show_chart = False
        self.prices_expanded = False

        expanded = self.view_state.restore_from_source(self.state_source, self.instance_id, self.items, self.lookup)
        if expanded is not None:
            self.prices_expanded = expanded
        return self.render()

    def render(self) -> ListView | None:
        if not self.items:
            self.renderer.reset()
            self._view = None
            return None
        if self.controls.sort_type == "similarity" and not similarity_allowed(len(self.items)):
            fallback = self.initial_sort if self.initial_sort != "similarity" else "price-asc"
            logger.info("Similarity sort disabled for %d items, using %s", len(self.items), fallback)
            self.controls.sort_type = fallback
        self.items = sort_items(self.items, self.controls.config(), self.ranker)
        render_pass = self.renderer.render(self.items)
        self._view = ListView(
            count=len(self.items),
            chevron=chevron(self.prices_expanded),
            controls=self.controls,
            sort_options=sort_options(len(self.items)),
            chart_visible=self.chart.visible,
            enable_item_chart=self.enable_item_chart,
            render_pass=render_pass,
        )
        return self._view

    def get_state(self) -> ViewState:
        return self.view_state.capture(self.items, self.prices_expanded)

    def set_state(self, state: ViewState) -> None:
        self.prices_expanded = self.view_state.restore(state, self.items, self.lookup)
        self.render()

    def set_sales_price(self, sales_price: bool) -> None:
        self.controls.sales_price = sales_price
        self.render()
        self._notify()

    def select_sort_type(self, sort_type: SortType) -> bool:
        """Apply a sort chosen by the user; similarity is refused for large lists."""
        if sort_type == "similarity" and not similarity_allowed(len(self.items)):
            logger.info("Similarity sort disabled for %d items", len(self.items))
            return False
        self.controls.sort_type = sort_type
        self.render()
        self._notify()
        return True

    def set_show_chart(self, show: bool) -> None:
        self.controls.show_chart = show
        self.chart.visible = show
        self._refresh_view()
        self._notify()

    def toggle_item_chart(self, item: Product, checked: bool) -> None:
        if not self.controls.show_chart:
            self.controls.show_chart = True
            self.chart.visible = True
        item.chart = checked
        self.chart.items = list(self.chart.items)
        self._refresh_view()
        self._notify()

    def toggle_price_histories(self) -> bool:
        """Flip history expansion for every row, current and future pages."""
        self.prices_expanded = not self.prices_expanded
        for row in self.rows:
            row.expanded = self.prices_expanded
        self._refresh_view()
        return self.prices_expanded

    def download(self, fmt: ExportFormat) -> ExportFile | None:
        export = build_export(self.items, fmt)
        if export is None:
            logger.debug("Nothing to export for %s", self.instance_id)
            return None
        if self.downloader is not None:
            self.downloader(export)
        return export

    def _build_row(self, product: Product, index: int) -> ItemRow:
        return build_item_row(product, index, self.highlights, self.controls.config(), self.prices_expanded)

    def _refresh_view(self) -> None:
        if self._view is None:
            return
        self._view = ListView(
            count=self._view.count,
            chevron=chevron(self.prices_expanded),
            controls=self.controls,
            sort_options=self._view.sort_options,
            chart_visible=self.chart.visible,
            enable_item_chart=self.enable_item_chart,
            render_pass=self._view.render_pass,
        )

    def _notify(self) -> None:
        self.state_changed(self.get_state())
