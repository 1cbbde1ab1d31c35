"""Chart builders."""

from .price_charts import ItemsChart, ItemsChartState, make_items_chart, price_history_frame

__all__ = ["ItemsChart", "ItemsChartState", "make_items_chart", "price_history_frame"]
