"""price_list package with UI-agnostic logic for the product list."""

from .domain import DisplayConfig, ListControls, PriceEntry, Product, SortType, ViewState

__all__ = ["DisplayConfig", "ListControls", "PriceEntry", "Product", "SortType", "ViewState"]
