"""Sort policies for the product list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..analytics.similarity import NameSimilarityRanker, SimilarityRanker
from ..domain import SORT_TYPES, DisplayConfig, Product, SortType
from ..i18n import i18n

# Name similarity is quadratic in the number of items.
SIMILARITY_MAX_ITEMS = 500

SORT_LABELS: dict[str, str] = {
    "price-asc": "Price ascending",
    "price-desc": "Price descending",
    "quantity-asc": "Quantity ascending",
    "quantity-desc": "Quantity descending",
    "store-and-name": "Store & name",
    "similarity": "Name similarity",
}


@dataclass(frozen=True, slots=True)
class SortOption:
    value: SortType
    label: str
    disabled: bool = False


def similarity_allowed(item_count: int) -> bool:
    return item_count <= SIMILARITY_MAX_ITEMS


def sort_options(item_count: int) -> list[SortOption]:
    """Selector options in display order, similarity disabled for large lists."""
    return [
        SortOption(
            value=value,  # type: ignore[arg-type]
            label=i18n(SORT_LABELS[value]),
            disabled=value == "similarity" and not similarity_allowed(item_count),
        )
        for value in SORT_TYPES
    ]


def sort_items(
    items: Sequence[Product], config: DisplayConfig, ranker: SimilarityRanker | None = None
) -> list[Product]:
    """Return ``items`` ordered by ``config.sort_type``; the input is not mutated."""
    sort_type = config.sort_type
    if sort_type in ("price-asc", "price-desc"):
        if config.sales_price:
            return sorted(items, key=lambda item: item.price, reverse=sort_type == "price-desc")
        return sorted(items, key=lambda item: item.unit_price, reverse=sort_type == "price-desc")

    if sort_type in ("quantity-asc", "quantity-desc"):
        by_quantity = sorted(items, key=_quantity_key, reverse=sort_type == "quantity-desc")
        return sorted(by_quantity, key=lambda item: item.unit or "")

    if sort_type == "store-and-name":
        return sorted(items, key=lambda item: (item.store, item.name))

    if sort_type == "similarity":
        ranker = ranker or NameSimilarityRanker()
        ranker.vectorize(items)
        return ranker.rank(items)

    raise ValueError(f"Unknown sort type: {sort_type}")


def _quantity_key(item: Product) -> tuple[int, float | str]:
    # Non-numeric quantities are grouped after numeric ones and compared as text.
    quantity = item.quantity
    if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
        return 0, float(quantity)
    return 1, "" if quantity is None else str(quantity)
