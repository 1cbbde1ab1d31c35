"""Derived price values and name similarity."""

from .pricing import (
    BAR_MAX_WIDTH,
    PriceBar,
    format_change,
    normalize_quantity,
    percentage_change,
    price_history_bars,
    price_unit_suffix,
)
from .similarity import NameSimilarityRanker, SimilarityRanker

__all__ = [
    "BAR_MAX_WIDTH",
    "NameSimilarityRanker",
    "PriceBar",
    "SimilarityRanker",
    "format_change",
    "normalize_quantity",
    "percentage_change",
    "price_history_bars",
    "price_unit_suffix",
]
