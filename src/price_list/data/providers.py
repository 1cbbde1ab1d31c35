"""Provider protocol for loading product dumps."""

from __future__ import annotations

from typing import Protocol

from ..domain import Product


class ItemsProvider(Protocol):
    """Abstraction for product data sources."""

    def load_items(self) -> list[Product]:
        """Load the full product collection."""
        raise NotImplementedError
