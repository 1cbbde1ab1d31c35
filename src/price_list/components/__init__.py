"""List component and its row models."""

from .items_list import ItemsList, ListView
from .rows import ItemRow, build_item_row, highlight_matches

__all__ = ["ItemRow", "ItemsList", "ListView", "build_item_row", "highlight_matches"]
