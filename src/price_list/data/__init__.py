"""Data access layer."""

from .filtering import filter_items
from .json_provider import JsonFileItemsProvider
from .normalization import normalize_item_record
from .providers import ItemsProvider

__all__ = ["ItemsProvider", "JsonFileItemsProvider", "filter_items", "normalize_item_record"]
