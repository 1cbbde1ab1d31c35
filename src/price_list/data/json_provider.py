"""JSON file-backed items provider."""

from __future__ import annotations

import json
from pathlib import Path

from ..domain import Product
from ..utils import ItemsLoadError
from ..utils.logging import get_logger
from .normalization import normalize_item_record
from .providers import ItemsProvider

logger = get_logger(__name__)


class JsonFileItemsProvider(ItemsProvider):
    """Reads a JSON array of item records from disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load_items(self) -> list[Product]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as err:
            raise ItemsLoadError(f"Failed to read items from {self.path}: {err}") from err

        if not isinstance(raw, list):
            raise ItemsLoadError(f"{self.path} must contain a JSON array of items")

        items = [normalize_item_record(record) for record in raw]
        logger.info("Loaded %d items from %s", len(items), self.path)
        return items
