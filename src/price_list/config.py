"""Application settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .domain import SORT_TYPES, SortType
from .utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ITEMS_PATH = Path("data") / "latest-canonical.json"


@dataclass(slots=True)
class AppSettings:
    items_path: Path = DEFAULT_ITEMS_PATH
    language: str = "en"
    initial_sort: SortType = "price-asc"


def load_settings() -> AppSettings:
    initial_sort = os.getenv("PRICE_LIST_INITIAL_SORT", "price-asc")
    if initial_sort not in SORT_TYPES:
        logger.warning("Unknown PRICE_LIST_INITIAL_SORT %r, using price-asc", initial_sort)
        initial_sort = "price-asc"
    return AppSettings(
        items_path=Path(os.getenv("PRICE_LIST_ITEMS_PATH", str(DEFAULT_ITEMS_PATH))),
        language=os.getenv("PRICE_LIST_LANGUAGE", "en").lower(),
        initial_sort=initial_sort,  # type: ignore[arg-type]
    )
