"""Keyword filtering of a loaded collection."""

from __future__ import annotations

from collections.abc import Sequence

from ..domain import Product

MIN_QUERY_LENGTH = 3


def filter_items(
    items: Sequence[Product], query: str, organic_only: bool = False
) -> tuple[list[Product], list[str]]:
    """Items whose name contains every query word, plus the words to highlight."""
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return [], []
    keywords = [word for word in query.lower().split() if word]
    matches = [
        item
        for item in items
        if all(word in item.name.lower() for word in keywords) and (item.is_organic or not organic_only)
    ]
    return matches, keywords
