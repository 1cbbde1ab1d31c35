"""Row view models for the product list."""

from __future__ import annotations

import html
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..analytics.pricing import (
    PriceBar,
    normalize_quantity,
    percentage_change,
    price_history_bars,
    price_unit_suffix,
)
from ..domain import DisplayConfig, Product
from ..i18n import i18n
from ..stores import get_store

EXPANDED = "▲"
COLLAPSED = "▼"

_TAG_RE = re.compile(r"(<[^>]*>)")


def chevron(expanded: bool) -> str:
    return EXPANDED if expanded else COLLAPSED


def _wrap_matches(pattern: re.Pattern[str], text: str) -> str:
    raw = html.unescape(text)
    pieces = []
    pos = 0
    for match in pattern.finditer(raw):
        pieces.append(html.escape(raw[pos : match.start()]))
        pieces.append(f"<strong>{html.escape(match.group(0))}</strong>")
        pos = match.end()
    if not pieces:
        return text
    pieces.append(html.escape(raw[pos:]))
    return "".join(pieces)


def highlight_matches(keywords: Sequence[str], name: str) -> str:
    """Wrap every case-insensitive keyword occurrence in ``<strong>``.

    ``name`` is HTML and ``keywords`` are plain text. Matching runs on the
    decoded text between tags, so entities such as ``&amp;`` are never split.
    Keywords apply in order, so a match that overlaps an earlier one ends up
    wrapped twice.
    """
    highlighted = name
    seen: set[str] = set()
    for keyword in keywords:
        folded = keyword.casefold()
        if not keyword or folded in seen:
            continue
        seen.add(folded)
        pattern = re.compile(re.escape(keyword), re.IGNORECASE)
        parts = _TAG_RE.split(highlighted)
        for i in range(0, len(parts), 2):
            parts[i] = _wrap_matches(pattern, parts[i])
        highlighted = "".join(parts)
    return highlighted


@dataclass(slots=True)
class ItemRow:
    index: int
    product: Product
    store_name: str
    store_color: str
    url: str
    name_html: str
    quantity_text: str
    price_text: str
    change: int | None
    history_count: int
    bars: list[PriceBar] = field(default_factory=list)
    expanded: bool = False

    @property
    def chevron(self) -> str:
        return chevron(self.expanded)

    @property
    def has_history(self) -> bool:
        return self.history_count > 0

    @property
    def change_text(self) -> str:
        if self.change is None:
            return ""
        return f"{'+' if self.change > 0 else ''}{self.change}%"

    def toggle(self) -> bool:
        self.expanded = not self.expanded
        return self.expanded


def build_item_row(
    product: Product,
    index: int,
    highlights: Sequence[str],
    config: DisplayConfig,
    expanded: bool = False,
) -> ItemRow:
    store = get_store(product.store)
    quantity, unit = normalize_quantity(product.quantity, product.unit)
    currency = i18n("currency symbol")
    if config.sales_price:
        price_text = f"{currency} {product.price:.2f}"
    else:
        price_text = f"{currency} {product.unit_price:.2f} / {price_unit_suffix(product.unit, config.sales_price)}"

    name = highlight_matches(highlights, html.escape(product.name))
    if not product.available:
        name += " 💀"

    return ItemRow(
        index=index,
        product=product,
        store_name=store.display_name,
        store_color=store.color,
        url=store.get_url(product),
        name_html=name,
        quantity_text=("⚖ " if product.is_weighted else "") + f"{quantity} {unit}",
        price_text=price_text,
        change=percentage_change(product.price_history),
        history_count=len(product.price_history) - 1,
        bars=price_history_bars(product.price_history),
        expanded=expanded,
    )
