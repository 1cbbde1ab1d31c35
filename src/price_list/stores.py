"""Per-store display metadata and product URL builders."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from .domain import Product
from .utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Store:
    id: str
    display_name: str
    color: str
    url_template: str | None = None

    def get_url(self, product: Product) -> str:
        if self.url_template is None:
            return product.url or ""
        return self.url_template.format(id=quote(str(product.id), safe=""), url=product.url or "")


STORES: dict[str, Store] = {
    "billa": Store("billa", "Billa", "yellow", "https://shop.billa.at/produkte/{id}"),
    "spar": Store("spar", "Spar", "green", "https://www.interspar.at/shop/lebensmittel{url}"),
    "hofer": Store("hofer", "Hofer", "purple", "https://www.roksh.at/hofer/produkte/{id}"),
    "lidl": Store("lidl", "Lidl", "pink", "https://www.lidl.at{url}"),
    "mpreis": Store("mpreis", "MPREIS", "rose", "https://www.mpreis.at/shop/p/{id}"),
    "dm": Store("dm", "DM", "orange", "https://www.dm.at/product-p{id}.html"),
    "unimarkt": Store("unimarkt", "Unimarkt", "blue", "https://shop.unimarkt.at{url}"),
    "penny": Store("penny", "Penny", "purple", "https://www.penny.at/produkte/{id}"),
}


def get_store(store_id: str) -> Store:
    """Registry entry for ``store_id``; unknown ids get a generic entry."""
    store = STORES.get(store_id)
    if store is None:
        logger.debug("Unknown store id %r, using generic metadata", store_id)
        store = Store(store_id, store_id.upper(), "stone")
    return store
