from __future__ import annotations

import pytest

from price_list.domain import PriceEntry, Product


def make_product(
    name: str = "Milk",
    price: float = 1.0,
    store: str = "billa",
    item_id: str | None = None,
    history: list[float] | None = None,
    **kwargs,
) -> Product:
    item_id = item_id or name.lower().replace(" ", "-")
    prices = history if history is not None else [price]
    unit_price = kwargs.pop("unit_price", prices[0])
    return Product(
        store=store,
        id=item_id,
        unique_id=f"{store}-{item_id}",
        name=name,
        price=prices[0],
        unit_price=unit_price,
        price_history=[PriceEntry(price=p, date=f"2024-01-{len(prices) - i:02d}") for i, p in enumerate(prices)],
        **kwargs,
    )


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def catalog() -> list[Product]:
    return [
        make_product("Whole Milk 2L", 2.49, store="spar", unit="ml", quantity=2000, unit_price=1.25),
        make_product("Butter", 3.19, store="billa", unit="g", quantity=250, unit_price=12.76),
        make_product("Eggs", 4.99, store="hofer", unit="stk", quantity=10, unit_price=0.5),
        make_product("Skim Milk 1L", 1.09, store="billa", unit="ml", quantity=1000, unit_price=1.09),
        make_product("Bread", 2.2, store="spar", unit="g", quantity=500, unit_price=4.4),
    ]


@pytest.fixture
def many_products() -> list[Product]:
    return [make_product(f"Item {i:03d}", float(i + 1)) for i in range(57)]
