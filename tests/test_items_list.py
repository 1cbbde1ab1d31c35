from __future__ import annotations

import pytest

from price_list.components import ItemsList
from price_list.domain import ViewState
from price_list.services.sorting import SIMILARITY_MAX_ITEMS


@pytest.fixture
def states():
    return []


@pytest.fixture
def items_list(states):
    return ItemsList(initial_sort="price-asc", state_changed=states.append)


def test_initial_sort_applied(product_factory):
    items_list = ItemsList(initial_sort="store-and-name")
    assert items_list.controls.sort_type == "store-and-name"


def test_empty_collection_renders_nothing(items_list):
    assert items_list.set_items([]) is None
    assert items_list.view is None
    assert items_list.rows == []


def test_set_items_sorts_and_renders_first_page(items_list, many_products):
    view = items_list.set_items(list(reversed(many_products)))
    assert view.count == 57
    assert len(view.rows) == 25
    assert [row.product.price for row in view.rows] == [float(i + 1) for i in range(25)]
    assert items_list.lookup[many_products[0].unique_id] is many_products[0]
    assert {item.unique_id for item in items_list.chart.items} == {item.unique_id for item in items_list.items}
    assert items_list.chart.items is not items_list.items


def test_set_items_resets_expansion_and_chart(items_list, catalog):
    items_list.set_items(catalog)
    items_list.set_show_chart(True)
    items_list.toggle_price_histories()

    items_list.set_items(catalog[:2])

    assert items_list.prices_expanded is False
    assert items_list.chart.visible is False
    assert items_list.controls.show_chart is False


def test_control_changes_notify_with_fresh_state(items_list, states, catalog):
    items_list.set_items(catalog)
    items_list.set_sales_price(False)
    items_list.select_sort_type("price-desc")
    items_list.set_show_chart(True)

    assert [state.sales_price for state in states] == [False, False, False]
    assert states[-1].sort_type == "price-desc"
    assert states[-1].show_chart is True
    assert [item.unit_price for item in items_list.items] == sorted(
        (item.unit_price for item in catalog), reverse=True
    )


def test_toggle_item_chart_shows_panel(items_list, states, catalog):
    items_list.set_items(catalog)
    item = items_list.items[0]
    items_list.toggle_item_chart(item, True)

    assert item.chart is True
    assert items_list.chart.visible is True
    assert items_list.view.chart_visible is True
    assert states[-1].items_to_chart == (item.unique_id,)
    assert items_list.chart.charted_items() == [item]


def test_chart_state_change_notifies(items_list, states, catalog):
    items_list.set_items(catalog)
    items_list.chart.update_state(sum_total=True)
    assert states[-1].chart_state["sum_total"] is True


def test_similarity_refused_for_large_collections(items_list, states, product_factory):
    items = [product_factory(f"Item {i}", float(i)) for i in range(SIMILARITY_MAX_ITEMS + 1)]
    items_list.set_items(items)
    assert items_list.select_sort_type("similarity") is False
    assert items_list.controls.sort_type == "price-asc"
    assert states == []


def test_similarity_allowed_for_small_collections(items_list, catalog):
    items_list.set_items(catalog)
    assert items_list.select_sort_type("similarity") is True
    assert items_list.controls.sort_type == "similarity"


def test_toggle_price_histories_applies_to_later_pages(items_list, many_products):
    items_list.set_items(many_products)
    assert items_list.toggle_price_histories() is True
    assert items_list.view.chevron == "▲"
    assert all(row.expanded for row in items_list.rows)

    items_list.notifier.expose(24)
    assert len(items_list.rows) == 50
    assert all(row.expanded for row in items_list.rows)

    items_list.toggle_price_histories()
    items_list.notifier.expose(49)
    assert len(items_list.rows) == 57
    assert not any(row.expanded for row in items_list.rows)


def test_rerender_restarts_paging(items_list, many_products):
    items_list.set_items(many_products)
    items_list.notifier.expose(24)
    assert len(items_list.rows) == 50

    items_list.select_sort_type("price-desc")
    assert len(items_list.rows) == 25
    assert items_list.rows[0].product.price == 57.0

    items_list.notifier.expose(24)
    assert len(items_list.rows) == 50


def test_highlights_reach_rows(catalog):
    items_list = ItemsList(highlights=["milk"])
    items_list.set_items(catalog)
    names = [row.name_html for row in items_list.rows]
    assert "Whole <strong>Milk</strong> 2L" in names
    assert "Skim <strong>Milk</strong> 1L" in names


def test_restores_state_from_source_once(catalog):
    state = ViewState(
        sales_price=False,
        sort_type="price-desc",
        show_chart=True,
        prices_expanded=True,
        chart_state={"percentage_change": True},
        items_to_chart=(catalog[0].unique_id, "unknown-id"),
    )
    items_list = ItemsList(state_source={"items": state.to_json()})

    items_list.set_items([])
    assert items_list.view_state.restored is False

    items_list.set_items(catalog)
    assert items_list.controls.sales_price is False
    assert items_list.controls.sort_type == "price-desc"
    assert items_list.prices_expanded is True
    assert all(row.expanded for row in items_list.rows)
    assert items_list.chart.visible is True
    assert items_list.chart.chart_state.percentage_change is True
    assert catalog[0].chart is True
    assert items_list.get_state().items_to_chart == (catalog[0].unique_id,)

    items_list.select_sort_type("price-asc")
    items_list.set_items(catalog)
    assert items_list.controls.sort_type == "price-asc"
    assert items_list.prices_expanded is False


def test_malformed_source_is_ignored(catalog):
    items_list = ItemsList(state_source={"items": "%%%"})
    view = items_list.set_items(catalog)
    assert view is not None
    assert items_list.controls.sort_type == "price-asc"


def test_get_state_set_state_round_trip(items_list, catalog):
    items_list.set_items(catalog)
    items_list.set_sales_price(False)
    items_list.select_sort_type("quantity-asc")
    items_list.toggle_item_chart(items_list.items[2], True)
    items_list.toggle_price_histories()
    before = items_list.get_state()

    items_list.set_state(before)

    assert items_list.get_state().to_json() == before.to_json()


def test_download(catalog):
    files = []
    items_list = ItemsList(downloader=files.append)
    assert items_list.download("CSV") is None
    assert files == []

    items_list.set_items(catalog)
    export = items_list.download("JSON")
    assert files == [export]
    assert export.filename == "items.json"


class RecordingRanker:
    def __init__(self):
        self.sizes = []

    def vectorize(self, items):
        self.sizes.append(len(items))

    def rank(self, items):
        return list(items)


def test_similarity_falls_back_when_collection_grows(states, product_factory, catalog):
    ranker = RecordingRanker()
    items_list = ItemsList(initial_sort="store-and-name", state_changed=states.append, ranker=ranker)
    items_list.set_items(catalog)
    assert items_list.select_sort_type("similarity") is True
    assert ranker.sizes == [len(catalog)]

    large = [product_factory(f"Item {i}", float(i)) for i in range(SIMILARITY_MAX_ITEMS + 100)]
    view = items_list.set_items(large)

    assert items_list.controls.sort_type == "store-and-name"
    assert view.controls.sort_type == "store-and-name"
    assert ranker.sizes == [len(catalog)]


def test_narrowed_collection_leaves_no_pending_page(items_list, many_products):
    items_list.set_items(many_products)
    assert items_list.notifier.pending() == [24]

    view = items_list.set_items(many_products[:25])
    assert view.render_pass.exhausted
    assert items_list.notifier.pending() == []


def test_control_changes_do_not_accumulate_triggers(items_list, many_products):
    items_list.set_items(many_products)
    for _ in range(50):
        items_list.set_sales_price(True)
    assert items_list.notifier.expose(24) == 1
    assert len(items_list.rows) == 50


def test_emptied_collection_withdraws_trigger(items_list, many_products):
    items_list.set_items(many_products)
    items_list.set_items([])
    assert items_list.notifier.pending() == []
