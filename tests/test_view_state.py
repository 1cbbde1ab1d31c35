from __future__ import annotations

import json

import pytest

from price_list.domain import ListControls, ViewState, build_lookup
from price_list.services.sorting import SIMILARITY_MAX_ITEMS
from price_list.services.view_state import ViewStateController
from price_list.utils.errors import ViewStateError
from price_list.viz.price_charts import ItemsChart


@pytest.fixture
def controller():
    return ViewStateController(ListControls(), ItemsChart())


def test_view_state_json_round_trip():
    state = ViewState(
        sales_price=False,
        sort_type="store-and-name",
        show_chart=True,
        prices_expanded=True,
        chart_state={"sum_total": True},
        items_to_chart=("billa-milk", "spar-bread"),
    )
    assert ViewState.from_json(state.to_json()) == state


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "null",
        "[]",
        json.dumps({"sales_price": True, "sort_type": "bogus", "show_chart": False, "prices_expanded": False}),
        json.dumps({"sales_price": "yes", "sort_type": "price-asc", "show_chart": False, "prices_expanded": False}),
        json.dumps(
            {
                "sales_price": True,
                "sort_type": "price-asc",
                "show_chart": False,
                "prices_expanded": False,
                "items_to_chart": "billa-milk",
            }
        ),
    ],
)
def test_malformed_view_state_raises(raw):
    with pytest.raises(ViewStateError):
        ViewState.from_json(raw)


def test_capture_reads_live_state(controller, catalog):
    controller.controls.sales_price = False
    controller.controls.sort_type = "quantity-desc"
    controller.controls.show_chart = True
    catalog[1].chart = True
    catalog[3].chart = True

    state = controller.capture(catalog, prices_expanded=True)

    assert state.sales_price is False
    assert state.sort_type == "quantity-desc"
    assert state.show_chart is True
    assert state.prices_expanded is True
    assert state.items_to_chart == (catalog[1].unique_id, catalog[3].unique_id)
    assert state.chart_state == controller.chart.state


def test_captured_chart_state_is_a_detached_copy(controller, catalog):
    state = controller.capture(catalog, prices_expanded=False)
    controller.chart.update_state(sum_total=True)

    assert state.chart_state["sum_total"] is False
    with pytest.raises(TypeError):
        state.chart_state["sum_total"] = True
    assert hash(state) == hash(controller.capture(catalog, prices_expanded=False))


def test_restore_capture_round_trip(controller, catalog):
    controller.controls.sales_price = False
    controller.controls.sort_type = "store-and-name"
    controller.controls.show_chart = True
    controller.chart.visible = True
    controller.chart.state = {"sum_stores": True, "start_date": "2024-01-01"}
    catalog[0].chart = True
    before = controller.capture(catalog, prices_expanded=True)

    expanded = controller.restore(before, catalog, build_lookup(catalog))

    assert expanded is True
    assert controller.capture(catalog, prices_expanded=expanded).to_json() == before.to_json()


def test_restore_is_idempotent_and_skips_unknown_ids(controller, catalog):
    state = ViewState(
        sales_price=False,
        sort_type="price-desc",
        show_chart=True,
        chart_state={"only_today": True},
        items_to_chart=(catalog[2].unique_id, "nowhere-404"),
    )
    lookup = build_lookup(catalog)
    controller.restore(state, catalog, lookup)
    first = controller.capture(catalog, prices_expanded=False)
    controller.restore(state, catalog, lookup)
    second = controller.capture(catalog, prices_expanded=False)

    assert first == second
    assert [item.chart for item in catalog] == [False, False, True, False, False]
    assert controller.chart.visible is True
    assert controller.chart.chart_state.only_today is True


def test_chart_state_forwarded_only_when_chart_shown(controller, catalog):
    state = ViewState(show_chart=False, chart_state={"sum_total": True})
    controller.restore(state, catalog, build_lookup(catalog))
    assert controller.chart.chart_state.sum_total is False
    assert controller.chart.visible is False


def test_similarity_not_restored_for_large_collections(controller, product_factory):
    items = [product_factory(f"Item {i}") for i in range(SIMILARITY_MAX_ITEMS + 1)]
    controller.restore(ViewState(sort_type="similarity"), items, build_lookup(items))
    assert controller.controls.sort_type == "price-asc"


def test_restore_from_source_runs_once(controller, catalog):
    source = {"items": ViewState(sales_price=False, sort_type="price-desc").to_json()}
    lookup = build_lookup(catalog)

    assert controller.restore_from_source(source, "items", [], {}) is None
    assert controller.restored is False

    assert controller.restore_from_source(source, "items", catalog, lookup) is False
    assert controller.controls.sort_type == "price-desc"
    assert controller.restored is True

    controller.controls.sort_type = "price-asc"
    assert controller.restore_from_source(source, "items", catalog, lookup) is None
    assert controller.controls.sort_type == "price-asc"


@pytest.mark.parametrize("source", [{}, {"items": ""}, {"items": "{broken"}, {"items": '{"sales_price": 1}'}])
def test_restore_from_source_ignores_absent_or_malformed(controller, catalog, source):
    before = controller.capture(catalog, prices_expanded=False)
    assert controller.restore_from_source(source, "items", catalog, build_lookup(catalog)) is None
    assert controller.capture(catalog, prices_expanded=False) == before
