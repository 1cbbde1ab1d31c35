"""Streamlit entrypoint for the product price list."""

from __future__ import annotations

import sys
from pathlib import Path

# --- Ensure src is on path for local imports ---
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

import streamlit as st

from price_list import Product, ViewState  # noqa: E402
from price_list.components import ItemRow, ItemsList  # noqa: E402
from price_list.analytics import format_change  # noqa: E402
from price_list.config import AppSettings, load_settings  # noqa: E402
from price_list.data import JsonFileItemsProvider, filter_items  # noqa: E402
from price_list.i18n import TRANSLATIONS, i18n, set_language  # noqa: E402
from price_list.services import build_export  # noqa: E402
from price_list.utils import ItemsLoadError, get_logger  # noqa: E402
from price_list.viz import ItemsChart  # noqa: E402

logger = get_logger(__name__)

LIST_ID = "items"


def write_state(state: ViewState) -> None:
    """Keep the shareable view state in the URL."""
    st.query_params[LIST_ID] = state.to_json()


def load_items(settings: AppSettings) -> list[Product]:
    if "all_items" not in st.session_state:
        provider = JsonFileItemsProvider(settings.items_path)
        st.session_state.all_items = provider.load_items()
    return st.session_state.all_items


def get_items_list(settings: AppSettings) -> ItemsList:
    if "items_list" not in st.session_state:
        st.session_state.items_list = ItemsList(
            instance_id=LIST_ID,
            initial_sort=settings.initial_sort,
            state_changed=write_state,
            state_source=st.query_params.to_dict(),
        )
    return st.session_state.items_list


def render_sidebar(settings: AppSettings) -> tuple[str, bool]:
    st.sidebar.header(i18n("Search"))
    languages = list(TRANSLATIONS)
    language = st.sidebar.selectbox(
        i18n("Language"),
        options=languages,
        index=languages.index(settings.language) if settings.language in languages else 0,
    )
    set_language(language)
    query = st.sidebar.text_input(i18n("Search"), placeholder=i18n("search placeholder"), key="query")
    organic_only = st.sidebar.checkbox(i18n("Organic only"), value=False, key="organic_only")
    return query, organic_only


def sync_widgets(items_list: ItemsList) -> None:
    """Mirror the live controls into widget state before the widgets are drawn."""
    controls = items_list.controls
    st.session_state.price_type = "sales" if controls.sales_price else "unit"
    st.session_state.sort_type = controls.sort_type
    st.session_state.show_chart = controls.show_chart
    for item in items_list.items:
        st.session_state[f"chart_{item.unique_id}"] = item.chart


def render_header(items_list: ItemsList) -> None:
    view = items_list.view
    col_count, col_json, col_csv, col_chart, col_price, col_sort = st.columns([1, 1, 1, 1, 2, 2])
    col_count.markdown(f"**{view.count}** {i18n('Results')}")

    for col, fmt in ((col_json, "JSON"), (col_csv, "CSV")):
        export = build_export(items_list.items, fmt)
        if export is not None:
            col.download_button(fmt, data=export.data, file_name=export.filename, mime=export.mime)

    col_chart.checkbox(
        i18n("Chart"),
        key="show_chart",
        on_change=lambda: items_list.set_show_chart(st.session_state.show_chart),
    )
    col_price.radio(
        i18n("Price"),
        options=["sales", "unit"],
        format_func=lambda value: i18n("Sales price") if value == "sales" else i18n("Unit price"),
        key="price_type",
        horizontal=True,
        on_change=lambda: items_list.set_sales_price(st.session_state.price_type == "sales"),
    )
    options = [o for o in view.sort_options if not o.disabled or o.value == items_list.controls.sort_type]
    labels = {option.value: option.label for option in options}
    col_sort.selectbox(
        i18n("Sort by"),
        options=list(labels),
        format_func=labels.get,
        key="sort_type",
        on_change=lambda: items_list.select_sort_type(st.session_state.sort_type),
    )


def _chart_option_changed(chart: ItemsChart, name: str, key: str) -> None:
    chart.update_state(**{name: st.session_state[key]})


def render_chart(items_list: ItemsList) -> None:
    chart = items_list.chart
    state = chart.chart_state
    cols = st.columns(4)
    options = (
        ("sum_total", i18n("Price sum")),
        ("sum_stores", i18n("Price sum per store")),
        ("only_today", i18n("Today's prices only")),
        ("percentage_change", i18n("Percentage change")),
    )
    for col, (name, label) in zip(cols, options):
        key = f"chart_opt_{name}"
        st.session_state[key] = getattr(state, name)
        col.checkbox(label, key=key, on_change=_chart_option_changed, args=(chart, name, key))
    st.plotly_chart(chart.figure(), use_container_width=True)


def render_price_history(row: ItemRow) -> None:
    lines = []
    for bar in row.bars:
        color = "#16a34a" if bar.change <= 0 else "#dc2626"
        change = f" {format_change(bar.change)}" if bar.change != 0 else ""
        lines.append(
            f"<div style='font-size:0.75rem'>{bar.date} "
            f"<span style='display:inline-block;width:{bar.width}px;background:{color};color:white;padding:0 4px'>"
            f"{i18n('currency symbol')} {bar.price}</span>{change}</div>"
        )
    st.markdown("".join(lines), unsafe_allow_html=True)


def render_row(items_list: ItemsList, row: ItemRow) -> None:
    col_store, col_name, col_price, col_chart = st.columns([1, 5, 2, 1])
    col_store.markdown(f"**{row.store_name.upper()}**")
    col_name.markdown(
        f"<a href='{row.url}' target='_blank'>{row.name_html}</a> "
        f"<span style='font-size:0.75rem;float:right'>{row.quantity_text}</span>",
        unsafe_allow_html=True,
    )
    if row.expanded:
        with col_name:
            render_price_history(row)

    change = ""
    if row.change is not None:
        color = "red" if row.change > 0 else "green"
        change = f" <span style='font-size:0.75rem;color:{color}'>{row.change_text}</span>"
    col_price.markdown(f"{row.price_text}{change}", unsafe_allow_html=True)
    if row.has_history:
        col_price.button(
            f"({row.history_count}) {row.chevron}",
            key=f"history_{row.index}",
            on_click=row.toggle,
        )

    if items_list.enable_item_chart:
        item = row.product
        key = f"chart_{item.unique_id}"
        col_chart.checkbox(
            "📈",
            key=key,
            on_change=lambda: items_list.toggle_item_chart(item, st.session_state[key]),
        )


def render_rows(items_list: ItemsList) -> None:
    view = items_list.view
    header = st.columns([1, 5, 2, 1])
    header[0].markdown(f"**{i18n('Store').upper()}**")
    header[1].markdown(f"**{i18n('Name').upper()}**")
    header[2].button(f"{i18n('Price').upper()} {view.chevron}", key="toggle_histories", on_click=items_list.toggle_price_histories)

    for row in view.rows:
        render_row(items_list, row)

    last_index = len(view.rows) - 1
    if not view.render_pass.exhausted and last_index in items_list.notifier.pending():
        st.button(i18n("Show more"), key="show_more", on_click=lambda: items_list.notifier.expose(last_index))


def main() -> None:
    st.set_page_config(page_title="Price List", layout="wide")
    settings = load_settings()
    set_language(settings.language)

    query, organic_only = render_sidebar(settings)

    try:
        all_items = load_items(settings)
    except ItemsLoadError as err:
        logger.error("Failed to load items: %s", err)
        st.error(f"Failed to load items: {err}")
        return

    items_list = get_items_list(settings)
    search_key = (query.strip().lower(), organic_only)
    if st.session_state.get("last_search") != search_key:
        st.session_state.last_search = search_key
        matches, keywords = filter_items(all_items, query, organic_only)
        items_list.highlights = keywords
        items_list.set_items(matches)

    if items_list.view is None:
        st.info(i18n("search placeholder"))
        return

    sync_widgets(items_list)
    render_header(items_list)
    if items_list.view.chart_visible:
        render_chart(items_list)
    render_rows(items_list)


if __name__ == "__main__":
    main()
