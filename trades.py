import math
import os
from collections import namedtuple
import streamlit as st
import pandas as pd
from trade_store import TradeViewController, ViewState
from utils import get_timeout

CONTROLLER_KEY = "trades_controller"
ROW_HEIGHT = 35
HEADER_HEIGHT = 38
DEFAULT_TABLE_HEIGHT = 600
WAIT_MARGIN = 5

TradeColumn = namedtuple("TradeColumn", ["field", "label", "width", "type"])

TRADE_COLUMNS = (
    TradeColumn("gid", "GID", 80, "number"),
    TradeColumn("exchange", "Exchange", None, None),
    TradeColumn("symbol", "Symbol", None, None),
    TradeColumn("side", "Side", 90, None),
    TradeColumn("price", "Price", 120, "number"),
    TradeColumn("quantity", "Quantity", None, "number"),
    TradeColumn("isMargin", "Margin", None, None),
    TradeColumn("isIsolated", "Isolated", None, None),
    TradeColumn("tradedAt", "Trade Time", 200, None),
)


def column_config():
    config = {}
    for col in TRADE_COLUMNS:
        if col.type == "number":
            config[col.field] = st.column_config.NumberColumn(col.label, width=col.width)
        else:
            config[col.field] = st.column_config.TextColumn(col.label, width=col.width)
    return config


def cell_value(value, type=None):
    # text columns show booleans the way the backend spells them
    if type is None and isinstance(value, bool):
        return "true" if value else "false"
    return value


def build_trade_frame(trades):
    fields = [col.field for col in TRADE_COLUMNS]
    rows = [[cell_value(t.get(col.field), col.type) for col in TRADE_COLUMNS] for t in trades]
    ids = [t["id"] for t in trades]
    return pd.DataFrame(rows, columns=fields, index=pd.Index(ids, name="id"))


def sort_frame(df, field=None, ascending=True):
    # no field means backend order
    if not field:
        return df
    return df.sort_values(field, ascending=ascending, kind="stable", na_position="last")


def get_table_height():
    try:
        return int(os.environ.get("BBGO_TABLE_HEIGHT", DEFAULT_TABLE_HEIGHT))
    except ValueError:
        return DEFAULT_TABLE_HEIGHT


def auto_page_size(height):
    return max(1, (height - HEADER_HEIGHT) // ROW_HEIGHT)


def page_count(total, page_size):
    return max(1, math.ceil(total / page_size))


def paginate(df, page, page_size):
    page = min(max(1, page), page_count(len(df), page_size))
    start = (page - 1) * page_size
    return df.iloc[start:start + page_size]


def get_controller():
    controller = st.session_state.get(CONTROLLER_KEY)
    if controller is None:
        controller = TradeViewController()
        st.session_state[CONTROLLER_KEY] = controller
    return controller


def teardown():
    controller = st.session_state.pop(CONTROLLER_KEY, None)
    if controller is not None:
        controller.unmount()


def render_table(trades):
    df = build_trade_frame(trades)
    labels = {col.field: col.label for col in TRADE_COLUMNS}

    col1, col2, col3 = st.columns([2, 1, 1])
    sort_field = col1.selectbox(
        "Sort by", [None] + list(labels),
        format_func=lambda f: "Backend order" if f is None else labels[f],
        key="trades_sort_field",
    )
    ascending = col2.radio("Order", ["Ascending", "Descending"], horizontal=True, key="trades_sort_order") == "Ascending"
    col3.download_button(
        "⬇️ Download CSV", df.to_csv(index=False), file_name="trades.csv", mime="text/csv"
    )

    df = sort_frame(df, sort_field, ascending)
    height = get_table_height()
    page_size = auto_page_size(height)
    pages = page_count(len(df), page_size)
    page = st.number_input("Page", min_value=1, max_value=pages, value=1, step=1)
    st.caption(f"{len(df)} trades · page {min(page, pages)} of {pages} · {page_size} rows per page")

    st.dataframe(
        paginate(df, page, page_size),
        column_config=column_config(),
        column_order=[col.field for col in TRADE_COLUMNS],
        hide_index=True,
        height=height,
        use_container_width=True,
    )


def show():
    st.header("📖 Trades")
    controller = get_controller()
    controller.mount()

    if st.button("🔄 Refresh", key="trades_refresh"):
        controller.refresh()

    if controller.state is ViewState.LOADING:
        with st.spinner("Loading trades..."):
            controller.wait(get_timeout() + WAIT_MARGIN)

    if controller.state is ViewState.LOADING:
        st.warning("Trades are still loading.")
    elif controller.state is ViewState.FAILED:
        st.error(f"Error fetching trades: {controller.error}")
    elif controller.state is ViewState.LOADED and not controller.trades:
        st.info("No trades found.")

    render_table(controller.trades)
