import streamlit as st
import importlib
from debug_utils import setup_logging

# Set page config ONCE at the top
st.set_page_config(page_title="BBGO Dashboard", layout="wide")
setup_logging()

PAGES = {
    "Trades": "trades",
}

st.title("BBGO Dashboard")

page = st.sidebar.radio("Go to", list(PAGES.keys()))
modulename = PAGES[page]

previous = st.session_state.get("active_page")
if previous and previous != modulename:
    # leaving a page: let it drop its view state
    old_module = importlib.import_module(previous)
    if callable(getattr(old_module, "teardown", None)):
        old_module.teardown()
st.session_state["active_page"] = modulename

try:
    module = importlib.import_module(modulename)
    if hasattr(module, "show") and callable(getattr(module, "show")):
        module.show()
    else:
        st.error(f"Module `{modulename}` is missing a callable `show()` function.")
except ModuleNotFoundError:
    st.error(f"Module `{modulename}.py` not found.")
except Exception as e:
    st.error(f"Error loading `{modulename}`: {e}")
