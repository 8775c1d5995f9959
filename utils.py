import os
import streamlit as st
import requests
from debug_utils import debug_log

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 15


def get_api_base_url():
    url = os.environ.get("BBGO_API_URL")
    if url:
        return url.rstrip("/")
    try:
        url = st.secrets["BBGO_API_URL"]
    except Exception as e:
        # no secrets.toml or no key in it
        debug_log(f"BBGO_API_URL secret not available: {e}")
        url = DEFAULT_API_URL
    return url.rstrip("/")


def get_timeout():
    try:
        return float(os.environ.get("BBGO_API_TIMEOUT", DEFAULT_TIMEOUT))
    except ValueError:
        return DEFAULT_TIMEOUT


def bbgo_get(path, params=None):
    url = get_api_base_url() + path
    debug_log(f"GET {url} params {params}")
    try:
        resp = requests.get(url, params=params or {}, timeout=get_timeout())
        debug_log(f"GET response: {resp.status_code} - {resp.text}")
        resp.raise_for_status()
        try:
            return resp.json()
        except ValueError:
            return {"status": "ERROR", "message": f"Non-JSON response: {resp.text}"}
    except requests.RequestException as e:
        debug_log(f"GET error: {e}")
        return {"status": "ERROR", "message": str(e)}
