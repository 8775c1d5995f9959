import logging
from concurrent.futures import ThreadPoolExecutor
from utils import bbgo_get
from errors import TradeQueryError

TRADES_PATH = "/api/trades"

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="bbgo-query")


def fetch_trades(filter=None):
    data = bbgo_get(TRADES_PATH, params=dict(filter or {}))
    if not isinstance(data, dict):
        raise TradeQueryError(f"Unexpected response: {data!r}")
    if data.get("status") == "ERROR":
        raise TradeQueryError(data.get("message", "Error"))
    trades = data.get("trades")
    if trades is None:
        return []
    if not isinstance(trades, list):
        raise TradeQueryError(f"Unexpected trades payload: {trades!r}")
    return trades


def query_trades(filter, on_result, on_error=None):
    """Query trades in the background and hand the result to a callback.

    Exactly one of ``on_result(trades)`` or ``on_error(exc)`` is called, once,
    from a worker thread. The returned future settles after the callback ran.
    """
    def run():
        try:
            trades = fetch_trades(filter)
        except TradeQueryError as e:
            logging.error(f"Trade query failed: {e}")
            if on_error is not None:
                on_error(e)
            return
        on_result(trades)

    return _executor.submit(run)
