import logging
import threading
from collections.abc import Mapping
from enum import Enum
from bbgo_api import query_trades
from errors import InvalidTradeError


def normalize_trade(raw):
    if not isinstance(raw, Mapping):
        raise InvalidTradeError(f"Trade is not a record: {raw!r}")
    gid = raw.get("gid")
    if gid is None:
        raise InvalidTradeError(f"Trade without gid: {raw}")
    try:
        hash(gid)
    except TypeError:
        raise InvalidTradeError(f"Trade gid is not a usable identity: {gid!r}") from None
    trade = dict(raw)
    trade["id"] = gid
    return trade


def normalize_trades(raws):
    trades = []
    seen = set()
    for raw in raws:
        try:
            trade = normalize_trade(raw)
        except InvalidTradeError as e:
            logging.warning(f"Skipping trade: {e}")
            continue
        if trade["id"] in seen:
            logging.warning(f"Skipping duplicate trade gid {trade['id']}")
            continue
        seen.add(trade["id"])
        trades.append(trade)
    return tuple(trades)


class ViewState(Enum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class TradeViewController:
    """Owns the trade collection shown by the trades page.

    The collection starts empty, is fetched once per mount and is replaced
    as a whole when a query completes. Completions that arrive after
    ``unmount()`` (or for a query that is no longer current) are dropped.
    """

    def __init__(self, query=query_trades):
        self._query = query
        self._lock = threading.Lock()
        self._settled = threading.Event()
        self._settled.set()
        self._state = ViewState.EMPTY
        self._trades = ()
        self._error = None
        self._mounted = False
        self._ticket = None
        self._listeners = []

    @property
    def state(self):
        return self._state

    @property
    def trades(self):
        return self._trades

    @property
    def error(self):
        return self._error

    def subscribe(self, listener):
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def mount(self):
        with self._lock:
            if self._mounted or self._state is not ViewState.EMPTY:
                return
            self._mounted = True
            ticket = self._start_locked()
        self._issue(ticket)

    def refresh(self):
        with self._lock:
            if not self._mounted or self._state is ViewState.LOADING:
                return
            ticket = self._start_locked()
        self._issue(ticket)

    def unmount(self):
        with self._lock:
            self._mounted = False
            self._ticket = None
            self._listeners = []
        self._settled.set()

    def wait(self, timeout=None):
        return self._settled.wait(timeout)

    def _start_locked(self):
        ticket = object()
        self._ticket = ticket
        self._state = ViewState.LOADING
        self._error = None
        self._settled.clear()
        return ticket

    def _issue(self, ticket):
        def on_result(records):
            try:
                trades = normalize_trades(records)
            except Exception as e:
                logging.exception("Could not normalize trade query result")
                self._complete(ticket, ViewState.FAILED, error=str(e) or e.__class__.__name__)
                return
            self._complete(ticket, ViewState.LOADED, trades=trades)

        def on_error(exc):
            self._complete(ticket, ViewState.FAILED, error=str(exc) or exc.__class__.__name__)

        logging.info("Querying trades")
        self._query({}, on_result, on_error)

    def _complete(self, ticket, state, trades=None, error=None):
        with self._lock:
            if ticket is not self._ticket:
                return
            self._ticket = None
            if trades is not None:
                self._trades = trades
            self._error = error
            self._state = state
            listeners = list(self._listeners)
        self._settled.set()
        logging.info(f"Trade query finished: {state.value}, {len(self._trades)} trades")
        for listener in listeners:
            listener(self)
