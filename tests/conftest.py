"""
Shared fixtures for the trades dashboard tests.
"""
import pytest


SAMPLE_TRADE = {
    "gid": 1,
    "exchange": "X",
    "symbol": "BTCUSDT",
    "side": "buy",
    "price": 50000,
    "quantity": 0.1,
    "isMargin": False,
    "isIsolated": False,
    "tradedAt": "2023-01-01T00:00:00Z",
}


@pytest.fixture
def raw_trade():
    return dict(SAMPLE_TRADE)


@pytest.fixture
def raw_trades():
    return [
        dict(SAMPLE_TRADE, gid=3, side="sell", price=50100),
        dict(SAMPLE_TRADE, gid=1),
        dict(SAMPLE_TRADE, gid=2, symbol="ETHUSDT", price=3000),
    ]


@pytest.fixture(autouse=True)
def bbgo_env(monkeypatch):
    monkeypatch.setenv("BBGO_API_URL", "http://bbgo.test:8080/")
    monkeypatch.delenv("BBGO_API_TIMEOUT", raising=False)
    monkeypatch.delenv("BBGO_TABLE_HEIGHT", raising=False)


class FakeQuery:
    """Stands in for query_trades and keeps the callbacks of every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, filter, on_result, on_error=None):
        self.calls.append((filter, on_result, on_error))

    def resolve(self, records, index=-1):
        self.calls[index][1](records)

    def fail(self, exc, index=-1):
        self.calls[index][2](exc)


@pytest.fixture
def fake_query():
    return FakeQuery()
