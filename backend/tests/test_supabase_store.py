import json
from datetime import date

import aiohttp
import pytest

from options_tracker.schemas import TradeCreate
from options_tracker.services.apr_calculator import compute_apr
from options_tracker.services.trade_store import SupabaseTradeStore, TradeStoreError, serialize_record

ROW = {
    "id": 7,
    "created_at": "2024-01-01T00:00:00+00:00",
    "symbol": "AAPL",
    "option_type": "PUT",
    "strike_price": 150,
    "expiration_date": "2024-02-16",
    "premium": 200,
    "contracts": 1,
    "action": "SELL",
    "status": "CLOSED",
    "fees": None,
    "date_closed": "2024-01-31",
    "apr": None,
}


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self.body = body

    async def json(self):
        return self.body

    async def text(self):
        return json.dumps(self.body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, responses, calls):
        self.responses = responses
        self.calls = calls

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


def make_store(*responses):
    calls = []
    queue = list(responses)
    store = SupabaseTradeStore(
        url="https://project.supabase.co/",
        api_key="anon-key",
        session_factory=lambda **kwargs: FakeSession(queue, calls),
    )
    return store, calls


def test_requires_url_and_key():
    with pytest.raises(TradeStoreError):
        SupabaseTradeStore(url="", api_key="key")


def test_headers():
    store, _ = make_store()
    headers = store.build_headers("return=representation")
    assert headers["apikey"] == "anon-key"
    assert headers["Authorization"] == "Bearer anon-key"
    assert headers["Prefer"] == "return=representation"
    assert store.endpoint == "https://project.supabase.co/rest/v1/options_trades"


def test_serialize_record_dates():
    record = serialize_record({"expiration_date": date(2024, 2, 16), "premium": 1.5, "date_closed": None})
    assert record == {"expiration_date": "2024-02-16", "premium": 1.5, "date_closed": None}


async def test_list_trades_orders_newest_first():
    store, calls = make_store(FakeResponse(200, [ROW]))

    trades = await store.list_trades()

    method, url, kwargs = calls[0]
    assert method == "GET"
    assert kwargs["params"]["order"].startswith("created_at.desc")
    assert trades[0].id == 7
    assert trades[0].fees == 0.0
    assert compute_apr(trades[0]) == pytest.approx(200 / 15000 * (365 / 30) * 100)


async def test_insert_trade_posts_representation():
    store, calls = make_store(FakeResponse(201, [ROW]))
    request = TradeCreate(symbol="aapl", strike_price=150, premium=200,
                          expiration_date=date(2024, 2, 16))

    trade = await store.insert_trade(request)

    method, _, kwargs = calls[0]
    assert method == "POST"
    assert kwargs["headers"]["Prefer"] == "return=representation"
    assert kwargs["json"][0]["symbol"] == "AAPL"
    assert kwargs["json"][0]["expiration_date"] == "2024-02-16"
    assert trade.id == 7


async def test_update_apr_patches_by_id():
    store, calls = make_store(FakeResponse(200, [dict(ROW, apr=16.1)]))

    trade = await store.update_apr(7, 16.1)

    method, _, kwargs = calls[0]
    assert method == "PATCH"
    assert kwargs["params"] == {"id": "eq.7"}
    assert kwargs["json"] == {"apr": 16.1}
    assert trade.apr == 16.1


async def test_update_apr_missing_row():
    store, _ = make_store(FakeResponse(200, []))
    with pytest.raises(TradeStoreError):
        await store.update_apr(99, 1.0)


async def test_error_status_raises():
    store, _ = make_store(FakeResponse(401, {"message": "Invalid API key"}))
    with pytest.raises(TradeStoreError, match="401"):
        await store.list_trades()


async def test_client_error_raises():
    store, _ = make_store(aiohttp.ClientConnectionError("connection refused"))
    with pytest.raises(TradeStoreError):
        await store.list_trades()
