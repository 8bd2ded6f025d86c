import pytest

from options_tracker import dependencies
from options_tracker.config import Settings, settings
from options_tracker.dependencies import check_trade_store_config, get_trade_store
from options_tracker.main import create_app, lifespan
from options_tracker.services.trade_store import SQLAlchemyTradeStore, SupabaseTradeStore, TradeStoreError


def supabase_settings(**overrides):
    fields = {
        "trade_store": "supabase",
        "supabase_url": "https://project.supabase.co",
        "supabase_key": "anon-key",
    }
    fields.update(overrides)
    return Settings(**fields)


async def test_supabase_store_does_not_open_db_session(monkeypatch):
    def fail_session():
        raise AssertionError("database session opened for supabase backend")

    monkeypatch.setattr(dependencies, "AsyncSessionLocal", fail_session)

    stores = get_trade_store(supabase_settings())
    store = await stores.__anext__()

    assert isinstance(store, SupabaseTradeStore)
    await stores.aclose()


async def test_sqlite_store_uses_session(engine, monkeypatch):
    from options_tracker.database import create_session_factory

    monkeypatch.setattr(dependencies, "AsyncSessionLocal", create_session_factory(engine))

    stores = get_trade_store(Settings(trade_store="sqlite"))
    store = await stores.__anext__()

    assert isinstance(store, SQLAlchemyTradeStore)
    assert await store.list_trades() == []
    await stores.aclose()


@pytest.mark.parametrize("missing", ["supabase_url", "supabase_key"])
def test_check_config_rejects_missing_supabase_credentials(missing):
    with pytest.raises(TradeStoreError):
        check_trade_store_config(supabase_settings(**{missing: None}))


def test_check_config_accepts_valid_settings():
    check_trade_store_config(supabase_settings())
    check_trade_store_config(Settings(trade_store="sqlite"))


async def test_startup_fails_on_misconfigured_supabase(monkeypatch):
    monkeypatch.setattr(settings, "trade_store", "supabase")
    monkeypatch.setattr(settings, "supabase_url", None)
    app = create_app(init_logging=False)

    with pytest.raises(TradeStoreError):
        async with lifespan(app):
            pass
