"""
Shared test fixtures
"""

import os
from datetime import datetime, timedelta
from typing import List

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from options_tracker import models  # noqa: E402,F401
from options_tracker.database import create_engine_for_url, create_session_factory, init_db  # noqa: E402
from options_tracker.schemas import TradeCreate, TradeRead  # noqa: E402
from options_tracker.services.trade_store import TradeStore, TradeStoreError  # noqa: E402


@pytest.fixture
async def engine():
    engine = create_engine_for_url("sqlite+aiosqlite://")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine):
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session


class MemoryTradeStore(TradeStore):
    """In-memory trade store with a controllable clock"""

    def __init__(self, start: datetime = datetime(2024, 1, 1), fail: bool = False):
        self.trades: List[TradeRead] = []
        self.now = start
        self.fail = fail
        self.apr_updates = []

    async def list_trades(self) -> List[TradeRead]:
        if self.fail:
            raise TradeStoreError("store unavailable")
        return sorted(self.trades, key=lambda t: (t.created_at, t.id), reverse=True)

    async def insert_trade(self, request: TradeCreate) -> TradeRead:
        if self.fail:
            raise TradeStoreError("store unavailable")
        trade = TradeRead(id=len(self.trades) + 1, created_at=self.now, **request.to_record())
        self.trades.append(trade)
        self.now += timedelta(minutes=1)
        return trade

    async def update_apr(self, trade_id: int, apr: float) -> TradeRead:
        self.apr_updates.append((trade_id, apr))
        for index, trade in enumerate(self.trades):
            if trade.id == trade_id:
                self.trades[index] = trade.model_copy(update={"apr": apr})
                return self.trades[index]
        raise TradeStoreError(f"Trade not found: {trade_id}")


@pytest.fixture
def memory_store():
    return MemoryTradeStore()
