"""
Trade Store
Persistence backends for options trades

- SQLAlchemyTradeStore: local database through an AsyncSession
- SupabaseTradeStore: hosted Supabase (PostgREST) table over HTTP
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, Dict, List, Optional

import aiohttp
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import OptionsTrade
from ..schemas import TradeCreate, TradeRead

logger = logging.getLogger(__name__)


class TradeStoreError(RuntimeError):
    """Raised when the trade store cannot read or write trades"""


class TradeStore(ABC):
    """Record store for options trades"""

    @abstractmethod
    async def list_trades(self) -> List[TradeRead]:
        """
        All trades, newest created first

        Returns:
            List of stored trades
        """
        pass

    @abstractmethod
    async def insert_trade(self, request: TradeCreate) -> TradeRead:
        """
        Insert one trade; the store assigns id and created_at

        Args:
            request: Validated trade

        Returns:
            Stored trade
        """
        pass

    @abstractmethod
    async def update_apr(self, trade_id: int, apr: float) -> TradeRead:
        """Write the computed APR of a stored trade"""
        pass


class SQLAlchemyTradeStore(TradeStore):
    """Trade store backed by the options_trades table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_trades(self) -> List[TradeRead]:
        try:
            stmt = select(OptionsTrade).order_by(desc(OptionsTrade.created_at), desc(OptionsTrade.id))
            result = await self.db.execute(stmt)
            return [TradeRead.model_validate(trade) for trade in result.scalars().all()]
        except SQLAlchemyError as e:
            raise TradeStoreError(f"Failed to fetch trades: {e}") from e

    async def insert_trade(self, request: TradeCreate) -> TradeRead:
        try:
            trade = OptionsTrade(**request.to_record())
            self.db.add(trade)
            await self.db.commit()
            await self.db.refresh(trade)
            return TradeRead.model_validate(trade)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise TradeStoreError(f"Failed to insert trade: {e}") from e

    async def update_apr(self, trade_id: int, apr: float) -> TradeRead:
        try:
            trade = await self.db.get(OptionsTrade, trade_id)
            if trade is None:
                raise TradeStoreError(f"Trade not found: {trade_id}")
            trade.apr = apr
            await self.db.commit()
            await self.db.refresh(trade)
            return TradeRead.model_validate(trade)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise TradeStoreError(f"Failed to update APR for trade {trade_id}: {e}") from e


def serialize_record(record: Dict) -> Dict:
    """Convert dates to ISO strings for a JSON payload"""
    return {
        key: value.isoformat() if isinstance(value, date) else value
        for key, value in record.items()
    }


class SupabaseTradeStore(TradeStore):
    """Trade store backed by a Supabase table (PostgREST API)"""

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = "options_trades",
        timeout: float = 10.0,
        session_factory: Optional[Callable[..., aiohttp.ClientSession]] = None
    ):
        """
        Initialize Supabase trade store

        Args:
            url: Supabase project URL
            api_key: Supabase anon or service key
            table: Table name
            timeout: Request timeout in seconds
            session_factory: ClientSession factory (for testing)
        """
        if not url or not api_key:
            raise TradeStoreError("Supabase URL and key must be configured")

        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session_factory = session_factory or aiohttp.ClientSession

    def build_headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = dict(self.headers)
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        params: Optional[Dict] = None,
        payload=None,
        prefer: Optional[str] = None
    ) -> List[Dict]:
        try:
            async with self.session_factory(timeout=self.timeout) as session:
                async with session.request(
                    method,
                    self.endpoint,
                    params=params,
                    json=payload,
                    headers=self.build_headers(prefer)
                ) as response:
                    if response.status >= 300:
                        body = await response.text()
                        raise TradeStoreError(f"Supabase returned status {response.status}: {body}")
                    return await response.json()
        except aiohttp.ClientError as e:
            raise TradeStoreError(f"Supabase request failed: {e}") from e

    async def list_trades(self) -> List[TradeRead]:
        rows = await self._request(
            "GET",
            params={"select": "*", "order": "created_at.desc,id.desc"}
        )
        return [TradeRead.model_validate(row) for row in rows or []]

    async def insert_trade(self, request: TradeCreate) -> TradeRead:
        rows = await self._request(
            "POST",
            payload=[serialize_record(request.to_record())],
            prefer="return=representation"
        )
        if not rows:
            raise TradeStoreError("Supabase insert returned no rows")
        return TradeRead.model_validate(rows[0])

    async def update_apr(self, trade_id: int, apr: float) -> TradeRead:
        rows = await self._request(
            "PATCH",
            params={"id": f"eq.{trade_id}"},
            payload={"apr": apr},
            prefer="return=representation"
        )
        if not rows:
            raise TradeStoreError(f"Trade not found: {trade_id}")
        return TradeRead.model_validate(rows[0])
