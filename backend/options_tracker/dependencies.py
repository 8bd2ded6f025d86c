"""
Dependency Injection
FastAPI dependencies for services
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends

from .config import Settings, get_settings
from .database import AsyncSessionLocal
from .services.trade_service import TradeService
from .services.trade_store import TradeStore, TradeStoreError, SQLAlchemyTradeStore, SupabaseTradeStore

logger = logging.getLogger(__name__)


def uses_supabase(settings: Settings) -> bool:
    return settings.trade_store.lower() == "supabase"


def check_trade_store_config(settings: Settings):
    """
    Validate trade store settings (called on app startup)

    Raises:
        TradeStoreError: Supabase selected without URL or key
    """
    if uses_supabase(settings) and not (settings.supabase_url and settings.supabase_key):
        raise TradeStoreError("TRADE_STORE=supabase requires SUPABASE_URL and SUPABASE_KEY")


async def get_trade_store(
    settings: Settings = Depends(get_settings)
) -> AsyncGenerator[TradeStore, None]:
    """Get the configured trade store backend"""
    if uses_supabase(settings):
        yield SupabaseTradeStore(
            url=settings.supabase_url,
            api_key=settings.supabase_key,
            table=settings.supabase_table,
            timeout=settings.supabase_timeout
        )
        return

    async with AsyncSessionLocal() as session:
        yield SQLAlchemyTradeStore(session)


async def get_trade_service(
    store: TradeStore = Depends(get_trade_store),
    settings: Settings = Depends(get_settings)
) -> TradeService:
    """Get trade service instance"""
    return TradeService(store, settings.required_fields_list)
