"""
Services
"""

from .apr_calculator import compute_apr, holding_days
from .trade_store import TradeStore, TradeStoreError, SQLAlchemyTradeStore, SupabaseTradeStore
from .trade_service import TradeService
from .trade_summary import TradeSummary, summarize_trades

__all__ = [
    "compute_apr",
    "holding_days",
    "TradeStore",
    "TradeStoreError",
    "SQLAlchemyTradeStore",
    "SupabaseTradeStore",
    "TradeService",
    "TradeSummary",
    "summarize_trades",
]
