"""
Trade Service
Create and list options trades through a trade store

APR is computed once, after the trade is stored, from the stored created_at.
Listing fills in display_apr from the stored value or the same calculation.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..schemas import DEFAULT_REQUIRED_FIELDS, DraftValidationError, TradeCreate, TradeDraft, TradeRead
from .apr_calculator import compute_apr
from .trade_store import TradeStore, TradeStoreError
from .trade_summary import summarize_trades

logger = logging.getLogger(__name__)
trades_logger = logging.getLogger("trades")


def with_display_apr(trade: TradeRead) -> TradeRead:
    """Attach the stored APR, or the recomputed one, for display"""
    display_apr = trade.apr if trade.apr is not None else compute_apr(trade)
    return trade.model_copy(update={"display_apr": display_apr})


class TradeService:
    """Service for logging options trades"""

    def __init__(self, store: TradeStore, required_fields: Optional[Iterable[str]] = None):
        """
        Initialize trade service

        Args:
            store: Trade store backend
            required_fields: Form fields that must be filled in
        """
        self.store = store
        self.required_fields = list(required_fields or DEFAULT_REQUIRED_FIELDS)

    async def list_trades(self) -> Dict:
        """
        List all trades, newest first

        Returns:
            {'success': True, 'trades': [...]} or {'success': False, 'error': ...}
        """
        try:
            trades = await self.store.list_trades()
        except TradeStoreError as e:
            logger.error(f"Error fetching trades: {e}")
            return {"success": False, "error": "Failed to fetch trades", "trades": []}

        return {"success": True, "trades": [with_display_apr(trade) for trade in trades]}

    async def create_trade(self, request: TradeCreate) -> Dict:
        """
        Store a trade and record its APR

        Args:
            request: Validated trade

        Returns:
            {'success': True, 'trade': TradeRead} or {'success': False, 'error': ...}
        """
        try:
            trade = await self.store.insert_trade(request)
        except TradeStoreError as e:
            logger.error(f"Insert error: {e}")
            return {"success": False, "error": "Error adding trade."}

        trades_logger.info(
            f"Trade logged: #{trade.id} {trade.action} {trade.contracts}x "
            f"{trade.symbol} {trade.strike_price} {trade.option_type} ({trade.status})"
        )

        apr = compute_apr(trade)
        if apr is not None:
            # The trade is already stored; display_apr recomputes the same value if this write fails
            try:
                trade = await self.store.update_apr(trade.id, apr)
                trades_logger.info(f"APR recorded for trade #{trade.id}: {apr:.4f}%")
            except TradeStoreError as e:
                logger.error(f"Failed to record APR for trade #{trade.id}: {e}")

        return {"success": True, "trade": with_display_apr(trade)}

    async def submit_draft(self, draft: TradeDraft) -> Dict:
        """
        Commit a form draft and store the resulting trade

        Args:
            draft: Trade form draft

        Returns:
            Same shape as create_trade, with 'errors' on validation failure
        """
        try:
            request = draft.commit(self.required_fields)
        except DraftValidationError as e:
            logger.info(f"Rejected trade draft: {e}")
            return {"success": False, "error": str(e), "errors": e.errors}

        return await self.create_trade(request)

    async def get_summary(self) -> Dict:
        """
        Summary statistics over all trades

        Returns:
            {'success': True, 'summary': TradeSummary} or failure dict
        """
        result = await self.list_trades()
        if not result["success"]:
            return result

        trades: List[TradeRead] = result["trades"]
        return {"success": True, "summary": summarize_trades(trades)}
