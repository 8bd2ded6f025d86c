"""
Trade Summary
Aggregate statistics for the trade log
"""

from typing import Dict, Iterable, Optional

from pydantic import BaseModel, Field

from ..models import TradeStatus
from ..schemas import TradeRead
from .apr_calculator import compute_apr


class TradeSummary(BaseModel):
    """Summary statistics over a set of trades"""

    total_trades: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    total_premium: float = 0.0
    total_fees: float = 0.0
    net_premium: float = 0.0
    closed_with_apr: int = 0
    average_apr: Optional[float] = None
    best_apr: Optional[float] = None


def summarize_trades(trades: Iterable[TradeRead]) -> TradeSummary:
    """
    Summarize trades

    Args:
        trades: Stored trades (display_apr used when present)

    Returns:
        TradeSummary
    """
    status_counts = {status.value: 0 for status in TradeStatus}
    total_trades = 0
    total_premium = 0.0
    total_fees = 0.0
    aprs = []

    for trade in trades:
        total_trades += 1
        status_counts[trade.status] = status_counts.get(trade.status, 0) + 1
        total_premium += trade.premium
        total_fees += trade.fees or 0.0

        apr = trade.display_apr
        if apr is None:
            apr = trade.apr if trade.apr is not None else compute_apr(trade)
        if apr is not None:
            aprs.append(apr)

    return TradeSummary(
        total_trades=total_trades,
        status_counts=status_counts,
        total_premium=total_premium,
        total_fees=total_fees,
        net_premium=total_premium - total_fees,
        closed_with_apr=len(aprs),
        average_apr=sum(aprs) / len(aprs) if aprs else None,
        best_apr=max(aprs) if aprs else None,
    )
