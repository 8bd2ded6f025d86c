"""
Database Models
"""

from .options_trade import OptionsTrade, OptionType, TradeAction, TradeStatus

__all__ = [
    "OptionsTrade",
    "OptionType",
    "TradeAction",
    "TradeStatus",
]
