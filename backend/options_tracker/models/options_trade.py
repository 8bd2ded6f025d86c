"""
Options Trade Model
"""

import enum

from sqlalchemy import Column, Integer, String, Float, Date, DateTime
from sqlalchemy.sql import func
from ..database import Base


class OptionType(str, enum.Enum):
    PUT = "PUT"
    CALL = "CALL"


class TradeAction(str, enum.Enum):
    SELL = "SELL"
    BUY = "BUY"


class TradeStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    EXPIRED = "EXPIRED"
    ASSIGNED = "ASSIGNED"


class OptionsTrade(Base):
    """Model for manually logged options trades"""

    __tablename__ = "options_trades"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    symbol = Column(String, nullable=False, index=True)  # Uppercase ticker
    option_type = Column(String, nullable=False, default=OptionType.PUT.value)  # 'PUT' or 'CALL'
    strike_price = Column(Float, nullable=False)
    expiration_date = Column(Date)
    premium = Column(Float, nullable=False)
    contracts = Column(Integer, nullable=False, default=1)  # 100 shares per contract
    action = Column(String, nullable=False, default=TradeAction.SELL.value)  # 'SELL' or 'BUY'
    status = Column(String, nullable=False, default=TradeStatus.OPEN.value, index=True)  # OPEN/CLOSED/EXPIRED/ASSIGNED
    fees = Column(Float, nullable=False, default=0.0)
    date_closed = Column(Date)  # Only set for CLOSED trades
    apr = Column(Float)  # Annualized return (%), full precision

    def __repr__(self):
        return (
            f"<OptionsTrade(symbol='{self.symbol}', option_type='{self.option_type}', "
            f"strike_price={self.strike_price}, status='{self.status}')>"
        )

    def is_closed(self) -> bool:
        """Closed trade with a closing date (APR applies)"""
        return self.status == TradeStatus.CLOSED.value and self.date_closed is not None
