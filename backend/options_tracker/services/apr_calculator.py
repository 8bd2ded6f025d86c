"""
APR Calculator
Annualized percentage return of a closed options trade

    capital_required = strike_price * contracts * 100
    net_premium      = premium - fees
    days_held        = max(1, ceil((date_closed - created_at) / 1 day))
    apr              = net_premium / capital_required * (365 / days_held) * 100

The holding period is always measured from the trade's own created_at, never
from the current time, so the value stored at creation and the value
recomputed for display are the same.
"""

import math
from datetime import date, datetime, time
from typing import Any, Mapping, Optional

CONTRACT_MULTIPLIER = 100
DAYS_PER_YEAR = 365
SECONDS_PER_DAY = 86400

CLOSED_STATUS = "CLOSED"


def _field(trade: Any, name: str) -> Any:
    """Read a field from a mapping of raw values or a record object"""
    if isinstance(trade, Mapping):
        return trade.get(name)
    return getattr(trade, name, None)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_float(value: Any) -> Optional[float]:
    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _status_of(trade: Any) -> str:
    status = _field(trade, "status")
    status = getattr(status, "value", status)
    return str(status or "").strip().upper()


def holding_days(created_at: datetime, date_closed: date) -> int:
    """
    Days a trade was held, rounded up and floored at 1

    Args:
        created_at: Trade creation timestamp
        date_closed: Closing date (counted from midnight, in created_at's timezone)

    Returns:
        Whole number of days, at least 1
    """
    closed_at = datetime.combine(date_closed, time.min, tzinfo=created_at.tzinfo)
    elapsed_days = (closed_at - created_at).total_seconds() / SECONDS_PER_DAY
    return max(1, math.ceil(elapsed_days))


def capital_required(strike_price: float, contracts: float) -> float:
    """Notional exposure of the position"""
    return strike_price * contracts * CONTRACT_MULTIPLIER


def compute_apr(trade: Any) -> Optional[float]:
    """
    Compute the annualized return of a closed trade

    Args:
        trade: Trade record (attributes) or mapping of raw field values

    Returns:
        APR in percent at full precision, or None when not applicable
    """
    if _status_of(trade) != CLOSED_STATUS:
        return None

    date_closed = _to_date(_field(trade, "date_closed"))
    created_at = _to_datetime(_field(trade, "created_at"))
    if date_closed is None or created_at is None:
        return None

    strike_price = _to_float(_field(trade, "strike_price"))
    contracts = _to_float(_field(trade, "contracts"))
    premium = _to_float(_field(trade, "premium"))
    if strike_price is None or contracts is None or premium is None:
        return None
    if strike_price <= 0 or contracts < 1 or not contracts.is_integer():
        return None

    raw_fees = _field(trade, "fees")
    fees = _to_float(raw_fees)
    if fees is None:
        if not _is_blank(raw_fees):
            return None
        fees = 0.0

    capital = capital_required(strike_price, contracts)
    if capital <= 0:
        return None

    net_premium = premium - fees
    days_held = holding_days(created_at, date_closed)

    return (net_premium / capital) * (DAYS_PER_YEAR / days_held) * 100
