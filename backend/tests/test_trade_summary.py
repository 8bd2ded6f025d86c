from datetime import date, datetime

import pytest

from options_tracker.schemas import TradeRead
from options_tracker.services.trade_summary import summarize_trades


def make_trade(trade_id, status="OPEN", premium=100.0, fees=1.0, **overrides):
    fields = {
        "id": trade_id,
        "created_at": datetime(2024, 1, 1),
        "symbol": "AAPL",
        "option_type": "PUT",
        "strike_price": 100.0,
        "premium": premium,
        "contracts": 1,
        "action": "SELL",
        "status": status,
        "fees": fees,
    }
    fields.update(overrides)
    return TradeRead(**fields)


def test_empty():
    summary = summarize_trades([])
    assert summary.total_trades == 0
    assert summary.status_counts == {"OPEN": 0, "CLOSED": 0, "EXPIRED": 0, "ASSIGNED": 0}
    assert summary.average_apr is None
    assert summary.best_apr is None


def test_totals_and_apr():
    trades = [
        make_trade(1, status="CLOSED", premium=50.0, fees=0.0, date_closed=date(2024, 1, 1)),
        make_trade(2, status="CLOSED", display_apr=10.0),
        make_trade(3, status="EXPIRED"),
        make_trade(4),
    ]

    summary = summarize_trades(trades)

    assert summary.total_trades == 4
    assert summary.status_counts["CLOSED"] == 2
    assert summary.status_counts["EXPIRED"] == 1
    assert summary.total_premium == pytest.approx(350.0)
    assert summary.total_fees == pytest.approx(3.0)
    assert summary.net_premium == pytest.approx(347.0)
    assert summary.closed_with_apr == 2
    # 50 / 10000 * 365 * 100 = 182.5
    assert summary.best_apr == pytest.approx(182.5)
    assert summary.average_apr == pytest.approx((182.5 + 10.0) / 2)
