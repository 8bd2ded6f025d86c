"""
Trades API Routes
JSON endpoints for the options trade log
"""

from fastapi import APIRouter, Body, Depends, HTTPException
from typing import Any, Dict
import logging

from ..dependencies import get_trade_service
from ..schemas import TradeCreate
from ..services.apr_calculator import compute_apr
from ..services.trade_service import TradeService

router = APIRouter(prefix="/api/trades", tags=["trades"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_trades(service: TradeService = Depends(get_trade_service)) -> Dict:
    """
    List all trades, newest first

    Returns:
        Trades with display APR
    """
    result = await service.list_trades()
    if not result["success"]:
        raise HTTPException(status_code=502, detail=result["error"])

    return {
        "trades": result["trades"],
        "count": len(result["trades"])
    }


@router.post("", status_code=201)
async def create_trade(
    request: TradeCreate,
    service: TradeService = Depends(get_trade_service)
) -> Dict:
    """
    Log a new trade

    Args:
        request: Trade fields

    Returns:
        Stored trade (with APR when closed)
    """
    result = await service.create_trade(request)
    if not result["success"]:
        raise HTTPException(status_code=502, detail=result["error"])

    return {"trade": result["trade"]}


@router.get("/summary")
async def get_summary(service: TradeService = Depends(get_trade_service)) -> Dict:
    """Summary statistics over all trades"""
    result = await service.get_summary()
    if not result["success"]:
        raise HTTPException(status_code=502, detail=result["error"])

    return {"summary": result["summary"]}


@router.post("/apr")
async def calculate_apr(fields: Dict[str, Any] = Body(...)) -> Dict:
    """
    Compute APR for raw trade fields without storing anything

    Args:
        fields: status, date_closed, created_at, strike_price, contracts, premium, fees

    Returns:
        APR in percent, or null when not applicable
    """
    apr = compute_apr(fields)
    return {
        "apr": apr,
        "apr_rounded": round(apr, 2) if apr is not None else None
    }
