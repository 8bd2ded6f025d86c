"""
Web Routes (HTML Template Rendering)
Trade log page: entry form, trade table and summary
"""

from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pathlib import Path
from urllib.parse import urlencode
import logging

from ..config import Settings, get_settings
from ..dependencies import get_trade_service
from ..models import OptionType, TradeAction, TradeStatus
from ..schemas import TradeDraft
from ..services.trade_service import TradeService
from ..services.trade_summary import summarize_trades
from ..utils.formatting import format_currency, format_date, format_percentage

logger = logging.getLogger(__name__)

# Initialize templates
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["date"] = format_date
templates.env.filters["percentage"] = format_percentage

router = APIRouter()


async def render_trades_page(
    request: Request,
    service: TradeService,
    settings: Settings,
    draft: TradeDraft = None,
    form_errors=None,
    status_code: int = 200
):
    """Render the trade log page"""
    result = await service.list_trades()
    trades = result["trades"]
    error = request.query_params.get("error") or result.get("error")

    return templates.TemplateResponse(
        request,
        "trades.html",
        {
            "app_name": settings.app_name,
            "trades": trades,
            "summary": summarize_trades(trades),
            "draft": draft or TradeDraft(),
            "show_form": draft is not None or request.query_params.get("form") == "1",
            "form_errors": form_errors or [],
            "required_fields": settings.required_fields_list,
            "option_types": [choice.value for choice in OptionType],
            "actions": [choice.value for choice in TradeAction],
            "statuses": [choice.value for choice in TradeStatus],
            "success": request.query_params.get("success"),
            "error": error,
        },
        status_code=status_code
    )


@router.get("/", response_class=HTMLResponse)
async def trades_page(
    request: Request,
    service: TradeService = Depends(get_trade_service),
    settings: Settings = Depends(get_settings)
):
    """Render trade log page"""
    return await render_trades_page(request, service, settings)


@router.post("/trades", response_class=HTMLResponse)
async def submit_trade(
    request: Request,
    service: TradeService = Depends(get_trade_service),
    settings: Settings = Depends(get_settings)
):
    """Handle trade form submission"""
    form = await request.form()
    draft = TradeDraft.from_form(form)

    result = await service.submit_draft(draft)

    if result["success"]:
        trade = result["trade"]
        message = f"Trade added: {trade.symbol} {trade.option_type}"
        return RedirectResponse(url=f"/?{urlencode({'success': message})}", status_code=303)

    if result.get("errors"):
        # Keep what the user typed and show what is missing
        return await render_trades_page(
            request,
            service,
            settings,
            draft=draft,
            form_errors=result["errors"],
            status_code=422
        )

    return RedirectResponse(url=f"/?{urlencode({'error': result['error']})}", status_code=303)
