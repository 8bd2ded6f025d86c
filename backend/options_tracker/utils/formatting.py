"""
Display Formatting
Currency, date and percentage helpers (also registered as Jinja2 filters)
"""

from datetime import date, datetime
from typing import Optional, Union


def format_currency(amount: Optional[float]) -> str:
    """Format an amount as USD, e.g. -1234.5 -> '-$1,234.50'"""
    if amount is None:
        return "-"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_date(value: Optional[Union[date, datetime, str]]) -> str:
    """Format a date or timestamp as MM/DD/YYYY"""
    if value is None or value == "":
        return "-"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return f"{value.month}/{value.day}/{value.year}"


def format_percentage(value: Optional[float]) -> str:
    """Format a percentage with 2 decimals; missing values show as N/A"""
    if value is None:
        return "N/A"
    return f"{value:.2f}%"
