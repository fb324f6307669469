"""Display formatting for amounts and dates."""

from datetime import date, time
from decimal import Decimal
from typing import Optional, Union

Number = Union[Decimal, int, float]


def format_currency(amount: Optional[Number], symbol: str = "$") -> str:
    """Format an amount without sign, e.g. '$1,234.50'."""
    if amount is None:
        return f"{symbol}0.00"
    return f"{symbol}{abs(Decimal(str(amount))):,.2f}"


def format_currency_with_sign(amount: Optional[Number], symbol: str = "$") -> str:
    """Format an amount with an explicit sign, e.g. '+$50.00' or '-$20.00'."""
    if amount is None:
        return f"{symbol}0.00"
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{format_currency(amount, symbol)}"


def format_percent(value: Number, places: int = 1) -> str:
    """Format a percentage, e.g. '12.5%'."""
    return f"{Decimal(str(value)):.{places}f}%"


def format_date(day: date) -> str:
    """Short date, e.g. 'Jan 2'."""
    return f"{day:%b} {day.day}"


def format_full_date(day: date) -> str:
    """Date with year, e.g. 'Jan 2, 2024'."""
    return f"{day:%b} {day.day}, {day.year}"


def format_date_time(day: date, at: Optional[time] = None) -> str:
    """Date with optional time, e.g. 'Jan 2, 2024 10:30'."""
    if at is None:
        return format_full_date(day)
    return f"{format_full_date(day)} {at:%H:%M}"
