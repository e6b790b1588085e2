"""Formatting utilities for currency, percentages and dates."""

from __future__ import annotations

from typing import Any, Optional, Union

import pandas as pd

from . import config

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
}


def format_currency(
    amount: Union[float, int],
    currency: Optional[str] = None,
    include_symbol: bool = True,
) -> str:
    """Format a currency amount with thousands separators and two decimals.

    Args:
        amount: The amount to format
        currency: ISO currency code (defaults to ``config.CURRENCY``)
        include_symbol: Whether to include the currency symbol

    Returns:
        Formatted currency string

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-50)
        '-$50.00'
        >>> format_currency(1234.56, include_symbol=False)
        '1,234.56'
    """
    code = (currency or config.CURRENCY).upper()
    formatted = f"{abs(amount):,.2f}"
    sign = "-" if amount < 0 else ""
    if not include_symbol:
        return f"{sign}{formatted}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {formatted}"
    return f"{sign}{symbol}{formatted}"


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Markdown renderers treat ``$`` as a LaTeX math delimiter, so it has to be
    escaped when amounts are embedded in markdown text.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\$1,234.56'
    """
    return format_currency(amount, currency="USD").replace("$", "\\$")


def format_percentage(value: float) -> str:
    """Round a percentage to a whole number, e.g. ``76.9`` -> ``'77%'``."""
    return f"{round(value)}%"


def format_date(value: Any) -> str:
    """Format a date for display, e.g. ``'Mar 5, 2024'``.

    Returns ``'N/A'`` for missing values and ``'Invalid Date'`` when the
    value cannot be parsed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return "N/A"
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return "Invalid Date"
    return f"{ts.strftime('%b')} {ts.day}, {ts.year}"


def format_date_short(value: Any) -> str:
    """Month and day only, e.g. ``'Mar 5'``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return "N/A"
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return "Invalid Date"
    return f"{ts.strftime('%b')} {ts.day}"
