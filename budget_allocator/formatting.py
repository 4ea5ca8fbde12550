"""Formatting utilities for currency display."""

from __future__ import annotations

import math
from typing import Union


def format_currency_full(amount: Union[float, int], symbol: str = '$') -> str:
    """Format an amount with thousands separators.

    Whole amounts are shown without decimals, other amounts with two.

    Example:
        >>> format_currency_full(100000)
        '$100,000'
        >>> format_currency_full(1234.5)
        '$1,234.50'
    """
    if float(amount).is_integer():
        return f"{symbol}{amount:,.0f}"
    return f"{symbol}{amount:,.2f}"


def format_currency_compact(amount: Union[float, int], symbol: str = '$') -> str:
    """Format an amount in thousands for tight spaces.

    Example:
        >>> format_currency_compact(25000)
        '$25K'
        >>> format_currency_compact(750)
        '$750'
    """
    if amount >= 1000:
        return f"{symbol}{math.floor(amount / 1000 + 0.5)}K"
    return format_currency_full(amount, symbol)


def format_percentile(rank: float) -> str:
    """Format a percentile rank as a whole-number badge, rounding half up.

    Example:
        >>> format_percentile(62.5)
        '63th'
    """
    return f"{int(math.floor(rank + 0.5))}th"
