"""Value formatters for display (Vietnamese locale)."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float]


def _group_thousands(value: Decimal) -> str:
    """Group an integral value with '.' as in vi-VN."""
    return f"{value:,.0f}".replace(",", ".")


def format_number(value: Number) -> str:
    """
    Format a number with Vietnamese thousands grouping.

    Args:
        value: Value to format (rounded to whole units)

    Returns:
        Formatted string like "1.234.567"
    """
    value = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    negative = value < 0
    formatted = _group_thousands(abs(value))
    return f"-{formatted}" if negative else formatted


def format_currency(value: Number, symbol: str = "₫") -> str:
    """
    Format decimal as Vietnamese currency.

    Args:
        value: Amount in VND
        symbol: Currency symbol (default: ₫)

    Returns:
        Formatted string like "1.234.567 ₫"
    """
    return f"{format_number(value)} {symbol}"


def format_percent(rate: Number, decimals: int = 1) -> str:
    """
    Format a fraction as percentage.

    Args:
        rate: Fraction (e.g., 0.105 for 10.5%)
        decimals: Number of decimal places

    Returns:
        Formatted string like "10,5%"
    """
    value = Decimal(str(rate)) * 100
    formatted = f"{value:.{decimals}f}".replace(".", ",")
    return f"{formatted}%"


def format_variation(value: Number, show_sign: bool = True) -> str:
    """
    Format a percent variation with sign indicator.

    Args:
        value: Variation already expressed in percent
        show_sign: Whether to show + for positive values

    Returns:
        Formatted string like "+15,5%" or "-3,2%"
    """
    value = Decimal(str(value))
    sign = "+" if show_sign and value > 0 else ""
    formatted = f"{value:.1f}".replace(".", ",")
    return f"{sign}{formatted}%"
