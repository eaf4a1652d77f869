"""Input sanitizers and numeric guards shared by every calculator.

Calculators never raise on out-of-range numbers: form values may be
transiently invalid while a user types, so amounts are clamped and
divisions by zero short-circuit to zero.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import NamedTuple, Optional, TypeVar, Union

from vn_tax_calculator.shared.exceptions import CurrencyParseError

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]
E = TypeVar("E", bound=Enum)

ZERO = Decimal("0")
ONE = Decimal("1")

# Largest monthly amount accepted from free-text input (10 tỷ)
MAX_MONTHLY_INCOME = Decimal("10000000000")


def to_decimal(value: Optional[Number]) -> Decimal:
    """Convert loosely-typed numeric input to Decimal (None/NaN -> 0)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def non_negative(value: Optional[Number], field: str = "value") -> Decimal:
    """
    Clamp a numeric input at zero.

    Args:
        value: Raw amount, rate or count
        field: Field name used in the debug log

    Returns:
        max(0, value) as Decimal
    """
    amount = to_decimal(value)
    if amount < 0:
        logger.debug("Clamped negative %s (%s) to 0", field, amount)
        return ZERO
    return amount


def non_negative_int(value: Optional[Number], field: str = "value") -> int:
    """Clamp a count (dependents, months, years) at zero."""
    return int(non_negative(value, field))


def round_money(value: Number) -> Decimal:
    """Round to whole VND, half-up."""
    return to_decimal(value).quantize(ONE, rounding=ROUND_HALF_UP)


def round_to(value: Number, places: int) -> Decimal:
    """Round to a fixed number of decimal places, half-up."""
    return to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def safe_divide(numerator: Number, denominator: Number) -> Decimal:
    """Divide, returning 0 when the denominator is zero."""
    denominator = to_decimal(denominator)
    if denominator == 0:
        return ZERO
    return to_decimal(numerator) / denominator


def effective_rate_percent(tax: Number, base: Number) -> Decimal:
    """Effective rate in percent with two decimals (0 when base is 0)."""
    return round_to(safe_divide(tax, base) * 100, 2)


def coerce_enum(enum_cls: type[E], value: object, default: E) -> E:
    """
    Map a raw value onto an enum member, falling back to a default.

    Args:
        enum_cls: Target enum class
        value: Member, member value or anything else
        default: Member returned for unknown values

    Returns:
        Matching enum member or default
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        logger.debug("Unknown %s value %r, using %s", enum_cls.__name__, value, default.value)
        return default


class ParsedCurrency(NamedTuple):
    """Result of parsing free-text currency input."""

    value: Decimal
    issues: list[str]


def parse_currency_input(text: str, max_value: Decimal = MAX_MONTHLY_INCOME) -> ParsedCurrency:
    """
    Parse a currency string typed by a user.

    Only digits are kept. A leading minus sign, a decimal separator and
    values above the maximum are reported as issues.

    Args:
        text: Raw input such as "25.000.000" or "25,000,000 đ"
        max_value: Upper bound for the parsed value

    Returns:
        ParsedCurrency with the value and the list of issues

    Raises:
        CurrencyParseError: If the text contains no digit
    """
    issues: list[str] = []
    stripped = text.strip()

    if stripped.startswith("-"):
        issues.append("negative")

    # "1.500.000,50" or "1,500,000.50" style decimals
    if re.search(r"[.,]\d{1,2}\s*(đ|₫|vnd)?$", stripped, flags=re.IGNORECASE):
        issues.append("decimal")
        stripped = re.sub(r"[.,]\d{1,2}(\s*(đ|₫|vnd)?)$", r"\1", stripped, flags=re.IGNORECASE)

    digits = re.sub(r"\D", "", stripped)
    if not digits:
        raise CurrencyParseError(f"Không đọc được số tiền: {text!r}")

    value = Decimal(digits)
    if value > max_value:
        issues.append("overflow")
        value = max_value

    return ParsedCurrency(value=value, issues=issues)
