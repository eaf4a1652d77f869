"""Shared utilities for VN Tax Calculator."""

from vn_tax_calculator.shared.exceptions import (
    ConfigurationError,
    CurrencyParseError,
    ReportGenerationError,
    ValidationError,
    VNTaxCalculatorError,
)
from vn_tax_calculator.shared.formatters import (
    format_currency,
    format_number,
    format_percent,
    format_variation,
)
from vn_tax_calculator.shared.validators import (
    ParsedCurrency,
    coerce_enum,
    effective_rate_percent,
    non_negative,
    parse_currency_input,
    round_money,
    safe_divide,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    "CurrencyParseError",
    "ReportGenerationError",
    "ValidationError",
    "VNTaxCalculatorError",
    # Formatters
    "format_currency",
    "format_number",
    "format_percent",
    "format_variation",
    # Validators
    "ParsedCurrency",
    "coerce_enum",
    "effective_rate_percent",
    "non_negative",
    "parse_currency_input",
    "round_money",
    "safe_divide",
]
