"""Law-version constant tables and flat rates."""

from vn_tax_calculator.core.rules.tax_constants import (
    BASE_SALARY,
    EMPLOYEE_INSURANCE_RATE,
    EMPLOYER_INSURANCE_RATE,
    INSURANCE_CAP_MULTIPLE,
    LawConstants,
    get_law_constants,
    validate_brackets,
)
from vn_tax_calculator.core.rules.flat_rates import (
    BREAK_EVEN_HIGH,
    BREAK_EVEN_LOW,
    BREAK_EVEN_TOLERANCE,
    FREELANCE_RATE,
    WINNINGS_RATE,
    WINNINGS_THRESHOLD,
)

__all__ = [
    "BASE_SALARY",
    "EMPLOYEE_INSURANCE_RATE",
    "EMPLOYER_INSURANCE_RATE",
    "INSURANCE_CAP_MULTIPLE",
    "LawConstants",
    "get_law_constants",
    "validate_brackets",
    "BREAK_EVEN_HIGH",
    "BREAK_EVEN_LOW",
    "BREAK_EVEN_TOLERANCE",
    "FREELANCE_RATE",
    "WINNINGS_RATE",
    "WINNINGS_THRESHOLD",
]
