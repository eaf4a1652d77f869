"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from vn_tax_calculator.core.models.mortgage import MortgageInput
from vn_tax_calculator.core.models.salary import TaxableIncomeInput
from vn_tax_calculator.core.rules.tax_constants import LawConstants, get_law_constants


@pytest.fixture
def law_2025() -> LawConstants:
    """Return the 7-bracket rule table."""
    return get_law_constants("2025")


@pytest.fixture
def law_2026() -> LawConstants:
    """Return the 5-bracket rule table."""
    return get_law_constants("2026")


@pytest.fixture
def salary_30m() -> TaxableIncomeInput:
    """Return a 30 triệu gross salary with full insurance and no dependents."""
    return TaxableIncomeInput(gross_income=Decimal("30000000"))


@pytest.fixture
def mortgage_input() -> MortgageInput:
    """Return a 3 tỷ apartment, 30% down, 20 years, 12 preferential months."""
    return MortgageInput(
        property_price=Decimal("3000000000"),
        down_payment_percent=Decimal("30"),
        loan_term_years=20,
        preferential_rate_percent=Decimal("7"),
        preferential_months=12,
        floating_rate_percent=Decimal("10.5"),
        monthly_income=Decimal("50000000"),
    )
