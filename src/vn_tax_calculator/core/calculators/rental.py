"""Rental income tax: 5% PIT on every rent, 5% VAT above 100 triệu/năm."""

import logging
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.flat_rate import FlatRateRule
from vn_tax_calculator.core.models.rental import (
    ExpenseMethod,
    PropertyTaxResult,
    RentalIncomeTaxInput,
    RentalIncomeTaxResult,
    RentalMethodResult,
    RentalProperty,
)
from vn_tax_calculator.core.rules.flat_rates import (
    RENTAL_ANNUAL_THRESHOLD,
    RENTAL_DEEMED_EXPENSE_RATE,
    RENTAL_PIT_RATE,
    RENTAL_VAT_RATE,
)
from vn_tax_calculator.shared.validators import (
    ZERO,
    effective_rate_percent,
    non_negative,
    non_negative_int,
    round_money,
)

logger = logging.getLogger(__name__)

BELOW_RENTAL_THRESHOLD = "Tổng doanh thu cho thuê không vượt 100 triệu/năm - không phải nộp thuế"


class RentalIncomeTaxCalculator:
    """Computes PIT and VAT on rental income for a set of properties.

    The 100 triệu threshold is tested on the total rent of all properties,
    so a single cheap property may still be taxable.
    """

    def __init__(self, data: RentalIncomeTaxInput):
        self.data = data
        self.total_annual_rent = sum(
            (self._annual_rent(p) for p in data.properties), ZERO
        )
        self.is_taxable = self.total_annual_rent > RENTAL_ANNUAL_THRESHOLD
        self.pit_rule = FlatRateRule(
            name="rental_pit",
            rate=RENTAL_PIT_RATE,
            legal_note="Thông tư 40/2021/TT-BTC: thuế TNCN 5% trên doanh thu cho thuê.",
        )
        self.vat_rule = FlatRateRule(
            name="rental_vat",
            rate=RENTAL_VAT_RATE,
            exemption_predicate=self._below_threshold,
            legal_note="Thông tư 40/2021/TT-BTC: thuế GTGT 5% trên doanh thu cho thuê.",
        )

    def _below_threshold(self, context: object) -> Optional[str]:
        return None if self.is_taxable else BELOW_RENTAL_THRESHOLD

    @staticmethod
    def _annual_rent(prop: RentalProperty) -> Decimal:
        months = min(non_negative_int(prop.occupied_months, "occupied_months"), 12)
        return non_negative(prop.monthly_rent, "monthly_rent") * months

    def calculate(self) -> RentalIncomeTaxResult:
        results = [self._calculate_property(p) for p in self.data.properties]

        total_deemed_tax = sum((r.deemed.total_tax for r in results), ZERO)
        total_actual_tax = sum((r.actual.total_tax for r in results), ZERO)
        total_deemed_net = sum((r.deemed.net_income for r in results), ZERO)
        total_actual_net = sum((r.actual.net_income for r in results), ZERO)

        used_tax = total_actual_tax if self.data.use_actual_expenses else total_deemed_tax

        return RentalIncomeTaxResult(
            properties=results,
            total_annual_rent=self.total_annual_rent,
            total_deemed_tax=total_deemed_tax,
            total_actual_tax=total_actual_tax,
            total_deemed_net=total_deemed_net,
            total_actual_net=total_actual_net,
            recommended_method=(
                ExpenseMethod.DEEMED if total_deemed_net >= total_actual_net else ExpenseMethod.ACTUAL
            ),
            potential_savings=abs(total_deemed_net - total_actual_net),
            is_taxable=self.is_taxable,
            effective_rate=effective_rate_percent(used_tax, self.total_annual_rent),
        )

    def _calculate_property(self, prop: RentalProperty) -> PropertyTaxResult:
        annual_rent = self._annual_rent(prop)
        vat = evaluate_rule(self.vat_rule, annual_rent)

        deemed_expenses = round_money(annual_rent * RENTAL_DEEMED_EXPENSE_RATE)
        deemed_pit = evaluate_rule(self.pit_rule, annual_rent - deemed_expenses)
        deemed = RentalMethodResult(
            method=ExpenseMethod.DEEMED,
            expenses=deemed_expenses,
            pit=deemed_pit,
            vat=vat,
            net_income=annual_rent - deemed_pit.tax_amount - vat.tax_amount,
        )

        actual_expenses = non_negative(prop.expenses.total, "expenses")
        actual_pit = evaluate_rule(self.pit_rule, max(annual_rent - actual_expenses, ZERO))
        actual = RentalMethodResult(
            method=ExpenseMethod.ACTUAL,
            expenses=actual_expenses,
            pit=actual_pit,
            vat=vat,
            net_income=annual_rent - actual_pit.tax_amount - vat.tax_amount - actual_expenses,
        )

        logger.debug("Rental %s: annual rent %s", prop.name, annual_rent)
        return PropertyTaxResult(
            name=prop.name,
            property_type=prop.property_type,
            annual_rent=annual_rent,
            occupied_months=min(non_negative_int(prop.occupied_months), 12),
            deemed=deemed,
            actual=actual,
            recommended_method=(
                ExpenseMethod.DEEMED if deemed.net_income >= actual.net_income else ExpenseMethod.ACTUAL
            ),
            savings=abs(deemed.net_income - actual.net_income),
        )


def calculate_rental_income_tax(data: RentalIncomeTaxInput) -> RentalIncomeTaxResult:
    """Convenience function to compute rental income tax.

    Args:
        data: Properties with rent, occupancy and expenses

    Returns:
        RentalIncomeTaxResult with per-property and summary figures
    """
    return RentalIncomeTaxCalculator(data).calculate()
