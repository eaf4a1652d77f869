"""Salary (tiền lương, tiền công) gross-to-net calculator."""

import logging
from decimal import Decimal

from vn_tax_calculator.core.calculators.brackets import (
    calculate_bracket_breakdown,
    get_marginal_rate,
)
from vn_tax_calculator.core.calculators.insurance import (
    compute_family_deductions,
    compute_insurance,
    compute_taxable_income,
)
from vn_tax_calculator.core.models.enums import LawVersion, RegionType
from vn_tax_calculator.core.models.salary import (
    InsuranceBreakdown,
    LawComparison,
    SalaryTaxResult,
    TaxableIncomeInput,
)
from vn_tax_calculator.core.rules.tax_constants import get_law_constants
from vn_tax_calculator.shared.validators import (
    ZERO,
    coerce_enum,
    effective_rate_percent,
    non_negative,
    round_money,
)

logger = logging.getLogger(__name__)

# Bisection settings for net-to-gross conversion
GROSS_SEARCH_TOLERANCE = Decimal("1")
GROSS_SEARCH_MAX_ITERATIONS = 100


class SalaryTaxCalculator:
    """Computes monthly PIT on salary for one law version.

    Pipeline: insurance on the declared base, family deductions,
    progressive tax on the taxable income, net = gross - insurance - tax.
    """

    def __init__(self, law_version: LawVersion | str = LawVersion.LAW_2026):
        self.law = get_law_constants(law_version)

    def calculate(self, data: TaxableIncomeInput) -> SalaryTaxResult:
        gross = non_negative(data.gross_income, "gross_income")
        exempt = min(non_negative(data.allowances_exempt, "allowances_exempt"), gross)
        region = coerce_enum(RegionType, data.region, RegionType.REGION_1)

        if data.has_insurance:
            base = gross if data.declared_salary is None else data.declared_salary
            insurance = compute_insurance(base, region, data.insurance_options, self.law)
        else:
            insurance = InsuranceBreakdown()

        other = non_negative(data.other_deductions, "other_deductions")
        personal, dependent_total = compute_family_deductions(data.dependents, self.law)
        taxable = compute_taxable_income(
            gross - exempt, insurance.total, data.dependents, other, self.law
        )

        breakdown = calculate_bracket_breakdown(taxable, self.law.brackets)
        tax = round_money(sum((line.tax for line in breakdown), ZERO))
        net = gross - insurance.total - tax

        logger.debug(
            "Salary %s (%s): taxable=%s tax=%s", gross, self.law.version.value, taxable, tax
        )

        return SalaryTaxResult(
            law_version=self.law.version,
            gross_income=gross,
            insurance=insurance,
            personal_deduction=personal,
            dependent_deduction=dependent_total,
            other_deductions=other,
            exempt_income=exempt,
            taxable_income=taxable,
            tax_amount=tax,
            net_income=net,
            breakdown=breakdown,
            marginal_rate=get_marginal_rate(taxable, self.law.brackets),
            effective_rate=effective_rate_percent(tax, gross),
        )

    def gross_from_net(self, target_net: Decimal, template: TaxableIncomeInput) -> SalaryTaxResult:
        """Find the gross salary producing a target net salary.

        Net is non-decreasing in gross (every marginal rate plus insurance
        stays below 100%), so bisection converges.
        """
        target = non_negative(target_net, "target_net")
        low, high = target, target * 2 + self.law.personal_deduction

        # Widen until the upper bound overshoots the target
        while self._net_for(high, template) < target:
            high *= 2

        for _ in range(GROSS_SEARCH_MAX_ITERATIONS):
            if high - low <= GROSS_SEARCH_TOLERANCE:
                break
            mid = (low + high) / 2
            if self._net_for(mid, template) < target:
                low = mid
            else:
                high = mid

        return self.calculate(template.model_copy(update={"gross_income": round_money(high)}))

    def _net_for(self, gross: Decimal, template: TaxableIncomeInput) -> Decimal:
        return self.calculate(template.model_copy(update={"gross_income": gross})).net_income


def calculate_salary_tax(
    data: TaxableIncomeInput, law_version: LawVersion | str = LawVersion.LAW_2026
) -> SalaryTaxResult:
    """Convenience function for a gross-to-net computation.

    Args:
        data: Monthly salary input
        law_version: Law whose brackets and deductions apply

    Returns:
        SalaryTaxResult
    """
    return SalaryTaxCalculator(law_version).calculate(data)


def calculate_gross_from_net(
    target_net: Decimal,
    data: TaxableIncomeInput | None = None,
    law_version: LawVersion | str = LawVersion.LAW_2026,
) -> SalaryTaxResult:
    """Convenience function for a net-to-gross conversion."""
    return SalaryTaxCalculator(law_version).gross_from_net(target_net, data or TaxableIncomeInput())


def compare_law_versions(data: TaxableIncomeInput) -> LawComparison:
    """Compute the same salary under the 2025 and 2026 tables."""
    return LawComparison(
        old=calculate_salary_tax(data, LawVersion.LAW_2025),
        new=calculate_salary_tax(data, LawVersion.LAW_2026),
    )
