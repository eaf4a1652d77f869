"""Compare job offers by monthly and annual take-home pay.

Bonus months are paid on top of a regular salary, so each one is taxed as
a month earning double the gross; the extra tax over a regular month is
added to the annual total.
"""

import logging

from vn_tax_calculator.core.calculators.salary import SalaryTaxCalculator
from vn_tax_calculator.core.models.enums import LawVersion, RegionType
from vn_tax_calculator.core.models.salary import InsuranceOptions, TaxableIncomeInput
from vn_tax_calculator.core.models.salary_comparison import (
    CompanyOffer,
    CompanyResult,
    OfferComparison,
)
from vn_tax_calculator.shared.exceptions import ValidationError
from vn_tax_calculator.shared.validators import (
    coerce_enum,
    effective_rate_percent,
    non_negative,
    non_negative_int,
)

logger = logging.getLogger(__name__)

MAX_BONUS_MONTHS = 12


def calculate_company_offer(
    offer: CompanyOffer, dependents: int = 0, law_version: LawVersion | str = LawVersion.LAW_2026
) -> CompanyResult:
    """Monthly and annual figures of one offer.

    Args:
        offer: Salary, bonus months and benefits of the offer
        dependents: Dependents registered by the employee
        law_version: Law whose brackets and deductions apply

    Returns:
        CompanyResult
    """
    calculator = SalaryTaxCalculator(law_version)
    gross = non_negative(offer.gross_salary, "gross_salary")
    bonus_months = min(non_negative_int(offer.bonus_months, "bonus_months"), MAX_BONUS_MONTHS)
    benefits = non_negative(offer.other_benefits, "other_benefits")
    declared = None if offer.declared_salary is None else non_negative(offer.declared_salary, "declared_salary")

    template = TaxableIncomeInput(
        gross_income=gross,
        declared_salary=declared,
        dependents=dependents,
        has_insurance=offer.has_insurance,
        insurance_options=offer.insurance_options if offer.has_insurance else InsuranceOptions.none(),
        region=coerce_enum(RegionType, offer.region, RegionType.REGION_1),
    )
    regular = calculator.calculate(template)

    annual_tax = regular.tax_amount * 12
    if bonus_months:
        bonus_month = calculator.calculate(
            template.model_copy(
                update={
                    "gross_income": gross * 2,
                    "declared_salary": None if declared is None else declared * 2,
                }
            )
        )
        annual_tax += (bonus_month.tax_amount - regular.tax_amount) * bonus_months

    annual_bonus = gross * bonus_months
    annual_benefits = benefits * 12
    logger.debug("offer %s: monthly net %s, annual tax %s", offer.name, regular.net_income, annual_tax)
    return CompanyResult(
        name=offer.name,
        monthly_gross=gross,
        monthly_insurance=regular.insurance,
        monthly_tax=regular.tax_amount,
        monthly_net=regular.net_income,
        monthly_benefits=benefits,
        annual_gross=gross * 12,
        annual_bonus=annual_bonus,
        annual_benefits=annual_benefits,
        annual_insurance=regular.insurance.total * 12,
        annual_tax=annual_tax,
        effective_rate=effective_rate_percent(annual_tax, gross * 12 + annual_bonus + annual_benefits),
    )


def compare_company_offers(
    offers: list[CompanyOffer], dependents: int = 0, law_version: LawVersion | str = LawVersion.LAW_2026
) -> OfferComparison:
    """Rank offers; ties go to the offer listed first.

    Raises:
        ValidationError: If no offer is given
    """
    if not offers:
        raise ValidationError("Cần ít nhất một công ty để so sánh")

    dependents = non_negative_int(dependents, "dependents")
    companies = [calculate_company_offer(o, dependents, law_version) for o in offers]
    indexes = range(len(companies))

    def first_best(key, lowest: bool = False) -> int:
        values = [key(c) for c in companies]
        target = min(values) if lowest else max(values)
        return next(i for i in indexes if values[i] == target)

    return OfferComparison(
        companies=companies,
        best_by_monthly_net=first_best(lambda c: c.monthly_net),
        best_by_annual_net=first_best(lambda c: c.annual_net),
        lowest_tax=first_best(lambda c: c.annual_tax, lowest=True),
    )
