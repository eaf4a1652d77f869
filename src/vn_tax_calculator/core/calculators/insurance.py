"""Mandatory insurance contributions and taxable income."""

import logging
from decimal import Decimal

from vn_tax_calculator.core.models.enums import RegionType
from vn_tax_calculator.core.models.salary import InsuranceBreakdown, InsuranceOptions
from vn_tax_calculator.core.rules.tax_constants import (
    BHTN_RATE,
    BHXH_RATE,
    BHYT_RATE,
    EMPLOYER_BHTN_RATE,
    EMPLOYER_BHXH_RATE,
    EMPLOYER_BHYT_RATE,
    LawConstants,
    get_law_constants,
)
from vn_tax_calculator.shared.validators import (
    ZERO,
    coerce_enum,
    non_negative,
    non_negative_int,
    round_money,
)

logger = logging.getLogger(__name__)


def get_contribution_caps(region: RegionType, law: LawConstants) -> dict[str, Decimal]:
    """Maximum contribution base per insurance scheme.

    BHXH and BHYT are capped at 20x lương cơ sở, BHTN at 20x the
    regional minimum wage.
    """
    region = coerce_enum(RegionType, region, RegionType.REGION_1)
    return {
        "bhxh": law.social_insurance_cap,
        "bhyt": law.social_insurance_cap,
        "bhtn": law.unemployment_insurance_cap(region),
    }


def _contributions(
    base: Decimal,
    region: RegionType,
    options: InsuranceOptions,
    law: LawConstants,
    rates: tuple[Decimal, Decimal, Decimal],
) -> InsuranceBreakdown:
    base = non_negative(base, "insurance_base")
    caps = get_contribution_caps(region, law)
    bhxh_rate, bhyt_rate, bhtn_rate = rates

    return InsuranceBreakdown(
        bhxh=round_money(min(base, caps["bhxh"]) * bhxh_rate) if options.bhxh else ZERO,
        bhyt=round_money(min(base, caps["bhyt"]) * bhyt_rate) if options.bhyt else ZERO,
        bhtn=round_money(min(base, caps["bhtn"]) * bhtn_rate) if options.bhtn else ZERO,
    )


def compute_insurance(
    base: Decimal,
    region: RegionType = RegionType.REGION_1,
    options: InsuranceOptions | None = None,
    law: LawConstants | None = None,
) -> InsuranceBreakdown:
    """Compute employee insurance contributions.

    Args:
        base: Declared insurance salary
        region: Minimum-wage region (unknown values fall back to region 1)
        options: Schemes to include (all by default)
        law: Rule table providing the caps (2026 by default)

    Returns:
        InsuranceBreakdown with each component and the total
    """
    return _contributions(
        base,
        region,
        options or InsuranceOptions(),
        law or get_law_constants(),
        (BHXH_RATE, BHYT_RATE, BHTN_RATE),
    )


def compute_employer_insurance(
    base: Decimal,
    region: RegionType = RegionType.REGION_1,
    options: InsuranceOptions | None = None,
    law: LawConstants | None = None,
) -> InsuranceBreakdown:
    """Compute the employer share of insurance (21.5% before caps)."""
    return _contributions(
        base,
        region,
        options or InsuranceOptions(),
        law or get_law_constants(),
        (EMPLOYER_BHXH_RATE, EMPLOYER_BHYT_RATE, EMPLOYER_BHTN_RATE),
    )


def compute_family_deductions(dependents: int, law: LawConstants) -> tuple[Decimal, Decimal]:
    """Return (personal deduction, total dependent deduction)."""
    dependents = non_negative_int(dependents, "dependents")
    return law.personal_deduction, law.dependent_deduction * dependents


def compute_taxable_income(
    gross: Decimal,
    insurance: Decimal,
    dependents: int = 0,
    other_deductions: Decimal = ZERO,
    law: LawConstants | None = None,
) -> Decimal:
    """Compute monthly taxable income.

    taxable = gross - insurance - personal - dependents x dependent - other,
    floored at zero.

    Args:
        gross: Gross income subject to PIT
        insurance: Total employee insurance contributions
        dependents: Number of dependents
        other_deductions: Additional deductions
        law: Rule table (2026 by default)

    Returns:
        Taxable income >= 0
    """
    law = law or get_law_constants()
    personal, dependent_total = compute_family_deductions(dependents, law)
    taxable = (
        non_negative(gross, "gross")
        - non_negative(insurance, "insurance")
        - personal
        - dependent_total
        - non_negative(other_deductions, "other_deductions")
    )
    return max(taxable, ZERO)
