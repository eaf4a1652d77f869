"""Household business tax under the 2025 and 2026 (Luật 109/2025/QH15) rules.

2025: above 100 triệu, PIT and VAT at category rates on full revenue.
2026: above 500 triệu, PIT either on revenue less a share of the threshold
(khoán) or on profit at 15/17/20% by revenue band; VAT on full revenue.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.enums import LawVersion
from vn_tax_calculator.core.models.flat_rate import FlatRateRule
from vn_tax_calculator.core.models.household import (
    BusinessTaxResult,
    HouseholdBusiness,
    HouseholdBusinessTaxInput,
    HouseholdBusinessTaxResult,
    HouseholdMethodComparison,
    HouseholdTaxMethod,
)
from vn_tax_calculator.core.rules.flat_rates import (
    HOUSEHOLD_INCOME_METHOD_BRACKETS,
    HOUSEHOLD_PIT_RATES,
    HOUSEHOLD_THRESHOLD_2025,
    HOUSEHOLD_THRESHOLD_2026,
    HOUSEHOLD_VAT_RATES,
)
from vn_tax_calculator.shared.formatters import format_currency
from vn_tax_calculator.shared.validators import ZERO, coerce_enum, safe_divide

logger = logging.getLogger(__name__)

HOUSEHOLD_THRESHOLDS = {
    LawVersion.LAW_2025: HOUSEHOLD_THRESHOLD_2025,
    LawVersion.LAW_2026: HOUSEHOLD_THRESHOLD_2026,
}


def get_revenue_threshold(law_version: LawVersion) -> Decimal:
    return HOUSEHOLD_THRESHOLDS[law_version]


def get_income_method_rate(total_revenue: Decimal, law_version: LawVersion = LawVersion.LAW_2026) -> Decimal:
    """Rate of the income method for the household's total annual revenue."""
    if total_revenue <= get_revenue_threshold(law_version):
        return ZERO
    for upper, rate in HOUSEHOLD_INCOME_METHOD_BRACKETS:
        if upper is None or total_revenue <= upper:
            return rate
    return ZERO


def needs_business_registration(annual_revenue: Decimal, law_version: LawVersion) -> bool:
    return annual_revenue > get_revenue_threshold(law_version)


def _below_threshold(context: tuple[Decimal, Decimal]) -> Optional[str]:
    total_revenue, threshold = context
    if total_revenue <= threshold:
        return (
            f"Doanh thu dưới {format_currency(threshold)}/năm - không phải đóng thuế TNCN và GTGT, "
            "không cần đăng ký kinh doanh"
        )
    return None


HOUSEHOLD_PIT_RULE = FlatRateRule(
    name="household_pit",
    rate=ZERO,
    exemption_predicate=_below_threshold,
)

HOUSEHOLD_VAT_RULE = FlatRateRule(
    name="household_vat",
    rate=ZERO,
    exemption_predicate=_below_threshold,
    legal_note="Thuế GTGT tính trên toàn bộ doanh thu, không được khấu trừ.",
)


def allocate_threshold(
    businesses: list[HouseholdBusiness], threshold: Decimal
) -> list[Decimal]:
    """Split the 500 triệu threshold across a household's businesses.

    Businesses flagged for the deduction are served first, largest revenue
    first. When none is flagged, the threshold is shared in proportion to
    revenue.
    """
    deductions = [ZERO] * len(businesses)
    remaining = threshold
    order = sorted(
        range(len(businesses)),
        key=lambda i: (not businesses[i].apply_threshold_deduction, -businesses[i].annual_revenue),
    )
    for i in order:
        business = businesses[i]
        if business.apply_threshold_deduction and remaining > 0:
            deductions[i] = min(remaining, business.annual_revenue)
            remaining -= deductions[i]

    if sum(deductions, ZERO) == 0:
        total = sum((b.annual_revenue for b in businesses), ZERO)
        deductions = [safe_divide(threshold * b.annual_revenue, total) for b in businesses]
    return deductions


def calculate_business_tax(
    business: HouseholdBusiness,
    law_version: LawVersion,
    total_revenue: Decimal,
    method: HouseholdTaxMethod = HouseholdTaxMethod.PRESUMPTIVE,
    threshold_deduction: Decimal = ZERO,
) -> BusinessTaxResult:
    """Tax one business given the household's total revenue."""
    threshold = get_revenue_threshold(law_version)
    context = (total_revenue, threshold)
    revenue = business.annual_revenue
    expenses = business.annual_expenses

    if law_version == LawVersion.LAW_2026 and method == HouseholdTaxMethod.INCOME:
        pit_rule = replace(
            HOUSEHOLD_PIT_RULE,
            rate=get_income_method_rate(total_revenue, law_version),
            legal_note="Điều 7 Luật 109/2025/QH15: thuế suất 15%/17%/20% trên thu nhập.",
        )
        pit_base = max(ZERO, revenue - expenses)
        recommendation = "Phương pháp thu nhập: cần lưu giữ hóa đơn, chứng từ chi phí hợp lệ"
    else:
        method = HouseholdTaxMethod.PRESUMPTIVE
        pit_rule = replace(
            HOUSEHOLD_PIT_RULE,
            rate=HOUSEHOLD_PIT_RATES[business.category],
            legal_note="Thuế TNCN theo tỷ lệ trên doanh thu của ngành nghề.",
        )
        if law_version == LawVersion.LAW_2026:
            pit_base = max(ZERO, revenue - threshold_deduction)
            recommendation = "Phương pháp khoán: thuế tính trên doanh thu vượt ngưỡng"
        else:
            threshold_deduction = ZERO
            pit_base = revenue
            recommendation = "Thuế khoán tính trên toàn bộ doanh thu"

    pit = evaluate_rule(pit_rule, pit_base, context)
    vat = evaluate_rule(replace(HOUSEHOLD_VAT_RULE, rate=HOUSEHOLD_VAT_RATES[business.category]), revenue, context)

    if pit.is_exempt:
        recommendation = pit.exemption_reason
    elif not business.has_business_license:
        recommendation += ". Cần đăng ký kinh doanh và kê khai thuế định kỳ"

    return BusinessTaxResult(
        name=business.name,
        category=business.category,
        method=method,
        annual_revenue=revenue,
        annual_expenses=expenses,
        threshold_deduction=threshold_deduction,
        pit=pit,
        vat=vat,
        recommendation=recommendation,
    )


def calculate_household_business_tax(data: HouseholdBusinessTaxInput) -> HouseholdBusinessTaxResult:
    """Tax every business of a household.

    The revenue threshold is tested on the household's combined revenue.

    Args:
        data: Businesses, law version and PIT method

    Returns:
        HouseholdBusinessTaxResult with per-business lines
    """
    law_version = coerce_enum(LawVersion, data.law_version, LawVersion.LAW_2026)
    method = coerce_enum(HouseholdTaxMethod, data.tax_method, HouseholdTaxMethod.PRESUMPTIVE)
    threshold = get_revenue_threshold(law_version)
    businesses = data.businesses
    total_revenue = sum((b.annual_revenue for b in businesses), ZERO)
    is_above = total_revenue > threshold

    if is_above and law_version == LawVersion.LAW_2026 and method == HouseholdTaxMethod.PRESUMPTIVE:
        deductions = allocate_threshold(businesses, threshold)
    else:
        deductions = [ZERO] * len(businesses)
    logger.debug("household revenue=%s threshold=%s deductions=%s", total_revenue, threshold, deductions)

    results = [
        calculate_business_tax(b, law_version, total_revenue, method, d)
        for b, d in zip(businesses, deductions)
    ]
    return HouseholdBusinessTaxResult(
        law_version=law_version,
        method=method,
        threshold=threshold,
        is_above_threshold=is_above,
        businesses=results,
        total_revenue=total_revenue,
        total_expenses=sum((r.annual_expenses for r in results), ZERO),
        total_pit=sum((r.pit.tax_amount for r in results), ZERO),
        total_vat=sum((r.vat.tax_amount for r in results), ZERO),
        threshold_used=sum((r.threshold_deduction for r in results), ZERO),
    )


def compare_household_methods(businesses: list[HouseholdBusiness]) -> HouseholdMethodComparison:
    """Compare khoán and income methods under the 2026 rules. Ties keep khoán."""
    presumptive = calculate_household_business_tax(
        HouseholdBusinessTaxInput(businesses=businesses, tax_method=HouseholdTaxMethod.PRESUMPTIVE)
    )
    income = calculate_household_business_tax(
        HouseholdBusinessTaxInput(businesses=businesses, tax_method=HouseholdTaxMethod.INCOME)
    )
    if presumptive.total_tax <= income.total_tax:
        recommended = HouseholdTaxMethod.PRESUMPTIVE
        explanation = "Phương pháp khoán có thuế thấp hơn hoặc bằng và không cần chứng từ chi phí."
    else:
        recommended = HouseholdTaxMethod.INCOME
        explanation = "Phương pháp thu nhập có lợi hơn vì chi phí chiếm tỷ trọng lớn trong doanh thu."
    return HouseholdMethodComparison(
        presumptive=presumptive, income=income, recommended=recommended, explanation=explanation
    )
