"""Annual tax across several income sources.

Salary goes through the progressive engine of the selected law version;
every other source is a flat-rate rule applied to its annual amount.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.calculators.salary import calculate_salary_tax
from vn_tax_calculator.core.calculators.withholding import RESIDENT_RULES
from vn_tax_calculator.core.models.enums import IncomeFrequency, LawVersion, RegionType
from vn_tax_calculator.core.models.flat_rate import FlatRateRule, ThresholdMode
from vn_tax_calculator.core.models.multi_source import (
    CategoryTotal,
    IncomeCategory,
    IncomeSource,
    IncomeSourceType,
    MultiSourceInput,
    MultiSourceResult,
    SourceTaxResult,
)
from vn_tax_calculator.core.models.salary import InsuranceOptions, TaxableIncomeInput
from vn_tax_calculator.core.models.withholding import WithholdingIncomeType
from vn_tax_calculator.core.rules.flat_rates import (
    CAPITAL_INVESTMENT_RATE,
    FREELANCE_ANNUAL_EXEMPT_REVENUE,
    FREELANCE_RATE,
    ROYALTY_RATE,
)
from vn_tax_calculator.shared.validators import ZERO, coerce_enum, non_negative, round_money

logger = logging.getLogger(__name__)

SOURCE_LABELS = {
    IncomeSourceType.SALARY: "Lương, tiền công",
    IncomeSourceType.FREELANCE: "Thu nhập tự do / Kinh doanh",
    IncomeSourceType.RENTAL: "Cho thuê tài sản",
    IncomeSourceType.DIVIDEND: "Cổ tức",
    IncomeSourceType.INTEREST: "Lãi tiền gửi, trái phiếu",
    IncomeSourceType.SECURITIES: "Chuyển nhượng chứng khoán",
    IncomeSourceType.REAL_ESTATE: "Chuyển nhượng bất động sản",
    IncomeSourceType.LOTTERY: "Trúng thưởng",
    IncomeSourceType.INHERITANCE: "Thừa kế / Quà tặng",
    IncomeSourceType.ROYALTY: "Bản quyền / Nhượng quyền",
    IncomeSourceType.CAPITAL_INVESTMENT: "Góp vốn kinh doanh",
}

SOURCE_CATEGORIES = {
    IncomeSourceType.SALARY: IncomeCategory.SALARY,
    IncomeSourceType.DIVIDEND: IncomeCategory.INVESTMENT,
    IncomeSourceType.INTEREST: IncomeCategory.INVESTMENT,
    IncomeSourceType.SECURITIES: IncomeCategory.INVESTMENT,
    IncomeSourceType.CAPITAL_INVESTMENT: IncomeCategory.INVESTMENT,
    IncomeSourceType.FREELANCE: IncomeCategory.BUSINESS,
    IncomeSourceType.RENTAL: IncomeCategory.BUSINESS,
    IncomeSourceType.ROYALTY: IncomeCategory.BUSINESS,
}

# Tip thresholds (annual)
HIGH_FREELANCE_INCOME = Decimal("1000000000")
HIGH_RENTAL_INCOME = Decimal("500000000")


def _gov_bond(source: IncomeSource) -> Optional[str]:
    if source.is_gov_bond:
        return "Lãi trái phiếu Chính phủ được miễn thuế"
    return None


def _from_family(source: IncomeSource) -> Optional[str]:
    if source.is_from_family:
        return "Thừa kế/quà tặng từ gia đình được miễn thuế"
    return None


SOURCE_RULES: dict[IncomeSourceType, FlatRateRule] = {
    IncomeSourceType.FREELANCE: FlatRateRule(
        name="freelance",
        rate=FREELANCE_RATE,
        threshold_mode=ThresholdMode.EXEMPT_BELOW,
        threshold=FREELANCE_ANNUAL_EXEMPT_REVENUE,
        below_threshold_reason="Doanh thu < 100 triệu/năm - có thể được miễn thuế TNCN",
        legal_note="Thuế 10% trên doanh thu",
    ),
    IncomeSourceType.RENTAL: replace(
        RESIDENT_RULES[WithholdingIncomeType.RENTAL], legal_note="5% trên doanh thu, còn 5% GTGT nộp riêng"
    ),
    IncomeSourceType.DIVIDEND: RESIDENT_RULES[WithholdingIncomeType.DIVIDEND],
    IncomeSourceType.CAPITAL_INVESTMENT: FlatRateRule(
        name="capital_investment",
        rate=CAPITAL_INVESTMENT_RATE,
        legal_note="5% trên lợi nhuận được chia",
    ),
    IncomeSourceType.INTEREST: replace(
        RESIDENT_RULES[WithholdingIncomeType.INTEREST_REGULAR], exemption_predicate=_gov_bond
    ),
    IncomeSourceType.SECURITIES: RESIDENT_RULES[WithholdingIncomeType.SECURITIES],
    IncomeSourceType.REAL_ESTATE: replace(
        RESIDENT_RULES[WithholdingIncomeType.REAL_ESTATE],
        legal_note="2% trên giá chuyển nhượng; có thể tính theo lợi nhuận nếu có chứng từ",
    ),
    IncomeSourceType.LOTTERY: RESIDENT_RULES[WithholdingIncomeType.LOTTERY],
    IncomeSourceType.INHERITANCE: replace(
        RESIDENT_RULES[WithholdingIncomeType.INHERITANCE], exemption_predicate=_from_family
    ),
    IncomeSourceType.ROYALTY: FlatRateRule(
        name="royalty",
        rate=ROYALTY_RATE,
        legal_note="5% trên thu nhập bản quyền",
    ),
}


def get_category(source_type: IncomeSourceType) -> IncomeCategory:
    return SOURCE_CATEGORIES.get(source_type, IncomeCategory.OTHER)


def annualize(amount: Decimal, frequency: IncomeFrequency) -> Decimal:
    """Monthly amounts x 12; annual and one-off amounts as given."""
    amount = non_negative(amount, "amount")
    if frequency == IncomeFrequency.MONTHLY:
        return amount * 12
    return amount


def _salary_source(source: IncomeSource, data: MultiSourceInput, annual: Decimal) -> SourceTaxResult:
    monthly = source.amount if source.frequency == IncomeFrequency.MONTHLY else annual / 12
    monthly = round_money(non_negative(monthly, "amount"))

    other = (
        non_negative(data.pension_contribution, "pension_contribution")
        + non_negative(data.charitable_contribution, "charitable_contribution")
    )
    if not data.has_insurance:
        other += non_negative(data.insurance_amount, "insurance_amount")

    law_version = coerce_enum(LawVersion, data.law_version, LawVersion.LAW_2026)
    salary = calculate_salary_tax(
        TaxableIncomeInput(
            gross_income=monthly,
            dependents=data.dependents,
            has_insurance=data.has_insurance,
            insurance_options=InsuranceOptions() if data.has_insurance else InsuranceOptions.none(),
            region=coerce_enum(RegionType, data.region, RegionType.REGION_1),
            other_deductions=round_money(other / 12),
        ),
        law_version,
    )

    notes = []
    if data.dependents > 0:
        notes.append(f"Giảm trừ {data.dependents} người phụ thuộc")
    return SourceTaxResult(
        source_type=IncomeSourceType.SALARY,
        label=SOURCE_LABELS[IncomeSourceType.SALARY],
        category=IncomeCategory.SALARY,
        annual_amount=annual,
        taxable_amount=salary.taxable_income * 12,
        tax_amount=salary.tax_amount * 12,
        is_progressive=True,
        method=f"Biểu thuế lũy tiến từng phần (luật {law_version.value})",
        notes=notes,
    )


def calculate_source_tax(source: IncomeSource, data: MultiSourceInput) -> SourceTaxResult:
    """Annual tax of a single source."""
    source_type = coerce_enum(IncomeSourceType, source.source_type, IncomeSourceType.SALARY)
    frequency = coerce_enum(IncomeFrequency, source.frequency, IncomeFrequency.ANNUAL)
    annual = annualize(source.amount, frequency)

    if source_type == IncomeSourceType.SALARY:
        return _salary_source(source, data, annual)

    rule = SOURCE_RULES[source_type]
    result = evaluate_rule(rule, annual, source)
    notes = [result.exemption_reason] if result.is_exempt else []
    return SourceTaxResult(
        source_type=source_type,
        label=SOURCE_LABELS[source_type],
        category=get_category(source_type),
        annual_amount=annual,
        taxable_amount=result.taxable_amount,
        tax_amount=result.tax_amount,
        flat=result,
        method=rule.legal_note,
        notes=notes,
    )


def generate_optimization_tips(data: MultiSourceInput, results: list[SourceTaxResult]) -> list[str]:
    tips = []

    def annual_of(source_type: IncomeSourceType) -> Decimal:
        return sum((r.annual_amount for r in results if r.source_type == source_type), ZERO)

    salary_tax = sum((r.tax_amount for r in results if r.source_type == IncomeSourceType.SALARY), ZERO)
    if salary_tax > 0:
        if data.dependents == 0:
            tips.append("Đăng ký người phụ thuộc (cha mẹ, con) để được giảm trừ gia cảnh thêm.")
        if non_negative(data.pension_contribution) == 0:
            tips.append("Đóng hưu trí tự nguyện để được giảm trừ thêm (tối đa 1 triệu/tháng).")
        if non_negative(data.charitable_contribution) == 0:
            tips.append("Đóng góp từ thiện qua tổ chức được công nhận để được giảm trừ.")

    if annual_of(IncomeSourceType.FREELANCE) > HIGH_FREELANCE_INCOME:
        tips.append("Thu nhập freelance cao - cân nhắc thành lập doanh nghiệp để tối ưu thuế.")
    if annual_of(IncomeSourceType.RENTAL) > HIGH_RENTAL_INCOME:
        tips.append("Thu nhập cho thuê cao - cân nhắc đăng ký hộ kinh doanh để được khấu trừ chi phí.")
    if any(r.source_type == IncomeSourceType.INTEREST and not r.flat.is_exempt for r in results):
        tips.append("Cân nhắc đầu tư trái phiếu Chính phủ để được miễn thuế thu nhập.")
    return tips


def calculate_multi_source_tax(data: MultiSourceInput) -> MultiSourceResult:
    """Tax every source and aggregate by category.

    Args:
        data: Income sources plus the salary-side deductions

    Returns:
        MultiSourceResult with per-source lines, category totals and tips
    """
    results = [calculate_source_tax(s, data) for s in data.sources]

    categories = {}
    for category in IncomeCategory:
        lines = [r for r in results if r.category == category]
        categories[category] = CategoryTotal(
            gross=sum((r.annual_amount for r in lines), ZERO),
            tax=sum((r.tax_amount for r in lines), ZERO),
        )

    total_tax = sum((r.tax_amount for r in results), ZERO)
    logger.debug("multi-source: %d sources, total tax %s", len(results), total_tax)
    return MultiSourceResult(
        sources=results,
        total_gross_income=sum((r.annual_amount for r in results), ZERO),
        total_taxable_income=sum((r.taxable_amount for r in results), ZERO),
        total_tax=total_tax,
        progressive_tax=sum((r.tax_amount for r in results if r.is_progressive), ZERO),
        flat_tax=sum((r.tax_amount for r in results if not r.is_progressive), ZERO),
        categories=categories,
        optimization_tips=generate_optimization_tips(data, results),
    )
