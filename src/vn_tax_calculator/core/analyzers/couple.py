"""Dependent allocation between spouses.

Each dependent can be registered by only one spouse. Every split is
evaluated on the salary engine and the lowest combined tax wins; the
tips point at the remaining deduction levers.
"""

import logging
from decimal import Decimal

from vn_tax_calculator.core.calculators.salary import SalaryTaxCalculator
from vn_tax_calculator.core.models.couple import (
    AllocationScenario,
    CoupleInput,
    CoupleOptimizationResult,
    OptimizationTip,
    PersonIncome,
    TipCategory,
)
from vn_tax_calculator.core.models.enums import LawVersion, RegionType
from vn_tax_calculator.core.models.salary import InsuranceOptions, TaxableIncomeInput
from vn_tax_calculator.core.rules.tax_constants import MAX_VOLUNTARY_PENSION_DEDUCTION
from vn_tax_calculator.shared.formatters import format_currency, format_percent
from vn_tax_calculator.shared.validators import (
    coerce_enum,
    effective_rate_percent,
    non_negative,
    non_negative_int,
)

logger = logging.getLogger(__name__)

# Income gap above which restructuring household income is worth a look
INCOME_GAP_FOR_STRUCTURE_TIP = Decimal("20000000")


class CoupleTaxOptimizer:
    """Evaluates every dependent split for a couple under one law version."""

    def __init__(self, data: CoupleInput):
        self.data = data
        self.region = coerce_enum(RegionType, data.region, RegionType.REGION_1)
        self.calculator = SalaryTaxCalculator(coerce_enum(LawVersion, data.law_version, LawVersion.LAW_2026))

    def person_tax(self, person: PersonIncome, dependents: int):
        pension = min(non_negative(person.pension_contribution, "pension_contribution"), MAX_VOLUNTARY_PENSION_DEDUCTION)
        return self.calculator.calculate(
            TaxableIncomeInput(
                gross_income=non_negative(person.gross_income, "gross_income"),
                dependents=dependents,
                has_insurance=person.has_insurance,
                insurance_options=InsuranceOptions() if person.has_insurance else InsuranceOptions.none(),
                region=self.region,
                other_deductions=non_negative(person.other_deductions, "other_deductions") + pension,
            )
        )

    def scenarios(self) -> list[AllocationScenario]:
        total = non_negative_int(self.data.total_dependents, "total_dependents")
        p1, p2 = self.data.person1, self.data.person2
        result = []
        for p1_deps in range(total + 1):
            p2_deps = total - p1_deps
            result.append(
                AllocationScenario(
                    person1_dependents=p1_deps,
                    person2_dependents=p2_deps,
                    person1_tax=self.person_tax(p1, p1_deps).tax_amount,
                    person2_tax=self.person_tax(p2, p2_deps).tax_amount,
                    description=f"{p1.name}: {p1_deps} NPT, {p2.name}: {p2_deps} NPT",
                )
            )
        return result

    def tips(self, current: AllocationScenario, optimal: AllocationScenario) -> list[OptimizationTip]:
        data = self.data
        p1, p2 = data.person1, data.person2
        total_dependents = non_negative_int(data.total_dependents, "total_dependents")
        rate1 = self.person_tax(p1, 0).marginal_rate
        rate2 = self.person_tax(p2, 0).marginal_rate
        dependent_deduction = self.calculator.law.dependent_deduction
        tips = []

        if optimal.total_tax < current.total_tax:
            tips.append(
                OptimizationTip(
                    key="dependent-allocation",
                    title="Phân bổ người phụ thuộc tối ưu",
                    description=(
                        f"Đăng ký {optimal.person1_dependents} NPT cho {p1.name} và "
                        f"{optimal.person2_dependents} NPT cho {p2.name} để tiết kiệm thuế tối đa."
                    ),
                    potential_savings=current.total_tax - optimal.total_tax,
                    category=TipCategory.DEPENDENT,
                )
            )

        if total_dependents > 0 and rate1 != rate2:
            high, low = (p1, p2) if rate1 > rate2 else (p2, p1)
            high_rate, low_rate = max(rate1, rate2), min(rate1, rate2)
            per_dependent = dependent_deduction * (high_rate - low_rate)
            tips.append(
                OptimizationTip(
                    key="higher-earner",
                    title="Người thu nhập cao đăng ký NPT",
                    description=(
                        f"{high.name} có thuế suất biên {format_percent(high_rate, 0)} cao hơn "
                        f"{low.name} ({format_percent(low_rate, 0)}). Mỗi NPT đăng ký cho "
                        f"{high.name} tiết kiệm thêm {format_currency(per_dependent)}/tháng."
                    ),
                    potential_savings=per_dependent * total_dependents,
                    category=TipCategory.DEPENDENT,
                )
            )

        top_rate = max(rate1, rate2)
        if non_negative(data.voluntary_pension) == 0:
            higher_earner = p1 if p1.gross_income > p2.gross_income else p2
            tips.append(
                OptimizationTip(
                    key="voluntary-pension",
                    title="Tham gia bảo hiểm hưu trí tự nguyện",
                    description=(
                        f"Đóng hưu trí tự nguyện tối đa {format_currency(MAX_VOLUNTARY_PENSION_DEDUCTION)}/tháng "
                        f"cho {higher_earner.name} để giảm thuế ở mức {format_percent(top_rate, 0)}."
                    ),
                    potential_savings=MAX_VOLUNTARY_PENSION_DEDUCTION * top_rate,
                    category=TipCategory.DEDUCTION,
                )
            )

        if non_negative(data.charitable_contribution) == 0:
            tips.append(
                OptimizationTip(
                    key="charity",
                    title="Đóng góp từ thiện qua tổ chức hợp pháp",
                    description=(
                        "Khoản đóng góp từ thiện, nhân đạo qua tổ chức được công nhận "
                        "được giảm trừ khỏi thu nhập tính thuế."
                    ),
                    category=TipCategory.DEDUCTION,
                )
            )

        gap = abs(non_negative(p1.gross_income) - non_negative(p2.gross_income))
        if gap > INCOME_GAP_FOR_STRUCTURE_TIP and rate1 != rate2:
            tips.append(
                OptimizationTip(
                    key="income-structure",
                    title="Cân nhắc cấu trúc thu nhập",
                    description=(
                        "Khi một người có thu nhập cao hơn nhiều, có thể cân nhắc các phương án hợp pháp "
                        "như cho thuê tài sản hoặc góp vốn kinh doanh hộ gia đình."
                    ),
                    category=TipCategory.STRUCTURE,
                )
            )

        tips.append(
            OptimizationTip(
                key="timing",
                title="Thời điểm nhận thu nhập",
                description=(
                    "Tránh nhận thưởng/thu nhập đột biến trong cùng một tháng "
                    "để không bị đẩy lên bậc thuế cao."
                ),
                category=TipCategory.TIMING,
            )
        )

        return sorted(tips, key=lambda t: t.potential_savings, reverse=True)

    def optimize(self) -> CoupleOptimizationResult:
        scenarios = self.scenarios()
        # First minimum wins, so ties keep fewer dependents on person 1
        optimal = min(scenarios, key=lambda s: s.total_tax)
        # Scenarios are indexed by person 1's dependents; the even split gives person 2 the odd one
        current = scenarios[(len(scenarios) - 1) // 2]

        combined_gross = non_negative(self.data.person1.gross_income) + non_negative(self.data.person2.gross_income)
        logger.debug("couple: %d scenarios, optimal total tax %s", len(scenarios), optimal.total_tax)
        return CoupleOptimizationResult(
            current=current,
            optimal=optimal,
            scenarios=scenarios,
            tips=self.tips(current, optimal),
            combined_gross_income=combined_gross,
            effective_rate=effective_rate_percent(optimal.total_tax, combined_gross),
        )


def optimize_couple_tax(data: CoupleInput) -> CoupleOptimizationResult:
    """Convenience function for the couple optimizer.

    Args:
        data: Both spouses' salaries and the dependents they share

    Returns:
        CoupleOptimizationResult with every split, the best one and tips
    """
    return CoupleTaxOptimizer(data).optimize()
