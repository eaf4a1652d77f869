"""Withholding tax at source for residents and non-residents."""

import logging
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.calculators.salary import calculate_salary_tax
from vn_tax_calculator.core.models.enums import Residency
from vn_tax_calculator.core.models.flat_rate import FlatRateResult, FlatRateRule, ThresholdMode
from vn_tax_calculator.core.models.salary import TaxableIncomeInput
from vn_tax_calculator.core.models.withholding import (
    ForeignContractorInput,
    ForeignContractorResult,
    ForeignContractorType,
    ResidencyComparison,
    WithholdingIncomeType,
    WithholdingInput,
    WithholdingResult,
)
from vn_tax_calculator.core.rules.flat_rates import (
    DIVIDEND_RATE,
    FREELANCE_RATE,
    INHERITANCE_RATE,
    INHERITANCE_THRESHOLD,
    INTEREST_RATE,
    NON_RESIDENT_RATE,
    REAL_ESTATE_PIT_RATE,
    RENTAL_PIT_RATE,
    ROYALTY_RATE,
    SECURITIES_TRANSFER_RATE,
    WINNINGS_RATE,
    WINNINGS_THRESHOLD,
    WITHHOLDING_MIN_PAYMENT,
)
from vn_tax_calculator.shared.validators import coerce_enum, non_negative

logger = logging.getLogger(__name__)

BELOW_MIN_PAYMENT = "Thu nhập dưới 2.000.000 ₫/lần - không khấu trừ"
BELOW_WINNINGS = "Giá trị trúng thưởng không vượt 10.000.000 ₫ - không chịu thuế"
BELOW_INHERITANCE = "Giá trị thừa kế/quà tặng không vượt 10.000.000 ₫ - không chịu thuế"


def family_exemption(context: Optional[WithholdingInput]) -> Optional[str]:
    """Inheritance or gift between spouses, parents, children, siblings."""
    if context is not None and context.is_family_member:
        return "Thừa kế/quà tặng giữa các thành viên gia đình được miễn thuế"
    return None


def govbond_exemption(context: object) -> Optional[str]:
    return "Lãi trái phiếu Chính phủ được miễn thuế TNCN"


RESIDENT_RULES: dict[WithholdingIncomeType, FlatRateRule] = {
    WithholdingIncomeType.SALARY_WITHOUT_CONTRACT: FlatRateRule(
        name="salary_without_contract",
        rate=FREELANCE_RATE,
        threshold_mode=ThresholdMode.EXEMPT_BELOW,
        threshold=WITHHOLDING_MIN_PAYMENT,
        below_threshold_reason=BELOW_MIN_PAYMENT,
        legal_note="Không có HĐLĐ hoặc HĐLĐ < 3 tháng: khấu trừ 10% nếu >= 2 triệu/lần.",
    ),
    WithholdingIncomeType.FREELANCE: FlatRateRule(
        name="freelance",
        rate=FREELANCE_RATE,
        threshold_mode=ThresholdMode.EXEMPT_BELOW,
        threshold=WITHHOLDING_MIN_PAYMENT,
        below_threshold_reason=BELOW_MIN_PAYMENT,
        legal_note="Thu nhập từ dịch vụ cá nhân: khấu trừ 10% nếu >= 2 triệu/lần.",
    ),
    WithholdingIncomeType.RENTAL: FlatRateRule(
        name="rental",
        rate=RENTAL_PIT_RATE,
        legal_note="Cho thuê tài sản: 5% trên doanh thu (Thông tư 40/2021/TT-BTC).",
    ),
    WithholdingIncomeType.DIVIDEND: FlatRateRule(
        name="dividend",
        rate=DIVIDEND_RATE,
        legal_note="Cổ tức bằng tiền: 5% (đầu tư vốn).",
    ),
    WithholdingIncomeType.INTEREST_REGULAR: FlatRateRule(
        name="interest_regular",
        rate=INTEREST_RATE,
        legal_note="Lãi trái phiếu doanh nghiệp, lãi cho vay: 5%.",
    ),
    WithholdingIncomeType.INTEREST_GOVBOND: FlatRateRule(
        name="interest_govbond",
        rate=Decimal("0"),
        exemption_predicate=govbond_exemption,
        legal_note="Điều 4 Luật Thuế TNCN: lãi trái phiếu Chính phủ được miễn thuế.",
    ),
    WithholdingIncomeType.SECURITIES: FlatRateRule(
        name="securities",
        rate=SECURITIES_TRANSFER_RATE,
        legal_note="Chuyển nhượng chứng khoán: 0,1% trên giá bán từng lần.",
    ),
    WithholdingIncomeType.REAL_ESTATE: FlatRateRule(
        name="real_estate",
        rate=REAL_ESTATE_PIT_RATE,
        legal_note="Chuyển nhượng bất động sản: 2% trên giá chuyển nhượng.",
    ),
    WithholdingIncomeType.LOTTERY: FlatRateRule(
        name="lottery",
        rate=WINNINGS_RATE,
        threshold_mode=ThresholdMode.EXCESS_OVER,
        threshold=WINNINGS_THRESHOLD,
        below_threshold_reason=BELOW_WINNINGS,
        legal_note="Trúng thưởng: 10% trên phần giá trị vượt 10 triệu/lần.",
    ),
    WithholdingIncomeType.INHERITANCE: FlatRateRule(
        name="inheritance",
        rate=INHERITANCE_RATE,
        threshold_mode=ThresholdMode.EXCESS_OVER,
        threshold=INHERITANCE_THRESHOLD,
        exemption_predicate=family_exemption,
        below_threshold_reason=BELOW_INHERITANCE,
        legal_note="Thừa kế, quà tặng: 10% trên phần vượt 10 triệu/lần.",
    ),
    WithholdingIncomeType.ROYALTY: FlatRateRule(
        name="royalty",
        rate=ROYALTY_RATE,
        threshold_mode=ThresholdMode.EXEMPT_BELOW,
        threshold=WITHHOLDING_MIN_PAYMENT,
        below_threshold_reason=BELOW_MIN_PAYMENT,
        legal_note="Bản quyền, nhượng quyền thương mại: 5%.",
    ),
}

# Non-residents: no thresholds except for family inheritance
NON_RESIDENT_RULES: dict[WithholdingIncomeType, FlatRateRule] = {
    **RESIDENT_RULES,
    WithholdingIncomeType.SALARY_WITH_CONTRACT: FlatRateRule(
        name="salary",
        rate=NON_RESIDENT_RATE,
        legal_note="Không cư trú: 20% trên tổng thu nhập từ tiền lương (Điều 18 Luật Thuế TNCN).",
    ),
    WithholdingIncomeType.SALARY_WITHOUT_CONTRACT: FlatRateRule(
        name="salary",
        rate=NON_RESIDENT_RATE,
        legal_note="Không cư trú: 20% trên tổng thu nhập từ tiền lương (Điều 18 Luật Thuế TNCN).",
    ),
    WithholdingIncomeType.FREELANCE: FlatRateRule(
        name="freelance",
        rate=NON_RESIDENT_RATE,
        legal_note="Không cư trú: 20% trên thu nhập từ kinh doanh, dịch vụ.",
    ),
    WithholdingIncomeType.ROYALTY: FlatRateRule(
        name="royalty",
        rate=ROYALTY_RATE,
        legal_note="Không cư trú: 5% trên toàn bộ tiền bản quyền, nhượng quyền thương mại.",
    ),
    WithholdingIncomeType.LOTTERY: FlatRateRule(
        name="lottery",
        rate=WINNINGS_RATE,
        legal_note="Không cư trú: 10% trên toàn bộ giá trị trúng thưởng.",
    ),
    WithholdingIncomeType.INHERITANCE: FlatRateRule(
        name="inheritance",
        rate=INHERITANCE_RATE,
        exemption_predicate=family_exemption,
        legal_note="Không cư trú: 10% trên toàn bộ giá trị thừa kế, quà tặng.",
    ),
}

# (PIT rate, VAT rate) on the contract value
FOREIGN_CONTRACTOR_RATES: dict[ForeignContractorType, tuple[Decimal, Decimal]] = {
    ForeignContractorType.SERVICE: (Decimal("0.05"), Decimal("0.05")),
    ForeignContractorType.GOODS_WITH_SERVICE: (Decimal("0.01"), Decimal("0.03")),
    ForeignContractorType.GOODS_ONLY: (Decimal("0.01"), Decimal("0.02")),
    ForeignContractorType.EQUIPMENT_RENTAL: (Decimal("0.05"), Decimal("0.05")),
    ForeignContractorType.PROPERTY_RENTAL: (Decimal("0.05"), Decimal("0.05")),
    ForeignContractorType.INSURANCE: (Decimal("0.05"), Decimal("0.05")),
}


def _rules_for(residency: Residency) -> dict[WithholdingIncomeType, FlatRateRule]:
    return NON_RESIDENT_RULES if residency == Residency.NON_RESIDENT else RESIDENT_RULES


def _progressive_salary(data: WithholdingInput) -> FlatRateResult:
    salary = calculate_salary_tax(
        TaxableIncomeInput(
            gross_income=data.payment_amount,
            dependents=data.dependents,
            has_insurance=False,
        ),
        data.law_version,
    )
    return FlatRateResult(
        rule_name="salary_with_contract",
        gross_amount=salary.gross_income,
        taxable_amount=salary.taxable_income,
        applied_rate=salary.marginal_rate,
        tax_amount=salary.tax_amount,
        net_amount=salary.gross_income - salary.tax_amount,
        legal_note="Khấu trừ theo biểu thuế lũy tiến sau giảm trừ gia cảnh (Điều 25 Luật Thuế TNCN).",
    )


def calculate_withholding(data: WithholdingInput) -> WithholdingResult:
    """Compute the tax a payer must withhold from one payment.

    Args:
        data: Payment description

    Returns:
        WithholdingResult (exemption_reason set when nothing is withheld)
    """
    residency = coerce_enum(Residency, data.residency, Residency.RESIDENT)
    income_type = coerce_enum(
        WithholdingIncomeType, data.income_type, WithholdingIncomeType.FREELANCE
    )

    if residency == Residency.RESIDENT and income_type == WithholdingIncomeType.SALARY_WITH_CONTRACT:
        return WithholdingResult(
            income_type=income_type,
            residency=residency,
            is_progressive=True,
            tax=_progressive_salary(data),
        )

    rule = _rules_for(residency)[income_type]
    return WithholdingResult(
        income_type=income_type,
        residency=residency,
        tax=evaluate_rule(rule, data.payment_amount, data),
    )


def calculate_lottery_tax(amount: Decimal, residency: Residency = Residency.RESIDENT) -> FlatRateResult:
    """Tax on a lottery or prize win (10% over 10 triệu for residents)."""
    return calculate_withholding(
        WithholdingInput(
            income_type=WithholdingIncomeType.LOTTERY,
            payment_amount=non_negative(amount),
            residency=residency,
        )
    ).tax


def compare_withholding_by_residency(data: WithholdingInput) -> ResidencyComparison:
    """Withhold the same payment as resident and as non-resident."""
    return ResidencyComparison(
        resident=calculate_withholding(data.model_copy(update={"residency": Residency.RESIDENT})),
        non_resident=calculate_withholding(
            data.model_copy(update={"residency": Residency.NON_RESIDENT})
        ),
    )


def get_withholding_rate(
    income_type: WithholdingIncomeType, residency: Residency = Residency.RESIDENT
) -> Optional[Decimal]:
    """Nominal withholding rate, or None when the bracket table applies."""
    if residency == Residency.RESIDENT and income_type == WithholdingIncomeType.SALARY_WITH_CONTRACT:
        return None
    rule = _rules_for(residency)[income_type]
    if rule.exemption_predicate is govbond_exemption:
        return Decimal("0")
    return rule.rate


def vat_registered_exemption(context: Optional[ForeignContractorInput]) -> Optional[str]:
    if context is not None and context.is_vat_registered:
        return "Nhà thầu đã đăng ký nộp VAT theo phương pháp khấu trừ"
    return None


def calculate_foreign_contractor_tax(data: ForeignContractorInput) -> ForeignContractorResult:
    """Compute foreign contractor tax (thuế nhà thầu) on a contract.

    Args:
        data: Contract value, activity type and VAT registration

    Returns:
        ForeignContractorResult with PIT and VAT lines
    """
    contractor_type = coerce_enum(
        ForeignContractorType, data.contractor_type, ForeignContractorType.SERVICE
    )
    pit_rate, vat_rate = FOREIGN_CONTRACTOR_RATES[contractor_type]
    value = non_negative(data.contract_value, "contract_value")

    pit = evaluate_rule(FlatRateRule(name="fct_pit", rate=pit_rate), value)
    vat = evaluate_rule(
        FlatRateRule(
            name="fct_vat",
            rate=vat_rate,
            exemption_predicate=vat_registered_exemption,
        ),
        value,
        data,
    )

    return ForeignContractorResult(
        contractor_type=contractor_type,
        contract_value=value,
        pit=pit,
        vat=vat,
        legal_note="Thông tư 103/2014/TT-BTC: thuế nhà thầu theo tỷ lệ % trên doanh thu.",
    )
