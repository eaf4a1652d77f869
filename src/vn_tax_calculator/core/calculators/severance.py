"""Severance and lump-sum payouts (Điều 8 Thông tư 111/2013/TT-BTC).

Up to 10 months of average salary is exempt; the excess is taxed at 10%.
Early voluntary pension withdrawals pay 10% on the gain over contributions.
"""

from dataclasses import replace
from decimal import Decimal

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.flat_rate import FlatRateRule, ThresholdMode
from vn_tax_calculator.core.models.severance import SeveranceInput, SeveranceResult, SeveranceType
from vn_tax_calculator.core.rules.flat_rates import (
    JOB_LOSS_MIN_MONTHS,
    PENSION_LUMP_SUM_RATE,
    SEVERANCE_EXCESS_RATE,
    SEVERANCE_EXEMPT_MONTHS,
    SEVERANCE_MONTHS_PER_YEAR,
)
from vn_tax_calculator.shared.formatters import format_number
from vn_tax_calculator.shared.validators import ZERO, effective_rate_percent, non_negative, round_money

SEVERANCE_TYPE_INFO = {
    SeveranceType.SEVERANCE: ("Trợ cấp thôi việc", "Điều 8, Thông tư 111/2013/TT-BTC"),
    SeveranceType.JOB_LOSS: ("Trợ cấp mất việc làm", "Điều 8, Thông tư 111/2013/TT-BTC"),
    SeveranceType.EARLY_RETIRE: ("Trợ cấp nghỉ hưu sớm", "Điều 8, Thông tư 111/2013/TT-BTC"),
    SeveranceType.SOCIAL_INSURANCE_LUMP_SUM: ("BHXH một lần", "Điều 8, Thông tư 111/2013/TT-BTC"),
    SeveranceType.VOLUNTARY_PENSION_LUMP_SUM: (
        "Quỹ hưu trí tự nguyện (rút một lần)",
        "Điều 14, Luật Thuế TNCN sửa đổi 2024",
    ),
}

SEVERANCE_RULE = FlatRateRule(
    name="severance",
    rate=SEVERANCE_EXCESS_RATE,
    threshold_mode=ThresholdMode.EXCESS_OVER,
    below_threshold_reason="Trợ cấp không vượt quá mức miễn thuế (10 tháng lương bình quân)",
)

PENSION_LUMP_SUM_RULE = FlatRateRule(
    name="voluntary_pension_lump_sum",
    rate=PENSION_LUMP_SUM_RATE,
    threshold_mode=ThresholdMode.EXCESS_OVER,
    below_threshold_reason="Không có lãi, không phải nộp thuế",
)


def _pension_lump_sum(data: SeveranceInput, label: str, reference: str) -> SeveranceResult:
    total = non_negative(data.total_amount, "total_amount")
    contributions = non_negative(data.contribution_amount, "contribution_amount")
    tax = evaluate_rule(replace(PENSION_LUMP_SUM_RULE, threshold=contributions), total)
    return SeveranceResult(
        severance_type=data.severance_type,
        label=label,
        exempt_amount=min(total, contributions),
        tax=tax,
        effective_rate=effective_rate_percent(tax.tax_amount, total),
        steps=[
            f"Số tiền đã đóng góp = {format_number(contributions)} VND",
            f"Phần lãi = {format_number(total)} - {format_number(contributions)} "
            f"= {format_number(tax.taxable_amount)} VND",
            f"Thuế TNCN = {format_number(tax.taxable_amount)} × 10% = {format_number(tax.tax_amount)} VND"
            if not tax.is_exempt
            else "Không có lãi, không phải nộp thuế",
        ],
        notes=[
            "Rút quỹ hưu trí tự nguyện trước tuổi nghỉ hưu phải chịu thuế 10% trên phần lãi.",
            "Nếu rút đúng quy định (đủ tuổi nghỉ hưu theo Luật BHXH) thì được miễn thuế.",
            f"Căn cứ pháp lý: {reference}",
        ],
    )


def calculate_severance_tax(data: SeveranceInput) -> SeveranceResult:
    """Tax a severance, job-loss, early-retirement or lump-sum payout.

    Args:
        data: Payout type, amount and average salary

    Returns:
        SeveranceResult with calculation steps
    """
    label, reference = SEVERANCE_TYPE_INFO[data.severance_type]
    if data.severance_type == SeveranceType.VOLUNTARY_PENSION_LUMP_SUM:
        return _pension_lump_sum(data, label, reference)

    total = non_negative(data.total_amount, "total_amount")
    exempt_amount = non_negative(data.average_salary, "average_salary") * SEVERANCE_EXEMPT_MONTHS
    tax = evaluate_rule(replace(SEVERANCE_RULE, threshold=exempt_amount), total)

    steps = [
        f"Số tiền được miễn thuế = {format_number(data.average_salary)} × 10 = {format_number(exempt_amount)} VND",
        f"Thu nhập chịu thuế = {format_number(total)} - {format_number(exempt_amount)} "
        f"= {format_number(tax.taxable_amount)} VND",
        f"Thuế TNCN = {format_number(tax.taxable_amount)} × 10% = {format_number(tax.tax_amount)} VND"
        if not tax.is_exempt
        else "Thu nhập chịu thuế ≤ 0, không phải nộp thuế",
    ]
    notes = []
    if tax.is_exempt:
        notes.append("Không phải nộp thuế TNCN vì trợ cấp không vượt quá mức miễn thuế.")
    if data.severance_type == SeveranceType.SOCIAL_INSURANCE_LUMP_SUM:
        notes.append("BHXH một lần chỉ được nhận khi không đủ điều kiện hưởng lương hưu.")
    notes.append(f"Căn cứ pháp lý: {reference}")

    return SeveranceResult(
        severance_type=data.severance_type,
        label=label,
        exempt_amount=exempt_amount,
        tax=tax,
        effective_rate=effective_rate_percent(tax.tax_amount, total),
        steps=steps,
        notes=notes,
    )


def estimate_severance_amount(years_worked: Decimal, average_salary: Decimal) -> Decimal:
    """Half a month of salary per year worked; nothing under one year."""
    years = non_negative(years_worked, "years_worked")
    if years < 1:
        return ZERO
    return round_money(years * non_negative(average_salary, "average_salary") * SEVERANCE_MONTHS_PER_YEAR)


def estimate_job_loss_amount(years_worked: Decimal, average_salary: Decimal) -> Decimal:
    """One month of salary per year worked, at least two months."""
    years = non_negative(years_worked, "years_worked")
    if years < 1:
        return ZERO
    salary = non_negative(average_salary, "average_salary")
    return round_money(max(years * salary, salary * JOB_LOSS_MIN_MONTHS))
