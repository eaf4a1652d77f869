"""Late payment interest: 0.03% per day (Điều 59 Luật Quản lý thuế 2019)."""

from decimal import Decimal

from vn_tax_calculator.core.models.late_payment import InterestMilestone, LatePaymentInput, LatePaymentResult
from vn_tax_calculator.core.rules.flat_rates import LATE_PAYMENT_DAILY_RATE
from vn_tax_calculator.shared.validators import ZERO, non_negative, round_money

MILESTONES = [
    (7, "1 tuần"),
    (15, "2 tuần"),
    (30, "1 tháng"),
    (45, "1,5 tháng"),
    (60, "2 tháng"),
    (90, "3 tháng"),
    (180, "6 tháng"),
    (365, "1 năm"),
]


def calculate_late_payment(data: LatePaymentInput) -> LatePaymentResult:
    """Interest owed for paying tax after its due date.

    Days are counted from the day after the due date through the payment
    date. Paying on or before the due date costs nothing.
    """
    tax_amount = non_negative(data.tax_amount, "tax_amount")
    days_late = max(0, (data.payment_date - data.due_date).days)

    if days_late == 0:
        return LatePaymentResult(
            tax_amount=tax_amount,
            days_late=0,
            daily_rate=LATE_PAYMENT_DAILY_RATE,
            interest_amount=ZERO,
            daily_interest=ZERO,
            legal_note="Nộp thuế đúng hạn, không phát sinh lãi chậm nộp.",
        )

    warning = None
    if days_late > 90:
        warning = "Chậm nộp trên 90 ngày có thể bị xử phạt hành chính nặng và cưỡng chế thuế."
        legal_note = (
            "Theo Nghị định 125/2020/NĐ-CP, chậm nộp quá 90 ngày có thể bị phạt "
            "từ 1-3 lần số tiền thuế trốn nếu cố ý."
        )
    elif days_late > 30:
        warning = "Chậm nộp trên 30 ngày, nên nộp sớm để tránh tích lũy lãi."
        legal_note = "Lãi chậm nộp được tính liên tục cho đến ngày thực nộp."
    else:
        legal_note = "Lãi chậm nộp 0,03%/ngày theo Điều 59 Luật Quản lý thuế 2019."

    return LatePaymentResult(
        tax_amount=tax_amount,
        days_late=days_late,
        daily_rate=LATE_PAYMENT_DAILY_RATE,
        interest_amount=round_money(tax_amount * LATE_PAYMENT_DAILY_RATE * days_late),
        daily_interest=round_money(tax_amount * LATE_PAYMENT_DAILY_RATE),
        warning=warning,
        legal_note=legal_note,
    )


def generate_interest_milestones(tax_amount: Decimal) -> list[InterestMilestone]:
    tax_amount = non_negative(tax_amount, "tax_amount")
    milestones = []
    for days, label in MILESTONES:
        interest = round_money(tax_amount * LATE_PAYMENT_DAILY_RATE * days)
        milestones.append(
            InterestMilestone(days=days, label=label, interest_amount=interest, total_amount=tax_amount + interest)
        )
    return milestones
