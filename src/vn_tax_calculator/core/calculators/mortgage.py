"""Mortgage amortization with grace, preferential and floating-rate phases.

The monthly payment is re-amortized at the start of each phase from the
balance and months still outstanding. Amounts are tracked in whole VND so
that principal repaid over the schedule equals the loan exactly.
"""

import logging
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.models.mortgage import (
    AmortizationRow,
    LoanPhase,
    MortgageInput,
    MortgagePhaseConfig,
    MortgageResult,
    PropertyType,
    RepaymentMethod,
    SensitivityScenario,
    UpfrontCosts,
    YearlyAmortization,
)
from vn_tax_calculator.core.rules.mortgage_rates import (
    APPRAISAL_FEE_MAX,
    APPRAISAL_FEE_MIN,
    APPRAISAL_FEE_RATE,
    CONSTRUCTION_SHARE,
    CONSTRUCTION_VAT_RATE,
    MAINTENANCE_FEE_RATE,
    MAX_DEBT_SERVICE_RATIO,
    NOTARY_FEE_CAP,
    NOTARY_FLAT_FEES,
    NOTARY_TIERS,
    PROPERTY_REGISTRATION_FEE_RATE,
    SENSITIVITY_DELTAS,
)
from vn_tax_calculator.shared.validators import ZERO, non_negative, non_negative_int, round_money, round_to

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return non_negative(annual_rate_percent, "annual_rate_percent") / 100 / MONTHS_PER_YEAR


def calculate_pmt(principal: Decimal, annual_rate_percent: Decimal, months: int) -> Decimal:
    """Annuity payment PMT = P·r·(1+r)^n / ((1+r)^n - 1), unrounded.

    Args:
        principal: Amount to amortize
        annual_rate_percent: Annual rate in percent (10.5 = 10.5%)
        months: Number of monthly payments

    Returns:
        Monthly payment; 0 without principal or months, P/n at a zero rate
    """
    if principal <= 0 or months <= 0:
        return ZERO
    r = monthly_rate(annual_rate_percent)
    if r <= 0:
        return principal / months
    factor = (1 + r) ** months
    return principal * r * factor / (factor - 1)


def max_principal_for_payment(payment: Decimal, annual_rate_percent: Decimal, months: int) -> Decimal:
    """Inverse of calculate_pmt: the loan a monthly payment can service."""
    if payment <= 0 or months <= 0:
        return ZERO
    r = monthly_rate(annual_rate_percent)
    if r <= 0:
        return payment * months
    factor = (1 + r) ** months
    return payment * (factor - 1) / (r * factor)


def _phase_of(month: int, grace_end: int, preferential_end: int) -> LoanPhase:
    if month <= grace_end:
        return LoanPhase.GRACE
    if month <= preferential_end:
        return LoanPhase.PREFERENTIAL
    return LoanPhase.FLOATING


def repayment_months_after_grace(config: MortgagePhaseConfig) -> int:
    """Months left to amortize once the (clamped) grace period ends."""
    total_months = non_negative_int(config.total_months, "total_months")
    grace = min(non_negative_int(config.grace_period_months, "grace_period_months"), total_months)
    return total_months - grace


def build_schedule(loan_amount: Decimal, config: MortgagePhaseConfig) -> list[AmortizationRow]:
    """Month-by-month schedule for a loan.

    Grace months pay interest only at the preferential rate. On entering the
    preferential and floating phases the annuity payment is recomputed from
    the remaining balance over the remaining months. Straight-line loans
    repay loan / repayment months of principal each month. The last month
    repays whatever balance is left.

    Args:
        loan_amount: Amount borrowed
        config: Term, rates and phase lengths

    Returns:
        One AmortizationRow per month; empty for a zero loan or term
    """
    balance = round_money(non_negative(loan_amount, "loan_amount"))
    total_months = config.total_months
    if balance <= 0 or total_months <= 0:
        return []

    grace_end = min(non_negative_int(config.grace_period_months, "grace_period_months"), total_months)
    preferential_end = min(
        grace_end + non_negative_int(config.preferential_months, "preferential_months"), total_months
    )
    repayment_months = total_months - grace_end
    straight_principal = round_money(balance / repayment_months) if repayment_months else ZERO

    rows = []
    payment: Optional[Decimal] = None
    current_phase: Optional[LoanPhase] = None
    for month in range(1, total_months + 1):
        phase = _phase_of(month, grace_end, preferential_end)
        rate_percent = (
            config.floating_rate_percent if phase == LoanPhase.FLOATING else config.preferential_rate_percent
        )
        if phase != current_phase:
            payment = calculate_pmt(balance, rate_percent, total_months - month + 1)
            current_phase = phase
            logger.debug("month %s: %s phase, payment=%s, balance=%s", month, phase.value, payment, balance)

        interest = round_money(balance * monthly_rate(rate_percent))
        if phase == LoanPhase.GRACE:
            principal = ZERO
        elif month == total_months:
            principal = balance
        elif config.repayment_method == RepaymentMethod.STRAIGHT_LINE:
            principal = straight_principal
        else:
            principal = round_money(payment) - interest
        principal = min(max(principal, ZERO), balance)

        balance -= principal
        if balance < 1:
            balance = ZERO
        rows.append(
            AmortizationRow(
                month=month,
                principal=principal,
                interest=interest,
                remaining_balance=balance,
                phase=phase,
            )
        )
    return rows


def group_by_year(schedule: list[AmortizationRow]) -> list[YearlyAmortization]:
    years = []
    for start in range(0, len(schedule), MONTHS_PER_YEAR):
        rows = schedule[start : start + MONTHS_PER_YEAR]
        years.append(
            YearlyAmortization(
                year=start // MONTHS_PER_YEAR + 1,
                total_principal=sum((r.principal for r in rows), ZERO),
                total_interest=sum((r.interest for r in rows), ZERO),
                total_payment=sum((r.total_payment for r in rows), ZERO),
                ending_balance=rows[-1].remaining_balance,
            )
        )
    return years


def first_payment(schedule: list[AmortizationRow], phase: LoanPhase) -> Decimal:
    for row in schedule:
        if row.phase == phase:
            return row.total_payment
    return ZERO


def build_sensitivity(loan_amount: Decimal, config: MortgagePhaseConfig) -> list[SensitivityScenario]:
    """Floating-phase payment at +0, +1 and +2 points on the floating rate.

    The base is the balance and remaining months when floating starts, so
    +0 reproduces the schedule's first floating payment.
    """
    schedule = build_schedule(loan_amount, config)
    floating = [r for r in schedule if r.phase == LoanPhase.FLOATING]
    if floating:
        months = len(floating)
        principal = floating[0].remaining_balance + floating[0].principal
    else:
        months = repayment_months_after_grace(config)
        principal = round_money(non_negative(loan_amount, "loan_amount"))

    base_payment = calculate_pmt(principal, config.floating_rate_percent, months)
    scenarios = []
    for delta in SENSITIVITY_DELTAS:
        rate = config.floating_rate_percent + delta
        payment = calculate_pmt(principal, rate, months)
        scenarios.append(
            SensitivityScenario(
                label="Hiện tại" if delta == 0 else f"+{delta}%",
                rate_percent=rate,
                monthly_payment=round_money(payment),
                difference_from_base=round_money(payment - base_payment),
                total_interest=round_money(payment * months - principal),
            )
        )
    return scenarios


def calculate_notary_fee(property_price: Decimal) -> Decimal:
    """Progressive notary fee, capped at 70 triệu."""
    price = non_negative(property_price, "property_price")
    if price <= 0:
        return ZERO
    for upper, fee in NOTARY_FLAT_FEES:
        if price <= upper:
            return fee
    for upper, floor, fixed, rate in NOTARY_TIERS:
        if upper is None or price <= upper:
            return round_money(min(fixed + (price - floor) * rate, NOTARY_FEE_CAP))
    return NOTARY_FEE_CAP


def calculate_upfront_costs(
    property_price: Decimal, loan_amount: Decimal, property_type: PropertyType = PropertyType.SECONDARY
) -> UpfrontCosts:
    price = non_negative(property_price, "property_price")
    loan = non_negative(loan_amount, "loan_amount")
    appraisal = min(max(loan * APPRAISAL_FEE_RATE, APPRAISAL_FEE_MIN), APPRAISAL_FEE_MAX)
    from_developer = property_type == PropertyType.PRIMARY_DEVELOPER
    return UpfrontCosts(
        registration_fee=round_money(price * PROPERTY_REGISTRATION_FEE_RATE),
        notary_fee=calculate_notary_fee(price),
        appraisal_fee=round_money(appraisal),
        maintenance_fee=round_money(price * MAINTENANCE_FEE_RATE) if from_developer else ZERO,
        vat=round_money(price * CONSTRUCTION_SHARE * CONSTRUCTION_VAT_RATE) if from_developer else ZERO,
    )


def calculate_mortgage(data: MortgageInput) -> MortgageResult:
    """Full mortgage analysis: schedule, fees, affordability and rate stress.

    Args:
        data: Property, down payment, phases and borrower income

    Returns:
        MortgageResult
    """
    price = non_negative(data.property_price, "property_price")
    down_percent = min(non_negative(data.down_payment_percent, "down_payment_percent"), Decimal("100"))
    down_payment = round_money(price * down_percent / 100)
    loan_amount = price - down_payment

    schedule = build_schedule(loan_amount, data)
    grace_payment = first_payment(schedule, LoanPhase.GRACE)
    preferential_payment = first_payment(schedule, LoanPhase.PREFERENTIAL) or grace_payment
    floating_payment = first_payment(schedule, LoanPhase.FLOATING)

    income = non_negative(data.monthly_income, "monthly_income")
    other_debt = non_negative(data.other_debt_payments, "other_debt_payments")
    peak_payment = max(preferential_payment, floating_payment)
    dti = round_to((peak_payment + other_debt) / income * 100, 1) if income > 0 else ZERO

    repayment_months = repayment_months_after_grace(data)
    max_loan = max_principal_for_payment(
        income * MAX_DEBT_SERVICE_RATIO - other_debt, data.floating_rate_percent, repayment_months
    )

    return MortgageResult(
        loan_amount=loan_amount,
        down_payment=down_payment,
        preferential_payment=preferential_payment,
        floating_payment=floating_payment,
        total_interest=sum((r.interest for r in schedule), ZERO),
        total_payment=sum((r.total_payment for r in schedule), ZERO),
        dti_ratio=dti,
        max_loan_by_income=round_money(max_loan),
        fees=calculate_upfront_costs(price, loan_amount, data.property_type),
        schedule=schedule,
        yearly=group_by_year(schedule),
        sensitivity=build_sensitivity(loan_amount, data),
    )
