"""PIT for foreigners working in Vietnam.

Residency decides the method: residents (183 days or a permanent home)
are taxed like Vietnamese employees on worldwide income, non-residents
pay a flat 20% on Vietnam-sourced income with no deductions.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.calculators.salary import calculate_salary_tax
from vn_tax_calculator.core.calculators.withholding import NON_RESIDENT_RULES
from vn_tax_calculator.core.models.enums import LawVersion, RegionType, Residency
from vn_tax_calculator.core.models.foreigner import (
    AllowanceSplit,
    ForeignerAllowances,
    ForeignerTaxInput,
    ForeignerTaxResult,
    TreatyCountry,
)
from vn_tax_calculator.core.models.salary import TaxableIncomeInput
from vn_tax_calculator.core.models.withholding import WithholdingIncomeType
from vn_tax_calculator.core.rules.tax_treaties import DOUBLE_TAX_TREATIES, RESIDENCY_DAYS_THRESHOLD
from vn_tax_calculator.shared.formatters import format_currency
from vn_tax_calculator.shared.validators import (
    coerce_enum,
    effective_rate_percent,
    non_negative,
    non_negative_int,
)

logger = logging.getLogger(__name__)

NON_RESIDENT_SALARY_RULE = NON_RESIDENT_RULES[WithholdingIncomeType.SALARY_WITH_CONTRACT]


def calculate_days_in_vietnam(arrival_date: date, tax_year: int, as_of: Optional[date] = None) -> int:
    """Days present in the tax year, counting the arrival day.

    Counting stops at ``as_of`` (today when None) or 31/12, whichever is first.
    """
    year_start = date(tax_year, 1, 1)
    year_end = date(tax_year, 12, 31)
    start = max(arrival_date, year_start)
    end = min(as_of or date.today(), year_end)
    if start > end:
        return 0
    return (end - start).days + 1


def determine_residency(days_in_vietnam: int, has_permanent_residence: bool) -> Residency:
    if has_permanent_residence or days_in_vietnam >= RESIDENCY_DAYS_THRESHOLD:
        return Residency.RESIDENT
    return Residency.NON_RESIDENT


def find_tax_treaty(country_code: str) -> Optional[TreatyCountry]:
    """Look up Vietnam's double taxation agreement with a country."""
    code = (country_code or "").strip().upper()
    if code not in DOUBLE_TAX_TREATIES:
        return None
    name, year = DOUBLE_TAX_TREATIES[code]
    return TreatyCountry(code=code, name=name, year=year)


def split_allowances(allowances: ForeignerAllowances) -> AllowanceSplit:
    """Housing, language training and other benefits are taxable.

    Children's tuition, the annual home-leave fare and relocation are exempt.
    """
    exempt = (
        non_negative(allowances.school_fees, "school_fees")
        + non_negative(allowances.home_leave_fare, "home_leave_fare")
        + non_negative(allowances.relocation, "relocation")
    )
    taxable = (
        non_negative(allowances.housing, "housing")
        + non_negative(allowances.language_training, "language_training")
        + non_negative(allowances.other, "other")
    )
    return AllowanceSplit(taxable=taxable, exempt=exempt)


def _law_for_year(tax_year: int) -> LawVersion:
    return LawVersion.LAW_2026 if tax_year >= 2026 else LawVersion.LAW_2025


def _non_resident(data: ForeignerTaxInput, days: int, treaty: Optional[TreatyCountry]) -> ForeignerTaxResult:
    gross = non_negative(data.gross_income, "gross_income")
    allowances = split_allowances(data.allowances)
    flat = evaluate_rule(NON_RESIDENT_SALARY_RULE, gross + allowances.taxable)
    total_income = gross + allowances.total

    notes = [
        "Người không cư trú chịu thuế 20% trên thu nhập phát sinh tại Việt Nam.",
        "Không được áp dụng giảm trừ gia cảnh và giảm trừ bảo hiểm.",
    ]
    if treaty:
        notes.append(
            f"Quốc gia {treaty.name} có Hiệp định thuế với Việt Nam (từ {treaty.year}). "
            "Có thể được khấu trừ thuế đã nộp."
        )

    return ForeignerTaxResult(
        residency=Residency.NON_RESIDENT,
        days_in_vietnam=days,
        law_version=_law_for_year(data.tax_year),
        gross_income=gross,
        foreign_income=Decimal("0"),
        allowances=allowances,
        total_income=total_income,
        taxable_income=flat.taxable_amount,
        tax_amount=flat.tax_amount,
        effective_rate=effective_rate_percent(flat.tax_amount, total_income),
        net_income=total_income - flat.tax_amount,
        treaty=treaty,
        notes=notes,
    )


def _resident(data: ForeignerTaxInput, days: int, treaty: Optional[TreatyCountry]) -> ForeignerTaxResult:
    gross = non_negative(data.gross_income, "gross_income")
    foreign = non_negative(data.foreign_income, "foreign_income")
    allowances = split_allowances(data.allowances)
    law_version = _law_for_year(data.tax_year)

    # Insurance is contributed on the Vietnamese salary only
    salary_input = TaxableIncomeInput(
        gross_income=gross + foreign + allowances.taxable,
        declared_salary=gross,
        dependents=non_negative_int(data.dependents, "dependents"),
        has_insurance=data.has_vietnamese_insurance,
        insurance_options=data.insurance_options,
        region=coerce_enum(RegionType, data.region, RegionType.REGION_1),
    )
    salary = calculate_salary_tax(salary_input, law_version)

    old_tax = new_tax = None
    if law_version == LawVersion.LAW_2026:
        old_tax = calculate_salary_tax(salary_input, LawVersion.LAW_2025).tax_amount
        new_tax = salary.tax_amount

    total_income = gross + foreign + allowances.total
    if data.has_permanent_residence and days < RESIDENCY_DAYS_THRESHOLD:
        basis = "có nơi ở thường trú"
    else:
        basis = f"{days} ngày ≥ {RESIDENCY_DAYS_THRESHOLD} ngày"
    notes = [
        f"Người cư trú thuế tại Việt Nam ({basis}).",
        "Áp dụng biểu thuế lũy tiến từng phần như người lao động Việt Nam.",
        f"Giảm trừ bản thân: {format_currency(salary.personal_deduction)}/tháng.",
    ]
    if salary.dependent_deduction > 0:
        notes.append(
            f"Giảm trừ {salary_input.dependents} người phụ thuộc: "
            f"{format_currency(salary.dependent_deduction)}/tháng."
        )
    if foreign > 0:
        notes.append("Người cư trú phải kê khai cả thu nhập phát sinh ngoài Việt Nam.")
    if treaty:
        notes.append(
            f"Quốc gia {treaty.name} có Hiệp định thuế với Việt Nam. "
            "Thu nhập đã nộp thuế ở nước ngoài có thể được khấu trừ."
        )
    if old_tax is not None and old_tax > new_tax:
        notes.append(f"Luật thuế mới 2026 giúp tiết kiệm {format_currency(old_tax - new_tax)}/tháng.")

    return ForeignerTaxResult(
        residency=Residency.RESIDENT,
        days_in_vietnam=days,
        law_version=law_version,
        gross_income=gross,
        foreign_income=foreign,
        allowances=allowances,
        total_income=total_income,
        insurance=salary.insurance,
        personal_deduction=salary.personal_deduction,
        dependent_deduction=salary.dependent_deduction,
        taxable_income=salary.taxable_income,
        tax_amount=salary.tax_amount,
        breakdown=salary.breakdown,
        effective_rate=effective_rate_percent(salary.tax_amount, total_income),
        net_income=total_income - salary.insurance.total - salary.tax_amount,
        tax_under_old_law=old_tax,
        tax_under_new_law=new_tax,
        treaty=treaty,
        notes=notes,
    )


def calculate_foreigner_tax(data: ForeignerTaxInput, as_of: Optional[date] = None) -> ForeignerTaxResult:
    """Monthly PIT of a foreign employee.

    Args:
        data: Presence, income, allowances and deductions
        as_of: Date used to count days from ``arrival_date`` (today when None)

    Returns:
        ForeignerTaxResult for the residency status derived from the input
    """
    days = non_negative_int(data.days_in_vietnam, "days_in_vietnam")
    if data.arrival_date is not None:
        days = calculate_days_in_vietnam(data.arrival_date, data.tax_year, as_of)

    residency = determine_residency(days, data.has_permanent_residence)
    treaty = find_tax_treaty(data.nationality)
    logger.debug("foreigner: %d days, %s, treaty=%s", days, residency.value, treaty.code if treaty else None)

    if residency == Residency.NON_RESIDENT:
        return _non_resident(data, days, treaty)
    return _resident(data, days, treaty)
