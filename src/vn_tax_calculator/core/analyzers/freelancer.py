"""Freelancer (10% withholding) vs employee comparison.

A freelancer's payment is taxed at a flat 10% with no deductions or
insurance; an employee on the same gross pays mandatory insurance and
progressive tax after family deductions. Low incomes favour the employee,
high incomes the freelancer; the break-even gross separates them.
"""

import logging
from decimal import Decimal
from typing import NamedTuple

from vn_tax_calculator.core.analyzers.comparison import (
    compare,
    find_break_even,
    scan_break_even,
    scan_comparison,
)
from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.calculators.salary import SalaryTaxCalculator
from vn_tax_calculator.core.models.comparison import BreakEvenResult, NetResult, ScanPoint
from vn_tax_calculator.core.models.content_creator import Currency
from vn_tax_calculator.core.models.enums import IncomeFrequency, LawVersion, RegionType
from vn_tax_calculator.core.models.flat_rate import FlatRateRule
from vn_tax_calculator.core.models.freelancer import (
    CreatorIncomeComparison,
    CreatorIncomeInput,
    CreatorIncomeSource,
    CreatorIncomeSourceType,
    CreatorSourceResult,
    FreelancerComparisonResult,
    FreelancerInput,
)
from vn_tax_calculator.core.models.salary import InsuranceOptions, TaxableIncomeInput
from vn_tax_calculator.core.rules.flat_rates import (
    BREAK_EVEN_HIGH,
    BREAK_EVEN_LOW,
    BREAK_EVEN_TOLERANCE,
    FREELANCE_RATE,
)
from vn_tax_calculator.shared.validators import (
    ZERO,
    coerce_enum,
    effective_rate_percent,
    non_negative,
    non_negative_int,
    round_money,
)

logger = logging.getLogger(__name__)

FREELANCE_RULE = FlatRateRule(
    name="freelance",
    rate=FREELANCE_RATE,
    legal_note="Khấu trừ 10% thu nhập vãng lai, không giảm trừ gia cảnh.",
)

FREELANCER_LABEL = "Freelancer"
EMPLOYEE_LABEL = "Nhân viên"

FREELANCER_PROS = [
    "Linh hoạt về thời gian và địa điểm làm việc",
    "Không phụ thuộc vào một công ty",
    "Có thể nhận nhiều dự án cùng lúc",
    "Thu nhập thực nhận cao hơn (ở mức lương cao)",
    "Thuế suất cố định 10%, không lũy tiến",
]

FREELANCER_CONS = [
    "Không được đóng BHXH, không có lương hưu từ nhà nước",
    "Phải tự mua BHYT",
    "Không được nghỉ phép có lương",
    "Thu nhập không ổn định, phụ thuộc vào dự án",
    "Tự chịu trách nhiệm thuế, hóa đơn, kế toán",
    "Không có thưởng tháng 13, trợ cấp thôi việc",
    "Khó vay ngân hàng do khó chứng minh thu nhập",
]

EMPLOYEE_PROS = [
    "Doanh nghiệp đóng 21.5% bảo hiểm cho người lao động",
    "Được hưởng BHXH (lương hưu, thai sản, ốm đau)",
    "Được BHYT với mức đóng thấp (1.5%)",
    "Thu nhập ổn định, được nghỉ phép có lương",
    "Có thưởng tháng 13, trợ cấp thôi việc",
    "Thuế suất thấp hơn ở mức thu nhập trung bình",
    "Dễ vay ngân hàng nhờ hợp đồng lao động",
]

EMPLOYEE_CONS = [
    "Thu nhập thực nhận thấp hơn (ở mức lương cao)",
    "Bị ràng buộc bởi hợp đồng lao động",
    "Phải làm việc theo giờ hành chính",
    "Khó nhận nhiều công việc cùng lúc",
]


def normalize_to_monthly(amount: Decimal, frequency: IncomeFrequency) -> Decimal:
    """Monthly equivalent; a project payment counts as one month."""
    amount = non_negative(amount, "amount")
    if frequency == IncomeFrequency.ANNUAL:
        return round_money(amount / 12)
    return amount


def normalize_to_annual(amount: Decimal, frequency: IncomeFrequency) -> Decimal:
    """Annual equivalent; a project payment is a one-off."""
    amount = non_negative(amount, "amount")
    if frequency == IncomeFrequency.MONTHLY:
        return amount * 12
    return amount


def freelancer_net(gross: Decimal) -> Decimal:
    return evaluate_rule(FREELANCE_RULE, gross).net_amount


class _EmployeeSide:
    """Employee net for a gross, with every other salary input fixed."""

    def __init__(self, template: TaxableIncomeInput, law_version: LawVersion):
        self.template = template
        self.calculator = SalaryTaxCalculator(law_version)

    def result(self, gross: Decimal):
        return self.calculator.calculate(self.template.model_copy(update={"gross_income": gross}))

    def net(self, gross: Decimal) -> Decimal:
        return self.result(gross).net_income


def _employee_side(
    dependents: int,
    has_insurance: bool,
    insurance_options: InsuranceOptions | None,
    region: RegionType,
    law_version: LawVersion,
) -> _EmployeeSide:
    template = TaxableIncomeInput(
        dependents=non_negative_int(dependents, "dependents"),
        has_insurance=has_insurance,
        insurance_options=insurance_options or InsuranceOptions(),
        region=coerce_enum(RegionType, region, RegionType.REGION_1),
    )
    return _EmployeeSide(template, coerce_enum(LawVersion, law_version, LawVersion.LAW_2026))


def _employee_net_result(employee: _EmployeeSide, monthly_gross: Decimal) -> NetResult:
    salary = employee.result(monthly_gross)
    return NetResult(
        label=EMPLOYEE_LABEL,
        gross_income=monthly_gross,
        tax=salary.tax_amount,
        insurance=salary.insurance.total,
        net_income=salary.net_income,
    )


def calculate_freelancer_comparison(data: FreelancerInput) -> FreelancerComparisonResult:
    """Compare a freelance income with the same gross paid as a salary.

    Args:
        data: Gross income, its frequency and the employee-side settings

    Returns:
        FreelancerComparisonResult with monthly and annual figures and
        the break-even monthly gross over [0, 500 triệu]
    """
    frequency = coerce_enum(IncomeFrequency, data.frequency, IncomeFrequency.MONTHLY)
    monthly_gross = normalize_to_monthly(data.gross_income, frequency)
    annual_gross = normalize_to_annual(data.gross_income, frequency)

    monthly_tax = evaluate_rule(FREELANCE_RULE, monthly_gross)
    annual_tax = evaluate_rule(FREELANCE_RULE, annual_gross)
    freelancer = NetResult(
        label=FREELANCER_LABEL,
        gross_income=monthly_gross,
        tax=monthly_tax.tax_amount,
        net_income=monthly_tax.net_amount,
    )

    side = _employee_side(
        data.dependents, data.has_insurance, data.insurance_options, data.region, data.law_version
    )
    employee = _employee_net_result(side, monthly_gross)

    break_even = find_break_even(
        BREAK_EVEN_LOW, BREAK_EVEN_HIGH, BREAK_EVEN_TOLERANCE, freelancer_net, side.net
    )
    logger.debug(
        "freelancer=%s employee=%s break_even=%s",
        freelancer.net_income,
        employee.net_income,
        break_even.break_even,
    )

    return FreelancerComparisonResult(
        monthly_gross=monthly_gross,
        annual_gross=annual_gross,
        freelancer=freelancer,
        employee=employee,
        comparison=compare(freelancer, employee),
        freelancer_annual_tax=annual_tax.tax_amount,
        freelancer_annual_net=annual_tax.net_amount,
        employee_annual_tax=employee.tax * 12,
        employee_annual_insurance=employee.insurance * 12,
        employee_annual_net=employee.net_income * 12,
        break_even=break_even,
    )


def generate_comparison_range(
    min_gross: Decimal,
    max_gross: Decimal,
    step: Decimal,
    dependents: int = 0,
    has_insurance: bool = True,
    region: RegionType = RegionType.REGION_1,
    law_version: LawVersion = LawVersion.LAW_2026,
) -> list[ScanPoint]:
    """Freelancer (net_a) and employee (net_b) monthly nets on a gross grid.

    Used for charts; difference > 0 where the freelancer keeps more.
    """
    side = _employee_side(dependents, has_insurance, None, region, law_version)
    return scan_comparison(min_gross, max_gross, step, freelancer_net, side.net)


def find_freelancer_break_even(
    dependents: int = 0,
    has_insurance: bool = True,
    region: RegionType = RegionType.REGION_1,
    law_version: LawVersion = LawVersion.LAW_2026,
) -> BreakEvenResult:
    """Monthly gross where freelancer and employee nets meet (A is the freelancer)."""
    side = _employee_side(dependents, has_insurance, None, region, law_version)
    return find_break_even(
        BREAK_EVEN_LOW, BREAK_EVEN_HIGH, BREAK_EVEN_TOLERANCE, freelancer_net, side.net
    )


def scan_freelancer_break_even(
    step: Decimal,
    dependents: int = 0,
    has_insurance: bool = True,
    region: RegionType = RegionType.REGION_1,
    law_version: LawVersion = LawVersion.LAW_2026,
) -> list[Decimal]:
    """Every grid point in the break-even range where the better side flips."""
    side = _employee_side(dependents, has_insurance, None, region, law_version)
    return scan_break_even(BREAK_EVEN_LOW, BREAK_EVEN_HIGH, step, freelancer_net, side.net)


# === Creator income sources ===


class CreatorSourceInfo(NamedTuple):
    label: str
    description: str
    default_currency: Currency
    is_foreign: bool
    withheld_at_source: bool


CREATOR_SOURCE_INFO = {
    CreatorIncomeSourceType.YOUTUBE: CreatorSourceInfo(
        "YouTube AdSense", "Quảng cáo YouTube (Google trả USD)", Currency.USD, True, False
    ),
    CreatorIncomeSourceType.TIKTOK: CreatorSourceInfo(
        "TikTok Creator Fund", "TikTok Creator Fund, Creator Rewards", Currency.USD, True, False
    ),
    CreatorIncomeSourceType.FACEBOOK_REELS: CreatorSourceInfo(
        "Facebook/Instagram Reels", "Bonus từ Facebook Reels, Instagram Reels", Currency.USD, True, False
    ),
    CreatorIncomeSourceType.AFFILIATE: CreatorSourceInfo(
        "Affiliate Marketing", "Hoa hồng từ Shopee, Lazada, Tiki Affiliate", Currency.VND, False, True
    ),
    CreatorIncomeSourceType.SPONSORSHIP: CreatorSourceInfo(
        "Sponsorship / Brand Deal", "Hợp đồng quảng cáo, review sản phẩm", Currency.VND, False, True
    ),
    CreatorIncomeSourceType.DONATION: CreatorSourceInfo(
        "Donation / Super Chat", "Super Chat, Membership, ủng hộ từ khán giả", Currency.VND, False, False
    ),
    CreatorIncomeSourceType.DIGITAL_PRODUCT: CreatorSourceInfo(
        "Sản phẩm số", "Khóa học online, Ebook, Template", Currency.VND, False, True
    ),
    CreatorIncomeSourceType.CONSULTING: CreatorSourceInfo(
        "Tư vấn / Coaching", "Tư vấn 1-1, Mentoring, Coaching", Currency.VND, False, True
    ),
    CreatorIncomeSourceType.OTHER: CreatorSourceInfo(
        "Thu nhập khác", "Các nguồn thu nhập không liệt kê ở trên", Currency.VND, False, False
    ),
}

CREATOR_SOURCE_RULE = FlatRateRule(
    name="creator_source",
    rate=FREELANCE_RATE,
    legal_note="Ước tính 10% trên thu nhập năm, trừ số thuế đã khấu trừ tại nguồn.",
)


def create_default_source(source_type: CreatorIncomeSourceType | str) -> CreatorIncomeSource:
    """A zero-amount source using the type's label, currency and origin."""
    source_type = coerce_enum(CreatorIncomeSourceType, source_type, CreatorIncomeSourceType.OTHER)
    info = CREATOR_SOURCE_INFO[source_type]
    return CreatorIncomeSource(
        source_type=source_type,
        name=info.label,
        currency=info.default_currency,
        is_foreign=info.is_foreign,
    )


def calculate_creator_source(source: CreatorIncomeSource, exchange_rate: Decimal) -> CreatorSourceResult:
    source_type = coerce_enum(CreatorIncomeSourceType, source.source_type, CreatorIncomeSourceType.OTHER)
    info = CREATOR_SOURCE_INFO[source_type]
    frequency = coerce_enum(IncomeFrequency, source.frequency, IncomeFrequency.MONTHLY)

    amount = non_negative(source.amount, "amount")
    if source.currency == Currency.USD:
        amount = round_money(amount * non_negative(exchange_rate, "exchange_rate"))

    annual = normalize_to_annual(amount, frequency)
    return CreatorSourceResult(
        source_type=source_type,
        name=source.name or info.label,
        is_foreign=info.is_foreign if source.is_foreign is None else source.is_foreign,
        monthly_amount=normalize_to_monthly(amount, frequency),
        annual_amount=annual,
        tax=evaluate_rule(CREATOR_SOURCE_RULE, annual),
        withheld_tax=non_negative(source.withheld_tax, "withheld_tax"),
    )


def calculate_creator_income_comparison(data: CreatorIncomeInput) -> CreatorIncomeComparison:
    """Estimate creator income tax per source and compare with a salary.

    Every source is estimated at the flat 10% on its annual VND amount;
    tax owed is the estimate minus what was withheld at source. The
    employee side taxes the combined monthly gross as a salary.
    """
    results = [calculate_creator_source(s, data.exchange_rate) for s in data.sources]

    monthly_gross = sum((r.monthly_amount for r in results), ZERO)
    annual_gross = sum((r.annual_amount for r in results), ZERO)
    estimated = sum((r.tax.tax_amount for r in results), ZERO)
    annual_net = annual_gross - estimated
    monthly_net = round_money(annual_net / 12)

    side = _employee_side(
        data.dependents, data.has_insurance, data.insurance_options, data.region, data.law_version
    )
    employee = _employee_net_result(side, monthly_gross)
    creator = NetResult(
        label="Creator",
        gross_income=monthly_gross,
        tax=round_money(estimated / 12),
        net_income=monthly_net,
    )

    return CreatorIncomeComparison(
        sources=results,
        total_monthly_gross=monthly_gross,
        total_annual_gross=annual_gross,
        foreign_income=sum((r.annual_amount for r in results if r.is_foreign), ZERO),
        domestic_income=sum((r.annual_amount for r in results if not r.is_foreign), ZERO),
        total_estimated_tax=estimated,
        total_withheld_tax=sum((r.withheld_tax for r in results), ZERO),
        total_tax_owed=sum((r.tax_owed for r in results), ZERO),
        annual_net=annual_net,
        monthly_net=monthly_net,
        effective_rate=effective_rate_percent(estimated, annual_gross),
        employee=employee,
        comparison=compare(creator, employee),
    )
