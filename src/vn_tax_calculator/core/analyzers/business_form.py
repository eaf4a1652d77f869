"""Compare earning one annual income as employee, freelancer or household business."""

import logging
from decimal import Decimal

from vn_tax_calculator.core.analyzers.freelancer import FREELANCE_RULE
from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.calculators.household import calculate_household_business_tax
from vn_tax_calculator.core.calculators.insurance import compute_employer_insurance
from vn_tax_calculator.core.calculators.salary import calculate_salary_tax
from vn_tax_calculator.core.models.business_form import (
    BusinessForm,
    BusinessFormComparison,
    BusinessFormInput,
    BusinessFormOutcome,
    ProsCons,
)
from vn_tax_calculator.core.models.comparison import NetResult
from vn_tax_calculator.core.models.enums import BusinessCategory, LawVersion, RegionType
from vn_tax_calculator.core.models.household import (
    HouseholdBusiness,
    HouseholdBusinessTaxInput,
    HouseholdTaxMethod,
)
from vn_tax_calculator.core.models.salary import TaxableIncomeInput
from vn_tax_calculator.core.rules.flat_rates import (
    FREELANCER_SELF_INSURANCE_ANNUAL,
    HOUSEHOLD_THRESHOLD_2026,
)
from vn_tax_calculator.core.rules.tax_constants import get_law_constants
from vn_tax_calculator.shared.validators import ZERO, coerce_enum, non_negative, round_money

logger = logging.getLogger(__name__)

# Highest net wins; on equal nets the earlier form in this order is recommended
TIE_BREAK_ORDER = (BusinessForm.HOUSEHOLD, BusinessForm.FREELANCER, BusinessForm.EMPLOYEE)

EMPLOYEE_PROS_CONS = ProsCons(
    pros=[
        "Có BHXH, BHYT, BHTN đầy đủ",
        "Được hưởng lương hưu sau này",
        "Ổn định, ít rủi ro pháp lý",
        "Được bảo vệ bởi Luật Lao động",
        "Công ty chịu phần lớn chi phí bảo hiểm",
    ],
    cons=[
        "Thuế suất lũy tiến có thể lên tới 35%",
        "Ít linh hoạt về thời gian làm việc",
        "Không được khấu trừ chi phí kinh doanh",
        "Thu nhập bị giới hạn bởi mức lương",
    ],
)

FREELANCER_PROS_CONS = ProsCons(
    pros=[
        "Thuế suất cố định 10% (có thể thấp hơn lũy tiến)",
        "Linh hoạt về thời gian và địa điểm làm việc",
        "Có thể làm nhiều dự án cùng lúc",
        "Thủ tục đơn giản, không cần đăng ký kinh doanh",
    ],
    cons=[
        "Không có BHXH, BHTN",
        "Phải tự mua BHYT hoặc không có bảo hiểm",
        "Không có lương hưu từ BHXH",
        "Thu nhập không ổn định",
        "Rủi ro pháp lý nếu hợp đồng không rõ ràng",
    ],
)

HOUSEHOLD_EXEMPT_PROS_CONS = ProsCons(
    pros=[
        "Miễn thuế hoàn toàn (doanh thu ≤ 500 triệu/năm)",
        "Thủ tục đơn giản",
        "Không cần kế toán phức tạp",
        "Phù hợp kinh doanh nhỏ lẻ",
    ],
    cons=[
        "Không có BHXH, BHTN",
        "Giới hạn quy mô kinh doanh",
        "Khó mở rộng, khó vay vốn",
        "Không xuất được hóa đơn VAT",
    ],
)

HOUSEHOLD_PROS_CONS = ProsCons(
    pros=[
        "Thuế suất thấp (chỉ đóng trên phần vượt ngưỡng 500 triệu)",
        "Được xuất hóa đơn, ký hợp đồng chính thức",
        "Tự chủ kinh doanh hoàn toàn",
        "Có thể thuê nhân viên",
        "Chi phí tuân thủ thấp hơn công ty",
    ],
    cons=[
        "Không có BHXH, BHTN tự động",
        "Phải đóng thuế khoán hàng quý",
        "Trách nhiệm vô hạn với nợ",
        "Khó huy động vốn từ bên ngoài",
        "Phải tự quản lý sổ sách, thuế",
    ],
)


def calculate_employee_form(revenue: Decimal, region: RegionType, dependents: int) -> BusinessFormOutcome:
    """Revenue paid as twelve equal monthly salaries under the 2026 law."""
    monthly = round_money(revenue / 12)
    salary = calculate_salary_tax(
        TaxableIncomeInput(gross_income=monthly, dependents=dependents, region=region),
        LawVersion.LAW_2026,
    )
    employer = compute_employer_insurance(monthly, region, law=get_law_constants(LawVersion.LAW_2026))

    annual_tax = salary.tax_amount * 12
    annual_insurance = salary.insurance.total * 12
    return BusinessFormOutcome(
        form=BusinessForm.EMPLOYEE,
        net=NetResult(
            label="Làm công ăn lương",
            gross_income=revenue,
            tax=annual_tax,
            insurance=annual_insurance,
            net_income=revenue - annual_insurance - annual_tax,
        ),
        pit=annual_tax,
        employer_insurance=employer.total * 12,
        pros_cons=EMPLOYEE_PROS_CONS,
    )


def calculate_freelancer_form(revenue: Decimal, has_self_insurance: bool) -> BusinessFormOutcome:
    """Revenue received as freelance payments with 10% withheld."""
    tax = evaluate_rule(FREELANCE_RULE, revenue)
    insurance = FREELANCER_SELF_INSURANCE_ANNUAL if has_self_insurance else ZERO
    return BusinessFormOutcome(
        form=BusinessForm.FREELANCER,
        net=NetResult(
            label="Freelancer",
            gross_income=revenue,
            tax=tax.tax_amount,
            insurance=insurance,
            net_income=tax.net_amount - insurance,
        ),
        pit=tax.tax_amount,
        pros_cons=FREELANCER_PROS_CONS,
    )


def calculate_household_form(
    revenue: Decimal, category: BusinessCategory, has_self_insurance: bool
) -> BusinessFormOutcome:
    """Revenue earned as one licensed household business (2026, khoán method)."""
    insurance = FREELANCER_SELF_INSURANCE_ANNUAL if has_self_insurance else ZERO
    business = HouseholdBusiness(
        name="Hoạt động kinh doanh",
        category=category,
        monthly_revenue=revenue / 12,
        has_business_license=True,
    )
    result = calculate_household_business_tax(
        HouseholdBusinessTaxInput(
            businesses=[business],
            law_version=LawVersion.LAW_2026,
            tax_method=HouseholdTaxMethod.PRESUMPTIVE,
        )
    )
    is_exempt = revenue <= HOUSEHOLD_THRESHOLD_2026
    pit = ZERO if is_exempt else result.total_pit
    vat = ZERO if is_exempt else result.total_vat
    return BusinessFormOutcome(
        form=BusinessForm.HOUSEHOLD,
        net=NetResult(
            label="Hộ kinh doanh",
            gross_income=revenue,
            tax=pit + vat,
            insurance=insurance,
            net_income=revenue - pit - vat - insurance,
        ),
        pit=pit,
        vat=vat,
        is_exempt=is_exempt,
        pros_cons=HOUSEHOLD_EXEMPT_PROS_CONS if is_exempt else HOUSEHOLD_PROS_CONS,
    )


def determine_recommendation(outcomes: list[BusinessFormOutcome]) -> BusinessForm:
    """Form with the highest net; ties go household, then freelancer, then employee."""
    by_form = {o.form: o for o in outcomes}
    best = max(o.net.net_income for o in outcomes)
    for form in TIE_BREAK_ORDER:
        if form in by_form and by_form[form].net.net_income == best:
            return form
    return BusinessForm.EMPLOYEE


def _millions(value: Decimal) -> str:
    return f"{round_money(value / 1_000_000)} triệu"


def _summary(
    recommendation: BusinessForm,
    revenue: Decimal,
    employee: BusinessFormOutcome,
    freelancer: BusinessFormOutcome,
    household: BusinessFormOutcome,
) -> str:
    if recommendation == BusinessForm.HOUSEHOLD:
        if household.is_exempt:
            return (
                f"Với doanh thu {_millions(revenue)}/năm, bạn được miễn thuế nếu đăng ký "
                "Hộ kinh doanh. Đây là lựa chọn tối ưu nhất."
            )
        savings = household.net.net_income - employee.net.net_income
        return (
            f"Với doanh thu {_millions(revenue)}/năm, Hộ kinh doanh có lợi nhất. "
            f"Bạn tiết kiệm được {_millions(savings)} so với làm công ăn lương."
        )
    if recommendation == BusinessForm.FREELANCER:
        savings = freelancer.net.net_income - employee.net.net_income
        return (
            f"Với thu nhập {_millions(revenue)}/năm, làm Freelancer có lợi hơn. "
            f"Bạn tiết kiệm được {_millions(savings)} so với làm công ăn lương, "
            "nhưng cần cân nhắc việc không có BHXH."
        )
    return (
        f"Với thu nhập {_millions(revenue)}/năm, làm công ăn lương có thể là lựa chọn tốt "
        "nhờ các quyền lợi BHXH."
    )


def compare_business_forms(data: BusinessFormInput) -> BusinessFormComparison:
    """Compare the annual net of the three ways to earn the same revenue.

    Args:
        data: Annual revenue, business line, region, dependents and
            whether voluntary health insurance is bought outside employment

    Returns:
        BusinessFormComparison with the recommended form and a summary
    """
    revenue = non_negative(data.annual_revenue, "annual_revenue")
    region = coerce_enum(RegionType, data.region, RegionType.REGION_1)
    category = coerce_enum(BusinessCategory, data.business_category, BusinessCategory.SERVICES)

    employee = calculate_employee_form(revenue, region, data.dependents)
    freelancer = calculate_freelancer_form(revenue, data.has_self_insurance)
    household = calculate_household_form(revenue, category, data.has_self_insurance)

    recommendation = determine_recommendation([employee, freelancer, household])
    logger.debug(
        "business forms for %s: employee=%s freelancer=%s household=%s -> %s",
        revenue,
        employee.net.net_income,
        freelancer.net.net_income,
        household.net.net_income,
        recommendation.value,
    )
    return BusinessFormComparison(
        employee=employee,
        freelancer=freelancer,
        household=household,
        recommendation=recommendation,
        summary=_summary(recommendation, revenue, employee, freelancer, household),
    )
