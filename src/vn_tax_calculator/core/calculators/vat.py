"""VAT calculator: deduction method, direct method, registration and refunds.

Căn cứ: Luật Thuế GTGT 48/2024/QH15, Nghị định 181/2025/NĐ-CP,
Nghị quyết 204/2025/QH15 (giảm 2% thuế suất 10% đến 31/12/2026).
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.enums import BusinessCategory
from vn_tax_calculator.core.models.flat_rate import FlatRateRule, ThresholdMode
from vn_tax_calculator.core.models.vat import (
    VATCategoryRate,
    VATDeductionInput,
    VATDeductionResult,
    VATDirectInput,
    VATDirectResult,
    VATMethod,
    VATRateType,
    VATRefundCheck,
    VATRefundCondition,
    VATRegistrationCheck,
)
from vn_tax_calculator.core.rules.flat_rates import (
    DIRECT_VAT_RATES,
    VAT_MANDATORY_DEDUCTION_REVENUE,
    VAT_REDUCED_RATE,
    VAT_REDUCTION_END,
    VAT_REDUCTION_START,
    VAT_REFUND_CONSECUTIVE_MONTHS,
    VAT_REFUND_EXPORT_RATIO,
    VAT_REGISTRATION_THRESHOLD,
    VAT_SPECIAL_RATE,
    VAT_STANDARD_RATE,
)
from vn_tax_calculator.shared.validators import (
    ZERO,
    coerce_enum,
    non_negative,
    non_negative_int,
    safe_divide,
)

logger = logging.getLogger(__name__)

NOT_SUBJECT_TO_VAT = "Hàng hóa, dịch vụ không chịu thuế GTGT"

# Goods and services by rate class (checked in this order)
EXEMPT_ITEMS = (
    "Sản phẩm trồng trọt, chăn nuôi, thủy sản chưa qua chế biến",
    "Giống vật nuôi, giống cây trồng",
    "Bảo hiểm nhân thọ, bảo hiểm sức khỏe",
    "Dịch vụ tài chính, ngân hàng, chứng khoán",
    "Dịch vụ y tế, thú y",
    "Dịch vụ giáo dục, đào tạo",
    "Phát sóng truyền thanh, truyền hình",
    "Vận tải công cộng bằng xe buýt",
    "Chuyển quyền sử dụng đất",
    "Nhà ở xã hội",
)

ZERO_RATE_ITEMS = (
    "Hàng hóa, dịch vụ xuất khẩu",
    "Vận tải quốc tế",
    "Tái bảo hiểm ra nước ngoài",
    "Chuyển giao công nghệ ra nước ngoài",
)

SPECIAL_RATE_ITEMS = (
    "Nước sạch phục vụ sản xuất và sinh hoạt",
    "Phân bón, quặng để sản xuất phân bón",
    "Thức ăn gia súc, gia cầm",
    "Máy móc, thiết bị chuyên dùng cho nông nghiệp",
    "Đường, phụ phẩm trong sản xuất đường",
    "Dịch vụ khoa học và công nghệ",
    "Thiết bị, dụng cụ y tế",
    "Sách, báo, tạp chí",
)

STANDARD_ITEMS = (
    "Hàng hóa, dịch vụ thông thường",
    "Điện tử, điện máy",
    "Dịch vụ tư vấn, phần mềm",
    "Nhà hàng, khách sạn",
)


def is_vat_reduction_period(on_date: Optional[date]) -> bool:
    """Check whether the 2% VAT reduction applies on a date."""
    if on_date is None:
        return False
    return VAT_REDUCTION_START <= on_date <= VAT_REDUCTION_END


def get_effective_vat_rate(rate_type: VATRateType, on_date: Optional[date] = None) -> Optional[Decimal]:
    """Resolve a rate class to a rate (None when not subject to VAT).

    Args:
        rate_type: Statutory rate class
        on_date: Transaction date; the 10% class becomes 8% inside the reduction window

    Returns:
        Rate as fraction or None for exempt goods
    """
    rate_type = coerce_enum(VATRateType, rate_type, VATRateType.STANDARD)
    if rate_type == VATRateType.STANDARD:
        return VAT_REDUCED_RATE if is_vat_reduction_period(on_date) else VAT_STANDARD_RATE
    return {
        VATRateType.REDUCED: VAT_REDUCED_RATE,
        VATRateType.SPECIAL: VAT_SPECIAL_RATE,
        VATRateType.ZERO: ZERO,
        VATRateType.EXEMPT: None,
    }[rate_type]


def _not_subject(context: object) -> str:
    return NOT_SUBJECT_TO_VAT


def _vat_rule(name: str, rate: Optional[Decimal]) -> FlatRateRule:
    if rate is None:
        return FlatRateRule(name=name, rate=ZERO, exemption_predicate=_not_subject)
    return FlatRateRule(name=name, rate=rate)


def requires_vat_registration(annual_revenue: Decimal) -> bool:
    return non_negative(annual_revenue) > VAT_REGISTRATION_THRESHOLD


def calculate_vat_deduction(data: VATDeductionInput) -> VATDeductionResult:
    """Deduction method: VAT payable = output VAT - input VAT.

    Args:
        data: Monthly sales, purchases and their rate classes

    Returns:
        VATDeductionResult with payable and refundable amounts
    """
    output_rate = get_effective_vat_rate(data.output_rate, data.calculation_date)
    input_rate = get_effective_vat_rate(data.input_rate, data.calculation_date)
    sales = non_negative(data.sales_revenue, "sales_revenue")

    output_vat = evaluate_rule(_vat_rule("output_vat", output_rate), sales)
    input_vat = evaluate_rule(_vat_rule("input_vat", input_rate), data.purchase_value)

    reduced = data.output_rate == VATRateType.STANDARD and output_rate == VAT_REDUCED_RATE
    logger.debug("VAT deduction: output=%s input=%s", output_vat.tax_amount, input_vat.tax_amount)

    return VATDeductionResult(
        output_vat=output_vat,
        input_vat=input_vat,
        applied_output_rate=output_rate,
        applied_input_rate=input_rate,
        is_reduced_rate_applied=reduced,
        requires_registration=requires_vat_registration(sales * 12),
    )


def calculate_vat_direct(data: VATDirectInput) -> VATDirectResult:
    """Direct method: VAT = revenue x category rate.

    Businesses whose annual revenue does not exceed the registration
    threshold are exempt.
    """
    category = coerce_enum(BusinessCategory, data.category, BusinessCategory.SERVICES)
    revenue = non_negative(data.revenue, "revenue")
    annual = revenue * 12 if data.annual_revenue is None else non_negative(data.annual_revenue)

    def below_threshold(context: object) -> Optional[str]:
        if annual <= VAT_REGISTRATION_THRESHOLD:
            return "Doanh thu không vượt 200 triệu/năm - không phải nộp thuế GTGT"
        return None

    rule = FlatRateRule(
        name=f"direct_vat_{category.value}",
        rate=DIRECT_VAT_RATES[category],
        threshold_mode=ThresholdMode.NONE,
        exemption_predicate=below_threshold,
    )

    return VATDirectResult(
        category=category,
        vat=evaluate_rule(rule, revenue),
        requires_registration=requires_vat_registration(annual),
    )


def check_vat_refund_eligibility(
    vat_refundable: Decimal,
    consecutive_months: int = 0,
    has_export_activity: bool = False,
    has_investment_project: bool = False,
    export_revenue: Decimal = ZERO,
    total_revenue: Decimal = ZERO,
) -> VATRefundCheck:
    """Check whether excess input VAT can be refunded.

    Eligible when any of: 12 consecutive months of excess input VAT,
    exports of at least 60% of revenue, or an investment project.
    """
    refundable = non_negative(vat_refundable, "vat_refundable")
    months = non_negative_int(consecutive_months, "consecutive_months")
    export_ratio = safe_divide(non_negative(export_revenue), non_negative(total_revenue))

    has_12_months = months >= VAT_REFUND_CONSECUTIVE_MONTHS
    has_high_export = has_export_activity and export_ratio >= VAT_REFUND_EXPORT_RATIO

    conditions = [
        VATRefundCondition(
            condition="Thuế GTGT đầu vào chưa khấu trừ hết 12 tháng liên tiếp",
            met=has_12_months,
            description=(
                f"Đã đủ {months} tháng liên tiếp"
                if has_12_months
                else f"Mới {months} tháng (cần {VAT_REFUND_CONSECUTIVE_MONTHS} tháng)"
            ),
        ),
        VATRefundCondition(
            condition="Xuất khẩu hàng hóa, dịch vụ với tỷ lệ >= 60% doanh thu",
            met=has_high_export,
            description=(
                f"Tỷ lệ xuất khẩu: {export_ratio * 100:.1f}%"
                if has_export_activity
                else "Không có hoạt động xuất khẩu"
            ),
        ),
        VATRefundCondition(
            condition="Có dự án đầu tư mới đang trong giai đoạn đầu tư",
            met=has_investment_project,
            description=(
                "Có dự án đầu tư đang triển khai" if has_investment_project else "Không có dự án đầu tư"
            ),
        ),
    ]

    if refundable == 0:
        return VATRefundCheck(
            is_eligible=False, reason="Không có thuế GTGT âm để hoàn.", conditions=conditions
        )

    if has_12_months:
        reason = "Đủ điều kiện hoàn thuế do thuế đầu vào chưa khấu trừ hết 12 tháng liên tiếp."
    elif has_high_export:
        reason = "Đủ điều kiện hoàn thuế xuất khẩu."
    elif has_investment_project:
        reason = "Đủ điều kiện hoàn thuế dự án đầu tư."
    else:
        return VATRefundCheck(
            is_eligible=False,
            reason="Chưa đủ điều kiện hoàn thuế. Số thuế âm được khấu trừ vào kỳ sau.",
            conditions=conditions,
        )

    return VATRefundCheck(
        is_eligible=True, reason=reason, conditions=conditions, refundable_amount=refundable
    )


def check_vat_registration(annual_revenue: Decimal, has_vat_invoices: bool = False) -> VATRegistrationCheck:
    """Check whether VAT registration is required and which method fits."""
    revenue = non_negative(annual_revenue, "annual_revenue")
    notes: list[str] = []
    recommended: Optional[VATMethod] = None
    required = requires_vat_registration(revenue)

    if required and revenue >= VAT_MANDATORY_DEDUCTION_REVENUE:
        notes.append("Doanh thu từ 1 tỷ/năm: bắt buộc áp dụng phương pháp khấu trừ.")
        recommended = VATMethod.DEDUCTION
    elif required:
        notes.append("Doanh thu trên 200 triệu/năm: phải đăng ký nộp thuế GTGT.")
        if has_vat_invoices:
            notes.append("Có hóa đơn đầu vào: nên dùng phương pháp khấu trừ.")
            recommended = VATMethod.DEDUCTION
        else:
            notes.append("Không có hóa đơn đầu vào: có thể cân nhắc phương pháp trực tiếp.")
            recommended = VATMethod.DIRECT
    else:
        notes.append("Doanh thu không vượt 200 triệu/năm: không bắt buộc đăng ký thuế GTGT.")

    return VATRegistrationCheck(
        requires_registration=required,
        annual_revenue=revenue,
        threshold=VAT_REGISTRATION_THRESHOLD,
        recommended_method=recommended,
        notes=notes,
    )


def get_vat_rate_for_category(description: str, on_date: Optional[date] = None) -> VATCategoryRate:
    """Match a goods/services description to its VAT rate class.

    Matching is a case-insensitive substring search against the item
    lists, checked from exempt to standard.
    """
    needle = description.strip().lower()

    def matches(items: tuple[str, ...]) -> bool:
        return bool(needle) and any(needle in item.lower() or item.lower() in needle for item in items)

    if matches(EXEMPT_ITEMS):
        return VATCategoryRate(rate=None, category="Không chịu thuế", items=EXEMPT_ITEMS)
    if matches(ZERO_RATE_ITEMS):
        return VATCategoryRate(rate=ZERO, category="0% - Xuất khẩu", items=ZERO_RATE_ITEMS)
    if matches(SPECIAL_RATE_ITEMS):
        return VATCategoryRate(rate=VAT_SPECIAL_RATE, category="5% - Thiết yếu", items=SPECIAL_RATE_ITEMS)

    rate = get_effective_vat_rate(VATRateType.STANDARD, on_date)
    label = "8% - Giảm" if rate == VAT_REDUCED_RATE else "10% - Tiêu chuẩn"
    return VATCategoryRate(rate=rate, category=label, items=STANDARD_ITEMS)
