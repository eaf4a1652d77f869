"""Deduction vs direct VAT method selection."""

from decimal import Decimal

from vn_tax_calculator.core.calculators.vat import calculate_vat_deduction, calculate_vat_direct
from vn_tax_calculator.core.models.enums import BusinessCategory
from vn_tax_calculator.core.models.vat import (
    VATDeductionInput,
    VATDirectInput,
    VATMethod,
    VATMethodComparison,
)
from vn_tax_calculator.core.rules.flat_rates import VAT_MANDATORY_DEDUCTION_REVENUE
from vn_tax_calculator.shared.formatters import format_currency
from vn_tax_calculator.shared.validators import non_negative, safe_divide

# Purchases above this share of sales usually favour the deduction method
HIGH_INPUT_RATIO = Decimal("0.5")


def compare_vat_methods(
    data: VATDeductionInput, category: BusinessCategory = BusinessCategory.SERVICES
) -> VATMethodComparison:
    """Compare VAT payable under both methods and recommend the lower one.

    Args:
        data: Monthly sales and purchases
        category: Business line for the direct method rate

    Returns:
        VATMethodComparison (ties recommend the deduction method)
    """
    deduction = calculate_vat_deduction(data)
    direct = calculate_vat_direct(VATDirectInput(revenue=data.sales_revenue, category=category))

    deduction_total = deduction.vat_payable
    direct_total = direct.vat_payable
    notes: list[str] = []

    sales = non_negative(data.sales_revenue)
    if sales * 12 >= VAT_MANDATORY_DEDUCTION_REVENUE:
        notes.append("Doanh thu từ 1 tỷ/năm: bắt buộc áp dụng phương pháp khấu trừ.")

    input_ratio = safe_divide(non_negative(data.purchase_value), sales)
    if input_ratio > HIGH_INPUT_RATIO:
        notes.append(
            f"Tỷ lệ mua vào/bán ra cao ({input_ratio * 100:.0f}%): phương pháp khấu trừ thường có lợi hơn."
        )

    if deduction_total < direct_total:
        notes.append(
            f"Tiết kiệm {format_currency(direct_total - deduction_total)} khi dùng phương pháp khấu trừ."
        )
    elif direct_total < deduction_total:
        notes.append(
            f"Tiết kiệm {format_currency(deduction_total - direct_total)} khi dùng phương pháp trực tiếp."
        )

    if deduction.input_vat.tax_amount == 0:
        notes.append("Không có thuế đầu vào để khấu trừ: cân nhắc phương pháp trực tiếp nếu đủ điều kiện.")

    return VATMethodComparison(
        deduction=deduction,
        direct=direct,
        recommendation=VATMethod.DEDUCTION if deduction_total <= direct_total else VATMethod.DIRECT,
        savings=abs(deduction_total - direct_total),
        notes=notes,
    )
