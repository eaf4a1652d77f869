"""Tests for the VAT calculator and method comparison."""

from datetime import date
from decimal import Decimal

from vn_tax_calculator.core.analyzers.vat_comparison import compare_vat_methods
from vn_tax_calculator.core.calculators.vat import (
    calculate_vat_deduction,
    calculate_vat_direct,
    check_vat_refund_eligibility,
    check_vat_registration,
    get_effective_vat_rate,
    get_vat_rate_for_category,
    is_vat_reduction_period,
)
from vn_tax_calculator.core.models.enums import BusinessCategory
from vn_tax_calculator.core.models.vat import (
    VATDeductionInput,
    VATDirectInput,
    VATMethod,
    VATRateType,
)


class TestVATRates:
    """Tests for rate resolution."""

    def test_reduction_window(self):
        """The 8% rate applies from 2024 through 2026."""
        assert is_vat_reduction_period(date(2024, 1, 1))
        assert is_vat_reduction_period(date(2026, 12, 31))
        assert not is_vat_reduction_period(date(2027, 1, 1))
        assert not is_vat_reduction_period(None)

    def test_standard_rate_by_date(self):
        """Without a date the statutory 10% applies."""
        assert get_effective_vat_rate(VATRateType.STANDARD) == Decimal("0.10")
        assert get_effective_vat_rate(VATRateType.STANDARD, date(2025, 6, 1)) == Decimal("0.08")

    def test_other_classes(self):
        """Special, zero and exempt classes."""
        assert get_effective_vat_rate(VATRateType.SPECIAL) == Decimal("0.05")
        assert get_effective_vat_rate(VATRateType.ZERO) == 0
        assert get_effective_vat_rate(VATRateType.EXEMPT) is None

    def test_category_lookup(self):
        """Descriptions map to their rate class."""
        assert get_vat_rate_for_category("dịch vụ giáo dục").rate is None
        assert get_vat_rate_for_category("Vận tải quốc tế").rate == 0
        assert get_vat_rate_for_category("Sách, báo, tạp chí").rate == Decimal("0.05")
        assert get_vat_rate_for_category("Điện tử, điện máy").rate == Decimal("0.10")


class TestDeductionMethod:
    """Tests for the deduction method."""

    def test_reduced_rate_period(self):
        """100 triệu sales and 60 triệu purchases at 8%."""
        result = calculate_vat_deduction(
            VATDeductionInput(
                sales_revenue=Decimal("100000000"),
                purchase_value=Decimal("60000000"),
                calculation_date=date(2025, 6, 1),
            )
        )
        assert result.output_vat.tax_amount == Decimal("8000000")
        assert result.input_vat.tax_amount == Decimal("4800000")
        assert result.vat_payable == Decimal("3200000")
        assert result.is_reduced_rate_applied

    def test_statutory_rate(self):
        """No date: 10%."""
        result = calculate_vat_deduction(
            VATDeductionInput(sales_revenue=Decimal("100000000"), purchase_value=Decimal("60000000"))
        )
        assert result.vat_payable == Decimal("4000000")
        assert result.is_reduced_rate_applied is False

    def test_excess_input_is_refundable(self):
        """Purchases larger than sales leave refundable VAT."""
        result = calculate_vat_deduction(
            VATDeductionInput(sales_revenue=Decimal("50000000"), purchase_value=Decimal("80000000"))
        )
        assert result.vat_payable == 0
        assert result.vat_refundable == Decimal("3000000")

    def test_exempt_output(self):
        """Goods not subject to VAT produce no output tax."""
        result = calculate_vat_deduction(
            VATDeductionInput(sales_revenue=Decimal("100000000"), output_rate=VATRateType.EXEMPT)
        )
        assert result.output_vat.is_exempt
        assert result.applied_output_rate is None


class TestDirectMethod:
    """Tests for the direct method."""

    def test_services(self):
        """5% of revenue for services."""
        result = calculate_vat_direct(VATDirectInput(revenue=Decimal("100000000")))
        assert result.vat_payable == Decimal("5000000")
        assert result.requires_registration

    def test_below_registration_threshold(self):
        """Annual revenue up to 200 triệu pays nothing."""
        result = calculate_vat_direct(
            VATDirectInput(
                revenue=Decimal("15000000"),
                category=BusinessCategory.DISTRIBUTION,
                annual_revenue=Decimal("180000000"),
            )
        )
        assert result.vat.is_exempt
        assert result.vat_payable == 0


class TestRefundAndRegistration:
    """Tests for refund eligibility and registration checks."""

    def test_nothing_to_refund(self):
        """No excess input VAT means no refund."""
        assert check_vat_refund_eligibility(Decimal("0"), consecutive_months=12).is_eligible is False

    def test_twelve_months(self):
        """Twelve consecutive months of excess input VAT."""
        check = check_vat_refund_eligibility(Decimal("5000000"), consecutive_months=12)
        assert check.is_eligible
        assert check.refundable_amount == Decimal("5000000")

    def test_export_ratio(self):
        """Exports of at least 60% of revenue qualify."""
        check = check_vat_refund_eligibility(
            Decimal("5000000"),
            has_export_activity=True,
            export_revenue=Decimal("70000000"),
            total_revenue=Decimal("100000000"),
        )
        assert check.is_eligible
        low = check_vat_refund_eligibility(
            Decimal("5000000"),
            has_export_activity=True,
            export_revenue=Decimal("50000000"),
            total_revenue=Decimal("100000000"),
        )
        assert low.is_eligible is False

    def test_registration(self):
        """Registration above 200 triệu, deduction mandatory from 1 tỷ."""
        assert check_vat_registration(Decimal("150000000")).requires_registration is False
        small = check_vat_registration(Decimal("500000000"))
        assert small.recommended_method == VATMethod.DIRECT
        large = check_vat_registration(Decimal("2000000000"))
        assert large.recommended_method == VATMethod.DEDUCTION


class TestVATMethodComparison:
    """Tests for deduction vs direct comparison."""

    def test_deduction_cheaper(self):
        """3.2 triệu by deduction against 5 triệu direct."""
        comparison = compare_vat_methods(
            VATDeductionInput(
                sales_revenue=Decimal("100000000"),
                purchase_value=Decimal("60000000"),
                calculation_date=date(2025, 6, 1),
            )
        )
        assert comparison.recommendation == VATMethod.DEDUCTION
        assert comparison.savings == Decimal("1800000")
        assert comparison.notes

    def test_direct_cheaper_without_purchases(self):
        """Distribution with no input VAT favours the direct method."""
        comparison = compare_vat_methods(
            VATDeductionInput(sales_revenue=Decimal("50000000")),
            BusinessCategory.DISTRIBUTION,
        )
        assert comparison.direct.vat_payable == Decimal("500000")
        assert comparison.recommendation == VATMethod.DIRECT
        assert comparison.savings == Decimal("4500000")
