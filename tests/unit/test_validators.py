"""Tests for validators and formatters."""

from decimal import Decimal

import pytest

from vn_tax_calculator.core.models.enums import RegionType
from vn_tax_calculator.shared.exceptions import CurrencyParseError
from vn_tax_calculator.shared.formatters import (
    format_currency,
    format_number,
    format_percent,
    format_variation,
)
from vn_tax_calculator.shared.validators import (
    MAX_MONTHLY_INCOME,
    coerce_enum,
    effective_rate_percent,
    non_negative,
    non_negative_int,
    parse_currency_input,
    round_money,
    round_to,
    safe_divide,
    to_decimal,
)


class TestNumericGuards:
    """Tests for clamping and rounding helpers."""

    def test_to_decimal(self):
        """Loose input becomes Decimal; junk becomes zero."""
        assert to_decimal("1.5") == Decimal("1.5")
        assert to_decimal(2) == Decimal("2")
        assert to_decimal(None) == 0
        assert to_decimal("abc") == 0
        assert to_decimal(float("nan")) == 0

    def test_non_negative(self):
        """Negative values are clamped to zero."""
        assert non_negative(Decimal("-5")) == 0
        assert non_negative(Decimal("5")) == Decimal("5")
        assert non_negative_int("-3") == 0
        assert non_negative_int(Decimal("2")) == 2

    def test_round_money_half_up(self):
        """Rounding to whole VND goes half-up."""
        assert round_money(Decimal("0.5")) == Decimal("1")
        assert round_money(Decimal("2.5")) == Decimal("3")
        assert round_money(Decimal("2.49")) == Decimal("2")
        assert round_to(Decimal("12.345"), 2) == Decimal("12.35")

    def test_safe_divide(self):
        """Division by zero yields zero."""
        assert safe_divide(Decimal("10"), Decimal("0")) == 0
        assert safe_divide(Decimal("10"), Decimal("4")) == Decimal("2.5")

    def test_effective_rate(self):
        """Percent with two decimals, zero for an empty base."""
        assert effective_rate_percent(Decimal("635000"), Decimal("30000000")) == Decimal("2.12")
        assert effective_rate_percent(Decimal("100"), Decimal("0")) == 0

    def test_coerce_enum(self):
        """Unknown enum values fall back to the default."""
        assert coerce_enum(RegionType, 2, RegionType.REGION_1) == RegionType.REGION_2
        assert coerce_enum(RegionType, 9, RegionType.REGION_1) == RegionType.REGION_1
        assert coerce_enum(RegionType, RegionType.REGION_3, RegionType.REGION_1) == RegionType.REGION_3


class TestParseCurrencyInput:
    """Tests for free-text currency parsing."""

    def test_grouped_input(self):
        """Dots and commas as thousands separators are ignored."""
        assert parse_currency_input("25.000.000").value == Decimal("25000000")
        assert parse_currency_input("25,000,000 đ").value == Decimal("25000000")
        assert parse_currency_input("25.000.000").issues == []

    def test_decimal_part_dropped(self):
        """A trailing decimal part is reported and discarded."""
        parsed = parse_currency_input("1.500.000,50")
        assert parsed.value == Decimal("1500000")
        assert "decimal" in parsed.issues

    def test_negative_reported(self):
        """A minus sign is reported; the digits are kept."""
        parsed = parse_currency_input("-5000000")
        assert parsed.value == Decimal("5000000")
        assert "negative" in parsed.issues

    def test_overflow_capped(self):
        """Values above the maximum are capped."""
        parsed = parse_currency_input("99999999999")
        assert parsed.value == MAX_MONTHLY_INCOME
        assert "overflow" in parsed.issues

    def test_no_digits(self):
        """Text without digits cannot be parsed."""
        with pytest.raises(CurrencyParseError):
            parse_currency_input("abc")


class TestFormatters:
    """Tests for display formatting."""

    def test_format_number(self):
        """Thousands grouped with dots."""
        assert format_number(Decimal("1234567")) == "1.234.567"
        assert format_number(0) == "0"
        assert format_number(Decimal("-1234.5")) == "-1.235"

    def test_format_currency(self):
        """Đồng symbol after the amount."""
        assert format_currency(Decimal("26215000")) == "26.215.000 ₫"
        assert format_currency(1000, symbol="đ") == "1.000 đ"

    def test_format_percent(self):
        """Fractions rendered with a decimal comma."""
        assert format_percent(Decimal("0.105")) == "10,5%"
        assert format_percent(Decimal("0.35"), decimals=0) == "35%"

    def test_format_variation(self):
        """Positive variations carry a plus sign."""
        assert format_variation(Decimal("15.5")) == "+15,5%"
        assert format_variation(Decimal("-3.2")) == "-3,2%"
        assert format_variation(Decimal("15.5"), show_sign=False) == "15,5%"
