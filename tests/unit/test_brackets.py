"""Tests for the progressive engine, rule tables and flat-rate evaluator."""

from dataclasses import replace
from decimal import Decimal

import pytest

from vn_tax_calculator.core.calculators.brackets import (
    calculate_bracket_breakdown,
    compute_progressive_tax,
    get_marginal_rate,
    scale_brackets,
)
from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule, sum_tax
from vn_tax_calculator.core.models.brackets import TaxBracket
from vn_tax_calculator.core.models.enums import RegionType
from vn_tax_calculator.core.models.flat_rate import FlatRateRule, ThresholdMode
from vn_tax_calculator.core.rules.tax_constants import (
    BRACKETS_2025,
    BRACKETS_2026,
    get_law_constants,
    validate_brackets,
)
from vn_tax_calculator.shared.exceptions import ConfigurationError


class TestProgressiveTax:
    """Tests for compute_progressive_tax and the bracket breakdown."""

    def test_zero_and_negative_income(self):
        """Nothing taxable means no tax."""
        assert compute_progressive_tax(Decimal("0"), BRACKETS_2026) == 0
        assert compute_progressive_tax(Decimal("-5000000"), BRACKETS_2026) == 0
        assert calculate_bracket_breakdown(Decimal("0"), BRACKETS_2026) == []

    def test_2026_two_brackets(self):
        """11.35 triệu: 10 triệu at 5% + 1.35 triệu at 10%."""
        assert compute_progressive_tax(Decimal("11350000"), BRACKETS_2026) == Decimal("635000")

    def test_2025_three_brackets(self):
        """15.85 triệu: 250k + 500k + 877.5k."""
        assert compute_progressive_tax(Decimal("15850000"), BRACKETS_2025) == Decimal("1627500")

    def test_top_bracket(self):
        """Income above 100 triệu reaches the 35% bracket."""
        tax = compute_progressive_tax(Decimal("120000000"), BRACKETS_2026)
        # 0.5 + 2 + 6 + 12 + 7 triệu
        assert tax == Decimal("27500000")

    def test_bracket_boundary_goes_to_lower_bracket(self):
        """Exactly 10 triệu is fully in the first bracket."""
        breakdown = calculate_bracket_breakdown(Decimal("10000000"), BRACKETS_2026)
        assert len(breakdown) == 1
        assert breakdown[0].tax == Decimal("500000")
        assert get_marginal_rate(Decimal("10000000"), BRACKETS_2026) == Decimal("0.05")

    def test_breakdown_sums_to_taxable(self):
        """Amounts across brackets add up to the taxable income."""
        taxable = Decimal("87654321")
        breakdown = calculate_bracket_breakdown(taxable, BRACKETS_2025)
        assert sum(line.taxable_in_bracket for line in breakdown) == taxable
        assert [line.index for line in breakdown] == list(range(1, len(breakdown) + 1))

    def test_tax_is_monotonic(self):
        """More taxable income never means less tax."""
        previous = Decimal("0")
        for millions in range(0, 200, 3):
            tax = compute_progressive_tax(Decimal(millions) * 1_000_000, BRACKETS_2026)
            assert tax >= previous
            previous = tax

    def test_average_rate_is_non_decreasing(self):
        """Tax / income never falls as income rises."""
        previous = Decimal("0")
        for millions in range(1, 200, 7):
            income = Decimal(millions) * 1_000_000
            ratio = compute_progressive_tax(income, BRACKETS_2025) / income
            assert ratio >= previous
            previous = ratio

    def test_no_jump_at_boundaries(self):
        """Crossing a boundary only adds the upper rate on the excess."""
        for bracket, upper in zip(BRACKETS_2026, BRACKETS_2026[1:]):
            edge = bracket.max
            below = compute_progressive_tax(edge - 1000, BRACKETS_2026)
            at = compute_progressive_tax(edge, BRACKETS_2026)
            above = compute_progressive_tax(edge + 1000, BRACKETS_2026)
            assert at - below == bracket.rate * 1000
            assert above - at == upper.rate * 1000

    def test_marginal_rate(self):
        """Marginal rate follows the bracket containing the income."""
        assert get_marginal_rate(Decimal("0"), BRACKETS_2026) == 0
        assert get_marginal_rate(Decimal("45000000"), BRACKETS_2026) == Decimal("0.20")
        assert get_marginal_rate(Decimal("500000000"), BRACKETS_2025) == Decimal("0.35")

    def test_scale_brackets_to_annual(self):
        """Annual schedule is the monthly one times 12."""
        annual = scale_brackets(BRACKETS_2026, 12)
        assert annual[0].max == Decimal("120000000")
        assert annual[-1].max is None
        assert compute_progressive_tax(Decimal("120000000"), annual) == Decimal("6000000")


class TestLawTables:
    """Tests for the law-version rule tables."""

    def test_deductions_per_version(self, law_2025, law_2026):
        """Personal and dependent deductions differ by version."""
        assert law_2025.personal_deduction == Decimal("11000000")
        assert law_2025.dependent_deduction == Decimal("4400000")
        assert law_2026.personal_deduction == Decimal("15500000")
        assert law_2026.dependent_deduction == Decimal("6200000")
        assert len(law_2025.brackets) == 7
        assert len(law_2026.brackets) == 5

    def test_unknown_version_raises(self):
        """Selecting an unsupported version is a configuration error."""
        with pytest.raises(ConfigurationError):
            get_law_constants("2030")

    def test_insurance_caps(self, law_2026):
        """BHXH/BHYT cap at 20 x lương cơ sở, BHTN at 20 x regional minimum."""
        assert law_2026.social_insurance_cap == Decimal("46800000")
        assert law_2026.unemployment_insurance_cap(RegionType.REGION_1) == Decimal("106200000")

    def test_validate_brackets_rejects_gap(self):
        """A schedule with a hole is rejected."""
        brackets = (
            TaxBracket(min=Decimal("0"), max=Decimal("10"), rate=Decimal("0.05")),
            TaxBracket(min=Decimal("20"), max=None, rate=Decimal("0.10")),
        )
        with pytest.raises(ConfigurationError):
            validate_brackets(brackets)

    def test_validate_brackets_rejects_bounded_top(self):
        """The last bracket must be open-ended."""
        brackets = (TaxBracket(min=Decimal("0"), max=Decimal("10"), rate=Decimal("0.05")),)
        with pytest.raises(ConfigurationError):
            validate_brackets(brackets)


class TestFlatRateRule:
    """Tests for the generic flat-rate evaluator."""

    def test_plain_rate(self):
        """NONE mode taxes the full amount."""
        result = evaluate_rule(FlatRateRule(name="x", rate=Decimal("0.05")), Decimal("10000000"))
        assert result.tax_amount == Decimal("500000")
        assert result.net_amount == Decimal("9500000")
        assert result.exemption_reason is None
        assert result.is_exempt is False

    def test_exempt_below(self):
        """EXEMPT_BELOW taxes everything once the threshold is reached."""
        rule = FlatRateRule(
            name="x",
            rate=Decimal("0.10"),
            threshold_mode=ThresholdMode.EXEMPT_BELOW,
            threshold=Decimal("2000000"),
            below_threshold_reason="dưới ngưỡng",
        )
        below = evaluate_rule(rule, Decimal("1999999"))
        assert below.is_exempt
        assert below.exemption_reason == "dưới ngưỡng"
        at = evaluate_rule(rule, Decimal("2000000"))
        assert at.tax_amount == Decimal("200000")
        assert at.taxable_amount == Decimal("2000000")

    def test_excess_over(self):
        """EXCESS_OVER taxes only the part above the threshold."""
        rule = FlatRateRule(
            name="x",
            rate=Decimal("0.10"),
            threshold_mode=ThresholdMode.EXCESS_OVER,
            threshold=Decimal("10000000"),
        )
        assert evaluate_rule(rule, Decimal("10000000")).is_exempt
        result = evaluate_rule(rule, Decimal("15000000"))
        assert result.taxable_amount == Decimal("5000000")
        assert result.tax_amount == Decimal("500000")

    def test_predicate_checked_first(self):
        """An exemption predicate wins over any threshold."""
        rule = FlatRateRule(
            name="x",
            rate=Decimal("0.10"),
            exemption_predicate=lambda ctx: "miễn" if ctx else None,
        )
        assert evaluate_rule(rule, Decimal("100000000"), True).exemption_reason == "miễn"
        assert evaluate_rule(rule, Decimal("100000000"), False).tax_amount == Decimal("10000000")

    def test_exempt_differs_from_zero_tax(self):
        """A zero rate gives zero tax without an exemption reason."""
        result = evaluate_rule(FlatRateRule(name="x", rate=Decimal("0")), Decimal("1000"))
        assert result.tax_amount == 0
        assert result.is_exempt is False

    def test_negative_amount_clamped(self):
        """Negative input is treated as zero."""
        result = evaluate_rule(FlatRateRule(name="x", rate=Decimal("0.10")), Decimal("-100"))
        assert result.gross_amount == 0
        assert result.tax_amount == 0

    def test_rounding_half_up(self):
        """Tax is rounded to whole VND."""
        result = evaluate_rule(FlatRateRule(name="x", rate=Decimal("0.001")), Decimal("1500"))
        assert result.tax_amount == Decimal("2")

    def test_replace_builds_variant(self):
        """Rules are immutable; variants are derived with replace."""
        base = FlatRateRule(name="x", rate=Decimal("0.05"))
        variant = replace(base, rate=Decimal("0.10"))
        assert base.rate == Decimal("0.05")
        assert evaluate_rule(variant, Decimal("100")).tax_amount == Decimal("10")

    def test_sum_tax(self):
        """sum_tax adds rule results."""
        rule = FlatRateRule(name="x", rate=Decimal("0.10"))
        results = [evaluate_rule(rule, Decimal("1000")), evaluate_rule(rule, Decimal("2000"))]
        assert sum_tax(results) == Decimal("300")
        assert sum_tax([]) == 0

    def test_threshold_law(self):
        """Zero at the threshold, round(delta x rate) just above it."""
        rule = FlatRateRule(
            name="x",
            rate=Decimal("0.10"),
            threshold_mode=ThresholdMode.EXCESS_OVER,
            threshold=Decimal("10000000"),
        )
        assert evaluate_rule(rule, Decimal("10000000")).tax_amount == 0
        for delta in (Decimal("1"), Decimal("5"), Decimal("15"), Decimal("999")):
            result = evaluate_rule(rule, Decimal("10000000") + delta)
            assert result.tax_amount == (delta * Decimal("0.10")).quantize(
                Decimal("1"), rounding="ROUND_HALF_UP"
            )
