"""Tests for the comparison layer: break-even, freelancer, business form, multi-source, creator."""

from decimal import Decimal

from vn_tax_calculator.core.analyzers.business_form import (
    compare_business_forms,
    determine_recommendation,
)
from vn_tax_calculator.core.analyzers.comparison import (
    compare,
    find_break_even,
    scan_break_even,
    scan_comparison,
)
from vn_tax_calculator.core.analyzers.freelancer import (
    calculate_creator_income_comparison,
    calculate_freelancer_comparison,
    create_default_source,
    find_freelancer_break_even,
    generate_comparison_range,
    normalize_to_annual,
    normalize_to_monthly,
    scan_freelancer_break_even,
)
from vn_tax_calculator.core.analyzers.multi_source import calculate_multi_source_tax
from vn_tax_calculator.core.models.business_form import (
    BusinessForm,
    BusinessFormInput,
    BusinessFormOutcome,
)
from vn_tax_calculator.core.models.comparison import ComparisonSide, NetResult
from vn_tax_calculator.core.models.content_creator import Currency
from vn_tax_calculator.core.models.enums import IncomeFrequency
from vn_tax_calculator.core.models.freelancer import (
    CreatorIncomeInput,
    CreatorIncomeSource,
    CreatorIncomeSourceType,
    FreelancerInput,
)
from vn_tax_calculator.core.models.multi_source import (
    IncomeCategory,
    IncomeSource,
    IncomeSourceType,
    MultiSourceInput,
)


def linear_a(x: Decimal) -> Decimal:
    return x * Decimal("0.9")


def linear_b(x: Decimal) -> Decimal:
    return x - Decimal("10000000")


class TestCompare:
    """Tests for the pairwise comparison."""

    def test_higher_net_wins(self):
        """The side with more net income is better."""
        a = NetResult(label="A", net_income=Decimal("100"))
        b = NetResult(label="B", net_income=Decimal("150"))
        result = compare(a, b)
        assert result.better == ComparisonSide.B
        assert result.difference == Decimal("50")
        assert result.winner.label == "B"

    def test_tie_goes_to_a(self):
        """Equal nets recommend A."""
        a = NetResult(label="A", net_income=Decimal("100"))
        b = NetResult(label="B", net_income=Decimal("100"))
        assert compare(a, b).better == ComparisonSide.A


class TestBreakEven:
    """Tests for the generic break-even search."""

    def test_single_crossing(self):
        """0.9x and x - 10 triệu meet at 100 triệu."""
        result = find_break_even(
            Decimal("0"), Decimal("500000000"), Decimal("10000"), linear_a, linear_b
        )
        assert result.found
        assert abs(result.break_even - Decimal("100000000")) <= Decimal("10000")
        assert result.a_better_above is False
        assert result.iterations > 0

    def test_no_sign_change(self):
        """A function that always wins has no break-even."""
        result = find_break_even(
            Decimal("0"),
            Decimal("500000000"),
            Decimal("10000"),
            lambda x: x + 1,
            lambda x: x,
        )
        assert result.found is False
        assert result.break_even is None
        assert result.note

    def test_swapped_bounds(self):
        """Bounds given in reverse order are normalised."""
        result = find_break_even(
            Decimal("500000000"), Decimal("0"), Decimal("10000"), linear_a, linear_b
        )
        assert result.found
        assert result.low == 0

    def test_scan_lists_crossings(self):
        """A grid scan reports the first point after each sign change."""
        crossings = scan_break_even(
            Decimal("0"), Decimal("200000000"), Decimal("10000000"), linear_a, linear_b
        )
        assert crossings == [Decimal("110000000")]

    def test_scan_comparison_grid(self):
        """Grid is inclusive of both ends."""
        points = scan_comparison(Decimal("0"), Decimal("100"), Decimal("25"), linear_a, linear_b)
        assert [p.gross for p in points] == [0, 25, 50, 75, 100]
        assert scan_comparison(Decimal("0"), Decimal("100"), Decimal("0"), linear_a, linear_b) == []


class TestFreelancerComparison:
    """Tests for freelancer vs employee."""

    def test_monthly_30m(self):
        """Flat 10% keeps more than salary at 30 triệu."""
        result = calculate_freelancer_comparison(FreelancerInput(gross_income=Decimal("30000000")))
        assert result.freelancer.net_income == Decimal("27000000")
        assert result.employee.net_income == Decimal("26215000")
        assert result.net_difference == Decimal("785000")
        assert result.freelancer_better
        assert result.comparison.better == ComparisonSide.A
        assert result.annual_gross == Decimal("360000000")

    def test_annual_frequency(self):
        """Annual amounts are spread over twelve months."""
        result = calculate_freelancer_comparison(
            FreelancerInput(gross_income=Decimal("360000000"), frequency=IncomeFrequency.ANNUAL)
        )
        assert result.monthly_gross == Decimal("30000000")
        assert result.freelancer_annual_tax == Decimal("36000000")

    def test_project_is_one_month(self):
        """A project payment is one month and one year at once."""
        assert normalize_to_monthly(Decimal("30000000"), IncomeFrequency.PROJECT) == Decimal("30000000")
        assert normalize_to_annual(Decimal("30000000"), IncomeFrequency.PROJECT) == Decimal("30000000")
        assert normalize_to_annual(Decimal("30000000"), IncomeFrequency.MONTHLY) == Decimal("360000000")

    def test_break_even_with_insurance(self):
        """With insurance the freelancer keeps more at every income."""
        result = find_freelancer_break_even()
        assert result.found is False

    def test_break_even_without_insurance(self):
        """Without insurance the lines cross at 66 triệu."""
        result = find_freelancer_break_even(has_insurance=False)
        assert result.found
        assert abs(result.break_even - Decimal("66000000")) <= Decimal("10000")
        assert result.a_better_above is True

    def test_scan_agrees_with_bisection(self):
        """The grid scan sees the same single crossing."""
        crossings = scan_freelancer_break_even(Decimal("1000000"), has_insurance=False)
        assert len(crossings) == 1
        assert Decimal("66000000") <= crossings[0] <= Decimal("67000000")

    def test_comparison_range(self):
        """Chart data has one point per step."""
        points = generate_comparison_range(
            Decimal("10000000"), Decimal("50000000"), Decimal("10000000")
        )
        assert len(points) == 5
        assert all(p.difference > 0 for p in points)


class TestBusinessForm:
    """Tests for employee / freelancer / household comparison."""

    def test_high_revenue_household_wins(self):
        """1.2 tỷ of services: household business keeps the most."""
        result = compare_business_forms(BusinessFormInput(annual_revenue=Decimal("1200000000")))
        assert result.household.pit == Decimal("14000000")
        assert result.household.vat == Decimal("60000000")
        assert result.household.net.net_income == Decimal("1124500000")
        assert result.freelancer.net.net_income == Decimal("1078500000")
        assert result.employee.net.net_income == Decimal("964053600")
        assert result.recommendation == BusinessForm.HOUSEHOLD
        assert result.recommended.form == BusinessForm.HOUSEHOLD
        assert result.employee.employer_insurance > 0

    def test_exempt_household(self):
        """300 triệu stays under the household threshold."""
        result = compare_business_forms(BusinessFormInput(annual_revenue=Decimal("300000000")))
        assert result.household.is_exempt
        assert result.household.net.net_income == Decimal("298500000")
        assert result.freelancer.net.net_income == Decimal("268500000")
        assert result.employee.net.net_income == Decimal("264375000")
        assert result.household_savings == Decimal("34125000")
        assert "miễn thuế" in result.summary

    def test_tie_break_order(self):
        """Equal nets prefer household, then freelancer."""
        net = NetResult(label="x", net_income=Decimal("100"))
        outcomes = [
            BusinessFormOutcome(form=BusinessForm.EMPLOYEE, net=net),
            BusinessFormOutcome(form=BusinessForm.FREELANCER, net=net),
        ]
        assert determine_recommendation(outcomes) == BusinessForm.FREELANCER
        outcomes.append(BusinessFormOutcome(form=BusinessForm.HOUSEHOLD, net=net))
        assert determine_recommendation(outcomes) == BusinessForm.HOUSEHOLD


class TestMultiSource:
    """Tests for multi-source annual tax."""

    def test_mixed_sources(self):
        """Salary on brackets, other sources at their flat rates."""
        result = calculate_multi_source_tax(
            MultiSourceInput(
                sources=[
                    IncomeSource(
                        source_type=IncomeSourceType.SALARY,
                        amount=Decimal("30000000"),
                        frequency=IncomeFrequency.MONTHLY,
                    ),
                    IncomeSource(source_type=IncomeSourceType.DIVIDEND, amount=Decimal("10000000")),
                    IncomeSource(
                        source_type=IncomeSourceType.INTEREST,
                        amount=Decimal("5000000"),
                        is_gov_bond=True,
                    ),
                    IncomeSource(source_type=IncomeSourceType.LOTTERY, amount=Decimal("50000000")),
                    IncomeSource(
                        source_type=IncomeSourceType.INHERITANCE,
                        amount=Decimal("200000000"),
                        is_from_family=True,
                    ),
                ]
            )
        )
        assert result.progressive_tax == Decimal("7620000")
        assert result.flat_tax == Decimal("4500000")
        assert result.total_tax == Decimal("12120000")
        investment = result.categories[IncomeCategory.INVESTMENT]
        assert investment.gross == Decimal("15000000")
        assert investment.tax == Decimal("500000")
        other = result.categories[IncomeCategory.OTHER]
        assert other.gross == Decimal("250000000")
        assert other.tax == Decimal("4000000")
        assert result.total_net_income == result.total_gross_income - Decimal("12120000")
        assert result.optimization_tips

    def test_freelance_threshold(self):
        """Freelance revenue under 100 triệu/năm is exempt."""
        small = calculate_multi_source_tax(
            MultiSourceInput(
                sources=[IncomeSource(source_type=IncomeSourceType.FREELANCE, amount=Decimal("80000000"))]
            )
        )
        assert small.total_tax == 0
        assert small.sources[0].flat.is_exempt
        large = calculate_multi_source_tax(
            MultiSourceInput(
                sources=[IncomeSource(source_type=IncomeSourceType.FREELANCE, amount=Decimal("150000000"))]
            )
        )
        assert large.total_tax == Decimal("15000000")

    def test_salary_follows_law_version(self):
        """The salary line uses the selected law."""
        result = calculate_multi_source_tax(
            MultiSourceInput(
                sources=[
                    IncomeSource(
                        source_type=IncomeSourceType.SALARY,
                        amount=Decimal("30000000"),
                        frequency=IncomeFrequency.MONTHLY,
                    )
                ],
                law_version="2025",
            )
        )
        assert result.total_tax == Decimal("1627500") * 12


class TestCreatorIncome:
    """Tests for creator income sources vs salary."""

    def test_usd_source(self):
        """1000 USD a month at 25,400 VND/USD."""
        result = calculate_creator_income_comparison(
            CreatorIncomeInput(
                sources=[
                    CreatorIncomeSource(
                        source_type=CreatorIncomeSourceType.YOUTUBE,
                        amount=Decimal("1000"),
                        currency=Currency.USD,
                    )
                ]
            )
        )
        source = result.sources[0]
        assert source.monthly_amount == Decimal("25400000")
        assert source.annual_amount == Decimal("304800000")
        assert source.tax.tax_amount == Decimal("30480000")
        assert source.is_foreign
        assert result.foreign_income == Decimal("304800000")

    def test_withheld_covers_estimate(self):
        """Tax owed never goes negative."""
        result = calculate_creator_income_comparison(
            CreatorIncomeInput(
                sources=[
                    CreatorIncomeSource(
                        source_type=CreatorIncomeSourceType.SPONSORSHIP,
                        amount=Decimal("50000000"),
                        frequency=IncomeFrequency.PROJECT,
                        withheld_tax=Decimal("5000000"),
                    )
                ]
            )
        )
        assert result.sources[0].tax_owed == 0
        assert result.total_tax_owed == 0
        assert result.total_withheld_tax == Decimal("5000000")
        assert result.domestic_income == Decimal("50000000")

    def test_default_source(self):
        """Defaults come from the source type."""
        source = create_default_source(CreatorIncomeSourceType.TIKTOK)
        assert source.currency == Currency.USD
        assert source.is_foreign is True
        assert source.amount == 0
