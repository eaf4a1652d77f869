"""Tests for mortgage amortization and purchase costs."""

from decimal import Decimal

from vn_tax_calculator.core.calculators.mortgage import (
    build_schedule,
    build_sensitivity,
    calculate_mortgage,
    calculate_notary_fee,
    calculate_pmt,
    calculate_upfront_costs,
    max_principal_for_payment,
)
from vn_tax_calculator.core.models.mortgage import (
    LoanPhase,
    MortgagePhaseConfig,
    PropertyType,
    RepaymentMethod,
)
from vn_tax_calculator.shared.validators import round_money


class TestPMT:
    """Tests for the annuity formula."""

    def test_standard_annuity(self):
        """100 triệu over 12 months at 12%/năm."""
        assert round_money(calculate_pmt(Decimal("100000000"), Decimal("12"), 12)) == Decimal("8884879")

    def test_zero_rate(self):
        """At 0% the payment is principal / months."""
        assert calculate_pmt(Decimal("120000000"), Decimal("0"), 12) == Decimal("10000000")

    def test_degenerate_inputs(self):
        """No principal or no months means no payment."""
        assert calculate_pmt(Decimal("0"), Decimal("10"), 12) == 0
        assert calculate_pmt(Decimal("100000000"), Decimal("10"), 0) == 0

    def test_inverse(self):
        """max_principal_for_payment undoes calculate_pmt."""
        payment = calculate_pmt(Decimal("500000000"), Decimal("9"), 180)
        principal = max_principal_for_payment(payment, Decimal("9"), 180)
        assert abs(principal - Decimal("500000000")) < 1


class TestSchedule:
    """Tests for the month-by-month schedule."""

    def test_principal_sums_to_loan(self, mortgage_input):
        """Every đồng borrowed is repaid and the balance ends at zero."""
        schedule = build_schedule(Decimal("2100000000"), mortgage_input)
        assert len(schedule) == 240
        assert sum(r.principal for r in schedule) == Decimal("2100000000")
        assert schedule[-1].remaining_balance == 0
        assert all(r.remaining_balance >= 0 for r in schedule)

    def test_phases(self, mortgage_input):
        """Twelve preferential months, then floating."""
        schedule = build_schedule(Decimal("2100000000"), mortgage_input)
        assert schedule[11].phase == LoanPhase.PREFERENTIAL
        assert schedule[12].phase == LoanPhase.FLOATING
        assert schedule[12].total_payment > schedule[11].total_payment

    def test_grace_is_interest_only(self):
        """Grace months pay interest at the preferential rate and no principal."""
        config = MortgagePhaseConfig(grace_period_months=6)
        schedule = build_schedule(Decimal("2100000000"), config)
        first = schedule[0]
        assert first.phase == LoanPhase.GRACE
        assert first.principal == 0
        assert first.interest == Decimal("12250000")
        assert schedule[5].remaining_balance == Decimal("2100000000")
        assert schedule[6].phase == LoanPhase.PREFERENTIAL

    def test_straight_line(self):
        """Equal principal each month, falling interest."""
        config = MortgagePhaseConfig(repayment_method=RepaymentMethod.STRAIGHT_LINE)
        schedule = build_schedule(Decimal("2100000000"), config)
        assert schedule[0].principal == Decimal("8750000")
        assert schedule[1].interest < schedule[0].interest
        assert sum(r.principal for r in schedule) == Decimal("2100000000")

    def test_empty_loan(self):
        """No loan, no schedule."""
        assert build_schedule(Decimal("0"), MortgagePhaseConfig()) == []
        assert build_schedule(Decimal("100000000"), MortgagePhaseConfig(loan_term_years=0)) == []


class TestFees:
    """Tests for purchase costs."""

    def test_secondary_home(self):
        """Registration 0.5%, notary by tier, appraisal 0.15% of the loan."""
        fees = calculate_upfront_costs(Decimal("3000000000"), Decimal("2100000000"))
        assert fees.registration_fee == Decimal("15000000")
        assert fees.notary_fee == Decimal("2200000")
        assert fees.appraisal_fee == Decimal("3150000")
        assert fees.maintenance_fee == 0
        assert fees.vat == 0

    def test_developer_sale(self):
        """Developer sales add maintenance and construction VAT."""
        fees = calculate_upfront_costs(
            Decimal("3000000000"), Decimal("2100000000"), PropertyType.PRIMARY_DEVELOPER
        )
        assert fees.maintenance_fee == Decimal("60000000")
        assert fees.vat == Decimal("210000000")

    def test_notary_tiers(self):
        """Flat fees for small values, cap for large ones."""
        assert calculate_notary_fee(Decimal("40000000")) == Decimal("50000")
        assert calculate_notary_fee(Decimal("800000000")) == Decimal("800000")
        assert calculate_notary_fee(Decimal("1000000000000")) == Decimal("70000000")

    def test_appraisal_bounds(self):
        """Appraisal fee stays within its floor and ceiling."""
        assert calculate_upfront_costs(Decimal("50000000"), Decimal("10000000")).appraisal_fee == Decimal("100000")
        assert calculate_upfront_costs(
            Decimal("9000000000"), Decimal("6000000000")
        ).appraisal_fee == Decimal("5000000")


class TestMortgageAnalysis:
    """Tests for the full analysis."""

    def test_reference_loan(self, mortgage_input):
        """3 tỷ with 30% down borrows 2.1 tỷ."""
        result = calculate_mortgage(mortgage_input)
        assert result.down_payment == Decimal("900000000")
        assert result.loan_amount == Decimal("2100000000")
        assert len(result.yearly) == 20
        assert result.total_payment == result.loan_amount + result.total_interest
        assert result.total_upfront_cost == result.down_payment + result.fees.total
        assert result.dti_ratio > 0

    def test_sensitivity_base_matches_schedule(self, mortgage_input):
        """+0 reproduces the first floating payment."""
        result = calculate_mortgage(mortgage_input)
        assert result.sensitivity[0].monthly_payment == result.floating_payment
        assert result.sensitivity[0].difference_from_base == 0
        assert [s.label for s in result.sensitivity] == ["Hiện tại", "+1%", "+2%"]
        assert result.sensitivity[2].monthly_payment > result.sensitivity[1].monthly_payment

    def test_sensitivity_without_floating_phase(self):
        """A loan that never floats stresses the whole repayment term."""
        config = MortgagePhaseConfig(loan_term_years=1, preferential_months=12)
        scenarios = build_sensitivity(Decimal("120000000"), config)
        assert len(scenarios) == 3
        assert scenarios[0].monthly_payment == round_money(
            calculate_pmt(Decimal("120000000"), config.floating_rate_percent, 12)
        )

    def test_negative_grace_period_clamped(self, mortgage_input):
        """A negative grace period behaves like no grace period."""
        negative = calculate_mortgage(mortgage_input.model_copy(update={"grace_period_months": -12}))
        baseline = calculate_mortgage(mortgage_input)
        assert negative.max_loan_by_income == baseline.max_loan_by_income
        assert len(negative.schedule) == mortgage_input.total_months
        assert negative.sensitivity == baseline.sensitivity

    def test_sensitivity_negative_grace_without_floating(self):
        """Sensitivity never stresses more months than the loan term."""
        config = MortgagePhaseConfig(loan_term_years=1, preferential_months=12, grace_period_months=-6)
        scenarios = build_sensitivity(Decimal("120000000"), config)
        assert scenarios[0].monthly_payment == round_money(
            calculate_pmt(Decimal("120000000"), config.floating_rate_percent, 12)
        )

    def test_no_income(self, mortgage_input):
        """DTI is zero when no income is declared."""
        result = calculate_mortgage(mortgage_input.model_copy(update={"monthly_income": Decimal("0")}))
        assert result.dti_ratio == 0
        assert result.max_loan_by_income == 0


class TestRateReset:
    """Tests for re-amortization when the preferential rate ends."""

    def test_floating_payment_is_recomputed(self):
        """2 tỷ, 7% for 12 months then 10.5% over the remaining 228 months."""
        config = MortgagePhaseConfig(
            loan_term_years=20,
            preferential_rate_percent=Decimal("7"),
            preferential_months=12,
            floating_rate_percent=Decimal("10.5"),
        )
        schedule = build_schedule(Decimal("2000000000"), config)
        first_floating = schedule[12]
        balance_at_reset = schedule[11].remaining_balance

        expected = round_money(calculate_pmt(balance_at_reset, Decimal("10.5"), 228))
        naive = round_money(calculate_pmt(Decimal("2000000000"), Decimal("10.5"), 240))
        assert first_floating.total_payment == expected
        assert first_floating.total_payment != naive

        assert sum(r.principal for r in schedule) == Decimal("2000000000")
        assert schedule[-1].remaining_balance == 0

    def test_balance_never_increases(self):
        """Each month leaves the same or a smaller balance."""
        schedule = build_schedule(Decimal("2000000000"), MortgagePhaseConfig(grace_period_months=3))
        balances = [r.remaining_balance for r in schedule]
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
        assert all(r.total_payment == r.principal + r.interest for r in schedule)

    def test_idempotent(self, mortgage_input):
        """The same input always yields the same result."""
        assert calculate_mortgage(mortgage_input) == calculate_mortgage(mortgage_input)
