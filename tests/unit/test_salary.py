"""Tests for insurance, deductions and the salary calculator."""

from decimal import Decimal

from vn_tax_calculator.core.calculators.insurance import (
    compute_employer_insurance,
    compute_family_deductions,
    compute_insurance,
    compute_taxable_income,
    get_contribution_caps,
)
from vn_tax_calculator.core.calculators.salary import (
    SalaryTaxCalculator,
    calculate_gross_from_net,
    calculate_salary_tax,
    compare_law_versions,
)
from vn_tax_calculator.core.models.enums import LawVersion, RegionType
from vn_tax_calculator.core.models.salary import InsuranceOptions, TaxableIncomeInput


class TestInsurance:
    """Tests for mandatory insurance contributions."""

    def test_uncapped_contributions(self, law_2026):
        """30 triệu: 8% + 1.5% + 1%."""
        insurance = compute_insurance(Decimal("30000000"), RegionType.REGION_1, law=law_2026)
        assert insurance.bhxh == Decimal("2400000")
        assert insurance.bhyt == Decimal("450000")
        assert insurance.bhtn == Decimal("300000")
        assert insurance.total == Decimal("3150000")

    def test_caps_apply_per_scheme(self, law_2026):
        """BHXH/BHYT stop at 46.8 triệu; BHTN follows the region cap."""
        insurance = compute_insurance(Decimal("100000000"), RegionType.REGION_1, law=law_2026)
        assert insurance.bhxh == Decimal("3744000")
        assert insurance.bhyt == Decimal("702000")
        assert insurance.bhtn == Decimal("1000000")
        assert insurance.total == Decimal("5446000")

    def test_region_4_unemployment_cap(self, law_2026):
        """Region 4 caps the BHTN base at 74 triệu."""
        caps = get_contribution_caps(RegionType.REGION_4, law_2026)
        assert caps["bhtn"] == Decimal("74000000")
        insurance = compute_insurance(Decimal("100000000"), RegionType.REGION_4, law=law_2026)
        assert insurance.bhtn == Decimal("740000")

    def test_contribution_never_exceeds_cap(self, law_2026):
        """However large the base, each scheme stops at its cap."""
        for region in RegionType:
            caps = get_contribution_caps(region, law_2026)
            for base in (Decimal("50000000"), Decimal("500000000"), Decimal("10") ** 12):
                insurance = compute_insurance(base, region, law=law_2026)
                assert insurance.bhxh <= caps["bhxh"] * Decimal("0.08")
                assert insurance.bhyt <= caps["bhyt"] * Decimal("0.015")
                assert insurance.bhtn <= caps["bhtn"] * Decimal("0.01")

    def test_options_disable_schemes(self):
        """Schemes switched off contribute nothing."""
        options = InsuranceOptions(bhxh=True, bhyt=False, bhtn=False)
        insurance = compute_insurance(Decimal("20000000"), options=options)
        assert insurance.bhyt == 0
        assert insurance.bhtn == 0
        assert insurance.total == Decimal("1600000")

    def test_employer_share(self):
        """Employer pays 17.5% + 3% + 1%."""
        insurance = compute_employer_insurance(Decimal("20000000"))
        assert insurance.total == Decimal("4300000")

    def test_negative_base_clamped(self):
        """A negative base produces no contribution."""
        assert compute_insurance(Decimal("-1")).total == 0


class TestDeductions:
    """Tests for family deductions and taxable income."""

    def test_family_deductions(self, law_2026):
        """Dependents multiply the per-person amount."""
        personal, dependents = compute_family_deductions(2, law_2026)
        assert personal == Decimal("15500000")
        assert dependents == Decimal("12400000")

    def test_taxable_income_floored(self, law_2026):
        """Deductions larger than income give zero taxable income."""
        assert compute_taxable_income(Decimal("10000000"), Decimal("0"), 1, law=law_2026) == 0

    def test_taxable_income(self, law_2025):
        """Old law: 30M - 3.15M - 11M."""
        taxable = compute_taxable_income(Decimal("30000000"), Decimal("3150000"), law=law_2025)
        assert taxable == Decimal("15850000")


class TestSalaryTaxCalculator:
    """Tests for the gross-to-net calculator."""

    def test_30m_under_2026(self, salary_30m):
        """Reference case for the new law."""
        result = calculate_salary_tax(salary_30m, LawVersion.LAW_2026)
        assert result.insurance.total == Decimal("3150000")
        assert result.taxable_income == Decimal("11350000")
        assert result.tax_amount == Decimal("635000")
        assert result.net_income == Decimal("26215000")
        assert result.marginal_rate == Decimal("0.10")
        assert len(result.breakdown) == 2

    def test_30m_under_2025(self, salary_30m):
        """Old law taxes the same salary more."""
        result = calculate_salary_tax(salary_30m, "2025")
        assert result.taxable_income == Decimal("15850000")
        assert result.tax_amount == Decimal("1627500")

    def test_capped_high_salary(self):
        """100 triệu hits every insurance cap."""
        result = calculate_salary_tax(TaxableIncomeInput(gross_income=Decimal("100000000")))
        assert result.taxable_income == Decimal("79054000")
        assert result.tax_amount == Decimal("14216200")
        assert result.net_income == Decimal("80337800")

    def test_below_deduction_pays_nothing(self):
        """Salary under the personal deduction is tax free."""
        result = calculate_salary_tax(TaxableIncomeInput(gross_income=Decimal("15000000")))
        assert result.tax_amount == 0
        assert result.breakdown == []
        assert result.effective_rate == 0

    def test_no_insurance(self):
        """Without insurance the whole gross is reduced only by deductions."""
        result = calculate_salary_tax(
            TaxableIncomeInput(gross_income=Decimal("30000000"), has_insurance=False)
        )
        assert result.insurance.total == 0
        assert result.taxable_income == Decimal("14500000")
        assert result.tax_amount == Decimal("950000")

    def test_declared_salary_drives_insurance(self):
        """Insurance follows the declared base, tax follows the gross."""
        result = calculate_salary_tax(
            TaxableIncomeInput(
                gross_income=Decimal("30000000"), declared_salary=Decimal("10000000")
            )
        )
        assert result.insurance.total == Decimal("1050000")
        assert result.taxable_income == Decimal("13450000")

    def test_exempt_allowances(self):
        """Exempt allowances are excluded before deductions."""
        result = calculate_salary_tax(
            TaxableIncomeInput(
                gross_income=Decimal("30000000"), allowances_exempt=Decimal("1350000")
            )
        )
        assert result.exempt_income == Decimal("1350000")
        assert result.taxable_income == Decimal("10000000")
        assert result.tax_amount == Decimal("500000")

    def test_dependents_reduce_tax(self, salary_30m):
        """One dependent takes 6.2 triệu off the taxable income."""
        with_dependent = salary_30m.model_copy(update={"dependents": 1})
        result = calculate_salary_tax(with_dependent)
        assert result.taxable_income == Decimal("5150000")
        assert result.tax_amount == Decimal("257500")

    def test_net_plus_tax_plus_insurance_is_gross(self):
        """The three parts always add back to gross."""
        calculator = SalaryTaxCalculator("2026")
        for millions in (5, 18, 42, 77, 150):
            result = calculator.calculate(
                TaxableIncomeInput(gross_income=Decimal(millions) * 1_000_000, dependents=1)
            )
            assert result.net_income + result.tax_amount + result.insurance.total == result.gross_income


class TestGrossFromNet:
    """Tests for the net-to-gross search."""

    def test_roundtrip_reference_case(self):
        """26.215 triệu net corresponds to 30 triệu gross."""
        result = calculate_gross_from_net(Decimal("26215000"))
        assert abs(result.gross_income - Decimal("30000000")) <= 1
        assert result.net_income >= Decimal("26215000") - 1

    def test_zero_target(self):
        """A zero target needs no gross."""
        result = calculate_gross_from_net(Decimal("0"))
        assert result.gross_income <= 1


class TestLawComparison:
    """Tests for the 2025 vs 2026 comparison."""

    def test_saving_under_new_law(self, salary_30m):
        """The new law saves 992.5 nghìn on a 30 triệu salary."""
        comparison = compare_law_versions(salary_30m)
        assert comparison.old.law_version == LawVersion.LAW_2025
        assert comparison.new.law_version == LawVersion.LAW_2026
        assert comparison.tax_saving == Decimal("992500")
        assert comparison.net_increase == Decimal("992500")
