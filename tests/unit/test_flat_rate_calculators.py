"""Tests for the flat and threshold rate calculators."""

from datetime import date
from decimal import Decimal

from vn_tax_calculator.core.calculators.content_creator import (
    calculate_content_creator_tax,
    get_creator_threshold,
)
from vn_tax_calculator.core.calculators.crypto import calculate_crypto_tax
from vn_tax_calculator.core.calculators.gold import (
    calculate_gold_profit,
    calculate_gold_transfer_tax,
    is_gold_tax_effective,
)
from vn_tax_calculator.core.calculators.household import (
    allocate_threshold,
    calculate_household_business_tax,
    compare_household_methods,
    get_income_method_rate,
)
from vn_tax_calculator.core.calculators.inheritance import calculate_inheritance_gift_tax
from vn_tax_calculator.core.calculators.late_payment import (
    calculate_late_payment,
    generate_interest_milestones,
)
from vn_tax_calculator.core.calculators.real_estate import (
    calculate_real_estate_transfer_tax,
    calculate_transfer_tax,
    estimate_transfer_tax,
)
from vn_tax_calculator.core.calculators.rental import calculate_rental_income_tax
from vn_tax_calculator.core.calculators.securities import (
    calculate_securities_tax,
    calculate_transaction_tax,
    compare_unlisted_methods,
)
from vn_tax_calculator.core.calculators.severance import (
    calculate_severance_tax,
    estimate_job_loss_amount,
    estimate_severance_amount,
)
from vn_tax_calculator.core.models.content_creator import (
    ContentCreatorInput,
    CreatorPlatform,
    Currency,
    PlatformIncome,
)
from vn_tax_calculator.core.models.crypto import CryptoTransaction, CryptoTransactionType
from vn_tax_calculator.core.models.enums import BusinessCategory, LawVersion, Relationship
from vn_tax_calculator.core.models.gold import (
    GoldTransaction,
    GoldTransferTaxInput,
    GoldType,
    TradeSide,
)
from vn_tax_calculator.core.models.household import (
    HouseholdBusiness,
    HouseholdBusinessTaxInput,
    HouseholdTaxMethod,
)
from vn_tax_calculator.core.models.inheritance import (
    InheritanceGiftInput,
    InheritedAsset,
    InheritedAssetType,
    TransferKind,
)
from vn_tax_calculator.core.models.late_payment import LatePaymentInput
from vn_tax_calculator.core.models.real_estate import RealEstateTransfer, TransferType
from vn_tax_calculator.core.models.rental import (
    ExpenseMethod,
    RentalExpenses,
    RentalIncomeTaxInput,
    RentalProperty,
)
from vn_tax_calculator.core.models.securities import (
    BondInterestEntry,
    BondType,
    DividendEntry,
    SecuritiesTaxInput,
    SecuritiesTaxMethod,
    SecuritiesTransaction,
    SecuritiesType,
)
from vn_tax_calculator.core.models.severance import SeveranceInput, SeveranceType


class TestRentalIncome:
    """Tests for rental income tax."""

    def test_taxable_property(self):
        """120 triệu/năm: VAT 5% on revenue, PIT 5% after deemed expenses."""
        result = calculate_rental_income_tax(
            RentalIncomeTaxInput(
                properties=[RentalProperty(name="Căn hộ", monthly_rent=Decimal("10000000"))]
            )
        )
        prop = result.properties[0]
        assert result.is_taxable
        assert prop.annual_rent == Decimal("120000000")
        assert prop.deemed.vat.tax_amount == Decimal("6000000")
        assert prop.deemed.pit.tax_amount == Decimal("5400000")
        assert prop.deemed.net_income == Decimal("108600000")
        assert prop.recommended_method == ExpenseMethod.DEEMED

    def test_below_threshold_pays_pit_only(self):
        """96 triệu/năm: no VAT, PIT 5% still due after deemed expenses."""
        result = calculate_rental_income_tax(
            RentalIncomeTaxInput(properties=[RentalProperty(monthly_rent=Decimal("8000000"))])
        )
        prop = result.properties[0]
        assert result.is_taxable is False
        assert prop.deemed.vat.is_exempt
        assert prop.deemed.pit.is_exempt is False
        assert prop.deemed.pit.tax_amount == Decimal("4320000")
        assert result.total_deemed_tax == Decimal("4320000")

    def test_small_single_property_pit(self):
        """5 triệu a month: PIT 5% of 54 triệu."""
        result = calculate_rental_income_tax(
            RentalIncomeTaxInput(properties=[RentalProperty(monthly_rent=Decimal("5000000"))])
        )
        assert result.properties[0].deemed.pit.tax_amount == Decimal("2700000")
        assert result.properties[0].deemed.vat.tax_amount == 0

    def test_threshold_on_combined_rent(self):
        """Two cheap properties together cross 100 triệu."""
        result = calculate_rental_income_tax(
            RentalIncomeTaxInput(
                properties=[
                    RentalProperty(name="A", monthly_rent=Decimal("5000000")),
                    RentalProperty(name="B", monthly_rent=Decimal("5000000")),
                ]
            )
        )
        assert result.is_taxable
        assert all(p.deemed.vat.tax_amount == Decimal("3000000") for p in result.properties)

    def test_actual_expenses_method(self):
        """Large documented expenses make the actual method cheaper in tax."""
        result = calculate_rental_income_tax(
            RentalIncomeTaxInput(
                properties=[
                    RentalProperty(
                        monthly_rent=Decimal("10000000"),
                        expenses=RentalExpenses(maintenance=Decimal("40000000")),
                    )
                ],
                use_actual_expenses=True,
            )
        )
        prop = result.properties[0]
        assert prop.actual.pit.tax_amount == Decimal("4000000")
        assert prop.actual.expenses == Decimal("40000000")

    def test_occupancy_capped_at_twelve(self):
        """Months beyond 12 are ignored."""
        result = calculate_rental_income_tax(
            RentalIncomeTaxInput(
                properties=[RentalProperty(monthly_rent=Decimal("1000000"), occupied_months=15)]
            )
        )
        assert result.total_annual_rent == Decimal("12000000")


class TestInheritanceGift:
    """Tests for inheritance and gift tax."""

    def _input(self, relationship: Relationship, value: str, **kwargs) -> InheritanceGiftInput:
        return InheritanceGiftInput(
            relationship=relationship,
            assets=[InheritedAsset(asset_type=InheritedAssetType.CASH, value=Decimal(value))],
            **kwargs,
        )

    def test_spouse_exempt(self):
        """Spouses pay nothing whatever the value."""
        result = calculate_inheritance_gift_tax(self._input(Relationship.SPOUSE, "5000000000"))
        assert result.tax_amount == 0
        assert "vợ/chồng" in result.exemption_reason

    def test_non_relative_taxed_over_threshold(self):
        """50 triệu from a non-relative: 10% of 40 triệu."""
        result = calculate_inheritance_gift_tax(self._input(Relationship.NON_RELATIVE, "50000000"))
        assert result.tax_amount == Decimal("4000000")
        assert result.effective_rate == Decimal("8.00")

    def test_below_threshold(self):
        """8 triệu is under the 10 triệu threshold."""
        result = calculate_inheritance_gift_tax(self._input(Relationship.OTHER_RELATIVE, "8000000"))
        assert result.tax_amount == 0
        assert result.exemption_reason is not None

    def test_deadline_and_documents(self):
        """Declaration is due 10 days after the transfer."""
        result = calculate_inheritance_gift_tax(
            self._input(
                Relationship.PARENT_CHILD,
                "100000000",
                transfer_kind=TransferKind.GIFT,
                transaction_date=date(2026, 3, 1),
            )
        )
        assert result.declaration_deadline == date(2026, 3, 11)
        assert result.required_documents[0].startswith("Tờ khai")
        assert "Hợp đồng tặng cho có công chứng" in result.required_documents


class TestGoldTransfer:
    """Tests for gold bar transfer tax."""

    def test_sale_after_effective_date(self):
        """2 lượng sold at 80 triệu: 0.1% of 160 triệu."""
        result = calculate_gold_transfer_tax(
            GoldTransferTaxInput(
                transactions=[
                    GoldTransaction(
                        quantity=Decimal("2"),
                        price_per_unit=Decimal("80000000"),
                        transaction_date=date(2026, 8, 1),
                    )
                ]
            )
        )
        line = result.transactions[0]
        assert line.grams == Decimal("75.0")
        assert result.total_tax == Decimal("160000")
        assert result.effective_rate == Decimal("0.100")

    def test_before_effective_date(self):
        """Sales before 01/07/2026 are not taxed."""
        result = calculate_gold_transfer_tax(
            GoldTransferTaxInput(
                transactions=[
                    GoldTransaction(
                        quantity=Decimal("1"),
                        price_per_unit=Decimal("80000000"),
                        transaction_date=date(2026, 6, 30),
                    )
                ]
            )
        )
        assert result.total_tax == 0
        assert result.total_non_taxable_value == Decimal("80000000")

    def test_jewelry_and_purchases_exempt(self):
        """Only sales of gold bars are taxed."""
        result = calculate_gold_transfer_tax(
            GoldTransferTaxInput(
                transactions=[
                    GoldTransaction(
                        gold_type=GoldType.JEWELRY,
                        quantity=Decimal("1"),
                        price_per_unit=Decimal("50000000"),
                    ),
                    GoldTransaction(
                        side=TradeSide.BUY,
                        quantity=Decimal("1"),
                        price_per_unit=Decimal("80000000"),
                    ),
                ],
                calculation_date=date(2026, 9, 1),
            )
        )
        assert result.total_tax == 0
        assert all(not line.is_taxable for line in result.transactions)

    def test_missing_date_means_in_force(self):
        """No date at all is treated as after the effective date."""
        assert is_gold_tax_effective(None)
        assert not is_gold_tax_effective(date(2026, 1, 1))

    def test_round_trip_profit(self):
        """Profit net of tax on the sale."""
        profit = calculate_gold_profit(Decimal("80000000"), Decimal("90000000"), Decimal("1"))
        assert profit.profit == Decimal("10000000")
        assert profit.tax_on_sale == Decimal("90000")
        assert profit.net_profit == Decimal("9910000")
        assert profit.profit_percent == Decimal("12.50")


class TestSecurities:
    """Tests for securities taxes."""

    def _trade(self, securities_type: SecuritiesType = SecuritiesType.LISTED) -> SecuritiesTransaction:
        return SecuritiesTransaction(
            symbol="VNM",
            securities_type=securities_type,
            quantity=Decimal("1000"),
            buy_price=Decimal("20000"),
            sell_price=Decimal("30000"),
        )

    def test_listed_sale(self):
        """0.1% of the 30 triệu sale value."""
        result = calculate_transaction_tax(self._trade())
        assert result.capital_gain == Decimal("10000000")
        assert result.tax.tax_amount == Decimal("30000")
        assert result.net_profit == Decimal("9970000")

    def test_listed_ignores_capital_gains_method(self):
        """Listed shares always use the transaction method."""
        result = calculate_transaction_tax(self._trade(), SecuritiesTaxMethod.CAPITAL_GAINS)
        assert result.method == SecuritiesTaxMethod.TRANSACTION

    def test_unlisted_capital_gains(self):
        """20% of the 10 triệu gain."""
        result = calculate_transaction_tax(
            self._trade(SecuritiesType.UNLISTED), SecuritiesTaxMethod.CAPITAL_GAINS
        )
        assert result.tax.tax_amount == Decimal("2000000")

    def test_bond_transfer_exempt(self):
        """Bond transfers are taxed through interest instead."""
        result = calculate_transaction_tax(self._trade(SecuritiesType.BOND))
        assert result.tax.is_exempt

    def test_dividends_and_bonds(self):
        """Dividends at 5%, government bond interest exempt."""
        result = calculate_securities_tax(
            SecuritiesTaxInput(
                dividends=[
                    DividendEntry(dividend_per_share=Decimal("1000"), shares=Decimal("10000"))
                ],
                bonds=[
                    BondInterestEntry(
                        bond_type=BondType.GOVERNMENT, interest_received=Decimal("5000000")
                    ),
                    BondInterestEntry(
                        bond_type=BondType.CORPORATE, interest_received=Decimal("2000000")
                    ),
                ],
            )
        )
        assert result.dividends[0].tax_amount == Decimal("500000")
        assert result.bonds[0].is_exempt
        assert result.bonds[1].tax_amount == Decimal("100000")
        assert result.total_income == Decimal("17000000")
        assert result.total_tax == Decimal("600000")
        assert result.total_net == Decimal("16400000")

    def test_compare_unlisted_methods(self):
        """A profitable sale is cheaper on the transaction method."""
        comparison = compare_unlisted_methods([self._trade(SecuritiesType.UNLISTED), self._trade()])
        assert comparison.transaction_method_tax == Decimal("30000")
        assert comparison.capital_gains_method_tax == Decimal("2000000")
        assert comparison.recommendation == SecuritiesTaxMethod.TRANSACTION


class TestRealEstate:
    """Tests for real estate transfer tax."""

    def test_sale(self):
        """3 tỷ sale: 2% PIT and 0.5% registration fee."""
        result = calculate_transfer_tax(
            RealEstateTransfer(
                transfer_value=Decimal("3000000000"),
                purchase_value=Decimal("2000000000"),
                purchase_date=date(2020, 1, 15),
                transfer_date=date(2026, 3, 10),
            )
        )
        assert result.pit.tax_amount == Decimal("60000000")
        assert result.registration_fee == Decimal("15000000")
        assert result.capital_gain == Decimal("1000000000")
        assert result.holding_months == 74

    def test_family_transfer_exempt(self):
        """Spouse transfers pay neither PIT nor the fee."""
        result = calculate_transfer_tax(
            RealEstateTransfer(
                transfer_type=TransferType.FAMILY,
                relationship=Relationship.SPOUSE,
                transfer_value=Decimal("3000000000"),
            )
        )
        assert result.pit.tax_amount == 0
        assert result.registration_fee == 0
        assert result.exemption_amount == Decimal("60000000")

    def test_inheritance_from_other_relative(self):
        """Only close family inheritance is exempt."""
        result = calculate_transfer_tax(
            RealEstateTransfer(
                transfer_type=TransferType.INHERITANCE,
                relationship=Relationship.OTHER_RELATIVE,
                transfer_value=Decimal("1000000000"),
            )
        )
        assert result.pit.tax_amount == Decimal("20000000")
        assert result.note is not None

    def test_totals(self):
        """Summary adds up every transfer."""
        result = calculate_real_estate_transfer_tax(
            [
                RealEstateTransfer(transfer_value=Decimal("1000000000")),
                RealEstateTransfer(
                    transfer_type=TransferType.GIFT,
                    relationship=Relationship.GRANDPARENT_GRANDCHILD,
                    transfer_value=Decimal("1000000000"),
                ),
            ]
        )
        assert result.total_transfer_value == Decimal("2000000000")
        assert result.total_pit == Decimal("20000000")
        assert result.total_registration_fee == Decimal("5000000")
        assert result.total_exemptions == Decimal("20000000")

    def test_estimate(self):
        """Quick estimate skips exemption checks."""
        estimate = estimate_transfer_tax(Decimal("2000000000"))
        assert estimate.total == Decimal("50000000")
        assert estimate.net_proceeds == Decimal("1950000000")
        assert estimate_transfer_tax(Decimal("2000000000"), is_exempt=True).total == 0


class TestSeverance:
    """Tests for severance and lump-sum payouts."""

    def test_excess_over_ten_months(self):
        """250 triệu against a 200 triệu exemption."""
        result = calculate_severance_tax(
            SeveranceInput(total_amount=Decimal("250000000"), average_salary=Decimal("20000000"))
        )
        assert result.exempt_amount == Decimal("200000000")
        assert result.tax.taxable_amount == Decimal("50000000")
        assert result.tax.tax_amount == Decimal("5000000")

    def test_within_exemption(self):
        """150 triệu is fully exempt."""
        result = calculate_severance_tax(
            SeveranceInput(
                severance_type=SeveranceType.JOB_LOSS,
                total_amount=Decimal("150000000"),
                average_salary=Decimal("20000000"),
            )
        )
        assert result.tax.is_exempt
        assert result.tax.tax_amount == 0

    def test_pension_lump_sum(self):
        """10% of the gain over contributions."""
        result = calculate_severance_tax(
            SeveranceInput(
                severance_type=SeveranceType.VOLUNTARY_PENSION_LUMP_SUM,
                total_amount=Decimal("120000000"),
                contribution_amount=Decimal("100000000"),
            )
        )
        assert result.tax.tax_amount == Decimal("2000000")
        assert result.exempt_amount == Decimal("100000000")

    def test_estimates(self):
        """Half a month per year for severance, at least two months for job loss."""
        assert estimate_severance_amount(Decimal("4"), Decimal("20000000")) == Decimal("40000000")
        assert estimate_severance_amount(Decimal("0.5"), Decimal("20000000")) == 0
        assert estimate_job_loss_amount(Decimal("1"), Decimal("20000000")) == Decimal("40000000")
        assert estimate_job_loss_amount(Decimal("5"), Decimal("20000000")) == Decimal("100000000")


class TestCrypto:
    """Tests for digital asset transfer tax."""

    def test_sell_after_effective_date(self):
        """0.1% on sells and swaps, nothing on buys or wallet transfers."""
        result = calculate_crypto_tax(
            [
                CryptoTransaction(transaction_date=date(2026, 8, 1), total_value=Decimal("100000000")),
                CryptoTransaction(
                    transaction_date=date(2026, 8, 5),
                    transaction_type=CryptoTransactionType.BUY,
                    total_value=Decimal("50000000"),
                ),
                CryptoTransaction(
                    transaction_date=date(2026, 9, 1),
                    transaction_type=CryptoTransactionType.TRANSFER,
                    total_value=Decimal("20000000"),
                ),
            ]
        )
        assert result.total_tax == Decimal("100000")
        assert result.taxable_count == 1
        assert result.total_buy_value == Decimal("50000000")
        assert result.monthly[7].tax_amount == Decimal("100000")
        assert len(result.monthly) == 12

    def test_before_effective_date(self):
        """Sales before 01/07/2026 are exempt."""
        result = calculate_crypto_tax(
            [CryptoTransaction(transaction_date=date(2026, 6, 1), total_value=Decimal("100000000"))]
        )
        assert result.total_tax == 0


class TestLatePayment:
    """Tests for late payment interest."""

    def test_thirty_days_late(self):
        """0.03% x 30 days on 10 triệu."""
        result = calculate_late_payment(
            LatePaymentInput(
                tax_amount=Decimal("10000000"),
                due_date=date(2026, 1, 20),
                payment_date=date(2026, 2, 19),
            )
        )
        assert result.days_late == 30
        assert result.interest_amount == Decimal("90000")
        assert result.daily_interest == Decimal("3000")
        assert result.total_amount == Decimal("10090000")
        assert result.is_late

    def test_paid_early(self):
        """Paying before the due date costs nothing."""
        result = calculate_late_payment(
            LatePaymentInput(
                tax_amount=Decimal("10000000"),
                due_date=date(2026, 1, 20),
                payment_date=date(2026, 1, 10),
            )
        )
        assert result.days_late == 0
        assert result.interest_amount == 0
        assert result.is_late is False

    def test_long_delay_warns(self):
        """Over 90 days carries a warning."""
        result = calculate_late_payment(
            LatePaymentInput(
                tax_amount=Decimal("10000000"),
                due_date=date(2026, 1, 1),
                payment_date=date(2026, 6, 1),
            )
        )
        assert result.warning is not None

    def test_milestones(self):
        """Interest at fixed milestones."""
        milestones = generate_interest_milestones(Decimal("10000000"))
        assert len(milestones) == 8
        month = next(m for m in milestones if m.days == 30)
        assert month.interest_amount == Decimal("90000")


class TestContentCreator:
    """Tests for content creator income."""

    def test_domestic_platform_over_threshold(self):
        """600 triệu from Shopee: 5% VAT + 2% PIT, withholding exceeds it."""
        result = calculate_content_creator_tax(
            ContentCreatorInput(
                platforms=[
                    PlatformIncome(
                        platform=CreatorPlatform.SHOPEE,
                        monthly_income=[Decimal("50000000")] * 12,
                    )
                ]
            )
        )
        assert result.total_income == Decimal("600000000")
        assert result.vat.tax_amount == Decimal("30000000")
        assert result.pit.tax_amount == Decimal("12000000")
        assert result.total_withheld == Decimal("60000000")
        assert result.remaining_tax == Decimal("-18000000")
        assert any(r.title == "Có thể được hoàn thuế" for r in result.recommendations)

    def test_foreign_platform_in_usd(self):
        """1000 USD a month from YouTube stays under the 2026 threshold."""
        data = ContentCreatorInput(
            platforms=[
                PlatformIncome(
                    platform=CreatorPlatform.YOUTUBE,
                    monthly_income=[Decimal("1000")] * 12,
                    currency=Currency.USD,
                )
            ]
        )
        result = calculate_content_creator_tax(data)
        assert result.total_income == Decimal("304800000")
        assert result.is_exempt
        assert result.total_withheld == 0

    def test_old_threshold(self):
        """Under the 100 triệu threshold the same income is taxed."""
        result = calculate_content_creator_tax(
            ContentCreatorInput(
                tax_year=2025,
                platforms=[
                    PlatformIncome(
                        platform=CreatorPlatform.YOUTUBE,
                        monthly_income=[Decimal("1000")] * 12,
                        currency=Currency.USD,
                    )
                ],
            )
        )
        assert result.vat.tax_amount == Decimal("15240000")
        assert result.pit.tax_amount == Decimal("6096000")
        assert len(result.quarterly) == 4

    def test_threshold_by_year(self):
        """The threshold moves to 500 triệu in 2026."""
        assert get_creator_threshold(2025) == Decimal("100000000")
        assert get_creator_threshold(2026) == Decimal("500000000")


class TestHouseholdBusiness:
    """Tests for household business tax."""

    def _services(self, monthly_revenue: str, monthly_expenses: str = "0") -> HouseholdBusiness:
        return HouseholdBusiness(
            name="Tiệm",
            category=BusinessCategory.SERVICES,
            monthly_revenue=Decimal(monthly_revenue),
            monthly_expenses=Decimal(monthly_expenses),
        )

    def test_old_law_full_revenue(self):
        """2025: 2% PIT on the whole 1.2 tỷ."""
        result = calculate_household_business_tax(
            HouseholdBusinessTaxInput(
                businesses=[self._services("100000000")], law_version=LawVersion.LAW_2025
            )
        )
        assert result.total_pit == Decimal("24000000")
        assert result.total_vat == Decimal("60000000")

    def test_new_law_presumptive(self):
        """2026 khoán: PIT on revenue above 500 triệu."""
        result = calculate_household_business_tax(
            HouseholdBusinessTaxInput(businesses=[self._services("100000000")])
        )
        assert result.total_pit == Decimal("14000000")
        assert result.threshold_used == Decimal("500000000")

    def test_below_new_threshold(self):
        """400 triệu a year pays nothing in 2026."""
        result = calculate_household_business_tax(
            HouseholdBusinessTaxInput(businesses=[self._services("30000000")])
        )
        assert result.is_above_threshold is False
        assert result.total_tax == 0

    def test_income_method_wins_with_high_expenses(self):
        """15% of 60 triệu profit beats 14 triệu khoán."""
        comparison = compare_household_methods([self._services("100000000", "95000000")])
        assert comparison.income.total_pit == Decimal("9000000")
        assert comparison.presumptive.total_pit == Decimal("14000000")
        assert comparison.recommended == HouseholdTaxMethod.INCOME
        assert comparison.savings == Decimal("5000000")

    def test_income_method_rates(self):
        """Rate depends on the revenue band."""
        assert get_income_method_rate(Decimal("400000000")) == 0
        assert get_income_method_rate(Decimal("1000000000")) == Decimal("0.15")
        assert get_income_method_rate(Decimal("10000000000")) == Decimal("0.17")
        assert get_income_method_rate(Decimal("60000000000")) == Decimal("0.20")

    def test_threshold_allocated_largest_first(self):
        """Flagged businesses take the threshold in order of revenue."""
        businesses = [
            HouseholdBusiness(monthly_revenue=Decimal("25000000")),
            HouseholdBusiness(monthly_revenue=Decimal("40000000")),
        ]
        assert allocate_threshold(businesses, Decimal("500000000")) == [
            Decimal("20000000"),
            Decimal("480000000"),
        ]

    def test_threshold_proportional_when_none_flagged(self):
        """Without flags the threshold is shared by revenue."""
        businesses = [
            HouseholdBusiness(monthly_revenue=Decimal("50000000"), apply_threshold_deduction=False),
            HouseholdBusiness(monthly_revenue=Decimal("50000000"), apply_threshold_deduction=False),
        ]
        deductions = allocate_threshold(businesses, Decimal("500000000"))
        assert deductions == [Decimal("250000000"), Decimal("250000000")]
