"""Securities tax models: transfers, dividends, bond interest."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class SecuritiesType(str, Enum):
    LISTED = "listed"
    UNLISTED = "unlisted"
    FUND = "fund"
    BOND = "bond"


class SecuritiesTaxMethod(str, Enum):
    """Method for unlisted shares; listed shares always use TRANSACTION."""

    TRANSACTION = "transaction"  # 0.1% of sale value
    CAPITAL_GAINS = "capital_gains"  # 20% of the gain


class BondType(str, Enum):
    GOVERNMENT = "government"
    CORPORATE = "corporate"


class SecuritiesTransaction(BaseModel):
    model_config = {"frozen": True}

    symbol: str = Field(default="")
    securities_type: SecuritiesType = Field(default=SecuritiesType.LISTED)
    quantity: Decimal = Field(default=Decimal("0"))
    buy_price: Decimal = Field(default=Decimal("0"))
    sell_price: Decimal = Field(default=Decimal("0"))
    buy_fee: Decimal = Field(default=Decimal("0"))
    sell_fee: Decimal = Field(default=Decimal("0"))


class DividendEntry(BaseModel):
    model_config = {"frozen": True}

    symbol: str = Field(default="")
    dividend_per_share: Decimal = Field(default=Decimal("0"))
    shares: Decimal = Field(default=Decimal("0"))


class BondInterestEntry(BaseModel):
    model_config = {"frozen": True}

    bond_name: str = Field(default="")
    bond_type: BondType = Field(default=BondType.CORPORATE)
    interest_received: Decimal = Field(default=Decimal("0"))


class SecuritiesTaxInput(BaseModel):
    model_config = {"frozen": True}

    transactions: list[SecuritiesTransaction] = Field(default_factory=list)
    dividends: list[DividendEntry] = Field(default_factory=list)
    bonds: list[BondInterestEntry] = Field(default_factory=list)
    tax_method: SecuritiesTaxMethod = Field(default=SecuritiesTaxMethod.TRANSACTION)


class TransactionTaxResult(BaseModel):
    model_config = {"frozen": True}

    symbol: str
    securities_type: SecuritiesType
    method: SecuritiesTaxMethod
    buy_value: Decimal
    sell_value: Decimal
    total_fees: Decimal
    capital_gain: Decimal
    tax: FlatRateResult

    @computed_field
    @property
    def net_profit(self) -> Decimal:
        return self.capital_gain - self.tax.tax_amount


class SecuritiesTaxResult(BaseModel):
    model_config = {"frozen": True}

    transactions: list[TransactionTaxResult]
    dividends: list[FlatRateResult]
    bonds: list[FlatRateResult]
    total_capital_gain: Decimal
    total_income: Decimal
    total_tax: Decimal
    effective_rate: Decimal

    @computed_field
    @property
    def total_net(self) -> Decimal:
        return self.total_income - self.total_tax


class UnlistedMethodComparison(BaseModel):
    model_config = {"frozen": True}

    transaction_method_tax: Decimal
    capital_gains_method_tax: Decimal
    recommendation: SecuritiesTaxMethod

    @computed_field
    @property
    def savings(self) -> Decimal:
        return abs(self.transaction_method_tax - self.capital_gains_method_tax)
