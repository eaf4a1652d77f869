"""Gold transfer tax models."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class GoldType(str, Enum):
    SJC = "sjc"
    PNJ = "pnj"
    DOJI = "doji"
    OTHER_BAR = "other_bar"
    JEWELRY = "jewelry"


class GoldUnit(str, Enum):
    LUONG = "luong"  # 37.5 g
    CHI = "chi"  # 3.75 g
    GRAM = "gram"


class TradeSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class GoldTransaction(BaseModel):
    model_config = {"frozen": True}

    side: TradeSide = Field(default=TradeSide.SELL)
    gold_type: GoldType = Field(default=GoldType.SJC)
    unit: GoldUnit = Field(default=GoldUnit.LUONG)
    quantity: Decimal = Field(default=Decimal("0"))
    price_per_unit: Decimal = Field(default=Decimal("0"))
    transaction_date: Optional[date] = Field(
        default=None, description="Falls back to the calculation date when missing"
    )


class GoldTransferTaxInput(BaseModel):
    model_config = {"frozen": True}

    transactions: list[GoldTransaction] = Field(default_factory=list)
    calculation_date: Optional[date] = None


class GoldTransactionResult(BaseModel):
    model_config = {"frozen": True}

    transaction: GoldTransaction
    grams: Decimal
    tax: FlatRateResult

    @computed_field
    @property
    def is_taxable(self) -> bool:
        return not self.tax.is_exempt


class GoldTransferTaxResult(BaseModel):
    model_config = {"frozen": True}

    transactions: list[GoldTransactionResult]
    total_taxable_value: Decimal
    total_non_taxable_value: Decimal
    total_tax: Decimal
    effective_rate: Decimal = Field(..., description="Percent of total value, 3 decimals")
    is_law_effective: bool
    effective_date: date


class GoldProfit(BaseModel):
    model_config = {"frozen": True}

    buy_value: Decimal
    sell_value: Decimal
    profit: Decimal
    profit_percent: Decimal
    tax_on_sale: Decimal
    net_profit: Decimal
