"""Digital asset (crypto) transfer tax models."""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class CryptoAssetType(str, Enum):
    BTC = "btc"
    ETH = "eth"
    STABLECOIN = "stablecoin"
    ALTCOIN = "altcoin"
    NFT = "nft"
    OTHER = "other"


class CryptoTransactionType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    SWAP = "swap"
    TRANSFER = "transfer"  # chuyển ví


class CryptoTransaction(BaseModel):
    model_config = {"frozen": True}

    transaction_date: date
    transaction_type: CryptoTransactionType = Field(default=CryptoTransactionType.SELL)
    asset_type: CryptoAssetType = Field(default=CryptoAssetType.OTHER)
    asset_name: str = Field(default="")
    total_value: Decimal = Field(default=Decimal("0"), description="Value in VND")
    fee: Decimal = Field(default=Decimal("0"))


class CryptoTransactionResult(BaseModel):
    model_config = {"frozen": True}

    transaction: CryptoTransaction
    tax: FlatRateResult

    @computed_field
    @property
    def is_taxable(self) -> bool:
        return not self.tax.is_exempt


class AssetTaxSummary(BaseModel):
    model_config = {"frozen": True}

    asset_type: CryptoAssetType
    asset_name: str
    transaction_count: int
    total_value: Decimal
    tax_amount: Decimal


class MonthlyCryptoSummary(BaseModel):
    model_config = {"frozen": True}

    month: int
    transaction_count: int
    total_value: Decimal
    tax_amount: Decimal


class AssetRateComparison(BaseModel):
    model_config = {"frozen": True}

    asset: str
    rate: Decimal
    tax_amount: Decimal
    difference: Decimal = Field(..., description="Tax at this rate minus actual crypto tax")


class CryptoTaxResult(BaseModel):
    model_config = {"frozen": True}

    transactions: list[CryptoTransactionResult]
    total_buy_value: Decimal
    total_sell_value: Decimal
    total_swap_value: Decimal
    total_taxable_value: Decimal
    total_tax: Decimal
    effective_rate: Decimal
    by_asset: list[AssetTaxSummary]
    monthly: list[MonthlyCryptoSummary]
    rate_comparison: list[AssetRateComparison]

    @computed_field
    @property
    def taxable_count(self) -> int:
        return sum(1 for t in self.transactions if t.is_taxable)
