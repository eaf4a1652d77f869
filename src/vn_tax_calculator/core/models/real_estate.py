"""Real estate transfer models."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.enums import Relationship
from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class RealEstateType(str, Enum):
    LAND = "land"
    HOUSE = "house"
    APARTMENT = "apartment"
    LAND_HOUSE = "land_house"
    COMMERCIAL = "commercial"


class TransferType(str, Enum):
    SALE = "sale"
    INHERITANCE = "inheritance"
    GIFT = "gift"
    FAMILY = "family"  # chuyển nhượng trong gia đình


class RealEstateTransfer(BaseModel):
    model_config = {"frozen": True}

    property_type: RealEstateType = Field(default=RealEstateType.APARTMENT)
    transfer_type: TransferType = Field(default=TransferType.SALE)
    transfer_value: Decimal = Field(default=Decimal("0"))
    purchase_value: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    transfer_date: Optional[date] = None
    relationship: Relationship = Field(default=Relationship.NON_RELATIVE)
    is_first_home: bool = False


class RealEstateTransferResult(BaseModel):
    model_config = {"frozen": True}

    transfer: RealEstateTransfer
    pit: FlatRateResult
    registration_fee: Decimal
    capital_gain: Decimal = Field(..., description="For reference only; PIT is on transfer value")
    holding_months: int
    exemption_amount: Decimal = Field(..., description="PIT that would have been due without the exemption")
    note: Optional[str] = None

    @computed_field
    @property
    def total_fees(self) -> Decimal:
        return self.pit.tax_amount + self.registration_fee

    @computed_field
    @property
    def net_proceeds(self) -> Decimal:
        return self.pit.gross_amount - self.total_fees


class RealEstateTransferTaxResult(BaseModel):
    model_config = {"frozen": True}

    transfers: list[RealEstateTransferResult]
    total_transfer_value: Decimal
    total_capital_gain: Decimal
    total_pit: Decimal
    total_registration_fee: Decimal
    total_exemptions: Decimal
    effective_rate: Decimal

    @computed_field
    @property
    def total_fees(self) -> Decimal:
        return self.total_pit + self.total_registration_fee


class TransferTaxEstimate(BaseModel):
    model_config = {"frozen": True}

    pit: Decimal
    registration_fee: Decimal
    total: Decimal
    net_proceeds: Decimal
