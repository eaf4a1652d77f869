"""Inheritance and gift (thừa kế, quà tặng) models."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from vn_tax_calculator.core.models.enums import Relationship
from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class TransferKind(str, Enum):
    INHERITANCE = "inheritance"
    GIFT = "gift"


class InheritedAssetType(str, Enum):
    REAL_ESTATE = "real_estate"
    SECURITIES = "securities"
    CASH = "cash"
    VEHICLES = "vehicles"
    JEWELRY = "jewelry"
    OTHER = "other"


class InheritedAsset(BaseModel):
    model_config = {"frozen": True}

    asset_type: InheritedAssetType = Field(default=InheritedAssetType.OTHER)
    value: Decimal = Field(default=Decimal("0"))
    description: str = Field(default="")


class InheritanceGiftInput(BaseModel):
    model_config = {"frozen": True}

    transfer_kind: TransferKind = Field(default=TransferKind.INHERITANCE)
    relationship: Relationship = Field(default=Relationship.NON_RELATIVE)
    assets: list[InheritedAsset] = Field(default_factory=list)
    transaction_date: Optional[date] = None


class InheritanceGiftResult(BaseModel):
    model_config = {"frozen": True}

    transfer_kind: TransferKind
    relationship: Relationship
    total_value: Decimal
    tax: FlatRateResult
    effective_rate: Decimal = Field(default=Decimal("0"), description="Percent of total value")
    declaration_deadline: Optional[date] = None
    required_documents: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

    @property
    def tax_amount(self) -> Decimal:
        return self.tax.tax_amount

    @property
    def exemption_reason(self) -> Optional[str]:
        return self.tax.exemption_reason
