"""Withholding tax (thuế khấu trừ tại nguồn) models."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.enums import LawVersion, Residency
from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class WithholdingIncomeType(str, Enum):
    """Income types subject to withholding at the payer."""

    SALARY_WITH_CONTRACT = "salary_with_contract"  # HĐLĐ >= 3 tháng
    SALARY_WITHOUT_CONTRACT = "salary_without_contract"
    FREELANCE = "freelance"
    RENTAL = "rental"
    DIVIDEND = "dividend"
    INTEREST_REGULAR = "interest_regular"
    INTEREST_GOVBOND = "interest_govbond"
    SECURITIES = "securities"
    REAL_ESTATE = "real_estate"
    LOTTERY = "lottery"
    INHERITANCE = "inheritance"
    ROYALTY = "royalty"


class ForeignContractorType(str, Enum):
    """Foreign contractor (nhà thầu nước ngoài) activity types."""

    SERVICE = "service"
    GOODS_WITH_SERVICE = "goods_with_service"
    GOODS_ONLY = "goods_only"
    EQUIPMENT_RENTAL = "equipment_rental"
    PROPERTY_RENTAL = "property_rental"
    INSURANCE = "insurance"


class WithholdingInput(BaseModel):
    """A single payment to withhold tax from."""

    model_config = {"frozen": True}

    income_type: WithholdingIncomeType = Field(default=WithholdingIncomeType.FREELANCE)
    payment_amount: Decimal = Field(default=Decimal("0"), description="Amount paid this time")
    residency: Residency = Field(default=Residency.RESIDENT)
    is_family_member: bool = Field(
        default=False, description="Inheritance/gift between close family members"
    )
    dependents: int = Field(default=0, description="Only used for salary with contract")
    law_version: LawVersion = Field(default=LawVersion.LAW_2026)


class WithholdingResult(BaseModel):
    """Tax withheld from one payment."""

    model_config = {"frozen": True}

    income_type: WithholdingIncomeType
    residency: Residency
    is_progressive: bool = Field(default=False, description="Salary computed on the bracket table")
    tax: FlatRateResult

    @computed_field
    @property
    def requires_withholding(self) -> bool:
        return not self.tax.is_exempt and self.tax.tax_amount > 0

    @property
    def withholding_amount(self) -> Decimal:
        return self.tax.tax_amount

    @property
    def net_payment(self) -> Decimal:
        return self.tax.net_amount


class ResidencyComparison(BaseModel):
    """Same payment for a resident and a non-resident."""

    model_config = {"frozen": True}

    resident: WithholdingResult
    non_resident: WithholdingResult

    @computed_field
    @property
    def difference(self) -> Decimal:
        """Extra tax withheld from a non-resident."""
        return self.non_resident.withholding_amount - self.resident.withholding_amount


class ForeignContractorInput(BaseModel):
    """Payment to a foreign contractor."""

    model_config = {"frozen": True}

    contract_value: Decimal = Field(default=Decimal("0"))
    contractor_type: ForeignContractorType = Field(default=ForeignContractorType.SERVICE)
    is_vat_registered: bool = Field(
        default=False, description="Contractor declares VAT itself by the deduction method"
    )


class ForeignContractorResult(BaseModel):
    """Foreign contractor tax (thuế nhà thầu)."""

    model_config = {"frozen": True}

    contractor_type: ForeignContractorType
    contract_value: Decimal
    pit: FlatRateResult
    vat: FlatRateResult
    legal_note: Optional[str] = None

    @computed_field
    @property
    def total_tax(self) -> Decimal:
        return self.pit.tax_amount + self.vat.tax_amount

    @computed_field
    @property
    def net_payment(self) -> Decimal:
        return self.contract_value - self.total_tax
