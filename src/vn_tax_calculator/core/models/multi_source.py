"""Multi-source annual income models."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.enums import IncomeFrequency, LawVersion, RegionType
from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class IncomeSourceType(str, Enum):
    SALARY = "salary"
    FREELANCE = "freelance"
    RENTAL = "rental"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    SECURITIES = "securities"
    REAL_ESTATE = "real_estate"
    LOTTERY = "lottery"
    INHERITANCE = "inheritance"
    ROYALTY = "royalty"
    CAPITAL_INVESTMENT = "capital_investment"


class IncomeCategory(str, Enum):
    SALARY = "salary"
    INVESTMENT = "investment"
    BUSINESS = "business"
    OTHER = "other"


class IncomeSource(BaseModel):
    """One income stream. A PROJECT frequency means a one-off amount."""

    model_config = {"frozen": True}

    source_type: IncomeSourceType = Field(default=IncomeSourceType.SALARY)
    amount: Decimal = Field(default=Decimal("0"))
    frequency: IncomeFrequency = Field(default=IncomeFrequency.ANNUAL)
    description: str = Field(default="")
    is_from_family: bool = Field(default=False, description="Inheritance/gift from close family")
    is_gov_bond: bool = Field(default=False, description="Interest from government bonds")


class MultiSourceInput(BaseModel):
    model_config = {"frozen": True}

    sources: list[IncomeSource] = Field(default_factory=list)
    dependents: int = Field(default=0)
    has_insurance: bool = Field(default=True, description="Mandatory insurance on the salary")
    insurance_amount: Decimal = Field(
        default=Decimal("0"), description="Annual insurance paid when not deducted from salary"
    )
    pension_contribution: Decimal = Field(default=Decimal("0"), description="Voluntary pension, per year")
    charitable_contribution: Decimal = Field(default=Decimal("0"), description="Per year")
    region: RegionType = Field(default=RegionType.REGION_1)
    law_version: LawVersion = Field(default=LawVersion.LAW_2026)


class SourceTaxResult(BaseModel):
    """Annual tax of one source; salary is progressive, the rest flat-rate."""

    model_config = {"frozen": True}

    source_type: IncomeSourceType
    label: str
    category: IncomeCategory
    annual_amount: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    is_progressive: bool = False
    flat: Optional[FlatRateResult] = Field(default=None, description="Rule result for flat-rate sources")
    method: str = ""
    notes: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def exemption_reason(self) -> Optional[str]:
        return self.flat.exemption_reason if self.flat is not None else None

    @computed_field
    @property
    def effective_rate(self) -> Decimal:
        """Tax over annual amount, in percent."""
        if self.annual_amount == 0:
            return Decimal("0")
        return (self.tax_amount / self.annual_amount * 100).quantize(Decimal("0.01"))


class CategoryTotal(BaseModel):
    model_config = {"frozen": True}

    gross: Decimal = Field(default=Decimal("0"))
    tax: Decimal = Field(default=Decimal("0"))


class MultiSourceResult(BaseModel):
    model_config = {"frozen": True}

    sources: list[SourceTaxResult]
    total_gross_income: Decimal
    total_taxable_income: Decimal
    total_tax: Decimal
    progressive_tax: Decimal
    flat_tax: Decimal
    categories: dict[IncomeCategory, CategoryTotal]
    optimization_tips: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def total_net_income(self) -> Decimal:
        return self.total_gross_income - self.total_tax

    @computed_field
    @property
    def overall_effective_rate(self) -> Decimal:
        if self.total_gross_income == 0:
            return Decimal("0")
        return (self.total_tax / self.total_gross_income * 100).quantize(Decimal("0.01"))
