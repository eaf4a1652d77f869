"""Job offer (so sánh lương nhiều công ty) models."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.enums import RegionType
from vn_tax_calculator.core.models.salary import InsuranceBreakdown, InsuranceOptions


class CompanyOffer(BaseModel):
    model_config = {"frozen": True}

    name: str = Field(default="")
    gross_salary: Decimal = Field(default=Decimal("0"), description="Monthly gross")
    has_insurance: bool = Field(default=True)
    insurance_options: InsuranceOptions = Field(default_factory=InsuranceOptions)
    region: RegionType = Field(default=RegionType.REGION_1)
    bonus_months: int = Field(default=1, description="1 = tháng 13, 2 = tháng 13 + 14; capped at 12")
    other_benefits: Decimal = Field(default=Decimal("0"), description="Monthly benefits paid on top")
    declared_salary: Optional[Decimal] = Field(default=None, description="Insurance base when not the gross")


class CompanyResult(BaseModel):
    model_config = {"frozen": True}

    name: str
    monthly_gross: Decimal
    monthly_insurance: InsuranceBreakdown
    monthly_tax: Decimal
    monthly_net: Decimal
    monthly_benefits: Decimal
    annual_gross: Decimal = Field(..., description="12 x gross")
    annual_bonus: Decimal = Field(..., description="bonus_months x gross")
    annual_benefits: Decimal
    annual_insurance: Decimal = Field(..., description="Insurance is not charged on bonuses")
    annual_tax: Decimal = Field(..., description="Twelve regular months plus the extra tax of each bonus month")
    effective_rate: Decimal = Field(..., description="Annual tax / annual total gross, in percent")

    @computed_field
    @property
    def monthly_total(self) -> Decimal:
        return self.monthly_net + self.monthly_benefits

    @computed_field
    @property
    def annual_total_gross(self) -> Decimal:
        return self.annual_gross + self.annual_bonus + self.annual_benefits

    @computed_field
    @property
    def annual_net(self) -> Decimal:
        return self.annual_total_gross - self.annual_insurance - self.annual_tax


class OfferComparison(BaseModel):
    """Several offers for the same person; indexes point into ``companies``."""

    model_config = {"frozen": True}

    companies: list[CompanyResult]
    best_by_monthly_net: int
    best_by_annual_net: int
    lowest_tax: int

    @computed_field
    @property
    def max_monthly_difference(self) -> Decimal:
        nets = [c.monthly_net for c in self.companies]
        return max(nets) - min(nets) if nets else Decimal("0")

    @computed_field
    @property
    def max_annual_difference(self) -> Decimal:
        nets = [c.annual_net for c in self.companies]
        return max(nets) - min(nets) if nets else Decimal("0")
