"""Expatriate (người nước ngoài) PIT models."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.brackets import BracketBreakdown
from vn_tax_calculator.core.models.enums import LawVersion, RegionType, Residency
from vn_tax_calculator.core.models.salary import InsuranceBreakdown, InsuranceOptions


class ForeignerAllowances(BaseModel):
    """Monthly benefits paid on top of salary."""

    model_config = {"frozen": True}

    housing: Decimal = Field(default=Decimal("0"), description="Taxable")
    school_fees: Decimal = Field(default=Decimal("0"), description="Exempt: children's tuition")
    home_leave_fare: Decimal = Field(default=Decimal("0"), description="Exempt: one trip home per year")
    relocation: Decimal = Field(default=Decimal("0"), description="Exempt: one-off move")
    language_training: Decimal = Field(default=Decimal("0"), description="Taxable")
    other: Decimal = Field(default=Decimal("0"), description="Taxable")


class AllowanceSplit(BaseModel):
    model_config = {"frozen": True}

    taxable: Decimal
    exempt: Decimal

    @computed_field
    @property
    def total(self) -> Decimal:
        return self.taxable + self.exempt


class TreatyCountry(BaseModel):
    model_config = {"frozen": True}

    code: str
    name: str
    year: int


class ForeignerTaxInput(BaseModel):
    model_config = {"frozen": True}

    nationality: str = Field(default="", description="ISO 3166-1 alpha-2 country code")
    arrival_date: Optional[date] = Field(default=None, description="Overrides days_in_vietnam when set")
    days_in_vietnam: int = Field(default=0)
    has_permanent_residence: bool = Field(default=False)
    gross_income: Decimal = Field(default=Decimal("0"), description="Monthly income arising in Vietnam")
    foreign_income: Decimal = Field(default=Decimal("0"), description="Monthly income abroad (residents only)")
    allowances: ForeignerAllowances = Field(default_factory=ForeignerAllowances)
    has_vietnamese_insurance: bool = Field(default=False)
    insurance_options: InsuranceOptions = Field(default_factory=InsuranceOptions)
    region: RegionType = Field(default=RegionType.REGION_1)
    dependents: int = Field(default=0)
    tax_year: int = Field(default=2026)


class ForeignerTaxResult(BaseModel):
    """Monthly tax of a foreign employee given their residency status."""

    model_config = {"frozen": True}

    residency: Residency
    days_in_vietnam: int
    law_version: LawVersion
    gross_income: Decimal
    foreign_income: Decimal
    allowances: AllowanceSplit
    total_income: Decimal
    insurance: InsuranceBreakdown = Field(default_factory=InsuranceBreakdown)
    personal_deduction: Decimal = Field(default=Decimal("0"))
    dependent_deduction: Decimal = Field(default=Decimal("0"))
    taxable_income: Decimal
    tax_amount: Decimal
    breakdown: list[BracketBreakdown] = Field(default_factory=list)
    effective_rate: Decimal
    net_income: Decimal
    tax_under_old_law: Optional[Decimal] = None
    tax_under_new_law: Optional[Decimal] = None
    treaty: Optional[TreatyCountry] = None
    notes: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def total_deductions(self) -> Decimal:
        return self.insurance.total + self.personal_deduction + self.dependent_deduction

    @computed_field
    @property
    def savings(self) -> Optional[Decimal]:
        """Tax saved by the 2026 law; only set for residents in 2026."""
        if self.tax_under_old_law is None or self.tax_under_new_law is None:
            return None
        return self.tax_under_old_law - self.tax_under_new_law

    @computed_field
    @property
    def has_treaty(self) -> bool:
        return self.treaty is not None
