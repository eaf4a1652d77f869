"""Household (vợ chồng) dependent allocation models."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.enums import LawVersion, RegionType


class TipCategory(str, Enum):
    DEPENDENT = "dependent"
    DEDUCTION = "deduction"
    TIMING = "timing"
    STRUCTURE = "structure"


class PersonIncome(BaseModel):
    model_config = {"frozen": True}

    name: str = Field(default="")
    gross_income: Decimal = Field(default=Decimal("0"), description="Monthly gross salary")
    has_insurance: bool = Field(default=True)
    pension_contribution: Decimal = Field(default=Decimal("0"), description="Voluntary pension per month")
    other_deductions: Decimal = Field(default=Decimal("0"), description="Per month")


class CoupleInput(BaseModel):
    model_config = {"frozen": True}

    person1: PersonIncome = Field(default_factory=lambda: PersonIncome(name="Vợ"))
    person2: PersonIncome = Field(default_factory=lambda: PersonIncome(name="Chồng"))
    total_dependents: int = Field(default=0, description="Dependents the couple can register")
    charitable_contribution: Decimal = Field(default=Decimal("0"))
    voluntary_pension: Decimal = Field(default=Decimal("0"))
    region: RegionType = Field(default=RegionType.REGION_1)
    law_version: LawVersion = Field(default=LawVersion.LAW_2026)


class AllocationScenario(BaseModel):
    """Monthly tax of both spouses for one split of the dependents."""

    model_config = {"frozen": True}

    person1_dependents: int
    person2_dependents: int
    person1_tax: Decimal
    person2_tax: Decimal
    description: str = ""

    @computed_field
    @property
    def total_tax(self) -> Decimal:
        return self.person1_tax + self.person2_tax


class OptimizationTip(BaseModel):
    model_config = {"frozen": True}

    key: str
    title: str
    description: str
    potential_savings: Decimal = Field(default=Decimal("0"), description="Monthly; 0 when not quantifiable")
    category: TipCategory


class CoupleOptimizationResult(BaseModel):
    model_config = {"frozen": True}

    current: AllocationScenario = Field(..., description="Dependents split evenly, odd one to person 2")
    optimal: AllocationScenario
    scenarios: list[AllocationScenario]
    tips: list[OptimizationTip] = Field(default_factory=list)
    combined_gross_income: Decimal
    effective_rate: Decimal

    @computed_field
    @property
    def savings(self) -> Decimal:
        """Monthly tax saved by the optimal split over the even split."""
        return self.current.total_tax - self.optimal.total_tax

    @computed_field
    @property
    def combined_net_income(self) -> Decimal:
        """Combined gross minus the optimal total tax (insurance not deducted)."""
        return self.combined_gross_income - self.optimal.total_tax
