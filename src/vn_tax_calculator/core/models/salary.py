"""Salary, insurance and taxable income models."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.brackets import BracketBreakdown
from vn_tax_calculator.core.models.enums import LawVersion, RegionType


class InsuranceOptions(BaseModel):
    """Which mandatory insurance schemes apply."""

    model_config = {"frozen": True}

    bhxh: bool = Field(default=True, description="Bảo hiểm xã hội (8%)")
    bhyt: bool = Field(default=True, description="Bảo hiểm y tế (1.5%)")
    bhtn: bool = Field(default=True, description="Bảo hiểm thất nghiệp (1%)")

    @classmethod
    def none(cls) -> "InsuranceOptions":
        return cls(bhxh=False, bhyt=False, bhtn=False)


class InsuranceBreakdown(BaseModel):
    """Employee insurance contributions for one month."""

    model_config = {"frozen": True}

    bhxh: Decimal = Field(default=Decimal("0"))
    bhyt: Decimal = Field(default=Decimal("0"))
    bhtn: Decimal = Field(default=Decimal("0"))

    @computed_field
    @property
    def total(self) -> Decimal:
        """Sum of all contributions."""
        return self.bhxh + self.bhyt + self.bhtn


class TaxableIncomeInput(BaseModel):
    """Monthly salary input."""

    model_config = {"frozen": True}

    gross_income: Decimal = Field(default=Decimal("0"), description="Gross monthly salary")
    declared_salary: Optional[Decimal] = Field(
        default=None, description="Insurance contribution base; gross when None"
    )
    dependents: int = Field(default=0, description="Number of registered dependents")
    has_insurance: bool = Field(default=True)
    insurance_options: InsuranceOptions = Field(default_factory=InsuranceOptions)
    region: RegionType = Field(default=RegionType.REGION_1)
    other_deductions: Decimal = Field(
        default=Decimal("0"), description="Charity, voluntary pension and other deductions"
    )
    allowances_exempt: Decimal = Field(
        default=Decimal("0"), description="Tax-exempt allowances included in gross (meals, phone...)"
    )


class SalaryTaxResult(BaseModel):
    """Gross-to-net salary computation."""

    model_config = {"frozen": True}

    law_version: LawVersion
    gross_income: Decimal
    insurance: InsuranceBreakdown
    personal_deduction: Decimal
    dependent_deduction: Decimal
    other_deductions: Decimal
    exempt_income: Decimal = Field(default=Decimal("0"))
    taxable_income: Decimal
    tax_amount: Decimal
    net_income: Decimal
    breakdown: list[BracketBreakdown] = Field(default_factory=list)
    marginal_rate: Decimal = Field(default=Decimal("0"))
    effective_rate: Decimal = Field(default=Decimal("0"), description="Tax / gross in percent")

    @property
    def total_deductions(self) -> Decimal:
        """Insurance plus family and other deductions."""
        return (
            self.insurance.total
            + self.personal_deduction
            + self.dependent_deduction
            + self.other_deductions
        )


class LawComparison(BaseModel):
    """Same salary under the old and the new law."""

    model_config = {"frozen": True}

    old: SalaryTaxResult
    new: SalaryTaxResult

    @computed_field
    @property
    def tax_saving(self) -> Decimal:
        """Monthly tax saved by the new law (negative if it costs more)."""
        return self.old.tax_amount - self.new.tax_amount

    @computed_field
    @property
    def net_increase(self) -> Decimal:
        return self.new.net_income - self.old.net_income
