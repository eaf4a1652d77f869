"""Household business (hộ kinh doanh) models."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.enums import BusinessCategory, LawVersion
from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class HouseholdTaxMethod(str, Enum):
    PRESUMPTIVE = "khoan"  # rate x (revenue - threshold share)
    INCOME = "income"  # 15/17/20% x (revenue - expenses), from 2026


class HouseholdBusiness(BaseModel):
    model_config = {"frozen": True}

    name: str = Field(default="")
    category: BusinessCategory = Field(default=BusinessCategory.DISTRIBUTION)
    monthly_revenue: Decimal = Field(default=Decimal("0"))
    monthly_expenses: Decimal = Field(default=Decimal("0"))
    operating_months: int = Field(default=12, description="Months operated in the year, 1-12")
    has_business_license: bool = False
    apply_threshold_deduction: bool = Field(
        default=True, description="Take a share of the 500 triệu threshold for this business"
    )

    @property
    def annual_revenue(self) -> Decimal:
        return max(Decimal("0"), self.monthly_revenue) * min(max(self.operating_months, 0), 12)

    @property
    def annual_expenses(self) -> Decimal:
        return max(Decimal("0"), self.monthly_expenses) * min(max(self.operating_months, 0), 12)


class HouseholdBusinessTaxInput(BaseModel):
    model_config = {"frozen": True}

    businesses: list[HouseholdBusiness] = Field(default_factory=list)
    law_version: LawVersion = Field(default=LawVersion.LAW_2026)
    tax_method: HouseholdTaxMethod = Field(default=HouseholdTaxMethod.PRESUMPTIVE)


class BusinessTaxResult(BaseModel):
    model_config = {"frozen": True}

    name: str
    category: BusinessCategory
    method: HouseholdTaxMethod
    annual_revenue: Decimal
    annual_expenses: Decimal
    threshold_deduction: Decimal
    pit: FlatRateResult
    vat: FlatRateResult
    recommendation: str

    @computed_field
    @property
    def total_tax(self) -> Decimal:
        return self.pit.tax_amount + self.vat.tax_amount

    @computed_field
    @property
    def net_income(self) -> Decimal:
        return self.annual_revenue - self.annual_expenses - self.total_tax


class HouseholdBusinessTaxResult(BaseModel):
    model_config = {"frozen": True}

    law_version: LawVersion
    method: HouseholdTaxMethod
    threshold: Decimal
    is_above_threshold: bool
    businesses: list[BusinessTaxResult]
    total_revenue: Decimal
    total_expenses: Decimal
    total_pit: Decimal
    total_vat: Decimal
    threshold_used: Decimal

    @computed_field
    @property
    def total_tax(self) -> Decimal:
        return self.total_pit + self.total_vat

    @computed_field
    @property
    def total_net_income(self) -> Decimal:
        return self.total_revenue - self.total_expenses - self.total_tax


class HouseholdMethodComparison(BaseModel):
    model_config = {"frozen": True}

    presumptive: HouseholdBusinessTaxResult
    income: HouseholdBusinessTaxResult
    recommended: HouseholdTaxMethod
    explanation: str

    @computed_field
    @property
    def savings(self) -> Decimal:
        return abs(self.presumptive.total_tax - self.income.total_tax)
