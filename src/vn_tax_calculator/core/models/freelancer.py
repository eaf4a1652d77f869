"""Freelancer vs employee and creator income-source models."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.comparison import BreakEvenResult, ComparisonResult, NetResult
from vn_tax_calculator.core.models.content_creator import Currency
from vn_tax_calculator.core.models.enums import IncomeFrequency, LawVersion, RegionType
from vn_tax_calculator.core.models.flat_rate import FlatRateResult
from vn_tax_calculator.core.models.salary import InsuranceOptions


class FreelancerInput(BaseModel):
    """Freelance income to compare against the same gross as a salary."""

    model_config = {"frozen": True}

    gross_income: Decimal = Field(default=Decimal("0"), description="Amount per frequency period")
    frequency: IncomeFrequency = Field(default=IncomeFrequency.MONTHLY)
    dependents: int = Field(default=0)
    has_insurance: bool = Field(default=True, description="Employee side pays mandatory insurance")
    insurance_options: InsuranceOptions = Field(default_factory=InsuranceOptions)
    region: RegionType = Field(default=RegionType.REGION_1)
    law_version: LawVersion = Field(default=LawVersion.LAW_2026)


class FreelancerComparisonResult(BaseModel):
    """Monthly freelancer vs employee nets plus the break-even gross."""

    model_config = {"frozen": True}

    monthly_gross: Decimal
    annual_gross: Decimal
    freelancer: NetResult = Field(..., description="Monthly figures at the flat 10% rate")
    employee: NetResult = Field(..., description="Monthly figures under the salary rules")
    comparison: ComparisonResult = Field(..., description="a = freelancer, b = employee")
    freelancer_annual_tax: Decimal
    freelancer_annual_net: Decimal
    employee_annual_tax: Decimal
    employee_annual_insurance: Decimal
    employee_annual_net: Decimal
    break_even: BreakEvenResult

    @computed_field
    @property
    def net_difference(self) -> Decimal:
        """Monthly freelancer net minus employee net."""
        return self.freelancer.net_income - self.employee.net_income

    @computed_field
    @property
    def annual_difference(self) -> Decimal:
        return self.freelancer_annual_net - self.employee_annual_net

    @computed_field
    @property
    def freelancer_better(self) -> bool:
        return self.net_difference > 0


class CreatorIncomeSourceType(str, Enum):
    YOUTUBE = "youtube"  # AdSense, paid in USD
    TIKTOK = "tiktok"
    FACEBOOK_REELS = "facebook_reels"
    AFFILIATE = "affiliate"  # Shopee/Lazada/Tiki affiliate commissions
    SPONSORSHIP = "sponsorship"
    DONATION = "donation"  # Super Chat, membership
    DIGITAL_PRODUCT = "digital_product"
    CONSULTING = "consulting"
    OTHER = "other"


class CreatorIncomeSource(BaseModel):
    """One creator income stream, in VND or USD."""

    model_config = {"frozen": True}

    source_type: CreatorIncomeSourceType = Field(default=CreatorIncomeSourceType.OTHER)
    name: str = Field(default="")
    amount: Decimal = Field(default=Decimal("0"))
    currency: Currency = Field(default=Currency.VND)
    frequency: IncomeFrequency = Field(default=IncomeFrequency.MONTHLY)
    is_foreign: Optional[bool] = Field(
        default=None, description="Paid from abroad; taken from the source type when None"
    )
    withheld_tax: Decimal = Field(default=Decimal("0"), description="Tax already withheld, VND per year")


class CreatorIncomeInput(BaseModel):
    model_config = {"frozen": True}

    sources: list[CreatorIncomeSource] = Field(default_factory=list)
    exchange_rate: Decimal = Field(default=Decimal("25400"), description="VND per USD")
    dependents: int = Field(default=0)
    has_insurance: bool = Field(default=True)
    insurance_options: InsuranceOptions = Field(default_factory=InsuranceOptions)
    region: RegionType = Field(default=RegionType.REGION_1)
    law_version: LawVersion = Field(default=LawVersion.LAW_2026)


class CreatorSourceResult(BaseModel):
    model_config = {"frozen": True}

    source_type: CreatorIncomeSourceType
    name: str
    is_foreign: bool
    monthly_amount: Decimal = Field(..., description="VND per month")
    annual_amount: Decimal = Field(..., description="VND per year")
    tax: FlatRateResult = Field(..., description="Estimated 10% on the annual amount")
    withheld_tax: Decimal

    @computed_field
    @property
    def tax_owed(self) -> Decimal:
        """Estimated tax not yet withheld (never negative)."""
        return max(Decimal("0"), self.tax.tax_amount - self.withheld_tax)


class CreatorIncomeComparison(BaseModel):
    """Creator income taxed as freelance income vs the same gross as salary."""

    model_config = {"frozen": True}

    sources: list[CreatorSourceResult]
    total_monthly_gross: Decimal
    total_annual_gross: Decimal
    foreign_income: Decimal
    domestic_income: Decimal
    total_estimated_tax: Decimal
    total_withheld_tax: Decimal
    total_tax_owed: Decimal
    annual_net: Decimal
    monthly_net: Decimal
    effective_rate: Decimal = Field(..., description="Percent")
    employee: NetResult = Field(..., description="Monthly employee figures on the monthly gross")
    comparison: ComparisonResult = Field(..., description="a = creator (monthly), b = employee")

    @computed_field
    @property
    def creator_better(self) -> bool:
        return self.comparison.a.net_income > self.comparison.b.net_income
