"""Employee vs freelancer vs household business models."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.comparison import NetResult
from vn_tax_calculator.core.models.enums import BusinessCategory, RegionType


class BusinessForm(str, Enum):
    EMPLOYEE = "employee"
    FREELANCER = "freelancer"
    HOUSEHOLD = "household"


class ProsCons(BaseModel):
    model_config = {"frozen": True}

    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class BusinessFormInput(BaseModel):
    """One year of income, to be earned in one of three forms."""

    model_config = {"frozen": True}

    annual_revenue: Decimal = Field(default=Decimal("0"), description="Annual revenue or gross income")
    business_category: BusinessCategory = Field(default=BusinessCategory.SERVICES)
    region: RegionType = Field(default=RegionType.REGION_1)
    dependents: int = Field(default=0)
    has_self_insurance: bool = Field(
        default=True, description="Freelancer/household buys voluntary health insurance"
    )


class BusinessFormOutcome(BaseModel):
    """Annual figures for one business form."""

    model_config = {"frozen": True}

    form: BusinessForm
    net: NetResult = Field(..., description="Annual gross, tax, insurance and net")
    pit: Decimal = Field(default=Decimal("0"))
    vat: Decimal = Field(default=Decimal("0"))
    employer_insurance: Decimal = Field(default=Decimal("0"), description="Employer share, employee form only")
    is_exempt: bool = False
    pros_cons: ProsCons = Field(default_factory=ProsCons)

    @computed_field
    @property
    def total_cost(self) -> Decimal:
        """Cost to whoever pays the income (gross plus employer insurance)."""
        return self.net.gross_income + self.employer_insurance


class BusinessFormComparison(BaseModel):
    model_config = {"frozen": True}

    employee: BusinessFormOutcome
    freelancer: BusinessFormOutcome
    household: BusinessFormOutcome
    recommendation: BusinessForm
    summary: str

    @property
    def outcomes(self) -> list[BusinessFormOutcome]:
        return [self.employee, self.freelancer, self.household]

    @property
    def recommended(self) -> BusinessFormOutcome:
        return {o.form: o for o in self.outcomes}[self.recommendation]

    @computed_field
    @property
    def freelancer_savings(self) -> Decimal:
        """Freelancer net minus employee net."""
        return self.freelancer.net.net_income - self.employee.net.net_income

    @computed_field
    @property
    def household_savings(self) -> Decimal:
        """Household business net minus employee net."""
        return self.household.net.net_income - self.employee.net.net_income
