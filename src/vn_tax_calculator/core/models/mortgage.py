"""Mortgage (vay mua nhà) models."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class PropertyType(str, Enum):
    SECONDARY = "secondary"  # nhà thứ cấp
    PRIMARY_DEVELOPER = "primary_developer"  # mua từ chủ đầu tư


class RepaymentMethod(str, Enum):
    ANNUITY = "annuity"  # trả góp đều
    STRAIGHT_LINE = "straight_line"  # gốc đều, lãi giảm dần


class LoanPhase(str, Enum):
    GRACE = "grace"
    PREFERENTIAL = "preferential"
    FLOATING = "floating"


class MortgagePhaseConfig(BaseModel):
    """Rate phases of a loan. Rates are annual percentages (7.0 = 7%/năm)."""

    model_config = {"frozen": True}

    loan_term_years: int = Field(default=20)
    preferential_rate_percent: Decimal = Field(default=Decimal("7.0"))
    preferential_months: int = Field(default=12)
    floating_rate_percent: Decimal = Field(default=Decimal("10.5"))
    grace_period_months: int = Field(default=0, description="Interest-only months at the start")
    repayment_method: RepaymentMethod = Field(default=RepaymentMethod.ANNUITY)

    @property
    def total_months(self) -> int:
        return max(0, self.loan_term_years) * 12


class MortgageInput(MortgagePhaseConfig):
    property_price: Decimal = Field(default=Decimal("3000000000"))
    down_payment_percent: Decimal = Field(default=Decimal("30"))
    monthly_income: Decimal = Field(default=Decimal("30000000"))
    other_debt_payments: Decimal = Field(default=Decimal("0"))
    property_type: PropertyType = Field(default=PropertyType.SECONDARY)


class AmortizationRow(BaseModel):
    model_config = {"frozen": True}

    month: int
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal
    phase: LoanPhase

    @computed_field
    @property
    def total_payment(self) -> Decimal:
        return self.principal + self.interest


class YearlyAmortization(BaseModel):
    model_config = {"frozen": True}

    year: int
    total_principal: Decimal
    total_interest: Decimal
    total_payment: Decimal
    ending_balance: Decimal


class UpfrontCosts(BaseModel):
    model_config = {"frozen": True}

    registration_fee: Decimal = Field(..., description="Lệ phí trước bạ 0.5%")
    notary_fee: Decimal
    appraisal_fee: Decimal
    maintenance_fee: Decimal = Field(..., description="2% for developer sales")
    vat: Decimal = Field(..., description="10% on the construction share, developer sales")

    @computed_field
    @property
    def total(self) -> Decimal:
        return self.registration_fee + self.notary_fee + self.appraisal_fee + self.maintenance_fee + self.vat


class SensitivityScenario(BaseModel):
    model_config = {"frozen": True}

    label: str
    rate_percent: Decimal
    monthly_payment: Decimal
    difference_from_base: Decimal
    total_interest: Decimal


class MortgageResult(BaseModel):
    model_config = {"frozen": True}

    loan_amount: Decimal
    down_payment: Decimal
    preferential_payment: Decimal
    floating_payment: Decimal
    total_interest: Decimal
    total_payment: Decimal
    dti_ratio: Decimal = Field(..., description="Debt-to-income, percent with 1 decimal")
    max_loan_by_income: Decimal
    fees: UpfrontCosts
    schedule: list[AmortizationRow]
    yearly: list[YearlyAmortization]
    sensitivity: list[SensitivityScenario]

    @computed_field
    @property
    def total_upfront_cost(self) -> Decimal:
        return self.down_payment + self.fees.total
