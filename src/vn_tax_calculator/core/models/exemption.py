"""Tax-exempt income categories (Điều 4 Luật Thuế TNCN) and eligibility checks."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExemptionCategory(str, Enum):
    # Luật Thuế TNCN 2007
    REAL_ESTATE_ONLY_HOME = "real_estate_only_home"
    FAMILY_TRANSFER = "family_transfer"
    INHERITANCE_FAMILY = "inheritance_family"
    GIFT_FAMILY = "gift_family"
    AGRICULTURAL_INCOME = "agricultural_income"
    INTEREST_DEPOSITS = "interest_deposits"
    LIFE_INSURANCE = "life_insurance"
    PENSION = "pension"
    SCHOLARSHIP = "scholarship"
    COMPENSATION = "compensation"
    CHARITY = "charity"
    FOREIGN_DIPLOMATIC = "foreign_diplomatic"
    INTERNATIONAL_TREATY = "international_treaty"
    SEVERANCE_PAY = "severance_pay"
    NIGHT_SHIFT_ALLOWANCE = "night_shift_allowance"
    HAZARD_ALLOWANCE = "hazard_allowance"
    # Luật sửa đổi 2025, hiệu lực 2026
    HIGH_TECH_INCOME = "high_tech_income"
    CARBON_CREDITS = "carbon_credits"
    STARTUP_INVESTMENT = "startup_investment"
    DIGITAL_TRANSFORMATION = "digital_transformation"
    GREEN_BOND_INTEREST = "green_bond_interest"


class ExemptionStatus(str, Enum):
    EXEMPT = "exempt"
    NOT_EXEMPT = "not_exempt"
    NEEDS_REVIEW = "needs_review"  # some conditions confirmed, others not


class ExemptionRule(BaseModel):
    """One exempt income category with the conditions a taxpayer must confirm."""

    model_config = {"frozen": True}

    category: ExemptionCategory
    name: str
    description: str
    conditions: tuple[str, ...]
    required_documents: tuple[str, ...] = ()
    max_exempt_amount: Optional[Decimal] = Field(default=None, description="None = fully exempt")
    effective_from: date
    legal_reference: str

    @property
    def is_new_2026(self) -> bool:
        return self.effective_from.year >= 2026


class ExemptionCheckInput(BaseModel):
    model_config = {"frozen": True}

    category: ExemptionCategory
    income_amount: Decimal = Field(default=Decimal("0"))
    conditions_met: list[bool] = Field(
        default_factory=list, description="Answer per rule condition, in order; missing = not met"
    )


class ConditionCheck(BaseModel):
    model_config = {"frozen": True}

    condition: str
    met: bool
    note: str = ""


class ExemptionCheckResult(BaseModel):
    model_config = {"frozen": True}

    category: ExemptionCategory
    category_name: str
    status: ExemptionStatus
    exempt_amount: Decimal
    taxable_amount: Decimal
    explanation: str
    conditions: list[ConditionCheck] = Field(default_factory=list)
    required_documents: list[str] = Field(default_factory=list)
    legal_reference: str = ""
