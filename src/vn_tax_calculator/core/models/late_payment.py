"""Late payment interest models."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class LateTaxType(str, Enum):
    ANNUAL_PIT = "annual_pit"
    QUARTERLY_PIT = "quarterly_pit"
    MONTHLY_VAT = "monthly_vat"
    QUARTERLY_VAT = "quarterly_vat"
    PROPERTY_TRANSFER = "property_transfer"
    RENTAL_INCOME = "rental_income"
    HOUSEHOLD_BUSINESS = "household_business"
    OTHER = "other"


class LatePaymentInput(BaseModel):
    model_config = {"frozen": True}

    tax_type: LateTaxType = Field(default=LateTaxType.OTHER)
    tax_amount: Decimal = Field(default=Decimal("0"))
    due_date: date
    payment_date: date


class LatePaymentResult(BaseModel):
    model_config = {"frozen": True}

    tax_amount: Decimal
    days_late: int
    daily_rate: Decimal
    interest_amount: Decimal
    daily_interest: Decimal
    warning: Optional[str] = None
    legal_note: str = ""

    @computed_field
    @property
    def is_late(self) -> bool:
        return self.days_late > 0

    @computed_field
    @property
    def total_amount(self) -> Decimal:
        return self.tax_amount + self.interest_amount

    @property
    def annual_rate(self) -> Decimal:
        return self.daily_rate * 365


class InterestMilestone(BaseModel):
    model_config = {"frozen": True}

    days: int
    label: str
    interest_amount: Decimal
    total_amount: Decimal
