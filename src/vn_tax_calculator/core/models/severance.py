"""Severance and lump-sum payout models."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class SeveranceType(str, Enum):
    SEVERANCE = "severance"  # trợ cấp thôi việc (Điều 46 BLLĐ)
    JOB_LOSS = "job_loss"  # trợ cấp mất việc làm (Điều 47 BLLĐ)
    EARLY_RETIRE = "early_retire"
    SOCIAL_INSURANCE_LUMP_SUM = "social_insurance_lump_sum"
    VOLUNTARY_PENSION_LUMP_SUM = "voluntary_pension_lump_sum"


class SeveranceInput(BaseModel):
    model_config = {"frozen": True}

    severance_type: SeveranceType = Field(default=SeveranceType.SEVERANCE)
    total_amount: Decimal = Field(default=Decimal("0"))
    average_salary: Decimal = Field(default=Decimal("0"), description="Average of the last 6 months")
    years_worked: Optional[Decimal] = None
    contribution_amount: Decimal = Field(
        default=Decimal("0"), description="Own contributions, voluntary pension only"
    )


class SeveranceResult(BaseModel):
    model_config = {"frozen": True}

    severance_type: SeveranceType
    label: str
    exempt_amount: Decimal
    tax: FlatRateResult
    effective_rate: Decimal
    steps: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
