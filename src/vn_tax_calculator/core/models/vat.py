"""VAT (thuế giá trị gia tăng) models."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.enums import BusinessCategory
from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class VATMethod(str, Enum):
    """VAT calculation method."""

    DEDUCTION = "deduction"  # phương pháp khấu trừ
    DIRECT = "direct"  # phương pháp trực tiếp trên doanh thu


class VATRateType(str, Enum):
    """Statutory VAT rate classes."""

    STANDARD = "standard"  # 10%, 8% during the reduction window
    REDUCED = "reduced"  # 8%
    SPECIAL = "special"  # 5% essential goods
    ZERO = "zero"  # 0% exports
    EXEMPT = "exempt"  # không chịu thuế


class VATDeductionInput(BaseModel):
    """Sales and purchases for one period under the deduction method."""

    model_config = {"frozen": True}

    sales_revenue: Decimal = Field(default=Decimal("0"), description="Monthly sales before VAT")
    purchase_value: Decimal = Field(default=Decimal("0"), description="Purchases with VAT invoices")
    output_rate: VATRateType = Field(default=VATRateType.STANDARD)
    input_rate: VATRateType = Field(default=VATRateType.STANDARD)
    calculation_date: Optional[date] = Field(
        default=None, description="Sale date deciding the 8% reduction; statutory rate when None"
    )


class VATDirectInput(BaseModel):
    """Revenue for one period under the direct method."""

    model_config = {"frozen": True}

    revenue: Decimal = Field(default=Decimal("0"))
    category: BusinessCategory = Field(default=BusinessCategory.SERVICES)
    annual_revenue: Optional[Decimal] = Field(
        default=None, description="Annual revenue for the registration threshold; 12x revenue when None"
    )


class VATDeductionResult(BaseModel):
    """VAT payable or refundable under the deduction method."""

    model_config = {"frozen": True}

    output_vat: FlatRateResult
    input_vat: FlatRateResult
    applied_output_rate: Optional[Decimal] = None
    applied_input_rate: Optional[Decimal] = None
    is_reduced_rate_applied: bool = False
    requires_registration: bool = False

    @computed_field
    @property
    def vat_payable(self) -> Decimal:
        return max(self.output_vat.tax_amount - self.input_vat.tax_amount, Decimal("0"))

    @computed_field
    @property
    def vat_refundable(self) -> Decimal:
        """Excess input VAT carried forward or refunded."""
        return max(self.input_vat.tax_amount - self.output_vat.tax_amount, Decimal("0"))


class VATDirectResult(BaseModel):
    """VAT under the direct method (revenue x category rate)."""

    model_config = {"frozen": True}

    category: BusinessCategory
    vat: FlatRateResult
    requires_registration: bool = False

    @computed_field
    @property
    def vat_payable(self) -> Decimal:
        return self.vat.tax_amount


class VATMethodComparison(BaseModel):
    """Deduction vs direct method for the same period."""

    model_config = {"frozen": True}

    deduction: VATDeductionResult
    direct: VATDirectResult
    recommendation: VATMethod
    savings: Decimal = Field(default=Decimal("0"))
    notes: list[str] = Field(default_factory=list)


class VATRefundCondition(BaseModel):
    model_config = {"frozen": True}

    condition: str
    met: bool
    description: str


class VATRefundCheck(BaseModel):
    """Refund eligibility for excess input VAT."""

    model_config = {"frozen": True}

    is_eligible: bool
    reason: str
    conditions: list[VATRefundCondition] = Field(default_factory=list)
    refundable_amount: Decimal = Field(default=Decimal("0"))


class VATRegistrationCheck(BaseModel):
    model_config = {"frozen": True}

    requires_registration: bool
    annual_revenue: Decimal
    threshold: Decimal
    recommended_method: Optional[VATMethod] = None
    notes: list[str] = Field(default_factory=list)


class VATCategoryRate(BaseModel):
    """Rate class matched for a goods/services description."""

    model_config = {"frozen": True}

    rate: Optional[Decimal] = Field(default=None, description="None when not subject to VAT")
    category: str
    items: tuple[str, ...] = ()
