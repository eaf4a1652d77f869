"""Progressive tax bracket models."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class TaxBracket(BaseModel):
    """One bracket of a progressive schedule (max=None means unbounded)."""

    model_config = {"frozen": True}

    min: Decimal = Field(..., ge=0, description="Lower bound (inclusive)")
    max: Optional[Decimal] = Field(default=None, description="Upper bound, None for the top bracket")
    rate: Decimal = Field(..., ge=0, le=1, description="Marginal rate as fraction")

    @computed_field
    @property
    def width(self) -> Optional[Decimal]:
        """Amount of income covered by this bracket."""
        if self.max is None:
            return None
        return self.max - self.min

    def contains(self, amount: Decimal) -> bool:
        """Check whether an amount falls inside the bracket."""
        return amount > self.min and (self.max is None or amount <= self.max)


class BracketBreakdown(BaseModel):
    """Tax attributed to a single bracket."""

    model_config = {"frozen": True}

    index: int = Field(..., description="1-based bracket number")
    bracket: TaxBracket
    taxable_in_bracket: Decimal = Field(default=Decimal("0"))
    tax: Decimal = Field(default=Decimal("0"))
