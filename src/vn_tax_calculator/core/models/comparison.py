"""Comparison and break-even models."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class ComparisonSide(str, Enum):
    A = "a"
    B = "b"


class NetResult(BaseModel):
    """Net income of one alternative tax treatment."""

    model_config = {"frozen": True}

    label: str = Field(..., description="Display name of the alternative")
    gross_income: Decimal = Field(default=Decimal("0"))
    tax: Decimal = Field(default=Decimal("0"))
    insurance: Decimal = Field(default=Decimal("0"), description="Mandatory or self-paid insurance")
    other_costs: Decimal = Field(default=Decimal("0"))
    net_income: Decimal = Field(default=Decimal("0"))

    @computed_field
    @property
    def effective_rate(self) -> Decimal:
        """Tax over gross in percent (0 for no income)."""
        if self.gross_income == 0:
            return Decimal("0")
        return (self.tax / self.gross_income * 100).quantize(Decimal("0.01"))


class ComparisonResult(BaseModel):
    """Two alternatives compared by net income."""

    model_config = {"frozen": True}

    a: NetResult
    b: NetResult
    better: ComparisonSide = Field(..., description="Side with the higher net (a on ties)")
    difference: Decimal = Field(..., description="Absolute net difference")

    @property
    def winner(self) -> NetResult:
        return self.a if self.better == ComparisonSide.A else self.b


class BreakEvenResult(BaseModel):
    """Outcome of a break-even search between two net-income functions."""

    model_config = {"frozen": True}

    found: bool
    break_even: Optional[Decimal] = Field(default=None, description="Gross where both nets meet")
    low: Decimal
    high: Decimal
    tolerance: Decimal
    iterations: int = 0
    a_better_above: Optional[bool] = Field(
        default=None, description="True when A wins above the break-even point"
    )
    note: str = ""


class ScanPoint(BaseModel):
    """One point of an exhaustive comparison scan."""

    model_config = {"frozen": True}

    gross: Decimal
    net_a: Decimal
    net_b: Decimal

    @computed_field
    @property
    def difference(self) -> Decimal:
        return self.net_a - self.net_b
