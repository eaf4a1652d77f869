"""Generic flat/threshold rate rule and its result record."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field, computed_field

# Returns an exemption reason, or None when the context is taxable
ExemptionPredicate = Callable[[Any], Optional[str]]


class ThresholdMode(str, Enum):
    """How the threshold of a flat-rate rule is applied."""

    NONE = "none"  # tax = amount x rate
    EXEMPT_BELOW = "exempt-below"  # exempt if amount < threshold, else full amount taxed
    EXCESS_OVER = "excess-over"  # tax = (amount - threshold) x rate, exempt up to threshold


@dataclass(frozen=True)
class FlatRateRule:
    """A single-rate tax rule with optional threshold and exemption predicate.

    Every non-salary calculator (lottery, rental, dividends, gold, crypto,
    securities, inheritance, withholding...) is a table of these rules.
    """

    name: str
    rate: Decimal
    threshold_mode: ThresholdMode = ThresholdMode.NONE
    threshold: Decimal = Decimal("0")
    exemption_predicate: Optional[ExemptionPredicate] = None
    below_threshold_reason: str = "Dưới ngưỡng chịu thuế"
    legal_note: str = ""


class FlatRateResult(BaseModel):
    """Outcome of applying a FlatRateRule to an amount."""

    model_config = {"frozen": True}

    rule_name: str = Field(..., description="Name of the rule applied")
    gross_amount: Decimal = Field(default=Decimal("0"), description="Amount received")
    taxable_amount: Decimal = Field(default=Decimal("0"), description="Base the rate applies to")
    applied_rate: Decimal = Field(default=Decimal("0"), description="Rate applied (0 if exempt)")
    tax_amount: Decimal = Field(default=Decimal("0"), description="Tax rounded to whole VND")
    net_amount: Decimal = Field(default=Decimal("0"), description="Gross minus tax")
    exemption_reason: Optional[str] = Field(
        default=None, description="Why no tax is due; None when the amount is taxable"
    )
    legal_note: str = Field(default="")

    @computed_field
    @property
    def is_exempt(self) -> bool:
        """True when the amount is exempt rather than taxable-but-zero."""
        return self.exemption_reason is not None
