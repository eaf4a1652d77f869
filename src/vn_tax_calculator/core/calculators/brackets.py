"""Progressive (marginal) bracket tax engine."""

from decimal import Decimal
from typing import Sequence

from vn_tax_calculator.core.models.brackets import BracketBreakdown, TaxBracket
from vn_tax_calculator.shared.validators import ZERO, non_negative


def calculate_bracket_breakdown(
    taxable_amount: Decimal, brackets: Sequence[TaxBracket]
) -> list[BracketBreakdown]:
    """Split a taxable amount across brackets.

    Brackets are walked in ascending order; each one taxes
    clamp(remaining, 0, width) at its rate. The walk stops as soon as
    nothing remains.

    Args:
        taxable_amount: Taxable income for the period (clamped at 0)
        brackets: Contiguous ascending schedule

    Returns:
        One BracketBreakdown per bracket that received income
    """
    remaining = non_negative(taxable_amount, "taxable_amount")
    breakdown: list[BracketBreakdown] = []

    for index, bracket in enumerate(brackets, start=1):
        if remaining <= 0:
            break
        width = bracket.width
        in_bracket = remaining if width is None else min(remaining, width)
        breakdown.append(
            BracketBreakdown(
                index=index,
                bracket=bracket,
                taxable_in_bracket=in_bracket,
                tax=in_bracket * bracket.rate,
            )
        )
        remaining -= in_bracket

    return breakdown


def compute_progressive_tax(taxable_amount: Decimal, brackets: Sequence[TaxBracket]) -> Decimal:
    """Compute unrounded progressive tax.

    Args:
        taxable_amount: Taxable income (negative values are treated as 0)
        brackets: Contiguous ascending schedule

    Returns:
        Total tax, always >= 0
    """
    return sum(
        (line.tax for line in calculate_bracket_breakdown(taxable_amount, brackets)),
        ZERO,
    )


def get_marginal_rate(taxable_amount: Decimal, brackets: Sequence[TaxBracket]) -> Decimal:
    """Get the marginal rate for a taxable amount (0 if nothing is taxable)."""
    amount = non_negative(taxable_amount)
    if amount == 0:
        return ZERO
    for bracket in brackets:
        if bracket.contains(amount):
            return bracket.rate
    return brackets[-1].rate


def scale_brackets(brackets: Sequence[TaxBracket], factor: int) -> tuple[TaxBracket, ...]:
    """Scale a monthly schedule to another period (e.g. 12 for annual)."""
    return tuple(
        TaxBracket(
            min=b.min * factor,
            max=None if b.max is None else b.max * factor,
            rate=b.rate,
        )
        for b in brackets
    )
