"""Generic evaluator for flat and threshold rate rules."""

import logging
from decimal import Decimal
from typing import Any, Optional

from vn_tax_calculator.core.models.flat_rate import FlatRateResult, FlatRateRule, ThresholdMode
from vn_tax_calculator.shared.validators import ZERO, non_negative, round_money

logger = logging.getLogger(__name__)


def _exempt(rule: FlatRateRule, amount: Decimal, reason: str) -> FlatRateResult:
    return FlatRateResult(
        rule_name=rule.name,
        gross_amount=amount,
        taxable_amount=ZERO,
        applied_rate=ZERO,
        tax_amount=ZERO,
        net_amount=amount,
        exemption_reason=reason,
        legal_note=rule.legal_note,
    )


def evaluate_rule(rule: FlatRateRule, amount: Decimal, context: Optional[Any] = None) -> FlatRateResult:
    """Apply a flat-rate rule to an amount.

    Steps: exemption predicate, threshold handling, tax = round(taxable x rate),
    net = gross - tax. Negative amounts are clamped to zero.

    Args:
        rule: Rule to apply
        amount: Gross amount received
        context: Object passed to the rule's exemption predicate

    Returns:
        FlatRateResult with exemption_reason set when exempt
    """
    amount = non_negative(amount, rule.name)

    if rule.exemption_predicate is not None:
        reason = rule.exemption_predicate(context)
        if reason:
            logger.debug("%s exempt: %s", rule.name, reason)
            return _exempt(rule, amount, reason)

    threshold = non_negative(rule.threshold, "threshold")
    if rule.threshold_mode == ThresholdMode.EXEMPT_BELOW:
        if amount < threshold:
            return _exempt(rule, amount, rule.below_threshold_reason)
        taxable = amount
    elif rule.threshold_mode == ThresholdMode.EXCESS_OVER:
        if amount <= threshold:
            return _exempt(rule, amount, rule.below_threshold_reason)
        taxable = amount - threshold
    else:
        taxable = amount

    rate = non_negative(rule.rate, "rate")
    tax = round_money(taxable * rate)
    logger.debug("%s: taxable=%s rate=%s tax=%s", rule.name, taxable, rate, tax)

    return FlatRateResult(
        rule_name=rule.name,
        gross_amount=amount,
        taxable_amount=taxable,
        applied_rate=rate,
        tax_amount=tax,
        net_amount=amount - tax,
        legal_note=rule.legal_note,
    )


def sum_tax(results: list[FlatRateResult]) -> Decimal:
    """Total tax across several rule results."""
    return sum((r.tax_amount for r in results), ZERO)
