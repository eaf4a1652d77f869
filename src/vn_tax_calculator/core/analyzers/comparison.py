"""Generic comparison and break-even search.

Break-even search brackets a sign change of d(x) = net_a(x) - net_b(x)
before bisecting. Net functions built from the bracket engine, capped
insurance and flat rates are continuous, so a bracketed sign change
always contains a crossing. When several crossings exist the bisection
returns one of them; scan_break_even lists them all.
"""

import logging
from decimal import ROUND_FLOOR, Decimal
from typing import Callable

from vn_tax_calculator.core.models.comparison import (
    BreakEvenResult,
    ComparisonResult,
    ComparisonSide,
    NetResult,
    ScanPoint,
)
from vn_tax_calculator.shared.validators import ONE, non_negative, round_money

logger = logging.getLogger(__name__)

NetFunction = Callable[[Decimal], Decimal]

MAX_BISECTION_STEPS = 200
MAX_SCAN_POINTS = 100_000


def compare(a: NetResult, b: NetResult) -> ComparisonResult:
    """Compare two alternatives by net income (ties go to a)."""
    better = ComparisonSide.A if a.net_income >= b.net_income else ComparisonSide.B
    return ComparisonResult(
        a=a,
        b=b,
        better=better,
        difference=abs(a.net_income - b.net_income),
    )


def find_break_even(
    low: Decimal,
    high: Decimal,
    tolerance: Decimal,
    net_a: NetFunction,
    net_b: NetFunction,
) -> BreakEvenResult:
    """Find the gross income where two net-income functions cross.

    Args:
        low: Lower bound of the search range
        high: Upper bound of the search range
        tolerance: Stop once high - low <= tolerance (at least 1 VND)
        net_a: Net income of alternative A for a gross income
        net_b: Net income of alternative B for a gross income

    Returns:
        BreakEvenResult; found is False when the difference keeps the
        same sign over the whole range
    """
    low, high = non_negative(low, "low"), non_negative(high, "high")
    if high < low:
        low, high = high, low
    tolerance = max(non_negative(tolerance, "tolerance"), ONE)

    def diff(x: Decimal) -> Decimal:
        return net_a(x) - net_b(x)

    # Both nets are usually 0 at 0 income; evaluate just above instead
    d_low = diff(low)
    if d_low == 0 and high > low:
        d_low = diff(min(low + tolerance, high))
    d_high = diff(high)

    if d_high == 0:
        return BreakEvenResult(
            found=True, break_even=round_money(high), low=low, high=high, tolerance=tolerance
        )

    if d_low == 0 or (d_low > 0) == (d_high > 0):
        a_wins = d_high > 0
        return BreakEvenResult(
            found=False,
            low=low,
            high=high,
            tolerance=tolerance,
            note=(
                "A luôn có lợi hơn trong khoảng tìm kiếm"
                if a_wins
                else "B luôn có lợi hơn trong khoảng tìm kiếm"
            ),
        )

    a_better_above = d_high > 0
    lo, hi = low, high
    iterations = 0
    while hi - lo > tolerance and iterations < MAX_BISECTION_STEPS:
        mid = ((lo + hi) / 2).quantize(ONE, rounding=ROUND_FLOOR)
        if mid <= lo or mid >= hi:
            break
        iterations += 1
        if (diff(mid) > 0) == a_better_above:
            hi = mid
        else:
            lo = mid

    result = round_money((lo + hi) / 2)
    logger.debug("Break-even at %s after %d iterations", result, iterations)
    return BreakEvenResult(
        found=True,
        break_even=result,
        low=low,
        high=high,
        tolerance=tolerance,
        iterations=iterations,
        a_better_above=a_better_above,
    )


def scan_comparison(
    low: Decimal, high: Decimal, step: Decimal, net_a: NetFunction, net_b: NetFunction
) -> list[ScanPoint]:
    """Evaluate both net functions on an evenly spaced grid (inclusive)."""
    low, high = non_negative(low, "low"), non_negative(high, "high")
    step = non_negative(step, "step")
    if step == 0 or high < low:
        return []
    if (high - low) / step > MAX_SCAN_POINTS:
        step = (high - low) / MAX_SCAN_POINTS

    points: list[ScanPoint] = []
    gross = low
    while gross <= high:
        points.append(ScanPoint(gross=gross, net_a=net_a(gross), net_b=net_b(gross)))
        gross += step
    return points


def scan_break_even(
    low: Decimal, high: Decimal, step: Decimal, net_a: NetFunction, net_b: NetFunction
) -> list[Decimal]:
    """List every grid point where the better alternative changes.

    Exhaustive alternative to find_break_even: each returned value is the
    first grid point after a sign change of net_a - net_b (zeros are skipped).
    """
    crossings: list[Decimal] = []
    previous_sign = 0
    for point in scan_comparison(low, high, step, net_a, net_b):
        sign = (point.difference > 0) - (point.difference < 0)
        if sign == 0:
            continue
        if previous_sign and sign != previous_sign:
            crossings.append(point.gross)
        previous_sign = sign
    return crossings
