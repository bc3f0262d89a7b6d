"""
Exact decimal aggregates over item amounts.

Everything here works on ``decimal.Decimal`` only. The single float that
enters the analytics layer, the percentile fraction ``p``, is converted
through its shortest decimal representation before it touches an amount.
"""

import math
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)
from typing import Iterable, Sequence, Tuple

from ledgerline.errors import InvalidInputError

ZERO = Decimal(0)
MEDIAN = Decimal("0.5")

# Sums, differences, products and rescaling. Unbounded precision with
# Inexact trapped: these results are exact or the operation fails loudly.
EXACT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    rounding=ROUND_HALF_EVEN,
    traps=[Inexact, InvalidOperation, DivisionByZero, Overflow],
)

# Significant digits kept beyond the integer part of a non-terminating mean.
QUOTIENT_DIGITS = 28


def fraction(p: float) -> Decimal:
    """Validate a percentile fraction and convert it to Decimal."""
    if isinstance(p, bool) or not isinstance(p, (int, float, Decimal)):
        raise InvalidInputError("percentile must be a number")
    if isinstance(p, float) and not math.isfinite(p):
        raise InvalidInputError("percentile must be between 0 and 1")

    value = p if isinstance(p, Decimal) else Decimal(repr(p))
    if not value.is_finite() or value < 0 or value > 1:
        raise InvalidInputError("percentile must be between 0 and 1")
    return value


def scale_of(value: Decimal) -> int:
    """Number of digits after the decimal point."""
    exponent = value.as_tuple().exponent
    return -exponent if exponent < 0 else 0


def trim_scale(value: Decimal, scale: int) -> Decimal:
    """
    Drop trailing zeros, but keep at least ``scale`` fractional digits.

    >>> trim_scale(Decimal("1.50"), 0)
    Decimal('1.5')
    >>> trim_scale(Decimal("1E+1"), 2)
    Decimal('10.00')
    """
    normalized = value.normalize(EXACT)
    if normalized.as_tuple().exponent > -scale:
        return value.quantize(Decimal(1).scaleb(-scale), context=EXACT)
    return normalized


def summarize(amounts: Iterable[Decimal]) -> Tuple[Decimal, int]:
    """Exact total and count of a stream of amounts."""
    total = ZERO
    count = 0
    for amount in amounts:
        total = EXACT.add(total, amount)
        count += 1
    return total, count


def quotient_context(total: Decimal) -> Context:
    """Enough precision for every digit of ``total`` plus QUOTIENT_DIGITS more."""
    return Context(
        prec=len(total.as_tuple().digits) + QUOTIENT_DIGITS,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        rounding=ROUND_HALF_EVEN,
    )


def average(total: Decimal, count: int) -> Decimal:
    """
    Mean of ``count`` amounts summing to ``total``. Exact whenever the
    quotient terminates within the integer digits of the total plus
    QUOTIENT_DIGITS, rounded half-even beyond that.
    """
    if count == 0:
        return ZERO
    mean = quotient_context(total).divide(total, Decimal(count))
    return trim_scale(mean, scale_of(total))


def rank_bounds(p: Decimal, n: int) -> Tuple[Decimal, int, int]:
    """
    Position ``h = p * (n - 1)`` of the p-th percentile among ``n`` sorted
    values, with the zero-based ranks just below and above it.
    """
    position = EXACT.multiply(p, Decimal(n - 1))
    lower = int(position.to_integral_value(rounding=ROUND_FLOOR))
    upper = int(position.to_integral_value(rounding=ROUND_CEILING))
    return position, lower, upper


def interpolate(low: Decimal, high: Decimal, weight: Decimal) -> Decimal:
    """``low + weight * (high - low)``, without rounding."""
    if weight == 0 or low == high:
        return low
    value = EXACT.add(low, EXACT.multiply(weight, EXACT.subtract(high, low)))
    return trim_scale(value, max(scale_of(low), scale_of(high)))


def continuous_percentile(ordered: Sequence[Decimal], p: Decimal) -> Decimal:
    """
    Continuous percentile (``percentile_cont``) of amounts sorted ascending.

    Returns zero for an empty sequence.
    """
    if not ordered:
        return ZERO
    position, lower, upper = rank_bounds(p, len(ordered))
    return interpolate(ordered[lower], ordered[upper], EXACT.subtract(position, Decimal(lower)))


def to_wire(value: Decimal) -> str:
    """Plain (never scientific) decimal notation."""
    return format(value, "f")
