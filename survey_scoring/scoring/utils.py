"""
Decimal Utilities
survey_scoring/scoring/utils.py

Precision-safe rounding and summary statistics shared by the trace builder
and the analytics views. All rounding is half-up (0.5 -> 1), never banker's.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional, Sequence, Union

Number = Union[int, float, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal via its string form (avoids float noise)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number, places: int = 0) -> Union[int, float]:
    """
    Round half-up. ``places=0`` returns an int, otherwise a float.

    >>> round_half_up(2.5)
    3
    >>> round_half_up(66.65, 1)
    66.7
    """
    quantum = Decimal(1) if places == 0 else Decimal(10) ** -places
    number = to_decimal(value)
    with localcontext() as ctx:
        # quantize needs every integer digit to fit the context precision
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def round1(value: Number) -> float:
    """Round half-up to one decimal place."""
    return round_half_up(value, 1)


def clamp(value: Number, min_val: Number = 0, max_val: Number = 100) -> Number:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def percentage(count: Number, total: Number) -> float:
    """
    count / total × 100, rounded to one decimal.

    Returns 0.0 when total is zero.
    """
    if not total:
        return 0.0
    return round1(to_decimal(count) / to_decimal(total) * 100)


def mean(values: Sequence[Number]) -> Optional[Decimal]:
    """Arithmetic mean as an unrounded Decimal, or None for no values."""
    if not values:
        return None
    return sum((to_decimal(v) for v in values), Decimal("0")) / len(values)


def median(values: Sequence[Number]) -> Optional[Decimal]:
    """Median; the mean of the middle pair for an even count."""
    if not values:
        return None
    ordered = sorted(to_decimal(v) for v in values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def std_dev(values: Sequence[Number]) -> Optional[Decimal]:
    """
    Population standard deviation.

    Formula: sqrt(Σ(value_i - mean)² / n)
    """
    avg = mean(values)
    if avg is None:
        return None
    variance = sum(((to_decimal(v) - avg) ** 2 for v in values), Decimal("0")) / len(values)
    return variance.sqrt()
