"""
Numeric helpers shared by the sampling methods.

Includes:
- vprime for the transformed uniform draw V' = U^(1/n)
- falling_ratio for the exact acceptance test of Method D (step D4)
- fill_consecutive for runs of consecutive sample positions
"""

import math

from .protocols import RandomSource


def vprime(rng: RandomSource, inv: float) -> float:
    """
    Draw V' = exp(log(U) * inv) for a fresh uniform U.

    Computing U^inv in log space keeps tiny powers from underflowing
    before they are used.

    Args:
        rng: Uniform random source; raw() never returns 0
        inv: Exponent, usually 1/n or 1/(n-1)

    Returns:
        Value in (0, 1]
    """
    return math.exp(math.log(rng.raw()) * inv)


def falling_ratio(top: float, bottom: float, steps: int) -> float:
    """
    Compute prod_{i<steps} (top - i) / (bottom - i).

    The product is accumulated as y = (y * top) / bottom, one factor at a
    time from the largest term down. Reordering the terms changes rounding
    and breaks the acceptance test's inequality structure.

    Args:
        top: First numerator factor
        bottom: First denominator factor
        steps: Number of factors

    Returns:
        The ratio; 1.0 when steps <= 0
    """
    y = 1.0
    for _ in range(steps):
        y = (y * top) / bottom
        top -= 1.0
        bottom -= 1.0
    return y


def fill_consecutive(values: list[int], from_index: int, start: int, count: int) -> None:
    """Write start, start+1, ..., start+count-1 into values[from_index:]."""
    values[from_index:from_index + count] = range(start, start + count)
