"""
Parameters for sequential random sampling.

Key parameters (Vitter notation):
- n: Number of elements to choose
- N: Population size; the population is the interval [low, low+N-1]
- low: First element of the population

Tuning constants:
- NEG_ALPHA_INV: Method D falls back to Method A once -NEG_ALPHA_INV * n >= N
- REJECT_DENSITY: Above this density n/N, sample the complement instead
- MAX_BUFFER_SIZE: Positions buffered by the sampling assistant per refill

OPT Tradeoffs:
- NEG_ALPHA_INV was chosen empirically (Vitter suggests alpha^-1 ~ 13).
  Larger magnitudes keep Method A out longer; demo.py --tune measures it.
- A larger MAX_BUFFER_SIZE means fewer refills but more memory per assistant.
"""

from dataclasses import dataclass


NEG_ALPHA_INV = -13
REJECT_DENSITY = 0.95
MAX_BUFFER_SIZE = 200


@dataclass(frozen=True)
class SamplingRequest:
    """A request for n sorted random elements from [low, low+N-1]."""

    n: int          # Number of elements to choose
    N: int          # Population size
    low: int = 0    # First element of the population

    def __post_init__(self):
        if self.n < 0:
            raise ValueError(f"n must be >= 0, got {self.n}")
        if self.n > self.N:
            raise ValueError(f"n must be <= N, got n={self.n}, N={self.N}")

    @property
    def high(self) -> int:
        """Last element of the population (inclusive)."""
        return self.low + self.N - 1

    @property
    def density(self) -> float:
        """Fraction n/N of the population that is sampled."""
        if self.N == 0:
            return 0.0
        return self.n / self.N

    def __repr__(self) -> str:
        return (
            f"SamplingRequest(n={self.n}, N={self.N}, "
            f"interval=[{self.low}, {self.high}])"
        )
