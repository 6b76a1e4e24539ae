"""
Sequential random sampler (Vitter 1987).

Computes a sorted Simple Random Sample Without Replacement (SRSWOR): n
distinct numbers from the interval [low, low+N-1], each number equally
likely to be chosen. Example: n=3 from [1, 50] may yield (7, 13, 47).

The population is never materialized. Running time is O(n) on average,
O(N) in the worst case; extra space is O(1), so N may go up to 2^63.

The sample can be delivered in blocks: the maximum of a block is always
smaller than the minimum of its successor, e.g. n=9 from [1, 50] in three
blocks may yield (7, 13, 14), (27, 37, 42), (45, 46, 49).

Three methods, selected by the density n/N:
- Method D: skip-based rejection sampling, for sparse samples
- Method A: simple sequential sampling, finishes Method D once n is small
- Reject method: samples the N-n excluded values with Method D and emits
  the gaps between them, for samples covering 95% or more of N

Reference: J.S. Vitter, "An Efficient Algorithm for Sequential Random
Sampling", ACM Transactions on Mathematical Software 13(1), 1987.
"""

import copy
import enum
import logging
import math

from .engine import make_default_generator
from .params import NEG_ALPHA_INV, REJECT_DENSITY, SamplingRequest
from .protocols import RandomSource
from .utils import falling_ratio, fill_consecutive, vprime

logger = logging.getLogger(__name__)


class Method(enum.Enum):
    """
    Sampling methods.

    select_method() returns ALL, D or REJECT. A is never dispatched on
    directly; it labels the hand-off inside Method D once few elements
    remain.
    """

    ALL = "all"         # every remaining element is chosen
    A = "method_a"
    D = "method_d"
    REJECT = "reject"


def select_method(n: int, N: int, count: int) -> Method:
    """
    Choose the sampling method for drawing count of n elements from N.

    Method A is never selected up front; Method D hands over to it
    internally once few elements remain.
    """
    if count == N or n == N:
        return Method.ALL
    if n < N * REJECT_DENSITY:
        return Method.D
    return Method.REJECT


def sample(
    n: int,
    N: int,
    count: int,
    low: int,
    values: list[int],
    from_index: int = 0,
    random_generator: RandomSource = None,
    neg_alpha_inv: int = NEG_ALPHA_INV,
) -> None:
    """
    Fill the first count elements of a sorted random set into values.

    The set has n elements drawn from [low, low+N-1]. Normally count == n.
    values[from_index:from_index+count] receives the numbers, ascending.

    Args:
        n: Total number of elements to choose (0 <= n <= N)
        N: Population size
        count: Number of elements to fill in by this call (count <= n)
        low: First element of the population
        values: Buffer with len(values) >= from_index + count
        from_index: First index of values to fill
        random_generator: Uniform source; None uses a fresh MersenneTwister
        neg_alpha_inv: Method D to Method A switch-over tuning constant
    """
    if count < 0:
        raise ValueError(f"negative count: {count}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if n == 0 or count == 0:
        return
    if count > n:
        raise ValueError(f"count must not be greater than n, got count={count}, n={n}")
    if n > N:
        raise ValueError(f"n must be <= N, got n={n}, N={N}")
    if from_index < 0 or len(values) < from_index + count:
        raise ValueError(
            f"values too small: need {from_index + count} slots, have {len(values)}"
        )
    if random_generator is None:
        random_generator = make_default_generator()

    method = select_method(n, N, count)
    logger.debug("sample count=%d n=%d N=%d low=%d via %s", count, n, N, low, method.value)

    if method is Method.ALL:
        fill_consecutive(values, from_index, low, count)
    elif method is Method.D:
        sample_method_d(n, N, count, low, values, from_index, random_generator, neg_alpha_inv)
    else:
        reject_method_d(n, N, count, low, values, from_index, random_generator)


def _next_skip(
    n: int,
    N: int,
    nreal: float,
    Nreal: float,
    ninv: float,
    nmin1inv: float,
    qu1: int,
    qu1real: float,
    v_prime: float,
    rng: RandomSource,
) -> tuple[int, float]:
    """
    Steps D2-D4 of Method D: draw the number S of records to skip.

    Returns:
        (S, v_prime) where v_prime is the carried-over V' for the next step
    """
    while True:
        # Step D2: generate U and X
        while True:
            X = Nreal * (-v_prime + 1.0)
            S = int(X)
            if S < qu1:
                break
            v_prime = vprime(rng, ninv)
        U = rng.raw()
        neg_sreal = float(-S)

        # Step D3: accept?
        y1 = math.exp(math.log(U * Nreal / qu1real) * nmin1inv)
        v_prime = y1 * (-X / Nreal + 1.0) * (qu1real / (neg_sreal + qu1real))
        if v_prime <= 1.0:
            return S, v_prime

        # Step D4: accept?
        top = -1.0 + Nreal
        if n - 1 > S:
            bottom = -nreal + Nreal
            limit = -S + N
        else:
            bottom = -1.0 + neg_sreal + Nreal
            limit = qu1
        y2 = falling_ratio(top, bottom, N - limit)
        if Nreal / (-X + Nreal) >= y1 * math.exp(math.log(y2) * nmin1inv):
            return S, vprime(rng, nmin1inv)

        v_prime = vprime(rng, ninv)


def sample_method_a(
    n: int,
    N: int,
    count: int,
    low: int,
    values: list[int],
    from_index: int,
    random_generator: RandomSource,
) -> None:
    """
    Method A: choose count of n sorted elements from [low, low+N-1].

    O(N) running time; only used once n is small.
    """
    rng = random_generator
    chosen = low - 1
    top = float(N - n)
    Nreal = float(N)

    while n >= 2 and count > 0:
        V = rng.raw()
        S = 0
        quot = top / Nreal
        while quot > V:
            S += 1
            top -= 1.0
            Nreal -= 1.0
            quot = (quot * top) / Nreal
        chosen += S + 1
        values[from_index] = chosen
        from_index += 1
        count -= 1
        Nreal -= 1.0
        n -= 1

    if count > 0:
        # n == 1
        S = int(round(Nreal) * rng.raw())
        chosen += S + 1
        values[from_index] = chosen


def sample_method_d(
    n: int,
    N: int,
    count: int,
    low: int,
    values: list[int],
    from_index: int,
    random_generator: RandomSource,
    neg_alpha_inv: int = NEG_ALPHA_INV,
) -> None:
    """
    Method D: choose count of n sorted elements from [low, low+N-1].

    O(n) average running time. Switches to Method A once the threshold
    -neg_alpha_inv * n reaches the remaining N.
    """
    rng = random_generator
    chosen = low - 1

    nreal = float(n)
    ninv = 1.0 / nreal
    Nreal = float(N)
    v_prime = vprime(rng, ninv)
    qu1 = -n + 1 + N
    qu1real = -nreal + 1.0 + Nreal
    threshold = -neg_alpha_inv * n

    while n > 1 and count > 0 and threshold < N:
        nmin1inv = 1.0 / (-1.0 + nreal)
        S, v_prime = _next_skip(
            n, N, nreal, Nreal, ninv, nmin1inv, qu1, qu1real, v_prime, rng
        )
        neg_sreal = float(-S)

        # Step D5: select the (S+1)st record
        chosen += S + 1
        values[from_index] = chosen
        from_index += 1
        count -= 1

        N -= S + 1
        Nreal = neg_sreal + (-1.0 + Nreal)
        n -= 1
        nreal -= 1.0
        ninv = nmin1inv
        qu1 = -S + qu1
        qu1real = neg_sreal + qu1real
        threshold += neg_alpha_inv

    if count > 0:
        if n > 1:
            logger.debug("method D hands over to method A with n=%d N=%d", n, N)
            sample_method_a(n, N, count, chosen + 1, values, from_index, rng)
        else:
            # n == 1
            S = int(N * v_prime)
            chosen += S + 1
            values[from_index] = chosen


def reject_method_d(
    n: int,
    N: int,
    count: int,
    low: int,
    values: list[int],
    from_index: int,
    random_generator: RandomSource,
) -> None:
    """
    Reject method: choose count of n sorted elements from [low, low+N-1].

    Expresses sample(n, N) as Method D over the N-n rejected elements and
    emits everything between them, so sampling 99% costs about as much as
    sampling 1%.
    """
    rng = random_generator
    chosen = low - 1

    n = N - n  # number of rejected elements from here on
    if n == 0:
        fill_consecutive(values, from_index, low, count)
        return

    nreal = float(n)
    ninv = 1.0 / nreal
    Nreal = float(N)
    v_prime = vprime(rng, ninv)
    qu1 = -n + 1 + N
    qu1real = -nreal + 1.0 + Nreal

    while n > 1 and count > 0:
        nmin1inv = 1.0 / (-1.0 + nreal)
        S, v_prime = _next_skip(
            n, N, nreal, Nreal, ninv, nmin1inv, qu1, qu1real, v_prime, rng
        )
        neg_sreal = float(-S)

        # Step D5: keep the S records before the rejected (S+1)st
        take = min(S, count)
        fill_consecutive(values, from_index, chosen + 1, take)
        from_index += take
        count -= take
        chosen += take + 1

        N -= S + 1
        Nreal = neg_sreal + (-1.0 + Nreal)
        n -= 1
        nreal -= 1.0
        ninv = nmin1inv
        qu1 = -S + qu1
        qu1real = neg_sreal + qu1real

    if count > 0:
        # n == 1: one rejected element left, everything after it is kept
        S = int(N * v_prime)
        take = min(S, count)
        fill_consecutive(values, from_index, chosen + 1, take)
        from_index += take
        count -= take
        chosen += take + 1
        fill_consecutive(values, from_index, chosen + 1, count)


class RandomSampler:
    """
    Block-wise sorted random sampler.

    Delivers the n elements of a sorted random set from [low, low+N-1] in
    blocks of any size via next_block(). Only one block needs to be held in
    memory at a time.

    Not thread-safe: the sampler and its random generator are mutated by
    every call. Use clone() to fork an independent sampler.
    """

    def __init__(self, n: int, N: int, low: int = 0, random_generator: RandomSource = None):
        """
        Initialize sampler. No random numbers are drawn until next_block().

        Args:
            n: Total number of elements to choose (0 <= n <= N)
            N: Population size
            low: First element of the population (default: 0)
            random_generator: Uniform source; None uses a fresh MersenneTwister
        """
        SamplingRequest(n, N, low)

        self._n = n
        self._N = N
        self._low = low
        if random_generator is None:
            random_generator = make_default_generator()
        self._random_generator = random_generator

    @property
    def n(self) -> int:
        """Number of elements still to be delivered."""
        return self._n

    @property
    def N(self) -> int:
        """Size of the not yet consumed part of the population."""
        return self._N

    @property
    def low(self) -> int:
        """First element of the not yet consumed part of the population."""
        return self._low

    @property
    def remaining(self) -> SamplingRequest:
        """The sub-problem the next block continues from."""
        return SamplingRequest(self._n, self._N, self._low)

    @property
    def random_generator(self) -> RandomSource:
        """The source owned by this sampler; fork it only via clone()."""
        return self._random_generator

    def next_block(self, count: int, values: list[int], from_index: int = 0) -> None:
        """
        Compute the next count elements of the sorted random set.

        Args:
            count: Number of elements to fill into values (0 <= count <= n)
            values: Buffer with len(values) >= from_index + count
            from_index: First index of values to fill
        """
        if count > self._n:
            raise ValueError(
                f"random sample exhausted: requested {count}, {self._n} remaining"
            )
        if count < 0:
            raise ValueError(f"negative count: {count}")
        if count == 0:
            return
        if from_index < 0 or len(values) < from_index + count:
            raise ValueError(
                f"values too small: need {from_index + count} slots, have {len(values)}"
            )

        sample(self._n, self._N, count, self._low, values, from_index, self._random_generator)

        last = values[from_index + count - 1]
        self._n -= count
        self._N = self._N - last - 1 + self._low
        self._low = last + 1

    def clone(self) -> "RandomSampler":
        """Deep copy of the sampler, including its random generator."""
        copy_ = copy.copy(self)
        copy_._random_generator = self._random_generator.clone()
        return copy_

    def __repr__(self) -> str:
        return f"RandomSampler(n={self._n}, N={self._N}, low={self._low})"
