"""
Streaming adapter over RandomSampler.

Picks a stable random subsequence of n elements while a sequence of N
elements is scanned once, in order: call sample_next_element() once per
scanned element and keep the element when it returns True. Elements keep
their relative order. Example: sampling n=3 from the list (1, ..., 50) may
yield the sublist (7, 13, 47).

Positions are fetched from the sampler in blocks of at most
MAX_BUFFER_SIZE, so each decision costs O(1) amortized and memory does not
depend on N.
"""

import copy
import logging

from .params import MAX_BUFFER_SIZE
from .protocols import RandomSource
from .sampler import RandomSampler

logger = logging.getLogger(__name__)


class RandomSamplingAssistant:
    """
    Per-element accept/reject decisions for a one-pass SRSWOR scan.

    Calling sample_next_element() exactly N times yields exactly n True
    results. Fewer calls yield a prefix of the sample; further calls
    return False.
    """

    def __init__(self, n: int, N: int, random_generator: RandomSource = None):
        """
        Initialize assistant and fetch the first block of positions.

        Args:
            n: Number of elements to pick (0 <= n <= N)
            N: Length of the scanned sequence
            random_generator: Uniform source; None uses a fresh MersenneTwister
        """
        self._sampler = RandomSampler(n, N, 0, random_generator)
        self._n = n
        self._buffer = [0] * min(n, MAX_BUFFER_SIZE)
        self._buffer_size = 0   # Filled part of _buffer
        self._buffer_pos = 0
        self._skip = 0          # Elements to reject before the next accept

        if n > 0:
            # Position -1 precedes the sequence, so the first skip is buffer[0]
            self._buffer[0] = -1
        self._fetch_next_block()

    @property
    def n(self) -> int:
        """Number of elements still to be accepted."""
        return self._n

    @property
    def random_generator(self) -> RandomSource:
        return self._sampler.random_generator

    def _fetch_next_block(self) -> None:
        if self._n <= 0:
            return
        last = self._buffer[self._buffer_pos]
        count = min(self._n, MAX_BUFFER_SIZE)
        self._sampler.next_block(count, self._buffer, 0)
        self._buffer_size = count
        self._buffer_pos = 0
        self._skip = self._buffer[0] - last - 1
        logger.debug("fetched %d positions, %d left to accept", count, self._n)

    def sample_next_element(self) -> bool:
        """
        Decide whether the next element of the scanned sequence is picked.

        Returns:
            True if the element belongs to the sample
        """
        if self._n == 0:
            return False
        if self._skip > 0:
            self._skip -= 1
            return False

        self._n -= 1
        if self._buffer_pos < self._buffer_size - 1:
            pos = self._buffer_pos
            self._skip = self._buffer[pos + 1] - self._buffer[pos] - 1
            self._buffer_pos = pos + 1
        else:
            self._fetch_next_block()
        return True

    def sample_next_elements(self, count: int) -> list[bool]:
        """Decisions for the next count elements of the scanned sequence."""
        if count < 0:
            raise ValueError(f"negative count: {count}")
        return [self.sample_next_element() for _ in range(count)]

    def clone(self) -> "RandomSamplingAssistant":
        """Deep copy of the assistant, including sampler and generator."""
        copy_ = copy.copy(self)
        copy_._sampler = self._sampler.clone()
        copy_._buffer = list(self._buffer)
        return copy_

    def __repr__(self) -> str:
        return f"RandomSamplingAssistant(n={self._n}, skip={self._skip})"


def sample_array(n: int, elements: list, random_generator: RandomSource = None) -> list:
    """
    Pick a random stable sublist of n elements in one pass.

    Args:
        n: Number of elements to pick (0 <= n <= len(elements))
        elements: Sequence to sample from
        random_generator: Uniform source; None uses a fresh MersenneTwister

    Returns:
        The picked elements in their original order
    """
    assistant = RandomSamplingAssistant(n, len(elements), random_generator)
    return [element for element in elements if assistant.sample_next_element()]
