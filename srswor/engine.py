"""
Uniform random engines for the sampling engine.

Every engine produces 32-bit words through next_uint32(); the shared base
class derives the other views from it:
- raw(): uniform in the open interval (0, 1), used by the samplers
- next_int32() / next_long(): signed 32-bit and 64-bit integers
- next_double(): uniform in [0, 1)

Engines:
- MersenneTwister: MT19937 (Matsumoto & Nishimura), the default engine
- DRand: multiplicative congruential generator, fast but weak
- AesEngine: AES-128 in counter mode, keyed and reproducible

None of the engines are thread-safe. Use clone() to fork a stream.
"""

import copy
import secrets
import struct
from abc import ABC, abstractmethod

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes


# 2**-32, maps a 32-bit word onto the unit interval
_TWO_POW_MINUS_32 = 2.3283064365386963e-10


class RandomEngine(ABC):
    """
    Base class of all 32-bit uniform random engines.

    Subclasses implement next_uint32(); everything else is derived.
    """

    @abstractmethod
    def next_uint32(self) -> int:
        """Return 32 random bits as an int in [0, 2^32)."""

    def next_int32(self) -> int:
        """Return 32 random bits as a signed int in [-2^31, 2^31)."""
        value = self.next_uint32()
        if value & 0x80000000:
            return value - (1 << 32)
        return value

    def next_long(self) -> int:
        """Return 64 random bits as a signed int, high word drawn first."""
        value = (self.next_uint32() << 32) | self.next_uint32()
        if value & (1 << 63):
            return value - (1 << 64)
        return value

    def next_double(self) -> float:
        """Return a uniform float in [0, 1) with 53 random bits."""
        a = self.next_uint32() >> 5
        b = self.next_uint32() >> 6
        return (a * 67108864.0 + b) / 9007199254740992.0

    def raw(self) -> float:
        """
        Return a uniform float in the open interval (0, 1).

        A zero word would map onto 0.0, so it is redrawn.
        """
        value = self.next_uint32()
        while value == 0:
            value = self.next_uint32()
        return value * _TWO_POW_MINUS_32

    def clone(self) -> "RandomEngine":
        """Deep copy; the copy replays the receiver's future stream."""
        return copy.deepcopy(self)


class MersenneTwister(RandomEngine):
    """
    MT19937 Mersenne Twister, period 2^19937 - 1.

    Seeding follows init_genrand of the 2002 reference implementation, so
    outputs match other MT19937 ports bit for bit.
    """

    _N = 624
    _M = 397
    _MATRIX_A = 0x9908B0DF
    _UPPER_MASK = 0x80000000
    _LOWER_MASK = 0x7FFFFFFF
    _TEMPERING_MASK_B = 0x9D2C5680
    _TEMPERING_MASK_C = 0xEFC60000

    DEFAULT_SEED = 5489

    def __init__(self, seed: int = DEFAULT_SEED):
        """
        Initialize the generator.

        Args:
            seed: Seed; only the low 32 bits are used (default: 5489)
        """
        self._mt = [0] * self._N
        self._mti = self._N
        self._set_seed(seed)

    def _set_seed(self, seed: int) -> None:
        mt = self._mt
        mt[0] = seed & 0xFFFFFFFF
        for i in range(1, self._N):
            # Knuth TAOCP Vol2. 3rd Ed. P.106 for the multiplier
            mt[i] = (1812433253 * (mt[i - 1] ^ (mt[i - 1] >> 30)) + i) & 0xFFFFFFFF
        self._mti = self._N

    def _next_block(self) -> None:
        """Regenerate all 624 words of state at once."""
        mt = self._mt
        n, m = self._N, self._M
        for kk in range(n):
            y = (mt[kk] & self._UPPER_MASK) | (mt[(kk + 1) % n] & self._LOWER_MASK)
            mt[kk] = mt[(kk + m) % n] ^ (y >> 1) ^ (self._MATRIX_A if y & 1 else 0)
        self._mti = 0

    def next_uint32(self) -> int:
        if self._mti >= self._N:
            self._next_block()

        y = self._mt[self._mti]
        self._mti += 1

        y ^= y >> 11
        y ^= (y << 7) & self._TEMPERING_MASK_B
        y ^= (y << 15) & self._TEMPERING_MASK_C
        y ^= y >> 18
        return y

    def next_double(self) -> float:
        """Return a uniform float in [0, 1) with 32 random bits."""
        return self.next_uint32() * _TWO_POW_MINUS_32


class DRand(RandomEngine):
    """
    Multiplicative congruential generator z(i+1) = a * z(i) mod 2^32.

    a = 0x278DDE6D (663608941). Period 2^30. Fast, but unsuitable for
    anything beyond quick tests.
    """

    DEFAULT_SEED = 1
    _MULTIPLIER = 0x278DDE6D

    def __init__(self, seed: int = DEFAULT_SEED):
        """
        Initialize the generator.

        Args:
            seed: Seed; negative seeds are folded, large seeds shifted
        """
        if seed < 0:
            seed = -seed
        limit = (2**32 - 1) // 4
        if seed >= limit:
            seed >>= 3
        # SEC: z must be odd (and 1 mod 4) to reach the full period
        self._current = (4 * seed + 1) & 0xFFFFFFFF

    def next_uint32(self) -> int:
        self._current = (self._current * self._MULTIPLIER) & 0xFFFFFFFF
        return self._current


class AesEngine(RandomEngine):
    """
    AES-128 counter-mode engine.

    Encrypts a little-endian 128-bit counter under a fixed key with
    AES-128-ECB; each cipher block yields four 32-bit words.
    Same key -> same stream.

    Note: the stream is reproducible from the key alone. This is a
    high-quality statistical source, not a CSPRNG for key material.
    """

    def __init__(self, key: bytes = None):
        """
        Initialize the engine.

        Args:
            key: 16-byte AES key. If None, generates a random key.
        """
        if key is None:
            key = get_random_bytes(16)
        if len(key) != 16:
            raise ValueError("Key must be 16 bytes")
        self.key = key
        self._cipher = AES.new(self.key, AES.MODE_ECB)
        self._counter = 0
        self._words = ()
        self._word_pos = 0

    def _next_block(self) -> None:
        block = self._cipher.encrypt(self._counter.to_bytes(16, "little"))
        self._counter += 1
        self._words = struct.unpack("<4I", block)
        self._word_pos = 0

    def next_uint32(self) -> int:
        if self._word_pos >= len(self._words):
            self._next_block()
        value = self._words[self._word_pos]
        self._word_pos += 1
        return value

    def clone(self) -> "AesEngine":
        # Cipher objects cannot be deep-copied; rebuild one from the key
        copy_ = AesEngine(self.key)
        copy_._counter = self._counter
        copy_._words = self._words
        copy_._word_pos = self._word_pos
        return copy_


def make_default_generator() -> RandomEngine:
    """Return a MersenneTwister seeded from the operating system."""
    return MersenneTwister(secrets.randbits(32))
