"""Tests for the uniform random engines."""

import struct

import pytest
from Crypto.Cipher import AES

from srswor.engine import (
    AesEngine,
    DRand,
    MersenneTwister,
    RandomEngine,
    make_default_generator,
)


class FixedEngine(RandomEngine):
    """Engine replaying a fixed list of 32-bit words."""

    def __init__(self, words):
        self._words = list(words)

    def next_uint32(self) -> int:
        return self._words.pop(0)


class TestRandomEngine:
    """Tests for the derived views of RandomEngine."""

    def test_raw_skips_zero(self):
        """A zero word is redrawn instead of yielding 0.0."""
        engine = FixedEngine([0, 0, 5])
        assert engine.raw() == 5 * 2.0**-32

    def test_raw_open_interval(self):
        assert 0.0 < FixedEngine([1]).raw() < 1.0
        assert 0.0 < FixedEngine([0xFFFFFFFF]).raw() < 1.0

    def test_next_int32_signed(self):
        assert FixedEngine([0xFFFFFFFF]).next_int32() == -1
        assert FixedEngine([0x7FFFFFFF]).next_int32() == 2**31 - 1
        assert FixedEngine([0x80000000]).next_int32() == -(2**31)

    def test_next_long(self):
        """High word is drawn first."""
        assert FixedEngine([0, 7]).next_long() == 7
        assert FixedEngine([1, 0]).next_long() == 2**32
        assert FixedEngine([0xFFFFFFFF, 0xFFFFFFFE]).next_long() == -2

    def test_next_double_range(self):
        assert FixedEngine([0, 0]).next_double() == 0.0
        assert FixedEngine([0xFFFFFFFF, 0xFFFFFFFF]).next_double() < 1.0


class TestMersenneTwister:
    """Tests for MT19937."""

    def test_reference_first_output(self):
        """Default seed 5489 matches the reference generator."""
        mt = MersenneTwister()
        assert mt.next_uint32() == 3499211612

    def test_reference_10000th_output(self):
        mt = MersenneTwister(5489)
        for _ in range(9999):
            mt.next_uint32()
        assert mt.next_uint32() == 4123659995

    def test_deterministic(self):
        a = MersenneTwister(42)
        b = MersenneTwister(42)
        assert [a.next_uint32() for _ in range(1000)] == [b.next_uint32() for _ in range(1000)]

    def test_different_seeds(self):
        a = MersenneTwister(1)
        b = MersenneTwister(2)
        assert [a.next_uint32() for _ in range(10)] != [b.next_uint32() for _ in range(10)]

    def test_outputs_are_32_bit(self):
        mt = MersenneTwister(7)
        for _ in range(2000):
            assert 0 <= mt.next_uint32() < 2**32

    def test_next_double(self):
        mt = MersenneTwister(3)
        for _ in range(100):
            assert 0.0 <= mt.next_double() < 1.0

    def test_mean(self):
        """raw() should average close to 1/2."""
        mt = MersenneTwister(11)
        values = [mt.raw() for _ in range(20000)]
        assert abs(sum(values) / len(values) - 0.5) < 0.01

    def test_clone_replays_stream(self):
        mt = MersenneTwister(99)
        for _ in range(700):
            mt.next_uint32()
        copy_ = mt.clone()
        assert [mt.next_uint32() for _ in range(1000)] == [copy_.next_uint32() for _ in range(1000)]

    def test_clone_is_independent(self):
        mt = MersenneTwister(99)
        copy_ = mt.clone()
        mt.next_uint32()
        mt.next_uint32()
        fresh = MersenneTwister(99)
        assert copy_.next_uint32() == fresh.next_uint32()


class TestDRand:
    """Tests for the congruential generator."""

    def test_first_output(self):
        """Seed 1 starts from z = 5."""
        drand = DRand()
        assert drand.next_uint32() == (5 * 0x278DDE6D) % 2**32

    def test_recurrence(self):
        drand = DRand(12345)
        prev = drand.next_uint32()
        for _ in range(100):
            value = drand.next_uint32()
            assert value == (prev * 0x278DDE6D) % 2**32
            prev = value

    def test_negative_seed_folded(self):
        a = DRand(-17)
        b = DRand(17)
        assert a.next_uint32() == b.next_uint32()

    def test_outputs_are_odd(self):
        drand = DRand(3)
        for _ in range(100):
            assert drand.next_uint32() % 2 == 1

    def test_large_seed(self):
        drand = DRand(2**31 - 1)
        assert 0 < drand.next_uint32() < 2**32


class TestAesEngine:
    """Tests for the AES counter-mode engine."""

    def test_counter_mode_words(self):
        """First four words are AES_k(0) read as little-endian uint32s."""
        key = b"k" * 16
        engine = AesEngine(key)
        expected = struct.unpack(
            "<4I", AES.new(key, AES.MODE_ECB).encrypt((0).to_bytes(16, "little"))
        )
        assert tuple(engine.next_uint32() for _ in range(4)) == expected

    def test_deterministic(self):
        a = AesEngine(b"0" * 16)
        b = AesEngine(b"0" * 16)
        assert [a.next_uint32() for _ in range(50)] == [b.next_uint32() for _ in range(50)]

    def test_random_key(self):
        a = AesEngine()
        b = AesEngine()
        assert len(a.key) == 16
        assert [a.next_uint32() for _ in range(4)] != [b.next_uint32() for _ in range(4)]

    def test_invalid_key(self):
        with pytest.raises(ValueError):
            AesEngine(b"short")

    def test_clone_mid_block(self):
        engine = AesEngine(b"1" * 16)
        for _ in range(6):
            engine.next_uint32()
        copy_ = engine.clone()
        assert [engine.next_uint32() for _ in range(10)] == [copy_.next_uint32() for _ in range(10)]


class TestDefaultGenerator:
    """Tests for make_default_generator."""

    def test_returns_mersenne_twister(self):
        assert isinstance(make_default_generator(), MersenneTwister)

    def test_raw_in_range(self):
        rng = make_default_generator()
        for _ in range(100):
            assert 0.0 < rng.raw() < 1.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
