"""
Seeded uniform random sources consumed by the heightmap generator.

The generator only needs two operations: reseed, and draw a float in
[0, 1). Any object providing them satisfies ``RandomSource``. Three
implementations ship with the library:

- ``LCGRandomSource``: the ISO C ``rand()`` example generator. Fully
  specified, so it is used as the reference source for pinned results.
- ``AleaRandomSource``: Johannes Baagøe's Alea generator.
- ``NumpyRandomSource``: NumPy's PCG64 bit generator.
"""

from typing import Optional, Protocol, runtime_checkable

import numpy as np


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


@runtime_checkable
class RandomSource(Protocol):
    """Seeded source of uniform draws in [0, 1)."""

    def seed(self, value: int) -> None:
        ...

    def next_uniform(self) -> float:
        ...


class LCGRandomSource:
    """
    Linear congruential generator from the ISO C standard's sample rand().

    state = (state * 1103515245 + 12345) mod 2**32
    output = (state // 65536) mod 32768

    Draws are ``output / 32768``, so they lie in [0, 1) with a resolution
    of 2**-15.
    """

    MULTIPLIER = 1103515245
    INCREMENT = 12345
    RAND_MAX = 32767

    def __init__(self, seed: int = 1):
        self.call_count = 0
        self._state = 0
        self.seed(seed)

    def seed(self, value: int) -> None:
        """Reset the state; only the low 32 bits of ``value`` are used."""
        self._state = _uint32(value)
        self.call_count = 0

    def next_int(self) -> int:
        """Next raw output in [0, RAND_MAX]."""
        self.call_count += 1
        self._state = _uint32(self._state * self.MULTIPLIER + self.INCREMENT)
        return (self._state // 65536) % (self.RAND_MAX + 1)

    def next_uniform(self) -> float:
        return self.next_int() / (self.RAND_MAX + 1)


class AleaRandomSource:
    """
    Alea PRNG by Johannes Baagøe.

    Seeding hashes the decimal representation of the seed through the
    Mash function, so every integer seed yields an independent stream.
    """

    def __init__(self, seed: int = 0):
        self.call_count = 0
        self.s0 = 0.0
        self.s1 = 0.0
        self.s2 = 0.0
        self.c = 1
        self.seed(seed)

    def seed(self, value: int) -> None:
        """Reinitialize the generator state from ``value``."""
        mash_n = 0xEFC8249D  # 4022871197

        def mash(data):
            nonlocal mash_n
            for char in str(data):
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(value)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(value)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(value)
        if self.s2 < 0:
            self.s2 += 1

        self.call_count = 0

    def next_uniform(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2


class NumpyRandomSource:
    """Adapter exposing a NumPy PCG64 generator as a ``RandomSource``."""

    def __init__(self, seed: Optional[int] = None):
        self.call_count = 0
        self._rng = np.random.Generator(np.random.PCG64(seed))

    def seed(self, value: int) -> None:
        self._rng = np.random.Generator(np.random.PCG64(value))
        self.call_count = 0

    def next_uniform(self) -> float:
        self.call_count += 1
        return float(self._rng.random())
