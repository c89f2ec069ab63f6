"""
Random Source Module
====================

Shared, sequentially consumed random generators.

The engine and the standard operators draw only through the four methods
of RandomSource, so a fixed seed gives one reproducible draw sequence.

Implementations:
- JavaRandom: 48-bit linear congruential generator with the draw
  algorithms of java.util.Random; reproduces reference fixtures exactly
- NumpyRandom: numpy Generator (PCG64) backed source
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import MutableSequence, Optional, TypeVar

from ..exceptions import InvalidArgumentError

T = TypeVar('T')


class RandomSource(ABC):
    """Random draws used by genetic operators"""

    @abstractmethod
    def next_int(self, bound: int) -> int:
        """Uniform integer in [0, bound)"""

    @abstractmethod
    def next_double(self) -> float:
        """Uniform float in [0, 1)"""

    @abstractmethod
    def next_boolean(self) -> bool:
        """Fair coin"""

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """
        Shuffle in place.

        Walks from the back, swapping position i - 1 with next_int(i), for i
        from len(items) down to 2.

        Returns:
            The same sequence, for chaining
        """
        for i in range(len(items), 1, -1):
            j = self.next_int(i)
            items[i - 1], items[j] = items[j], items[i - 1]
        return items

    @staticmethod
    def _check_bound(bound: int):
        if bound <= 0:
            raise InvalidArgumentError(f"bound must be positive: {bound}")


class JavaRandom(RandomSource):
    """
    Linear congruential generator compatible with java.util.Random.

    Same seed, same sequence of next_int / next_double / next_boolean
    results as the JDK class.
    """

    MULTIPLIER = 0x5DEECE66D
    ADDEND = 0xB
    MASK = (1 << 48) - 1
    DOUBLE_UNIT = 1.0 / (1 << 53)

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = int(np.random.SeedSequence().entropy)
        self.set_seed(seed)

    def set_seed(self, seed: int):
        self._seed = (seed ^ self.MULTIPLIER) & self.MASK

    def _next(self, bits: int) -> int:
        self._seed = (self._seed * self.MULTIPLIER + self.ADDEND) & self.MASK
        r = self._seed >> (48 - bits)
        if r >= 1 << 31:
            # 32-bit draws are signed ints
            r -= 1 << 32
        return r

    def next_int(self, bound: int) -> int:
        self._check_bound(bound)
        r = self._next(31)
        m = bound - 1
        if bound & m == 0:
            return (bound * r) >> 31
        u = r
        r = u % bound
        # reject the partial bucket at the top of the 31-bit range
        while u - r + m >= 1 << 31:
            u = self._next(31)
            r = u % bound
        return r

    def next_double(self) -> float:
        return ((self._next(26) << 27) + self._next(27)) * self.DOUBLE_UNIT

    def next_boolean(self) -> bool:
        return self._next(1) != 0

    def next_long(self) -> int:
        """Signed 64-bit integer"""
        value = (self._next(32) << 32) + self._next(32)
        value &= (1 << 64) - 1
        return value - (1 << 64) if value >= 1 << 63 else value

    def __repr__(self) -> str:
        return f"JavaRandom(state=0x{self._seed:012x})"


class NumpyRandom(RandomSource):
    """RandomSource backed by numpy.random.default_rng"""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def next_int(self, bound: int) -> int:
        self._check_bound(bound)
        return int(self.rng.integers(bound))

    def next_double(self) -> float:
        return float(self.rng.random())

    def next_boolean(self) -> bool:
        return bool(self.rng.integers(2))

    def __repr__(self) -> str:
        return f"NumpyRandom(seed={self.seed})"


def create_random(kind: str = 'java', seed: Optional[int] = None) -> RandomSource:
    """
    Build a random source by name.

    Args:
        kind: 'java' or 'numpy'
        seed: Optional seed; None draws one from OS entropy

    Returns:
        New RandomSource
    """
    if kind == 'java':
        return JavaRandom(seed)
    if kind == 'numpy':
        return NumpyRandom(seed)
    raise InvalidArgumentError(f"unknown random source: {kind!r}")


__all__ = ['RandomSource', 'JavaRandom', 'NumpyRandom', 'create_random']
