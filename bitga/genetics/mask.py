"""
Mask Module
===========

Bit-index selection set applied to genotypes by invert and swap.
"""

import numpy as np
from typing import Iterable, Optional

from ..exceptions import OutOfRangeError


class Mask:
    """
    Fixed-length set of bit indices.

    A mask has no relation to any genotype beyond its length; it only
    selects which absolute bit positions take part in an invert or swap.

    Range methods follow slice semantics: ``set(6, 22)`` selects bits
    6 through 21.
    """

    def __init__(self, length: int):
        if length < 0:
            raise OutOfRangeError(f"mask length must be >= 0: {length}")
        self.length = length
        self._bits = np.zeros(length, dtype=bool)

    @classmethod
    def from_indices(cls, length: int, indices: Iterable[int]) -> 'Mask':
        mask = cls(length)
        for i in indices:
            mask.set(i)
        return mask

    def set(self, from_index: int, to_index: Optional[int] = None):
        """Select one bit, or the bits in [from_index, to_index)"""
        self._bits[self._range(from_index, to_index)] = True

    def clear(self, from_index: Optional[int] = None, to_index: Optional[int] = None):
        """Deselect one bit, a range, or every bit when called without arguments"""
        if from_index is None:
            self._bits[:] = False
        else:
            self._bits[self._range(from_index, to_index)] = False

    def flip(self, from_index: int, to_index: Optional[int] = None):
        r = self._range(from_index, to_index)
        self._bits[r] = ~self._bits[r]

    def get(self, index: int) -> bool:
        self._check_index(index)
        return bool(self._bits[index])

    def is_empty(self) -> bool:
        return not self._bits.any()

    def cardinality(self) -> int:
        return int(np.count_nonzero(self._bits))

    def indices(self) -> np.ndarray:
        """Selected bit indices in ascending order"""
        return np.flatnonzero(self._bits)

    def to_array(self) -> np.ndarray:
        """Read-only boolean view of the selection"""
        view = self._bits.view()
        view.flags.writeable = False
        return view

    def copy(self) -> 'Mask':
        clone = Mask(self.length)
        clone._bits[:] = self._bits
        return clone

    def _check_index(self, index: int):
        if not 0 <= index < self.length:
            raise OutOfRangeError(f"bit index {index} outside [0, {self.length})")

    def _range(self, from_index: int, to_index: Optional[int]) -> slice:
        if to_index is None:
            self._check_index(from_index)
            return slice(from_index, from_index + 1)
        if not 0 <= from_index <= to_index <= self.length:
            raise OutOfRangeError(
                f"bit range [{from_index}, {to_index}) outside [0, {self.length}]"
            )
        return slice(from_index, to_index)

    def __len__(self) -> int:
        return self.length

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mask):
            return NotImplemented
        return self.length == other.length and np.array_equal(self._bits, other._bits)

    def __hash__(self) -> int:
        return hash((self.length, self._bits.tobytes()))

    def __repr__(self) -> str:
        return f"Mask(length={self.length}, {{{', '.join(map(str, self.indices()))}}})"
