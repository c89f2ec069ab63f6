"""
GenoType Module
===============

Segmented bit-vector with typed locus accessors.

Layout:
- A genotype is an ordered sequence of loci, each with a fixed bit width
- The loci are concatenated into one flat bit string
- Bit j of locus i sits at absolute index offsets[i] + j and weighs 2**j

Copies share the immutable offsets tuple and deep-copy the bits.
"""

import struct
import numpy as np
from typing import Callable, List, Optional, Sequence, Tuple

from .mask import Mask
from ..exceptions import (
    IncompatibleSchemaError,
    InvalidAccessError,
    InvalidArgumentError,
    InvalidLayoutError,
    OutOfRangeError,
)

LONG_BITS = 64
DOUBLE_BITS = 64

Watcher = Callable[[], None]


class GenoType:
    """
    Fixed-layout bit string.

    Bits change only through invert(), swap() and the set_* methods, and
    each of them fires the watcher callback.

    Notification contract:
    - invert() with an empty mask changes nothing and does not notify
    - swap() notifies both sides even when the mask is empty
    """

    def __init__(self, widths: Sequence[int]):
        """
        Create a zero-valued genotype.

        Args:
            widths: Bit width of each locus, in order

        Raises:
            InvalidLayoutError: if widths is empty or contains a width < 1
        """
        if len(widths) == 0:
            raise InvalidLayoutError("locus layout is empty")
        offsets = [0]
        for nbit in widths:
            if nbit < 1:
                raise InvalidLayoutError(f"locus width must be >= 1: {nbit}")
            offsets.append(offsets[-1] + int(nbit))

        self._offsets: Tuple[int, ...] = tuple(offsets)
        self._bits = np.zeros(self._offsets[-1], dtype=bool)
        self._watcher: Optional[Watcher] = None

    def copy(self) -> 'GenoType':
        """
        Copy with shared layout and independent bits.

        The watcher is not carried over.
        """
        clone = GenoType.__new__(GenoType)
        clone._offsets = self._offsets
        clone._bits = self._bits.copy()
        clone._watcher = None
        return clone

    __copy__ = copy

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def locus_count(self) -> int:
        return len(self._offsets) - 1

    @property
    def bit_length(self) -> int:
        return self._offsets[-1]

    @property
    def offsets(self) -> Tuple[int, ...]:
        return self._offsets

    def get_length(self, i: int) -> int:
        """Bit width of locus i"""
        self._check_locus(i)
        return self._offsets[i + 1] - self._offsets[i]

    def widths(self) -> List[int]:
        return [self._offsets[i + 1] - self._offsets[i] for i in range(self.locus_count)]

    def equals_schema(self, other: 'GenoType') -> bool:
        return self._offsets is other._offsets or self._offsets == other._offsets

    def get_mask(self) -> Mask:
        """Empty mask sized for this genotype"""
        return Mask(self.bit_length)

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_boolean(self, i: int) -> bool:
        self._check_width(i, exact=1)
        return bool(self._bits[self._offsets[i]])

    def get_bits(self, i: int) -> np.ndarray:
        """Copy of locus i, least significant bit first"""
        self._check_locus(i)
        return self._bits[self._offsets[i]:self._offsets[i + 1]].copy()

    def get_long(self, i: int) -> int:
        """Unsigned value of locus i (width <= 64)"""
        self._check_width(i, maximum=LONG_BITS)
        packed = np.packbits(self._bits[self._offsets[i]:self._offsets[i + 1]],
                             bitorder='little')
        return int.from_bytes(packed.tobytes(), 'little')

    def get_double(self, i: int) -> float:
        """IEEE-754 reinterpretation of a 64-bit locus"""
        self._check_width(i, exact=DOUBLE_BITS)
        return struct.unpack('<d', struct.pack('<Q', self.get_long(i)))[0]

    def get_scaled(self, i: int, minimum: float, maximum: float) -> float:
        """Linear map of locus value onto [minimum, maximum] (both inclusive)"""
        resolution = float(2 ** self.get_length(i) - 1)
        return minimum + self.get_long(i) / resolution * (maximum - minimum)

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_boolean(self, i: int, value: bool):
        self._check_width(i, exact=1)
        self._bits[self._offsets[i]] = bool(value)
        self._notify_changed()

    def set_bits(self, i: int, bits: Sequence[bool]):
        """Overwrite locus i, least significant bit first"""
        width = self.get_length(i)
        values = np.asarray(bits, dtype=bool)
        if values.shape != (width,):
            raise InvalidArgumentError(
                f"locus [{i}] takes {width} bits, got shape {values.shape}"
            )
        self._bits[self._offsets[i]:self._offsets[i + 1]] = values
        self._notify_changed()

    def set_long(self, i: int, value: int):
        self._check_width(i, maximum=LONG_BITS)
        width = self.get_length(i)
        if not 0 <= value < 1 << width:
            raise InvalidArgumentError(f"value {value} does not fit {width} bits")
        raw = np.frombuffer(int(value).to_bytes(8, 'little'), dtype=np.uint8)
        self.set_bits(i, np.unpackbits(raw, bitorder='little')[:width])

    # ------------------------------------------------------------------
    # Mutation primitives
    # ------------------------------------------------------------------

    def invert(self, mask: Mask):
        """Flip every bit selected by mask"""
        self._check_mask(mask)
        if mask.is_empty():
            return
        self._bits ^= mask.to_array()
        self._notify_changed()

    @staticmethod
    def swap(a: 'GenoType', b: 'GenoType', mask: Mask):
        """
        Exchange the bits selected by mask between a and b.

        Raises:
            InvalidArgumentError: if a and b are the same object, or the
                mask length differs from the bit length
            IncompatibleSchemaError: if layouts differ
        """
        if a is b:
            raise InvalidArgumentError("cannot swap a genotype with itself")
        if not a.equals_schema(b):
            raise IncompatibleSchemaError(
                f"incompatible layouts: {a.widths()} vs {b.widths()}"
            )
        a._check_mask(mask)

        selected = mask.to_array()
        held = a._bits[selected]
        a._bits[selected] = b._bits[selected]
        b._bits[selected] = held
        a._notify_changed()
        b._notify_changed()

    # ------------------------------------------------------------------
    # Watcher
    # ------------------------------------------------------------------

    def set_watcher(self, watcher: Optional[Watcher]):
        """Install (or clear, with None) the single change callback"""
        self._watcher = watcher

    @property
    def watcher(self) -> Optional[Watcher]:
        return self._watcher

    def _notify_changed(self):
        if self._watcher is not None:
            self._watcher()

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_locus(self, i: int):
        if not 0 <= i < self.locus_count:
            raise OutOfRangeError(f"locus index {i} outside [0, {self.locus_count})")

    def _check_width(self, i: int, exact: Optional[int] = None,
                     maximum: Optional[int] = None):
        width = self.get_length(i)
        if exact is not None and width != exact:
            raise InvalidAccessError(f"locus [{i}] must be {exact} bit, is {width}")
        if maximum is not None and width > maximum:
            raise InvalidAccessError(
                f"locus [{i}] must be {maximum} bit or less, is {width}"
            )

    def _check_mask(self, mask: Mask):
        if mask.length != self.bit_length:
            raise InvalidArgumentError(
                f"mask length {mask.length} != bit length {self.bit_length}"
            )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, GenoType):
            return NotImplemented
        return self is other or (
            np.array_equal(self._bits, other._bits) and self.equals_schema(other)
        )

    def __hash__(self) -> int:
        return hash(self._bits.tobytes())

    def __len__(self) -> int:
        return self.bit_length

    def __str__(self) -> str:
        groups = []
        for i in range(self.locus_count):
            locus = self._bits[self._offsets[i]:self._offsets[i + 1]]
            groups.append(''.join('1' if b else '0' for b in locus[::-1]))
        return ' '.join(groups)

    def __repr__(self) -> str:
        return f"GenoType({self})"


class GenoTypeLayout:
    """
    Builder for genotypes sharing one layout.

    Usage:
        layout = GenoTypeLayout().append(8).append(34)
        genotype = layout.inflate()
    """

    def __init__(self):
        self.widths: List[int] = []

    def append(self, nbit: int, times: int = 1) -> 'GenoTypeLayout':
        """
        Add `times` loci of `nbit` bits.

        Raises:
            InvalidLayoutError: if nbit < 1 or times < 1
        """
        if nbit < 1:
            raise InvalidLayoutError(f"nbit < 1: {nbit}")
        if times < 1:
            raise InvalidLayoutError(f"times < 1: {times}")
        self.widths.extend([nbit] * times)
        return self

    def inflate(self) -> GenoType:
        return GenoType(self.widths)
