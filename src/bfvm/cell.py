from __future__ import annotations

from typing import Protocol, Type

import numpy as np


class Cell(Protocol):
    """Numeric semantics of one tape slot.

    Values are numpy scalars of ``dtype``; all arithmetic wraps modulo the
    width of the type and never fails.
    """

    dtype: np.dtype

    def zero(self) -> np.unsignedinteger: ...

    def increment(self, value: np.unsignedinteger) -> np.unsignedinteger: ...

    def decrement(self, value: np.unsignedinteger) -> np.unsignedinteger: ...

    def from_byte(self, byte: int) -> np.unsignedinteger: ...

    def to_byte(self, value: np.unsignedinteger) -> int: ...


class WrappingCell:
    """Unsigned fixed-width cell backed by a numpy unsigned integer dtype."""

    def __init__(self, scalar_type: Type[np.unsignedinteger]):
        self.dtype = np.dtype(scalar_type)
        if self.dtype.kind != 'u':
            raise ValueError(f"Cell type must be an unsigned integer dtype, got {self.dtype}")
        self._type = self.dtype.type
        # Python ints below, numpy scalar arithmetic warns on overflow
        self.modulus = int(np.iinfo(self.dtype).max) + 1
        self.bits = self.dtype.itemsize * 8

    def zero(self) -> np.unsignedinteger:
        return self._type(0)

    def increment(self, value: np.unsignedinteger) -> np.unsignedinteger:
        return self._type((int(value) + 1) % self.modulus)

    def decrement(self, value: np.unsignedinteger) -> np.unsignedinteger:
        return self._type((int(value) - 1) % self.modulus)

    def from_byte(self, byte: int) -> np.unsignedinteger:
        return self._type(byte & 0xFF)

    def to_byte(self, value: np.unsignedinteger) -> int:
        return int(value) & 0xFF

    def __repr__(self) -> str:
        return f"WrappingCell({self.dtype.name})"


U8 = WrappingCell(np.uint8)
U16 = WrappingCell(np.uint16)
U32 = WrappingCell(np.uint32)

CELL_TYPES = {8: U8, 16: U16, 32: U32}


def cell_for_bits(bits: int) -> WrappingCell:
    try:
        return CELL_TYPES[bits]
    except KeyError:
        raise ValueError(f"Unsupported cell width: {bits} (expected one of {sorted(CELL_TYPES)})") from None
