"""Packed bitset with the shape of a grid, used as a compact reached-set."""

import numpy as np
from typing import Iterator, Union

from .grid import Grid
from .position import Position


class BitGrid:
    """Set of positions stored as one bit per cell (8 cells per byte)."""

    def __init__(self, height: int, width: int):
        if height < 0 or width < 0:
            raise ValueError(f"invalid dimensions {height}x{width}")
        self.height = height
        self.width = width
        self._bits = np.zeros((height * width + 7) // 8, dtype=np.uint8)

    @classmethod
    def same_shape_as(cls, other: Union["BitGrid", Grid]) -> "BitGrid":
        """A zeroed bitset with the dimensions of `other`."""
        return cls(other.height, other.width)

    def _offset(self, position: Position):
        if not (0 <= position.row < self.height and 0 <= position.col < self.width):
            return None
        return position.row * self.width + position.col

    def insert(self, position: Position):
        offset = self._offset(position)
        if offset is None:
            raise IndexError(f"{position} outside {self.height}x{self.width} bitgrid")
        self._bits[offset >> 3] |= np.uint8(0x80 >> (offset & 7))

    def contains(self, position: Position) -> bool:
        offset = self._offset(position)
        if offset is None:
            return False
        return bool(self._bits[offset >> 3] & (0x80 >> (offset & 7)))

    def is_empty(self) -> bool:
        return not self._bits.any()

    def iter(self) -> Iterator[Position]:
        """Set positions in row-major order."""
        # unpackbits reads bits most significant first, matching insert()
        flags = np.unpackbits(self._bits, count=self.height * self.width)
        for offset in np.flatnonzero(flags):
            row, col = divmod(int(offset), self.width)
            yield Position(row, col)

    def __iter__(self) -> Iterator[Position]:
        return self.iter()

    def __contains__(self, position: Position) -> bool:
        return self.contains(position)

    def __len__(self) -> int:
        return int(np.unpackbits(self._bits).sum())

    @property
    def nbytes(self) -> int:
        return int(self._bits.nbytes)

    def __repr__(self):
        return f"BitGrid({self.height}x{self.width}, members={len(self)})"
