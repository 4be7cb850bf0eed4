"""Dense boolean grid backing each automaton generation."""

import numpy as np
from scipy import ndimage
from typing import Iterator, Optional, Sequence, Tuple

# Moore neighborhood, center excluded
NEIGHBOR_KERNEL = np.array(
    [[1, 1, 1],
     [1, 0, 1],
     [1, 1, 1]],
    dtype=np.uint8,
)


class Grid:
    """2D grid of cells, `True` = alive (obstructing), `False` = dead (passable).

    Coordinates are signed; anything outside `[0, height) x [0, width)` reads as
    absent. The grid does not wrap at the edges.
    """

    def __init__(self, cells: np.ndarray):
        cells = np.array(cells, dtype=bool)
        if cells.ndim != 2:
            raise ValueError(f"grid must be 2-dimensional, got shape {cells.shape}")
        self._cells = cells

    @classmethod
    def zeros(cls, height: int, width: int) -> "Grid":
        return cls(np.zeros((height, width), dtype=bool))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[bool]]) -> "Grid":
        """Build a grid from nested rows; all rows must have the same length."""
        if not rows:
            raise ValueError("grid must have at least one row")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {i} has {len(row)} cells, expected {width}")
        return cls(np.array(rows, dtype=bool).reshape(len(rows), width))

    @classmethod
    def from_string(cls, text: str) -> "Grid":
        """Parse rows of space-separated 0/1 cells."""
        rows = [[c == "1" for c in line.split()] for line in text.strip().splitlines()]
        return cls.from_rows(rows)

    @property
    def height(self) -> int:
        return self._cells.shape[0]

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._cells.shape

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the backing array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self.height and 0 <= j < self.width

    def get(self, i: int, j: int) -> Optional[bool]:
        if not self.in_bounds(i, j):
            return None
        return bool(self._cells[i, j])

    def set(self, i: int, j: int, value: bool):
        if not self.in_bounds(i, j):
            raise IndexError(f"({i}, {j}) outside {self.height}x{self.width} grid")
        self._cells[i, j] = value

    def count_live_neighbors(self, i: int, j: int) -> int:
        """Count live cells among the 8 neighbors of (i, j); off-grid cells are dead."""
        if not self.in_bounds(i, j):
            raise IndexError(f"({i}, {j}) outside {self.height}x{self.width} grid")
        window = self._cells[max(i - 1, 0):i + 2, max(j - 1, 0):j + 2]
        total = int(np.count_nonzero(window))
        if self.get(i, j):
            total -= 1
        return total

    def live_neighbor_counts(self) -> np.ndarray:
        """Live-neighbor count for every cell at once (zero padding, no wrap)."""
        return ndimage.convolve(
            self._cells.astype(np.uint8), NEIGHBOR_KERNEL, mode="constant", cval=0
        )

    def cells(self) -> Iterator[Tuple[int, int, bool]]:
        """Yield (row, col, value) in row-major order."""
        for i in range(self.height):
            for j in range(self.width):
                yield i, j, bool(self._cells[i, j])

    def population(self) -> int:
        return int(np.count_nonzero(self._cells))

    def overwrite(self, other: "Grid", i: int, j: int) -> "Grid":
        """Return a copy with `other` pasted so that its top left lands at (i, j)."""
        if i < 0 or j < 0 or i + other.height > self.height or j + other.width > self.width:
            raise IndexError(
                f"{other.height}x{other.width} grid at ({i}, {j}) "
                f"does not fit in {self.height}x{self.width} grid"
            )
        cells = self._cells.copy()
        cells[i:i + other.height, j:j + other.width] = other._cells
        return Grid(cells)

    def rotate(self) -> "Grid":
        """Rotate 90 degrees clockwise."""
        return Grid(np.rot90(self._cells, k=-1))

    def flip(self) -> "Grid":
        """Mirror left to right."""
        return Grid(np.fliplr(self._cells))

    def invert(self) -> "Grid":
        return Grid(~self._cells)

    def code(self) -> int:
        """Integer encoding of the cells, row-major, first cell most significant."""
        code = 0
        for value in self._cells.flat:
            code = (code << 1) | int(value)
        return code

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._cells, other._cells))

    def __hash__(self):
        return hash((self.shape, self._cells.tobytes()))

    def __repr__(self):
        return f"Grid({self.height}x{self.width}, population={self.population()})"

    def __str__(self):
        return "\n".join(
            " ".join("1" if v else "0" for v in row) for row in self._cells
        )
