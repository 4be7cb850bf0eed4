"""Positions and agent movements on a 2D grid."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple


class Movement(Enum):
    """One orthogonal step of the agent. The origin is the top left cell; rows grow down."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def char(self) -> str:
        return _CHARS[self]

    @property
    def inverse(self) -> "Movement":
        return _INVERSES[self]

    @classmethod
    def from_char(cls, c: str) -> "Movement":
        try:
            return _FROM_CHARS[c.upper()]
        except KeyError:
            raise ValueError(f"unknown movement {c!r}") from None

    def __str__(self) -> str:
        return self.char


# Expansion and reconstruction both walk movements in this order
MOVEMENTS = (Movement.UP, Movement.DOWN, Movement.LEFT, Movement.RIGHT)

_CHARS = {
    Movement.UP: "U",
    Movement.DOWN: "D",
    Movement.LEFT: "L",
    Movement.RIGHT: "R",
}
_FROM_CHARS = {c: m for m, c in _CHARS.items()}
_INVERSES = {
    Movement.UP: Movement.DOWN,
    Movement.DOWN: Movement.UP,
    Movement.LEFT: Movement.RIGHT,
    Movement.RIGHT: Movement.LEFT,
}


@dataclass(frozen=True, order=True)
class Position:
    """A (row, col) cell. Coordinates are signed so moves off the grid stay representable."""
    row: int
    col: int

    def moved(self, movement: Movement) -> "Position":
        """The position reached by taking `movement` from here."""
        di, dj = movement.delta
        return Position(self.row + di, self.col + dj)

    def previous(self, movement: Movement) -> "Position":
        """The position from which `movement` lands here."""
        di, dj = movement.delta
        return Position(self.row - di, self.col - dj)

    def manhattan(self, other: "Position") -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


def format_path(path: Iterable[Movement]) -> str:
    """Format movements as space-separated letters, oldest first."""
    return " ".join(m.char for m in path)


def parse_path(text: str) -> List[Movement]:
    """Parse the output of `format_path` back into movements."""
    return [Movement.from_char(token) for token in text.split()]
