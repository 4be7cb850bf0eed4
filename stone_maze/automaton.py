"""Maze automaton: a bounded outer-totalistic cellular automaton with a source and destination."""

import re

import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, Optional, Set

from .grid import Grid
from .position import Position

RULE_PATTERN = re.compile(r"B(\d*)/?S(\d*)")


@dataclass
class Rule:
    """Outer-totalistic rule in Birth/Survival notation (e.g., B234/S45 for the maze)."""
    birth: Set[int]  # Neighbor counts that cause birth
    survival: Set[int]  # Neighbor counts that allow survival

    @classmethod
    def from_string(cls, rule_str: str) -> "Rule":
        """Parse rule from string like 'B234/S45' or 'B234S45'."""
        match = RULE_PATTERN.fullmatch(rule_str.upper().replace(" ", ""))
        if match is None:
            raise ValueError(f"invalid rule {rule_str!r}, expected e.g. B234/S45")

        birth, survival = ({int(c) for c in digits} for digits in match.groups())
        if any(n > 8 for n in birth | survival):
            raise ValueError(f"neighbor counts above 8 in rule {rule_str!r}")

        return cls(birth=birth, survival=survival)

    def to_string(self) -> str:
        b_str = "".join(str(i) for i in sorted(self.birth))
        s_str = "".join(str(i) for i in sorted(self.survival))
        return f"B{b_str}/S{s_str}"

    def apply(self, alive: np.ndarray, neighbors: np.ndarray) -> np.ndarray:
        """Next state of every cell given current states and live-neighbor counts."""
        born = ~alive & np.isin(neighbors, sorted(self.birth))
        survives = alive & np.isin(neighbors, sorted(self.survival))
        return born | survives

    def __hash__(self):
        return hash((frozenset(self.birth), frozenset(self.survival)))

    def __eq__(self, other):
        if not isinstance(other, Rule):
            return False
        return self.birth == other.birth and self.survival == other.survival


# Dead cells with 2-4 live neighbors turn alive, live cells with 4-5 stay alive
STONE = Rule.from_string("B234/S45")


@dataclass(frozen=True)
class Automaton:
    """One generation of the maze.

    Values are never modified: `next_generation` builds a fresh grid, so earlier
    generations can be shared by several searches or replays.
    """
    grid: Grid
    source: Position
    destination: Position
    immutable_endpoints: bool = False
    rule: Rule = field(default=STONE)

    def __post_init__(self):
        for name in ("source", "destination"):
            pos = getattr(self, name)
            if not self.grid.in_bounds(pos.row, pos.col):
                raise ValueError(f"{name} {pos} outside {self.grid.height}x{self.grid.width} grid")

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def width(self) -> int:
        return self.grid.width

    def is_alive(self, pos: Position) -> Optional[bool]:
        """Cell state at `pos`, or None off the grid."""
        return self.grid.get(pos.row, pos.col)

    def is_dead(self, pos: Position) -> bool:
        """True only for on-grid dead cells (the ones the agent may enter)."""
        return self.grid.get(pos.row, pos.col) is False

    def next_generation(self) -> "Automaton":
        """Apply the rule to every cell simultaneously and return the next generation."""
        alive = self.grid.array
        cells = self.rule.apply(alive, self.grid.live_neighbor_counts())

        if self.immutable_endpoints:
            cells[self.source.row, self.source.col] = False
            cells[self.destination.row, self.destination.col] = False

        return self.with_grid(Grid(cells))

    def generations(self) -> Iterator["Automaton"]:
        """Yield this generation and every following one."""
        current = self
        while True:
            yield current
            current = current.next_generation()

    def with_grid(self, grid: Grid) -> "Automaton":
        return Automaton(
            grid=grid,
            source=self.source,
            destination=self.destination,
            immutable_endpoints=self.immutable_endpoints,
            rule=self.rule,
        )

    def distance_to_destination(self, pos: Position) -> int:
        return pos.manhattan(self.destination)
