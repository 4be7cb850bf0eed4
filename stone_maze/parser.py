"""Reading and writing the maze text format.

Each line is one row of whitespace-separated tokens:

    0   dead cell
    1   live cell
    3   source (dead, exactly once)
    4   destination (dead, exactly once)
    x   indeterminate cell, dead, only inside the caller's window
"""

from typing import List, Optional, Tuple

from .automaton import STONE, Automaton, Rule
from .errors import ParseError
from .grid import Grid
from .position import Position

DEAD = "0"
ALIVE = "1"
SOURCE = "3"
DESTINATION = "4"
INDETERMINATE = "x"

# (top, left, height, width)
Window = Tuple[int, int, int, int]


def _in_window(window: Optional[Window], i: int, j: int) -> bool:
    if window is None:
        return False
    top, left, height, width = window
    return top <= i < top + height and left <= j < left + width


def parse_automaton(
    text: str,
    immutable_endpoints: bool = False,
    indeterminate: Optional[Window] = None,
    rule: Rule = STONE,
) -> Automaton:
    """Parse maze text into a generation-0 automaton.

    Raises ParseError with row/column context on any malformed input.
    """
    rows: List[List[bool]] = []
    source = destination = None

    lines = text.strip().splitlines()
    if not lines:
        raise ParseError("empty automaton")

    for i, line in enumerate(lines):
        row = []
        for j, token in enumerate(line.split()):
            if token == ALIVE:
                row.append(True)
                continue
            if token == SOURCE:
                if source is not None:
                    raise ParseError(f"second source (first at {source})", i, j)
                source = Position(i, j)
            elif token == DESTINATION:
                if destination is not None:
                    raise ParseError(f"second destination (first at {destination})", i, j)
                destination = Position(i, j)
            elif token.lower() == INDETERMINATE:
                if not _in_window(indeterminate, i, j):
                    raise ParseError("indeterminate cell outside its window", i, j)
            elif token != DEAD:
                raise ParseError(f"unrecognized cell {token!r}", i, j)
            row.append(False)

        if rows and len(row) != len(rows[0]):
            raise ParseError(f"ragged row: {len(row)} cells, expected {len(rows[0])}", i)
        rows.append(row)

    if not rows[0]:
        raise ParseError("empty automaton")
    if source is None:
        raise ParseError("missing source cell")
    if destination is None:
        raise ParseError("missing destination cell")

    return Automaton(
        grid=Grid.from_rows(rows),
        source=source,
        destination=destination,
        immutable_endpoints=immutable_endpoints,
        rule=rule,
    )


def load_automaton(filepath: str, **kwargs) -> Automaton:
    with open(filepath, "r") as f:
        return parse_automaton(f.read(), **kwargs)


def format_automaton(automaton: Automaton) -> str:
    """Inverse of `parse_automaton` (indeterminate cells come back as 0)."""
    lines = []
    for i in range(automaton.height):
        tokens = []
        for j in range(automaton.width):
            pos = Position(i, j)
            if pos == automaton.source:
                tokens.append(SOURCE)
            elif pos == automaton.destination:
                tokens.append(DESTINATION)
            else:
                tokens.append(ALIVE if automaton.grid.get(i, j) else DEAD)
        lines.append(" ".join(tokens))
    return "\n".join(lines)
