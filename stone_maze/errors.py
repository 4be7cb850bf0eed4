"""Exception types raised by the maze parser, search and verifier."""

from typing import Optional


class StoneMazeError(Exception):
    """Base class for every error raised by this package."""


class ParseError(StoneMazeError, ValueError):
    """Malformed automaton text, reported with the offending row/column."""

    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row
        self.col = col
        if row is not None and col is not None:
            message = f"{message} at ({row}, {col})"
        elif row is not None:
            message = f"{message} at row {row}"
        super().__init__(message)


class InternalConsistencyError(StoneMazeError):
    """A search or transition bug; callers are not expected to recover."""


class ReconstructionError(InternalConsistencyError):
    """No predecessor explains a position claimed reached at some generation."""

    def __init__(self, generation: int, position):
        self.generation = generation
        self.position = position
        super().__init__(
            f"no predecessor for {position} at generation {generation}"
        )


class VerificationError(InternalConsistencyError):
    """A replayed path broke the movement rules."""

    def __init__(self, message: str, generation: int, position, movement=None):
        self.generation = generation
        self.position = position
        self.movement = movement
        super().__init__(
            f"{message} (generation={generation}, position={position}, movement={movement})"
        )
