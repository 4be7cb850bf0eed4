"""Independent replay of a route against a freshly simulated automaton."""

from typing import Sequence

from .automaton import Automaton
from .errors import VerificationError
from .position import Movement


def verify_path(automaton: Automaton, path: Sequence[Movement], max_lives: int = 0) -> int:
    """Replay `path` from the source of `automaton` (generation 0).

    Stepping on a live cell costs a life; up to `max_lives` are tolerated, but
    never on the first or the last tick. Returns the number of lives lost and
    raises VerificationError on any violation.
    """
    position = automaton.source
    current = automaton

    if current.is_alive(position):
        raise VerificationError("source is alive", 0, position)

    lives_lost = 0
    for generation, movement in enumerate(path, start=1):
        current = current.next_generation()
        position = position.moved(movement)
        alive = current.is_alive(position)

        if alive is None:
            raise VerificationError("left the grid", generation, position, movement)
        if alive:
            if generation == len(path):
                raise VerificationError("final cell is alive", generation, position, movement)
            lives_lost += 1
            if lives_lost > max_lives:
                raise VerificationError(
                    f"lost {lives_lost} lives, only {max_lives} allowed", generation, position, movement
                )

    if position != automaton.destination:
        raise VerificationError(
            f"ended away from destination {automaton.destination}",
            len(path),
            position,
            path[-1] if path else None,
        )

    return lives_lost
