"""Generation-synchronized breadth-first search for a route through the maze automaton.

Every move advances the automaton one generation, so a path of length g always
ends at generation g and only generation g + 1 can be reached from generation g.
Expanding one whole generation at a time is therefore enough for the first
arrival at the destination to be a shortest path (when nothing is pruned).
"""

from dataclasses import dataclass
from typing import List, Optional

from .automaton import Automaton
from .history import BitGridHistory, History, ParentHistory
from .position import MOVEMENTS, Movement, Position, format_path

FOUND = "found"
GENERATION_LIMIT = "generation limit"
FRONTIER_EXHAUSTED = "frontier exhausted"


@dataclass
class SearchResult:
    """Outcome of one search: an exact route, or the best-effort route to the closest position."""
    path: List[Movement]
    success: bool
    generation: int  # Generation at which `position` was reached
    position: Position
    distance: int  # Manhattan distance left to the destination (0 on success)
    generations_computed: int
    peak_reached: int  # Largest reached set over all generations
    stop_reason: str

    def path_string(self) -> str:
        return format_path(self.path)

    def to_dict(self) -> dict:
        return {
            "path": self.path_string(),
            "success": self.success,
            "generation": self.generation,
            "position": [self.position.row, self.position.col],
            "distance": self.distance,
            "generations_computed": self.generations_computed,
            "peak_reached": self.peak_reached,
            "stop_reason": self.stop_reason,
        }


@dataclass
class _Best:
    """Closest approach to the destination seen so far in one search."""
    distance: int
    generation: int
    position: Position


def assemble_path(history: History, generation: int, position: Position) -> List[Movement]:
    """Walk the history back from (generation, position) to the source, oldest move first."""
    movements = []
    while generation > 0:
        movement = history.movement_into(generation, position)
        movements.append(movement)
        position = position.previous(movement)
        generation -= 1
    movements.reverse()
    return movements


class PathSearch:
    """Breadth-first route search over the growing generation lattice.

    The default heuristic mode keeps a parent pointer per reached cell and drops
    candidates more than `max_pessimism` steps worse than the best distance seen
    so far. `robust=True` keeps only a bitset per generation and never prunes, so
    any route within `max_generations` is found, at the cost of memory per
    generation and slower path assembly.
    """

    def __init__(
        self,
        max_generations: int = 50_000,
        max_pessimism: Optional[int] = 50,
        robust: bool = False,
        verbose: bool = False,
        report_every: int = 1000,
    ):
        if max_generations < 0:
            raise ValueError("max_generations must be non-negative")
        if max_pessimism is not None and max_pessimism < 0:
            raise ValueError("max_pessimism must be non-negative")
        if report_every < 1:
            raise ValueError("report_every must be positive")
        self.max_generations = max_generations
        self.max_pessimism = max_pessimism
        self.robust = robust
        self.verbose = verbose
        self.report_every = report_every

    @property
    def prunes(self) -> bool:
        return not self.robust and self.max_pessimism is not None

    def _new_history(self, automaton: Automaton) -> History:
        if self.robust:
            return BitGridHistory(automaton.source, automaton.height, automaton.width)
        return ParentHistory(automaton.source)

    def run(self, automaton: Automaton) -> SearchResult:
        """Search from the automaton's source; `automaton` is generation 0."""
        destination = automaton.destination
        history = self._new_history(automaton)
        best = _Best(
            distance=automaton.distance_to_destination(automaton.source),
            generation=0,
            position=automaton.source,
        )
        peak = 1
        current = automaton
        generation = 0

        while True:
            if history.contains(generation, destination):
                return self._finish(history, generation, destination, 0, peak, FOUND)

            if generation >= self.max_generations:
                stop_reason = GENERATION_LIMIT
                break

            following = current.next_generation()
            # Fixed for the whole generation, whatever the frontier order
            threshold = best.distance + self.max_pessimism if self.prunes else None

            history.start_generation()
            for position in history.positions(generation):
                for movement in MOVEMENTS:
                    candidate = position.moved(movement)
                    if not following.is_dead(candidate):
                        continue
                    distance = candidate.manhattan(destination)
                    if threshold is not None and distance > threshold:
                        continue
                    if history.add(candidate, movement) and distance < best.distance:
                        best = _Best(distance, generation + 1, candidate)

            generation += 1
            current = following
            reached = history.size(generation)
            peak = max(peak, reached)

            if self.verbose and generation % self.report_every == 0:
                print(f"Gen {generation:6d}: reached={reached:<8d} "
                      f"best={best.distance} at {best.position} (gen {best.generation})")

            if reached == 0:
                stop_reason = FRONTIER_EXHAUSTED
                break

        return self._finish(history, best.generation, best.position, best.distance, peak, stop_reason)

    def _finish(
        self,
        history: History,
        generation: int,
        position: Position,
        distance: int,
        peak: int,
        stop_reason: str,
    ) -> SearchResult:
        path = assemble_path(history, generation, position)
        result = SearchResult(
            path=path,
            success=stop_reason == FOUND,
            generation=generation,
            position=position,
            distance=distance,
            generations_computed=history.last_generation,
            peak_reached=peak,
            stop_reason=stop_reason,
        )
        if self.verbose:
            mode = "robust" if self.robust else "heuristic"
            print(f"Search ({mode}) stopped: {stop_reason} after {result.generations_computed} "
                  f"generations, path length {len(path)}, distance left {distance}")
        return result


def find_path(
    automaton: Automaton,
    max_generations: int = 50_000,
    max_pessimism: Optional[int] = 50,
    verbose: bool = False,
) -> SearchResult:
    """Heuristic search: parent pointers per cell, pruned by `max_pessimism`."""
    search = PathSearch(max_generations=max_generations, max_pessimism=max_pessimism, verbose=verbose)
    return search.run(automaton)


def find_path_robust(
    automaton: Automaton,
    max_generations: int = 50_000,
    verbose: bool = False,
) -> SearchResult:
    """Exhaustive search: bitset per generation, no pruning."""
    search = PathSearch(max_generations=max_generations, max_pessimism=None, robust=True, verbose=verbose)
    return search.run(automaton)
