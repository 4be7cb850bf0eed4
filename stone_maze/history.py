"""Per-generation reached sets.

Both classes answer the same questions about which positions were reached at
each generation and which movement led into them. `ParentHistory` stores the
movement with every reached position. `BitGridHistory` stores a single bit per
cell and works the movement out again when a path is assembled.
"""

from typing import Dict, Iterator, List, Optional

from .bitgrid import BitGrid
from .errors import ReconstructionError
from .position import MOVEMENTS, Movement, Position


class History:
    """Append-only sequence of reached sets, indexed by generation."""

    def start_generation(self):
        """Append an empty reached set for the next generation."""
        raise NotImplementedError

    def add(self, position: Position, movement: Movement) -> bool:
        """Record `position` in the newest generation; False if already there."""
        raise NotImplementedError

    def positions(self, generation: int) -> Iterator[Position]:
        raise NotImplementedError

    def contains(self, generation: int, position: Position) -> bool:
        raise NotImplementedError

    def size(self, generation: int) -> int:
        raise NotImplementedError

    def movement_into(self, generation: int, position: Position) -> Movement:
        """The movement that reached `position` at `generation` (> 0)."""
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError

    def is_empty(self, generation: int) -> bool:
        return self.size(generation) == 0

    @property
    def last_generation(self) -> int:
        return len(self) - 1


class ParentHistory(History):
    """Reached positions mapped to the movement that first reached them."""

    def __init__(self, source: Position):
        # The placeholder for the source is never followed
        self._layers: List[Dict[Position, Optional[Movement]]] = [{source: None}]

    def start_generation(self):
        self._layers.append({})

    def add(self, position: Position, movement: Movement) -> bool:
        layer = self._layers[-1]
        if position in layer:
            return False
        layer[position] = movement
        return True

    def positions(self, generation: int) -> Iterator[Position]:
        return iter(self._layers[generation])

    def contains(self, generation: int, position: Position) -> bool:
        return position in self._layers[generation]

    def size(self, generation: int) -> int:
        return len(self._layers[generation])

    def movement_into(self, generation: int, position: Position) -> Movement:
        movement = self._layers[generation].get(position) if generation > 0 else None
        if movement is None:
            raise ReconstructionError(generation, position)
        return movement

    def __len__(self) -> int:
        return len(self._layers)


class BitGridHistory(History):
    """Reached positions as one bitset per generation, without parent pointers."""

    def __init__(self, source: Position, height: int, width: int):
        first = BitGrid(height, width)
        first.insert(source)
        self._layers: List[BitGrid] = [first]
        self._sizes: List[int] = [1]

    def start_generation(self):
        self._layers.append(BitGrid.same_shape_as(self._layers[-1]))
        self._sizes.append(0)

    def add(self, position: Position, movement: Movement) -> bool:
        layer = self._layers[-1]
        if layer.contains(position):
            return False
        layer.insert(position)
        self._sizes[-1] += 1
        return True

    def positions(self, generation: int) -> Iterator[Position]:
        return self._layers[generation].iter()

    def contains(self, generation: int, position: Position) -> bool:
        return self._layers[generation].contains(position)

    def size(self, generation: int) -> int:
        return self._sizes[generation]

    def movement_into(self, generation: int, position: Position) -> Movement:
        if generation > 0 and self._layers[generation].contains(position):
            previous = self._layers[generation - 1]
            for movement in MOVEMENTS:
                if previous.contains(position.previous(movement)):
                    return movement
        raise ReconstructionError(generation, position)

    def __len__(self) -> int:
        return len(self._layers)
