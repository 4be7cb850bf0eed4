"""Stone Maze - find a route for an agent crossing a cellular automaton that evolves with every step."""

from .automaton import Automaton, Rule, STONE
from .bitgrid import BitGrid
from .errors import ParseError, ReconstructionError, VerificationError
from .grid import Grid
from .parser import format_automaton, parse_automaton
from .position import Movement, Position, format_path
from .search import PathSearch, SearchResult, find_path, find_path_robust
from .verify import verify_path

__all__ = [
    "Automaton", "Rule", "STONE", "BitGrid", "Grid", "Movement", "Position",
    "ParseError", "ReconstructionError", "VerificationError",
    "parse_automaton", "format_automaton", "format_path",
    "PathSearch", "SearchResult", "find_path", "find_path_robust", "verify_path",
]
