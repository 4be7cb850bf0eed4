"""Independent searches over candidate fillings of an indeterminate window.

The searches share nothing: each worker gets its own automaton and returns
its own result, so they fan out over processes.
"""

import multiprocessing
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Iterable, List, Optional, Tuple

from .automaton import Automaton
from .grid import Grid
from .search import PathSearch, SearchResult


def symmetry_variants(grid: Grid) -> List[Tuple[int, Grid]]:
    """The 16 variants of `grid`: 4 rotations x (identity, invert, flip+invert, flip).

    Square grids are expected; every variant is keyed by its `Grid.code()`.
    """
    variants = []
    for rotations in range(4):
        if rotations > 0:
            grid = grid.rotate()
        flipped = grid.flip()
        for variant in (grid, grid.invert(), flipped.invert(), flipped):
            variants.append((variant.code(), variant))
    return variants


def _search_one(
    code: int,
    automaton: Automaton,
    max_generations: int,
    max_pessimism: Optional[int],
    robust: bool,
) -> Tuple[int, SearchResult]:
    search = PathSearch(max_generations=max_generations, max_pessimism=max_pessimism, robust=robust)
    return code, search.run(automaton)


def search_fillings(
    automaton: Automaton,
    fillings: Iterable[Tuple[int, Grid]],
    top: int,
    left: int,
    max_generations: int = 50_000,
    max_pessimism: Optional[int] = 50,
    robust: bool = False,
    only_code: Optional[int] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
) -> List[Tuple[int, Grid, SearchResult]]:
    """Paste each filling at (top, left) and search every resulting automaton.

    Results come back sorted by filling code. `workers=1` runs in-process.
    """
    candidates = {}
    for code, filling in fillings:
        if only_code is not None and code != only_code:
            continue
        candidates[code] = (filling, automaton.with_grid(automaton.grid.overwrite(filling, top, left)))

    if workers is None or workers <= 0:
        workers = multiprocessing.cpu_count()

    results = {}
    if workers == 1 or len(candidates) <= 1:
        for code, (_, filled) in candidates.items():
            results[code] = _search_one(code, filled, max_generations, max_pessimism, robust)[1]
    else:
        with ProcessPoolExecutor(max_workers=workers) as ex:
            futures = [
                ex.submit(_search_one, code, filled, max_generations, max_pessimism, robust)
                for code, (_, filled) in candidates.items()
            ]
            for i, fut in enumerate(as_completed(futures), start=1):
                code, result = fut.result()
                results[code] = result
                if verbose:
                    status = "found" if result.success else f"distance {result.distance}"
                    print(f"[{i}/{len(futures)}] Filling {code}: {status}, {len(result.path)} moves")

    return [(code, candidates[code][0], results[code]) for code in sorted(results)]
