#!/usr/bin/env python3
"""CLI for the maze automaton route finder."""

import argparse
import sys
from pathlib import Path

from .automaton import STONE, Rule
from .errors import ParseError
from .fillings import search_fillings, symmetry_variants
from .grid import Grid
from .parser import format_automaton, load_automaton
from .position import parse_path
from .search import PathSearch
from .storage import SolutionDatabase
from .verify import verify_path
from .visualize import save_route_animation


def _load(args, **kwargs):
    try:
        return load_automaton(args.input, immutable_endpoints=args.immutable_endpoints, rule=args.rule, **kwargs)
    except (OSError, ParseError) as e:
        print(f"Error loading '{args.input}': {e}")
        sys.exit(1)


def cmd_solve(args):
    """Search for a route and print it."""
    automaton = _load(args)
    variant = "robust" if args.robust else "heuristic"

    if args.verbose:
        print(f"Searching {args.input} ({automaton.height}x{automaton.width}, {variant})")
        print(f"  Max generations: {args.max_generations}")
        if not args.robust:
            print(f"  Max pessimism: {args.max_pessimism}")
        print()

    search = PathSearch(
        max_generations=args.max_generations,
        max_pessimism=args.max_pessimism,
        robust=args.robust,
        verbose=args.verbose,
    )
    result = search.run(automaton)

    if not result.success:
        print(f"No route within budget ({result.stop_reason}); closest approach "
              f"{result.position} at distance {result.distance}", file=sys.stderr)

    if args.check and result.success:
        lives = verify_path(automaton, result.path, max_lives=args.max_lives)
        print(f"Route verified: {len(result.path)} moves, {lives} lives lost", file=sys.stderr)

    output = result.path_string()
    if args.output:
        Path(args.output).write_text(output + "\n")
    else:
        print(output)

    if args.database:
        db = SolutionDatabase(args.database)
        db.add(args.name or Path(args.input).stem, result, variant)

    if args.animate:
        save_route_animation(automaton, result.path, args.animate, cell_size=args.cell_size)
        print(f"Saved animation to: {args.animate}", file=sys.stderr)

    if not result.success:
        sys.exit(2)


def cmd_step(args):
    """Print successive generations of an automaton."""
    automaton = _load(args)
    for generation, current in enumerate(automaton.generations()):
        if generation > args.count:
            break
        if generation > 0:
            print()
        print(f"# generation {generation}")
        print(format_automaton(current))


def cmd_verify(args):
    """Replay a route from a file against the automaton."""
    automaton = _load(args)
    try:
        path = parse_path(Path(args.path).read_text())
    except (OSError, ValueError) as e:
        print(f"Error loading route '{args.path}': {e}")
        sys.exit(1)

    lives = verify_path(automaton, path, max_lives=args.max_lives)
    print(f"Route OK: {len(path)} moves, {lives} lives lost")


def cmd_fillings(args):
    """Try every symmetry variant of a filling inside the indeterminate window."""
    try:
        base = Grid.from_string(Path(args.filling).read_text())
    except (OSError, ValueError) as e:
        print(f"Error loading filling '{args.filling}': {e}")
        sys.exit(1)

    top, left = args.top, args.left
    automaton = _load(args, indeterminate=(top, left, base.height, base.width))

    results = search_fillings(
        automaton,
        symmetry_variants(base),
        top,
        left,
        max_generations=args.max_generations,
        max_pessimism=args.max_pessimism,
        only_code=args.code,
        workers=args.workers,
        verbose=args.verbose,
    )

    print(f"{'Code':<36}{'Found':<8}{'Moves':<8}{'Distance':<10}")
    print("-" * 62)
    for code, _, result in results:
        print(f"{code:<36}{str(result.success):<8}{len(result.path):<8}{result.distance:<10}")


def cmd_solutions(args):
    """Show recorded routes."""
    db = SolutionDatabase(args.database)

    if len(db) == 0:
        print("No routes recorded yet. Run solve with --database first!")
        return

    if args.export:
        db.export_csv(args.export)
        print(f"Exported {len(db)} routes to {args.export}")
        return

    print(f"{'Name':<24}{'Found':<8}{'Moves':<8}{'Distance':<10}{'Variant':<10}")
    print("-" * 60)
    for r in db.best(args.top):
        print(f"{r.name:<24}{str(r.success):<8}{len(r.movements):<8}{r.distance:<10}{r.variant:<10}")


def _add_automaton_options(parser):
    parser.add_argument("--immutable-endpoints", action="store_true",
                        help="Source and destination cells stay dead in every generation")
    parser.add_argument("--rule", type=Rule.from_string, default=STONE,
                        help="Birth/survival rule (default: B234/S45)")


def _add_search_options(parser):
    parser.add_argument("--max-generations", type=int, default=50_000, help="Stop after this many generations")
    parser.add_argument("--max-pessimism", type=int, default=50,
                        help="Ignore cells this many moves worse than the best distance so far")
    parser.add_argument("-v", "--verbose", action="store_true", help="Report search progress")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Maze automaton route finder - cross a cellular automaton one generation per move"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    solve_parser = subparsers.add_parser("solve", help="Find a route")
    solve_parser.add_argument("input", type=str, help="Automaton file")
    _add_automaton_options(solve_parser)
    _add_search_options(solve_parser)
    solve_parser.add_argument("--robust", action="store_true", help="Exhaustive search without pruning")
    solve_parser.add_argument("--check", action="store_true", help="Replay and verify the route")
    solve_parser.add_argument("--max-lives", type=int, default=0, help="Live cells the route may touch")
    solve_parser.add_argument("-o", "--output", type=str, default=None, help="Write the route to this file")
    solve_parser.add_argument("--database", type=str, default=None, help="Record the route in this database")
    solve_parser.add_argument("--name", type=str, default=None, help="Name for the database record")
    solve_parser.add_argument("--animate", type=str, default=None, help="Save a GIF of the route")
    solve_parser.add_argument("--cell-size", type=int, default=4, help="Cell size in pixels")
    solve_parser.set_defaults(func=cmd_solve)

    step_parser = subparsers.add_parser("step", help="Print successive generations")
    step_parser.add_argument("input", type=str, help="Automaton file")
    step_parser.add_argument("-n", "--count", type=int, default=1, help="Generations to advance")
    _add_automaton_options(step_parser)
    step_parser.set_defaults(func=cmd_step)

    verify_parser = subparsers.add_parser("verify", help="Verify a route")
    verify_parser.add_argument("input", type=str, help="Automaton file")
    verify_parser.add_argument("path", type=str, help="Route file (U/D/L/R separated by spaces)")
    verify_parser.add_argument("--max-lives", type=int, default=0, help="Live cells the route may touch")
    _add_automaton_options(verify_parser)
    verify_parser.set_defaults(func=cmd_verify)

    fill_parser = subparsers.add_parser("fillings", help="Search every symmetry variant of a window filling")
    fill_parser.add_argument("input", type=str, help="Automaton file, with x cells in the window")
    fill_parser.add_argument("filling", type=str, help="Square 0/1 grid to rotate, flip and invert")
    fill_parser.add_argument("--top", type=int, required=True, help="Window top row")
    fill_parser.add_argument("--left", type=int, required=True, help="Window left column")
    fill_parser.add_argument("--code", type=int, default=None, help="Only try the variant with this code")
    fill_parser.add_argument("-j", "--workers", type=int, default=None, help="Worker processes")
    _add_automaton_options(fill_parser)
    _add_search_options(fill_parser)
    fill_parser.set_defaults(func=cmd_fillings)

    solutions_parser = subparsers.add_parser("solutions", help="Show recorded routes")
    solutions_parser.add_argument("-n", "--top", type=int, default=20, help="Number of routes to show")
    solutions_parser.add_argument("--database", type=str, default="solutions.json", help="Database file")
    solutions_parser.add_argument("--export", type=str, default=None, help="Export to this CSV file")
    solutions_parser.set_defaults(func=cmd_solutions)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
