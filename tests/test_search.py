import itertools

import pytest

from stone_maze.automaton import Automaton
from stone_maze.grid import Grid
from stone_maze.parser import parse_automaton
from stone_maze.position import Movement, Position
from stone_maze.search import (
    FOUND,
    FRONTIER_EXHAUSTED,
    GENERATION_LIMIT,
    PathSearch,
    find_path,
    find_path_robust,
)
from stone_maze.verify import verify_path

EXAMPLE = """\
3 0 0 1 0 0
0 1 1 0 1 1
0 0 1 1 0 0
0 0 0 0 0 4"""

# Period 2: odd generations are "0 1 0 / 0 1 0", even ones (from 2) "1 0 1 / 1 0 1"
OSCILLATOR = """\
3 0 0
1 4 1"""

# Same cells; the destination is alive at every even generation after 0 and can
# only be reached after an even number of moves
OSCILLATOR_UNREACHABLE = """\
3 0 4
1 0 1"""

# Every neighbor of the source is alive at generation 1
TRAPPED = """\
1 1 1 0 4
1 3 1 0 0
1 1 1 0 0"""

# The destination turns alive at generation 3, dies at 4 and stays alive from
# generation 5 on
CLOSED_DESTINATION = """\
0 1 1 1 1 0
3 1 0 0 0 1
0 1 0 4 1 0
0 0 0 0 0 0
1 0 0 1 0 1"""


def both(automaton, max_generations=1000):
    return [
        find_path(automaton, max_generations=max_generations, max_pessimism=1000),
        find_path_robust(automaton, max_generations=max_generations),
    ]


def test_shortest_path_in_example():
    automaton = parse_automaton(EXAMPLE)
    for result in both(automaton):
        assert result.success
        assert result.stop_reason == FOUND
        assert len(result.path) == 14
        assert result.generation == 14
        assert result.position == automaton.destination
        assert result.distance == 0
        assert verify_path(automaton, result.path) == 0


def test_default_pessimism_keeps_shortest_path_on_small_grid():
    automaton = parse_automaton(EXAMPLE)
    result = find_path(automaton)
    assert result.success
    assert len(result.path) == 14


def test_path_is_never_shorter_than_manhattan_distance():
    automaton = parse_automaton(EXAMPLE)
    result = find_path_robust(automaton)
    assert len(result.path) >= automaton.source.manhattan(automaton.destination)


def test_straight_corridor():
    automaton = parse_automaton("3 0 4")
    for result in both(automaton):
        assert result.success
        assert result.path_string() == "R R"


def test_source_is_destination():
    automaton = Automaton(Grid.zeros(2, 2), Position(1, 1), Position(1, 1))
    for result in both(automaton):
        assert result.success
        assert result.path == []
        assert result.generations_computed == 0


def test_route_through_oscillator():
    automaton = parse_automaton(OSCILLATOR)
    for result in both(automaton):
        assert result.success
        assert result.path == [Movement.DOWN, Movement.RIGHT]
        assert verify_path(automaton, result.path) == 0


def test_periodically_alive_destination_gives_best_effort():
    automaton = parse_automaton(OSCILLATOR_UNREACHABLE)
    for result in both(automaton, max_generations=20):
        assert not result.success
        assert result.stop_reason == GENERATION_LIMIT
        assert result.generations_computed == 20
        assert result.position == Position(1, 2)
        assert result.generation == 3
        assert result.distance == 1
        assert result.path_string() == "D R R"


def test_destination_alive_from_generation_five_gives_best_effort():
    automaton = parse_automaton(CLOSED_DESTINATION)
    states = [g.is_alive(automaton.destination)
              for g in itertools.islice(automaton.generations(), 31)]
    assert states[:5] == [False, False, False, True, False]
    assert all(states[5:])

    results = both(automaton, max_generations=30)
    for result in results:
        assert not result.success
        assert result.stop_reason == GENERATION_LIMIT
        assert result.generations_computed == 30
        assert result.distance > 0
        assert result.position != automaton.destination
    assert results[0].distance == results[1].distance


def test_trapped_source_exhausts_frontier():
    automaton = parse_automaton(TRAPPED)
    for result in both(automaton):
        assert not result.success
        assert result.stop_reason == FRONTIER_EXHAUSTED
        assert result.generations_computed == 1
        assert result.path == []
        assert result.position == automaton.source
        assert result.distance == 4


def test_generation_limit_returns_closest_position():
    automaton = parse_automaton("3 0 0 0 0 4")
    for result in both(automaton, max_generations=3):
        assert not result.success
        assert result.stop_reason == GENERATION_LIMIT
        assert result.path_string() == "R R R"
        assert result.position == Position(0, 3)
        assert result.distance == 2

    for result in both(automaton, max_generations=5):
        assert result.success
        assert result.path_string() == "R R R R R"


def test_zero_generation_budget():
    automaton = parse_automaton("3 0 4")
    result = find_path(automaton, max_generations=0)
    assert not result.success
    assert result.path == []
    assert result.distance == 2


def test_pruning_bounds_the_reached_set():
    automaton = parse_automaton("3 0 0 0 0 4")

    pruned = find_path(automaton, max_pessimism=0)
    assert pruned.success
    assert pruned.peak_reached == 1

    robust = find_path_robust(automaton)
    assert robust.success
    assert robust.peak_reached == 3
    assert pruned.path == robust.path


def test_robust_ignores_pessimism():
    search = PathSearch(max_pessimism=0, robust=True)
    assert not search.prunes
    assert PathSearch(max_pessimism=None).prunes is False
    assert PathSearch(max_pessimism=3).prunes is True


def test_invalid_budgets():
    with pytest.raises(ValueError):
        PathSearch(max_generations=-1)
    with pytest.raises(ValueError):
        PathSearch(max_pessimism=-1)


def test_search_is_deterministic():
    automaton = parse_automaton(EXAMPLE)
    assert find_path(automaton).path == find_path(automaton).path
    assert find_path_robust(automaton).path == find_path_robust(automaton).path


def test_variants_agree_with_immutable_endpoints():
    automaton = parse_automaton(EXAMPLE, immutable_endpoints=True)
    heuristic, robust = both(automaton, max_generations=200)
    assert heuristic.success == robust.success
    assert len(heuristic.path) == len(robust.path)
    assert heuristic.distance == robust.distance
    if robust.success:
        assert len(robust.path) >= 8
        assert verify_path(automaton, robust.path) == 0


def test_verbose_reports_progress(capsys):
    automaton = parse_automaton("3 0 0 0 0 4")
    PathSearch(verbose=True, report_every=2).run(automaton)
    out = capsys.readouterr().out
    assert "Gen      2" in out
    assert "found" in out


def test_result_to_dict():
    result = find_path(parse_automaton("3 0 4"))
    data = result.to_dict()
    assert data["path"] == "R R"
    assert data["success"] is True
    assert data["position"] == [0, 2]
