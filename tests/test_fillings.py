from stone_maze.fillings import search_fillings, symmetry_variants
from stone_maze.grid import Grid
from stone_maze.parser import parse_automaton


def test_sixteen_symmetry_variants():
    base = Grid.from_rows([[1, 0], [0, 0]])
    variants = symmetry_variants(base)
    assert len(variants) == 16
    code, grid = variants[0]
    assert grid == base
    assert code == 0b1000
    assert variants[1][0] == 0b0111
    for code, grid in variants:
        assert grid.code() == code
        assert grid.population() in (1, 3)


def test_search_each_filling_in_process():
    automaton = parse_automaton("3 x 4", indeterminate=(0, 1, 1, 1))
    fillings = symmetry_variants(Grid.from_rows([[0]]))

    results = search_fillings(automaton, fillings, 0, 1, max_generations=10, workers=1)

    assert [code for code, _, _ in results] == [0, 1]
    for code, filling, result in results:
        assert filling.code() == code
        assert result.success
        assert result.path_string() == "R R"


def test_only_code_filter():
    automaton = parse_automaton("3 x 4", indeterminate=(0, 1, 1, 1))
    fillings = symmetry_variants(Grid.from_rows([[0]]))

    results = search_fillings(automaton, fillings, 0, 1, max_generations=10, only_code=1, workers=1)

    assert len(results) == 1
    assert results[0][0] == 1


def test_search_fillings_across_processes():
    automaton = parse_automaton("3 0 0\n0 x 0\n0 0 4", indeterminate=(1, 1, 1, 1))
    fillings = symmetry_variants(Grid.from_rows([[0]]))

    parallel = search_fillings(automaton, fillings, 1, 1, max_generations=20, workers=2)
    serial = search_fillings(automaton, fillings, 1, 1, max_generations=20, workers=1)

    assert [c for c, _, _ in parallel] == [c for c, _, _ in serial]
    for (_, _, a), (_, _, b) in zip(parallel, serial):
        assert a.path == b.path
        assert a.success == b.success
