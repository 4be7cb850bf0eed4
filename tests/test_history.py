import pytest

from stone_maze.errors import ReconstructionError
from stone_maze.history import BitGridHistory, ParentHistory
from stone_maze.position import Movement, Position
from stone_maze.search import assemble_path

SOURCE = Position(0, 0)


def histories():
    return [ParentHistory(SOURCE), BitGridHistory(SOURCE, 3, 3)]


@pytest.mark.parametrize("history", histories())
def test_generation_zero_holds_only_source(history):
    assert len(history) == 1
    assert list(history.positions(0)) == [SOURCE]
    assert history.size(0) == 1


@pytest.mark.parametrize("history", histories())
def test_first_arrival_wins(history):
    history.start_generation()
    history.start_generation()
    target = Position(1, 1)
    assert history.add(target, Movement.DOWN)
    assert not history.add(target, Movement.RIGHT)
    assert history.size(2) == 1
    assert history.is_empty(1)
    assert history.last_generation == 2


def test_parent_history_keeps_the_first_movement():
    history = ParentHistory(SOURCE)
    history.start_generation()
    history.add(Position(0, 1), Movement.RIGHT)
    history.add(Position(0, 1), Movement.LEFT)
    assert history.movement_into(1, Position(0, 1)) is Movement.RIGHT


def test_bitgrid_history_rederives_movements():
    history = BitGridHistory(SOURCE, 3, 3)
    history.start_generation()
    history.add(Position(0, 1), Movement.RIGHT)
    history.add(Position(1, 0), Movement.DOWN)
    history.start_generation()
    history.add(Position(1, 1), Movement.DOWN)

    # Up and down are tried first, so (0, 1) is the predecessor
    assert history.movement_into(2, Position(1, 1)) is Movement.DOWN
    assert history.movement_into(1, Position(1, 0)) is Movement.DOWN
    assert assemble_path(history, 2, Position(1, 1)) == [Movement.RIGHT, Movement.DOWN]


def test_bitgrid_history_without_predecessor():
    history = BitGridHistory(SOURCE, 3, 3)
    history.start_generation()
    history.add(Position(2, 2), Movement.DOWN)
    with pytest.raises(ReconstructionError) as excinfo:
        history.movement_into(1, Position(2, 2))
    assert excinfo.value.generation == 1


@pytest.mark.parametrize("history", histories())
def test_unreached_position_cannot_be_reconstructed(history):
    history.start_generation()
    with pytest.raises(ReconstructionError):
        history.movement_into(1, Position(0, 1))
    with pytest.raises(ReconstructionError):
        history.movement_into(0, SOURCE)


def test_assemble_path_is_repeatable():
    history = ParentHistory(SOURCE)
    path = []
    position = SOURCE
    for movement in [Movement.RIGHT, Movement.DOWN, Movement.RIGHT, Movement.UP]:
        history.start_generation()
        position = position.moved(movement)
        history.add(position, movement)
        path.append(movement)

    assert assemble_path(history, 4, position) == path
    assert assemble_path(history, 4, position) == path
    assert assemble_path(history, 0, SOURCE) == []
