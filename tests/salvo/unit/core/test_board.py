import numpy as np
import pytest

from salvo.core.board import Board, can_place, place, resolve_shot
from salvo.core.models import BOARD_SIZE, CellState, Coord, Orientation, ShotOutcome


def test_empty_board_has_only_empty_cells() -> None:
    board = Board.empty()
    assert board.size == BOARD_SIZE
    assert board.count(CellState.EMPTY) == BOARD_SIZE * BOARD_SIZE
    assert board.occupied_count() == 0
    assert board.cell(Coord(3, 3)).ship_id is None


@pytest.mark.parametrize("orientation", list(Orientation))
@pytest.mark.parametrize("length", [1, 2, 3, 4, 5])
def test_can_place_matches_bounds_for_every_start(length: int, orientation: Orientation) -> None:
    board = Board.empty()
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if orientation is Orientation.HORIZONTAL:
                fits = col + length <= BOARD_SIZE
            else:
                fits = row + length <= BOARD_SIZE
            assert can_place(board, row, col, length, orientation) is fits, (row, col)


def test_can_place_rejects_negative_start_and_zero_length() -> None:
    board = Board.empty()
    assert not board.can_place(Coord(-1, 0), 2, Orientation.VERTICAL)
    assert not board.can_place(Coord(0, -1), 2, Orientation.HORIZONTAL)
    assert not board.can_place(Coord(0, 0), 0, Orientation.HORIZONTAL)


@pytest.mark.parametrize("orientation", list(Orientation))
def test_overlap_is_always_rejected(orientation: Orientation) -> None:
    board = place(Board.empty(), 4, 2, 5, Orientation.HORIZONTAL, ship_id=1)
    for col in range(2, 7):
        assert not can_place(board, 4, col, 1, orientation)
        if orientation is Orientation.VERTICAL:
            assert not can_place(board, 3, col, 2, orientation)
        else:
            assert not can_place(board, 4, col - 1, 2, orientation)


def test_ships_may_touch() -> None:
    board = place(Board.empty(), 0, 0, 5, Orientation.HORIZONTAL, ship_id=1)
    assert can_place(board, 1, 0, 5, Orientation.HORIZONTAL)
    assert can_place(board, 0, 5, 2, Orientation.HORIZONTAL)


def test_place_returns_new_board_and_keeps_input() -> None:
    empty = Board.empty()
    placed = place(empty, 1, 1, 3, Orientation.VERTICAL, ship_id=3)
    assert empty.occupied_count() == 0
    assert placed.occupied_count() == 3
    for row in (1, 2, 3):
        assert placed.cell(Coord(row, 1)).state is CellState.OCCUPIED
        assert placed.cell(Coord(row, 1)).ship_id == 3
    with pytest.raises(ValueError):
        placed.states[0, 0] = CellState.MISS.value


def test_place_on_invalid_run_raises() -> None:
    board = place(Board.empty(), 0, 0, 2, Orientation.HORIZONTAL, ship_id=1)
    with pytest.raises(ValueError):
        board.place(Coord(0, 1), 2, Orientation.VERTICAL, 2)
    with pytest.raises(ValueError):
        board.place(Coord(0, 9), 2, Orientation.HORIZONTAL, 2)


def test_resolve_shot_hit_miss_and_repeat() -> None:
    board = place(Board.empty(), 1, 1, 2, Orientation.HORIZONTAL, ship_id=5)

    miss = resolve_shot(board, 0, 0)
    assert miss.outcome is ShotOutcome.MISS
    assert miss.board.cell(Coord(0, 0)).state is CellState.MISS
    assert miss.board.cell(Coord(0, 0)).ship_id is None

    hit = resolve_shot(miss.board, 1, 2)
    assert hit.outcome is ShotOutcome.HIT
    assert hit.ship_id == 5
    assert hit.board.cell(Coord(1, 2)).state is CellState.HIT
    assert hit.board.cell(Coord(1, 2)).ship_id == 5

    for coord in (Coord(0, 0), Coord(1, 2)):
        repeat = hit.board.resolve_shot(coord)
        assert repeat.outcome is ShotOutcome.ALREADY_RESOLVED
        assert repeat.board is hit.board


def test_resolve_shot_out_of_bounds_leaves_board() -> None:
    board = Board.empty()
    result = board.resolve_shot(Coord(10, 0))
    assert result.outcome is ShotOutcome.OUT_OF_BOUNDS
    assert result.board is board


def test_unresolved_and_hit_cells_are_row_major() -> None:
    board = place(Board.empty(), 2, 2, 2, Orientation.HORIZONTAL, ship_id=4)
    board = board.resolve_shot(Coord(2, 3)).board
    board = board.resolve_shot(Coord(0, 0)).board
    board = board.resolve_shot(Coord(2, 2)).board

    assert board.hit_cells() == [(Coord(2, 2), 4), (Coord(2, 3), 4)]
    unresolved = board.unresolved_cells()
    assert len(unresolved) == BOARD_SIZE * BOARD_SIZE - 3
    assert unresolved[0] == Coord(0, 1)
    assert Coord(2, 2) not in unresolved


@pytest.mark.parametrize("size", [4, 8, 12])
def test_empty_board_honors_size(size: int) -> None:
    board = Board.empty(size)
    assert board.states.shape == (size, size)
    assert board.count(CellState.EMPTY) == size * size
    assert board.can_place(Coord(0, size - 2), 2, Orientation.HORIZONTAL)
    assert not board.can_place(Coord(0, size - 1), 2, Orientation.HORIZONTAL)


def test_board_rejects_mismatched_grid_shape() -> None:
    with pytest.raises(ValueError):
        Board(size=8, states=np.zeros((10, 10), dtype=np.int8), ship_ids=np.zeros((8, 8), dtype=np.int16))
