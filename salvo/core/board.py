"""Board state representation and copy-on-write mutation helpers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from salvo.core.models import (
    BOARD_SIZE,
    CellState,
    Coord,
    Orientation,
    ShotOutcome,
    cells_for_run,
)

NO_SHIP = 0


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True, slots=True)
class Cell:
    """Single cell view: state plus owning ship id when occupied or hit."""

    state: CellState
    ship_id: int | None = None


@dataclass(frozen=True, slots=True, eq=False)
class Board:
    """Numpy-backed immutable board; every mutation returns a new board.

    Build empty boards with `Board.empty(size)`.
    """

    size: int
    states: np.ndarray
    ship_ids: np.ndarray

    def __post_init__(self) -> None:
        if self.states.shape != (self.size, self.size):
            raise ValueError(f"states shape {self.states.shape} does not match size {self.size}")
        if self.ship_ids.shape != (self.size, self.size):
            raise ValueError(f"ship_ids shape {self.ship_ids.shape} does not match size {self.size}")

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> Board:
        """Create a board with every cell empty."""
        return cls(
            size=size,
            states=_frozen(np.zeros((size, size), dtype=np.int8)),
            ship_ids=_frozen(np.zeros((size, size), dtype=np.int16)),
        )

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def state_at(self, coord: Coord) -> CellState:
        return CellState(int(self.states[coord.row, coord.col]))

    def cell(self, coord: Coord) -> Cell:
        """Return the cell at `coord`."""
        state = self.state_at(coord)
        ship_id = int(self.ship_ids[coord.row, coord.col])
        return Cell(state=state, ship_id=ship_id if ship_id != NO_SHIP else None)

    def is_resolved(self, coord: Coord) -> bool:
        """Return whether this cell was previously fired upon."""
        return self.state_at(coord).resolved

    def can_place(self, bow: Coord, length: int, orientation: Orientation) -> bool:
        """Return whether the run stays in bounds and avoids occupied cells.

        Ships may touch; only the run's own cells are checked.
        """
        if length <= 0:
            return False
        for cell in cells_for_run(bow, length, orientation):
            if not self.in_bounds(cell):
                return False
            if self.states[cell.row, cell.col] == CellState.OCCUPIED:
                return False
        return True

    def place(self, bow: Coord, length: int, orientation: Orientation, ship_id: int) -> Board:
        """Return a board with the run occupied by `ship_id`."""
        if ship_id == NO_SHIP:
            raise ValueError("ship_id 0 is reserved for empty cells.")
        if not self.can_place(bow, length, orientation):
            raise ValueError(f"Invalid placement for ship {ship_id} at {bow}.")
        states = self.states.copy()
        ship_ids = self.ship_ids.copy()
        for cell in cells_for_run(bow, length, orientation):
            states[cell.row, cell.col] = CellState.OCCUPIED.value
            ship_ids[cell.row, cell.col] = ship_id
        return Board(size=self.size, states=_frozen(states), ship_ids=_frozen(ship_ids))

    def resolve_shot(self, coord: Coord) -> ShotResolution:
        """Apply a shot and return the next board with its outcome.

        Repeated shots are idempotent: the same board comes back unchanged.
        """
        if not self.in_bounds(coord):
            return ShotResolution(board=self, outcome=ShotOutcome.OUT_OF_BOUNDS)
        state = self.state_at(coord)
        if state.resolved:
            return ShotResolution(board=self, outcome=ShotOutcome.ALREADY_RESOLVED)

        states = self.states.copy()
        if state is CellState.OCCUPIED:
            states[coord.row, coord.col] = CellState.HIT.value
            ship_id = int(self.ship_ids[coord.row, coord.col])
            board = Board(size=self.size, states=_frozen(states), ship_ids=self.ship_ids)
            return ShotResolution(board=board, outcome=ShotOutcome.HIT, ship_id=ship_id)

        states[coord.row, coord.col] = CellState.MISS.value
        board = Board(size=self.size, states=_frozen(states), ship_ids=self.ship_ids)
        return ShotResolution(board=board, outcome=ShotOutcome.MISS)

    def unresolved_cells(self) -> list[Coord]:
        """Return every cell not yet hit or missed, in row-major order."""
        resolved = (self.states == CellState.HIT.value) | (self.states == CellState.MISS.value)
        rows, cols = np.nonzero(~resolved)
        return [Coord(int(r), int(c)) for r, c in zip(rows, cols)]

    def hit_cells(self) -> list[tuple[Coord, int]]:
        """Return `(coord, ship_id)` for every hit cell, in row-major order."""
        rows, cols = np.nonzero(self.states == CellState.HIT.value)
        return [(Coord(int(r), int(c)), int(self.ship_ids[r, c])) for r, c in zip(rows, cols)]

    def occupied_count(self) -> int:
        """Count cells holding a ship, damaged or not."""
        return int(np.count_nonzero(self.ship_ids != NO_SHIP))

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.states == state.value))

    def rows(self) -> tuple[tuple[CellState, ...], ...]:
        """Snapshot cell states as nested tuples."""
        return tuple(tuple(CellState(int(value)) for value in row) for row in self.states)


@dataclass(frozen=True, slots=True)
class ShotResolution:
    """Board after a shot plus its outcome."""

    board: Board
    outcome: ShotOutcome
    ship_id: int | None = None


def can_place(board: Board, row: int, col: int, length: int, orientation: Orientation) -> bool:
    """Return whether a `length` run at `(row, col)` fits on `board`."""
    return board.can_place(Coord(row, col), length, orientation)


def place(
    board: Board, row: int, col: int, length: int, orientation: Orientation, ship_id: int
) -> Board:
    """Place a ship run; caller must have checked `can_place`."""
    return board.place(Coord(row, col), length, orientation, ship_id)


def resolve_shot(board: Board, row: int, col: int) -> ShotResolution:
    """Resolve a shot at `(row, col)` against `board`."""
    return board.resolve_shot(Coord(row, col))
