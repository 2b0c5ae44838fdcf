"""Fleet placement validation and random layout generation."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from salvo.core.board import Board
from salvo.core.fleet import Fleet
from salvo.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    Coord,
    Orientation,
    Rejection,
    ShipType,
    cells_for_run,
)

DEFAULT_PLACEMENT_ATTEMPTS = 100

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManualPlacement:
    """Outcome of placing the next ship by hand."""

    board: Board
    fleet: Fleet
    next_index: int
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


@dataclass(frozen=True, slots=True)
class GeneratedFleet:
    """Random layout: populated board plus fleet with placement flags."""

    board: Board
    fleet: Fleet

    @property
    def unplaced_ship_ids(self) -> tuple[int, ...]:
        return tuple(ship.id for ship in self.fleet if not ship.placed)

    @property
    def complete(self) -> bool:
        return not self.unplaced_ship_ids


def is_setup_complete(fleet: Fleet, next_index: int) -> bool:
    """Return whether every ship of the fleet has been placed by hand."""
    return next_index >= len(fleet)


def placement_rejection(
    board: Board, bow: Coord, length: int, orientation: Orientation
) -> Rejection | None:
    """Classify why a run cannot be placed, or None when it fits."""
    cells = cells_for_run(bow, length, orientation)
    if not all(board.in_bounds(cell) for cell in cells):
        return Rejection.OUT_OF_BOUNDS
    if not board.can_place(bow, length, orientation):
        return Rejection.OVERLAP
    return None


def place_next_ship(
    board: Board,
    fleet: Fleet,
    next_index: int,
    bow: Coord,
    orientation: Orientation,
) -> ManualPlacement:
    """Validate and place the next ship in configuration order."""
    if is_setup_complete(fleet, next_index):
        return ManualPlacement(board, fleet, next_index, Rejection.FLEET_COMPLETE)

    ship = fleet.ships[next_index]
    rejection = placement_rejection(board, bow, ship.length, orientation)
    if rejection is not None:
        logger.debug(
            "placement_rejected ship=%s bow=%s orientation=%s reason=%s",
            ship.ship_type.value,
            bow,
            orientation.value,
            rejection.value,
        )
        return ManualPlacement(board, fleet, next_index, rejection)

    return ManualPlacement(
        board=board.place(bow, ship.length, orientation, ship.id),
        fleet=fleet.mark_placed(ship.id),
        next_index=next_index + 1,
    )


def generate_random_fleet(
    rng: random.Random,
    config: Sequence[ShipType] = DEFAULT_FLEET,
    size: int = BOARD_SIZE,
    max_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
) -> GeneratedFleet:
    """Generate a best-effort random layout where ships may touch.

    Each ship gets `max_attempts` random tries. A ship whose tries all fail is
    left off the board with `placed=False`; the layout is not guaranteed full.
    """
    board = Board.empty(size)
    fleet = Fleet.from_config(config)

    for ship in fleet.ships:
        for _ in range(max_attempts):
            orientation = rng.choice((Orientation.HORIZONTAL, Orientation.VERTICAL))
            bow = Coord(rng.randrange(size), rng.randrange(size))
            if board.can_place(bow, ship.length, orientation):
                board = board.place(bow, ship.length, orientation, ship.id)
                fleet = fleet.mark_placed(ship.id)
                break
        else:
            logger.warning(
                "random_placement_exhausted ship=%s attempts=%d",
                ship.ship_type.value,
                max_attempts,
            )

    return GeneratedFleet(board=board, fleet=fleet)
