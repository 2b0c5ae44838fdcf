"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

BOARD_SIZE = 10


class CellState(IntEnum):
    """Occupancy and damage state of a single board cell."""

    EMPTY = 0
    OCCUPIED = 1
    HIT = 2
    MISS = 3

    @property
    def resolved(self) -> bool:
        return self in (CellState.HIT, CellState.MISS)


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    def toggled(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class ShipType(StrEnum):
    """Classic fleet ship types, doubling as localization name keys."""

    CARRIER = "CARRIER"
    BATTLESHIP = "BATTLESHIP"
    CRUISER = "CRUISER"
    SUBMARINE = "SUBMARINE"
    DESTROYER = "DESTROYER"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.CARRIER: 5,
    ShipType.BATTLESHIP: 4,
    ShipType.CRUISER: 3,
    ShipType.SUBMARINE: 3,
    ShipType.DESTROYER: 2,
}

DEFAULT_FLEET: tuple[ShipType, ...] = (
    ShipType.CARRIER,
    ShipType.BATTLESHIP,
    ShipType.CRUISER,
    ShipType.SUBMARINE,
    ShipType.DESTROYER,
)


class GamePhase(StrEnum):
    """Match phase owned by the turn controller."""

    SETUP = "SETUP"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"


class Side(StrEnum):
    """Turn owner and winner identity."""

    PLAYER = "PLAYER"
    AI = "AI"

    @property
    def opponent(self) -> Side:
        return Side.AI if self is Side.PLAYER else Side.PLAYER


class ShotOutcome(StrEnum):
    """Board-level result of a single shot."""

    HIT = "HIT"
    MISS = "MISS"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"


class Rejection(StrEnum):
    """Reason an operation was rejected as a no-op."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OVERLAP = "OVERLAP"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    WRONG_PHASE = "WRONG_PHASE"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    FLEET_COMPLETE = "FLEET_COMPLETE"
    NOT_READY = "NOT_READY"
    NO_LAYOUT = "NO_LAYOUT"


class StatusKind(StrEnum):
    """Machine-readable status signal kinds for the presentation layer."""

    PLACE_SHIP = "PLACE_SHIP"
    FLEET_READY = "FLEET_READY"
    ORIENTATION_CHANGED = "ORIENTATION_CHANGED"
    BATTLE_STARTED = "BATTLE_STARTED"
    HIT = "HIT"
    MISS = "MISS"
    SUNK = "SUNK"
    VICTORY = "VICTORY"
    DEFEAT = "DEFEAT"
    REJECTED = "REJECTED"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class Status:
    """Outcome of the last operation, left unformatted for localization."""

    kind: StatusKind
    side: Side | None = None
    coord: Coord | None = None
    ship_type: ShipType | None = None
    rejection: Rejection | None = None
    orientation: Orientation | None = None

    @property
    def rejected(self) -> bool:
        return self.kind is StatusKind.REJECTED


def cells_for_run(bow: Coord, length: int, orientation: Orientation) -> list[Coord]:
    """Compute the cells a ship of `length` starting at `bow` would occupy."""
    result: list[Coord] = []
    for i in range(length):
        if orientation is Orientation.HORIZONTAL:
            result.append(Coord(bow.row, bow.col + i))
        else:
            result.append(Coord(bow.row + i, bow.col))
    return result
