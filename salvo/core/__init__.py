"""Board, fleet, placement, and turn rules."""

from salvo.core.board import Board, Cell, ShotResolution
from salvo.core.fleet import Fleet, Ship, ShipSummary, is_fleet_destroyed, record_hit
from salvo.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    CellState,
    Coord,
    GamePhase,
    Orientation,
    Rejection,
    ShipType,
    ShotOutcome,
    Side,
    Status,
    StatusKind,
)
from salvo.core.placement import GeneratedFleet, generate_random_fleet, place_next_ship
from salvo.core.rules import MatchState, TurnResult, new_match

__all__ = [
    "BOARD_SIZE",
    "DEFAULT_FLEET",
    "Board",
    "Cell",
    "CellState",
    "Coord",
    "Fleet",
    "GamePhase",
    "GeneratedFleet",
    "MatchState",
    "Orientation",
    "Rejection",
    "Ship",
    "ShipSummary",
    "ShipType",
    "ShotOutcome",
    "ShotResolution",
    "Side",
    "Status",
    "StatusKind",
    "TurnResult",
    "generate_random_fleet",
    "is_fleet_destroyed",
    "new_match",
    "place_next_ship",
    "record_hit",
]
