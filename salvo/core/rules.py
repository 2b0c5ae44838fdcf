"""Match state machine: setup, shot resolution, turn order, and win detection."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, replace

from salvo.core.board import Board
from salvo.core.fleet import Fleet
from salvo.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
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
from salvo.core.placement import (
    DEFAULT_PLACEMENT_ATTEMPTS,
    generate_random_fleet,
    is_setup_complete,
    place_next_ship,
)

logger = logging.getLogger(__name__)

# Player layouts must be full, so whole-fleet generation is retried.
_RANDOMIZE_ROUNDS = 400


@dataclass(frozen=True, slots=True)
class MatchState:
    """Complete, immutable state of one match."""

    player_board: Board
    ai_board: Board
    player_fleet: Fleet
    ai_fleet: Fleet
    phase: GamePhase = GamePhase.SETUP
    turn: Side = Side.PLAYER
    winner: Side | None = None
    next_ship_index: int = 0
    orientation: Orientation = Orientation.HORIZONTAL
    status: Status = Status(kind=StatusKind.PLACE_SHIP)

    @property
    def next_ship_type(self) -> ShipType | None:
        """Ship type the player places next, if setup is not complete."""
        if is_setup_complete(self.player_fleet, self.next_ship_index):
            return None
        return self.player_fleet.ships[self.next_ship_index].ship_type

    @property
    def placement_complete(self) -> bool:
        return is_setup_complete(self.player_fleet, self.next_ship_index)

    def board_of(self, side: Side) -> Board:
        return self.player_board if side is Side.PLAYER else self.ai_board

    def fleet_of(self, side: Side) -> Fleet:
        return self.player_fleet if side is Side.PLAYER else self.ai_fleet


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Next state plus the status signal of the operation."""

    state: MatchState
    status: Status

    @property
    def accepted(self) -> bool:
        return not self.status.rejected


def new_match(size: int = BOARD_SIZE, config: Sequence[ShipType] = DEFAULT_FLEET) -> MatchState:
    """Create a fresh match in setup phase."""
    fleet = Fleet.from_config(config)
    return MatchState(
        player_board=Board.empty(size),
        ai_board=Board.empty(size),
        player_fleet=fleet,
        ai_fleet=fleet,
        status=Status(kind=StatusKind.PLACE_SHIP, ship_type=config[0] if config else None),
    )


def reset(state: MatchState) -> MatchState:
    """Recreate setup state with empty boards and zeroed fleets."""
    config = tuple(ship.ship_type for ship in state.player_fleet)
    logger.info("match_reset phase=%s", state.phase.value)
    return new_match(state.player_board.size, config)


def set_orientation(state: MatchState, orientation: Orientation) -> TurnResult:
    """Select the orientation used for subsequent manual placements."""
    if state.phase is not GamePhase.SETUP:
        return _reject(state, Rejection.WRONG_PHASE)
    status = Status(kind=StatusKind.ORIENTATION_CHANGED, orientation=orientation)
    return _accept(replace(state, orientation=orientation), status)


def toggle_orientation(state: MatchState) -> TurnResult:
    return set_orientation(state, state.orientation.toggled())


def place_player_ship(
    state: MatchState, row: int, col: int, orientation: Orientation | None = None
) -> TurnResult:
    """Place the next player ship at `(row, col)`."""
    if state.phase is not GamePhase.SETUP:
        return _reject(state, Rejection.WRONG_PHASE)

    placement = place_next_ship(
        state.player_board,
        state.player_fleet,
        state.next_ship_index,
        Coord(row, col),
        orientation or state.orientation,
    )
    if placement.rejection is not None:
        return _reject(state, placement.rejection, coord=Coord(row, col))

    next_state = replace(
        state,
        player_board=placement.board,
        player_fleet=placement.fleet,
        next_ship_index=placement.next_index,
    )
    return _accept(next_state, _setup_status(next_state))


def randomize_player_fleet(
    state: MatchState, rng: random.Random, max_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS
) -> TurnResult:
    """Replace the player's layout with a random one."""
    if state.phase is not GamePhase.SETUP:
        return _reject(state, Rejection.WRONG_PHASE)

    config = tuple(ship.ship_type for ship in state.player_fleet)
    for _ in range(_RANDOMIZE_ROUNDS):
        generated = generate_random_fleet(rng, config, state.player_board.size, max_attempts)
        if generated.complete:
            break
    else:
        return _reject(state, Rejection.NO_LAYOUT)

    next_state = replace(
        state,
        player_board=generated.board,
        player_fleet=generated.fleet,
        next_ship_index=len(generated.fleet),
    )
    return _accept(next_state, _setup_status(next_state))


def start_battle(
    state: MatchState, rng: random.Random, max_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS
) -> TurnResult:
    """Populate the AI board and enter the playing phase."""
    if state.phase is not GamePhase.SETUP:
        return _reject(state, Rejection.WRONG_PHASE)
    if not state.placement_complete:
        return _reject(state, Rejection.NOT_READY)

    config = tuple(ship.ship_type for ship in state.ai_fleet)
    generated = generate_random_fleet(rng, config, state.ai_board.size, max_attempts)
    next_state = replace(
        state,
        ai_board=generated.board,
        ai_fleet=generated.fleet,
        phase=GamePhase.PLAYING,
        turn=Side.PLAYER,
        winner=None,
    )
    logger.info("battle_started unplaced_ai_ships=%s", list(generated.unplaced_ship_ids))
    return _accept(next_state, Status(kind=StatusKind.BATTLE_STARTED, side=Side.PLAYER))


def fire(state: MatchState, side: Side, row: int, col: int) -> TurnResult:
    """Resolve a shot by `side` against the opponent's board."""
    coord = Coord(row, col)
    if state.phase is not GamePhase.PLAYING:
        return _reject(state, Rejection.WRONG_PHASE, side=side, coord=coord)
    if state.turn is not side:
        return _reject(state, Rejection.NOT_YOUR_TURN, side=side, coord=coord)

    target = side.opponent
    resolution = state.board_of(target).resolve_shot(coord)
    if resolution.outcome is ShotOutcome.OUT_OF_BOUNDS:
        return _reject(state, Rejection.OUT_OF_BOUNDS, side=side, coord=coord)
    if resolution.outcome is ShotOutcome.ALREADY_RESOLVED:
        return _reject(state, Rejection.ALREADY_RESOLVED, side=side, coord=coord)

    fleet = state.fleet_of(target)
    if resolution.outcome is ShotOutcome.HIT and resolution.ship_id is not None:
        fleet = fleet.record_hit(resolution.ship_id)
        ship = fleet.ship(resolution.ship_id)
        if ship.sunk:
            status = Status(StatusKind.SUNK, side=side, coord=coord, ship_type=ship.ship_type)
            logger.info("ship_sunk shooter=%s ship=%s", side.value, ship.ship_type.value)
        else:
            status = Status(StatusKind.HIT, side=side, coord=coord)
    else:
        status = Status(StatusKind.MISS, side=side, coord=coord)

    if target is Side.AI:
        next_state = replace(state, ai_board=resolution.board, ai_fleet=fleet)
    else:
        next_state = replace(state, player_board=resolution.board, player_fleet=fleet)

    if fleet.is_destroyed():
        kind = StatusKind.VICTORY if side is Side.PLAYER else StatusKind.DEFEAT
        # Carry the last sunk ship so the collaborator can still announce it.
        status = Status(kind, side=side, coord=coord, ship_type=status.ship_type)
        next_state = replace(next_state, phase=GamePhase.GAME_OVER, winner=side)
        logger.info("game_over winner=%s", side.value)
        return _accept(next_state, status)

    return _accept(replace(next_state, turn=target), status)


def player_fire(state: MatchState, row: int, col: int) -> TurnResult:
    """Resolve the human shot at the AI board."""
    return fire(state, Side.PLAYER, row, col)


def ai_fire(state: MatchState, row: int, col: int) -> TurnResult:
    """Resolve the AI shot at the human board."""
    return fire(state, Side.AI, row, col)


def _setup_status(state: MatchState) -> Status:
    if state.placement_complete:
        return Status(kind=StatusKind.FLEET_READY)
    return Status(kind=StatusKind.PLACE_SHIP, ship_type=state.next_ship_type)


def _accept(state: MatchState, status: Status) -> TurnResult:
    next_state = replace(state, status=status)
    return TurnResult(state=next_state, status=status)


def _reject(
    state: MatchState,
    rejection: Rejection,
    *,
    side: Side | None = None,
    coord: Coord | None = None,
) -> TurnResult:
    logger.debug(
        "operation_rejected phase=%s reason=%s side=%s coord=%s",
        state.phase.value,
        rejection.value,
        side.value if side else None,
        coord,
    )
    status = Status(kind=StatusKind.REJECTED, side=side, coord=coord, rejection=rejection)
    return TurnResult(state=replace(state, status=status), status=status)
