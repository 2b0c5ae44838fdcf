from __future__ import annotations

import random
from collections.abc import Hashable

import numpy as np
import pytest

from salvo.app.events import AIShotFired, AITurnScheduled, MatchReset, StatusChanged
from salvo.app.match import MatchController
from salvo.app.scheduler import Scheduler
from salvo.core.models import CellState, Coord, GamePhase, Rejection, Side, StatusKind


class _NoCancelScheduler(Scheduler):
    """Scheduler whose cancel is ignored, as if the task fired anyway."""

    def cancel(self, key: Hashable) -> bool:
        return False


def _ready_controller(scheduler: Scheduler, seed: int = 1337) -> MatchController:
    controller = MatchController(random.Random(seed), scheduler, ai_delay_seconds=1.0)
    assert not controller.randomize_fleet().rejected
    assert controller.start_battle().kind is StatusKind.BATTLE_STARTED
    return controller


def _ai_empty_cell(controller: MatchController) -> Coord:
    rows, cols = np.nonzero(controller.state.ai_board.ship_ids == 0)
    return Coord(int(rows[0]), int(cols[0]))


def _player_shots(controller: MatchController) -> int:
    board = controller.state.player_board
    return board.count(CellState.HIT) + board.count(CellState.MISS)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


def test_ai_reply_waits_for_pacing_delay(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler)
    target = _ai_empty_cell(controller)

    status = controller.fire(target.row, target.col)
    assert status.kind is StatusKind.MISS
    assert controller.state.turn is Side.AI
    assert controller.ai_turn_pending

    scheduler.advance(0.5)
    assert _player_shots(controller) == 0

    scheduler.advance(0.5)
    assert _player_shots(controller) == 1
    assert controller.state.turn is Side.PLAYER
    assert not controller.ai_turn_pending


def test_player_cannot_fire_while_ai_pending(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler)
    target = _ai_empty_cell(controller)
    controller.fire(target.row, target.col)

    status = controller.fire(0, 0)
    assert status.rejection is Rejection.NOT_YOUR_TURN
    assert scheduler.queued_task_count == 1


def test_rejected_shot_keeps_ai_pacing_intact(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler)
    rows, cols = np.nonzero(controller.state.ai_board.ship_ids == 0)
    first, second = Coord(int(rows[0]), int(cols[0])), Coord(int(rows[1]), int(cols[1]))

    controller.fire(first.row, first.col)
    scheduler.advance(0.75)
    assert controller.fire(second.row, second.col).rejection is Rejection.NOT_YOUR_TURN
    assert scheduler.queued_task_count == 1

    scheduler.advance(0.25)
    assert _player_shots(controller) == 1
    assert controller.state.turn is Side.PLAYER

    controller.fire(second.row, second.col)
    scheduler.advance(0.75)
    assert _player_shots(controller) == 1
    assert controller.ai_turn_pending

    controller.reset()
    assert scheduler.queued_task_count == 0
    scheduler.advance(1.0)
    assert _player_shots(controller) == 0


def test_rejected_player_shot_does_not_schedule_ai(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler)
    assert controller.fire(10, 10).rejection is Rejection.OUT_OF_BOUNDS
    assert scheduler.queued_task_count == 0
    assert controller.state.turn is Side.PLAYER


def test_reset_cancels_pending_ai_move(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler)
    target = _ai_empty_cell(controller)
    controller.fire(target.row, target.col)

    controller.reset()
    assert not controller.ai_turn_pending
    scheduler.advance(5.0)

    state = controller.state
    assert state.phase is GamePhase.SETUP
    assert state.turn is Side.PLAYER
    assert state.player_board.count(CellState.EMPTY) == 100
    assert state.ai_board.count(CellState.EMPTY) == 100
    assert all(ship.damage == 0 for ship in state.player_fleet)
    assert all(ship.damage == 0 for ship in state.ai_fleet)


def test_stale_ai_task_never_touches_new_match() -> None:
    scheduler = _NoCancelScheduler()
    controller = _ready_controller(scheduler)
    target = _ai_empty_cell(controller)
    controller.fire(target.row, target.col)
    controller.reset()

    # Start a fresh match so a stale shot would have a board to land on.
    controller.randomize_fleet()
    controller.start_battle()
    scheduler.advance(5.0)

    assert _player_shots(controller) == 0
    assert controller.state.turn is Side.PLAYER


def test_events_are_published_for_turns_and_reset(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler)
    seen: list[object] = []
    controller.events.subscribe(object, seen.append)
    target = _ai_empty_cell(controller)

    controller.fire(target.row, target.col)
    scheduler.advance(1.0)
    controller.reset()

    kinds = [type(event) for event in seen]
    assert kinds == [
        StatusChanged,
        AITurnScheduled,
        StatusChanged,
        AIShotFired,
        MatchReset,
        StatusChanged,
    ]
    ai_shot = seen[3]
    assert isinstance(ai_shot, AIShotFired)
    assert ai_shot.status.side is Side.AI


def test_full_match_reaches_game_over(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler, seed=21)
    rows, cols = np.nonzero(controller.state.ai_board.ship_ids)
    targets = [Coord(int(r), int(c)) for r, c in zip(rows, cols)]

    for target in targets:
        if controller.state.phase is not GamePhase.PLAYING:
            break
        controller.fire(target.row, target.col)
        scheduler.advance(1.0)

    state = controller.state
    assert state.phase is GamePhase.GAME_OVER
    # The AI gets one shot fewer than the 17 needed, so the player always wins.
    assert state.winner is Side.PLAYER
    assert state.status.kind is StatusKind.VICTORY
    assert state.ai_fleet.is_destroyed()
    assert controller.fire(0, 0).rejection is Rejection.WRONG_PHASE
    assert scheduler.queued_task_count == 0


def test_snapshot_masks_ai_fleet(scheduler: Scheduler) -> None:
    controller = _ready_controller(scheduler)
    masked = controller.snapshot()
    revealed = controller.snapshot(reveal_ai_fleet=True)
    assert all(state is not CellState.OCCUPIED for row in masked.ai_board for state in row)
    assert sum(state is CellState.OCCUPIED for row in revealed.ai_board for state in row) == 17
    assert masked.player_can_fire
