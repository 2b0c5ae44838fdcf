"""Match controller: owns match state and paces the AI turn."""

from __future__ import annotations

import logging
import random

from salvo.ai.hunt_target import HuntTargetAI
from salvo.ai.strategy import AIStrategy, ShotKnowledge
from salvo.app.events import AIShotFired, AITurnScheduled, EventBus, MatchReset, StatusChanged
from salvo.app.scheduler import Scheduler
from salvo.app.state_projection import MatchSnapshot, build_snapshot
from salvo.core import rules
from salvo.core.models import GamePhase, Orientation, Side, Status
from salvo.core.placement import DEFAULT_PLACEMENT_ATTEMPTS
from salvo.core.rules import MatchState, TurnResult
from salvo.infra.config import DEFAULT_AI_DELAY_SECONDS

logger = logging.getLogger(__name__)

AI_TURN_TIMER = "ai_turn"


class MatchController:
    """Serializes every match mutation and schedules the paced AI reply."""

    def __init__(
        self,
        rng: random.Random,
        scheduler: Scheduler,
        *,
        strategy: AIStrategy | None = None,
        event_bus: EventBus | None = None,
        ai_delay_seconds: float = DEFAULT_AI_DELAY_SECONDS,
        placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
    ) -> None:
        self._rng = rng
        self._scheduler = scheduler
        self._strategy = strategy if strategy is not None else HuntTargetAI(rng)
        self._events = event_bus if event_bus is not None else EventBus()
        self._ai_delay_seconds = ai_delay_seconds
        self._placement_attempts = placement_attempts
        self._state = rules.new_match()
        self._generation = 0

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def ai_turn_pending(self) -> bool:
        return self._scheduler.is_pending(AI_TURN_TIMER)

    def snapshot(self, *, reveal_ai_fleet: bool = False) -> MatchSnapshot:
        return build_snapshot(self._state, reveal_ai_fleet=reveal_ai_fleet)

    def set_orientation(self, orientation: Orientation) -> Status:
        return self._apply(rules.set_orientation(self._state, orientation))

    def toggle_orientation(self) -> Status:
        return self._apply(rules.toggle_orientation(self._state))

    def place_ship(self, row: int, col: int, orientation: Orientation | None = None) -> Status:
        """Place the next player ship during setup."""
        return self._apply(rules.place_player_ship(self._state, row, col, orientation))

    def randomize_fleet(self) -> Status:
        return self._apply(
            rules.randomize_player_fleet(self._state, self._rng, self._placement_attempts)
        )

    def start_battle(self) -> Status:
        return self._apply(rules.start_battle(self._state, self._rng, self._placement_attempts))

    def fire(self, row: int, col: int) -> Status:
        """Resolve the player's shot and schedule the AI reply when due."""
        status = self._apply(rules.player_fire(self._state, row, col))
        if status.rejected:
            return status
        if self._state.phase is GamePhase.PLAYING and self._state.turn is Side.AI:
            self._schedule_ai_turn()
        return status

    def reset(self) -> Status:
        """Drop the current match, including any AI shot still pending."""
        self._scheduler.cancel(AI_TURN_TIMER)
        self._generation += 1
        self._state = rules.reset(self._state)
        self._events.publish(MatchReset())
        self._publish_status(self._state.status)
        return self._state.status

    def _schedule_ai_turn(self) -> None:
        generation = self._generation
        self._scheduler.call_later(
            AI_TURN_TIMER, self._ai_delay_seconds, lambda: self._run_ai_turn(generation)
        )
        self._events.publish(AITurnScheduled(delay_seconds=self._ai_delay_seconds))

    def _run_ai_turn(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("ai_turn_stale generation=%d current=%d", generation, self._generation)
            return
        if self._state.phase is not GamePhase.PLAYING or self._state.turn is not Side.AI:
            return

        knowledge = ShotKnowledge.observe(self._state.player_board, self._state.player_fleet)
        shot = self._strategy.choose_shot(knowledge)
        if shot is None:
            logger.warning("ai_turn_no_target")
            return
        status = self._apply(rules.ai_fire(self._state, shot.row, shot.col))
        if status.rejected:
            logger.error(
                "ai_shot_rejected coord=%s reason=%s",
                shot,
                status.rejection.value if status.rejection else None,
            )
            return
        self._events.publish(AIShotFired(coord=shot, status=status))

    def _apply(self, result: TurnResult) -> Status:
        self._state = result.state
        self._publish_status(result.status)
        return result.status

    def _publish_status(self, status: Status) -> None:
        self._events.publish(
            StatusChanged(status=status, phase=self._state.phase, turn=self._state.turn)
        )
