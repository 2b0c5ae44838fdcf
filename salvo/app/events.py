"""Match events and the bus that delivers them to the presentation layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from salvo.core.models import Coord, GamePhase, Side, Status

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


class MatchEvent:
    """Base of every event a `MatchController` publishes."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class StatusChanged(MatchEvent):
    """An operation finished and produced a status signal."""

    status: Status
    phase: GamePhase
    turn: Side


@dataclass(frozen=True, slots=True)
class AITurnScheduled(MatchEvent):
    """The AI will fire after the pacing delay."""

    delay_seconds: float


@dataclass(frozen=True, slots=True)
class AIShotFired(MatchEvent):
    """The AI resolved a shot at the player board."""

    coord: Coord
    status: Status


@dataclass(frozen=True, slots=True)
class MatchReset(MatchEvent):
    """The match was recreated in setup phase."""


@dataclass(frozen=True, slots=True)
class Subscription:
    event_type: type
    id: int


class EventBus:
    """Type-indexed pub/sub.

    A handler subscribed to a base class also receives its subclasses, so
    subscribing to `MatchEvent` observes the whole match. Delivery walks the
    event's MRO, most specific type first, then subscription order.
    """

    def __init__(self) -> None:
        self._next_id = 1
        self._handlers: dict[type, dict[int, EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        subscription = Subscription(event_type, self._next_id)
        self._next_id += 1
        self._handlers.setdefault(event_type, {})[subscription.id] = handler
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        handlers = self._handlers.get(subscription.event_type)
        if handlers is None:
            return
        handlers.pop(subscription.id, None)
        if not handlers:
            del self._handlers[subscription.event_type]

    def publish(self, event: object) -> int:
        """Deliver `event` and return the number of handlers invoked."""
        targets = [
            handler
            for event_type in type(event).__mro__
            for handler in self._handlers.get(event_type, {}).values()
        ]
        for handler in targets:
            handler(event)
        return len(targets)
