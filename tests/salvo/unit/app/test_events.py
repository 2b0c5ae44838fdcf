from __future__ import annotations

from salvo.app.events import AITurnScheduled, EventBus, MatchEvent, MatchReset, StatusChanged
from salvo.core.models import GamePhase, Side, Status, StatusKind


def test_event_bus_publish_invokes_matching_subscribers() -> None:
    bus = EventBus()
    statuses: list[StatusKind] = []
    resets: list[MatchReset] = []
    bus.subscribe(StatusChanged, lambda event: statuses.append(event.status.kind))
    bus.subscribe(MatchReset, resets.append)

    invoked = bus.publish(
        StatusChanged(status=Status(StatusKind.MISS), phase=GamePhase.PLAYING, turn=Side.AI)
    )

    assert invoked == 1
    assert statuses == [StatusKind.MISS]
    assert resets == []


def test_event_bus_unsubscribe_stops_delivery() -> None:
    bus = EventBus()
    seen: list[object] = []
    subscription = bus.subscribe(object, seen.append)
    bus.publish(MatchReset())
    bus.unsubscribe(subscription)
    assert bus.publish(MatchReset()) == 0
    assert len(seen) == 1


def test_base_subscribers_receive_after_specific_ones() -> None:
    bus = EventBus()
    order: list[str] = []
    bus.subscribe(MatchEvent, lambda event: order.append("match"))
    bus.subscribe(AITurnScheduled, lambda event: order.append("scheduled"))
    bus.subscribe(object, lambda event: order.append("any"))

    assert bus.publish(AITurnScheduled(delay_seconds=1.0)) == 3
    assert order == ["scheduled", "match", "any"]

    assert bus.publish("not a match event") == 1
    assert order[-1] == "any"


def test_unsubscribe_is_idempotent() -> None:
    bus = EventBus()
    subscription = bus.subscribe(MatchReset, lambda event: None)
    bus.unsubscribe(subscription)
    bus.unsubscribe(subscription)
    assert bus.publish(MatchReset()) == 0
