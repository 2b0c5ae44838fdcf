"""Match orchestration for the presentation layer."""

from salvo.app.events import (
    AIShotFired,
    AITurnScheduled,
    EventBus,
    MatchEvent,
    MatchReset,
    StatusChanged,
)
from salvo.app.match import MatchController
from salvo.app.scheduler import Scheduler
from salvo.app.state_projection import MatchSnapshot, build_snapshot

__all__ = [
    "AIShotFired",
    "AITurnScheduled",
    "EventBus",
    "MatchController",
    "MatchEvent",
    "MatchReset",
    "MatchSnapshot",
    "Scheduler",
    "StatusChanged",
    "build_snapshot",
]
