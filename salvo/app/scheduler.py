"""Keyed one-shot timers driven by the host clock."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from heapq import heappop, heappush

TaskCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class _Timer:
    serial: int
    due_seconds: float
    callback: TaskCallback


class Scheduler:
    """Holds at most one pending timer per key.

    Scheduling under a key that is already pending replaces the earlier timer,
    so a key can never fire twice for one request. Nothing runs until the host
    calls `advance` or `run_due`.
    """

    def __init__(self) -> None:
        self._now_seconds = 0.0
        self._serial = 0
        self._timers: dict[Hashable, _Timer] = {}
        self._queue: list[tuple[float, int, Hashable]] = []

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def queued_task_count(self) -> int:
        return len(self._timers)

    def is_pending(self, key: Hashable) -> bool:
        return key in self._timers

    def call_later(self, key: Hashable, delay_seconds: float, callback: TaskCallback) -> None:
        """Arm the timer for `key`, replacing any timer still pending under it."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        self._serial += 1
        timer = _Timer(self._serial, self._now_seconds + delay_seconds, callback)
        self._timers[key] = timer
        heappush(self._queue, (timer.due_seconds, timer.serial, key))

    def cancel(self, key: Hashable) -> bool:
        """Disarm the timer for `key`; return whether one was pending."""
        return self._timers.pop(key, None) is not None

    def advance(self, delta_seconds: float) -> int:
        """Move the clock forward by `delta_seconds` and fire due timers."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Fire timers due at or before `now_seconds`, earliest first."""
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        self._now_seconds = now_seconds
        fired = 0
        while self._queue and self._queue[0][0] <= now_seconds:
            _, serial, key = heappop(self._queue)
            timer = self._timers.get(key)
            # Replaced or cancelled timers leave orphan heap entries behind.
            if timer is None or timer.serial != serial:
                continue
            del self._timers[key]
            timer.callback()
            fired += 1
        return fired
