"""Clocks that supply the reference instant for a generator's epoch."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from poissonscheduler.temporal import Duration, Instant


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current instant."""

    @property
    def now(self) -> Instant:
        ...


class MonotonicClock:
    """Host monotonic clock. Instants are only comparable within one process."""

    @property
    def now(self) -> Instant:
        return Instant(time.monotonic_ns())


class SimulatedClock:
    """Logical clock advanced explicitly by the caller.

    Useful for tests and for driving a generator from another simulation's
    notion of time.
    """

    def __init__(self, start_time: Instant = Instant.Epoch):
        self._current_time = start_time

    @property
    def now(self) -> Instant:
        return self._current_time

    def update(self, time: Instant) -> None:
        if time < self._current_time:
            raise ValueError(f"Cannot move clock backwards from {self._current_time!r} to {time!r}")
        self._current_time = time

    def advance(self, duration: Duration) -> Instant:
        if duration < Duration.ZERO:
            raise ValueError(f"Cannot advance clock by a negative duration: {duration!r}")
        self._current_time = self._current_time + duration
        return self._current_time
