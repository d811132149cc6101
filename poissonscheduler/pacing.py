"""Wall-clock pacing layered on top of a generator.

The generator only computes arrival instants. To actually fire load at those
instants, wrap the action so each call first waits for its timestamp::

    clock = MonotonicClock()
    gen = PoissonProcessGenerator(500.0, clock=clock)
    gen.run(Duration.from_seconds(5), paced(send_request, clock=clock))

Waiting sleeps for most of the remaining time and spins for the final
stretch, since ``time.sleep`` routinely overshoots by a scheduler tick.
Late arrivals are not skipped: if the action falls behind, subsequent calls
run immediately until the schedule is caught up.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Callable, TypeVar

from poissonscheduler.clock import Clock, MonotonicClock
from poissonscheduler.temporal import Duration, Instant

logger = logging.getLogger(__name__)

DEFAULT_SPIN_THRESHOLD = Duration.from_seconds(0.001)

R = TypeVar("R")


def wait_until(
    target: Instant,
    clock: Clock,
    sleep: Callable[[float], None] = time.sleep,
    spin_threshold: Duration = DEFAULT_SPIN_THRESHOLD,
) -> Duration:
    """Block until ``clock.now >= target``.

    Args:
        target: Instant to wait for, on the same time base as ``clock``.
        clock: Clock to poll.
        sleep: Sleep function taking seconds.
        spin_threshold: Remaining time below which the wait busy-polls
            instead of sleeping.

    Returns:
        How late the wait returned relative to ``target`` (zero or positive).
    """
    remaining = target - clock.now
    while remaining > Duration.ZERO:
        if remaining > spin_threshold:
            sleep((remaining - spin_threshold).to_seconds())
        remaining = target - clock.now
    return -remaining


def paced(
    action: Callable[[Instant], R],
    clock: Clock | None = None,
    sleep: Callable[[float], None] = time.sleep,
    spin_threshold: Duration = DEFAULT_SPIN_THRESHOLD,
) -> Callable[[Instant], R]:
    """Wrap ``action`` so it runs no earlier than the timestamp it receives.

    Use the same clock the generator captured its epoch from, otherwise the
    timestamps and the wait are on different time bases.
    """
    clock = clock if clock is not None else MonotonicClock()

    @functools.wraps(action)
    def wrapper(timestamp: Instant) -> R:
        lateness = wait_until(timestamp, clock, sleep=sleep, spin_threshold=spin_threshold)
        if lateness > spin_threshold:
            logger.debug("Arrival at %r dispatched %.6fs late", timestamp, lateness.to_seconds())
        return action(timestamp)

    return wrapper
