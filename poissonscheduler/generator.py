"""Homogeneous Poisson arrival generator.

Inter-arrival gaps are drawn by inverse-CDF sampling of the exponential
distribution: for a uniform draw u in [0, 1) the gap is -ln(1 - u) / rate.
Gaps accumulate into a virtual elapsed time; each arrival is reported as
``epoch + elapsed``.

Nothing here sleeps or waits. Timestamps are computed values, and ``run``
invokes its action back-to-back in the caller's thread. Callers that need
wall-clock pacing wrap the action with ``poissonscheduler.pacing.paced``.

Example::

    gen = PoissonProcessGenerator(rate=100.0, seed=7)
    count = gen.run(Duration.from_seconds(1.0), lambda ts: print(ts))
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Callable, Iterator

from poissonscheduler.clock import Clock, MonotonicClock
from poissonscheduler.errors import InvalidRateError
from poissonscheduler.random_source import RandomSource, default_random_source
from poissonscheduler.temporal import Duration, Instant

logger = logging.getLogger(__name__)

# Gaps are reported at nanosecond resolution; denser arrivals would collapse
# onto the same instant.
MAX_RATE = 1e9


def _validate_rate(rate) -> float:
    if isinstance(rate, bool) or not isinstance(rate, Real):
        raise InvalidRateError(rate, "must be a real number")
    value = float(rate)
    if not math.isfinite(value):
        raise InvalidRateError(rate, "must be finite")
    if value <= 0:
        raise InvalidRateError(rate, "must be > 0")
    if value > MAX_RATE:
        raise InvalidRateError(rate, f"must not exceed {MAX_RATE:g} events per second")
    return value


def _as_duration(duration: Duration | float | int) -> Duration:
    if not isinstance(duration, Duration):
        duration = Duration.from_seconds(duration)
    if duration < Duration.ZERO:
        raise ValueError(f"duration must be >= 0, got {duration!r}")
    return duration


class PoissonProcessGenerator:
    """Produces arrival instants of a Poisson process with a fixed rate.

    Args:
        rate: Mean number of events per second. Must be finite, positive and
            no greater than MAX_RATE.
        random_source: Uniform source with ``random() -> float`` in [0, 1).
            Owned by the generator; do not share it between generators that
            run concurrently.
        seed: Seed for the default numpy source. Mutually exclusive with
            ``random_source``.
        clock: Supplies the epoch. Defaults to the host monotonic clock.

    Raises:
        InvalidRateError: If ``rate`` is unusable.
        ValueError: If both ``random_source`` and ``seed`` are given.

    Not thread-safe: ``next``/``run`` mutate the elapsed time and the random
    source without locking.
    """

    def __init__(
        self,
        rate: float,
        *,
        random_source: RandomSource | None = None,
        seed: int | None = None,
        clock: Clock | None = None,
    ):
        self._rate = _validate_rate(rate)

        if random_source is not None and seed is not None:
            raise ValueError("Pass either random_source or seed, not both")
        self._random_source = (
            random_source if random_source is not None else default_random_source(seed)
        )
        self._clock = clock if clock is not None else MonotonicClock()

        self._epoch = self._clock.now
        # Float seconds so per-gap nanosecond rounding does not accumulate.
        self._elapsed_s = 0.0
        self._events_emitted = 0

        logger.debug("PoissonProcessGenerator created: rate=%.6f epoch=%r", self._rate, self._epoch)

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def random_source(self) -> RandomSource:
        return self._random_source

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def epoch(self) -> Instant:
        return self._epoch

    @property
    def elapsed(self) -> Duration:
        """Virtual time accumulated since the epoch."""
        return Duration.from_seconds(self._elapsed_s)

    @property
    def events_emitted(self) -> int:
        """Arrivals committed since construction or the last reset."""
        return self._events_emitted

    def reset(self, epoch: Instant | None = None) -> None:
        """Zero the elapsed time and re-capture the epoch.

        Args:
            epoch: Explicit epoch to use instead of reading the clock.
        """
        self._epoch = epoch if epoch is not None else self._clock.now
        self._elapsed_s = 0.0
        self._events_emitted = 0

    def _draw_gap_seconds(self) -> float:
        u = float(self._random_source.random())
        if not 0.0 <= u < 1.0:
            raise ValueError(f"Random source returned {u!r}, expected a value in [0, 1)")
        # log1p(-u) == ln(1 - u); exact for u == 0, giving a zero-length gap.
        return -math.log1p(-u) / self._rate

    def _timestamp_at(self, elapsed_s: float) -> Instant:
        return self._epoch + Duration.from_seconds(elapsed_s)

    def _commit(self, gap_s: float) -> Instant:
        self._elapsed_s += gap_s
        self._events_emitted += 1
        timestamp = self._timestamp_at(self._elapsed_s)
        logger.debug(
            "Arrival %d: gap=%.9fs elapsed=%.9fs", self._events_emitted, gap_s, self._elapsed_s
        )
        return timestamp

    def next_gap(self) -> Duration:
        """Draw one inter-arrival gap without advancing the elapsed time."""
        return Duration.from_seconds(self._draw_gap_seconds())

    def next(self) -> Instant:
        """Advance to the next arrival and return its timestamp.

        Never blocks. Failures of the random source propagate and leave the
        elapsed time untouched.
        """
        return self._commit(self._draw_gap_seconds())

    def arrivals(self, duration: Duration | float | None = None) -> Iterator[Instant]:
        """Yield successive arrival timestamps.

        Continues from the current elapsed time; nothing is reset. With
        ``duration`` the stream ends before the first arrival at or after
        ``epoch + duration``, and that rejected candidate is not committed.
        Without it the stream is unbounded.

        ``duration`` is validated and the end instant fixed when this is
        called, not when the stream is first read.

        Raises:
            ValueError: If ``duration`` is negative.
        """
        end = None if duration is None else self._epoch + _as_duration(duration)
        return self._stream(end)

    def _stream(self, end: Instant | None) -> Iterator[Instant]:
        while True:
            gap_s = self._draw_gap_seconds()
            if end is not None and self._timestamp_at(self._elapsed_s + gap_s) >= end:
                return
            yield self._commit(gap_s)

    def run(self, duration: Duration | float, action: Callable[[Instant], object]) -> int:
        """Invoke ``action`` at every arrival in ``[epoch, epoch + duration)``.

        Resets the generator first, so each run starts from a fresh epoch.
        The action is called synchronously and its exceptions propagate
        unchanged; the elapsed time then includes the arrival whose action
        failed.

        Args:
            duration: Window length, as a Duration or in seconds.
            action: Called with each arrival's timestamp.

        Returns:
            The number of times ``action`` was invoked.

        Raises:
            ValueError: If ``duration`` is negative.
        """
        window = _as_duration(duration)
        self.reset()

        invoked = 0
        for timestamp in self.arrivals(window):
            invoked += 1
            action(timestamp)

        logger.info(
            "Run complete: %d events in %.6fs (rate=%.6f, expected=%.1f)",
            invoked,
            window.to_seconds(),
            self._rate,
            self._rate * window.to_seconds(),
        )
        return invoked

    def __repr__(self) -> str:
        return (
            f"PoissonProcessGenerator(rate={self._rate!r}, epoch={self._epoch!r}, "
            f"elapsed={self.elapsed!r})"
        )
