"""Instant and Duration value types.

Both types are integer nanosecond counts. An Instant is a point on some
time base (monotonic clock, simulated clock); a Duration is a signed span
between two instants. Keeping them distinct lets the generator add gaps to
an epoch without caring which clock produced the epoch.

Plain ints and floats are accepted as seconds on arithmetic, so
``Instant.Epoch + 0.5`` is the instant half a second after the epoch.
"""

from __future__ import annotations

from functools import total_ordering
from numbers import Integral, Real
from typing import ClassVar, Union

NANOS_PER_SECOND = 1_000_000_000

Seconds = Union[int, float, Real]


def _is_seconds(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _seconds_to_nanos(seconds: Seconds) -> int:
    if not _is_seconds(seconds):
        raise TypeError(f"Expected seconds as a real number, got {type(seconds).__name__}")
    if isinstance(seconds, Integral):
        return int(seconds) * NANOS_PER_SECOND
    return round(float(seconds) * NANOS_PER_SECOND)


@total_ordering
class Duration:
    """A span of time with nanosecond resolution."""

    __slots__ = ("_nanoseconds",)

    ZERO: ClassVar[Duration]

    def __init__(self, nanoseconds: int):
        self._nanoseconds = int(nanoseconds)

    @classmethod
    def from_seconds(cls, seconds: Seconds) -> Duration:
        return cls(_seconds_to_nanos(seconds))

    @property
    def nanoseconds(self) -> int:
        return self._nanoseconds

    def to_seconds(self) -> float:
        return self._nanoseconds / NANOS_PER_SECOND

    def __add__(self, other: Duration | Seconds) -> Duration:
        if isinstance(other, Duration):
            return Duration(self._nanoseconds + other._nanoseconds)
        if _is_seconds(other):
            return Duration(self._nanoseconds + _seconds_to_nanos(other))
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Duration | Seconds) -> Duration:
        if isinstance(other, Duration):
            return Duration(self._nanoseconds - other._nanoseconds)
        if _is_seconds(other):
            return Duration(self._nanoseconds - _seconds_to_nanos(other))
        return NotImplemented

    def __neg__(self) -> Duration:
        return Duration(-self._nanoseconds)

    def __bool__(self) -> bool:
        return self._nanoseconds != 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._nanoseconds == other._nanoseconds

    def __lt__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._nanoseconds < other._nanoseconds

    def __hash__(self) -> int:
        return hash(("Duration", self._nanoseconds))

    def __repr__(self) -> str:
        return f"Duration({self.to_seconds():.9f}s)"


@total_ordering
class Instant:
    """A point in time with nanosecond resolution.

    Instants are only meaningful relative to other instants from the same
    clock. Subtracting two instants yields a Duration.
    """

    __slots__ = ("_nanoseconds",)

    Epoch: ClassVar[Instant]

    def __init__(self, nanoseconds: int):
        self._nanoseconds = int(nanoseconds)

    @classmethod
    def from_seconds(cls, seconds: Seconds) -> Instant:
        return cls(_seconds_to_nanos(seconds))

    @property
    def nanoseconds(self) -> int:
        return self._nanoseconds

    def to_seconds(self) -> float:
        return self._nanoseconds / NANOS_PER_SECOND

    def __add__(self, other: Duration | Seconds) -> Instant:
        if isinstance(other, Duration):
            return Instant(self._nanoseconds + other.nanoseconds)
        if _is_seconds(other):
            return Instant(self._nanoseconds + _seconds_to_nanos(other))
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Instant):
            return Duration(self._nanoseconds - other._nanoseconds)
        if isinstance(other, Duration):
            return Instant(self._nanoseconds - other.nanoseconds)
        if _is_seconds(other):
            return Instant(self._nanoseconds - _seconds_to_nanos(other))
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanoseconds == other._nanoseconds

    def __lt__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanoseconds < other._nanoseconds

    def __hash__(self) -> int:
        return hash(("Instant", self._nanoseconds))

    def __repr__(self) -> str:
        return f"Instant({self.to_seconds():.9f}s)"


Duration.ZERO = Duration(0)
Instant.Epoch = Instant(0)
