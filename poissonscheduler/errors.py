"""Exceptions raised by poissonscheduler."""


class InvalidRateError(ValueError):
    """Raised when a generator is constructed with an unusable rate.

    Attributes:
        rate: The rejected value, as passed by the caller.
    """

    def __init__(self, rate, reason: str):
        self.rate = rate
        super().__init__(f"Invalid rate {rate!r}: {reason}")
