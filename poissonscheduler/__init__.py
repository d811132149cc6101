"""Poisson-process arrival timestamps for load generation and simulation."""

import logging

from poissonscheduler.analysis import (
    ArrivalSummary,
    arrivals_frame,
    exponential_ks_statistic,
    inter_arrival_gaps,
    ks_critical_value,
    plot_gap_histogram,
    summarize,
)
from poissonscheduler.clock import Clock, MonotonicClock, SimulatedClock
from poissonscheduler.errors import InvalidRateError
from poissonscheduler.generator import MAX_RATE, PoissonProcessGenerator
from poissonscheduler.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from poissonscheduler.pacing import paced, wait_until
from poissonscheduler.random_source import RandomSource, default_random_source
from poissonscheduler.temporal import Duration, Instant

logging.getLogger("poissonscheduler").addHandler(logging.NullHandler())

__all__ = [
    # Core
    "MAX_RATE",
    "InvalidRateError",
    "PoissonProcessGenerator",
    # Time
    "Clock",
    "Duration",
    "Instant",
    "MonotonicClock",
    "SimulatedClock",
    # Randomness
    "RandomSource",
    "default_random_source",
    # Pacing
    "paced",
    "wait_until",
    # Analysis
    "ArrivalSummary",
    "arrivals_frame",
    "exponential_ks_statistic",
    "inter_arrival_gaps",
    "ks_critical_value",
    "plot_gap_histogram",
    "summarize",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
