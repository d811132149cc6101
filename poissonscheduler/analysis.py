"""Statistical checks for emitted arrival streams.

Used to confirm that a generator's output behaves like a Poisson process:
the event count over a window should be close to ``rate * duration`` and the
gaps should follow Exp(rate). The goodness-of-fit test is a one-sample
Kolmogorov-Smirnov test against the exponential CDF, computed directly with
numpy using the asymptotic critical values.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np
import pandas as pd
from matplotlib.figure import Figure

from poissonscheduler.temporal import Duration, Instant

logger = logging.getLogger(__name__)


def _seconds_array(timestamps: Iterable[Instant]) -> np.ndarray:
    return np.array([ts.to_seconds() for ts in timestamps], dtype=float)


def inter_arrival_gaps(timestamps: Sequence[Instant], epoch: Instant | None = None) -> np.ndarray:
    """Return consecutive gaps in seconds.

    With ``epoch`` the first gap is measured from it, giving one gap per
    timestamp; otherwise there is one fewer gap than timestamps.
    """
    times = _seconds_array(timestamps)
    if epoch is not None:
        times = np.concatenate(([epoch.to_seconds()], times))
    if times.size < 2:
        raise ValueError("Need at least two points to compute gaps")
    return np.diff(times)


def exponential_ks_statistic(gaps: Sequence[float] | np.ndarray, rate: float) -> float:
    """Kolmogorov-Smirnov D statistic of ``gaps`` against Exp(rate)."""
    x = np.sort(np.asarray(gaps, dtype=float))
    n = x.size
    if n == 0:
        raise ValueError("gaps must not be empty")
    if rate <= 0:
        raise ValueError("rate must be > 0")

    cdf = -np.expm1(-rate * x)
    upper = np.arange(1, n + 1) / n - cdf
    lower = cdf - np.arange(0, n) / n
    return float(max(upper.max(), lower.max()))


def ks_critical_value(n: int, alpha: float = 0.05) -> float:
    """Asymptotic critical value of D for sample size ``n``.

    Valid for n above roughly 35; smaller samples make the test conservative.
    """
    if n <= 0:
        raise ValueError("n must be > 0")
    if not 0.0 < alpha < 1.0:
        raise ValueError("alpha must be in (0, 1)")
    return math.sqrt(-0.5 * math.log(alpha / 2.0)) / math.sqrt(n)


def arrivals_frame(timestamps: Sequence[Instant], epoch: Instant) -> pd.DataFrame:
    """Tabulate arrivals as offsets from ``epoch`` with the gap preceding each."""
    times = _seconds_array(timestamps) - epoch.to_seconds()
    gaps = np.diff(np.concatenate(([0.0], times)))
    return pd.DataFrame({"time_s": times, "gap_s": gaps})


@dataclass(frozen=True)
class ArrivalSummary:
    """Observed vs. expected statistics for one arrival stream."""

    count: int
    expected_count: float
    mean_gap: float
    expected_mean_gap: float
    ks_statistic: float
    ks_critical: float

    @property
    def conforms(self) -> bool:
        """Whether the gaps pass the KS test at the chosen significance."""
        return self.ks_statistic <= self.ks_critical


def summarize(
    timestamps: Sequence[Instant],
    rate: float,
    duration: Duration,
    epoch: Instant,
    alpha: float = 0.05,
) -> ArrivalSummary:
    """Compare an arrival stream against a Poisson process of ``rate``."""
    if not timestamps:
        raise ValueError("timestamps must not be empty")

    gaps = arrivals_frame(timestamps, epoch)["gap_s"].to_numpy()
    summary = ArrivalSummary(
        count=len(timestamps),
        expected_count=rate * duration.to_seconds(),
        mean_gap=float(gaps.mean()),
        expected_mean_gap=1.0 / rate,
        ks_statistic=exponential_ks_statistic(gaps, rate),
        ks_critical=ks_critical_value(gaps.size, alpha),
    )
    logger.debug("Arrival summary: %s", summary)
    return summary


def plot_gap_histogram(
    gaps: Sequence[float] | np.ndarray,
    rate: float,
    path: str | Path | None = None,
    bins: int = 50,
) -> Figure:
    """Histogram of observed gaps overlaid with the Exp(rate) density.

    Args:
        gaps: Inter-arrival gaps in seconds.
        rate: Rate of the reference exponential.
        path: If given, the figure is saved there. Parent directories are
            created automatically.
        bins: Number of histogram bins.
    """
    values = np.asarray(gaps, dtype=float)
    if values.size == 0:
        raise ValueError("gaps must not be empty")

    fig = Figure(figsize=(8, 5))
    ax = fig.subplots()
    ax.hist(values, bins=bins, density=True, alpha=0.6, label="observed")

    xs = np.linspace(0.0, float(values.max()), 200)
    ax.plot(xs, rate * np.exp(-rate * xs), "r-", linewidth=2, label=f"Exp({rate:g}) pdf")
    ax.set_xlabel("Inter-arrival gap (s)")
    ax.set_ylabel("Density")
    ax.set_title(f"Inter-arrival gaps (n={values.size})")
    ax.legend()
    fig.tight_layout()

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path)
        logger.info("Saved gap histogram to %s", path)

    return fig
