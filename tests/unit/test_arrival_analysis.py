"""Unit tests for arrival-stream analysis helpers."""

import math

import numpy as np
import pandas as pd
import pytest
from matplotlib.figure import Figure

from poissonscheduler import (
    ArrivalSummary,
    Duration,
    Instant,
    arrivals_frame,
    exponential_ks_statistic,
    inter_arrival_gaps,
    ks_critical_value,
    plot_gap_histogram,
    summarize,
)


def _instants(*seconds):
    return [Instant.from_seconds(s) for s in seconds]


def _exponential_quantiles(n, rate):
    """Gaps placed at the midpoints of n equal-probability bins of Exp(rate)."""
    p = (np.arange(n) + 0.5) / n
    return -np.log1p(-p) / rate


class TestGaps:

    def test_gaps_between_timestamps(self):
        gaps = inter_arrival_gaps(_instants(1.0, 1.5, 3.0))
        np.testing.assert_allclose(gaps, [0.5, 1.5])

    def test_first_gap_from_epoch(self):
        gaps = inter_arrival_gaps(_instants(1.0, 1.5), epoch=Instant.Epoch)
        np.testing.assert_allclose(gaps, [1.0, 0.5])

    def test_requires_two_points(self):
        with pytest.raises(ValueError, match="at least two"):
            inter_arrival_gaps(_instants(1.0))

    def test_frame_columns(self):
        frame = arrivals_frame(_instants(10.5, 11.0), epoch=Instant.from_seconds(10.0))

        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["time_s", "gap_s"]
        np.testing.assert_allclose(frame["time_s"], [0.5, 1.0])
        np.testing.assert_allclose(frame["gap_s"], [0.5, 0.5])


class TestKolmogorovSmirnov:

    def test_statistic_small_for_exponential_quantiles(self):
        gaps = _exponential_quantiles(1000, rate=3.0)
        assert exponential_ks_statistic(gaps, 3.0) == pytest.approx(0.5 / 1000, abs=1e-9)

    def test_statistic_large_for_wrong_rate(self):
        gaps = _exponential_quantiles(1000, rate=3.0)
        assert exponential_ks_statistic(gaps, 1.0) > 0.3

    def test_statistic_rejects_empty(self):
        with pytest.raises(ValueError, match="empty"):
            exponential_ks_statistic([], 1.0)

    def test_critical_value_at_five_percent(self):
        assert ks_critical_value(100) == pytest.approx(1.3581 / 10, abs=1e-4)

    def test_critical_value_shrinks_with_n(self):
        assert ks_critical_value(10_000) < ks_critical_value(100)

    @pytest.mark.parametrize("n, alpha", [(0, 0.05), (10, 0.0), (10, 1.0)])
    def test_critical_value_rejects_bad_arguments(self, n, alpha):
        with pytest.raises(ValueError):
            ks_critical_value(n, alpha)


class TestSummarize:

    def test_summary_of_ideal_stream(self):
        rate = 5.0
        times = np.cumsum(_exponential_quantiles(500, rate))
        timestamps = [Instant.from_seconds(float(t)) for t in times]

        summary = summarize(timestamps, rate, Duration.from_seconds(100.0), Instant.Epoch)

        assert isinstance(summary, ArrivalSummary)
        assert summary.count == 500
        assert summary.expected_count == 500.0
        assert summary.expected_mean_gap == pytest.approx(0.2)
        assert summary.mean_gap == pytest.approx(0.2, rel=0.05)
        assert summary.conforms

    def test_summary_rejects_empty(self):
        with pytest.raises(ValueError, match="empty"):
            summarize([], 1.0, Duration.from_seconds(1.0), Instant.Epoch)


class TestPlot:

    def test_returns_figure(self):
        fig = plot_gap_histogram(_exponential_quantiles(200, 2.0), rate=2.0)
        assert isinstance(fig, Figure)

    def test_saves_to_path(self, tmp_path):
        path = tmp_path / "nested" / "gaps.png"
        plot_gap_histogram(_exponential_quantiles(200, 2.0), rate=2.0, path=path)
        assert path.exists()

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            plot_gap_histogram([], rate=1.0)
