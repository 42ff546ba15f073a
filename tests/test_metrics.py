"""Tests for derived periodicity metrics."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from accpeaks import detect_peaks, summarize_peaks


class TestSummarizePeaks:
    """summarize_peaks on hand-built and detected tables."""

    def test_regular_periods(self):
        table = pd.DataFrame(
            {"peak_period": [np.nan, 0.5, 0.5, 0.5], "peak_amplitude": [1.0, 2.0, 3.0, 2.0]}
        )
        summary = summarize_peaks(table)
        assert summary["n_peaks"] == 4
        assert summary["mean_period"] == 0.5
        assert summary["median_period"] == 0.5
        assert summary["std_period"] == 0.0
        assert summary["cadence_hz"] == 2.0
        assert summary["mean_amplitude"] == 2.0

    def test_single_peak_has_nan_periods(self):
        table = pd.DataFrame({"peak_period": [np.nan], "peak_amplitude": [4.0]})
        summary = summarize_peaks(table)
        assert summary["n_peaks"] == 1
        assert np.isnan(summary["mean_period"])
        assert np.isnan(summary["cadence_hz"])
        assert summary["mean_amplitude"] == 4.0

    def test_empty_table(self):
        table = pd.DataFrame({"peak_period": [], "peak_amplitude": []})
        summary = summarize_peaks(table)
        assert summary["n_peaks"] == 0
        assert np.isnan(summary["mean_amplitude"])

    def test_detected_two_spikes(self, two_spikes, zero_config):
        t, x = two_spikes
        summary = summarize_peaks(detect_peaks(t, x, config=zero_config))
        assert summary["mean_period"] == 400.0
        assert summary["cadence_hz"] == pytest.approx(1 / 400)

    def test_gait_cadence(self, gait_signal):
        t, x, me = gait_signal
        summary = summarize_peaks(detect_peaks(t, x, me, config={"LoM": 11, "thresh": 0.6}))
        assert summary["cadence_hz"] == pytest.approx(1.0, abs=0.05)
