"""Tests for baseline estimation."""

from __future__ import annotations

import numpy as np
import pytest

from accpeaks import DetectionConfig, InvalidConfiguration, rolling_mean
from accpeaks._baseline import compute_baseline


class TestRollingMean:
    """Centered moving average with partial edge windows."""

    def test_partial_windows_at_edges(self):
        result = rolling_mean(np.array([0.0, 3.0, 6.0, 9.0, 12.0]), 3)
        np.testing.assert_allclose(result, [1.5, 3.0, 6.0, 9.0, 10.5])

    def test_window_one_is_identity(self):
        x = np.array([1.0, -2.0, 5.0])
        np.testing.assert_array_equal(rolling_mean(x, 1), x)

    def test_constant_series(self):
        np.testing.assert_allclose(rolling_mean(np.full(20, 4.0), 7), 4.0)

    def test_same_length_no_nan(self):
        x = np.random.default_rng(0).normal(size=250)
        result = rolling_mean(x, 100)
        assert result.shape == x.shape
        assert np.all(np.isfinite(result))

    def test_window_covering_series_is_near_global_mean(self):
        x = np.arange(11, dtype=float)
        result = rolling_mean(x, 21)
        np.testing.assert_allclose(result, np.full(11, x.mean()))

    def test_invalid_window(self):
        with pytest.raises(InvalidConfiguration):
            rolling_mean(np.ones(5), 0)


class TestComputeBaseline:
    """Baseline mode dispatch and masking."""

    def setup_method(self):
        self.values = np.array([1.0, 2.0, 3.0, 100.0, 4.0])
        self.eligible = np.array([True, True, True, False, True])

    def test_median_ignores_masked(self):
        cfg = DetectionConfig(baseline_mode="median")
        assert compute_baseline(self.values, self.eligible, cfg) == 2.5

    def test_mean_ignores_masked(self):
        cfg = DetectionConfig(baseline_mode="mean")
        assert compute_baseline(self.values, self.eligible, cfg) == 2.5

    def test_fixed(self):
        cfg = DetectionConfig(baseline_mode="fixed", fixed_value=-3.0)
        assert compute_baseline(self.values, self.eligible, cfg) == -3.0

    def test_rolling_mean_per_index(self):
        cfg = DetectionConfig(baseline_mode="rolling_mean", window_length=3)
        result = compute_baseline(self.values, self.eligible, cfg)
        assert isinstance(result, np.ndarray)
        assert result.shape == self.values.shape
        np.testing.assert_allclose(result, [1.5, 2.0, 2.5, 3.5, 4.0])

    def test_rolling_mean_ignores_masked_value(self):
        cfg = DetectionConfig(baseline_mode="rolling_mean", window_length=3)
        altered = self.values.copy()
        altered[3] = -1e6
        np.testing.assert_array_equal(
            compute_baseline(self.values, self.eligible, cfg),
            compute_baseline(altered, self.eligible, cfg),
        )

    def test_rolling_window_fully_masked_is_nan(self):
        cfg = DetectionConfig(baseline_mode="rolling_mean", window_length=1)
        result = compute_baseline(self.values, self.eligible, cfg)
        assert np.isnan(result[3])
        np.testing.assert_array_equal(result[self.eligible], self.values[self.eligible])

    def test_rolling_window_longer_than_series(self):
        cfg = DetectionConfig(baseline_mode="rolling_mean", window_length=6)
        with pytest.raises(InvalidConfiguration, match="window_length"):
            compute_baseline(self.values, self.eligible, cfg)
