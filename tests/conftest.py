"""Shared fixtures for the accpeaks test suite."""

from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def single_spike() -> tuple[np.ndarray, np.ndarray]:
    """Zero series at 1 Hz with one spike of height 10 at index 100."""
    timestamps = np.arange(600, dtype=float)
    values = np.zeros(600)
    values[100] = 10.0
    return timestamps, values


@pytest.fixture
def two_spikes() -> tuple[np.ndarray, np.ndarray]:
    """Zero series at 1 Hz with equal spikes at indices 100 and 500."""
    timestamps = np.arange(600, dtype=float)
    values = np.zeros(600)
    values[[100, 500]] = 10.0
    return timestamps, values


@pytest.fixture
def gait_signal() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Synthetic 25 Hz vertical acceleration with a 1 Hz stride.

    Returns
    -------
    timestamps : numpy.ndarray
        Seconds.
    values : numpy.ndarray
        Acceleration (g) around 1 g with small noise.
    marked_events : numpy.ndarray
        ``1`` while walking (10-50 s), ``0`` at rest.
    """
    rng = np.random.default_rng(7)
    fs = 25.0
    timestamps = np.arange(0, 60, 1 / fs)
    walking = (timestamps >= 10) & (timestamps < 50)
    values = 1.0 + rng.normal(0, 0.01, size=timestamps.size)
    values[walking] += 0.5 * np.sin(2 * np.pi * 1.0 * timestamps[walking])
    marked_events = walking.astype(int)
    return timestamps, values, marked_events


@pytest.fixture
def zero_config() -> dict[str, object]:
    """Options matching the reference spike scenarios."""
    return {"LoM": 5, "thresh": 0.5, "constant": 0}
