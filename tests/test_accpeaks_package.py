"""Tests for the public package surface."""

from __future__ import annotations

import accpeaks
from accpeaks import InvalidConfiguration, NoValidPeaks, PeakDetectionError


def test_public_names_available():
    expected = {
        "DetectionConfig",
        "detect_peaks",
        "compute_support_series",
        "summarize_peaks",
        "plot_detection",
        "rolling_mean",
        "normalize_span",
        "InvalidConfiguration",
        "NoValidPeaks",
    }
    assert expected.issubset(set(accpeaks.__all__))
    for name in accpeaks.__all__:
        assert hasattr(accpeaks, name)


def test_version():
    assert accpeaks.__version__ == "0.1.0"


def test_error_hierarchy():
    assert issubclass(InvalidConfiguration, PeakDetectionError)
    assert issubclass(NoValidPeaks, PeakDetectionError)
    assert issubclass(InvalidConfiguration, ValueError)
    assert issubclass(NoValidPeaks, ValueError)
