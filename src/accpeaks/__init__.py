"""Local-maximum peak detection for accelerometry and biologging series.

The detector subtracts a baseline, masks samples outside marked events,
scans a centered window for local maxima and keeps those above a fraction of
the reference amplitude.  Negative peaks are found by flipping the sign.

Public API
----------
.. autosummary::
    DetectionConfig
    detect_peaks
    compute_support_series
    summarize_peaks
    plot_detection
    rolling_mean
    normalize_span
    InvalidConfiguration
    NoValidPeaks
"""

from accpeaks._baseline import rolling_mean
from accpeaks._config import PARAM_ALIASES, DetectionConfig, normalize_span
from accpeaks._detector import (
    PEAK_COLUMNS,
    apply_threshold,
    assemble_peaks,
    compute_support_series,
    detect_peaks,
    preprocess,
    scan_local_maxima,
)
from accpeaks._errors import InvalidConfiguration, NoValidPeaks, PeakDetectionError
from accpeaks._metrics import summarize_peaks
from accpeaks._plotting import plot_detection

__version__ = "0.1.0"
__all__ = [
    "PARAM_ALIASES",
    "PEAK_COLUMNS",
    "DetectionConfig",
    "InvalidConfiguration",
    "NoValidPeaks",
    "PeakDetectionError",
    "apply_threshold",
    "assemble_peaks",
    "compute_support_series",
    "detect_peaks",
    "normalize_span",
    "plot_detection",
    "preprocess",
    "rolling_mean",
    "scan_local_maxima",
    "summarize_peaks",
]
