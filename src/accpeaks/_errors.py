"""Exception types raised by the accpeaks detection pipeline."""

from __future__ import annotations


class PeakDetectionError(Exception):
    """Base class for all accpeaks detection errors."""


class InvalidConfiguration(PeakDetectionError, ValueError):
    """Raised when options or inputs cannot support detection.

    Covers out-of-range thresholds, rolling windows longer than the series,
    misaligned input sequences and too few eligible samples.
    """


class NoValidPeaks(PeakDetectionError, ValueError):
    """Raised when the reference amplitude is not positive.

    This distinguishes an input that cannot support thresholding from a
    successful run that simply found nothing (an empty table).
    """
