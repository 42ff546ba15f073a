"""Baseline estimation for the accpeaks detector.

The baseline is the reference level subtracted from the raw series before
scanning: a scalar median or mean over the eligible samples, a centered
rolling mean, or a fixed constant.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from accpeaks._config import DetectionConfig
from accpeaks._errors import InvalidConfiguration


def rolling_mean(series: np.ndarray, window_length: int) -> np.ndarray:
    """Return the centered moving average of *series*.

    Edge windows average whatever samples are available, so the output has
    one value per input sample.  ``NaN`` samples are skipped; an index whose
    whole window is ``NaN`` gets ``NaN``.

    Parameters
    ----------
    series : numpy.ndarray
        Input samples.
    window_length : int
        Window width in samples (>= 1).

    Returns
    -------
    numpy.ndarray
        Per-index baseline, same length as *series*.

    Examples
    --------
    >>> rolling_mean(np.array([0.0, 3.0, 6.0]), 3)
    array([1.5, 3. , 4.5])
    """
    window_length = int(window_length)
    if window_length < 1:
        msg = f"window_length must be >= 1, got {window_length}"
        raise InvalidConfiguration(msg)
    values = pd.Series(np.asarray(series, dtype=float))
    return values.rolling(window_length, center=True, min_periods=1).mean().to_numpy()


def compute_baseline(
    values: np.ndarray,
    eligible: np.ndarray,
    cfg: DetectionConfig,
) -> float | np.ndarray:
    """Compute the baseline selected by ``cfg.baseline_mode``.

    Parameters
    ----------
    values : numpy.ndarray
        Raw series.
    eligible : numpy.ndarray
        Boolean mask of samples whose marked event is ``> 0``.
    cfg : DetectionConfig
        Active configuration.

    Returns
    -------
    float or numpy.ndarray
        Scalar baseline for ``median``, ``mean`` and ``fixed``; per-index
        array for ``rolling_mean``, averaged over eligible samples only.

    Raises
    ------
    InvalidConfiguration
        If the rolling window is longer than the series.
    """
    if cfg.baseline_mode == "median":
        return float(np.median(values[eligible]))
    if cfg.baseline_mode == "mean":
        return float(np.mean(values[eligible]))
    if cfg.baseline_mode == "rolling_mean":
        if cfg.window_length > values.size:
            msg = (
                f"window_length ({cfg.window_length}) must be <= "
                f"series length ({values.size})"
            )
            raise InvalidConfiguration(msg)
        return rolling_mean(np.where(eligible, values, np.nan), cfg.window_length)
    return cfg.fixed_value
