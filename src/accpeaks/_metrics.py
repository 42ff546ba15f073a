"""Derived periodicity metrics computed from a peak table."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd


def summarize_peaks(table: pd.DataFrame) -> dict[str, Any]:
    """Summarize inter-peak periods of a detection result.

    Parameters
    ----------
    table : pandas.DataFrame
        Peak table returned by :func:`accpeaks.detect_peaks`.

    Returns
    -------
    dict
        ``n_peaks``, ``mean_period``, ``median_period``, ``std_period``
        (seconds), ``cadence_hz`` (``1 / mean_period``) and
        ``mean_amplitude``.  Period metrics are ``NaN`` with fewer than two
        peaks.

    Examples
    --------
    >>> t = pd.DataFrame({"peak_period": [np.nan, 1.0, 1.0], "peak_amplitude": [2.0, 2.0, 2.0]})
    >>> summarize_peaks(t)["cadence_hz"]
    1.0
    """
    periods = table["peak_period"].dropna().to_numpy(dtype=float)
    amplitudes = table["peak_amplitude"].to_numpy(dtype=float)

    if periods.size == 0:
        mean_period = median_period = std_period = float("nan")
    else:
        mean_period = float(np.mean(periods))
        median_period = float(np.median(periods))
        std_period = float(np.std(periods, ddof=1)) if periods.size > 1 else 0.0

    cadence = 1.0 / mean_period if mean_period > 0 else float("nan")
    return {
        "n_peaks": len(table),
        "mean_period": mean_period,
        "median_period": median_period,
        "std_period": std_period,
        "cadence_hz": cadence,
        "mean_amplitude": float(np.mean(amplitudes)) if amplitudes.size else float("nan"),
    }
