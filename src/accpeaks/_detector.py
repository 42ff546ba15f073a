"""Core local-maximum detection pipeline.

The four-stage pipeline:

1. **Preprocess**: validate inputs, compute the baseline, mask samples whose
   marked event is not positive and flip the sign for negative peaks.
2. **Scan**: flag samples that are the maximum of their centered window.
3. **Threshold**: keep candidates above a fraction of the reference
   amplitude (global maximum, or a quantile in outlier mode).
4. **Assemble**: build the peak table with timestamps, 1-based indices,
   original-sign amplitudes and inter-peak periods.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from scipy.ndimage import maximum_filter1d

from accpeaks._baseline import compute_baseline
from accpeaks._config import DetectionConfig, normalize_span
from accpeaks._errors import InvalidConfiguration, NoValidPeaks
from accpeaks._plotting import plot_detection

logger = logging.getLogger(__name__)

PEAK_COLUMNS: tuple[str, ...] = (
    "timestamp",
    "index",
    "peak_amplitude",
    "peak_period",
    "marked_event",
)


@dataclass(frozen=True)
class AdjustedSeries:
    """Preprocessed series shared by the scan, threshold and assembly stages.

    ``adjusted`` holds ``(values - baseline) * sign`` at eligible samples and
    ``-inf`` elsewhere, so masked samples can neither win nor block a window.
    """

    timestamps: pd.Series
    values: np.ndarray
    marked_events: np.ndarray
    eligible: np.ndarray
    baseline: float | np.ndarray
    adjusted: np.ndarray


def detect_peaks(
    timestamps: Any,
    values: Any,
    marked_events: Any | None = None,
    *,
    config: DetectionConfig | dict[str, Any] | None = None,
    return_support: bool = False,
) -> pd.DataFrame | tuple[pd.DataFrame, dict[str, Any]]:
    """Run the full local-maximum peak detection pipeline.

    Parameters
    ----------
    timestamps : array-like or None
        Sample times, monotonically non-decreasing.  Numeric values are
        taken as seconds; datetime-like values are converted with
        ``total_seconds``.  ``None`` uses the sample number (1 Hz).
    values : array-like
        Signal samples aligned with *timestamps*.
    marked_events : array-like or None, optional
        Per-sample markers; only samples with a marker ``> 0`` are eligible.
        Defaults to ``1`` everywhere.
    config : DetectionConfig or dict or None, optional
        Configuration instance, or an option dictionary passed to
        :meth:`DetectionConfig.from_options`.
    return_support : bool, optional
        If ``True``, also return intermediate arrays for visualization.

    Returns
    -------
    table : pandas.DataFrame
        One row per retained peak with columns ``timestamp``, ``index``,
        ``peak_amplitude``, ``peak_period`` and ``marked_event``.
    support : dict
        Only returned when *return_support* is ``True``.  Contains
        ``baseline``, ``baseline_series``, ``adjusted_series``,
        ``eligible_mask``, ``reference_amplitude``, ``cutoff``,
        ``cutoff_series``, ``candidate_indices``, ``retained_indices`` and
        ``detector_config``.

    Raises
    ------
    InvalidConfiguration
        If the inputs or options cannot support detection.
    NoValidPeaks
        If the reference amplitude is not positive.

    Examples
    --------
    >>> x = np.zeros(50)
    >>> x[20] = 10.0
    >>> table = detect_peaks(np.arange(50), x, config={"constant": 0})
    >>> table["index"].tolist()
    [21]
    """
    cfg = _resolve_config(config)
    series = preprocess(timestamps, values, marked_events, cfg)
    candidates = scan_local_maxima(series.adjusted, cfg.local_max_span)
    retained, reference, cutoff = apply_threshold(
        candidates,
        series.adjusted,
        threshold_fraction=cfg.threshold_fraction,
        outlier_quantile=cfg.outlier_quantile,
    )
    table = assemble_peaks(retained, series.timestamps, series.values, series.marked_events)
    logger.debug(
        "Detected %d peaks from %d candidates (reference=%.6g, cutoff=%.6g)",
        len(table),
        candidates.size,
        reference,
        cutoff,
    )

    support = _build_support(series, candidates, retained, reference, cutoff, cfg)
    if cfg.emit_plot:
        support["figure"] = _render_plot(series, table, support)

    if return_support:
        return table, support
    return table


def compute_support_series(
    timestamps: Any,
    values: Any,
    marked_events: Any | None = None,
    *,
    config: DetectionConfig | dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the baseline, cutoff and index sets for visualization.

    Parameters
    ----------
    timestamps, values, marked_events
        Same as :func:`detect_peaks`.
    config : DetectionConfig or dict or None, optional
        Same as :func:`detect_peaks`.

    Returns
    -------
    dict
        The support dictionary described in :func:`detect_peaks`.
    """
    result = detect_peaks(timestamps, values, marked_events, config=config, return_support=True)
    return result[1]  # type: ignore[index]  # return_support=True guarantees 2-tuple


def preprocess(
    timestamps: Any,
    values: Any,
    marked_events: Any | None,
    cfg: DetectionConfig,
) -> AdjustedSeries:
    """Validate inputs and build the baseline-adjusted, masked series.

    Samples whose marked event is not positive, or whose value is not
    finite, are excluded from the baseline statistic and from every later
    stage.

    Raises
    ------
    InvalidConfiguration
        If the sequences are misaligned, timestamps decrease, the rolling
        window is longer than the series or fewer than
        ``cfg.local_max_span`` samples are eligible.
    """
    x = np.asarray(values, dtype=float).ravel()
    n = x.size
    ts = pd.Series(np.arange(n, dtype=float) if timestamps is None else timestamps)
    me = np.ones(n) if marked_events is None else np.asarray(marked_events).ravel()

    if ts.size != n or me.size != n:
        msg = (
            f"timestamps ({ts.size}), values ({n}) and marked_events ({me.size}) "
            "must have the same length"
        )
        raise InvalidConfiguration(msg)
    if not ts.is_monotonic_increasing:
        msg = "timestamps must be monotonically non-decreasing"
        raise InvalidConfiguration(msg)

    try:
        markers = np.asarray(me, dtype=float)
    except (TypeError, ValueError) as exc:
        msg = f"marked_events must be numeric ({exc})"
        raise InvalidConfiguration(msg) from exc
    eligible = (markers > 0) & np.isfinite(x)
    n_eligible = int(np.count_nonzero(eligible))
    if n_eligible < cfg.local_max_span:
        msg = (
            f"need at least local_max_span ({cfg.local_max_span}) eligible samples, "
            f"got {n_eligible}"
        )
        raise InvalidConfiguration(msg)

    baseline = compute_baseline(x, eligible, cfg)
    adjusted = np.where(eligible, (x - baseline) * cfg.sign, -np.inf)
    return AdjustedSeries(
        timestamps=ts.reset_index(drop=True),
        values=x,
        marked_events=me,
        eligible=eligible,
        baseline=baseline,
        adjusted=adjusted,
    )


def scan_local_maxima(adjusted: np.ndarray, local_max_span: int) -> np.ndarray:
    """Return indices that are the maximum of their centered window.

    A sample ``i`` qualifies when ``adjusted[i] >= adjusted[j]`` for every
    ``j`` in ``[i - k, i + k]`` with ``local_max_span = 2k + 1``.  Equal
    neighbouring maxima are all reported.  The first and last ``k`` samples
    never qualify, nor do masked (``-inf``) samples.

    Parameters
    ----------
    adjusted : numpy.ndarray
        Baseline-adjusted series with masked samples set to ``-inf``.
    local_max_span : int
        Window width; even values are coerced with :func:`normalize_span`.

    Returns
    -------
    numpy.ndarray
        Ascending 0-based candidate indices.

    Examples
    --------
    >>> scan_local_maxima(np.array([0.0, 1.0, 3.0, 1.0, 3.0, 0.0, 0.0]), 3)
    array([2, 4])
    """
    adjusted = np.asarray(adjusted, dtype=float)
    span = normalize_span(local_max_span)
    k = span // 2
    n = adjusted.size
    if n < span:
        return np.array([], dtype=int)

    window_max = maximum_filter1d(adjusted, size=span, mode="nearest")
    is_max = (adjusted >= window_max) & np.isfinite(adjusted)
    is_max[:k] = False
    is_max[n - k :] = False
    return np.flatnonzero(is_max)


def apply_threshold(
    candidates: np.ndarray,
    adjusted: np.ndarray,
    *,
    threshold_fraction: float,
    outlier_quantile: float | None = None,
) -> tuple[np.ndarray, float, float]:
    """Keep candidates whose adjusted amplitude exceeds the cutoff.

    Parameters
    ----------
    candidates : numpy.ndarray
        Candidate indices from :func:`scan_local_maxima`.
    adjusted : numpy.ndarray
        Baseline-adjusted series with masked samples set to ``-inf``.
    threshold_fraction : float
        Cutoff as a fraction of the reference amplitude.
    outlier_quantile : float or None, optional
        Quantile of the eligible samples used as reference amplitude;
        ``None`` uses their maximum.

    Returns
    -------
    retained : numpy.ndarray
        Candidates strictly above the cutoff, ascending.
    reference : float
        Reference amplitude ``R``.
    cutoff : float
        ``threshold_fraction * R``.

    Raises
    ------
    NoValidPeaks
        If ``R <= 0``.
    """
    adjusted = np.asarray(adjusted, dtype=float)
    candidates = np.asarray(candidates, dtype=int)
    pool = adjusted[np.isfinite(adjusted)]
    if pool.size == 0:
        msg = "no eligible samples to derive a reference amplitude"
        raise NoValidPeaks(msg)

    if outlier_quantile is None:
        reference = float(np.max(pool))
    else:
        reference = float(np.quantile(pool, outlier_quantile))
    if not reference > 0:
        msg = f"reference amplitude must be > 0 after baseline removal, got {reference:.6g}"
        raise NoValidPeaks(msg)

    cutoff = float(threshold_fraction) * reference
    retained = candidates[adjusted[candidates] > cutoff]
    return retained, reference, cutoff


def assemble_peaks(
    retained: np.ndarray,
    timestamps: Any,
    values: np.ndarray,
    marked_events: np.ndarray,
) -> pd.DataFrame:
    """Build the peak table for the retained indices.

    ``peak_amplitude`` is the raw, original-sign sample and ``peak_period``
    the time in seconds since the previous retained peak (``NaN`` for the
    first one).

    Parameters
    ----------
    retained : numpy.ndarray
        Ascending 0-based peak indices.
    timestamps : array-like
        Sample times.
    values : numpy.ndarray
        Raw series.
    marked_events : numpy.ndarray
        Per-sample markers.

    Returns
    -------
    pandas.DataFrame
        Columns ``timestamp``, ``index`` (1-based), ``peak_amplitude``,
        ``peak_period`` and ``marked_event``; zero rows when nothing was
        retained.
    """
    retained = np.asarray(retained, dtype=int)
    ts = pd.Series(timestamps).reset_index(drop=True).iloc[retained].reset_index(drop=True)
    if pd.api.types.is_datetime64_any_dtype(ts) or pd.api.types.is_timedelta64_dtype(ts):
        period = ts.diff().dt.total_seconds()
    else:
        period = ts.astype(float).diff()

    return pd.DataFrame(
        {
            "timestamp": ts,
            "index": retained + 1,
            "peak_amplitude": np.asarray(values)[retained],
            "peak_period": period.to_numpy(dtype=float),
            "marked_event": np.asarray(marked_events)[retained],
        },
        columns=list(PEAK_COLUMNS),
    )


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _resolve_config(config: DetectionConfig | dict[str, Any] | None) -> DetectionConfig:
    """Return a validated :class:`DetectionConfig` for *config*."""
    if isinstance(config, DetectionConfig):
        return config
    return DetectionConfig.from_options(config)


def _build_support(
    series: AdjustedSeries,
    candidates: np.ndarray,
    retained: np.ndarray,
    reference: float,
    cutoff: float,
    cfg: DetectionConfig,
) -> dict[str, Any]:
    """Build the support dictionary for plotting collaborators.

    ``cutoff_series`` is the cutoff mapped back to the original signal scale,
    i.e. ``baseline + sign * cutoff``.
    """
    baseline_series = np.broadcast_to(series.baseline, series.values.shape).astype(float)
    return {
        "baseline": series.baseline,
        "baseline_series": baseline_series,
        "adjusted_series": np.where(series.eligible, series.adjusted, np.nan),
        "eligible_mask": series.eligible.copy(),
        "reference_amplitude": reference,
        "cutoff": cutoff,
        "cutoff_series": baseline_series + cfg.sign * cutoff,
        "candidate_indices": candidates.copy(),
        "retained_indices": retained.copy(),
        "detector_config": cfg.to_metadata(),
    }


def _render_plot(
    series: AdjustedSeries,
    table: pd.DataFrame,
    support: dict[str, Any],
) -> Any | None:
    """Render the detection plot, warning instead of raising on failure."""
    try:
        return plot_detection(series.timestamps, series.values, table, support)
    except Exception as exc:  # noqa: BLE001
        warnings.warn(
            f"Plot rendering failed ({exc}); returning peaks without plot",
            RuntimeWarning,
            stacklevel=3,
        )
        return None
