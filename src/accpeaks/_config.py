"""Detection configuration for the accpeaks peak detector.

This module defines :class:`DetectionConfig`, a frozen dataclass that holds
all tunable parameters for the four-stage detection pipeline, together with
:func:`normalize_span`, the explicit odd-width coercion for the local-maximum
window.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from accpeaks._errors import InvalidConfiguration

logger = logging.getLogger(__name__)

#: Short option names accepted by :meth:`DetectionConfig.from_options`.
PARAM_ALIASES: dict[str, str] = {
    "LoM": "local_max_span",
    "thresh": "threshold_fraction",
    "constant": "baseline_mode",
    "w": "window_length",
    "outlier": "outlier_quantile",
    "peaks": "peak_direction",
    "plot": "emit_plot",
}

BASELINE_MODES: tuple[str, ...] = ("median", "mean", "rolling_mean", "fixed")
PEAK_DIRECTIONS: tuple[str, ...] = ("positive", "negative")

_BASELINE_MODE_ALIASES: dict[str, str] = {
    "rollingmean": "rolling_mean",
    "rolling": "rolling_mean",
    "fixedconstant": "fixed",
    "fixed_constant": "fixed",
    "constant": "fixed",
}

_FALSE_STRINGS = {"", "0", "false", "no", "off", "none"}


def normalize_span(span: int) -> int:
    """Return *span* forced to an odd width.

    Even spans are incremented by one, so a span of ``S`` behaves exactly
    like ``S + 1``.

    Parameters
    ----------
    span : int
        Requested local-maximum window width (>= 1).

    Returns
    -------
    int
        Odd window width.

    Raises
    ------
    InvalidConfiguration
        If *span* is smaller than 1.

    Examples
    --------
    >>> normalize_span(4)
    5
    >>> normalize_span(7)
    7
    """
    span = int(span)
    if span < 1:
        msg = f"local_max_span must be >= 1, got {span}"
        raise InvalidConfiguration(msg)
    if span % 2 == 0:
        logger.info("local_max_span %d is even; using %d", span, span + 1)
        span += 1
    return span


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration for the local-maximum peak detector.

    Parameters are organized by pipeline stage:

    - **Scanner** -- Local-maximum window width.
    - **Threshold** -- Cutoff fraction and optional outlier quantile.
    - **Baseline** -- Baseline statistic subtracted before scanning.
    - **Direction** -- Search for maxima or minima.
    - **Output** -- Optional plot rendering.

    Parameters
    ----------
    local_max_span : int
        Width of the centered local-maximum window.  Even values are
        incremented by one (see :func:`normalize_span`).  Commonly
        abbreviated as **LoM**.
    threshold_fraction : float
        Fraction of the reference amplitude a peak must exceed, in (0, 1].
        Commonly abbreviated as **thresh**.
    baseline_mode : str
        ``'median'``, ``'mean'``, ``'rolling_mean'`` or ``'fixed'``.
    window_length : int
        Window of the rolling-mean baseline (samples).  Abbreviated **w**.
    fixed_value : float
        Baseline used when ``baseline_mode='fixed'``.
    outlier_quantile : float or None
        When set, the reference amplitude is this quantile of the adjusted
        series instead of its maximum.  ``None`` disables outlier mode.
    peak_direction : str
        ``'positive'`` to detect maxima, ``'negative'`` to detect minima.
    emit_plot : bool
        Render a detection plot after the table is built.

    Examples
    --------
    >>> cfg = DetectionConfig(local_max_span=4)
    >>> cfg.local_max_span
    5

    >>> cfg = DetectionConfig.from_options({"thresh": "0.3", "constant": 0})
    >>> cfg.baseline_mode, cfg.fixed_value
    ('fixed', 0.0)
    """

    # ==================== SCANNER PARAMETERS ====================
    local_max_span: int = 5
    """Width of the centered local-maximum window (forced odd)."""

    # ==================== THRESHOLD PARAMETERS ====================
    threshold_fraction: float = 0.5
    """Fraction of the reference amplitude a peak must exceed."""

    outlier_quantile: float | None = None
    """Quantile used as reference amplitude; ``None`` uses the maximum."""

    # ==================== BASELINE PARAMETERS ====================
    baseline_mode: str = "median"
    """Baseline statistic: median, mean, rolling_mean or fixed."""

    window_length: int = 100
    """Rolling-mean window length in samples."""

    fixed_value: float = 0.0
    """Constant baseline for ``baseline_mode='fixed'``."""

    # ==================== DIRECTION / OUTPUT ====================
    peak_direction: str = "positive"
    """Search for maxima (positive) or minima (negative)."""

    emit_plot: bool = False
    """Render a detection plot as a terminal, best-effort step."""

    def __post_init__(self) -> None:
        """Normalize and validate parameters after initialization.

        Raises
        ------
        InvalidConfiguration
            If any parameter is out of its valid range.
        """
        object.__setattr__(self, "local_max_span", normalize_span(self.local_max_span))

        fraction = float(self.threshold_fraction)
        if not 0.0 < fraction <= 1.0:
            msg = f"threshold_fraction must be in (0, 1], got {self.threshold_fraction}"
            raise InvalidConfiguration(msg)
        object.__setattr__(self, "threshold_fraction", fraction)

        mode = str(self.baseline_mode).strip().lower()
        mode = _BASELINE_MODE_ALIASES.get(mode, mode)
        if mode not in BASELINE_MODES:
            msg = f"baseline_mode must be one of {BASELINE_MODES}, got {self.baseline_mode!r}"
            raise InvalidConfiguration(msg)
        object.__setattr__(self, "baseline_mode", mode)

        if int(self.window_length) < 1:
            msg = f"window_length must be >= 1, got {self.window_length}"
            raise InvalidConfiguration(msg)
        object.__setattr__(self, "window_length", int(self.window_length))
        object.__setattr__(self, "fixed_value", float(self.fixed_value))

        quantile = self.outlier_quantile
        if quantile is False:
            quantile = None
        if quantile is not None:
            if isinstance(quantile, bool) or not 0.0 < float(quantile) < 1.0:
                msg = f"outlier_quantile must be a probability in (0, 1), got {quantile!r}"
                raise InvalidConfiguration(msg)
            quantile = float(quantile)
        object.__setattr__(self, "outlier_quantile", quantile)

        direction = str(self.peak_direction).strip().lower()
        if direction not in PEAK_DIRECTIONS:
            msg = f"peak_direction must be one of {PEAK_DIRECTIONS}, got {self.peak_direction!r}"
            raise InvalidConfiguration(msg)
        object.__setattr__(self, "peak_direction", direction)

    @property
    def sign(self) -> float:
        """``+1.0`` for positive peaks, ``-1.0`` for negative peaks."""
        return 1.0 if self.peak_direction == "positive" else -1.0

    @classmethod
    def from_options(cls, options: Any | None) -> DetectionConfig:
        """Construct a :class:`DetectionConfig` from a dict with alias support.

        Values that cannot be converted to the field type are skipped and the
        default is kept.  A numeric ``constant`` selects the ``fixed`` baseline
        with that value.  camelCase field names (``thresholdFraction``,
        ``localMaxSpan``, ...) are accepted; any other key is logged and
        ignored.

        Parameters
        ----------
        options : dict or None
            Dictionary of parameter values, optionally using short aliases
            (``LoM``, ``thresh``, ``constant``, ``w``, ``outlier``, ``peaks``,
            ``plot``).

        Returns
        -------
        DetectionConfig
            Validated configuration instance.

        Examples
        --------
        >>> cfg = DetectionConfig.from_options({"LoM": "6", "peaks": "negative"})
        >>> cfg.local_max_span, cfg.peak_direction
        (7, 'negative')
        """
        if not isinstance(options, dict) or not options:
            return cls()

        def _convert(value: Any, dtype: type) -> Any:
            if value is None:
                raise ValueError
            if dtype is bool:
                if isinstance(value, str):
                    return value.strip().lower() in {"1", "true", "yes", "on"}
                return bool(value)
            if dtype is int:
                return int(value)
            if dtype is float:
                return float(value)
            return dtype(value)

        aliases: dict[str, tuple[type, tuple[str, ...]]] = {
            "local_max_span": (int, ("local_max_span", "localMaxSpan", "LoM", "lom", "span")),
            "threshold_fraction": (float, ("threshold_fraction", "thresholdFraction", "thresh")),
            "window_length": (int, ("window_length", "windowLength", "rollingWindowLength", "w")),
            "fixed_value": (float, ("fixed_value", "fixedValue")),
            "peak_direction": (str, ("peak_direction", "peakDirection", "peaks")),
            "emit_plot": (bool, ("emit_plot", "emitPlot", "plot")),
        }

        data: dict[str, Any] = {}
        for field, (dtype, keys) in aliases.items():
            for key in keys:
                if key in options:
                    try:
                        value = _convert(options[key], dtype)
                    except (TypeError, ValueError):
                        continue
                    else:
                        data[field] = value
                        break

        baseline_keys = ("baseline_mode", "baselineMode", "constant")
        outlier_keys = ("outlier_quantile", "outlierQuantile", "outlier")
        known = {key for _, keys in aliases.values() for key in keys}
        known.update(baseline_keys, outlier_keys)
        unknown = [str(key) for key in options if key not in known]
        if unknown:
            logger.warning("Ignoring unknown detection options: %s", ", ".join(sorted(unknown)))

        for key in baseline_keys:
            if key not in options or options[key] is None:
                continue
            raw = options[key]
            if isinstance(raw, (int, float)) and not isinstance(raw, bool):
                data["baseline_mode"] = "fixed"
                data["fixed_value"] = float(raw)
            else:
                try:
                    data["fixed_value"] = float(raw)
                except (TypeError, ValueError):
                    data["baseline_mode"] = str(raw)
                else:
                    data["baseline_mode"] = "fixed"
            break

        for key in outlier_keys:
            if key not in options:
                continue
            raw = options[key]
            if raw is None or raw is False:
                data["outlier_quantile"] = None
            elif isinstance(raw, str) and raw.strip().lower() in _FALSE_STRINGS:
                data["outlier_quantile"] = None
            else:
                try:
                    data["outlier_quantile"] = float(raw)
                except (TypeError, ValueError):
                    continue
            break

        return cls(**data)

    def to_metadata(self) -> dict[str, Any]:
        """Serialize all fields to a plain dictionary.

        Returns
        -------
        dict
            All configuration fields as a JSON-serializable dictionary.
        """
        return asdict(self)
