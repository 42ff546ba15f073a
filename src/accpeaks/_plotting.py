"""Detection overlay plot.

matplotlib is imported lazily so the detector works without it; install the
``plot`` extra to render figures.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd


def plot_detection(
    timestamps: Any,
    values: np.ndarray,
    table: pd.DataFrame,
    support: dict[str, Any],
    *,
    ax: Any | None = None,
) -> Any:
    """Plot the signal with its baseline, cutoff, peaks and masked regions.

    Parameters
    ----------
    timestamps : array-like
        Sample times (x axis).
    values : numpy.ndarray
        Raw signal.
    table : pandas.DataFrame
        Peak table returned by :func:`accpeaks.detect_peaks`.
    support : dict
        Support dictionary returned alongside *table*.
    ax : matplotlib.axes.Axes or None, optional
        Axes to draw on; a new figure is created when omitted.

    Returns
    -------
    matplotlib.figure.Figure
        Figure holding the plot.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 4))
    else:
        fig = ax.figure

    x = pd.Series(timestamps).to_numpy()
    ax.plot(x, values, color="grey", lw=0.8, alpha=0.8, label="Signal")
    ax.plot(x, support["baseline_series"], color="C1", label="Baseline")
    ax.plot(x, support["cutoff_series"], "--", color="C3", label="Cutoff")

    masked = ~np.asarray(support["eligible_mask"], dtype=bool)
    if masked.any():
        ax.fill_between(
            x,
            0,
            1,
            where=masked,
            transform=ax.get_xaxis_transform(),
            color="0.85",
            alpha=0.5,
            step="mid",
            label="Masked",
        )

    marker = "rv" if support["detector_config"]["peak_direction"] == "positive" else "r^"
    ax.plot(
        table["timestamp"].to_numpy(),
        table["peak_amplitude"].to_numpy(),
        marker,
        markersize=6,
        label=f"Peaks ({len(table)})",
    )
    ax.set_xlabel("Time")
    ax.set_ylabel("Amplitude")
    ax.legend(loc="upper right", fontsize=8)
    return fig
