#!/usr/bin/env python3
"""Visualization: signal, baseline, cutoff and detected troughs.

Requires matplotlib: pip install accpeaks[plot]
"""

import numpy as np

from accpeaks import detect_peaks, plot_detection

# Drifting signal with periodic dips, detected as negative peaks against a
# rolling-mean baseline
rng = np.random.default_rng(123)
fs = 20.0
timestamps = np.arange(0, 40, 1 / fs)
signal = 0.02 * timestamps - 0.8 * np.exp(-((timestamps % 2.0 - 1.0) ** 2) / 0.01)
signal += rng.normal(0, 0.03, size=timestamps.size)
marked = np.where((timestamps > 15) & (timestamps < 20), 0, 1)

config = {
    "LoM": 15,
    "thresh": 0.5,
    "constant": "rolling_mean",
    "w": 60,
    "peaks": "negative",
}

table, support = detect_peaks(timestamps, signal, marked, config=config, return_support=True)

try:
    import matplotlib.pyplot as plt
except ImportError:
    print("matplotlib not installed. Install with: pip install accpeaks[plot]")
    raise SystemExit(1) from None

fig = plot_detection(timestamps, signal, table, support)
fig.axes[0].set_title("Negative peak detection with rolling-mean baseline")
fig.tight_layout()
fig.savefig("accpeaks_visualization.png", dpi=150, bbox_inches="tight")
print(f"Saved accpeaks_visualization.png ({len(table)} peaks detected)")
plt.close(fig)
