#!/usr/bin/env python3
"""Parameter tuning: sweep threshold_fraction and local_max_span.

Lower thresholds and narrower windows admit more peaks (including noise);
higher thresholds and wider windows are more selective.
"""

import numpy as np

from accpeaks import detect_peaks

rng = np.random.default_rng(42)
fs = 50.0
timestamps = np.arange(0, 30, 1 / fs)
acc = 0.6 * np.sin(2 * np.pi * 1.5 * timestamps) + rng.normal(0, 0.15, size=timestamps.size)
acc[700] = 4.0  # a single impact

print(f"{'thresh':>6}  {'LoM':>4}  {'outlier':>7}  {'Peaks':>5}  Mean period (s)")
print("-" * 50)

for thresh in [0.2, 0.5, 0.8]:
    for lom in [5, 11, 21]:
        for outlier in [False, 0.99]:
            table = detect_peaks(
                timestamps,
                acc,
                config={"thresh": thresh, "LoM": lom, "outlier": outlier},
            )
            period = table["peak_period"].mean()
            print(f"{thresh:6.1f}  {lom:4d}  {outlier!s:>7}  {len(table):5d}  {period:.3f}")
