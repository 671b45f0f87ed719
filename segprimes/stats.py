"""
Gap statistics over an enumerated run of primes, for the CLI --stats / --png outputs.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np


def prime_gaps(primes: Sequence[int]) -> np.ndarray:
    """Differences between consecutive primes (empty for fewer than two primes)."""
    if len(primes) < 2:
        return np.zeros(0, dtype=np.uint64)
    return np.diff(np.asarray(primes, dtype=np.uint64))


def gap_summary(primes: Sequence[int]) -> Dict[str, object]:
    """
    count, largest, gap_mean, gap_max and gap_histogram (gap -> frequency).
    Gap keys are strings so the dict can go straight into json.dump.
    """
    gaps = prime_gaps(primes)
    hist: Dict[str, int] = {}
    if gaps.size:
        values, freqs = np.unique(gaps, return_counts=True)
        hist = {str(int(v)): int(f) for v, f in zip(values, freqs)}
    return {
        "count": len(primes),
        "largest": int(primes[-1]) if len(primes) else None,
        "gap_mean": float(gaps.mean()) if gaps.size else None,
        "gap_max": int(gaps.max()) if gaps.size else None,
        "gap_histogram": hist,
    }


def save_gap_png(primes: Sequence[int], png_path: str, *, log_scale: bool = False) -> None:
    """Bar chart of the prime-gap histogram."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    gaps = prime_gaps(primes)
    xs: List[int] = []
    ys: List[int] = []
    if gaps.size:
        values, freqs = np.unique(gaps, return_counts=True)
        xs = [int(v) for v in values]
        ys = [int(f) for f in freqs]

    plt.figure(figsize=(7, 4), dpi=150)
    ax = plt.gca()
    if xs:
        ax.bar(xs, ys, width=1.6, color="tab:blue", alpha=0.85)
    if log_scale:
        ax.set_yscale("log")
    ax.grid(True, which="major", color="0.85", linewidth=0.6)
    plt.xlabel("gap", fontsize=9)
    plt.ylabel("frequency", fontsize=9)
    largest = primes[-1] if len(primes) else 0
    plt.title(f"Prime gaps: {len(primes)} primes up to {largest}", fontsize=11)
    plt.tight_layout()
    plt.savefig(png_path, dpi=150)
    plt.close()
