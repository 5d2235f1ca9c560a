from __future__ import annotations

import numpy as np


def excel_round(x, decimals: int = 0):
    """Excel ROUND: half away from zero (vectorized)."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    return np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)


def round_half_up(x: float) -> int:
    """Scalar integer rounding with .5 going away from zero."""
    return int(excel_round(x, 0))


def order_statistic(sorted_values: np.ndarray, p: float, axis: int = 0) -> np.ndarray:
    """
    Percentile by sort-and-index: value at floor(n * p), no interpolation.

    `sorted_values` must already be sorted ascending along `axis`.
    """
    n = sorted_values.shape[axis]
    if n == 0:
        raise ValueError("Cannot take an order statistic of an empty sample.")
    idx = min(int(np.floor(n * p)), n - 1)
    return np.take(sorted_values, idx, axis=axis)


