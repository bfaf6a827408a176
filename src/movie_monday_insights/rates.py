from __future__ import annotations

import numpy as np
import pandas as pd


def _to_float_array(values: pd.Series | np.ndarray) -> np.ndarray:
    if isinstance(values, pd.Series):
        return pd.to_numeric(values, errors="coerce").to_numpy(dtype=float)
    return np.asarray(values, dtype=float)


def rate_defined_mask(totals: pd.Series | np.ndarray) -> np.ndarray:
    n = _to_float_array(totals)
    return np.isfinite(n) & (n > 0.0)


def win_rate(
    wins: pd.Series | np.ndarray,
    totals: pd.Series | np.ndarray,
) -> np.ndarray:
    """Element-wise ``wins / totals``; NaN wherever the total is missing or zero."""
    n = _to_float_array(totals)
    k = _to_float_array(wins)

    rates = np.full(n.shape, np.nan, dtype=float)
    valid = rate_defined_mask(n) & np.isfinite(k)
    if not np.any(valid):
        return rates
    rates[valid] = np.clip(k[valid] / n[valid], 0.0, 1.0)
    return rates


def safe_ratio(numerator: int, denominator: int) -> float | None:
    if denominator <= 0:
        return None
    return numerator / denominator


def format_percent(ratio: float | None) -> str:
    if ratio is None:
        return "n/a"
    return f"{round(ratio * 100)}%"
