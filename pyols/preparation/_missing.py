"""
Missing-value rules and complete-case filtering.

A cell is missing when it is None, an empty or whitespace-only string,
NaN, or a pandas NA/NaT scalar. For numeric columns, a cell that
cannot be coerced to float is missing as well. Rows with any missing
value among the fitted columns are dropped (listwise deletion);
nothing is imputed.
"""

from __future__ import annotations

from typing import Any, Sequence
import math
import numpy as np
from numpy.typing import NDArray


def is_missing(value: Any) -> bool:
    """True for None, blank strings, float NaN, and pandas NA/NaT scalars."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    if isinstance(value, (int, np.integer, bool, np.bool_)):
        return False
    # pd.NaT is unequal to itself; pd.NA has no truth value
    try:
        return bool(value != value)
    except TypeError:
        return True


def coerce_numeric(values: Sequence[Any]) -> NDArray[np.floating[Any]]:
    """
    Convert raw cells to float64, mapping missing or non-numeric cells to NaN.

    Numeric numpy arrays take a vectorized path; anything else is
    converted cell by cell.
    """
    if isinstance(values, np.ndarray) and np.issubdtype(values.dtype, np.number):
        return values.astype(np.float64)

    out = np.empty(len(values), dtype=np.float64)
    for i, value in enumerate(values):
        out[i] = _to_float(value)
    return out


def _to_float(value: Any) -> float:
    if is_missing(value):
        return np.nan
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return np.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return np.nan


def complete_case_mask(
    y: NDArray[np.floating[Any]],
    X: NDArray[np.floating[Any]],
) -> NDArray[np.bool_]:
    """
    Rows where the response and every encoded predictor are observed.

    Args:
        y: (n,) response with NaN for missing
        X: (n, p) encoded predictors with NaN for missing

    Returns:
        (n,) boolean mask of complete cases
    """
    mask = ~np.isnan(y)
    if X.shape[1] > 0:
        mask &= ~np.any(np.isnan(X), axis=1)
    return mask
