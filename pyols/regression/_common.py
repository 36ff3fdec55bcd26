"""
Common data types for OLS regression.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container: no methods, no computation. Arrays
are marked read-only when a payload is built so a finished fit cannot be
altered in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


def readonly(array: NDArray) -> NDArray:
    """Return a read-only float64 copy of array."""
    out = np.array(array, dtype=np.float64, copy=True)
    out.flags.writeable = False
    return out


@dataclass(frozen=True)
class LinearParams:
    """
    Estimation payload produced by a backend.

    Sums of squares are taken about the mean when the model has an
    intercept and about zero when it does not; in both cases
    tss == ssr + sse up to rounding.
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    xtx_inverse: NDArray[np.floating[Any]]
    ssr: float          # explained (regression) sum of squares
    sse: float          # residual sum of squares
    tss: float          # total sum of squares
    rank: int
    df_model: int
    df_residual: int


@dataclass(frozen=True)
class InferenceParams:
    """Inference payload: tests, intervals, fit statistics."""
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    conf_int_lower: NDArray[np.floating[Any]]
    conf_int_upper: NDArray[np.floating[Any]]
    covariance: NDArray[np.floating[Any]]
    alpha: float
    t_critical: float
    r_squared: float
    adj_r_squared: float
    mse: float
    msr: float
    rmse: float
    f_statistic: float
    f_p_value: float
    log_likelihood: float
    aic: float
    bic: float


@dataclass(frozen=True)
class CorrelationPair:
    """Two predictor columns whose sample correlation crosses the flag threshold."""
    first: str
    second: str
    r: float
    perfect: bool


@dataclass(frozen=True)
class DiagnosticsParams:
    """
    Multicollinearity and residual diagnostics.

    vif is aligned with the design columns; the intercept entry is NaN.
    """
    vif: NDArray[np.floating[Any]]
    condition_number: float
    determinant: float
    durbin_watson: float
    lag1_autocorrelation: float
    leverage: NDArray[np.floating[Any]]
    press: float
    high_correlations: tuple[CorrelationPair, ...]


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of the regression ANOVA table."""
    source: str
    df: int
    sum_sq: float
    mean_sq: float | None     # None for the Total row
    f_value: float | None     # Model row only
    p_value: float | None     # Model row only


@dataclass(frozen=True)
class OLSParams:
    """Complete payload of one fit."""
    estimate: LinearParams
    inference: InferenceParams
    diagnostics: DiagnosticsParams
