"""
Multicollinearity and residual diagnostics.

VIF_j = 1 / (1 - R²_j), where R²_j comes from regressing predictor j on
the other predictors with the same backend that fitted the main model
(intercept included when the main model has one). A singular auxiliary
regression gives NaN for that column and a warning; it never aborts the
fit.
"""

from __future__ import annotations

from typing import Any
import logging

import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import SingularMatrixError
from pyols.core.protocols import Backend
from pyols.core.compute.tolerances import (
    HIGH_CORRELATION,
    PERFECT_CORRELATION,
    VIF_HIGH,
    VIF_MODERATE,
)
from pyols.regression.design import RegressionDesign
from pyols.regression._common import (
    CorrelationPair,
    DiagnosticsParams,
    LinearParams,
    readonly,
)

LOGGER = logging.getLogger(__name__)


def variance_inflation_factors(
    design: RegressionDesign,
    backend: Backend,
) -> tuple[NDArray[np.floating[Any]], tuple[str, ...]]:
    """
    VIF for every design column.

    Args:
        design: The main-model design
        backend: Backend used for the auxiliary regressions

    Returns:
        (vif, notes): vif aligned with design.X columns (NaN for the
        intercept), notes describing any column whose auxiliary
        regression was singular or whose VIF is infinite
    """
    vif = np.full(design.k, np.nan, dtype=np.float64)
    notes: list[str] = []

    start = design.predictor_slice.start
    predictors = list(range(start, design.k))

    if len(predictors) == 1:
        vif[predictors[0]] = 1.0
        return vif, ()

    for j in predictors:
        others = [c for c in predictors if c != j]
        name = design.term_names[j]
        aux = RegressionDesign.build(
            design.X[:, others],
            design.X[:, j],
            include_intercept=design.include_intercept,
            column_names=[design.term_names[c] for c in others],
            response_name=name,
        )
        try:
            params = backend.solve(aux).params
        except SingularMatrixError as e:
            LOGGER.debug("Auxiliary regression for %r is singular: %s", name, e)
            notes.append(f"VIF undefined for {name!r}: auxiliary regression is singular")
            continue

        vif[j] = _vif_from_r_squared(params)
        if np.isinf(vif[j]):
            notes.append(
                f"VIF infinite for {name!r}: it is an exact linear combination of the other predictors"
            )

    return vif, tuple(notes)


def _vif_from_r_squared(params: LinearParams) -> float:
    if params.tss == 0:
        return float('nan')
    r2 = params.ssr / params.tss
    if r2 >= 1.0:
        return float('inf')
    return max(1.0, 1.0 / (1.0 - r2))


def vif_severity(vif: float) -> str:
    """'high' above 10, 'moderate' above 5, 'ok' otherwise, 'undefined' for NaN."""
    if np.isnan(vif):
        return 'undefined'
    if vif > VIF_HIGH:
        return 'high'
    if vif > VIF_MODERATE:
        return 'moderate'
    return 'ok'


def durbin_watson(residuals: NDArray[np.floating[Any]]) -> float:
    """Σ(e_t - e_{t-1})² / Σe_t². NaN when every residual is zero."""
    denom = float(residuals @ residuals)
    if denom == 0:
        return float('nan')
    diff = np.diff(residuals)
    return float(diff @ diff) / denom


def lag1_autocorrelation(residuals: NDArray[np.floating[Any]]) -> float:
    """Lag-1 sample autocorrelation of the residual series."""
    centered = residuals - residuals.mean()
    denom = float(centered @ centered)
    if denom == 0 or len(residuals) < 2:
        return float('nan')
    return float(centered[1:] @ centered[:-1]) / denom


def leverage(
    X: NDArray[np.floating[Any]],
    xtx_inverse: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Diagonal of the hat matrix, h_ii = x_i' (X'X)⁻¹ x_i."""
    return np.einsum('ij,jk,ik->i', X, xtx_inverse, X)


def press_statistic(
    residuals: NDArray[np.floating[Any]],
    hat: NDArray[np.floating[Any]],
) -> float:
    """Leave-one-out prediction error Σ(e_i / (1 - h_ii))²."""
    with np.errstate(divide='ignore', invalid='ignore'):
        loo = residuals / (1.0 - hat)
    return float(np.sum(loo ** 2))


def correlated_pairs(
    design: RegressionDesign,
    *,
    threshold: float = HIGH_CORRELATION,
    perfect: float = PERFECT_CORRELATION,
) -> tuple[CorrelationPair, ...]:
    """Predictor pairs with |r| >= threshold; constant columns are skipped."""
    cols = list(range(design.predictor_slice.start, design.k))
    if len(cols) < 2:
        return ()

    X = design.X[:, cols]
    centered = X - X.mean(axis=0)
    norms = np.sqrt(np.sum(centered ** 2, axis=0))

    pairs: list[CorrelationPair] = []
    for a in range(len(cols)):
        for b in range(a + 1, len(cols)):
            if norms[a] == 0 or norms[b] == 0:
                continue
            r = float(centered[:, a] @ centered[:, b]) / (norms[a] * norms[b])
            if abs(r) >= threshold:
                pairs.append(CorrelationPair(
                    first=design.term_names[cols[a]],
                    second=design.term_names[cols[b]],
                    r=r,
                    perfect=abs(r) >= perfect,
                ))
    return tuple(pairs)


def compute_diagnostics(
    design: RegressionDesign,
    params: LinearParams,
    backend: Backend,
) -> tuple[DiagnosticsParams, tuple[str, ...]]:
    """
    Full diagnostics bundle for a fitted design.

    Returns:
        (DiagnosticsParams, notes) where notes are non-fatal warnings
    """
    vif, notes = variance_inflation_factors(design, backend)

    XtX = design.XtX()
    hat = leverage(design.X, params.xtx_inverse)

    diagnostics = DiagnosticsParams(
        vif=readonly(vif),
        condition_number=float(np.linalg.cond(XtX)),
        determinant=float(np.linalg.det(XtX)),
        durbin_watson=durbin_watson(params.residuals),
        lag1_autocorrelation=lag1_autocorrelation(params.residuals),
        leverage=readonly(hat),
        press=press_statistic(params.residuals, hat),
        high_correlations=correlated_pairs(design),
    )
    return diagnostics, notes
