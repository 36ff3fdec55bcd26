"""
Inference for OLS: standard errors, t and F tests, intervals, fit statistics.

Every function here is pure: it reads a LinearParams payload (and the
design dimensions) and returns new values. Nothing is cached.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyols.core.compute.tolerances import SUM_OF_SQUARES_TOLERANCE
from pyols.regression._common import (
    AnovaTableRow,
    InferenceParams,
    LinearParams,
    readonly,
)
from pyols.regression._distributions import f_sf, t_critical, t_two_sided_p


def r_squared(ssr: float, tss: float, sse: float, yy: float = 0.0) -> float:
    """
    Coefficient of determination SSR/TSS.

    yy is the uncentered y'y. When TSS is rounding noise relative to it
    (a constant response), R² is 1 if SSE is noise too and 0 otherwise.
    """
    noise = SUM_OF_SQUARES_TOLERANCE * yy
    if tss <= noise:
        return 1.0 if sse <= noise else 0.0
    return ssr / tss


def adjusted_r_squared(r2: float, n: int, df_residual: int, include_intercept: bool) -> float:
    """
    1 - (1 - R²)(n - 1)/df_residual.

    Without an intercept the sums are uncentered and n replaces n - 1.
    """
    n_eff = n - 1 if include_intercept else n
    return 1.0 - (1.0 - r2) * n_eff / df_residual


def log_likelihood(sse: float, n: int) -> float:
    """Gaussian log-likelihood at the MLE of sigma²: -n/2·(ln 2π + ln(SSE/n) + 1)."""
    with np.errstate(divide='ignore'):
        return float(-n / 2.0 * (np.log(2.0 * np.pi) + np.log(sse / n) + 1.0))


def information_criteria(loglik: float, n: int, k: int) -> tuple[float, float]:
    """(AIC, BIC) with k estimated coefficients."""
    aic = -2.0 * loglik + 2.0 * k
    bic = -2.0 * loglik + np.log(n) * k
    return float(aic), float(bic)


def coefficient_tests(
    coefficients: NDArray[np.floating[Any]],
    covariance: NDArray[np.floating[Any]],
    df_residual: int,
    alpha: float,
) -> tuple[NDArray, NDArray, NDArray, NDArray, NDArray, float]:
    """
    Standard errors, t statistics, p-values and confidence bounds.

    Returns:
        (se, t, p, lower, upper, t_crit)
    """
    # rounding can leave tiny negative diagonals on exact fits
    se = np.sqrt(np.clip(np.diag(covariance), 0.0, None))
    with np.errstate(divide='ignore', invalid='ignore'):
        t = coefficients / se
    p = np.asarray(t_two_sided_p(t, df_residual), dtype=np.float64)

    t_crit = t_critical(alpha / 2.0, df_residual)
    lower = coefficients - t_crit * se
    upper = coefficients + t_crit * se
    return se, t, p, lower, upper, t_crit


def f_test(ssr: float, sse: float, df_model: int, df_residual: int) -> tuple[float, float]:
    """Overall F statistic (MSR/MSE) and its upper-tail p-value."""
    msr = ssr / df_model
    mse = sse / df_residual
    if mse == 0:
        f = float('inf') if msr > 0 else float('nan')
    else:
        f = msr / mse
    return f, f_sf(f, df_model, df_residual)


def compute_inference(
    params: LinearParams,
    *,
    n: int,
    k: int,
    include_intercept: bool,
    alpha: float,
) -> InferenceParams:
    """
    Derive every inferential statistic from an estimation payload.

    Args:
        params: Backend output
        n: Number of observations
        k: Number of design columns
        include_intercept: Whether the model has an intercept
        alpha: Significance level for the confidence intervals

    Returns:
        InferenceParams
    """
    df_model = params.df_model
    df_residual = params.df_residual

    mse = params.sse / df_residual
    msr = params.ssr / df_model
    covariance = params.xtx_inverse * mse

    se, t, p, lower, upper, t_crit = coefficient_tests(
        params.coefficients, covariance, df_residual, alpha,
    )

    y = params.fitted_values + params.residuals
    r2 = r_squared(params.ssr, params.tss, params.sse, float(y @ y))
    f, f_p = f_test(params.ssr, params.sse, df_model, df_residual)
    loglik = log_likelihood(params.sse, n)
    aic, bic = information_criteria(loglik, n, k)

    return InferenceParams(
        standard_errors=readonly(se),
        t_statistics=readonly(t),
        p_values=readonly(p),
        conf_int_lower=readonly(lower),
        conf_int_upper=readonly(upper),
        covariance=readonly(covariance),
        alpha=alpha,
        t_critical=t_crit,
        r_squared=r2,
        adj_r_squared=adjusted_r_squared(r2, n, df_residual, include_intercept),
        mse=mse,
        msr=msr,
        rmse=float(np.sqrt(mse)),
        f_statistic=f,
        f_p_value=f_p,
        log_likelihood=loglik,
        aic=aic,
        bic=bic,
    )


def anova_table(
    params: LinearParams,
    inference: InferenceParams,
) -> tuple[AnovaTableRow, ...]:
    """Model / Residual / Total decomposition of the sum of squares."""
    return (
        AnovaTableRow(
            source='Model',
            df=params.df_model,
            sum_sq=params.ssr,
            mean_sq=inference.msr,
            f_value=inference.f_statistic,
            p_value=inference.f_p_value,
        ),
        AnovaTableRow(
            source='Residual',
            df=params.df_residual,
            sum_sq=params.sse,
            mean_sq=inference.mse,
            f_value=None,
            p_value=None,
        ),
        AnovaTableRow(
            source='Total',
            df=params.df_model + params.df_residual,
            sum_sq=params.tss,
            mean_sq=None,
            f_value=None,
            p_value=None,
        ),
    )


def significance_stars(p_value: float | None) -> str:
    """R-style significance code for a p-value."""
    if p_value is None or np.isnan(p_value):
        return ''
    if p_value < 0.001:
        return '***'
    if p_value < 0.01:
        return '**'
    if p_value < 0.05:
        return '*'
    if p_value < 0.1:
        return '.'
    return ''
