"""
Ordinary least squares regression.

Public API:
    fit(y, X, ...) -> LinearSolution

The fit() function is the only entry point. It handles:
    - Data preparation (missing values, dummy encoding)
    - Design construction
    - Backend selection
    - Inference and multicollinearity diagnostics
    - Result wrapping

Example:
    >>> from pyols.regression import fit
    >>> result = fit(y, X)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pyols.regression.design import RegressionDesign
from pyols.regression.solution import LinearSolution
from pyols.regression.solvers import fit
from pyols.regression._common import (
    LinearParams,
    InferenceParams,
    DiagnosticsParams,
    AnovaTableRow,
    CorrelationPair,
    OLSParams,
)
from pyols.regression._distributions import t_cdf, t_two_sided_p, f_cdf, f_sf, t_critical

__all__ = [
    "fit",
    "RegressionDesign",
    "LinearSolution",
    "LinearParams",
    "InferenceParams",
    "DiagnosticsParams",
    "AnovaTableRow",
    "CorrelationPair",
    "OLSParams",
    "t_cdf",
    "t_two_sided_p",
    "f_cdf",
    "f_sf",
    "t_critical",
]
