"""
Solver dispatch for regression.

This module provides the fit() function (public API) and backend selection.
"""

from __future__ import annotations

from typing import Any, Literal
import logging

from pyols.core.protocols import Backend
from pyols.core.result import Result
from pyols.core.compute.timing import Timer
from pyols.core.compute.tolerances import DEFAULT_ALPHA, PIVOT_TOLERANCE
from pyols.core.validation import check_alpha
from pyols.regression.design import RegressionDesign
from pyols.regression.solution import LinearSolution
from pyols.regression.backends.cpu import CPUGaussJordanBackend, CPUQRBackend
from pyols.regression._common import OLSParams
from pyols.regression._diagnostics import compute_diagnostics
from pyols.regression._inference import compute_inference

LOGGER = logging.getLogger(__name__)

# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_gj', 'cpu_qr']


def fit(
    y: Any,
    X: Any = None,
    *,
    include_intercept: bool = True,
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
    pivot_tol: float = PIVOT_TOLERANCE,
) -> LinearSolution:
    """
    Fit an ordinary least squares regression.

    Solves min_β ||y - Xβ||² on the complete cases of the input and
    computes inference and multicollinearity diagnostics in one pass.

    Args:
        y: Response values (None entries, blanks and NaN are missing), or a
            prebuilt RegressionDesign (then X must be omitted)
        X: Predictors: an (n, p) array, a sequence of columns, a mapping of
            name -> column, or Numeric/Categorical tagged columns
        include_intercept: Prepend a column of ones
        alpha: Significance level for confidence intervals, in (0, 1)
        backend: Computational backend:
            - 'auto' / 'cpu' / 'cpu_gj': normal equations, Gauss-Jordan
            - 'cpu_qr': QR decomposition of X
        pivot_tol: Smallest pivot magnitude Gauss-Jordan accepts on X'X
            scaled to unit diagonal

    Returns:
        LinearSolution with coefficients, inference, diagnostics and summary

    Raises:
        MissingVariableError: If the response or predictors are absent
        InsufficientDataError: If n < k + 2 or the model has no predictors
        ShapeError: If y and X lengths disagree
        SingularMatrixError: If X'X is singular (perfect multicollinearity)
        ValidationError: On invalid alpha or non-numeric input

    Example:
        >>> from pyols import fit, Numeric, Categorical
        >>> result = fit(
        ...     [2, 4, 6, 8, 10],
        ...     [Numeric('x', [1, 2, 3, 4, 5])],
        ... )
        >>> result.coefficients        # ≈ [0, 2]
        >>> print(result.summary())
    """
    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    alpha = check_alpha(alpha)

    timer = Timer()
    timer.start()

    # === Construct Design ===
    with timer.section('prepare'):
        if isinstance(y, RegressionDesign):
            if X is not None:
                raise ValueError("Pass either a RegressionDesign or (y, X), not both")
            design = y
        else:
            design = RegressionDesign.from_arrays(
                y, X, include_intercept=include_intercept,
            )

    # === Select Backend ===
    backend_impl = _get_backend(backend, pivot_tol=pivot_tol)
    LOGGER.debug(
        "Fitting %r on %d observations, %d parameters with %s",
        design.response_name, design.n, design.k, backend_impl.name,
    )

    # === Solve ===
    with timer.section('solve'):
        estimate = backend_impl.solve(design)

    with timer.section('inference'):
        inference = compute_inference(
            estimate.params,
            n=design.n,
            k=design.k,
            include_intercept=design.include_intercept,
            alpha=alpha,
        )

    with timer.section('diagnostics'):
        diagnostics, notes = compute_diagnostics(design, estimate.params, backend_impl)

    timer.stop()

    prepared = design.prepared
    info = dict(estimate.info)
    info['alpha'] = alpha
    info['n_total'] = prepared.n_total if prepared is not None else design.n
    info['n_dropped'] = prepared.n_dropped if prepared is not None else 0

    warnings = (prepared.warnings if prepared is not None else ()) + notes
    for note in notes:
        LOGGER.debug("Diagnostics: %s", note)

    result = Result(
        params=OLSParams(
            estimate=estimate.params,
            inference=inference,
            diagnostics=diagnostics,
        ),
        info=info,
        timing=timer.result(),
        backend_name=backend_impl.name,
        warnings=warnings,
    )

    # === Wrap and Return ===
    return LinearSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice, *, pivot_tol: float = PIVOT_TOLERANCE) -> Backend:
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference
        pivot_tol: Pivot tolerance for the Gauss-Jordan backend

    Returns:
        Backend instance ready to solve

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_gj'):
        return CPUGaussJordanBackend(pivot_tol=pivot_tol)

    elif choice == 'cpu_qr':
        return CPUQRBackend()

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
