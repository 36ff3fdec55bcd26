"""
CPU backends for OLS regression.

CPUGaussJordanBackend solves the normal equations X'X β = X'y with the
Gauss-Jordan kernel. CPUQRBackend solves the same least-squares problem
through a QR factorization of X, which never forms X'X. Both return the
same LinearParams payload, so everything downstream is backend-agnostic.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyols.core.result import Result
from pyols.core.compute.timing import Timer
from pyols.core.compute.tolerances import PIVOT_TOLERANCE
from pyols.core.compute.linalg import invert, multiply, transpose, qr_solve, qr_xtx_inverse
from pyols.regression.design import RegressionDesign
from pyols.regression._common import LinearParams, readonly


def _sums_of_squares(
    y: NDArray[np.floating[Any]],
    fitted: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    include_intercept: bool,
) -> tuple[float, float, float]:
    """(SSR, SSE, TSS), centered on ȳ with an intercept, on zero without."""
    center = float(np.mean(y)) if include_intercept else 0.0
    ssr = float(np.sum((fitted - center) ** 2))
    sse = float(residuals @ residuals)
    tss = float(np.sum((y - center) ** 2))
    return ssr, sse, tss


def _params(
    design: RegressionDesign,
    coefficients: NDArray[np.floating[Any]],
    xtx_inverse: NDArray[np.floating[Any]],
    timer: Timer,
) -> LinearParams:
    with timer.section('residuals'):
        fitted_values = multiply(design.X, coefficients)
        residuals = design.y - fitted_values

    with timer.section('statistics'):
        ssr, sse, tss = _sums_of_squares(
            design.y, fitted_values, residuals, design.include_intercept,
        )

    return LinearParams(
        coefficients=readonly(coefficients),
        fitted_values=readonly(fitted_values),
        residuals=readonly(residuals),
        xtx_inverse=readonly(xtx_inverse),
        ssr=ssr,
        sse=sse,
        tss=tss,
        rank=design.k,
        df_model=design.df_model,
        df_residual=design.df_residual,
    )


def _equilibrated_inverse(
    XtX: NDArray[np.floating[Any]],
    tol: float,
) -> NDArray[np.floating[Any]]:
    """
    (X'X)⁻¹ via D·(D X'X D)⁻¹·D with D = diag(X'X)^(-1/2).

    The scaled matrix has a unit diagonal, so the pivot tolerance acts on
    correlation-like quantities and does not depend on the units of the
    predictors. An all-zero column keeps scale 1 and fails the pivot test.
    """
    d = np.sqrt(np.diag(XtX))
    d = np.where(d > 0, d, 1.0)
    outer = np.outer(d, d)
    inverse = invert(XtX / outer, tol=tol, name="X'X")
    return inverse / outer


class CPUGaussJordanBackend:
    """
    Normal-equations backend using Gauss-Jordan inversion.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    def __init__(self, pivot_tol: float = PIVOT_TOLERANCE):
        self._pivot_tol = pivot_tol

    @property
    def name(self) -> str:
        return 'cpu_gj'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via the normal equations.

        Algorithm:
            1. Form X'X and X'y
            2. Scale X'X to unit diagonal and invert it by Gauss-Jordan
               with partial pivoting, then undo the scaling
            3. β = (X'X)⁻¹ X'y
            4. Compute fitted values, residuals, and sums of squares

        Raises:
            SingularMatrixError: If the scaled X'X has a pivot below the
                tolerance
        """
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y

        with timer.section('normal_equations'):
            Xt = transpose(X)
            XtX = multiply(Xt, X)
            Xty = multiply(Xt, y)

        with timer.section('inversion'):
            XtX_inv = _equilibrated_inverse(XtX, self._pivot_tol)

        with timer.section('solve'):
            coefficients = multiply(XtX_inv, Xty)

        params = _params(design, coefficients, XtX_inv, timer)
        timer.stop()

        return Result(
            params=params,
            info={'method': 'gauss_jordan', 'rank': design.k, 'pivot_tol': self._pivot_tol},
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class CPUQRBackend:
    """
    Least-squares backend using Householder QR (LAPACK via NumPy).

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. Compute X = QR
            2. β = R⁻¹ Q'y
            3. (X'X)⁻¹ = R⁻¹ R⁻ᵀ for the covariance matrix

        Raises:
            SingularMatrixError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()

        with timer.section('qr_solve'):
            coefficients, qr_result = qr_solve(design.X, design.y)

        with timer.section('inversion'):
            XtX_inv = qr_xtx_inverse(qr_result)

        params = _params(design, coefficients, XtX_inv, timer)
        timer.stop()

        return Result(
            params=params,
            info={'method': 'qr', 'rank': qr_result.rank},
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
