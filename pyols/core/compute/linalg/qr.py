"""
QR decomposition for least squares.

Alternative to the normal equations: solving R β = Q'y never forms X'X,
so it loses half as many digits on ill-conditioned designs. Used by the
'cpu_qr' regression backend.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pyols.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class QRResult:
    """
    Result of a reduced QR decomposition.

    Attributes:
        Q: Orthonormal columns (n x p)
        R: Upper triangular matrix (p x p)
        rank: Numerical rank determined from the R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def qr_decompose(X: NDArray[np.floating[Any]]) -> QRResult:
    """
    Reduced QR decomposition using LAPACK (via NumPy).

    Computes X = QR where Q has orthonormal columns and R is upper triangular.

    Args:
        X: Matrix to decompose (n x p), n >= p

    Returns:
        QRResult with Q, R, and numerical rank
    """
    Q, R = np.linalg.qr(X, mode='reduced')

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R.max() > 0:
        tol = max(X.shape) * np.finfo(X.dtype).eps * diag_R.max()
        rank = int(np.sum(diag_R > tol))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, rank=rank)


def _check_full_rank(qr_result: QRResult, p: int) -> None:
    if qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p,
        )


def qr_solve(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], QRResult]:
    """
    Solve least squares via QR decomposition.

    Solves min_β ||y - Xβ||² as β = R⁻¹ Q'y.

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)

    Returns:
        (beta, qr_result) so callers can reuse R for the covariance

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    p = X.shape[1]
    qr_result = qr_decompose(X)
    _check_full_rank(qr_result, p)

    Qty = qr_result.Q.T @ y
    beta = solve_triangular(qr_result.R, Qty, lower=False)
    return beta, qr_result


def qr_xtx_inverse(qr_result: QRResult) -> NDArray[np.floating[Any]]:
    """
    (X'X)⁻¹ from the R factor: (R'R)⁻¹ = R⁻¹ R⁻ᵀ.

    Raises:
        SingularMatrixError: If R is rank-deficient
    """
    p = qr_result.R.shape[1]
    _check_full_rank(qr_result, p)
    R_inv = solve_triangular(qr_result.R, np.eye(p), lower=False)
    return R_inv @ R_inv.T
