"""
Dense matrix kernel: transpose, multiply, Gauss-Jordan inversion.

These are the primitives the normal-equations solver is built on.
Inversion works on the augmented matrix [M | I], eliminating column by
column with partial pivoting, so it handles any square size in O(n³)
time and O(n²) space.
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyols.core.exceptions import ShapeError, SingularMatrixError
from pyols.core.compute.tolerances import PIVOT_TOLERANCE
from pyols.core.validation import check_array, check_2d, check_square


def transpose(M: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Transpose of a 2D matrix.

    Returns a new contiguous array; the input is never aliased.
    """
    M = check_array(M, 'M')
    check_2d(M, 'M')
    return np.ascontiguousarray(M.T)


def multiply(A: ArrayLike, B: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Matrix product AB.

    A must be 2D. B may be 2D or 1D; a 1D B is treated as a column vector
    and the result is returned 1D.

    Raises:
        ShapeError: If the inner dimensions of A and B differ
    """
    A = check_array(A, 'A')
    B = check_array(B, 'B')
    check_2d(A, 'A')
    if B.ndim not in (1, 2):
        raise ShapeError(
            f"B: expected 1D or 2D array, got {B.ndim}D with shape {B.shape}",
            left_shape=A.shape,
            right_shape=B.shape,
        )

    if A.shape[1] != B.shape[0]:
        raise ShapeError(
            f"Cannot multiply {A.shape} by {B.shape}: "
            f"inner dimensions {A.shape[1]} and {B.shape[0]} differ",
            left_shape=A.shape,
            right_shape=B.shape,
        )
    return A @ B


def invert(
    M: ArrayLike,
    *,
    tol: float = PIVOT_TOLERANCE,
    name: str = 'M',
) -> NDArray[np.floating[Any]]:
    """
    Inverse of a square matrix by Gauss-Jordan elimination.

    Algorithm:
        1. Build the augmented matrix [M | I]
        2. For each column i, swap in the row (at or below i) with the
           largest |value| in that column (partial pivoting)
        3. Scale the pivot row so the pivot is 1
        4. Eliminate column i from every other row
        5. The right half is now M⁻¹

    Args:
        M: Square matrix (n x n)
        tol: Pivot magnitudes below this are treated as zero
        name: Matrix name used in error messages

    Returns:
        M⁻¹ as a new array

    Raises:
        ShapeError: If M is not square
        SingularMatrixError: If a pivot falls below tol
    """
    M = check_array(M, name)
    check_square(M, name)

    n = M.shape[0]
    augmented = np.hstack([M, np.eye(n, dtype=np.float64)])

    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(augmented[i:, i])))
        if pivot_row != i:
            augmented[[i, pivot_row]] = augmented[[pivot_row, i]]

        pivot = augmented[i, i]
        if abs(pivot) < tol:
            raise SingularMatrixError(
                f"{name} is singular or near-singular: pivot {abs(pivot):.3e} "
                f"at column {i} is below tolerance {tol:.1e}. "
                f"This usually indicates perfect multicollinearity among predictors.",
                matrix_name=name,
                pivot_index=i,
                pivot_value=float(abs(pivot)),
                expected_rank=n,
            )

        augmented[i] /= pivot

        factors = augmented[:, i].copy()
        factors[i] = 0.0
        augmented -= np.outer(factors, augmented[i])

    return augmented[:, n:].copy()
