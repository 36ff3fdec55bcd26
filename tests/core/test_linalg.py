"""
Tests for the dense linear algebra kernels.

Gauss-Jordan results are checked against numpy.linalg; QR results
against the normal-equation solution.
"""

import numpy as np
import pytest

from pyols.core.exceptions import ShapeError, SingularMatrixError
from pyols.core.compute.linalg import (
    invert,
    multiply,
    qr_decompose,
    qr_solve,
    qr_xtx_inverse,
    transpose,
)


# ═══════════════════════════════════════════════════════════════════════
# transpose / multiply
# ═══════════════════════════════════════════════════════════════════════


class TestTransposeMultiply:

    def test_transpose(self):
        M = np.arange(6.0).reshape(2, 3)
        T = transpose(M)
        assert T.shape == (3, 2)
        np.testing.assert_array_equal(T, M.T)

    def test_transpose_does_not_alias(self):
        M = np.arange(4.0).reshape(2, 2)
        T = transpose(M)
        T[0, 0] = 99.0
        assert M[0, 0] == 0.0

    def test_multiply_matches_numpy(self, rng):
        A = rng.standard_normal((4, 3))
        B = rng.standard_normal((3, 5))
        np.testing.assert_allclose(multiply(A, B), A @ B, rtol=1e-14)

    def test_multiply_vector(self):
        A = np.array([[1.0, 2.0], [3.0, 4.0]])
        np.testing.assert_array_equal(multiply(A, [1.0, 1.0]), [3.0, 7.0])

    def test_inner_dimension_mismatch(self):
        with pytest.raises(ShapeError) as exc_info:
            multiply(np.zeros((2, 3)), np.zeros((2, 2)))
        assert exc_info.value.left_shape == (2, 3)
        assert exc_info.value.right_shape == (2, 2)


# ═══════════════════════════════════════════════════════════════════════
# Gauss-Jordan inversion
# ═══════════════════════════════════════════════════════════════════════


class TestInvert:

    def test_identity(self):
        np.testing.assert_array_equal(invert(np.eye(4)), np.eye(4))

    def test_matches_numpy(self, rng):
        A = rng.standard_normal((6, 6))
        M = A @ A.T + np.eye(6)
        np.testing.assert_allclose(invert(M), np.linalg.inv(M), rtol=1e-10, atol=1e-12)

    def test_inverse_times_matrix_is_identity(self, rng):
        M = rng.standard_normal((5, 5)) + 5 * np.eye(5)
        np.testing.assert_allclose(invert(M) @ M, np.eye(5), atol=1e-10)

    def test_needs_row_swap(self):
        """Zero on the leading diagonal is handled by partial pivoting."""
        M = np.array([[0.0, 1.0], [1.0, 0.0]])
        np.testing.assert_array_equal(invert(M), M)

    def test_input_not_modified(self):
        M = np.array([[2.0, 1.0], [1.0, 3.0]])
        original = M.copy()
        invert(M)
        np.testing.assert_array_equal(M, original)

    def test_singular_raises(self):
        M = np.array([[1.0, 2.0], [2.0, 4.0]])
        with pytest.raises(SingularMatrixError, match="multicollinearity") as exc_info:
            invert(M, name="X'X")
        err = exc_info.value
        assert err.matrix_name == "X'X"
        assert err.pivot_index == 1
        assert err.expected_rank == 2

    def test_tolerance_is_configurable(self):
        M = np.diag([1.0, 1e-6])
        invert(M)
        with pytest.raises(SingularMatrixError):
            invert(M, tol=1e-5)

    def test_non_square_raises(self):
        with pytest.raises(ShapeError):
            invert(np.zeros((2, 3)))


# ═══════════════════════════════════════════════════════════════════════
# QR
# ═══════════════════════════════════════════════════════════════════════


class TestQR:

    def test_decomposition_reconstructs(self, rng):
        X = rng.standard_normal((20, 4))
        qr = qr_decompose(X)
        assert qr.rank == 4
        np.testing.assert_allclose(qr.Q @ qr.R, X, atol=1e-12)

    def test_solve_matches_normal_equations(self, rng):
        X = rng.standard_normal((50, 3))
        y = rng.standard_normal(50)
        beta, _ = qr_solve(X, y)
        expected = np.linalg.solve(X.T @ X, X.T @ y)
        np.testing.assert_allclose(beta, expected, rtol=1e-10)

    def test_xtx_inverse(self, rng):
        X = rng.standard_normal((40, 3))
        _, qr = qr_solve(X, rng.standard_normal(40))
        np.testing.assert_allclose(
            qr_xtx_inverse(qr), np.linalg.inv(X.T @ X), rtol=1e-10,
        )

    def test_rank_deficient_raises(self, rng):
        x = rng.standard_normal(30)
        X = np.column_stack([x, 2 * x])
        with pytest.raises(SingularMatrixError) as exc_info:
            qr_solve(X, rng.standard_normal(30))
        assert exc_info.value.rank == 1
        assert exc_info.value.expected_rank == 2
