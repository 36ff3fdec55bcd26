"""
Tests for the CPU regression backends.

Gauss-Jordan (normal equations) and QR must agree on well-conditioned
problems and both must reject singular designs.
"""

import numpy as np
import pytest

from pyols import fit
from pyols.core.compute.tolerances import CPU_FP64, select_tolerance
from pyols.core.exceptions import SingularMatrixError
from pyols.regression import RegressionDesign
from pyols.regression.backends import CPUGaussJordanBackend, CPUQRBackend


class TestBackendAgreement:

    def test_coefficients_agree(self, simple_regression_data):
        X, y, _ = simple_regression_data
        gj = fit(y, X, backend='cpu_gj')
        qr = fit(y, X, backend='cpu_qr')
        tol = select_tolerance(gj.diagnostics.condition_number)
        assert tol is CPU_FP64
        np.testing.assert_allclose(gj.coefficients, qr.coefficients, rtol=tol.rtol, atol=tol.atol)
        np.testing.assert_allclose(gj.standard_errors, qr.standard_errors, rtol=1e-8)
        np.testing.assert_allclose(gj.vif, qr.vif, rtol=1e-8)
        assert gj.sse == pytest.approx(qr.sse, rel=1e-10)

    @pytest.mark.parametrize("choice, name", [
        ('auto', 'cpu_gj'), ('cpu', 'cpu_gj'), ('cpu_gj', 'cpu_gj'), ('cpu_qr', 'cpu_qr'),
    ])
    def test_backend_selection(self, simple_regression_data, choice, name):
        X, y, _ = simple_regression_data
        assert fit(y, X, backend=choice).backend_name == name

    def test_qr_rejects_collinear(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(SingularMatrixError):
            fit(y, X, backend='cpu_qr')


class TestGaussJordanBackend:

    def test_info(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = CPUGaussJordanBackend().solve(RegressionDesign.build(X, y))
        assert result.info['method'] == 'gauss_jordan'
        assert result.info['rank'] == 4
        assert result.backend_name == 'cpu_gj'
        assert 'inversion' in result.timing

    def test_pivot_tolerance_forwarded(self, rng):
        x1 = rng.standard_normal(40)
        X = np.column_stack([x1, x1 + 1e-3 * rng.standard_normal(40)])
        y = rng.standard_normal(40)
        fit(y, X)
        with pytest.raises(SingularMatrixError):
            fit(y, X, pivot_tol=1e-3)

    def test_collinearity_detected_at_large_scale(self, rng):
        x1 = rng.uniform(1000, 5000, 50)
        x2 = rng.uniform(1000, 5000, 50)
        X = np.column_stack([x1, x2, x1 + x2])
        with pytest.raises(SingularMatrixError):
            fit(rng.standard_normal(50), X)

    @pytest.mark.parametrize("scale", [1e-6, 1e6])
    def test_singularity_verdict_ignores_units(self, rng, scale):
        X = rng.standard_normal((50, 2))
        y = 1.0 + X @ [0.5, -1.0] + 0.1 * rng.standard_normal(50)
        base = fit(y, X)
        scaled = fit(y, X * scale)
        np.testing.assert_allclose(scaled.coefficients[1:] * scale, base.coefficients[1:], rtol=1e-8)
        assert scaled.r_squared == pytest.approx(base.r_squared, rel=1e-10)

    def test_xtx_inverse_in_payload(self, simple_regression_data):
        X, y, _ = simple_regression_data
        design = RegressionDesign.build(X, y)
        params = CPUGaussJordanBackend().solve(design).params
        np.testing.assert_allclose(params.xtx_inverse @ design.XtX(), np.eye(4), atol=1e-10)


class TestQRBackend:

    def test_info(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = CPUQRBackend().solve(RegressionDesign.build(X, y))
        assert result.info['method'] == 'qr'
        assert result.info['rank'] == 4
