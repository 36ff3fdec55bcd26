"""
Tests for the PyOLS exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyOLSError)
    - Diagnostic attributes on ShapeError, MissingVariableError,
      InsufficientDataError, SingularMatrixError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pyols.core.exceptions import (
    InsufficientDataError,
    MissingVariableError,
    NumericalError,
    PyOLSError,
    ShapeError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyOLSError."""

    @pytest.mark.parametrize("exc", [
        ValidationError, ShapeError, MissingVariableError,
        InsufficientDataError, NumericalError, SingularMatrixError,
    ])
    def test_catchable_as_base(self, exc):
        with pytest.raises(PyOLSError):
            raise exc("failure")

    @pytest.mark.parametrize("exc", [ShapeError, MissingVariableError, InsufficientDataError])
    def test_input_errors_are_validation_errors(self, exc):
        assert issubclass(exc, ValidationError)
        assert not issubclass(exc, NumericalError)

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_singular_matrix_error_is_not_validation_error(self):
        assert not isinstance(SingularMatrixError("singular"), ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestShapeError:

    def test_attributes(self):
        err = ShapeError("cannot multiply", left_shape=(3, 2), right_shape=(4,))
        assert str(err) == "cannot multiply"
        assert err.left_shape == (3, 2)
        assert err.right_shape == (4,)

    def test_defaults_are_none(self):
        err = ShapeError("bad shape")
        assert err.left_shape is None
        assert err.right_shape is None


class TestMissingVariableError:

    def test_attributes(self):
        err = MissingVariableError("not found", variable="price", available=("sales",))
        assert err.variable == "price"
        assert err.available == ("sales",)

    def test_defaults_are_none(self):
        err = MissingVariableError("No response (Y) variable assigned")
        assert err.variable is None
        assert err.available is None


class TestInsufficientDataError:

    def test_attributes(self):
        err = InsufficientDataError("too few rows", n_observations=5, n_parameters=5)
        assert err.n_observations == 5
        assert err.n_parameters == 5


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "X'X is singular",
            matrix_name="X'X",
            pivot_index=2,
            pivot_value=1e-14,
            rank=2,
            expected_rank=3,
        )
        assert str(err) == "X'X is singular"
        assert err.matrix_name == "X'X"
        assert err.pivot_index == 2
        assert err.pivot_value == 1e-14
        assert err.rank == 2
        assert err.expected_rank == 3

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.pivot_value is None
        assert err.rank is None
        assert err.expected_rank is None

    def test_catchable_with_attributes(self):
        """Attributes accessible in except block."""
        with pytest.raises(SingularMatrixError) as exc_info:
            raise SingularMatrixError("singular", matrix_name="A", pivot_index=0)
        assert exc_info.value.matrix_name == "A"
        assert exc_info.value.pivot_index == 0
