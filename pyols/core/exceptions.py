"""
Exception hierarchy for PyOLS.

All exceptions inherit from PyOLSError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyOLSError(Exception):
    """Base exception for all PyOLS errors."""
    pass


class ValidationError(PyOLSError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class ShapeError(ValidationError):
    """
    Matrix or vector dimensions are incorrect or inconsistent.

    Raised when an algebraic operation receives operands whose shapes
    do not conform, or when arrays that must align have different lengths.

    Attributes:
        left_shape: Shape of the first operand, if applicable
        right_shape: Shape of the second operand, if applicable
    """

    def __init__(
        self,
        message: str,
        left_shape: tuple[int, ...] | None = None,
        right_shape: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.left_shape = left_shape
        self.right_shape = right_shape


class MissingVariableError(ValidationError):
    """
    A required response or predictor column is absent or unassigned.

    Attributes:
        variable: Name of the missing variable, or None if unassigned
        available: Column names that were available, if known
    """

    def __init__(
        self,
        message: str,
        variable: str | None = None,
        available: tuple[str, ...] | None = None,
    ):
        super().__init__(message)
        self.variable = variable
        self.available = available


class InsufficientDataError(ValidationError):
    """
    Too few observations for the number of model parameters.

    Raised before any matrix work when the residual degrees of freedom
    would be too small to estimate the error variance.

    Attributes:
        n_observations: Number of complete observations
        n_parameters: Number of design matrix columns (k)
    """

    def __init__(
        self,
        message: str,
        n_observations: int | None = None,
        n_parameters: int | None = None,
    ):
        super().__init__(message)
        self.n_observations = n_observations
        self.n_parameters = n_parameters


class NumericalError(PyOLSError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient. For the normal equations
    this almost always means perfect multicollinearity.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step at which the pivot vanished
        pivot_value: Magnitude of the offending pivot
        rank: Numerical rank, if computed
        expected_rank: Expected rank (number of columns)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value
        self.rank = rank
        self.expected_rank = expected_rank
