"""
Core infrastructure for PyOLS.

Shared abstractions used by data preparation and the regression engine.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Named-column DataSource
    compute: Timing, tolerances, linear algebra kernels
"""

from pyols.core.protocols import Backend
from pyols.core.result import Result
from pyols.core.datasource import DataSource
from pyols.core.exceptions import (
    PyOLSError,
    ValidationError,
    ShapeError,
    MissingVariableError,
    InsufficientDataError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Data
    "DataSource",
    # Exceptions
    "PyOLSError",
    "ValidationError",
    "ShapeError",
    "MissingVariableError",
    "InsufficientDataError",
    "NumericalError",
    "SingularMatrixError",
]
