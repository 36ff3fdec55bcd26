"""
PyOLS: ordinary least squares regression with inference and diagnostics.

Fits y = Xβ + ε on raw, possibly incomplete columns: missing values are
dropped case-wise, categorical predictors are dummy-encoded, and every fit
comes back with standard errors, t and F tests, confidence intervals,
information criteria and variance inflation factors.

Submodules:
    core: Result envelope, exceptions, validation, linear algebra kernels
    preparation: Missing-value handling and dummy encoding
    regression: Design, backends, fit() and LinearSolution
"""

__version__ = "0.1.0"

from pyols import core
from pyols import preparation
from pyols import regression
from pyols.core import (
    DataSource,
    PyOLSError,
    ValidationError,
    ShapeError,
    MissingVariableError,
    InsufficientDataError,
    NumericalError,
    SingularMatrixError,
)
from pyols.preparation import Numeric, Categorical, prepare
from pyols.regression import fit, RegressionDesign, LinearSolution

__all__ = [
    "__version__",
    "core",
    "preparation",
    "regression",
    "fit",
    "RegressionDesign",
    "LinearSolution",
    "Numeric",
    "Categorical",
    "prepare",
    "DataSource",
    "PyOLSError",
    "ValidationError",
    "ShapeError",
    "MissingVariableError",
    "InsufficientDataError",
    "NumericalError",
    "SingularMatrixError",
]
