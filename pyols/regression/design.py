"""
Regression Design.

Design takes prepared columns and builds the design matrix X (with the
optional intercept column) and the response y. It knows it's building a
regression; DataSource and data preparation don't.

Every check that does not need matrix work happens here, so a design
that exists is one a backend can attempt to solve.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import logging

import numpy as np
from numpy.typing import NDArray

from pyols.core.datasource import DataSource
from pyols.core.exceptions import InsufficientDataError, MissingVariableError
from pyols.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_residual_df,
)
from pyols.preparation import Numeric, Categorical, PreparedData, prepare

LOGGER = logging.getLogger(__name__)

INTERCEPT_NAME = '(Intercept)'


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix specification.

    Immutable after construction.

    Construction:
        RegressionDesign.from_arrays(y, X)                      # raw columns
        RegressionDesign.from_datasource(ds, y='sales',
                                         numeric=['price'],
                                         categorical=['region'])
        RegressionDesign.build(X, y)                            # clean arrays
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _k: int
    _include_intercept: bool
    _term_names: tuple[str, ...]
    _response_name: str
    _prepared: PreparedData | None = None

    @classmethod
    def from_arrays(
        cls,
        y: Any,
        X: Any,
        *,
        include_intercept: bool = True,
        response_name: str | None = None,
    ) -> RegressionDesign:
        """
        Build a design from raw response and predictor columns.

        Runs data preparation (dummy encoding, complete-case filtering)
        first; see pyols.preparation.prepare for the accepted layouts.
        """
        prepared = prepare(y, X, response_name=response_name)
        return cls.from_prepared(prepared, include_intercept=include_intercept)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        y: str | None,
        numeric: Sequence[str] = (),
        categorical: Sequence[str] = (),
        include_intercept: bool = True,
    ) -> RegressionDesign:
        """
        Build a design from named columns of a DataSource.

        Args:
            source: The DataSource
            y: Response column name
            numeric: Numeric predictor column names
            categorical: Categorical predictor column names
            include_intercept: Prepend a column of ones

        Raises:
            MissingVariableError: If y is unassigned, no predictors are
                named, or a named column is not in the source
        """
        available = source.keys()
        if y is None:
            raise MissingVariableError(
                "No response (Y) variable assigned", available=available,
            )
        if not numeric and not categorical:
            raise MissingVariableError(
                "No predictor (X) variables assigned", available=available,
            )
        for name in (y, *numeric, *categorical):
            if name not in source:
                raise MissingVariableError(
                    f"Column {name!r} not found. Available: {available}",
                    variable=name,
                    available=available,
                )

        columns = [Numeric(name, source[name]) for name in numeric]
        columns += [Categorical(name, source[name]) for name in categorical]
        return cls.from_arrays(
            Numeric(y, source[y]),
            columns,
            include_intercept=include_intercept,
        )

    @classmethod
    def from_prepared(
        cls,
        prepared: PreparedData,
        *,
        include_intercept: bool = True,
    ) -> RegressionDesign:
        """Build a design from the output of prepare()."""
        LOGGER.debug(
            "Design from %d complete cases (%d dropped), %d predictor column(s)",
            prepared.n, prepared.n_dropped, prepared.p,
        )
        return cls._build(
            prepared.X,
            prepared.y,
            include_intercept=include_intercept,
            column_names=prepared.column_names,
            response_name=prepared.response_name,
            prepared=prepared,
        )

    @classmethod
    def build(
        cls,
        X: Any,
        y: Any,
        *,
        include_intercept: bool = True,
        column_names: Sequence[str] | None = None,
        response_name: str = 'y',
    ) -> RegressionDesign:
        """
        Build a design directly from clean numeric arrays.

        No missing-value handling: X and y must be finite. X holds the
        predictors only; the intercept column is added here.
        """
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        return cls._build(
            X_arr,
            y_arr,
            include_intercept=include_intercept,
            column_names=column_names,
            response_name=response_name,
            prepared=None,
        )

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        *,
        include_intercept: bool,
        column_names: Sequence[str] | None,
        response_name: str,
        prepared: PreparedData | None,
    ) -> RegressionDesign:
        """Internal builder with validation."""
        check_2d(X, 'X')
        check_1d(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))
        check_finite(X, 'X')
        check_finite(y, 'y')

        n, p = X.shape
        if column_names is None:
            column_names = tuple(f"x{j + 1}" for j in range(p))
        column_names = tuple(column_names)
        if len(column_names) != p:
            raise ValueError(
                f"column_names has {len(column_names)} entries for {p} columns"
            )

        k = p + 1 if include_intercept else p
        check_residual_df(n, k)
        if k - (1 if include_intercept else 0) < 1:
            raise InsufficientDataError(
                "Model has no predictor columns (model degrees of freedom would be 0). "
                "A categorical predictor with a single level contributes no columns.",
                n_observations=n,
                n_parameters=k,
            )

        if include_intercept:
            X = np.column_stack([np.ones(n, dtype=np.float64), X])
            term_names = (INTERCEPT_NAME, *column_names)
        else:
            X = np.array(X, dtype=np.float64, copy=True)
            term_names = column_names

        X.flags.writeable = False
        y = np.array(y, dtype=np.float64, copy=True)
        y.flags.writeable = False

        return cls(
            _X=X,
            _y=y,
            _n=n,
            _k=k,
            _include_intercept=include_intercept,
            _term_names=term_names,
            _response_name=response_name,
            _prepared=prepared,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x k), intercept column first if present."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations (complete cases)."""
        return self._n

    @property
    def k(self) -> int:
        """Number of design columns (parameters), intercept included."""
        return self._k

    @property
    def p(self) -> int:
        """Number of predictor columns, intercept excluded."""
        return self._k - (1 if self._include_intercept else 0)

    @property
    def include_intercept(self) -> bool:
        return self._include_intercept

    @property
    def df_model(self) -> int:
        return self.p

    @property
    def df_residual(self) -> int:
        return self._n - self._k

    @property
    def term_names(self) -> tuple[str, ...]:
        """Labels of the design columns."""
        return self._term_names

    @property
    def response_name(self) -> str:
        return self._response_name

    @property
    def prepared(self) -> PreparedData | None:
        """Preparation record (rows kept/dropped, encodings), if available."""
        return self._prepared

    @property
    def predictor_slice(self) -> slice:
        """Columns of X holding predictors (everything but the intercept)."""
        return slice(1 if self._include_intercept else 0, self._k)

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y
