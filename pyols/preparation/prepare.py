"""
Data preparation: tagged raw columns in, clean float arrays out.

Pipeline:
    1. Coerce the response and numeric predictors to float (NaN = missing)
    2. Dummy-encode categorical predictors (missing labels propagate as NaN)
    3. Keep only complete cases across the response and every encoded column
    4. Drop indicator columns whose level survived in no retained row

Column order in the output is numeric predictors first, then indicator
columns in the order the categorical variables were given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import logging
import warnings

import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import MissingVariableError, ShapeError, ValidationError
from pyols.preparation._columns import Numeric, Categorical, as_columns
from pyols.preparation._encoding import DummyEncoding, encode_dummies
from pyols.preparation._missing import coerce_numeric, complete_case_mask

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedData:
    """
    Cleaned response and predictor matrix ready for a design.

    Attributes:
        y: (n,) response, complete cases only
        X: (n, p) predictors, complete cases only (p may be 0)
        column_names: p column labels aligned with X
        response_name: Label of the response
        numeric_names: Names of the numeric predictors
        categorical_names: Names of the categorical predictors
        encodings: One DummyEncoding per categorical predictor
        rows: Indices of the retained rows in the raw input
        n_total: Rows in the raw input
        warnings: Non-fatal issues found while preparing
    """
    y: NDArray[np.floating[Any]]
    X: NDArray[np.floating[Any]]
    column_names: tuple[str, ...]
    response_name: str
    numeric_names: tuple[str, ...]
    categorical_names: tuple[str, ...]
    encodings: tuple[DummyEncoding, ...]
    rows: NDArray[np.intp]
    n_total: int
    warnings: tuple[str, ...] = ()

    @property
    def n(self) -> int:
        """Number of complete cases."""
        return len(self.y)

    @property
    def p(self) -> int:
        """Number of predictor columns after encoding."""
        return self.X.shape[1]

    @property
    def n_dropped(self) -> int:
        """Rows excluded for missing values."""
        return self.n_total - self.n


def prepare(
    y: Any,
    X: Any,
    *,
    response_name: str | None = None,
) -> PreparedData:
    """
    Turn raw response and predictor columns into complete-case arrays.

    Args:
        y: Response cells (a Numeric column or any 1D sequence; None/''/NaN
           count as missing)
        X: Predictor columns in any layout accepted by as_columns()
        response_name: Label for the response; defaults to the Numeric
           column's name, else 'y'

    Returns:
        PreparedData

    Raises:
        MissingVariableError: If the response or all predictors are absent
        ShapeError: If columns differ in length
        ValidationError: If a response column is declared Categorical
    """
    if y is None:
        raise MissingVariableError("No response (Y) variable assigned")

    if isinstance(y, Categorical):
        raise ValidationError(
            f"Response {y.name!r} is categorical; OLS needs a numeric response"
        )
    if isinstance(y, Numeric):
        response_name = response_name or y.name
        y_values = y.values
    else:
        y_values = y
    response_name = response_name or 'y'

    if isinstance(y_values, np.ndarray) and y_values.ndim != 1:
        if y_values.ndim == 2 and y_values.shape[1] == 1:
            y_values = y_values.ravel()
        else:
            raise ShapeError(
                f"Response {response_name!r} must be 1D or a single column, "
                f"got shape {y_values.shape}",
                left_shape=y_values.shape,
            )

    columns = as_columns(X)
    y_raw = coerce_numeric(y_values)
    n_total = len(y_raw)
    if n_total == 0:
        raise MissingVariableError(f"Response {response_name!r} has no values")

    for col in columns:
        if len(col) != n_total:
            raise ShapeError(
                f"Inconsistent lengths: {response_name}={n_total}, {col.name}={len(col)}",
                left_shape=(n_total,),
                right_shape=(len(col),),
            )

    numeric = [c for c in columns if isinstance(c, Numeric)]
    categorical = [c for c in columns if isinstance(c, Categorical)]

    blocks: list[NDArray] = [coerce_numeric(c.values).reshape(-1, 1) for c in numeric]
    names: list[str] = [c.name for c in numeric]

    encodings: list[DummyEncoding] = []
    for col in categorical:
        enc = encode_dummies(col.name, col.values)
        LOGGER.debug(
            "Categorical %r: reference %r, %d indicator column(s)",
            col.name, enc.reference, len(enc.levels),
        )
        encodings.append(enc)
        blocks.append(enc.X)
        names.extend(enc.names)

    X_raw = np.hstack(blocks) if blocks else np.empty((n_total, 0), dtype=np.float64)

    mask = complete_case_mask(y_raw, X_raw)
    rows = np.flatnonzero(mask)
    y_clean = y_raw[mask]
    X_clean = X_raw[mask]
    LOGGER.debug(
        "Complete cases: %d of %d rows (%d excluded)",
        len(rows), n_total, n_total - len(rows),
    )

    notes: list[str] = []
    n_numeric = len(numeric)
    empty = [
        j for j in range(n_numeric, X_clean.shape[1])
        if len(rows) > 0 and not np.any(X_clean[:, j])
    ]
    if empty:
        dropped = [names[j] for j in empty]
        msg = (
            f"Indicator column(s) {dropped} have no observations after removing "
            f"incomplete rows and were dropped"
        )
        warnings.warn(msg, UserWarning, stacklevel=2)
        notes.append(msg)
        keep = [j for j in range(X_clean.shape[1]) if j not in empty]
        X_clean = X_clean[:, keep]
        names = [names[j] for j in keep]

    return PreparedData(
        y=y_clean,
        X=X_clean,
        column_names=tuple(names),
        response_name=response_name,
        numeric_names=tuple(c.name for c in numeric),
        categorical_names=tuple(c.name for c in categorical),
        encodings=tuple(encodings),
        rows=rows,
        n_total=n_total,
        warnings=tuple(notes),
    )
