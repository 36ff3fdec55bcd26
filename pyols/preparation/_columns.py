"""
Tagged predictor columns.

Every column is declared Numeric or Categorical before it reaches data
preparation. Nothing downstream inspects cell values to guess a column's
kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union
import numpy as np

from pyols.core.exceptions import MissingVariableError, ValidationError


@dataclass(frozen=True)
class Numeric:
    """
    A numeric column.

    Cells that cannot be coerced to float count as missing.

    Attributes:
        name: Column label (used as the term name)
        values: Raw cell values, one per observation
    """
    name: str
    values: Sequence[Any]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class Categorical:
    """
    A categorical column of discrete labels.

    Expands to one indicator column per level after the first-encountered
    one, which serves as the reference level.

    Attributes:
        name: Variable name (dummy columns are named '<name>_<level>')
        values: Raw labels, one per observation
    """
    name: str
    values: Sequence[Any]

    def __len__(self) -> int:
        return len(self.values)


Column = Union[Numeric, Categorical]


def as_columns(X: Any) -> list[Column]:
    """
    Normalize the accepted predictor layouts into a list of tagged columns.

    Accepted layouts:
        - 2D numpy array (n x p): each column is Numeric 'x1'..'xp'
        - Mapping name -> values (or a DataFrame): Numeric columns in order
        - A single Numeric or Categorical
        - A sequence whose items are Numeric, Categorical, or 1D
          array-likes (the latter become Numeric 'x<position>')

    Raises:
        MissingVariableError: If no predictor columns are given
        ValidationError: If two columns share a name
    """
    if X is None:
        raise MissingVariableError("No predictor (X) variables provided")

    if isinstance(X, (Numeric, Categorical)):
        columns: list[Column] = [X]
    elif isinstance(X, np.ndarray) and X.ndim == 2:
        columns = [Numeric(f"x{j + 1}", X[:, j]) for j in range(X.shape[1])]
    elif isinstance(X, Mapping) or hasattr(X, "columns"):
        # DataFrame columns are treated like a mapping
        columns = [Numeric(str(name), values) for name, values in X.items()]
    elif isinstance(X, np.ndarray) and X.ndim == 1:
        columns = [Numeric("x1", X)]
    elif len(X) > 0 and not isinstance(X[0], (Numeric, Categorical)) and np.ndim(X[0]) == 0:
        # flat sequence of cells: a single unnamed predictor
        columns = [Numeric("x1", X)]
    else:
        columns = []
        for j, item in enumerate(X):
            if isinstance(item, (Numeric, Categorical)):
                columns.append(item)
            else:
                columns.append(Numeric(f"x{j + 1}", item))

    if not columns:
        raise MissingVariableError("No predictor (X) variables provided")

    seen: set[str] = set()
    for col in columns:
        if col.name in seen:
            raise ValidationError(f"Duplicate predictor name: {col.name!r}")
        seen.add(col.name)

    return columns
