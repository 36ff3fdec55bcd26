"""
Dummy (treatment) coding for categorical columns.

Levels are enumerated in first-occurrence order. The first level is the
reference and gets no column; every other level gets a 0/1 indicator.
A missing label propagates as NaN into every indicator of that row so
complete-case filtering removes it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from pyols.preparation._missing import is_missing


@dataclass(frozen=True)
class DummyEncoding:
    """
    Indicator columns for one categorical variable.

    Attributes:
        variable: Source variable name
        reference: The dropped reference level, or None if all labels are missing
        levels: Non-reference levels, one per column of X
        names: Column labels, '<variable>_<level>'
        X: (n, len(levels)) float64 indicators, NaN where the label is missing
    """
    variable: str
    reference: Any
    levels: tuple[Any, ...]
    names: tuple[str, ...]
    X: NDArray[np.floating[Any]]


def distinct_levels(values: Sequence[Any]) -> list[Any]:
    """Distinct non-missing labels in first-occurrence order."""
    seen: dict[Any, None] = {}
    for v in values:
        if not is_missing(v) and v not in seen:
            seen[v] = None
    return list(seen)


def encode_dummies(variable: str, values: Sequence[Any]) -> DummyEncoding:
    """
    Treatment-code a categorical column, dropping the first level.

    A column with k distinct labels yields k - 1 indicator columns; a
    column with one distinct label yields none.

    Args:
        variable: Variable name used to label the columns
        values: Raw labels (missing cells allowed)

    Returns:
        DummyEncoding with the indicator matrix and its labels
    """
    levels = distinct_levels(values)
    n = len(values)

    reference = levels[0] if levels else None
    coded = levels[1:]

    X = np.zeros((n, len(coded)), dtype=np.float64)
    for i, v in enumerate(values):
        if is_missing(v):
            X[i, :] = np.nan
            continue
        for j, level in enumerate(coded):
            if v == level:
                X[i, j] = 1.0
                break

    return DummyEncoding(
        variable=variable,
        reference=reference,
        levels=tuple(coded),
        names=tuple(f"{variable}_{level}" for level in coded),
        X=X,
    )
