"""
Data preparation for regression.

Turns raw, possibly incomplete columns into the clean response vector and
predictor matrix the estimator works on.

Public API:
    Numeric(name, values), Categorical(name, values): tagged columns
    prepare(y, X) -> PreparedData
    encode_dummies(name, values) -> DummyEncoding
    is_missing(value) -> bool
"""

from pyols.preparation._columns import Numeric, Categorical, Column, as_columns
from pyols.preparation._encoding import DummyEncoding, encode_dummies, distinct_levels
from pyols.preparation._missing import is_missing, coerce_numeric, complete_case_mask
from pyols.preparation.prepare import PreparedData, prepare

__all__ = [
    "Numeric",
    "Categorical",
    "Column",
    "as_columns",
    "DummyEncoding",
    "encode_dummies",
    "distinct_levels",
    "is_missing",
    "coerce_numeric",
    "complete_case_mask",
    "PreparedData",
    "prepare",
]
