"""
Named-column DataSource for PyOLS.

DataSource is the "I have data" abstraction. It holds raw columns exactly
as a spreadsheet or file delivered them (numbers, labels, blanks) and
doesn't know or care which ones become the response or predictors.
Roles are assigned later, by RegressionDesign.from_datasource().

Usage:
    from pyols import DataSource

    ds = DataSource.from_columns(sales=[...], price=[...], region=[...])
    ds = DataSource.from_file("data.csv")
    ds = DataSource.from_dataframe(df)

    ds.keys()        # ('sales', 'price', 'region')
    price = ds['price']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import ValidationError, ShapeError

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class DataSource:
    """
    Ordered collection of equally long raw columns.

    Construct via factory classmethods, not directly. Column order is kept
    as supplied; the caller's declared roles are trusted to match it.
    """
    _data: dict[str, NDArray]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    def keys(self) -> tuple[str, ...]:
        """Column names in their original order."""
        return tuple(self._data.keys())

    def __getitem__(self, key: str) -> NDArray:
        """
        Access a named column.

        Raises:
            KeyError: If key not found, with a message listing available keys
        """
        if key not in self._data:
            raise KeyError(
                f"DataSource has no column '{key}'. Available: {self.keys()}"
            )
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of rows (including rows with missing values)."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        """Source metadata (origin, path, row count)."""
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_columns(cls, **columns: Sequence[Any]) -> DataSource:
        """
        Construct from named sequences.

        Values are kept raw (object dtype if mixed) so blanks and labels
        survive until data preparation decides what is missing.

        Raises:
            ValidationError: If no columns are given
            ShapeError: If columns have different lengths
        """
        if not columns:
            raise ValidationError("DataSource.from_columns: no columns given")

        storage: dict[str, NDArray] = {}
        for name, values in columns.items():
            storage[name] = _as_column(values, name)

        lengths = {name: len(arr) for name, arr in storage.items()}
        if len(set(lengths.values())) > 1:
            details = ", ".join(f"{name}={length}" for name, length in lengths.items())
            raise ShapeError(f"Inconsistent column lengths: {details}")

        return cls(
            _data=storage,
            _metadata={
                'n_observations': next(iter(lengths.values())),
                'source': 'columns',
                'columns': list(storage),
            },
        )

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DataSource:
        """Construct from a pandas DataFrame, one column per DataFrame column."""
        storage: dict[str, NDArray] = {}
        for col in df.columns:
            values = df[col].to_numpy()
            if values.dtype == object:
                # nullable extension dtypes hold pd.NA; store NaN instead
                values = df[col].to_numpy(dtype=object, na_value=np.nan)
            storage[str(col)] = values

        metadata = {
            'n_observations': len(df),
            'source': 'dataframe',
            'columns': list(storage),
        }
        if source_path:
            metadata['source_path'] = source_path

        return cls(_data=storage, _metadata=metadata)

    @classmethod
    def from_file(cls, path: str | Path, *, columns: list[str] | None = None) -> DataSource:
        """
        Construct from a delimited text file (CSV or TSV).

        Blank cells are read as missing; everything else keeps the dtype
        pandas infers, so label columns stay strings.
        """
        import pandas as pd

        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == '.csv':
            df = pd.read_csv(path, usecols=columns)
        elif suffix == '.tsv':
            df = pd.read_csv(path, sep='\t', usecols=columns)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")
        return cls.from_dataframe(df, source_path=str(path))


def _as_column(values: Sequence[Any], name: str) -> NDArray:
    if hasattr(values, 'to_numpy'):
        values = values.to_numpy()
    arr = np.asarray(values) if isinstance(values, np.ndarray) else np.asarray(list(values), dtype=object)
    if arr.ndim != 1:
        raise ShapeError(
            f"{name}: expected 1D column, got shape {arr.shape}",
            left_shape=arr.shape,
        )
    return arr
