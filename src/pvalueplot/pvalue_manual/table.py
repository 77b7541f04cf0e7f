"""Normalize the accepted results-table types into a pandas DataFrame."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Union

import pandas as pd

# Optional polars
try:  # pragma: no cover - import guard
    import polars as _pl  # type: ignore[import]
    HAS_POLARS = True
except ImportError:  # pragma: no cover - polars optional
    _pl = None  # type: ignore[assignment]
    HAS_POLARS = False

if TYPE_CHECKING:  # for type checkers only
    import polars as pl
else:  # runtime alias (may be None)
    pl = _pl  # type: ignore[assignment]

TableLike = Union[pd.DataFrame, "pl.DataFrame", Sequence[Mapping[str, Any]]]


def to_pandas_table(data: TableLike) -> pd.DataFrame:
    """Return a pandas copy of data.

    Args:
        data: pandas DataFrame, polars DataFrame, or a sequence of row mappings.

    Returns:
        A new DataFrame; the caller's table is never modified.

    Raises:
        TypeError: If data is none of the accepted types.
    """
    if isinstance(data, pd.DataFrame):
        return data.copy()
    if HAS_POLARS and pl is not None and isinstance(data, pl.DataFrame):
        return pd.DataFrame(data.to_dicts(), columns=list(data.columns))
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        if not all(isinstance(row, Mapping) for row in data):
            raise TypeError("row sequences must contain mappings of column name to value")
        return pd.DataFrame([dict(row) for row in data])
    raise TypeError(
        f"data must be a pandas DataFrame, polars DataFrame, or list of records; got {type(data).__name__}"
    )
