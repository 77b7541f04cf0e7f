"""Annotation resolver for manually supplied p-values.

Takes a results table (one row per statistical comparison) plus a
PValueManualConfig and resolves every column reference into concrete
per-row values:

  1. Label: a column name, or a ``{field}`` template rendered per row.
  2. x override: a given x column forces text mode (no xmax).
  3. Validate that the label and xmin columns exist.
  4. remove.bracket: drop xmax when all comparisons share one reference group.
  5. y.position: a column, or numbers tiled to the number of rows.
  6. xmax: present -> bracket mode, absent -> text mode.
  7. Assemble the descriptor (label, xmin, xmax, y.position).

No rendering happens here; see figure_annotator for that.
"""

from __future__ import annotations

import warnings
from typing import Any, Optional

import numpy as np
import pandas as pd

from pvalueplot.utils.logging import get_logger
from pvalueplot.pvalue_manual.annotation_state import (
    DESCRIPTOR_COLUMNS,
    AnnotationDescriptor,
    AnnotationMode,
    ColumnY,
    LiteralY,
    PValueManualConfig,
    parse_y_position,
)
from pvalueplot.pvalue_manual.errors import AmbiguousRemovalWarning, MissingColumnError
from pvalueplot.pvalue_manual.label_template import contains_curly_bracket, format_labels
from pvalueplot.pvalue_manual.table import TableLike, to_pandas_table

logger = get_logger(__name__)

# Column that holds rendered template labels in the working copy
TEMPLATE_LABEL_COL = "label"


def tile_to_length(values: Any, n: int, *, what: str = "y.position") -> np.ndarray:
    """Repeat values so the result has exactly n entries.

    len(values) must divide n evenly (and values must be non-empty). A length
    that doesn't divide n raises ValueError instead of truncating.

    Examples:
        tile_to_length([29, 35, 39], 3) -> [29, 35, 39]
        tile_to_length([29, 35, 39], 6) -> [29, 35, 39, 29, 35, 39]
    """
    arr = np.atleast_1d(np.asarray(values, dtype=float))
    k = len(arr)
    if k == 0:
        raise ValueError(f"{what} must contain at least one value")
    if n % k != 0:
        raise ValueError(
            f"{what} has {k} value(s), which does not divide the {n} row(s) of the data evenly"
        )
    return np.tile(arr, n // k)


def resolve_y_position(df: pd.DataFrame, y_position: Any) -> pd.Series:
    """Resolve the y.position option into one numeric value per row of df."""
    spec = parse_y_position(y_position)
    if isinstance(spec, LiteralY):
        return pd.Series(tile_to_length(spec.values, len(df)), index=df.index, name="y.position")
    if isinstance(spec, ColumnY):
        if spec.name not in df.columns:
            raise MissingColumnError(spec.name, "y.position")
        return pd.to_numeric(df[spec.name], errors="coerce").rename("y.position")
    raise TypeError(f"Unsupported y.position: {y_position!r}")  # pragma: no cover


def as_category_axis(values: pd.Series) -> pd.Series:
    """Return values as a categorical; categories in order of first appearance unless already categorical."""
    if isinstance(values.dtype, pd.CategoricalDtype):
        return values
    levels = pd.unique(values.dropna())
    return pd.Series(
        pd.Categorical(values, categories=levels),
        index=values.index,
        name=values.name,
    )


def _require_column(df: pd.DataFrame, column: str, role: str) -> None:
    if column not in df.columns:
        raise MissingColumnError(column, role)


def _require_complete(df: pd.DataFrame, column: str, role: str) -> None:
    """Every bracket needs both ends; raise ValueError naming the rows with a missing value."""
    missing = df.index[df[column].isna()].tolist()
    if missing:
        raise ValueError(
            f"{role} column {column!r} has missing values in row(s) {missing}; "
            "every bracket needs both xmin and xmax"
        )


def resolve_pvalue_annotations(
    data: TableLike,
    config: Optional[PValueManualConfig] = None,
    **options: Any,
) -> AnnotationDescriptor:
    """Resolve a results table into an AnnotationDescriptor.

    Args:
        data: Results table (pandas/polars DataFrame or list of records).
        config: Options; when None, built from **options via
            PValueManualConfig.from_dict (dotted or underscored names).
        **options: Used only when config is None.

    Returns:
        AnnotationDescriptor in BRACKET or TEXT mode.

    Raises:
        MissingColumnError: A referenced column is missing.
        ValueError: y.position values don't divide the number of rows.
        TypeError: Unsupported data or y.position type.
    """
    if config is None:
        config = PValueManualConfig.from_dict(options)
    elif options:
        raise TypeError("pass either config or keyword options, not both")

    df = to_pandas_table(data)

    # Step 1: label column or template
    label_col = config.label
    if contains_curly_bracket(label_col):
        df[TEMPLATE_LABEL_COL] = format_labels(df, label_col)
        label_col = TEMPLATE_LABEL_COL

    # Step 2: x draws p-values as text at that position
    xmin_col = config.xmin_column
    xmax_col = config.xmax
    if config.x is not None:
        xmin_col = config.x
        xmax_col = None

    # Step 3: required columns
    _require_column(df, label_col, "label")
    _require_column(df, xmin_col, "xmin")

    # Step 4: bracket removal is only safe against a single reference group
    if config.remove_bracket and xmax_col is not None:
        n_groups = df[xmin_col].nunique(dropna=False)
        if n_groups == 1:
            if config.xmin is None:
                _require_column(df, xmax_col, "xmin")
                xmin_col = xmax_col
            xmax_col = None
            logger.debug(f"remove.bracket: single reference group, drawing text at {xmin_col!r}")
        else:
            logger.warning(
                f"remove.bracket ignored: {xmin_col!r} has {n_groups} distinct values (pairwise comparisons)"
            )
            warnings.warn(
                "Pairwise comparison: bracket can't be removed",
                AmbiguousRemovalWarning,
                stacklevel=2,
            )

    # Step 5: y positions
    y = resolve_y_position(df, config.y_position)

    # Step 6: xmax decides the mode
    if xmax_col is not None:
        _require_column(df, xmax_col, "xmax")
        xmax = df[xmax_col]
        _require_complete(df, xmin_col, "xmin")
        _require_complete(df, xmax_col, "xmax")
        mode = AnnotationMode.BRACKET
    else:
        xmax = pd.Series([None] * len(df), index=df.index, dtype=object)
        mode = AnnotationMode.TEXT

    # Step 7: descriptor table
    out = pd.DataFrame(
        {
            "label": df[label_col],
            "xmin": df[xmin_col],
            "xmax": xmax,
            "y.position": y,
        },
        index=df.index,
    )[DESCRIPTOR_COLUMNS].reset_index(drop=True)

    if mode == AnnotationMode.TEXT:
        out["xmin"] = as_category_axis(out["xmin"])

    logger.info(
        f"resolved {len(out)} p-value annotation(s): mode={mode.value}, "
        f"label={label_col!r}, xmin={xmin_col!r}, xmax={xmax_col!r}"
    )

    return AnnotationDescriptor(
        mode=mode,
        data=out,
        label_size=config.effective_label_size,
        bracket_size=config.bracket_size,
        tip_length=config.tip_length,
        extra=dict(config.extra),
    )
