"""Plotly rendering of manual p-value annotations.

This module turns an AnnotationDescriptor into Plotly shapes, annotations
and traces on an existing figure:

- add_bracket_annotations(): one bracket (path shape) plus a centred label
  per comparison, spanning xmin..xmax at height y.position.
- add_text_labels(): a text-only scatter trace at (xmin, y.position).

stat_pvalue_manual() resolves a results table and dispatches to one of them.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from pvalueplot.utils.logging import get_logger
from pvalueplot.pvalue_manual.annotation_state import (
    DEFAULT_BRACKET_SIZE,
    DEFAULT_SIZE,
    DEFAULT_TIP_LENGTH,
    DEFAULT_XMAX,
    DEFAULT_Y_POSITION,
    AnnotationDescriptor,
    AnnotationMode,
    PValueManualConfig,
)
from pvalueplot.pvalue_manual.resolver import resolve_pvalue_annotations, tile_to_length
from pvalueplot.pvalue_manual.table import TableLike

logger = get_logger(__name__)

# ggplot sizes are in millimetres; 72.27 / 25.4 points per mm
MM_TO_PT = 72.27 / 25.4

DEFAULT_ANNOTATION_COLOR = "black"


def mm_to_pt(size: float) -> float:
    """Convert a ggplot size (mm) to points."""
    return float(size) * MM_TO_PT


def format_label(value: Any) -> str:
    """Text shown for one label value; missing values render as 'NA'."""
    if value is None or (pd.api.types.is_scalar(value) and not isinstance(value, str) and pd.isna(value)):
        return "NA"
    return str(value)


def category_key(value: Any) -> str:
    """Category name of an x position as Plotly stores it: integral floats drop the ".0" (1.0 -> "1")."""
    if isinstance(value, (float, np.floating)) and np.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return format_label(value)


def _trace_categories(fig: go.Figure) -> list[str]:
    """x values of existing traces as strings, in order of first appearance."""
    out: list[str] = []
    seen: set[str] = set()
    for trace in fig.data:
        xs = getattr(trace, "x", None)
        if xs is None:
            continue
        for v in xs:
            s = category_key(v)
            if s not in seen:
                seen.add(s)
                out.append(s)
    return out


def resolve_category_order(
    fig: go.Figure,
    positions: Iterable[Any],
    category_order: Optional[Sequence[Any]] = None,
) -> list[str]:
    """Category order of the x axis, extended with any annotation positions not yet on it.

    Order source: category_order if given, else the figure's layout categoryarray,
    else the x values of existing traces.
    """
    if category_order is not None:
        order = [category_key(c) for c in category_order]
    else:
        layout_array = fig.layout.xaxis.categoryarray
        if layout_array:
            order = [category_key(c) for c in layout_array]
        else:
            order = _trace_categories(fig)
    for p in positions:
        s = category_key(p)
        if s not in order:
            order.append(s)
    return order


def _y_span(fig: go.Figure, ys: np.ndarray) -> float:
    """Vertical data span used to scale bracket tips."""
    values = [ys[np.isfinite(ys)]]
    for trace in fig.data:
        ty = getattr(trace, "y", None)
        if ty is None:
            continue
        arr = pd.to_numeric(pd.Series(list(ty)), errors="coerce").to_numpy(dtype=float)
        values.append(arr[np.isfinite(arr)])
    allv = np.concatenate(values) if values else np.array([])
    if allv.size == 0:
        return 1.0
    span = float(allv.max() - allv.min())
    if span <= 0:
        span = max(abs(float(allv.max())), 1.0)
    return span


def _set_category_axis(fig: go.Figure, order: list[str]) -> None:
    fig.update_xaxes(type="category", categoryorder="array", categoryarray=order)


def add_bracket_annotations(
    fig: go.Figure,
    descriptor: AnnotationDescriptor,
    *,
    category_order: Optional[Sequence[Any]] = None,
) -> go.Figure:
    """Draw one labelled bracket per row of a BRACKET-mode descriptor.

    Each bracket is a path shape from xmin to xmax at y.position with tips
    descending tip_length * (y span). The label is centred above the bracket.
    descriptor.extra is passed to fig.add_annotation() ("color" also sets the line color).
    """
    if descriptor.mode != AnnotationMode.BRACKET:
        raise ValueError(f"add_bracket_annotations requires bracket mode; got {descriptor.mode.value}")
    df = descriptor.data
    n = len(df)
    extra = dict(descriptor.extra)
    color = extra.pop("color", DEFAULT_ANNOTATION_COLOR)

    order = resolve_category_order(fig, list(df["xmin"]) + list(df["xmax"]), category_order)
    index = {c: i for i, c in enumerate(order)}
    _set_category_axis(fig, order)

    ys = df["y.position"].to_numpy(dtype=float)
    tips = tile_to_length(descriptor.tip_length, 2 * n, what="tip.length") if n else np.array([])
    tips = tips * _y_span(fig, ys)
    font_size = mm_to_pt(descriptor.label_size)
    line_width = mm_to_pt(descriptor.bracket_size)

    for i, (label, xmin, xmax, y) in enumerate(descriptor.rows()):
        if not np.isfinite(y):
            logger.warning(f"skipping bracket {i}: y.position is not finite")
            continue
        x0 = index[category_key(xmin)]
        x1 = index[category_key(xmax)]
        tip_left, tip_right = tips[2 * i], tips[2 * i + 1]
        path = f"M {x0},{y - tip_left} L {x0},{y} L {x1},{y} L {x1},{y - tip_right}"
        fig.add_shape(
            type="path",
            path=path,
            xref="x",
            yref="y",
            line=dict(color=color, width=line_width),
        )
        fig.add_annotation(
            x=(x0 + x1) / 2.0,
            y=y,
            xref="x",
            yref="y",
            text=format_label(label),
            showarrow=False,
            yanchor="bottom",
            font=dict(size=font_size, color=color),
            **extra,
        )
    logger.debug(f"added {n} bracket annotation(s)")
    return fig


def add_text_labels(
    fig: go.Figure,
    descriptor: AnnotationDescriptor,
    *,
    category_order: Optional[Sequence[Any]] = None,
) -> go.Figure:
    """Draw the labels of a TEXT-mode descriptor as a text-only scatter trace at (xmin, y.position).

    descriptor.extra is passed to go.Scatter ("color" sets the text color).
    """
    if descriptor.mode != AnnotationMode.TEXT:
        raise ValueError(f"add_text_labels requires text mode; got {descriptor.mode.value}")
    df = descriptor.data
    extra = dict(descriptor.extra)
    color = extra.pop("color", DEFAULT_ANNOTATION_COLOR)

    xmin = df["xmin"]
    if isinstance(xmin.dtype, pd.CategoricalDtype):
        positions = list(xmin.cat.categories)
    else:
        positions = list(pd.unique(xmin))
    order = resolve_category_order(fig, positions, category_order)
    _set_category_axis(fig, order)

    fig.add_trace(go.Scatter(
        x=[category_key(v) for v in xmin],
        y=df["y.position"].to_numpy(dtype=float),
        mode="text",
        text=[format_label(v) for v in df["label"]],
        textposition="middle center",
        textfont=dict(size=mm_to_pt(descriptor.label_size), color=color),
        showlegend=False,
        hoverinfo="skip",
        name="p-values",
        **extra,
    ))
    logger.debug(f"added {len(df)} text label(s)")
    return fig


def stat_pvalue_manual(
    fig: Optional[go.Figure],
    data: TableLike,
    label: str = "p",
    y_position: Union[str, float, Sequence[float]] = DEFAULT_Y_POSITION,
    xmin: Optional[str] = None,
    xmax: Optional[str] = DEFAULT_XMAX,
    x: Optional[str] = None,
    size: float = DEFAULT_SIZE,
    label_size: Optional[float] = None,
    bracket_size: float = DEFAULT_BRACKET_SIZE,
    tip_length: Union[float, Sequence[float]] = DEFAULT_TIP_LENGTH,
    remove_bracket: bool = False,
    *,
    category_order: Optional[Sequence[Any]] = None,
    **kwargs: Any,
) -> go.Figure:
    """Add manually computed p-values to a Plotly figure (box, dot or strip plot).

    Args:
        fig: Figure to annotate; a new go.Figure when None.
        data: Results table, by default with columns group1 | group2 | p | y.position.
        label: Column with the label, or a template such as "p = {p.adj}".
        y_position: Column name, a number or a sequence of numbers (tiled to the row count).
        xmin: Column with the bracket left sides. Defaults to "group1".
        xmax: Column with the bracket right sides. None draws p-values as text.
        x: Column with text positions; forces text mode.
        size, label_size: Label text size (mm). label_size defaults to size.
        bracket_size: Bracket line width (mm).
        tip_length: Fraction of the y span each bracket tip descends.
        remove_bracket: Draw text instead of brackets when all comparisons
            share a reference group.
        category_order: Explicit x-axis category order.
        **kwargs: Passed to the Plotly annotation (brackets) or text trace.

    Returns:
        The annotated figure.
    """
    config = PValueManualConfig(
        label=label,
        y_position=y_position,
        xmin=xmin,
        xmax=xmax,
        x=x,
        size=size,
        label_size=label_size,
        bracket_size=bracket_size,
        tip_length=tip_length,
        remove_bracket=remove_bracket,
        extra=kwargs,
    )
    descriptor = resolve_pvalue_annotations(data, config)
    if fig is None:
        fig = go.Figure()

    if descriptor.mode == AnnotationMode.BRACKET:
        return add_bracket_annotations(fig, descriptor, category_order=category_order)
    return add_text_labels(fig, descriptor, category_order=category_order)
