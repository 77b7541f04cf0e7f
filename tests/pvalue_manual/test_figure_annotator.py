"""Unit tests for Plotly rendering of manual p-values."""

import pandas as pd
import plotly.graph_objects as go
import pytest

from pvalueplot.pvalue_manual.annotation_state import AnnotationMode
from pvalueplot.pvalue_manual.errors import MissingColumnError
from pvalueplot.pvalue_manual.figure_annotator import (
    MM_TO_PT,
    add_bracket_annotations,
    add_text_labels,
    category_key,
    format_label,
    mm_to_pt,
    resolve_category_order,
    stat_pvalue_manual,
)
from pvalueplot.pvalue_manual.resolver import resolve_pvalue_annotations


@pytest.fixture
def box_fig() -> go.Figure:
    """Box plot with dose categories 0.5, 1, 2 on the x axis."""
    df = pd.DataFrame({
        "dose": ["0.5"] * 3 + ["1"] * 3 + ["2"] * 3,
        "len": [8.0, 10.0, 12.0, 18.0, 20.0, 22.0, 24.0, 26.0, 28.0],
    })
    fig = go.Figure()
    fig.add_trace(go.Box(x=df["dose"], y=df["len"]))
    return fig


def test_mm_to_pt():
    assert mm_to_pt(1.0) == pytest.approx(MM_TO_PT)
    assert mm_to_pt(3.88) == pytest.approx(11.04, abs=0.01)


def test_format_label():
    assert format_label(0.001) == "0.001"
    assert format_label("p = 0.01") == "p = 0.01"
    assert format_label(None) == "NA"
    assert format_label(float("nan")) == "NA"


def test_resolve_category_order_from_traces(box_fig):
    assert resolve_category_order(box_fig, ["2", "3"]) == ["0.5", "1", "2", "3"]


def test_resolve_category_order_explicit_wins(box_fig):
    assert resolve_category_order(box_fig, ["1"], category_order=["2", "1", "0.5"]) == ["2", "1", "0.5"]


def test_stat_pvalue_manual_brackets(box_fig, pairwise_df):
    fig = stat_pvalue_manual(box_fig, pairwise_df, label="p.adj", y_position=[29, 35, 39])
    assert fig is box_fig
    assert len(fig.layout.shapes) == 3
    assert [a.text for a in fig.layout.annotations] == ["0.001", "0.02", "0.04"]
    # labels centred between category indices 0.5->0, 1->1, 2->2
    assert [a.x for a in fig.layout.annotations] == [0.5, 1.0, 1.5]
    assert [a.y for a in fig.layout.annotations] == [29.0, 35.0, 39.0]
    assert list(fig.layout.xaxis.categoryarray) == ["0.5", "1", "2"]


def test_bracket_path_spans_xmin_to_xmax(box_fig, pairwise_df):
    fig = stat_pvalue_manual(box_fig, pairwise_df, label="p.adj", y_position=[29, 35, 39])
    path = fig.layout.shapes[2].path
    assert path.startswith("M 1,")
    assert "L 1,39.0 L 2,39.0" in path


def test_bracket_style_and_passthrough(box_fig, pairwise_df):
    fig = stat_pvalue_manual(
        box_fig, pairwise_df, label="p.adj", y_position=[29, 35, 39],
        label_size=5.0, bracket_size=0.5, color="red",
    )
    assert fig.layout.shapes[0].line.color == "red"
    assert fig.layout.shapes[0].line.width == pytest.approx(0.5 * MM_TO_PT)
    assert fig.layout.annotations[0].font.size == pytest.approx(5.0 * MM_TO_PT)
    assert fig.layout.annotations[0].font.color == "red"


def test_template_labels_on_brackets(box_fig, pairwise_df):
    fig = stat_pvalue_manual(box_fig, pairwise_df, label="p = {p.adj}", y_position=[29, 35, 39])
    assert fig.layout.annotations[1].text == "p = 0.02"


def test_text_mode_adds_text_trace(box_fig, reference_df):
    fig = stat_pvalue_manual(box_fig, reference_df, remove_bracket=True)
    assert len(fig.layout.shapes or []) == 0
    trace = fig.data[-1]
    assert trace.mode == "text"
    assert list(trace.x) == ["1", "2"]
    assert list(trace.y) == [30.0, 34.0]
    assert list(trace.text) == ["0.003", "0.0001"]
    assert list(fig.layout.xaxis.categoryarray) == ["0.5", "1", "2"]


def test_x_override_draws_text(reference_df):
    fig = stat_pvalue_manual(None, reference_df, x="group2", label="p = {p}")
    assert isinstance(fig, go.Figure)
    assert fig.data[0].mode == "text"
    assert list(fig.data[0].text) == ["p = 0.003", "p = 0.0001"]


def test_missing_column_aborts_before_rendering(box_fig, reference_df):
    with pytest.raises(MissingColumnError):
        stat_pvalue_manual(box_fig, reference_df, label="pp")
    assert len(box_fig.data) == 1
    assert len(box_fig.layout.shapes or []) == 0


def test_tip_length_per_tip_sequence(pairwise_df):
    desc = resolve_pvalue_annotations(
        pairwise_df, label="p.adj", y_position=[29, 35, 39], tip_length=[0.0, 0.1]
    )
    fig = add_bracket_annotations(go.Figure(), desc)
    # y span is 39 - 29 = 10: left tip 0, right tip 1
    assert fig.layout.shapes[0].path == "M 0,29.0 L 0,29.0 L 1,29.0 L 1,28.0"


def test_tip_length_not_broadcastable_raises(pairwise_df):
    desc = resolve_pvalue_annotations(
        pairwise_df, label="p.adj", y_position=[29, 35, 39], tip_length=[0.1, 0.2, 0.3, 0.4]
    )
    with pytest.raises(ValueError):
        add_bracket_annotations(go.Figure(), desc)


def test_primitives_check_mode(reference_df):
    bracket = resolve_pvalue_annotations(reference_df)
    text = resolve_pvalue_annotations(reference_df, xmax=None)
    assert bracket.mode == AnnotationMode.BRACKET
    with pytest.raises(ValueError):
        add_text_labels(go.Figure(), bracket)
    with pytest.raises(ValueError):
        add_bracket_annotations(go.Figure(), text)


def test_category_key_matches_plotly_categories():
    assert category_key(1.0) == "1"
    assert category_key(2) == "2"
    assert category_key(0.5) == "0.5"
    assert category_key("1") == "1"
    assert category_key(float("nan")) == "NA"


@pytest.fixture
def numeric_box_fig() -> go.Figure:
    """Box plot whose x values are floats (numeric dose column)."""
    fig = go.Figure()
    fig.add_trace(go.Box(
        x=[0.5, 0.5, 1.0, 1.0, 2.0, 2.0],
        y=[8.0, 12.0, 18.0, 22.0, 24.0, 28.0],
    ))
    return fig


def test_brackets_on_numeric_x_axis_use_existing_categories(numeric_box_fig, pairwise_df):
    fig = stat_pvalue_manual(numeric_box_fig, pairwise_df, label="p.adj", y_position=[29, 35, 39])
    assert list(fig.layout.xaxis.categoryarray) == ["0.5", "1", "2"]
    assert [a.x for a in fig.layout.annotations] == [0.5, 1.0, 1.5]
    assert "L 1,39.0 L 2,39.0" in fig.layout.shapes[2].path


def test_numeric_groups_on_numeric_x_axis(numeric_box_fig):
    stat = pd.DataFrame({
        "group1": [0.5, 1.0],
        "group2": [1.0, 2.0],
        "p": [0.01, 0.02],
        "y.position": [30.0, 34.0],
    })
    fig = stat_pvalue_manual(numeric_box_fig, stat)
    assert list(fig.layout.xaxis.categoryarray) == ["0.5", "1", "2"]
    assert [a.x for a in fig.layout.annotations] == [0.5, 1.5]


def test_text_labels_on_numeric_x_axis(numeric_box_fig):
    stat = pd.DataFrame({
        "group1": [0.5, 0.5],
        "group2": [1.0, 2.0],
        "p": [0.01, 0.02],
        "y.position": [30.0, 34.0],
    })
    fig = stat_pvalue_manual(numeric_box_fig, stat, remove_bracket=True)
    assert list(fig.data[-1].x) == ["1", "2"]
    assert list(fig.layout.xaxis.categoryarray) == ["0.5", "1", "2"]


def test_missing_xmax_value_does_not_draw(box_fig, reference_df):
    reference_df.loc[1, "group2"] = None
    with pytest.raises(ValueError):
        stat_pvalue_manual(box_fig, reference_df)
    assert len(box_fig.layout.shapes or []) == 0
