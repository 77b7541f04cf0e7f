# Demo app for stat_pvalue_manual
"""Demo application showing manual p-values on a Plotly box plot.

Three figures are shown side by side:
1. Pairwise comparisons drawn as brackets, labels from a template.
2. Comparisons against a reference group with remove_bracket=True (text labels).
3. The same reference comparisons keeping their brackets.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from nicegui import ui

from pvalueplot.pvalue_manual.figure_annotator import stat_pvalue_manual
from pvalueplot.utils.logging import configure_logging

DOSES = ["0.5", "1", "2"]


def make_sample_data(seed: int = 0) -> pd.DataFrame:
    """Tooth-length style data: 20 observations per dose."""
    rng = np.random.default_rng(seed)
    means = {"0.5": 10.6, "1": 19.7, "2": 26.1}
    rows = []
    for dose in DOSES:
        for value in rng.normal(means[dose], 4.0, size=20):
            rows.append({"dose": dose, "len": float(value)})
    return pd.DataFrame(rows)


def pairwise_results() -> pd.DataFrame:
    """Pairwise test results with adjusted p-values and y positions."""
    return pd.DataFrame({
        "group1": ["0.5", "0.5", "1"],
        "group2": ["1", "2", "2"],
        "p.adj": [1.3e-07, 4.4e-14, 1.4e-05],
        "y.position": [37.0, 43.0, 40.0],
    })


def reference_results() -> pd.DataFrame:
    """Each dose compared against the 0.5 reference group."""
    return pd.DataFrame({
        "group1": ["0.5", "0.5"],
        "group2": ["1", "2"],
        "p": [1.3e-07, 4.4e-14],
        "y.position": [36.0, 40.0],
    })


def make_box_figure(df: pd.DataFrame, title: str) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Box(x=df["dose"], y=df["len"], name="len", boxpoints="all", jitter=0.3))
    fig.update_layout(
        title=title,
        margin=dict(l=40, r=20, t=40, b=40),
        xaxis_title="dose",
        yaxis_title="len",
        showlegend=False,
    )
    return fig


def build_demo_figures(seed: int = 0) -> list[go.Figure]:
    """Build the three demo figures (no NiceGUI needed)."""
    df = make_sample_data(seed)

    fig_pairwise = make_box_figure(df, "Pairwise t-tests")
    stat_pvalue_manual(fig_pairwise, pairwise_results(), label="p = {p.adj:.1e}")

    fig_text = make_box_figure(df, "vs. reference, brackets removed")
    stat_pvalue_manual(fig_text, reference_results(), label="p", remove_bracket=True)

    fig_ref = make_box_figure(df, "vs. reference")
    stat_pvalue_manual(fig_ref, reference_results(), label="p = {p:.1e}", y_position=[36, 40])

    return [fig_pairwise, fig_text, fig_ref]


def main() -> None:
    """Demo entrypoint."""
    configure_logging(level="INFO")

    ui.page_title("stat_pvalue_manual Demo")
    with ui.row().classes("w-full gap-4 p-4"):
        for fig in build_demo_figures():
            ui.plotly(fig).classes("w-96 h-96")

    ui.run(reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()
