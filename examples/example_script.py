import pandas as pd
import plotly.graph_objects as go
from nicegui import ui

from pvalueplot import stat_pvalue_manual

df = pd.DataFrame(
    {
        "supp": ["OJ"] * 4 + ["VC"] * 4,
        "len": [21.5, 23.6, 25.5, 19.7, 11.2, 8.2, 10.0, 6.4],
    }
)

stat_test = pd.DataFrame(
    {
        "group1": ["OJ"],
        "group2": ["VC"],
        "p": [0.0012],
        "y.position": [28.0],
    }
)

fig = go.Figure(go.Box(x=df["supp"], y=df["len"], boxpoints="all"))
stat_pvalue_manual(fig, stat_test, label="Welch t-test, p = {p}", tip_length=0.02)

with ui.header().classes("py-2 px-4"):
    ui.label("stat_pvalue_manual demo")

ui.plotly(fig).classes("w-full h-96")

ui.run()
