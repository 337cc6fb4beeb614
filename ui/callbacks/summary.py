"""
ui/callbacks/summary.py
=======================
Callbacks for the project summary tab: per-environment table and chart.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import Input, Output, html

from config import CHART_HEIGHT_PX, STORE_CUSTOM_MODELS, STORE_PROJECTS
from services.project_service import find_project, project_summary
from ui.state import load_custom_models, load_projects, load_settings


def register(app):

    @app.callback(
        Output("project-summary-table", "columns"),
        Output("project-summary-table", "data"),
        Output("project-summary-chart", "figure"),
        Output("project-total", "children"),
        Input(STORE_PROJECTS, "data"),
        Input("project-select", "value"),
        Input(STORE_CUSTOM_MODELS, "data"),
        Input("watt-coefficient", "value"),
    )
    def update_summary(records, project_id, custom_records, coefficient):
        project = find_project(load_projects(records), project_id)
        df = project_summary(project, load_custom_models(custom_records), load_settings(coefficient))

        fig = go.Figure()
        fig.add_bar(x=df["Environment"], y=df["Required (W)"], name="Required", marker_color="#6c757d")
        fig.add_bar(x=df["Environment"], y=df["Installed (W)"], name="Installed", marker_color="#198754")
        fig.update_layout(
            barmode="group", height=CHART_HEIGHT_PX, template="plotly_white",
            title="Required vs installed output per environment",
            yaxis_title="W", margin=dict(l=40, r=20, t=60, b=40),
        )

        total = [
            html.Strong("Project total: "),
            f"{int(df['Required (W)'].sum())} W required, "
            f"{int(df['Installed (W)'].sum())} W installed in {len(df)} environment(s).",
        ]
        if df["Clearance issue"].any():
            total.append(html.Div("⚠️ At least one environment has a clearance issue.", className="text-danger"))

        columns = [{"name": c, "id": c} for c in df.columns]
        return columns, df.astype(object).where(df.notna(), None).to_dict("records"), fig, total
