"""
ui/callbacks/sizing.py
======================
Callbacks for the sizing tab: form ↔ store round-trip and the result card.
"""
from __future__ import annotations

from typing import Any, Dict, List

import dash_bootstrap_components as dbc
from dash import Input, Output, State, callback_context, html, no_update

from config import BALANCE_COLORS, STORE_CUSTOM_MODELS, STORE_PROJECTS
from services.project_service import (
    projects_to_records, rename_environment, replace_project, set_manual_elements,
    size_environment, update_environment_spec, update_project_details,
)
from ui.state import active_environment, load_custom_models, load_projects, load_settings
from utils.helpers import safe_float, safe_int
from utils.logger import get_logger

log = get_logger()

# (component id, RoomSpec field)
NUMBER_FIELDS = [
    ("spec-surface",               "surface"),
    ("spec-height",                "height"),
    ("spec-niche-width",           "niche_width"),
    ("spec-niche-height",          "niche_height"),
    ("spec-valve-height",          "valve_height"),
    ("spec-valve-wall-distance",   "valve_wall_distance"),
    ("spec-side-valve-distance",   "side_valve_distance"),
    ("spec-valve-center-distance", "valve_center_distance"),
    ("spec-max-width",             "max_width"),
]
CHOICE_FIELDS = [
    ("spec-series",         "series"),
    ("spec-valve-position", "valve_position"),
    ("spec-pipe-material",  "pipe_material"),
    ("spec-pipe-diameter",  "pipe_diameter"),
]
DETAIL_FIELDS = [
    ("client-name",    "client_name"),
    ("client-surname", "client_surname"),
    ("site-address",   "site_address"),
]
FORM_IDS = (
    [cid for cid, _ in NUMBER_FIELDS]
    + [cid for cid, _ in CHOICE_FIELDS]
    + ["spec-has-diaphragm"]
    + [cid for cid, _ in DETAIL_FIELDS]
    + ["env-name"]
)


def _spec_values(values: Dict[str, Any]) -> Dict[str, Any]:
    """RoomSpec field values from the raw form values."""
    spec = {field: safe_float(values[cid], 0.0) for cid, field in NUMBER_FIELDS}
    spec.update({field: values[cid] for cid, field in CHOICE_FIELDS if values[cid] is not None})
    spec["has_diaphragm"] = "yes" in (values["spec-has-diaphragm"] or [])
    return spec


def _result_view(result) -> List[Any]:
    model = result.model
    rows = [
        ("Model / height",   f"{model.label} / H {model.height:g} mm"),
        ("Interaxis",        f"{model.interaxis:g} mm"),
        ("Elements",         f"{result.current_elements} (computed {result.base_elements})"),
        ("Installed output", f"{result.total_watts} W"),
        ("Body length",      f"{result.body_length:g} mm"),
        ("Total footprint",  f"{result.total_occupied_width:g} mm"),
    ]
    children: List[Any] = [
        html.Table(
            [html.Tr([html.Td(k, className="text-muted pe-3"), html.Td(html.Strong(v))]) for k, v in rows],
            className="mb-3",
        ),
        dbc.Badge(result.power_balance.value.replace("_", " ").title(),
                  color=BALANCE_COLORS[result.power_balance.value], className="mb-3"),
    ]
    if result.has_clearance_issue:
        children.append(dbc.Alert("Insufficient space: 50 mm minimum clearance not met.", color="danger"))
    if result.eccentric_text:
        children.append(dbc.Alert(result.eccentric_text, color="warning"))
    if result.exceeds_max_width:
        children.append(dbc.Alert("Radiator body is wider than the maximum width.", color="warning"))
    return children


def register(app):

    @app.callback(
        *[Output(cid, "value") for cid in FORM_IDS],
        Output("spec-manual-elements", "value"),
        Input("project-select", "value"),
        Input("env-select", "value"),
        Input("form-reload", "data"),
        State(STORE_PROJECTS, "data"),
    )
    def load_form(project_id, env_index, _reload, records):
        project, index = active_environment(load_projects(records), project_id, env_index)
        env = project.environments[index]
        spec = env.spec
        return (
            *[getattr(spec, field) for _, field in NUMBER_FIELDS],
            *[getattr(spec, field) if field != "valve_position" else spec.valve_position.value
              for _, field in CHOICE_FIELDS],
            ["yes"] if spec.has_diaphragm else [],
            *[getattr(project, field) for _, field in DETAIL_FIELDS],
            env.name,
            spec.manual_elements,
        )

    @app.callback(
        Output(STORE_PROJECTS, "data", allow_duplicate=True),
        Output("spec-manual-elements", "value", allow_duplicate=True),
        *[Input(cid, "value") for cid in FORM_IDS],
        Input("spec-manual-elements", "value"),
        State("project-select", "value"),
        State("env-select", "value"),
        State(STORE_PROJECTS, "data"),
        prevent_initial_call=True,
    )
    def save_form(*args):
        *form_values, manual, project_id, env_index, records = args
        values = dict(zip(FORM_IDS, form_values))
        projects = load_projects(records)
        project, index = active_environment(projects, project_id, env_index)

        if callback_context.triggered_id == "spec-manual-elements":
            project = set_manual_elements(project, index, safe_int(manual))
            return projects_to_records(replace_project(projects, project)), no_update

        spec = project.environments[index].spec
        changes = {
            field: value for field, value in _spec_values(values).items()
            if getattr(spec, field) != value
        }
        if changes:
            log.debug("Environment %d spec changes: %s", index, changes)
            project = update_environment_spec(project, index, **changes)

        details = {field: values[cid] or "" for cid, field in DETAIL_FIELDS}
        project = update_project_details(project, **details)
        if values["env-name"] is not None:
            project = rename_environment(project, index, values["env-name"])

        manual_out = project.environments[index].spec.manual_elements
        return projects_to_records(replace_project(projects, project)), manual_out

    @app.callback(
        Output("sizing-result", "children"),
        Output("required-watts-badge", "children"),
        Output("spec-manual-elements", "placeholder"),
        Input(STORE_PROJECTS, "data"),
        Input("project-select", "value"),
        Input("env-select", "value"),
        Input(STORE_CUSTOM_MODELS, "data"),
        Input("watt-coefficient", "value"),
    )
    def show_result(records, project_id, env_index, custom_records, coefficient):
        project, index = active_environment(load_projects(records), project_id, env_index)
        try:
            result = size_environment(
                project.environments[index], load_custom_models(custom_records), load_settings(coefficient)
            )
        except ValueError as e:
            log.warning("Sizing failed: %s", e)
            return dbc.Alert(str(e), color="danger"), "", ""
        badge = [f"{result.required_watts} ", html.Small("W required", className="text-muted")]
        return _result_view(result), badge, str(result.base_elements)
