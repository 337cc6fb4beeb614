"""
ui/callbacks/navigation.py
==========================
Callbacks that manage the project and environment lists in the sidebar.
"""
from __future__ import annotations

import time

from dash import Input, Output, State, callback_context, no_update

from config import STORE_PROJECTS
from services.project_service import (
    add_environment, find_project, new_project, projects_to_records,
    remove_environment, remove_project, replace_project, resolve_project_id,
)
from ui.state import active_environment, load_projects
from utils.logger import get_logger

log = get_logger()


def _project_label(project) -> str:
    surname = project.client_surname or "New"
    address = project.site_address or "No address"
    return f"{surname} – {address}"


def register(app):
    """Register all sidebar callbacks on the given Dash app."""

    @app.callback(
        Output("project-select", "options"),
        Output("project-select", "value", allow_duplicate=True),
        Input(STORE_PROJECTS, "data"),
        State("project-select", "value"),
        prevent_initial_call="initial_duplicate",
    )
    def project_options(records, project_id):
        projects = load_projects(records)
        options = [{"label": _project_label(p), "value": p.id} for p in projects]
        selected = resolve_project_id(projects, project_id)
        return options, (no_update if selected == project_id else selected)

    @app.callback(
        Output("env-select", "options"),
        Input(STORE_PROJECTS, "data"),
        Input("project-select", "value"),
    )
    def environment_options(records, project_id):
        project = find_project(load_projects(records), project_id)
        return [{"label": env.name or f"#{i + 1}", "value": i} for i, env in enumerate(project.environments)]

    @app.callback(
        Output(STORE_PROJECTS, "data", allow_duplicate=True),
        Output("project-select", "value"),
        Input("add-project-btn", "n_clicks"),
        Input("remove-project-btn", "n_clicks"),
        State("project-select", "value"),
        State(STORE_PROJECTS, "data"),
        prevent_initial_call=True,
    )
    def manage_projects(_add, _remove, project_id, records):
        projects = load_projects(records)
        if callback_context.triggered_id == "add-project-btn":
            project = new_project()
            log.info("Created project %s", project.id)
            return projects_to_records([*projects, project]), project.id
        if callback_context.triggered_id == "remove-project-btn":
            current = find_project(projects, project_id)
            remaining = remove_project(projects, current.id)
            return projects_to_records(remaining), remaining[0].id
        return no_update, no_update

    @app.callback(
        Output("env-select", "value", allow_duplicate=True),
        Output("form-reload", "data", allow_duplicate=True),
        Input("project-select", "value"),
        prevent_initial_call=True,
    )
    def reset_environment(_project_id):
        return 0, time.time()

    @app.callback(
        Output(STORE_PROJECTS, "data", allow_duplicate=True),
        Output("env-select", "value", allow_duplicate=True),
        Output("form-reload", "data", allow_duplicate=True),
        Input("add-env-btn", "n_clicks"),
        Input("remove-env-btn", "n_clicks"),
        State("project-select", "value"),
        State("env-select", "value"),
        State(STORE_PROJECTS, "data"),
        prevent_initial_call=True,
    )
    def manage_environments(_add, _remove, project_id, env_index, records):
        projects = load_projects(records)
        project, index = active_environment(projects, project_id, env_index)
        if callback_context.triggered_id == "add-env-btn":
            project = add_environment(project)
            index = len(project.environments) - 1
        elif callback_context.triggered_id == "remove-env-btn":
            project = remove_environment(project, index)
            index = max(0, index - 1)
        else:
            return no_update, no_update, no_update
        return projects_to_records(replace_project(projects, project)), index, time.time()
