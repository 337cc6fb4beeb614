"""
ui/layout.py
============
All Dash layout components: navbar, sidebar, tabs, and their child cards.

Callbacks are NOT defined here – see ui/callbacks/.
This file only builds static (or mostly-static) component trees.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html, dash_table

from config import (
    APP_TITLE, CHART_HEIGHT_PX, DEFAULT_WATT_COEFFICIENT,
    PIPE_DIAMETERS, PIPE_MATERIALS, SERIES_LABELS, VALVE_POSITION_LABELS,
    STORE_CUSTOM_MODELS, STORE_PROJECTS,
)
from domain.room import RoomSpec
from services.project_service import new_project, projects_to_records

_DEFAULT_SPEC = RoomSpec()

_TABLE_STYLE = dict(
    style_table={"overflowX": "auto"},
    style_header={"backgroundColor": "#f8f9fa", "fontWeight": "bold", "textAlign": "center"},
    style_cell={"padding": "8px", "textAlign": "left", "border": "1px solid #dee2e6"},
    style_data_conditional=[{"if": {"row_index": "odd"}, "backgroundColor": "rgb(248,248,248)"}],
)

# ---------------------------------------------------------------------------
# Navbar
# ---------------------------------------------------------------------------
navbar = dbc.Navbar(
    dbc.Container([
        dbc.NavbarBrand(APP_TITLE, className="ms-2"),
        html.Span("Radiator sizing & niche clearance", className="text-white-50 small ms-auto"),
    ], fluid=True),
    color="dark", dark=True, sticky="top",
)


# ---------------------------------------------------------------------------
# Sidebar — projects / environments
# ---------------------------------------------------------------------------
def build_sidebar() -> html.Div:
    return html.Div([
        dbc.Card([
            dbc.CardHeader("📁 Projects"),
            dbc.CardBody([
                dcc.Dropdown(id="project-select", clearable=False, className="mb-2",
                             persistence=True, persistence_type="local"),
                dbc.ButtonGroup([
                    dbc.Button("+ New", id="add-project-btn", color="dark", size="sm"),
                    dbc.Button("Remove", id="remove-project-btn", color="secondary", outline=True, size="sm"),
                ]),
            ]),
        ], className="mb-4"),
        dbc.Card([
            dbc.CardHeader("🏠 Environments"),
            dbc.CardBody([
                dcc.Dropdown(id="env-select", clearable=False, value=0, className="mb-2"),
                dbc.ButtonGroup([
                    dbc.Button("+ Add", id="add-env-btn", color="dark", size="sm"),
                    dbc.Button("Remove", id="remove-env-btn", color="secondary", outline=True, size="sm"),
                ]),
            ]),
        ], className="mb-4"),
    ])


# ---------------------------------------------------------------------------
# Tab 1 — Sizing
# ---------------------------------------------------------------------------
def _number(label: str, id_: str, value, step=1, help_text: str = "") -> html.Div:
    children = [
        dbc.Label(label),
        dbc.Input(id=id_, type="number", min=0, value=value, step=step),
    ]
    if help_text:
        children.append(dbc.FormText(help_text))
    return html.Div(children, className="mb-3")


def _project_details_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("👤 Client"),
        dbc.CardBody(dbc.Row([
            dbc.Col([dbc.Label("Name"),    dbc.Input(id="client-name", type="text", debounce=True)], md=4),
            dbc.Col([dbc.Label("Surname"), dbc.Input(id="client-surname", type="text", debounce=True)], md=4),
            dbc.Col([dbc.Label("Address"), dbc.Input(id="site-address", type="text", debounce=True)], md=4),
        ])),
    ], className="mb-4")


def _room_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("📐 Sizing"),
        dbc.CardBody([
            _number("Surface (m²)", "spec-surface", _DEFAULT_SPEC.surface, step=0.5),
            _number("Ceiling height (m)", "spec-height", _DEFAULT_SPEC.height, step=0.1),
        ]),
    ], className="mb-4")


def _niche_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("🧱 Niche"),
        dbc.CardBody([
            _number("Niche width (mm)", "spec-niche-width", _DEFAULT_SPEC.niche_width,
                    help_text="0 = not measured yet; clearance check is skipped."),
            _number("Niche height (mm)", "spec-niche-height", _DEFAULT_SPEC.niche_height),
            _number("Valve height (mm)", "spec-valve-height", _DEFAULT_SPEC.valve_height),
            _number("Valve distance from wall (mm)", "spec-valve-wall-distance",
                    _DEFAULT_SPEC.valve_wall_distance),
            _number("Valve distance from side (mm)", "spec-side-valve-distance",
                    _DEFAULT_SPEC.side_valve_distance, help_text="Minimum 50 mm."),
        ]),
    ], className="mb-4")


def _technical_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("🛠️ Technical configuration"),
        dbc.CardBody([
            dbc.Label("Product range"),
            dcc.Dropdown(id="spec-series", clearable=False, className="mb-3",
                         options=[{"label": v, "value": k} for k, v in SERIES_LABELS.items()],
                         value=_DEFAULT_SPEC.series),
            dbc.Label("Valve position"),
            dcc.Dropdown(id="spec-valve-position", clearable=False, className="mb-3",
                         options=[{"label": v, "value": k} for k, v in VALVE_POSITION_LABELS.items()],
                         value=_DEFAULT_SPEC.valve_position.value),
            _number("Interaxis (mm)", "spec-valve-center-distance", _DEFAULT_SPEC.valve_center_distance),
            _number("Max width (mm)", "spec-max-width", _DEFAULT_SPEC.max_width),
            dbc.Checklist(id="spec-has-diaphragm", className="mb-3",
                          options=[{"label": " Diaphragm", "value": "yes"}], value=[]),
            dbc.Row([
                dbc.Col([dbc.Label("Pipe"),
                         dcc.Dropdown(id="spec-pipe-material", clearable=False,
                                      options=PIPE_MATERIALS, value=_DEFAULT_SPEC.pipe_material)], md=6),
                dbc.Col([dbc.Label("Diameter"),
                         dcc.Dropdown(id="spec-pipe-diameter", clearable=False,
                                      options=PIPE_DIAMETERS, value=_DEFAULT_SPEC.pipe_diameter)], md=6),
            ]),
        ]),
    ], className="mb-4")


def _result_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("✅ Optimal configuration"),
        dbc.CardBody([
            dbc.Label("Elements (leave empty for the computed count)"),
            dbc.Input(id="spec-manual-elements", type="number", min=0, step=1,
                      style={"maxWidth": "160px"}, className="mb-3"),
            html.Div(id="sizing-result"),
        ]),
    ], className="mb-4", style={"backgroundColor": "#f0f4ff", "border": "1px solid #cce"})


def build_sizing_tab() -> dbc.Tab:
    return dbc.Tab(
        label="1️⃣ Sizing", tab_id="tab-sizing",
        children=[html.Div([
            _project_details_card(),
            dbc.Row([
                dbc.Col(dbc.Input(id="env-name", type="text", debounce=True,
                                  className="fs-3 fw-bold border-0"), md=8),
                dbc.Col(html.H3(id="required-watts-badge", className="text-end"), md=4),
            ], className="mb-3"),
            dbc.Row([
                dbc.Col([_room_card(), _niche_card()], md=4),
                dbc.Col([_technical_card()], md=4),
                dbc.Col([_result_card()], md=4),
            ]),
        ], className="p-3")],
    )


# ---------------------------------------------------------------------------
# Tab 2 — Project summary
# ---------------------------------------------------------------------------
def build_summary_tab() -> dbc.Tab:
    return dbc.Tab(
        label="2️⃣ Project summary", tab_id="tab-summary",
        children=[html.Div([
            html.Div(id="project-total", className="alert alert-info"),
            dash_table.DataTable(id="project-summary-table", page_size=25, **_TABLE_STYLE),
            dcc.Graph(id="project-summary-chart", style={"height": f"{CHART_HEIGHT_PX}px"},
                      className="mt-4"),
        ], className="p-3")],
    )


# ---------------------------------------------------------------------------
# Tab 3 — Settings & custom catalogue
# ---------------------------------------------------------------------------
def _coefficient_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("🌡️ Heat load"),
        dbc.CardBody([
            dbc.Label("Coefficient K (W/m³)"),
            dbc.Input(id="watt-coefficient", type="number", min=0, step=1,
                      value=DEFAULT_WATT_COEFFICIENT, persistence=True, persistence_type="local"),
            dbc.FormText("Required power = volume · K / 0.86"),
        ]),
    ], className="mb-4")


def _custom_model_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("✍️ Add model manually"),
        dbc.CardBody([
            dbc.Input(id="custom-brand", placeholder="Brand", className="mb-2"),
            dbc.Input(id="custom-label", placeholder="Model", className="mb-2"),
            dbc.Input(id="custom-code", placeholder="Code", className="mb-2"),
            dbc.Input(id="custom-height", type="number", placeholder="Height (mm)", className="mb-2"),
            dbc.Input(id="custom-interaxis", type="number", placeholder="Interaxis (mm)", className="mb-2"),
            dbc.Input(id="custom-watts", type="number", placeholder="W/element (ΔT 50)", className="mb-2"),
            dbc.Button("Add", id="add-custom-model-btn", color="dark", className="w-100"),
            html.Div(id="custom-model-feedback", className="mt-2"),
        ]),
    ], className="mb-4")


def _catalog_import_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("📥 Import extracted catalogue"),
        dbc.CardBody([
            dbc.Input(id="catalog-brand", placeholder="Brand (e.g. Fondital)", className="mb-2"),
            dcc.Upload(
                id="catalog-upload",
                children=html.Div(["Drop or ", html.A("select"), " a JSON file"]),
                accept="application/json",
                style={"borderWidth": "1px", "borderStyle": "dashed", "borderRadius": "8px",
                       "textAlign": "center", "padding": "16px"},
            ),
            dbc.FormText("JSON array of {label, code, height, interaxis, watts}."),
            html.Div(id="catalog-import-feedback", className="mt-2"),
        ]),
    ], className="mb-4")


def build_settings_tab() -> dbc.Tab:
    return dbc.Tab(
        label="⚙️ Settings", tab_id="tab-settings",
        children=[html.Div([
            dbc.Row([
                dbc.Col([_coefficient_card(), _catalog_import_card()], md=4),
                dbc.Col([_custom_model_card()], md=4),
                dbc.Col([
                    dbc.Card([
                        dbc.CardHeader("📚 Custom catalogue"),
                        dbc.CardBody([
                            dash_table.DataTable(id="custom-catalog-table", page_size=15, **_TABLE_STYLE),
                            dbc.Row([
                                dbc.Col(dcc.Dropdown(id="custom-model-select", placeholder="Model…"), md=8),
                                dbc.Col(dbc.Button("Remove", id="remove-custom-model-btn",
                                                   color="secondary", outline=True), md=4),
                            ], className="mt-3"),
                        ]),
                    ]),
                ], md=4),
            ]),
        ], className="p-3")],
    )


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------
def build_stores(initial_projects: list) -> list:
    # Local stores keep what the browser already holds; `data` only seeds a
    # first visit.
    return [
        dcc.Store(id=STORE_PROJECTS, storage_type="local", data=initial_projects),
        dcc.Store(id=STORE_CUSTOM_MODELS, storage_type="local", data=[]),
        dcc.Store(id="form-reload"),
    ]


def build_layout() -> html.Div:
    """Page layout; called per page load so a first visit gets a fresh project."""
    project = new_project()
    return html.Div([
        *build_stores(projects_to_records([project])),
        navbar,
        dbc.Container(dbc.Row([
            dbc.Col(build_sidebar(), md=3, className="pt-4"),
            dbc.Col(dbc.Tabs([
                build_sizing_tab(),
                build_summary_tab(),
                build_settings_tab(),
            ], id="tabs", active_tab="tab-sizing", className="mt-4"), md=9),
        ]), fluid=True),
    ])
