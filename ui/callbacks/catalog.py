"""
ui/callbacks/catalog.py
=======================
Callbacks for the settings tab: custom catalogue entry, import and removal.
"""
from __future__ import annotations

import base64

import dash_bootstrap_components as dbc
from dash import Input, Output, State, no_update

from config import SERIES_LABELS, STORE_CUSTOM_MODELS
from domain.catalog import RadiatorModel, RadiatorSeries
from services.catalog_service import (
    CatalogImportError, add_custom_model, catalog_table, import_extracted_models,
    models_to_records, remove_custom_model,
)
from ui.state import load_custom_models
from utils.helpers import safe_float
from utils.logger import get_logger

log = get_logger()


def register(app):

    @app.callback(
        Output("custom-catalog-table", "columns"),
        Output("custom-catalog-table", "data"),
        Output("custom-model-select", "options"),
        Output("spec-series", "options"),
        Input(STORE_CUSTOM_MODELS, "data"),
    )
    def show_custom_catalog(records):
        models = load_custom_models(records)
        df = catalog_table(models)
        select = [{"label": f"{m.brand} {m.label}".strip(), "value": m.id} for m in models]
        series = [
            {"label": f"{label} ({len(models)})" if key == RadiatorSeries.CUSTOM.value else label, "value": key}
            for key, label in SERIES_LABELS.items()
        ]
        return [{"name": c, "id": c} for c in df.columns], df.to_dict("records"), select, series

    @app.callback(
        Output(STORE_CUSTOM_MODELS, "data", allow_duplicate=True),
        Output("custom-model-feedback", "children"),
        Input("add-custom-model-btn", "n_clicks"),
        State("custom-brand", "value"),
        State("custom-label", "value"),
        State("custom-code", "value"),
        State("custom-height", "value"),
        State("custom-interaxis", "value"),
        State("custom-watts", "value"),
        State(STORE_CUSTOM_MODELS, "data"),
        prevent_initial_call=True,
    )
    def add_model(_n, brand, label, code, height, interaxis, watts, records):
        model = RadiatorModel(
            label     = (label or "").strip(),
            height    = safe_float(height, 0.0),
            interaxis = safe_float(interaxis, 0.0),
            watts     = safe_float(watts, 0.0),
            code      = code or "",
            brand     = brand or "",
        )
        try:
            models = add_custom_model(load_custom_models(records), model)
        except ValueError as e:
            return no_update, dbc.Alert(str(e), color="danger")
        return models_to_records(models), dbc.Alert(f"Model {model.label} added.", color="success")

    @app.callback(
        Output(STORE_CUSTOM_MODELS, "data", allow_duplicate=True),
        Output("catalog-import-feedback", "children"),
        Input("catalog-upload", "contents"),
        State("catalog-upload", "filename"),
        State("catalog-brand", "value"),
        State(STORE_CUSTOM_MODELS, "data"),
        prevent_initial_call=True,
    )
    def import_catalog(contents, filename, brand, records):
        if not contents:
            return no_update, no_update
        try:
            _, encoded = contents.split(",", 1)
            payload = base64.b64decode(encoded).decode("utf-8")
            imported = import_extracted_models(payload, brand or "")
        except (CatalogImportError, ValueError) as e:
            log.warning("Catalogue import from %s failed: %s", filename, e)
            return no_update, dbc.Alert(f"Import failed: {e}", color="danger")
        models = load_custom_models(records) + imported
        return models_to_records(models), dbc.Alert(f"{len(imported)} models imported.", color="success")

    @app.callback(
        Output(STORE_CUSTOM_MODELS, "data", allow_duplicate=True),
        Input("remove-custom-model-btn", "n_clicks"),
        State("custom-model-select", "value"),
        State(STORE_CUSTOM_MODELS, "data"),
        prevent_initial_call=True,
    )
    def remove_model(_n, model_id, records):
        if not model_id:
            return no_update
        return models_to_records(remove_custom_model(load_custom_models(records), model_id))
