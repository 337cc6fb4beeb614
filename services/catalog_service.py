"""
services/catalog_service.py
===========================
Catalogue selection, user-catalogue editing, and import of extracted
catalogue data.

The extraction service (image / PDF → JSON) is external; this module only
reads the JSON array it returns. Raises on caller mistakes, never inside the
sizing engine.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from domain.catalog import BUILTIN_CATALOGS, RadiatorModel, RadiatorSeries
from utils.helpers import new_id, safe_float
from utils.logger import get_logger

log = get_logger()

CATALOG_COLUMNS = ["Brand", "Model", "Code", "Height (mm)", "Interaxis (mm)", "W/element"]


class CatalogImportError(ValueError):
    """The extracted catalogue payload could not be read."""


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def catalog_for_series(
    series: str,
    custom_models: Optional[Iterable[RadiatorModel]] = None,
) -> List[RadiatorModel]:
    """Catalogue to match against for a room's series (CUSTOM = user catalogue)."""
    try:
        series = RadiatorSeries(series)
    except ValueError:
        raise ValueError(f"Unknown radiator series: {series!r}") from None
    if series is RadiatorSeries.CUSTOM:
        return list(custom_models or [])
    return list(BUILTIN_CATALOGS[series])


# ---------------------------------------------------------------------------
# User catalogue
# ---------------------------------------------------------------------------

def add_custom_model(
    custom_models: List[RadiatorModel],
    model: RadiatorModel,
) -> List[RadiatorModel]:
    """
    Append model to the user catalogue with a fresh id.

    A model needs at least a label and a height.
    """
    if not model.label or not model.height:
        raise ValueError("A custom model needs a label and a height.")
    stored = RadiatorModel(
        label=model.label, height=model.height, interaxis=model.interaxis,
        watts=model.watts, code=model.code, brand=model.brand,
        series=RadiatorSeries.CUSTOM.value, id=new_id(),
    )
    log.info("Added custom model %s (%s)", stored.label, stored.brand or "no brand")
    return [*custom_models, stored]


def remove_custom_model(custom_models: List[RadiatorModel], model_id: str) -> List[RadiatorModel]:
    return [m for m in custom_models if m.id != model_id]


def import_extracted_models(payload: Any, brand: str = "") -> List[RadiatorModel]:
    """
    Parse the JSON array produced by the catalogue-extraction service.

    Each row carries 'label', 'code', 'height', 'interaxis', 'watts'. Rows
    without a label or a positive height are skipped with a warning. Every
    accepted model gets the given brand and a fresh id.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload or "[]")
        except json.JSONDecodeError as e:
            raise CatalogImportError(f"Catalogue payload is not valid JSON: {e}") from e
    if isinstance(payload, dict):
        payload = payload.get("models", [])
    if not isinstance(payload, list):
        raise CatalogImportError("Catalogue payload must be a JSON array of models.")

    brand = brand or "Generic"
    models: List[RadiatorModel] = []
    for idx, row in enumerate(payload):
        if not isinstance(row, dict):
            log.warning("Skipping catalogue row %d: not an object", idx)
            continue
        label  = str(row.get("label") or "").strip()
        height = safe_float(row.get("height"), 0.0)
        if not label or height <= 0:
            log.warning("Skipping catalogue row %d: missing label or height", idx)
            continue
        models.append(RadiatorModel(
            label     = label,
            code      = str(row.get("code") or ""),
            height    = height,
            interaxis = safe_float(row.get("interaxis"), 0.0),
            watts     = safe_float(row.get("watts"), 0.0),
            brand     = brand,
            series    = RadiatorSeries.CUSTOM.value,
            id        = new_id(),
        ))
    log.info("Imported %d of %d extracted models for brand %s", len(models), len(payload), brand)
    return models


# ---------------------------------------------------------------------------
# (De)serialisation and tables
# ---------------------------------------------------------------------------

def models_from_records(records: Optional[List[Dict[str, Any]]]) -> List[RadiatorModel]:
    return [RadiatorModel.from_dict(r) for r in (records or [])]


def models_to_records(models: Iterable[RadiatorModel]) -> List[Dict[str, Any]]:
    return [m.to_dict() for m in models]


def catalog_table(models: Iterable[RadiatorModel]) -> pd.DataFrame:
    """Catalogue as a display DataFrame, in catalogue order."""
    rows = [
        {
            "Brand":          m.brand,
            "Model":          m.label,
            "Code":           m.code,
            "Height (mm)":    m.height,
            "Interaxis (mm)": m.interaxis,
            "W/element":      m.watts,
        }
        for m in models
    ]
    return pd.DataFrame(rows, columns=CATALOG_COLUMNS)
