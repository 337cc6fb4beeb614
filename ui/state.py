"""
ui/state.py
===========
Rebuilds domain objects from the browser stores for a single callback run.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from config import DEFAULT_WATT_COEFFICIENT
from domain.catalog import RadiatorModel
from domain.room import GlobalSettings
from services.catalog_service import models_from_records
from services.project_service import Project, find_project, projects_from_records
from utils.helpers import safe_float, safe_int


def load_projects(records: Optional[List[dict]]) -> List[Project]:
    return projects_from_records(records)


def load_custom_models(records: Optional[List[dict]]) -> List[RadiatorModel]:
    return models_from_records(records)


def load_settings(watt_coefficient: Any) -> GlobalSettings:
    k = safe_float(watt_coefficient, DEFAULT_WATT_COEFFICIENT)
    return GlobalSettings(watt_coefficient=max(k, 0.0))


def active_environment(
    projects: List[Project],
    project_id: Optional[str],
    env_index: Any,
) -> Tuple[Project, int]:
    """Active project and a valid environment index (clamped)."""
    project = find_project(projects, project_id)
    index = safe_int(env_index, 0)
    index = min(max(index, 0), len(project.environments) - 1)
    return project, index
