"""
services/project_service.py
===========================
Client projects and their rooms ("environments").

All operations are pure reducers: they take a Project (or the project list)
and return an updated copy, so Dash callbacks can round-trip state through
dcc.Store. Sizing is delegated to domain.radiator.size_room; this module
only selects the catalogue and aggregates results into DataFrames.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from domain.catalog import RadiatorModel
from domain.radiator import SizingResult, size_room
from domain.room import GlobalSettings, RoomSpec, update_room_spec
from services.catalog_service import catalog_for_series
from utils.helpers import new_id
from utils.logger import get_logger

log = get_logger()

PROJECT_DETAIL_FIELDS = ("client_name", "client_surname", "site_address")

SUMMARY_COLUMNS = [
    "Environment", "Series", "Model", "Height (mm)", "Volume (m³)",
    "Required (W)", "Elements", "Installed (W)", "Coverage (%)",
    "Body length (mm)", "Occupied width (mm)", "Eccentric", "Clearance issue", "Balance",
]


@dataclass(frozen=True)
class Environment:
    id: str
    name: str
    spec: RoomSpec = field(default_factory=RoomSpec)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "spec": self.spec.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Environment":
        return cls(
            id   = data.get("id") or new_id(),
            name = data.get("name", ""),
            spec = RoomSpec.from_dict(data.get("spec")),
        )


@dataclass(frozen=True)
class Project:
    id: str
    client_name: str = ""
    client_surname: str = ""
    site_address: str = ""
    environments: Tuple[Environment, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":             self.id,
            "client_name":    self.client_name,
            "client_surname": self.client_surname,
            "site_address":   self.site_address,
            "environments":   [env.to_dict() for env in self.environments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        envs = tuple(Environment.from_dict(e) for e in data.get("environments") or [])
        return cls(
            id             = data.get("id") or new_id(),
            client_name    = data.get("client_name", ""),
            client_surname = data.get("client_surname", ""),
            site_address   = data.get("site_address", ""),
            environments   = envs or (new_environment(1),),
        )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def new_environment(number: int) -> Environment:
    return Environment(id=new_id(), name=f"Environment {number}", spec=RoomSpec())


def new_project() -> Project:
    return Project(id=new_id(), environments=(new_environment(1),))


# ---------------------------------------------------------------------------
# Project list
# ---------------------------------------------------------------------------

def find_project(projects: List[Project], project_id: Optional[str]) -> Project:
    """Project with project_id, or the first project when it is gone."""
    for project in projects:
        if project.id == project_id:
            return project
    return projects[0]


def resolve_project_id(projects: List[Project], project_id: Optional[str]) -> Optional[str]:
    """Keep project_id while it is still stored, else the first stored project's id."""
    if any(p.id == project_id for p in projects):
        return project_id
    return projects[0].id if projects else None


def replace_project(projects: List[Project], project: Project) -> List[Project]:
    return [project if p.id == project.id else p for p in projects]


def remove_project(projects: List[Project], project_id: str) -> List[Project]:
    """Drop a project; the last remaining project is never removed."""
    if len(projects) <= 1:
        return list(projects)
    log.debug("Removing project %s", project_id)
    return [p for p in projects if p.id != project_id]


def update_project_details(project: Project, **details: str) -> Project:
    unknown = set(details) - set(PROJECT_DETAIL_FIELDS)
    if unknown:
        raise ValueError(f"Unknown project fields: {sorted(unknown)}")
    return dataclasses.replace(project, **details)


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------

def add_environment(project: Project) -> Project:
    env = new_environment(len(project.environments) + 1)
    return dataclasses.replace(project, environments=project.environments + (env,))


def remove_environment(project: Project, index: int) -> Project:
    """Drop environment at index; the last environment is never removed."""
    if len(project.environments) <= 1:
        return project
    _check_index(project, index)
    envs = project.environments[:index] + project.environments[index + 1:]
    return dataclasses.replace(project, environments=envs)


def rename_environment(project: Project, index: int, name: str) -> Project:
    return _replace_environment(project, index, name=name)


def update_environment_spec(project: Project, index: int, **changes: Any) -> Project:
    """
    Apply spec field changes to one environment.

    Changing surface, height, valve_center_distance or series clears a
    manual element count.
    """
    env = project.environments[_check_index(project, index)]
    return _replace_environment(project, index, spec=update_room_spec(env.spec, **changes))


def set_manual_elements(project: Project, index: int, value: Optional[int]) -> Project:
    """Override the computed element count (None restores the computed count)."""
    env = project.environments[_check_index(project, index)]
    value = None if value is None else int(value)
    return _replace_environment(project, index, spec=dataclasses.replace(env.spec, manual_elements=value))


# ---------------------------------------------------------------------------
# Sizing and summaries
# ---------------------------------------------------------------------------

def size_environment(
    env: Environment,
    custom_models: List[RadiatorModel],
    settings: GlobalSettings,
) -> SizingResult:
    catalog = catalog_for_series(env.spec.series, custom_models)
    return size_room(env.spec, catalog, settings)


def size_project(
    project: Project,
    custom_models: List[RadiatorModel],
    settings: GlobalSettings,
) -> List[SizingResult]:
    return [size_environment(env, custom_models, settings) for env in project.environments]


def project_total_watts(
    project: Project,
    custom_models: List[RadiatorModel],
    settings: GlobalSettings,
) -> int:
    """Installed output of the whole project [W]."""
    return sum(r.total_watts for r in size_project(project, custom_models, settings))


def project_summary(
    project: Project,
    custom_models: List[RadiatorModel],
    settings: GlobalSettings,
) -> pd.DataFrame:
    """One row per environment, in project order."""
    results = size_project(project, custom_models, settings)
    rows = [
        {
            "Environment":         env.name,
            "Series":              res.series,
            "Model":               res.model.label,
            "Height (mm)":         res.model.height,
            "Volume (m³)":         round(res.volume, 2),
            "Required (W)":        res.required_watts,
            "Elements":            res.current_elements,
            "Installed (W)":       res.total_watts,
            "Body length (mm)":    res.body_length,
            "Occupied width (mm)": res.total_occupied_width,
            "Eccentric":           res.eccentric_text or "",
            "Clearance issue":     res.has_clearance_issue,
            "Balance":             res.power_balance.value,
        }
        for env, res in zip(project.environments, results)
    ]
    df = pd.DataFrame(rows, columns=[c for c in SUMMARY_COLUMNS if c != "Coverage (%)"])
    required = df["Required (W)"].to_numpy(dtype=float)
    installed = df["Installed (W)"].to_numpy(dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        coverage = np.where(required > 0, installed / required * 100.0, np.nan)
    df.insert(SUMMARY_COLUMNS.index("Coverage (%)"), "Coverage (%)", np.round(coverage, 1))
    return df


# ---------------------------------------------------------------------------
# (De)serialisation
# ---------------------------------------------------------------------------

def projects_from_records(records: Optional[List[Dict[str, Any]]]) -> List[Project]:
    projects = [Project.from_dict(r) for r in (records or [])]
    return projects or [new_project()]


def projects_to_records(projects: List[Project]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in projects]


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _check_index(project: Project, index: int) -> int:
    if not 0 <= index < len(project.environments):
        raise IndexError(f"Environment index {index} out of range")
    return index


def _replace_environment(project: Project, index: int, **changes: Any) -> Project:
    _check_index(project, index)
    envs = list(project.environments)
    envs[index] = dataclasses.replace(envs[index], **changes)
    return dataclasses.replace(project, environments=tuple(envs))
