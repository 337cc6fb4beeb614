"""
domain/room.py
==============
Room ("environment") installation spec and global sizing settings.

RoomSpec is immutable: callers derive a new spec with update_room_spec(),
which also applies the manual-element invalidation rule.
"""
from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from config import DEFAULT_WATT_COEFFICIENT, NOT_DEFINED
from domain.catalog import DEFAULT_SERIES


class ValvePosition(str, enum.Enum):
    BOTTOM = "BOTTOM"   # Two valves at opposite lower corners
    LEFT   = "LEFT"     # Single vertical valve pair, left side
    RIGHT  = "RIGHT"    # Single vertical valve pair, right side


# Changing any of these makes a manually chosen element count meaningless.
INVALIDATING_FIELDS: FrozenSet[str] = frozenset(
    {"surface", "height", "valve_center_distance", "series"}
)


@dataclass(frozen=True)
class RoomSpec:
    """
    Installation spec for one room.

    Parameters
    ----------
    surface               : Floor area                          [m²]
    height                : Ceiling height                      [m]
    valve_center_distance : Installed / desired interaxis       [mm]
    valve_position        : BOTTOM | LEFT | RIGHT
    side_valve_distance   : Niche edge → valve centreline       [mm]
    niche_width           : Available niche width, 0 = unknown  [mm]
    niche_height          : Available niche height               [mm]
    valve_height          : Valve height above niche floor      [mm]
    valve_wall_distance   : Valve centreline → back wall         [mm]
    max_width             : Advisory maximum body width          [mm]
    manual_elements       : Element-count override, None = computed
    series                : Catalogue to search
    """

    surface: float = 20.0
    height: float = 2.7
    valve_center_distance: float = 0.0
    valve_position: ValvePosition = ValvePosition.BOTTOM
    valve_wall_distance: float = 50.0
    side_valve_distance: float = 0.0
    niche_width: float = 0.0
    niche_height: float = 0.0
    valve_height: float = 0.0
    max_width: float = 0.0
    manual_elements: Optional[int] = None
    has_diaphragm: bool = False
    series: str = DEFAULT_SERIES.value
    pipe_diameter: str = NOT_DEFINED
    pipe_material: str = NOT_DEFINED

    def to_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        data["valve_position"] = self.valve_position.value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RoomSpec":
        """Build a spec from a stored dict; unknown keys are ignored."""
        known = {f.name for f in dataclasses.fields(cls)}
        values = {k: v for k, v in (data or {}).items() if k in known}
        if "valve_position" in values:
            values["valve_position"] = ValvePosition(values["valve_position"])
        return cls(**values)


def update_room_spec(spec: RoomSpec, **changes: Any) -> RoomSpec:
    """
    Return spec with changes applied.

    If an invalidating field actually changes value, manual_elements is reset
    to None (unless the same call sets it explicitly).
    """
    if "valve_position" in changes:
        changes["valve_position"] = ValvePosition(changes["valve_position"])
    invalidated = any(
        field in INVALIDATING_FIELDS and getattr(spec, field) != value
        for field, value in changes.items()
    )
    if invalidated and "manual_elements" not in changes:
        changes["manual_elements"] = None
    return dataclasses.replace(spec, **changes)


@dataclass(frozen=True)
class GlobalSettings:
    """Global sizing settings. watt_coefficient is K in V·K/0.86."""

    watt_coefficient: float = DEFAULT_WATT_COEFFICIENT

    def to_dict(self) -> Dict[str, Any]:
        return {"watt_coefficient": self.watt_coefficient}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GlobalSettings":
        data = data or {}
        return cls(watt_coefficient=float(data.get("watt_coefficient", DEFAULT_WATT_COEFFICIENT)))
