"""
domain/heat_load.py
===================
Volumetric room heat-load estimate.

    Φ = V · K / 0.86        V = floor area · ceiling height

K is the installer's rule-of-thumb coefficient (GlobalSettings), 0.86 converts
kcal/h to W. Non-finite or negative inputs count as 0, so the result is never
negative. No Dash / pandas / service-layer dependencies.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from config import KCAL_TO_WATT_FACTOR
from domain.room import GlobalSettings, RoomSpec


@dataclass(frozen=True)
class HeatLoad:
    volume: float   # [m³]
    watts: float    # [W], unrounded


def compute_heat_load(room: RoomSpec, settings: GlobalSettings) -> HeatLoad:
    """Room volume [m³] and required heat output [W]."""
    volume = _non_negative(room.surface) * _non_negative(room.height)
    watts = volume * _non_negative(settings.watt_coefficient) / KCAL_TO_WATT_FACTOR
    return HeatLoad(volume=volume, watts=watts)


def _non_negative(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value
