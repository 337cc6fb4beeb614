"""
domain/radiator.py
==================
Radiator sizing engine: heat load → catalogue match → element count →
footprint → eccentric / clearance verdicts.

size_room() is a pure function of (RoomSpec, catalogue, GlobalSettings). It
never raises: incomplete input degrades to zero / placeholder output, as is
normal while a room is still being filled in.

Zero Dash / pandas / service-layer dependencies.
"""
from __future__ import annotations

import enum
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

from config import (
    BALANCE_OK_W,
    BALANCE_SLIGHTLY_OVERSIZED_W,
    BALANCE_SLIGHTLY_UNDERSIZED_W,
    BALANCE_UNDERSIZED_W,
    ELEMENT_WIDTH_MM,
)
from domain.catalog import PLACEHOLDER_MODEL, RadiatorModel, find_closest_model
from domain.clearance import (
    eccentric_offset,
    eccentric_text,
    needs_eccentric,
    occupied_width,
    validate_clearance,
)
from domain.heat_load import compute_heat_load
from domain.room import GlobalSettings, RoomSpec


class PowerBalance(str, enum.Enum):
    UNDEFINED           = "UNDEFINED"
    UNDERSIZED          = "UNDERSIZED"
    SLIGHTLY_UNDERSIZED = "SLIGHTLY_UNDERSIZED"
    BALANCED            = "BALANCED"
    SLIGHTLY_OVERSIZED  = "SLIGHTLY_OVERSIZED"
    OVERSIZED           = "OVERSIZED"


@dataclass(frozen=True)
class SizingResult:
    """Everything the UI shows for one room; recomputed on every change."""

    model: RadiatorModel
    series: str
    volume: float
    required_watts: int
    base_elements: int
    current_elements: int
    total_watts: int
    body_length: float
    total_occupied_width: float
    has_clearance_issue: bool
    needs_eccentric: bool
    eccentric_offset: float
    eccentric_text: Optional[str]
    exceeds_max_width: bool
    power_balance: PowerBalance

    @property
    def total_length(self) -> float:
        return self.body_length

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["power_balance"] = self.power_balance.value
        return data


# ---------------------------------------------------------------------------
# Element count
# ---------------------------------------------------------------------------

def compute_elements(
    required_watts: float,
    model: RadiatorModel,
    manual_override: Optional[int] = None,
) -> int:
    """
    Elements to install. A manual override is used as-is; otherwise
    ceil(required / watts per element).

    A zero-watt model is divided as if it delivered 1 W per element, which
    yields ceil(required_watts) elements rather than an error.
    """
    if manual_override is not None:
        return int(manual_override)
    return base_elements(required_watts, model)


def base_elements(required_watts: float, model: RadiatorModel) -> int:
    return int(math.ceil(required_watts / (model.watts or 1)))


def body_length(elements: int) -> float:
    """Radiator body length [mm]."""
    return elements * ELEMENT_WIDTH_MM


# ---------------------------------------------------------------------------
# Power balance
# ---------------------------------------------------------------------------

def classify_power_balance(total_watts: float, required_watts: float) -> PowerBalance:
    """Grade installed vs required output by their difference [W]."""
    if not total_watts or not required_watts:
        return PowerBalance.UNDEFINED
    diff = total_watts - required_watts
    if diff <= BALANCE_UNDERSIZED_W:
        return PowerBalance.UNDERSIZED
    if diff <= BALANCE_SLIGHTLY_UNDERSIZED_W:
        return PowerBalance.SLIGHTLY_UNDERSIZED
    if diff <= BALANCE_OK_W:
        return PowerBalance.BALANCED
    if diff < BALANCE_SLIGHTLY_OVERSIZED_W:
        return PowerBalance.SLIGHTLY_OVERSIZED
    return PowerBalance.OVERSIZED


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

def size_room(
    room: RoomSpec,
    catalog: Sequence[RadiatorModel],
    settings: GlobalSettings,
) -> SizingResult:
    """Size one room against one catalogue."""
    load = compute_heat_load(room, settings)
    required = _round_half_up(load.watts)

    if not catalog:
        return _empty_result(room, load.volume, required)

    target = room.valve_center_distance or 0
    model = find_closest_model(catalog, target)

    base = base_elements(load.watts, model)
    elements = compute_elements(load.watts, model, room.manual_elements)
    length = body_length(elements)

    eccentric = needs_eccentric(room.valve_position, target, model.interaxis)
    occupied = occupied_width(room.valve_position, room.side_valve_distance, length, eccentric)
    clearance_issue = validate_clearance(room, length, eccentric)

    total = _round_half_up(elements * model.watts)
    return SizingResult(
        model                = model,
        series               = room.series,
        volume               = load.volume,
        required_watts       = required,
        base_elements        = base,
        current_elements     = elements,
        total_watts          = total,
        body_length          = length,
        total_occupied_width = occupied,
        has_clearance_issue  = clearance_issue,
        needs_eccentric      = eccentric,
        eccentric_offset     = eccentric_offset(target, model.interaxis) if eccentric else 0.0,
        eccentric_text       = eccentric_text(room.valve_position, target, model.interaxis),
        exceeds_max_width    = bool(room.max_width and room.max_width > 0 and length > room.max_width),
        power_balance        = classify_power_balance(total, required),
    )


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _empty_result(room: RoomSpec, volume: float, required: int) -> SizingResult:
    return SizingResult(
        model                = PLACEHOLDER_MODEL,
        series               = room.series,
        volume               = volume,
        required_watts       = required,
        base_elements        = 0,
        current_elements     = 0,
        total_watts          = 0,
        body_length          = 0.0,
        total_occupied_width = 0.0,
        has_clearance_issue  = False,
        needs_eccentric      = False,
        eccentric_offset     = 0.0,
        eccentric_text       = None,
        exceeds_max_width    = False,
        power_balance        = PowerBalance.UNDEFINED,
    )


def _round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (round() is banker's)."""
    return int(math.floor(value + 0.5))
