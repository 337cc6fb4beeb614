"""
domain/clearance.py
===================
Niche footprint and minimum-clearance checks.

Two layouts:

BOTTOM      valve 1 | 50 | body | 50 | valve 2 | 50 |
            (valves outside the body at opposite lower corners)
LEFT/RIGHT  valve pair | 50 | body | eccentric (50, if needed)

Every valve centreline needs MIN_CLEARANCE_MM to the niche edge or to the
next fitting. All lengths in mm.
"""
from __future__ import annotations

from typing import Optional

from config import ECCENTRIC_WIDTH_MM, MIN_CLEARANCE_MM
from domain.room import RoomSpec, ValvePosition


# ---------------------------------------------------------------------------
# Eccentric fittings
# ---------------------------------------------------------------------------

def eccentric_offset(target_interaxis: float, model_interaxis: float) -> float:
    """Horizontal offset an eccentric fitting has to bridge [mm]."""
    return abs(target_interaxis - model_interaxis)


def needs_eccentric(
    valve_position: ValvePosition,
    target_interaxis: float,
    model_interaxis: float,
) -> bool:
    """
    Only side-mounted (LEFT/RIGHT) valve pairs are compensated with eccentrics;
    BOTTOM connections are never flagged.
    """
    if ValvePosition(valve_position) is ValvePosition.BOTTOM:
        return False
    return eccentric_offset(target_interaxis, model_interaxis) > 0


def eccentric_text(
    valve_position: ValvePosition,
    target_interaxis: float,
    model_interaxis: float,
) -> Optional[str]:
    """Installer note for the eccentric fitting, or None when not needed."""
    if not needs_eccentric(valve_position, target_interaxis, model_interaxis):
        return None
    offset = eccentric_offset(target_interaxis, model_interaxis)
    return f"eccentric fittings required to compensate {offset:g} mm"


# ---------------------------------------------------------------------------
# Footprint
# ---------------------------------------------------------------------------

def occupied_width(
    valve_position: ValvePosition,
    side_valve_distance: float,
    body_length: float,
    with_eccentric: bool = False,
) -> float:
    """Total horizontal space taken from the niche's left edge [mm]."""
    if ValvePosition(valve_position) is ValvePosition.BOTTOM:
        return side_valve_distance + MIN_CLEARANCE_MM + body_length + 2 * MIN_CLEARANCE_MM
    extra = ECCENTRIC_WIDTH_MM if with_eccentric else 0
    return side_valve_distance + MIN_CLEARANCE_MM + body_length + extra


def validate_clearance(room: RoomSpec, body_length: float, with_eccentric: bool = False) -> bool:
    """
    True when the layout violates a minimum clearance.

    Skipped (False) while the niche width is unknown (<= 0). Advisory only.
    """
    if not room.niche_width or room.niche_width <= 0:
        return False
    if room.side_valve_distance < MIN_CLEARANCE_MM:
        return True

    total_occupied = occupied_width(
        room.valve_position, room.side_valve_distance, body_length, with_eccentric
    )
    if ValvePosition(room.valve_position) is ValvePosition.BOTTOM:
        # total_occupied already reserves the right-hand clearance
        return room.niche_width - total_occupied < 0
    return room.niche_width - total_occupied < MIN_CLEARANCE_MM
