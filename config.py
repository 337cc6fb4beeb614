"""
config.py
=========
Application-wide constants: sizing-engine constants, catalog series names,
installation option lists, and UI helpers. No business logic lives here.
"""
from __future__ import annotations
from typing import Dict, List

# ---------------------------------------------------------------------------
# Sizing engine
# ---------------------------------------------------------------------------
ELEMENT_WIDTH_MM: int = 45            # Fixed element pitch                [mm]
MIN_CLEARANCE_MM: int = 50            # Standoff on every side / fitting   [mm]
ECCENTRIC_WIDTH_MM: int = 50          # Extra width taken by an eccentric  [mm]
KCAL_TO_WATT_FACTOR: float = 0.86     # kcal/h → W divisor
DEFAULT_WATT_COEFFICIENT: float = 30.0  # K  [W/m³ before the 0.86 divisor]

# ---------------------------------------------------------------------------
# Power balance  (installed – required, W)
# ---------------------------------------------------------------------------
BALANCE_UNDERSIZED_W: float = -250.0
BALANCE_SLIGHTLY_UNDERSIZED_W: float = -100.0
BALANCE_OK_W: float = 100.0
BALANCE_SLIGHTLY_OVERSIZED_W: float = 250.0

BALANCE_COLORS: Dict[str, str] = {
    "UNDEFINED":           "dark",
    "UNDERSIZED":          "primary",
    "SLIGHTLY_UNDERSIZED": "info",
    "BALANCED":            "success",
    "SLIGHTLY_OVERSIZED":  "warning",
    "OVERSIZED":           "danger",
}

# ---------------------------------------------------------------------------
# Installation options
# ---------------------------------------------------------------------------
NOT_DEFINED = "N.D."

PIPE_DIAMETERS: List[str] = [
    NOT_DEFINED, "10 mm", "12 mm", "14 mm", "15 mm", "16 mm", "18 mm", "20 mm",
    "22 mm", "26 mm", "28 mm", '3/8"', '1/2"', '3/4"', '1"',
]
PIPE_MATERIALS: List[str] = [NOT_DEFINED, "Copper", "Steel"]

VALVE_POSITION_LABELS: Dict[str, str] = {
    "BOTTOM": "Bottom (opposite sides)",
    "RIGHT":  "Right, vertical",
    "LEFT":   "Left, vertical",
}

SERIES_LABELS: Dict[str, str] = {
    "TESI 2": "Irsap Tesi 2",
    "TESI 3": "Irsap Tesi 3",
    "TESI 4": "Irsap Tesi 4",
    "CUSTOM": "Custom catalog",
}

# ---------------------------------------------------------------------------
# Browser stores
# ---------------------------------------------------------------------------
STORE_PROJECTS       = "radiator-projects-v3"
STORE_CUSTOM_MODELS  = "radiator-custom-models-v3"

# ---------------------------------------------------------------------------
# Logging / UI display
# ---------------------------------------------------------------------------
LOGGER_NAME = "radiator_configurator"
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

CHART_HEIGHT_PX = 420
APP_TITLE = "Radiator Configurator"
