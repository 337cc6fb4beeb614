"""
domain/catalog.py
=================
Radiator catalogue entries and closest-interaxis model matching.

Built-in catalogues cover the Irsap Tesi 2 / 3 / 4 column ranges (output per
element at ΔT 50 K, EN 442). The user catalogue (series CUSTOM) is supplied by
the caller. Zero Dash / pandas / service-layer dependencies.
"""
from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple


class RadiatorSeries(str, enum.Enum):
    TESI2 = "TESI 2"
    TESI3 = "TESI 3"
    TESI4 = "TESI 4"
    CUSTOM = "CUSTOM"


DEFAULT_SERIES = RadiatorSeries.TESI3


@dataclass(frozen=True)
class RadiatorModel:
    """
    One catalogue entry.

    Parameters
    ----------
    label     : Display name, usually the nominal height ("565")
    height    : Overall height                        [mm]
    interaxis : Centre-to-centre pipe connection      [mm]
    watts     : Output of one element at ΔT 50 K      [W]
    code, brand, series, id : provenance only, never used for matching
    """

    label: str
    height: float
    interaxis: float
    watts: float
    code: str = ""
    brand: str = ""
    series: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RadiatorModel":
        return cls(
            label     = str(data.get("label", "") or ""),
            height    = float(data.get("height", 0) or 0),
            interaxis = float(data.get("interaxis", 0) or 0),
            watts     = float(data.get("watts", 0) or 0),
            code      = str(data.get("code", "") or ""),
            brand     = str(data.get("brand", "") or ""),
            series    = data.get("series"),
            id        = data.get("id"),
        )


# Returned when there is nothing to match against.
PLACEHOLDER_MODEL = RadiatorModel(label="N/A", height=0, interaxis=0, watts=0, code="N/A")


# ---------------------------------------------------------------------------
# Built-in catalogues  (height mm, interaxis mm, W/element at ΔT 50)
# ---------------------------------------------------------------------------
_TESI_ROWS: Dict[RadiatorSeries, List[Tuple[int, int, float]]] = {
    RadiatorSeries.TESI2: [
        (365, 300, 21.4), (565, 500, 31.3), (665, 600, 36.1), (865, 800, 45.6),
        (1500, 1435, 75.9), (1800, 1735, 89.7), (2000, 1935, 98.8),
        (2200, 2135, 107.8), (2500, 2435, 121.4),
    ],
    RadiatorSeries.TESI3: [
        (365, 300, 29.5), (565, 500, 43.8), (665, 600, 50.7), (865, 800, 64.5),
        (1500, 1435, 106.9), (1800, 1735, 126.3), (2000, 1935, 139.2),
        (2200, 2135, 151.9), (2500, 2435, 170.9),
    ],
    RadiatorSeries.TESI4: [
        (365, 300, 37.2), (565, 500, 55.6), (665, 600, 64.6), (865, 800, 82.3),
        (1500, 1435, 136.5), (1800, 1735, 160.7), (2000, 1935, 176.6),
        (2200, 2135, 192.4), (2500, 2435, 216.0),
    ],
}


def _build_series(series: RadiatorSeries) -> List[RadiatorModel]:
    columns = series.value.split()[-1]
    return [
        RadiatorModel(
            label     = str(height),
            height    = float(height),
            interaxis = float(interaxis),
            watts     = watts,
            code      = f"T{columns}{height:04d}",
            brand     = "Irsap",
            series    = series.value,
        )
        for height, interaxis, watts in _TESI_ROWS[series]
    ]


BUILTIN_CATALOGS: Dict[RadiatorSeries, List[RadiatorModel]] = {
    series: _build_series(series) for series in _TESI_ROWS
}


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def find_closest_model(
    catalog: Sequence[RadiatorModel],
    target_interaxis: float,
) -> RadiatorModel:
    """
    Model whose interaxis is nearest to target_interaxis.

    Ties go to the model that appears first in the catalogue, so catalogue
    order is significant. Returns PLACEHOLDER_MODEL for an empty catalogue.
    """
    if not catalog:
        return PLACEHOLDER_MODEL

    closest = catalog[0]
    min_diff = abs(target_interaxis - closest.interaxis)
    for model in catalog:
        diff = abs(target_interaxis - model.interaxis)
        if diff < min_diff:
            min_diff = diff
            closest = model
    return closest
